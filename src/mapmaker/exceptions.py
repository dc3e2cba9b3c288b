"""Exception hierarchy for Mapmaker."""


class MapmakerError(Exception):
    """Base exception for all Mapmaker errors."""

    pass


class MapError(MapmakerError):
    """Errors related to map description loading or saving."""

    pass


class MapLoadError(MapError):
    """Error loading a map description."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load map '{path}': {reason}")


class MapSaveError(MapError):
    """Error saving a map description."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save map '{path}': {reason}")


class MapFormatError(MapError):
    """Map description is structurally invalid."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid map description '{path}': {details}")


class GeometryError(MapmakerError):
    """Errors in geometric data."""

    pass


class RingError(GeometryError):
    """Ring does not describe a closed shape."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class CalculationError(MapmakerError):
    """Error while computing a territory or bonus value."""

    def __init__(self, item: str, reason: str) -> None:
        self.item = item
        self.reason = reason
        super().__init__(f"Calculation failed for '{item}': {reason}")
