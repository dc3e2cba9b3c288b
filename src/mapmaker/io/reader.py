"""Map reader for loading JSON map descriptions.

This module provides the MapReader class for loading map description
files and converting them into domain models.
"""

import json
from pathlib import Path

from mapmaker.domain import MapData
from mapmaker.exceptions import MapFormatError, MapLoadError, RingError


class MapReader:
    """Loads JSON map descriptions.

    Example:
        reader = MapReader(Path("europe.json"))
        map_data = reader.load()
        for territory in map_data.territories:
            print(territory.name)
    """

    def __init__(self, map_path: Path) -> None:
        """Initialize the map reader.

        Args:
            map_path: Path to the JSON map description
        """
        self._map_path = map_path

    def load(self) -> MapData:
        """Load and convert the map description.

        Returns:
            MapData with territories, bonuses, super bonuses and adjacencies

        Raises:
            MapLoadError: If the file does not exist or is not valid JSON
            MapFormatError: If the document does not describe a map
        """
        path = str(self._map_path)

        if not self._map_path.exists():
            raise MapLoadError(path, "file not found")

        try:
            with self._map_path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise MapLoadError(path, str(e)) from e

        if not isinstance(data, dict):
            raise MapFormatError(path, "top-level value must be an object")

        try:
            return MapData.from_dict(data)
        except RingError as e:
            raise MapFormatError(path, str(e)) from e
        except (KeyError, TypeError, ValueError) as e:
            raise MapFormatError(path, f"{type(e).__name__}: {e}") from e
