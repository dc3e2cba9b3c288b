"""Map-level domain models.

This module defines the records the map-build pipeline owns: territories
with their geometry, bonuses grouping territories, and super bonuses grouping
bonuses. Computed values (label point, validity, armies) are written back
onto these records by the calculators.
"""

from dataclasses import dataclass, field
from typing import Any

from mapmaker.domain.geometry import Point, Polygon


@dataclass
class Territory:
    """A single region of the map.

    Attributes:
        id: Vertex id of the territory in the adjacency graph
        name: Display name
        geometry: Boundary polygon
        center: Label point (None until calculated)
        distance: Distance of the label point to the boundary
        valid: False if the boundary self-intersects (None until validated)
    """

    id: int
    name: str
    geometry: Polygon
    center: Point | None = None
    distance: float = 0.0
    valid: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the territory
        """
        data: dict[str, Any] = {"id": self.id, "name": self.name}
        data.update(self.geometry.to_dict())
        data["center"] = self.center.to_list() if self.center is not None else None
        data["distance"] = self.distance
        data["valid"] = self.valid
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Territory":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a territory

        Returns:
            Territory instance
        """
        center = data.get("center")
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            geometry=Polygon.from_dict(data),
            center=Point.from_sequence(center) if center is not None else None,
            distance=data.get("distance", 0.0),
            valid=data.get("valid"),
        )


@dataclass
class Bonus:
    """A named group of territories scored as a unit.

    Attributes:
        id: Bonus identifier
        name: Display name
        children: Territory ids belonging to this bonus
        armies: Army value (0 until calculated)
    """

    id: int
    name: str
    children: list[int] = field(default_factory=list)
    armies: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "children": list(self.children),
            "armies": self.armies,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Bonus":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            children=list(data.get("children", [])),
            armies=data.get("armies", 0),
        )


@dataclass
class SuperBonus(Bonus):
    """A named group of bonuses.

    Same shape as a bonus, but ``children`` holds bonus ids.
    """

    pass


@dataclass
class MapData:
    """Everything the core needs to process one map.

    Attributes:
        territories: All territories
        bonuses: Groups of territories
        super_bonuses: Groups of bonuses
        adjacencies: Pairs of neighbouring territory ids
    """

    territories: list[Territory] = field(default_factory=list)
    bonuses: list[Bonus] = field(default_factory=list)
    super_bonuses: list[SuperBonus] = field(default_factory=list)
    adjacencies: list[tuple[int, int]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "territories": [t.to_dict() for t in self.territories],
            "bonuses": [b.to_dict() for b in self.bonuses],
            "super_bonuses": [s.to_dict() for s in self.super_bonuses],
            "adjacencies": [list(pair) for pair in self.adjacencies],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MapData":
        return cls(
            territories=[Territory.from_dict(t) for t in data.get("territories", [])],
            bonuses=[Bonus.from_dict(b) for b in data.get("bonuses", [])],
            super_bonuses=[SuperBonus.from_dict(s) for s in data.get("super_bonuses", [])],
            adjacencies=[(int(u), int(v)) for u, v in data.get("adjacencies", [])],
        )
