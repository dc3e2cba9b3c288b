"""Calculators that write computed values back onto map records.

Key classes:
- CenterCalculator: Label points for territories
- ArmyCalculator: Army values for bonuses and super bonuses
"""

import logging
import math
from collections.abc import Iterable
from typing import ClassVar

from mapmaker.core.polylabel import polylabel
from mapmaker.domain import Bonus, SuperBonus, Territory
from mapmaker.exceptions import CalculationError
from mapmaker.graph import Graph

logger = logging.getLogger(__name__)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    Python's built-in ``round`` rounds halves to even, which would turn a
    score of 4.5 into 4.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class CenterCalculator:
    """Calculates label points for territories.

    Example:
        calculator = CenterCalculator(territories)
        calculator.create_centerpoints(precision=0.5)
    """

    def __init__(self, territories: list[Territory]) -> None:
        self._territories = territories

    def create_centerpoints(self, precision: float = 1.0, skip_invalid: bool = True) -> None:
        """Calculate the label point of each territory and store it on it.

        Args:
            precision: Distance tolerance in map units
            skip_invalid: Leave territories already flagged invalid unlabelled,
                as ``ValidationConfig.skip_invalid`` does in the pipeline
        """
        for territory in self._territories:
            if skip_invalid and territory.valid is False:
                logger.debug("Skipping invalid territory %s", territory.name)
                continue
            territory.center, territory.distance = polylabel(territory.geometry, precision)


class ArmyCalculator:
    """Assigns army values to bonuses from their size and exposure.

    The score of a group blends the share of the map it covers with how many
    outside territories border it. Exposure is capped so that very exposed
    groups do not outgrow the maximum::

        score = 0.5 * (children / territories)
              + 0.5 * min(0.5 * outer_adjacents / children, 1.0)

    The army value is ``score * max_armies`` rounded half away from zero,
    never below ``min_armies``.
    """

    TERRITORY_WEIGHT: ClassVar[float] = 0.5
    OUTER_WEIGHT: ClassVar[float] = 0.5
    OUTER_FACTOR: ClassVar[float] = 0.5

    def __init__(
        self,
        territories: list[Territory],
        bonuses: list[Bonus],
        super_bonuses: list[SuperBonus],
        neighbors: Graph,
    ) -> None:
        self._territories = territories
        self._bonuses = bonuses
        self._super_bonuses = super_bonuses
        self._neighbors = neighbors

    def get_score(self, territories: int, connections: int) -> float:
        """Score a group of ``territories`` with ``connections`` outer adjacents.

        Empty groups, or a map without territories, score 0.
        """
        if territories == 0 or not self._territories:
            return 0.0
        return self.TERRITORY_WEIGHT * (territories / len(self._territories)) + self.OUTER_WEIGHT * min(
            self.OUTER_FACTOR * connections / territories, 1.0
        )

    def outer_adjacents(self, children: Iterable[int]) -> set[int]:
        """Neighbours of a group that do not belong to the group."""
        members = set(children)
        adjacents: set[int] = set()
        for child in members:
            adjacents.update(self._neighbors.adjacents(child))
        return adjacents - members

    def _armies(self, children: set[int], min_armies: int, max_armies: int) -> int:
        score = self.get_score(len(children), len(self.outer_adjacents(children)))
        return max(round_half_away(score * max_armies), min_armies)

    def calculate_armies(self, min_armies: int, max_armies: int) -> None:
        """Assign army values to all bonuses and super bonuses.

        A super bonus is scored like a bonus made of all territories of its
        member bonuses.

        Args:
            min_armies: Lowest army value of any group
            max_armies: Army value of a group with score 1

        Raises:
            ValueError: If min_armies exceeds max_armies
            CalculationError: If a bonus references an unknown territory or a
                super bonus references an unknown bonus
        """
        if min_armies > max_armies:
            raise ValueError(f"min_armies ({min_armies}) exceeds max_armies ({max_armies})")

        territory_ids = {territory.id for territory in self._territories}
        for bonus in self._bonuses:
            children = set(bonus.children)
            unknown = children - territory_ids
            if unknown:
                ids = ", ".join(str(i) for i in sorted(unknown))
                raise CalculationError(bonus.name, f"unknown territory id {ids}")
            bonus.armies = self._armies(children, min_armies, max_armies)
            logger.debug("Bonus %s: %d armies", bonus.name, bonus.armies)

        bonuses_by_id = {bonus.id: bonus for bonus in self._bonuses}
        for super_bonus in self._super_bonuses:
            children: set[int] = set()
            for bonus_id in super_bonus.children:
                bonus = bonuses_by_id.get(bonus_id)
                if bonus is None:
                    raise CalculationError(super_bonus.name, f"unknown bonus id {bonus_id}")
                children.update(bonus.children)
            super_bonus.armies = self._armies(children, min_armies, max_armies)
            logger.debug("Super bonus %s: %d armies", super_bonus.name, super_bonus.armies)
