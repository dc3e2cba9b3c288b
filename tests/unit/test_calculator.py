"""Tests for label point and army calculators."""

import pytest

from mapmaker.core.calculator import ArmyCalculator, CenterCalculator, round_half_away
from mapmaker.domain import Bonus, Point, Polygon, SuperBonus, Territory
from mapmaker.exceptions import CalculationError
from mapmaker.graph import UndirectedGraph


def make_territory(territory_id: int, name: str = "") -> Territory:
    """Unit square territory placed along the x axis."""
    x = territory_id * 10
    return Territory(
        id=territory_id,
        name=name or f"T{territory_id}",
        geometry=Polygon.from_points(
            [Point(x, 0), Point(x + 10, 0), Point(x + 10, 10), Point(x, 10)]
        ),
    )


def make_graph(edges: list[tuple[int, int]]) -> UndirectedGraph:
    graph = UndirectedGraph()
    for edge in edges:
        graph.insert_edge(edge)
    return graph


@pytest.fixture
def pentagon_graph() -> UndirectedGraph:
    """Five territories in a ring with one chord between 0 and 2."""
    return make_graph([(0, 1), (1, 2), (2, 3), (3, 4), (4, 0), (0, 2)])


@pytest.fixture
def five_territories() -> list[Territory]:
    return [make_territory(i) for i in range(5)]


class TestRoundHalfAway:
    """Tests for rounding."""

    @pytest.mark.parametrize(
        "value,expected",
        [(4.5, 5), (2.5, 3), (4.4, 4), (4.6, 5), (0.0, 0), (-2.5, -3), (-0.4, 0)],
    )
    def test_rounding(self, value: float, expected: int) -> None:
        assert round_half_away(value) == expected


class TestCenterCalculator:
    """Tests for CenterCalculator."""

    def test_centers_written_onto_territories(self, five_territories: list[Territory]) -> None:
        CenterCalculator(five_territories).create_centerpoints(precision=1.0)

        for territory in five_territories:
            assert territory.center is not None
            assert territory.distance == pytest.approx(5.0)
        assert five_territories[2].center == Point(25.0, 5.0)

    def test_invalid_territories_skipped(self, five_territories: list[Territory]) -> None:
        five_territories[1].valid = False
        CenterCalculator(five_territories).create_centerpoints()

        assert five_territories[1].center is None
        assert five_territories[0].center is not None

    def test_invalid_territories_labelled_when_not_skipping(
        self, five_territories: list[Territory]
    ) -> None:
        five_territories[1].valid = False
        CenterCalculator(five_territories).create_centerpoints(skip_invalid=False)

        assert five_territories[1].center == Point(15.0, 5.0)
        assert five_territories[1].distance == pytest.approx(5.0)


class TestArmyCalculator:
    """Tests for ArmyCalculator."""

    def test_outer_adjacents(
        self, five_territories: list[Territory], pentagon_graph: UndirectedGraph
    ) -> None:
        calculator = ArmyCalculator(five_territories, [], [], pentagon_graph)
        assert calculator.outer_adjacents([0, 1]) == {2, 4}
        assert calculator.outer_adjacents([0, 1, 2, 3, 4]) == set()

    def test_score(self, five_territories: list[Territory], pentagon_graph: UndirectedGraph) -> None:
        calculator = ArmyCalculator(five_territories, [], [], pentagon_graph)
        # 0.5 * 2/5 + 0.5 * min(0.5 * 2/2, 1)
        assert calculator.get_score(2, 2) == pytest.approx(0.45)
        assert calculator.get_score(0, 3) == 0.0

    def test_exposure_is_capped(self, five_territories: list[Territory]) -> None:
        calculator = ArmyCalculator(five_territories, [], [], UndirectedGraph())
        assert calculator.get_score(1, 10) == pytest.approx(0.5 * 1 / 5 + 0.5)

    def test_two_territory_bonus_in_pentagon(
        self, five_territories: list[Territory], pentagon_graph: UndirectedGraph
    ) -> None:
        bonus = Bonus(id=0, name="North", children=[0, 1])
        ArmyCalculator(five_territories, [bonus], [], pentagon_graph).calculate_armies(1, 10)
        # score 0.45 * 10 = 4.5, rounded half away from zero
        assert bonus.armies == 5

    def test_exposed_bonus_worth_more_than_isolated(self) -> None:
        territories = [make_territory(i) for i in range(10)]
        graph = make_graph([(0, 1), (2, 3), (2, 4), (2, 5), (3, 6), (3, 7)])
        isolated = Bonus(id=0, name="Island", children=[0, 1])
        exposed = Bonus(id=1, name="Crossroads", children=[2, 3])

        ArmyCalculator(territories, [isolated, exposed], [], graph).calculate_armies(1, 10)

        assert isolated.armies == 1
        assert exposed.armies == 6
        assert exposed.armies > isolated.armies

    def test_min_armies_is_floor(self) -> None:
        territories = [make_territory(i) for i in range(10)]
        graph = make_graph([(0, 1)])
        bonus = Bonus(id=0, name="Island", children=[0, 1])

        ArmyCalculator(territories, [bonus], [], graph).calculate_armies(3, 10)

        assert bonus.armies == 3

    def test_empty_bonus_gets_min_armies(
        self, five_territories: list[Territory], pentagon_graph: UndirectedGraph
    ) -> None:
        bonus = Bonus(id=0, name="Empty", children=[])
        ArmyCalculator(five_territories, [bonus], [], pentagon_graph).calculate_armies(2, 10)
        assert bonus.armies == 2

    def test_armies_within_bounds(
        self, five_territories: list[Territory], pentagon_graph: UndirectedGraph
    ) -> None:
        bonuses = [
            Bonus(id=0, name="A", children=[0]),
            Bonus(id=1, name="B", children=[1, 2]),
            Bonus(id=2, name="C", children=[3, 4]),
            Bonus(id=3, name="All", children=[0, 1, 2, 3, 4]),
        ]
        ArmyCalculator(five_territories, bonuses, [], pentagon_graph).calculate_armies(2, 7)
        for bonus in bonuses:
            assert 2 <= bonus.armies <= 7

    def test_super_bonus_scores_union_of_bonuses(
        self, five_territories: list[Territory], pentagon_graph: UndirectedGraph
    ) -> None:
        north = Bonus(id=0, name="North", children=[0, 1])
        east = Bonus(id=1, name="East", children=[2])
        realm = SuperBonus(id=0, name="Realm", children=[0, 1])

        calculator = ArmyCalculator(five_territories, [north, east], [realm], pentagon_graph)
        calculator.calculate_armies(1, 10)

        # Territories {0, 1, 2} with outer adjacents {3, 4}:
        # 0.5 * 3/5 + 0.5 * min(0.5 * 2/3, 1) = 0.4667
        assert realm.armies == 5

    def test_super_bonus_with_unknown_bonus(
        self, five_territories: list[Territory], pentagon_graph: UndirectedGraph
    ) -> None:
        realm = SuperBonus(id=0, name="Realm", children=[9])
        calculator = ArmyCalculator(five_territories, [], [realm], pentagon_graph)

        with pytest.raises(CalculationError, match="unknown bonus id 9"):
            calculator.calculate_armies(1, 10)

    def test_min_above_max_rejected(
        self, five_territories: list[Territory], pentagon_graph: UndirectedGraph
    ) -> None:
        calculator = ArmyCalculator(five_territories, [], [], pentagon_graph)
        with pytest.raises(ValueError, match="exceeds max_armies"):
            calculator.calculate_armies(5, 2)

    def test_map_without_territories(self) -> None:
        bonus = Bonus(id=0, name="Ghost", children=[])
        ArmyCalculator([], [bonus], [], UndirectedGraph()).calculate_armies(1, 10)
        assert bonus.armies == 1

    def test_bonus_with_unknown_territory(self) -> None:
        territories = [make_territory(0)]
        graph = make_graph([(0, 4)])
        bonus = Bonus(id=0, name="Overreach", children=[0, 1, 2, 3])
        calculator = ArmyCalculator(territories, [bonus], [], graph)

        with pytest.raises(CalculationError, match="unknown territory id 1, 2, 3"):
            calculator.calculate_armies(1, 10)

    def test_duplicate_children_counted_once(self) -> None:
        territories = [make_territory(i) for i in range(2)]
        bonus = Bonus(id=0, name="Twice", children=[0, 0, 1, 1])

        ArmyCalculator(territories, [bonus], [], UndirectedGraph()).calculate_armies(1, 10)

        # Covers the whole map with no outside neighbours: 0.5 * 2/2 = 0.5
        assert bonus.armies == 5
