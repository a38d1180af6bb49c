"""
Unit Tests for Route Sequencer
Greedy nearest-neighbour ordering and drive-time estimates
"""
from conftest import make_prospect
from rapiddial.domain.services.route_sequencer import (
    estimate_drive_minutes,
    route_drive_minutes,
    sequence,
)


class TestSequence:
    """Tests for nearest-neighbour routing"""

    def test_visits_nearest_first(self):
        prospects = [
            make_prospect("far", 3, 0),
            make_prospect("near", 1, 0),
            make_prospect("mid", 2, 0),
        ]
        route = sequence(prospects, 0, 0)
        assert [p.id for p in route] == ["near", "mid", "far"]

    def test_position_moves_with_each_stop(self):
        # From the origin "a" is closest; from "a", "c" is closer than "b"
        prospects = [
            make_prospect("a", 1, 0),
            make_prospect("b", 0, 3),
            make_prospect("c", 3.5, 0),
        ]
        route = sequence(prospects, 0, 0)
        assert [p.id for p in route] == ["a", "c", "b"]

    def test_ties_go_to_earliest_input(self):
        prospects = [make_prospect("east", 0, 1), make_prospect("west", 0, -1)]
        route = sequence(prospects, 0, 0)
        assert [p.id for p in route] == ["east", "west"]

    def test_empty_and_single(self):
        only = make_prospect("only", 1, 1)
        assert sequence([], 0, 0) == []
        assert sequence([only], 5, 5) == [only]

    def test_missing_coordinates_sit_at_origin_of_grid(self):
        prospects = [make_prospect("unknown"), make_prospect("close", 9, 9)]
        route = sequence(prospects, 10, 10)
        assert [p.id for p in route] == ["close", "unknown"]

    def test_result_is_permutation(self):
        prospects = [make_prospect(str(i), (i * 7) % 5, (i * 3) % 4) for i in range(12)]
        route = sequence(prospects, 1, 1)
        assert sorted(p.id for p in route) == sorted(p.id for p in prospects)
        assert len(route) == len(prospects)


class TestDriveMinutes:
    """Tests for haversine drive-time estimates"""

    def test_same_point_is_zero(self):
        assert estimate_drive_minutes(25.76, -80.19, 25.76, -80.19) == 0

    def test_one_degree_of_latitude(self):
        # ~69.1 miles at 40 mph
        assert estimate_drive_minutes(0, 0, 1, 0) == 104

    def test_route_sums_each_leg(self):
        route = [make_prospect("a", 1, 0), make_prospect("b", 2, 0)]
        assert route_drive_minutes(route, 0, 0) == 208

    def test_empty_route(self):
        assert route_drive_minutes([], 10, 10) == 0
