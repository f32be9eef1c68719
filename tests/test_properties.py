from hypothesis import given, strategies as st

from cleanroute.config import CleanRouteConfig
from cleanroute.geometry import Position, haversine_distance
from cleanroute.route import Route

# Strategy for valid GPS coordinates
valid_lat = st.floats(-90.0, 90.0)
valid_lon = st.floats(-180.0, 180.0)
valid_timestamp = st.integers(0, 2_000_000_000)
valid_position = st.builds(
    Position, latitude=valid_lat, longitude=valid_lon, timestamp=valid_timestamp
)


def build_route(positions):
    route = Route(CleanRouteConfig())
    for pos in positions:
        route.add_position(pos.latitude, pos.longitude, pos.timestamp)
    return route


class TestDistanceProperties:

    @given(valid_position, valid_position)
    def test_distance_is_non_negative(self, pos1, pos2):
        """Distance between any two points is always non-negative."""
        assert haversine_distance(pos1, pos2) >= 0

    @given(valid_position)
    def test_distance_to_self_is_zero(self, pos):
        """Distance from a point to itself is always zero."""
        assert pos.distance_to(pos) == 0

    @given(valid_position, valid_position)
    def test_distance_is_symmetric(self, pos1, pos2):
        """Distance from A to B equals distance from B to A."""
        assert abs(pos1.distance_to(pos2) - pos2.distance_to(pos1)) < 1e-9

    @given(valid_position, valid_position)
    def test_distance_bounded_by_half_circumference(self, pos1, pos2):
        assert pos1.distance_to(pos2) <= 6370.0 * 3.14159266


class TestRouteProperties:

    @given(st.lists(valid_position, max_size=30))
    def test_fix_order_is_idempotent(self, positions):
        route = build_route(positions)
        route.fix_order()
        once = list(route)
        route.fix_order()
        assert list(route) == once
        assert route.is_ordered()

    @given(st.lists(valid_position, max_size=30))
    def test_filter_is_idempotent_on_ordered_route(self, positions):
        route = build_route(positions)
        route.fix_order()
        route.disregard_erroneous_positions()
        filtered = list(route)
        assert route.disregard_erroneous_positions() == []
        assert list(route) == filtered

    @given(st.lists(valid_position, max_size=30))
    def test_filter_keeps_first_position_and_partitions_route(self, positions):
        route = build_route(positions)
        route.fix_order()
        before = list(route)
        rejected = route.disregard_erroneous_positions()
        if before:
            assert route[0] == before[0]
        assert sorted(list(route) + rejected) == sorted(before)

    @given(st.lists(valid_position, max_size=30))
    def test_keys_match_position_timestamps(self, positions):
        route = build_route(positions)
        route.fix_order()
        route.disregard_erroneous_positions()
        assert all(key == pos.timestamp for key, pos in route.positions.items())
