# Copyright 2025 Berkan Tali
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import math

import numpy as np
import pytest

from spacetime_worldlines.coordinate import Coordinate
from spacetime_worldlines.errors import WorldlineConstructionError
from spacetime_worldlines.frame import Frame
from spacetime_worldlines.hyperbolic_segment import HyperbolicSegment
from spacetime_worldlines.line import ConcreteLine
from spacetime_worldlines.relativity import gamma
from spacetime_worldlines.worldline_segment import LimitType, WorldlineSegment

INF = float('inf')
ORIGIN = Coordinate(0.0, 0.0)


def segment(limit_type, limit_value, a, v, anchor=ORIGIN):
    return WorldlineSegment(limit_type, limit_value, a, v, anchor, 0.0, 0.0)


@pytest.fixture
def coasting():
    """Half light speed from the origin for two years."""
    return segment(LimitType.T, 2.0, 0.0, 0.5)


class TestConstruction:
    """Test limits and their validation."""

    def test_negative_limit(self):
        with pytest.raises(WorldlineConstructionError, match="negative"):
            segment(LimitType.T, -1.0, 0.0, 0.0)

    @pytest.mark.parametrize("v", [1.0, -1.0, 1.5])
    def test_velocity_at_or_above_light_speed(self, v):
        with pytest.raises(WorldlineConstructionError):
            segment(LimitType.T, 1.0, 0.0, v)

    @pytest.mark.parametrize("limit_type", [LimitType.T, LimitType.TAU, LimitType.D, LimitType.V])
    def test_missing_limit_value(self, limit_type):
        with pytest.raises(WorldlineConstructionError, match="has no value"):
            segment(limit_type, float('nan'), 1.0, 0.0)

    def test_missing_acceleration_or_velocity(self):
        with pytest.raises(WorldlineConstructionError, match="acceleration is missing"):
            segment(LimitType.T, 1.0, float('nan'), 0.0)
        with pytest.raises(WorldlineConstructionError, match="velocity is missing"):
            segment(LimitType.T, 1.0, 0.0, float('nan'))

    def test_distance_limit_at_rest(self):
        with pytest.raises(WorldlineConstructionError, match="acceleration and velocity are 0"):
            segment(LimitType.D, 1.0, 0.0, 0.0)

    def test_unreachable_velocity(self):
        with pytest.raises(WorldlineConstructionError, match="never be reached"):
            segment(LimitType.V, 0.5, 0.0, 0.0)
        with pytest.raises(WorldlineConstructionError, match="never be reached"):
            segment(LimitType.V, -0.5, 1.0, 0.0)
        with pytest.raises(WorldlineConstructionError):
            segment(LimitType.V, 1.2, 1.0, 0.0)

    def test_proper_time_limit(self):
        ship = segment(LimitType.TAU, 1.0, 1.0, 0.0)
        assert ship.max.t == pytest.approx(np.sinh(1.0))
        assert ship.max.x == pytest.approx(np.cosh(1.0) - 1.0)
        assert ship.max.v == pytest.approx(np.tanh(1.0))
        assert ship.max.tau == pytest.approx(1.0)
        assert isinstance(ship.curve_segment, HyperbolicSegment)

    def test_velocity_limit(self):
        ship = segment(LimitType.V, 0.6, 1.0, 0.0)
        assert ship.max.t == pytest.approx(0.75)
        assert ship.max.x == pytest.approx(0.25)
        assert ship.max.v == pytest.approx(0.6)

    def test_distance_limit_moving_backwards(self):
        drift = segment(LimitType.D, 1.0, 0.0, -0.5)
        assert drift.max.t == pytest.approx(2.0)
        assert drift.max.x == pytest.approx(-1.0)
        assert drift.max.d == pytest.approx(1.0)

    def test_no_limit_is_a_single_event(self):
        point = segment(LimitType.NONE, float('nan'), 1.0, 0.2)
        assert point.constant_time
        assert point.max.t == 0.0


class TestQueries:
    """Test per-axis lookups and their boundaries."""

    def test_inside_range(self, coasting):
        assert coasting.t_to_x(1.0) == pytest.approx(0.5)
        assert coasting.x_to_t(0.5) == pytest.approx(1.0)
        assert coasting.t_to_tau(1.0) == pytest.approx(1.0 / gamma(0.5))
        assert coasting.t_to_gamma(1.0) == pytest.approx(gamma(0.5))

    def test_outside_range_is_nan(self, coasting):
        assert math.isnan(coasting.t_to_x(-1.0))
        assert math.isnan(coasting.t_to_x(3.0))
        assert math.isnan(coasting.x_to_t(5.0))
        assert math.isnan(coasting.t_to_x(float('nan')))

    def test_both_ends_are_included(self, coasting):
        assert coasting.t_to_x(0.0) == 0.0
        assert coasting.t_to_x(2.0) == pytest.approx(1.0)
        assert coasting.x_to_t(1.0) == pytest.approx(2.0)
        assert coasting.tau_to_t(coasting.max.tau) == pytest.approx(2.0)

    def test_constant_axis_gives_min_value(self, coasting):
        # Velocity never changes, so any lookup by it lands on the start
        assert coasting.v_to_t(0.5) == 0.0
        assert coasting.v_to_x(0.5) == 0.0
        assert math.isnan(coasting.v_to_t(0.4))

    def test_at_rest(self):
        still = segment(LimitType.T, 2.0, 0.0, 0.0, Coordinate(3.0, 0.0))
        assert still.t_to_x(1.0) == 3.0
        assert still.x_to_t(3.0) == 0.0
        assert still.d_to_t(0.0) == 0.0
        assert math.isnan(still.x_to_t(4.0))

    def test_earliest_crossing_of_a_position(self):
        # Moves left, turns around at t = 0.75 and comes back to x = 0
        ship = segment(LimitType.T, 1.5, 1.0, -0.6)
        assert ship.bounds.min.x == pytest.approx(-0.25)
        assert ship.x_to_t(-0.1) == pytest.approx(0.75 - np.sqrt(0.3225))
        assert math.isnan(ship.x_to_t(-0.3))

    def test_proper_time_queries(self):
        ship = segment(LimitType.TAU, 2.0, 1.0, 0.0)
        assert ship.tau_to_t(1.0) == pytest.approx(np.sinh(1.0))
        assert ship.tau_to_v(1.0) == pytest.approx(np.tanh(1.0))
        assert ship.tau_to_gamma(1.0) == pytest.approx(np.cosh(1.0))
        assert math.isnan(ship.tau_to_t(2.5))


class TestExtension:
    """Test extending segments to infinity."""

    def test_extended_past_accelerating(self):
        past = segment(LimitType.T, 1.0, 2.0, 0.0).extended_past()
        assert past.infinite_past
        assert past.min.t == -INF
        assert past.min.v == -INF
        assert past.min.x == INF
        assert past.min.d == -INF
        assert isinstance(past.curve_segment, HyperbolicSegment)

    def test_extended_future_decelerating(self):
        future = segment(LimitType.T, 1.0, -2.0, 0.0).extended_future()
        assert future.infinite_future
        assert future.max.v == -INF
        assert future.max.x == -INF

    def test_extended_inertial_segment_is_a_half_line(self, coasting):
        past = coasting.extended_past()
        assert isinstance(past.curve_segment, ConcreteLine)
        assert past.curve_segment.infinite_minus
        assert not past.curve_segment.infinite_plus
        assert past.min.x == -INF
        assert past.t_to_x(-10.0) == pytest.approx(-5.0)

        both = past.extended_future()
        assert both.curve_segment.infinite_minus and both.curve_segment.infinite_plus
        assert both.t_to_x(10.0) == pytest.approx(5.0)

    def test_extended_rest_keeps_position_and_distance(self):
        still = segment(LimitType.T, 1.0, 0.0, 0.0, Coordinate(2.0, 0.0)).extended_past()
        assert still.min.x == 2.0
        assert still.min.d == 0.0
        assert still.t_to_x(-100.0) == 2.0

    def test_original_ends_are_kept(self, coasting):
        both = coasting.extended_past().extended_future()
        assert both.original_min.t == 0.0
        assert both.original_max.t == 2.0


class TestRestricted:
    """Test cutting segments down to a time range."""

    @pytest.fixture
    def long_coast(self):
        return segment(LimitType.T, 4.0, 0.0, 0.5)

    def test_inner_range(self, long_coast):
        piece = long_coast.restricted(1.0, 3.0)
        assert piece.min.t == 1.0
        assert piece.min.x == pytest.approx(0.5)
        assert piece.max.t == 3.0
        assert piece.min.tau == pytest.approx(1.0 / gamma(0.5))

    def test_whole_range_is_unchanged(self, long_coast):
        assert long_coast.restricted(-1.0, 10.0) is long_coast

    def test_disjoint_range(self, long_coast):
        assert long_coast.restricted(5.0, 6.0) is None

    def test_infinite_start_is_kept(self, long_coast):
        piece = long_coast.extended_past().restricted(-INF, 2.0)
        assert piece.infinite_past
        assert piece.max.t == 2.0
        assert piece.t_to_x(2.0) == pytest.approx(1.0)
        assert piece.t_to_x(-2.0) == pytest.approx(-1.0)


class TestGeometry:
    """Test frames, clipping and intersections."""

    def test_relative_to_comoving_frame(self, coasting):
        moved = coasting.relative_to(Frame(ORIGIN, 0.5))
        assert moved.min.v == pytest.approx(0.0)
        assert moved.max.x == pytest.approx(0.0)
        assert moved.max.t == pytest.approx(np.sqrt(3.0))
        assert moved.max.tau == pytest.approx(coasting.max.tau)

    def test_relative_to_keeps_extensions(self, coasting):
        moved = coasting.extended_future().relative_to(Frame(ORIGIN, 0.5))
        assert moved.infinite_future
        assert moved.t_to_x(100.0) == pytest.approx(0.0)

    def test_intersect_line(self):
        coast = segment(LimitType.T, 20.0, 0.0, 0.5)
        assert coast.intersect(ConcreteLine(0.0, Coordinate(0.0, 10.0))) == Coordinate(5.0, 10.0)
        assert coast.intersect(ConcreteLine(0.0, Coordinate(0.0, 30.0))) is None

    def test_clip(self):
        ship = segment(LimitType.T, 3.0, 1.0, 0.0)
        arc = ship.clip(ship.bounds.copy())
        assert isinstance(arc, HyperbolicSegment)
        assert arc.max.t == pytest.approx(3.0)

    def test_two_inertial_segments(self):
        right = segment(LimitType.T, 10.0, 0.0, 0.5)
        left = segment(LimitType.T, 10.0, 0.0, -0.5, Coordinate(4.0, 0.0))
        meeting = right.intersect_segment(left)
        assert meeting.x == pytest.approx(2.0)
        assert meeting.t == pytest.approx(4.0)

    def test_parallel_inertial_segments(self):
        right = segment(LimitType.T, 10.0, 0.0, 0.5)
        other = segment(LimitType.T, 10.0, 0.0, 0.5, Coordinate(1.0, 0.0))
        assert right.intersect_segment(other) is None

    def test_accelerating_and_resting_segments(self):
        ship = segment(LimitType.T, 3.0, 1.0, 0.0)
        post = segment(LimitType.T, 10.0, 0.0, 0.0, Coordinate(np.sqrt(2.0) - 1.0, -5.0))
        # The earlier crossing at t = -1 lies before the ship segment starts
        meeting = ship.intersect_segment(post)
        assert meeting.t == pytest.approx(1.0)
        assert post.intersect_segment(ship).t == pytest.approx(1.0)

    def test_two_hyperbolas(self):
        right = segment(LimitType.T, 3.0, 1.0, 0.0).extended_past()
        left = segment(LimitType.T, 3.0, -1.0, 0.0, Coordinate(2.0, 0.0)).extended_past()
        meeting = right.intersect_segment(left)
        assert meeting.x == pytest.approx(1.0)
        assert meeting.t == pytest.approx(-np.sqrt(3.0))

    def test_same_hyperbola(self):
        ship = segment(LimitType.T, 2.0, 1.0, 0.0)
        t = 1.0
        later = WorldlineSegment.from_endpoints(
            1.0, ship.t_to_v(t), Coordinate(ship.t_to_x(t), t), Coordinate(ship.t_to_x(1.5), 1.5), 0.0, 0.0)
        meeting = ship.intersect_segment(later)
        assert meeting.x == pytest.approx(np.sqrt(2.0) - 1.0)
        assert meeting.t == pytest.approx(1.0)
