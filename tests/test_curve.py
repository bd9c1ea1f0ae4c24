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

import numpy as np
import pytest

from spacetime_worldlines.coordinate import Coordinate
from spacetime_worldlines.curve import Branch, HyperbolicMotionCurve
from spacetime_worldlines.errors import CurveDomainError
from spacetime_worldlines.line import ConcreteLine
from spacetime_worldlines.relativity import G_LY_PER_YEAR2, gamma

ONE_G = 1.0316


@pytest.fixture
def ship():
    """One g from rest at the origin."""
    return HyperbolicMotionCurve(ONE_G, 0.0, Coordinate(0.0, 0.0), 0.0, 0.0)


LATER_TIMES = [2.0, 2.3, 3.7]


class TestAnchoredCurve:
    """Test a curve passing through an arbitrary anchor point."""

    def test_closed_form_at_rest_start(self, ship):
        tau = 2.0
        assert ship.tau_to_t(tau) == pytest.approx(np.sinh(ONE_G * tau) / ONE_G)
        assert ship.tau_to_v(tau) == pytest.approx(np.tanh(ONE_G * tau))

    def test_one_g_is_close_to_standard_gravity(self):
        assert ONE_G == pytest.approx(G_LY_PER_YEAR2, rel=1e-3)

    @pytest.mark.parametrize("a", [-2.0, -0.5, 0.7, 1.5])
    @pytest.mark.parametrize("v", [-0.6, 0.0, 0.4])
    def test_anchor_values_are_reproduced(self, a, v):
        curve = HyperbolicMotionCurve(a, v, Coordinate(1.0, 2.0), 0.5, 3.0)
        assert curve.t_to_x(2.0) == pytest.approx(1.0)
        assert curve.t_to_v(2.0) == pytest.approx(v)
        assert curve.t_to_tau(2.0) == pytest.approx(0.5)
        assert curve.t_to_d(2.0) == pytest.approx(3.0)
        assert curve.t_to_gamma(2.0) == pytest.approx(gamma(v))

    @pytest.mark.parametrize("a", [-2.0, -0.5, 0.7, 1.5])
    @pytest.mark.parametrize("v", [-0.6, 0.0, 0.4])
    def test_round_trips(self, a, v):
        curve = HyperbolicMotionCurve(a, v, Coordinate(1.0, 2.0), 0.5, 3.0)
        offset_t = curve.offset.t
        for t in LATER_TIMES:
            branch = Branch.of(t >= offset_t)
            assert curve.tau_to_t(curve.t_to_tau(t)) == pytest.approx(t)
            assert curve.d_to_t(curve.t_to_d(t)) == pytest.approx(t)
            assert curve.v_to_t(curve.t_to_v(t)) == pytest.approx(t)
            assert curve.x_to_t(curve.t_to_x(t), branch) == pytest.approx(t)
            tau = curve.t_to_tau(t)
            assert curve.x_to_tau(curve.tau_to_x(tau), branch) == pytest.approx(tau)
            assert curve.v_to_tau(curve.tau_to_v(tau)) == pytest.approx(tau)
            assert curve.d_to_tau(curve.tau_to_d(tau)) == pytest.approx(tau)

    def test_offset_is_turn_around_point(self):
        curve = HyperbolicMotionCurve(1.0, 0.6, Coordinate(0.0, 0.0), 0.0, 0.0)
        offset = curve.offset
        assert curve.t_to_v(offset.t) == pytest.approx(0.0)
        assert curve.t_to_x(offset.t) == pytest.approx(offset.x)
        assert offset.t < 0.0

    def test_offset_is_a_copy(self, ship):
        ship.offset.set_to(5.0, 5.0)
        assert ship.offset == Coordinate(0.0, 0.0)

    def test_hyperbola_center(self, ship):
        center = ship.hyperbola_center()
        assert center == Coordinate(-1.0 / ONE_G, 0.0)
        x = ship.t_to_x(1.3)
        assert (x - center.x) ** 2 - 1.3 ** 2 == pytest.approx(1.0 / ONE_G ** 2)

    def test_same_curve(self, ship):
        t = 0.7
        other = HyperbolicMotionCurve(ONE_G, ship.t_to_v(t), Coordinate(ship.t_to_x(t), t), 9.0, 9.0)
        assert ship.same_curve(other)
        assert not ship.same_curve(HyperbolicMotionCurve(2.0, 0.0, Coordinate(0.0, 0.0), 0.0, 0.0))


class TestUniformMotion:
    """Test the zero acceleration curve."""

    @pytest.fixture
    def coasting(self):
        return HyperbolicMotionCurve(0.0, 0.5, Coordinate(1.0, 2.0), 0.5, 3.0)

    def test_linear_conversions(self, coasting):
        assert coasting.t_to_x(4.0) == pytest.approx(2.0)
        assert coasting.x_to_t(2.0) == pytest.approx(4.0)
        assert coasting.t_to_tau(4.0) == pytest.approx(0.5 + 2.0 / gamma(0.5))
        assert coasting.tau_to_t(coasting.t_to_tau(4.0)) == pytest.approx(4.0)
        assert coasting.t_to_d(4.0) == pytest.approx(4.0)
        assert coasting.d_to_t(4.0) == pytest.approx(4.0)
        assert coasting.t_to_v(100.0) == 0.5

    def test_moving_backwards(self):
        curve = HyperbolicMotionCurve(0.0, -0.5, Coordinate(0.0, 0.0), 0.0, 0.0)
        assert curve.t_to_x(2.0) == pytest.approx(-1.0)
        assert curve.t_to_d(2.0) == pytest.approx(1.0)
        assert curve.d_to_x(1.0) == pytest.approx(-1.0)
        assert curve.x_to_d(-1.0) == pytest.approx(1.0)

    def test_velocity_gives_no_time(self, coasting):
        with pytest.raises(CurveDomainError):
            coasting.v_to_t(0.5)
        with pytest.raises(CurveDomainError):
            coasting.v_to_tau(0.5)

    def test_infinite_times(self, coasting):
        assert coasting.t_to_x(float('inf')) == float('inf')
        assert coasting.t_to_x(float('-inf')) == float('-inf')

    def test_at_rest(self):
        curve = HyperbolicMotionCurve(0.0, 0.0, Coordinate(3.0, 1.0), 0.0, 2.0)
        assert curve.t_to_x(float('inf')) == 3.0
        assert curve.t_to_x(50.0) == 3.0
        assert curve.v_to_x(0.0) == 3.0
        assert curve.t_to_d(50.0) == 2.0
        with pytest.raises(CurveDomainError, match="every point"):
            curve.x_to_t(3.0)
        with pytest.raises(CurveDomainError, match="no point"):
            curve.x_to_t(4.0)


class TestCurveIntersect:
    """Test intersections of anchored curves with lines."""

    def test_translated_curve(self):
        curve = HyperbolicMotionCurve(1.0, 0.0, Coordinate(2.0, 3.0), 0.0, 0.0)
        results = curve.intersect(ConcreteLine(0.0, Coordinate(0.0, 4.0)))
        assert len(results) == 1
        assert results[0].x == pytest.approx(2.0 + np.sqrt(2.0) - 1.0)
        assert results[0].t == pytest.approx(4.0)

    def test_vertical_tangent(self):
        curve = HyperbolicMotionCurve(1.0, 0.0, Coordinate(2.0, 3.0), 0.0, 0.0)
        results = curve.intersect(ConcreteLine(90.0, Coordinate(2.0, 0.0)))
        assert len(results) == 1
        assert results[0] == Coordinate(2.0, 3.0)

    def test_uniform_motion(self):
        curve = HyperbolicMotionCurve(0.0, 0.5, Coordinate(0.0, 0.0), 0.0, 0.0)
        results = curve.intersect(ConcreteLine(0.0, Coordinate(0.0, 10.0)))
        assert len(results) == 1
        assert results[0] == Coordinate(5.0, 10.0)

    def test_as_line(self):
        curve = HyperbolicMotionCurve(0.0, 0.5, Coordinate(1.0, 1.0), 0.0, 0.0)
        line = curve.as_line()
        assert line.slope == pytest.approx(2.0)
        assert line.coordinate == Coordinate(1.0, 1.0)
