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

from spacetime_worldlines import relativity
from spacetime_worldlines.coordinate import Coordinate


class TestLorentz:
    """Test gamma and the Lorentz transforms."""

    def test_gamma(self):
        assert relativity.gamma(0.0) == pytest.approx(1.0)
        assert relativity.gamma(0.6) == pytest.approx(1.25)
        assert relativity.gamma_to_v(1.25) == pytest.approx(0.6)

    def test_boost_round_trip(self):
        coord = Coordinate(3.0, -2.0)
        prime = relativity.to_prime_frame(coord, 0.6)
        assert relativity.to_rest_frame(prime, 0.6) == coord

    def test_moving_clock_stays_at_origin(self):
        # An object at x = v t sits at x' = 0
        prime = relativity.to_prime_frame(Coordinate(0.6 * 5.0, 5.0), 0.6)
        assert prime.x == pytest.approx(0.0)
        assert prime.t == pytest.approx(4.0)

    def test_boost_matrix_matches_transform(self):
        coord = Coordinate(1.5, 4.0)
        expected = relativity.to_prime_frame(coord, -0.3)
        result = relativity.boost_matrix(-0.3) @ coord.to_array()
        np.testing.assert_allclose(result, expected.to_array())

    def test_interval_is_invariant(self):
        coord = Coordinate(2.0, 7.0)
        prime = relativity.to_prime_frame(coord, 0.8)
        assert prime.t ** 2 - prime.x ** 2 == pytest.approx(coord.t ** 2 - coord.x ** 2)

    def test_dilation_and_contraction(self):
        assert relativity.time_dilation(4.0, 0.6) == pytest.approx(5.0)
        assert relativity.inv_time_dilation(5.0, 0.6) == pytest.approx(4.0)
        assert relativity.length_contraction(5.0, 0.6) == pytest.approx(4.0)
        assert relativity.inv_length_contraction(4.0, 0.6) == pytest.approx(5.0)
        assert relativity.tau_to_t(4.0, 0.6) == pytest.approx(5.0)
        assert relativity.t_to_tau(5.0, 0.6) == pytest.approx(4.0)


class TestVelocities:
    """Test velocity addition."""

    def test_v_add_stays_below_light_speed(self):
        assert relativity.v_add(0.5, 0.5) == pytest.approx(0.8)
        assert relativity.v_add(0.9, 0.9) < 1.0

    def test_v_prime_undoes_v_add(self):
        assert relativity.v_prime(relativity.v_add(0.3, 0.6), 0.6) == pytest.approx(0.3)

    def test_light_speed_is_invariant(self):
        assert relativity.v_prime(1.0, 0.7) == pytest.approx(1.0)


class TestAngles:
    """Test velocity/angle conversions."""

    def test_axis_angles(self):
        assert relativity.v_to_x_angle(0.0) == pytest.approx(0.0)
        assert relativity.v_to_t_angle(0.0) == pytest.approx(90.0)
        assert relativity.v_to_t_angle(1.0) == pytest.approx(45.0)
        assert relativity.v_to_t_angle(-0.5) == pytest.approx(-90.0 - np.degrees(np.arctan(-0.5)))

    @pytest.mark.parametrize("v", [-0.8, -0.2, 0.3, 0.9])
    def test_angle_round_trips(self, v):
        assert relativity.angle_x_to_v(relativity.v_to_x_angle(v)) == pytest.approx(v)
        assert relativity.angle_t_to_v(relativity.v_to_t_angle(v)) == pytest.approx(v)

    def test_moving_worldline_becomes_vertical(self):
        angle = relativity.v_to_t_angle(0.5)
        assert relativity.to_prime_angle(angle, 0.5) == pytest.approx(90.0)

    def test_simultaneity_line_tilts(self):
        assert relativity.to_prime_angle(0.0, 0.5) == pytest.approx(relativity.v_to_x_angle(-0.5))

    @pytest.mark.parametrize("angle", [45.0, -45.0, 135.0])
    def test_light_rays_keep_their_angle(self, angle):
        assert relativity.to_prime_angle(angle, 0.7) == angle


class TestDoppler:
    """Test Doppler conversions."""

    def test_wavelength_round_trip(self):
        v = relativity.doppler_wavelength_to_v(1.0, 2.0)
        assert v == pytest.approx(0.6)
        assert relativity.doppler_v_to_wavelength(1.0, v) == pytest.approx(2.0)

    def test_frequency_round_trip(self):
        v = relativity.doppler_frequency_to_v(2.0, 1.0)
        assert v == pytest.approx(0.6)
        assert relativity.doppler_v_to_frequency(2.0, v) == pytest.approx(1.0)

    def test_invalid_inputs(self):
        with pytest.raises(ValueError):
            relativity.doppler_wavelength_to_v(0.0, 1.0)
        with pytest.raises(ValueError):
            relativity.doppler_frequency_to_v(1.0, -1.0)
        with pytest.raises(ValueError):
            relativity.doppler_v_to_wavelength(1.0, 1.0)


def test_standard_gravity_in_light_years():
    assert relativity.G_LY_PER_YEAR2 == pytest.approx(1.0323, rel=1e-3)
