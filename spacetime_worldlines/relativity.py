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

"""
Special relativity helpers in 1+1 dimensions.

Units have c = 1: velocities are fractions of light speed, and if t is in
years then x is in light-years. The rest frame and a frame moving at v
share the origin event, t = t' = 0 and x = x' = 0.
"""

import numpy as np
from scipy import constants

from .coordinate import Coordinate
from .fuzzy import normalize_angle_180, normalize_angle_90, sign

# Standard gravity expressed in light-years / year^2 (about 1.03).
G_LY_PER_YEAR2 = constants.g * constants.Julian_year / constants.c


def gamma(v):
    """Lorentz factor 1 / sqrt(1 - v^2)."""
    return float(1.0 / np.sqrt(1.0 - v * v))


def gamma_to_v(g):
    if g == 0:
        return float('inf')
    return float(np.sqrt(g * g - 1.0) / g)


# Lorentz transforms

def x_prime(x, t, v):
    return (x - v * t) * gamma(v)


def t_prime(x, t, v):
    return (t - v * x) * gamma(v)


def x_rest(x_p, t_p, v):
    return (x_p + v * t_p) * gamma(v)


def t_rest(x_p, t_p, v):
    return (t_p + v * x_p) * gamma(v)


def to_prime_frame(coord, v):
    """Boost a rest-frame coordinate into the frame moving at v."""
    return Coordinate(x_prime(coord.x, coord.t, v), t_prime(coord.x, coord.t, v))


def to_rest_frame(coord, v):
    """Boost a coordinate of the frame moving at v back to the rest frame."""
    return Coordinate(x_rest(coord.x, coord.t, v), t_rest(coord.x, coord.t, v))


def boost_matrix(v):
    """
    Lorentz boost into the frame moving at v.

    Returns
    -------
    np.ndarray
        2x2 matrix acting on column vectors [x, t]

    """
    g = gamma(v)
    return np.array([[g, -g * v], [-g * v, g]])


# Time dilation and length contraction

def tau_to_t(tau, v):
    return tau * gamma(v)


def t_to_tau(t, v):
    return t / gamma(v)


def length_contraction(length, v):
    return length / gamma(v)


def inv_length_contraction(length, v):
    return length * gamma(v)


def time_dilation(duration, v):
    return duration * gamma(v)


def inv_time_dilation(duration, v):
    return duration / gamma(v)


# Velocities

def v_prime(v, frame_v):
    """Velocity v (rest frame) as seen from a frame moving at frame_v."""
    return (v - frame_v) / (1.0 - (v * frame_v))


def v_add(v, frame_v):
    """Relativistic sum: velocity v measured in a frame moving at frame_v."""
    return (v + frame_v) / (1.0 + (v * frame_v))


# Angles (degrees)

def v_to_x_angle(v):
    """Angle of a simultaneity line (x' axis) for a frame moving at v."""
    return float(np.degrees(np.arctan(v)))


def angle_x_to_v(angle):
    return float(np.tan(np.radians(angle)))


def v_to_t_angle(v):
    """Angle of the worldline (t' axis) of an object moving at v."""
    angle = float(np.degrees(np.arctan(v)))
    if angle >= 0:
        return 90.0 - angle
    return -90.0 - angle


def angle_t_to_v(angle):
    angle = np.radians(angle)
    if angle >= 0:
        angle = (np.pi / 2) - angle
    else:
        angle = (-np.pi / 2) - angle
    return float(np.tan(angle))


def to_prime_angle(angle, v):
    """
    Convert the angle of a line in the rest frame to its angle in a frame moving at v.

    Args:
        angle: Angle in degrees, any range
        v: Velocity of the moving frame

    Returns
    -------
    float
        Angle in degrees within (-180, 180]. Light-like angles
        (+/-45, +/-135) are returned unchanged

    """
    angle_180 = normalize_angle_180(angle)

    if abs(angle_180) == 45 or abs(angle_180) == 135:
        return angle

    # tan() only covers -90..90, so track whether the result must be flipped
    angle_90 = normalize_angle_90(angle)
    invert = abs(angle_180) > 90

    use_x_axis = abs(angle_90) < 45
    v1 = angle_x_to_v(angle_90) if use_x_axis else angle_t_to_v(angle_90)
    v2 = v_prime(v1, v)
    v_angle = v_to_x_angle(v2) if use_x_axis else v_to_t_angle(v2)

    # Angles measured from the t axis jump from -90 to 90 when v changes sign
    if abs(angle_90) > 45 and sign(v1) != sign(v2):
        invert = not invert

    if invert:
        v_angle = normalize_angle_180(v_angle + 180)
    return v_angle


# Doppler shift

def doppler_wavelength_to_v(source_wavelength, receiver_wavelength):
    if source_wavelength <= 0:
        raise ValueError("The source wavelength must be > 0")
    if receiver_wavelength <= 0:
        raise ValueError("The received wavelength must be > 0")
    s2 = source_wavelength * source_wavelength
    r2 = receiver_wavelength * receiver_wavelength
    return (r2 - s2) / (s2 + r2)


def doppler_frequency_to_v(source_frequency, receiver_frequency):
    if source_frequency <= 0:
        raise ValueError("The source frequency must be > 0")
    if receiver_frequency <= 0:
        raise ValueError("The received frequency must be > 0")
    s2 = source_frequency * source_frequency
    r2 = receiver_frequency * receiver_frequency
    return (s2 - r2) / (s2 + r2)


def doppler_v_to_wavelength(source_wavelength, v):
    if abs(v) >= 1.0:
        raise ValueError("The velocity must be between -1 and 1, exclusive")
    return float(source_wavelength * np.sqrt((1 + v) / (1 - v)))


def doppler_v_to_frequency(source_frequency, v):
    if abs(v) >= 1.0:
        raise ValueError("The velocity must be between -1 and 1, exclusive")
    return float(source_frequency / np.sqrt((1 + v) / (1 - v)))
