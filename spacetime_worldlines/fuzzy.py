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

"""Epsilon-tolerant comparisons and angle helpers."""

import numpy as np

EPSILON = 5.0e-12


def fuzzy_zero(d):
    """Return True if d is within EPSILON of zero."""
    return abs(d) < EPSILON


def fuzzy_eq(d1, d2):
    """Return True if d1 and d2 are within EPSILON of each other."""
    if d1 == d2:
        return True
    return abs(d1 - d2) < EPSILON


def fuzzy_ne(d1, d2):
    return not fuzzy_eq(d1, d2)


def fuzzy_lt(d1, d2):
    if fuzzy_eq(d1, d2):
        return False
    return d1 + EPSILON < d2


def fuzzy_le(d1, d2):
    return d1 <= d2 + EPSILON


def fuzzy_gt(d1, d2):
    if fuzzy_eq(d1, d2):
        return False
    return d1 - EPSILON > d2


def fuzzy_ge(d1, d2):
    return d1 >= d2 - EPSILON


def sign(d):
    """
    Return the sign of d as +1.0 or -1.0.

    Zero counts as positive.
    """
    return -1.0 if d < 0.0 else 1.0


def normalize_angle_360(angle):
    """Normalize an angle in degrees to [0, 360)."""
    return angle - (np.floor(angle / 360.0) * 360.0)


def normalize_angle_180(angle):
    """Normalize an angle in degrees to [-180, 180], keeping +180 for positive input."""
    new_angle = angle + 180.0
    new_angle = new_angle - (np.floor(new_angle / 360.0) * 360.0) - 180.0
    if new_angle == -180.0 and angle >= 0:
        new_angle = 180.0
    return float(new_angle)


def normalize_angle_90(angle):
    """Normalize an angle in degrees to (-90, 90]."""
    angle = angle + 90.0
    angle = angle - (np.floor(angle / 180.0) * 180.0) - 90.0
    if fuzzy_eq(angle, -90.0) or fuzzy_eq(angle, 90.0):
        return 90.0
    return float(angle)


def get_angle(start, end):
    """
    Return the angle in degrees of the direction from start to end.

    Args:
        start: Coordinate the direction starts at
        end: Coordinate the direction ends at

    Returns
    -------
    float
        Angle in (-180, 180]; vertical directions are exactly +/-90

    """
    delta_x = end.x - start.x
    delta_t = end.t - start.t

    if fuzzy_zero(delta_x):
        return 90.0 if delta_t > 0.0 else -90.0

    angle = float(np.degrees(np.arctan(delta_t / delta_x)))
    if delta_x > 0.0:
        return angle
    if angle <= 0.0:
        return 180.0 + angle
    return angle - 180.0
