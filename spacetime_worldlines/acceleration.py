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
Hyperbolic motion for the standard acceleration curve.

The standard curve is the worldline of an object with constant proper
acceleration a that is at rest at the origin: v = 0, x = 0, t = 0,
tau = 0 and d = 0 all happen at the same event. Every other curve is a
translated copy of it (see curve.HyperbolicMotionCurve).

Distance d is the total distance travelled from the turn-around point. It
has the magnitude of x and the sign of t, so it grows monotonically with t.

Two-valued inverses (from x) take a Branch: x is reached once before
the turn-around point and once after it.
"""

from enum import Enum

import numpy as np

from .coordinate import Coordinate
from .errors import CurveDomainError
from .fuzzy import (
    fuzzy_eq, fuzzy_le, fuzzy_lt, fuzzy_zero, sign,
)
from .relativity import gamma


class Branch(Enum):
    """Which root of a two-valued inverse to take."""

    EARLIER = "earlier"
    LATER = "later"

    @property
    def is_later(self):
        return self is Branch.LATER

    @classmethod
    def of(cls, later):
        return cls.LATER if later else cls.EARLIER


def _snap(value):
    return 0.0 if fuzzy_zero(value) else value


def _no_match(name):
    return CurveDomainError(f"The {name} matches no point on the acceleration curve")


def _every_match(name):
    return CurveDomainError(f"The {name} matches every point on the acceleration curve")


def _check_position(a, x):
    if fuzzy_zero(a):
        if fuzzy_zero(x):
            raise _every_match("position")
        raise _no_match("position")
    if fuzzy_lt(a * x, 0.0):
        raise _no_match("position")


# From velocity

def v_to_x(a, v):
    if fuzzy_zero(a):
        if fuzzy_zero(v):
            return 0.0
        raise CurveDomainError(
            "Position can't be calculated from a non-zero velocity when the acceleration is 0")
    return t_to_x(a, v_to_t(a, v))


def v_to_d(a, v):
    if fuzzy_zero(a):
        if fuzzy_zero(v):
            return 0.0
        raise CurveDomainError(
            "Distance can't be calculated from a non-zero velocity when the acceleration is 0")
    d = abs(v_to_x(a, v))
    return -d if fuzzy_lt(v_to_t(a, v), 0.0) else d


def v_to_t(a, v):
    if fuzzy_zero(a):
        raise CurveDomainError("Time can't be calculated from velocity when the acceleration is 0")
    return float(v / (a * np.sqrt(1.0 - v * v)))


def v_to_tau(a, v):
    if fuzzy_zero(a):
        raise CurveDomainError("Tau can't be calculated from velocity when the acceleration is 0")
    return float(np.arctanh(v) / a)


def v_to_gamma(v):
    return gamma(v)


# From position

def x_to_v(a, x, branch):
    return t_to_v(a, x_to_t(a, x, branch))


def x_to_d(a, x, branch):
    if fuzzy_zero(a):
        if fuzzy_zero(x):
            return 0.0
        raise _no_match("position")
    if fuzzy_lt(a * x, 0.0):
        raise _no_match("position")
    d = abs(x)
    return d if branch.is_later else -d


def x_to_t(a, x, branch):
    """
    Time at which the standard curve reaches position x.

    Args:
        a: Acceleration
        x: Position, on the same side of the origin as a
        branch: Branch.LATER for the root after the turn-around point

    Raises
    ------
    CurveDomainError
        If the position is on the wrong side of the origin or a is zero

    """
    _check_position(a, x)
    x = _snap(x)
    t = float(np.sqrt(x * x + (2.0 * x) / a))
    return t if branch.is_later else -t


def x_to_tau(a, x, branch):
    _check_position(a, x)
    x = _snap(x)
    tau = float(np.arccosh(a * x + 1.0) / a)
    return sign(a) * tau if branch.is_later else -sign(a) * tau


def x_to_gamma(a, x):
    if fuzzy_zero(a):
        return 1.0
    x = _snap(x)
    ax = a * x
    if fuzzy_lt(ax, 0.0):
        raise _no_match("position")
    return ax + 1.0


# From distance

def _d_branch(d):
    return Branch.LATER if d >= 0 else Branch.EARLIER


def d_to_v(a, d):
    if fuzzy_zero(a):
        if fuzzy_zero(d):
            return 0.0
        raise _no_match("distance")
    x = -abs(d) if fuzzy_lt(a, 0.0) else abs(d)
    return t_to_v(a, x_to_t(a, x, _d_branch(d)))


def d_to_x(a, d):
    if fuzzy_zero(a):
        if fuzzy_zero(d):
            return 0.0
        raise _no_match("distance")
    return sign(a) * abs(_snap(d))


def d_to_t(a, d):
    if fuzzy_zero(a):
        if fuzzy_zero(d):
            raise _every_match("distance")
        raise _no_match("distance")
    return x_to_t(a, sign(a) * abs(d), _d_branch(d))


def d_to_tau(a, d):
    if fuzzy_zero(a):
        if fuzzy_zero(d):
            raise _every_match("distance")
        raise _no_match("distance")
    return x_to_tau(a, sign(a) * abs(d), _d_branch(d))


def d_to_gamma(a, d):
    if fuzzy_zero(a):
        if fuzzy_zero(d):
            return 1.0
        raise _no_match("distance")
    return x_to_gamma(a, sign(a) * abs(d))


# From time

def t_to_v(a, t):
    if fuzzy_zero(a):
        return 0.0
    t = _snap(t)
    if np.isinf(t):
        return sign(a) * sign(t)
    return float((a * t) / np.sqrt(1.0 + (a * a * t * t)))


def t_to_x(a, t):
    if fuzzy_zero(a):
        return 0.0
    t = _snap(t)
    return float((np.sqrt(1.0 + (a * a * t * t)) - 1.0) / a)


def t_to_d(a, t):
    d = _snap(abs(t_to_x(a, t)))
    return -d if fuzzy_lt(t, 0.0) else d


def t_to_tau(a, t):
    if fuzzy_zero(a):
        return t
    t = _snap(t)
    return float(np.arcsinh(a * t) / a)


def t_to_gamma(a, t):
    if fuzzy_zero(a):
        return 1.0
    t = _snap(t)
    return float(np.sqrt(1.0 + (a * a * t * t)))


# From proper time

def tau_to_v(a, tau):
    if fuzzy_zero(a):
        return 0.0
    return float(np.tanh(a * _snap(tau)))


def tau_to_x(a, tau):
    if fuzzy_zero(a):
        return 0.0
    return float((np.cosh(a * _snap(tau)) - 1.0) / a)


def tau_to_d(a, tau):
    if fuzzy_zero(a):
        return 0.0
    d = _snap(abs(tau_to_x(a, tau)))
    return -d if tau < 0 else d


def tau_to_t(a, tau):
    if fuzzy_zero(a):
        return tau
    return float(np.sinh(a * _snap(tau)) / a)


def tau_to_gamma(a, tau):
    if fuzzy_zero(a):
        return 1.0
    return float(np.cosh(a * _snap(tau)))


# Intersection

def _light_like_intersection(a, line, k):
    ak = a * k
    rising = line.angle > 0.0
    inf = float('inf')

    if fuzzy_eq(ak, 1.0 if rising else -1.0):
        # Parallel to an asymptote: the curve is only reached at infinity
        x = inf if a > 0.0 else -inf
        t = x if rising else -x
        if (t > 0.0 and line.infinite_plus) or (t < 0.0 and line.infinite_minus):
            return Coordinate(x, t)
        return None

    if rising:
        x = -(ak * k) / (2.0 * (ak - 1.0))
    else:
        x = (ak * k) / (2.0 * (ak + 1.0))
    return Coordinate(x, line.slope * x + k)


def _on_curve_branch(a, coord):
    # The quadratic also solves for the mirror image of the hyperbola
    return fuzzy_le(0.0, a * coord.x) or np.isinf(coord.x)


def intersect(a, line):
    """
    Intersect the standard curve with a line.

    Args:
        a: Acceleration
        line: Any Line (angle, slope, constant_offset, coordinate, bounds
            and infinite_minus/infinite_plus are used)

    Returns
    -------
    list of Coordinate
        Zero, one or two intersections sorted by time. Points outside the
        line's own bounds are left out

    """
    bounds = line.bounds
    if bounds is None:
        # A bounded line that misses its box
        return []

    angle = line.angle
    m = line.slope
    k = line.constant_offset
    coord = line.coordinate
    zero_acceleration = fuzzy_zero(a)

    if fuzzy_eq(angle, 90.0):
        if fuzzy_zero(coord.x):
            # Along the t axis the zero curve overlaps the line, the others touch it at t = 0
            tangent = Coordinate(coord.x, bounds.min.t if zero_acceleration else 0.0)
            return [tangent] if bounds.inside(tangent) else []
        if zero_acceleration or (coord.x < 0.0 < a) or (a < 0.0 < coord.x):
            return []

    if zero_acceleration:
        # Any other line crosses the t axis exactly once
        candidates = [Coordinate(0.0, k)]
    elif fuzzy_eq(abs(angle), 45.0):
        result = _light_like_intersection(a, line, k)
        candidates = [result] if result is not None else []
    elif np.isinf(m):
        x = coord.x
        candidates = [
            Coordinate(x, x_to_t(a, x, Branch.EARLIER)),
            Coordinate(x, x_to_t(a, x, Branch.LATER)),
        ]
    else:
        ak = a * k
        km = k * m
        m21 = m * m - 1.0

        root = ak * (ak - 2.0 * m) + 1.0
        if root < 0.0:
            return []
        root = float(np.sqrt(root))
        x1 = ((-root + 1.0) / a - km) / m21
        x2 = ((root + 1.0) / a - km) / m21
        candidates = [Coordinate(x1, m * x1 + k), Coordinate(x2, m * x2 + k)]

    if not zero_acceleration:
        candidates = [c for c in candidates if _on_curve_branch(a, c)]
    results = [c for c in candidates if bounds.inside(c)]
    results.sort(key=lambda c: c.t)
    return results
