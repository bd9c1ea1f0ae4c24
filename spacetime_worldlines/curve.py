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

"""HyperbolicMotionCurve - constant acceleration curve through an arbitrary anchor."""

import numpy as np

from . import acceleration
from . import relativity
from .acceleration import Branch
from .coordinate import Coordinate
from .errors import CurveDomainError
from .fuzzy import fuzzy_eq, fuzzy_ge, fuzzy_zero, sign
from .line import AxisType, ConcreteLine

__all__ = ['Branch', 'HyperbolicMotionCurve']


class HyperbolicMotionCurve:
    """
    Worldline of constant proper acceleration through a known point.

    The curve is the standard acceleration curve (see acceleration)
    translated so that it passes through anchor_point with velocity
    anchor_v, proper time anchor_tau and distance anchor_d. The translation
    is the position of the turn-around point, available as offset.

    With zero acceleration the curve is a straight line of uniform motion.
    Conversions that are undefined on a straight line (for instance, time
    from velocity) raise CurveDomainError.
    """

    def __init__(self, a, anchor_v, anchor_point, anchor_tau, anchor_d):
        """
        Initialize the curve from one known point on it.

        Args:
            a: Proper acceleration
            anchor_v: Velocity at the anchor point
            anchor_point: Coordinate of the anchor point
            anchor_tau: Proper time at the anchor point
            anchor_d: Distance travelled at the anchor point

        """
        self._zero_acceleration = fuzzy_zero(a)
        self._zero_velocity = self._zero_acceleration and fuzzy_zero(anchor_v)
        self._a = 0.0 if self._zero_acceleration else float(a)
        self._v_init = 0.0 if self._zero_velocity else float(anchor_v)
        self._anchor = anchor_point.copy()
        self._anchor_tau = float(anchor_tau)

        if self._zero_acceleration:
            self._std_anchor_tau = 0.0
            self._std_anchor_d = 0.0
            self._offset = anchor_point.copy()
            self._d_offset = float(anchor_d)
        else:
            std_x = acceleration.v_to_x(a, anchor_v)
            std_t = acceleration.v_to_t(a, anchor_v)
            self._std_anchor_tau = acceleration.v_to_tau(a, anchor_v)
            self._std_anchor_d = acceleration.x_to_d(a, std_x, Branch.of(std_t >= 0.0))
            self._offset = Coordinate(anchor_point.x - std_x, anchor_point.t - std_t)
            self._d_offset = anchor_d - self._std_anchor_d

    @property
    def a(self):
        return self._a

    @property
    def offset(self):
        """Turn-around point (where v = 0), or the anchor for zero acceleration."""
        return self._offset.copy()

    @property
    def zero_acceleration(self):
        return self._zero_acceleration

    @property
    def zero_velocity(self):
        return self._zero_velocity

    # Proper time mapping between this curve and the standard curve

    def _to_offset_tau(self, std_tau):
        return self._anchor_tau + (std_tau - self._std_anchor_tau)

    def _to_std_tau(self, tau):
        return self._std_anchor_tau + (tau - self._anchor_tau)

    # Uniform motion

    def _linear_x_to_t(self, x):
        if np.isinf(x):
            forward = fuzzy_ge(self._v_init, 0.0)
            return x if forward else -x
        return ((x - self._offset.x) / self._v_init) + self._offset.t

    def _linear_t_to_x(self, t):
        if np.isinf(t):
            if self._zero_velocity:
                return self._anchor.x
            return t if self._v_init > 0 else -t
        return ((t - self._offset.t) * self._v_init) + self._offset.x

    def _linear_x_to_tau(self, x):
        if np.isinf(x):
            forward = fuzzy_ge(self._v_init, 0.0)
            return x if forward else -x
        std_t = (x - self._offset.x) / self._v_init
        return self._to_offset_tau(relativity.t_to_tau(std_t, self._v_init))

    def _linear_d(self, std_t):
        d = abs(self._v_init * std_t)
        return sign(std_t) * d + self._d_offset

    def _every_or_no_match(self, name, matches_anchor):
        if matches_anchor:
            return CurveDomainError(f"The {name} matches every point on the acceleration curve")
        return CurveDomainError(f"The {name} matches no point on the acceleration curve")

    # From velocity

    def v_to_x(self, v):
        if self._zero_acceleration:
            if self._zero_velocity:
                return self._anchor.x
            raise CurveDomainError(
                "Position can't be calculated from velocity when the acceleration is 0")
        return acceleration.v_to_x(self._a, v) + self._offset.x

    def v_to_d(self, v):
        if self._zero_acceleration:
            if self._zero_velocity:
                return self._d_offset
            raise CurveDomainError(
                "Distance can't be calculated from velocity when the acceleration is 0")
        return acceleration.v_to_d(self._a, v) + self._d_offset

    def v_to_t(self, v):
        if self._zero_acceleration:
            raise CurveDomainError("Time can't be calculated from velocity when the acceleration is 0")
        return acceleration.v_to_t(self._a, v) + self._offset.t

    def v_to_tau(self, v):
        if self._zero_acceleration:
            raise CurveDomainError("Tau can't be calculated from velocity when the acceleration is 0")
        return self._to_offset_tau(acceleration.v_to_tau(self._a, v))

    def v_to_gamma(self, v):
        return relativity.gamma(v)

    # From position

    def x_to_v(self, x, branch=Branch.EARLIER):
        if self._zero_acceleration:
            if not self._zero_velocity:
                return self._v_init
            if fuzzy_eq(x, self._anchor.x):
                return 0.0
            raise CurveDomainError("The position matches no point on the acceleration curve")
        return self.t_to_v(self.x_to_t(x, branch))

    def x_to_d(self, x, branch=Branch.EARLIER):
        """
        Distance travelled when the curve reaches position x.

        Args:
            x: Position
            branch: Which crossing of x to use when there are two

        Raises
        ------
        CurveDomainError
            If the curve never reaches x

        """
        if self._zero_acceleration:
            if self._zero_velocity:
                if fuzzy_eq(x, self._anchor.x):
                    return self._d_offset
                raise CurveDomainError("The position matches no point on the acceleration curve")
            return sign(self._v_init) * (x - self._offset.x) + self._d_offset
        return acceleration.x_to_d(self._a, x - self._offset.x, branch) + self._d_offset

    def x_to_t(self, x, branch=Branch.EARLIER):
        if self._zero_acceleration:
            if self._zero_velocity:
                raise self._every_or_no_match("position", fuzzy_eq(x, self._anchor.x))
            return self._linear_x_to_t(x)
        return acceleration.x_to_t(self._a, x - self._offset.x, branch) + self._offset.t

    def x_to_tau(self, x, branch=Branch.EARLIER):
        if self._zero_acceleration:
            if self._zero_velocity:
                raise self._every_or_no_match("position", fuzzy_eq(x, self._anchor.x))
            return self._linear_x_to_tau(x)
        return self._to_offset_tau(acceleration.x_to_tau(self._a, x - self._offset.x, branch))

    def x_to_gamma(self, x):
        if self._zero_acceleration:
            return relativity.gamma(self._v_init)
        return acceleration.x_to_gamma(self._a, x - self._offset.x)

    # From distance

    def d_to_v(self, d):
        if self._zero_acceleration:
            if not self._zero_velocity:
                return self._v_init
            if fuzzy_eq(d, self._d_offset):
                return 0.0
            raise CurveDomainError("The distance matches no point on the acceleration curve")
        return acceleration.d_to_v(self._a, d - self._d_offset)

    def d_to_x(self, d):
        if self._zero_acceleration:
            if self._zero_velocity:
                if fuzzy_eq(d, self._d_offset):
                    return self._anchor.x
                raise CurveDomainError("The distance matches no point on the acceleration curve")
            d = d - self._d_offset
            if self._v_init < 0.0:
                d = -d
            return d + self._offset.x
        return acceleration.d_to_x(self._a, d - self._d_offset) + self._offset.x

    def d_to_t(self, d):
        if self._zero_acceleration:
            if self._zero_velocity:
                raise self._every_or_no_match("distance", fuzzy_eq(d, self._d_offset))
            return self._linear_x_to_t(self.d_to_x(d))
        return acceleration.d_to_t(self._a, d - self._d_offset) + self._offset.t

    def d_to_tau(self, d):
        if self._zero_acceleration:
            if self._zero_velocity:
                raise self._every_or_no_match("distance", fuzzy_eq(d, self._d_offset))
            return self._linear_x_to_tau(self.d_to_x(d))
        return self._to_offset_tau(acceleration.d_to_tau(self._a, d - self._d_offset))

    def d_to_gamma(self, d):
        if self._zero_acceleration:
            if not self._zero_velocity:
                return relativity.gamma(self._v_init)
            if fuzzy_eq(d, self._d_offset):
                return 1.0
            raise CurveDomainError("The distance matches no point on the acceleration curve")
        return acceleration.d_to_gamma(self._a, d - self._d_offset)

    # From time

    def t_to_v(self, t):
        if self._zero_acceleration:
            return self._v_init
        return acceleration.t_to_v(self._a, t - self._offset.t)

    def t_to_x(self, t):
        if self._zero_acceleration:
            return self._linear_t_to_x(t)
        return acceleration.t_to_x(self._a, t - self._offset.t) + self._offset.x

    def t_to_d(self, t):
        if self._zero_acceleration:
            if self._zero_velocity:
                return self._d_offset
            return self._linear_d(t - self._offset.t)
        return acceleration.t_to_d(self._a, t - self._offset.t) + self._d_offset

    def t_to_tau(self, t):
        if self._zero_acceleration:
            return self._to_offset_tau(relativity.t_to_tau(t - self._offset.t, self._v_init))
        return self._to_offset_tau(acceleration.t_to_tau(self._a, t - self._offset.t))

    def t_to_gamma(self, t):
        if self._zero_acceleration:
            return relativity.gamma(self._v_init)
        return acceleration.t_to_gamma(self._a, t - self._offset.t)

    # From proper time

    def tau_to_v(self, tau):
        if self._zero_acceleration:
            return self._v_init
        return acceleration.tau_to_v(self._a, self._to_std_tau(tau))

    def tau_to_x(self, tau):
        if self._zero_acceleration:
            if self._zero_velocity:
                return self._anchor.x
            std_t = relativity.tau_to_t(self._to_std_tau(tau), self._v_init)
            return self._v_init * std_t + self._offset.x
        return acceleration.tau_to_x(self._a, self._to_std_tau(tau)) + self._offset.x

    def tau_to_d(self, tau):
        if self._zero_acceleration:
            if self._zero_velocity:
                return self._d_offset
            return self._linear_d(relativity.tau_to_t(self._to_std_tau(tau), self._v_init))
        return acceleration.tau_to_d(self._a, self._to_std_tau(tau)) + self._d_offset

    def tau_to_t(self, tau):
        if self._zero_acceleration:
            return relativity.tau_to_t(self._to_std_tau(tau), self._v_init) + self._offset.t
        return acceleration.tau_to_t(self._a, self._to_std_tau(tau)) + self._offset.t

    def tau_to_gamma(self, tau):
        if self._zero_acceleration:
            return relativity.gamma(self._v_init)
        return acceleration.tau_to_gamma(self._a, self._to_std_tau(tau))

    # Intersections

    def as_line(self):
        """Straight worldline of a zero acceleration curve."""
        return ConcreteLine.from_velocity(AxisType.T, self._v_init, self._anchor)

    def intersect(self, line):
        """
        Intersect the full curve with a line.

        Returns
        -------
        list of Coordinate
            Zero, one or two intersections sorted by time

        """
        if self._zero_acceleration:
            intersection = line.intersect(self.as_line())
            return [] if intersection is None else [intersection]

        results = acceleration.intersect(self._a, line.offset_line(self._offset))
        for intersection in results:
            intersection.add(self._offset)
        return results

    def hyperbola_center(self):
        """
        Centre of the hyperbola (x - cx)^2 - (t - ct)^2 = 1/a^2 this curve lies on.

        Returns
        -------
        Coordinate
            The centre, or None for zero acceleration

        """
        if self._zero_acceleration:
            return None
        return Coordinate(self._offset.x - 1.0 / self._a, self._offset.t)

    def same_curve(self, other):
        """Return True if both curves are the same hyperbola."""
        if self._zero_acceleration or other.zero_acceleration:
            return False
        return fuzzy_eq(self._a, other.a) and self._offset.fuzzy_eq(other.offset)

    def __repr__(self):
        """Return string representation of curve."""
        return f"HyperbolicMotionCurve(a={self._a}, offset=({self._offset.x}, {self._offset.t}))"
