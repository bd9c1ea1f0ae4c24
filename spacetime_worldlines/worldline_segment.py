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

"""WorldlineSegment - one constant acceleration piece of an observer's worldline."""

import copy
import logging
from enum import Enum

import numpy as np

from . import relativity
from .acceleration import Branch
from .coordinate import Coordinate
from .curve import HyperbolicMotionCurve
from .errors import CurveDomainError, ProgrammingError, WorldlineConstructionError
from .fuzzy import fuzzy_eq, fuzzy_gt, fuzzy_lt, fuzzy_zero
from .hyperbolic_segment import HyperbolicSegment
from .line import AxisType, ConcreteLine
from .line_segment import LineSegment

logger = logging.getLogger(__name__)

INF = float('inf')
NAN = float('nan')

AXES = ('v', 'x', 't', 'tau', 'd')


class LimitType(Enum):
    """What the limit value of a segment measures."""

    NONE = "none"
    T = "t"
    TAU = "tau"
    D = "d"
    V = "v"


class WorldlineEndpoint:
    """Velocity, position, time, proper time and distance at one end of a segment."""

    __slots__ = AXES

    def __init__(self, v, x, t, tau, d):
        self.v = float(v)
        self.x = float(x)
        self.t = float(t)
        self.tau = float(tau)
        self.d = float(d)

    @classmethod
    def at_time(cls, t, curve):
        """Endpoint of a curve at time t."""
        return cls(curve.t_to_v(t), curve.t_to_x(t), t, curve.t_to_tau(t), curve.t_to_d(t))

    @property
    def coordinate(self):
        return Coordinate(self.x, self.t)

    def is_finite(self):
        return bool(np.isfinite([self.v, self.x, self.t, self.tau, self.d]).all())

    def __repr__(self):
        """Return string representation of endpoint."""
        return f"WorldlineEndpoint(v={self.v}, x={self.x}, t={self.t}, tau={self.tau}, d={self.d})"


class WorldlineSegment:
    """
    Piece of a worldline with constant acceleration.

    min is always the earlier end. Velocity may grow or shrink between the
    ends depending on the sign of a. Per-axis queries (v_to_x, d_to_t, ...)
    return NaN for values outside the segment. Both ends are included, so
    adjacent segments agree at their shared event.
    """

    def __init__(self, limit_type, limit_value, a, v, anchor_point, tau, d):
        """
        Initialize a segment from its start and a limit.

        Args:
            limit_type: LimitType of limit_value
            limit_value: Duration (T), proper duration (TAU), distance (D) or
                final velocity (V). Ignored for LimitType.NONE
            a: Acceleration
            v: Velocity at the start
            anchor_point: Coordinate of the start
            tau: Proper time at the start
            d: Distance travelled at the start

        Raises
        ------
        WorldlineConstructionError
            If a value is missing, or the limit is negative or can never
            be reached

        """
        if np.isnan(a):
            raise WorldlineConstructionError("Observer segment acceleration is missing")
        if np.isnan(v):
            raise WorldlineConstructionError("Observer segment velocity is missing")
        if limit_type is not LimitType.NONE and np.isnan(limit_value):
            raise WorldlineConstructionError(
                f"Observer segment limit {limit_type.name} has no value")
        if limit_type is not LimitType.V and limit_value < 0:
            raise WorldlineConstructionError("Observer segment limit delta cannot be negative")
        if abs(v) >= 1.0:
            raise WorldlineConstructionError(f"Observer velocity must be between -1 and 1, got {v}")

        self.a = float(a)
        self.curve = HyperbolicMotionCurve(a, v, anchor_point, tau, d)
        start = WorldlineEndpoint(v, anchor_point.x, anchor_point.t, tau, d)
        max_t = self._limit_to_time(limit_type, limit_value, start)
        end = WorldlineEndpoint.at_time(max_t, self.curve)

        self._setup(start, end)
        logger.debug("Built segment a=%s from %s to %s", a, start, end)

    @classmethod
    def from_endpoints(cls, a, v, start, end, tau, d):
        """
        Build a segment from two points on the same curve.

        Args:
            a: Acceleration
            v: Velocity at start
            start: Coordinate of the earlier end
            end: Coordinate of the later end
            tau: Proper time at start
            d: Distance travelled at start
        """
        segment = cls.__new__(cls)
        segment.a = float(a)
        segment.curve = HyperbolicMotionCurve(a, v, start, tau, d)
        segment._setup(
            WorldlineEndpoint(v, start.x, start.t, tau, d),
            WorldlineEndpoint.at_time(end.t, segment.curve))
        return segment

    def _limit_to_time(self, limit_type, limit_value, start):
        curve = self.curve
        zero_acceleration = fuzzy_zero(self.a)

        if limit_type is LimitType.T:
            return start.t + limit_value
        if limit_type is LimitType.TAU:
            if limit_value == 0.0:
                return start.t
            return curve.tau_to_t(start.tau + limit_value)
        if limit_type is LimitType.D:
            if limit_value == 0.0:
                return start.t
            if zero_acceleration and fuzzy_zero(start.v):
                raise WorldlineConstructionError(
                    "Observer segment distance delta is > 0, but acceleration and velocity are 0")
            return curve.d_to_t(start.d + limit_value)
        if limit_type is LimitType.V:
            if abs(limit_value) >= 1.0:
                raise WorldlineConstructionError(
                    f"The observer segment's final velocity must be between -1 and 1, got {limit_value}")
            if zero_acceleration:
                if fuzzy_eq(start.v, limit_value):
                    return start.t
                raise WorldlineConstructionError(
                    "The observer segment's final velocity will never be reached since the "
                    f"current velocity is a constant {start.v}")
            max_t = curve.v_to_t(limit_value)
            if fuzzy_lt(max_t, start.t):
                raise WorldlineConstructionError(
                    "The observer segment's final velocity will never be reached. "
                    f"The starting velocity is {start.v}")
            return max_t
        return start.t

    def _setup(self, start, end):
        self.min = start
        self.max = end
        self.original_min = start
        self.original_max = end

        self.zero_acceleration = fuzzy_zero(self.a)
        self.constant_velocity = self.zero_acceleration
        self.zero_velocity = self.zero_acceleration and fuzzy_zero(start.v)
        self.increasing_velocity = fuzzy_gt(self.a, 0.0)
        self.decreasing_velocity = fuzzy_lt(self.a, 0.0)
        self._update_constant_axes()

        if self.zero_acceleration:
            self.curve_segment = LineSegment(start.coordinate, end.coordinate)
        else:
            self.curve_segment = HyperbolicSegment(self.a, start, end, self.curve)

    def _update_constant_axes(self):
        self.constant_time = fuzzy_eq(self.min.t, self.max.t)
        self.constant_tau = fuzzy_eq(self.min.tau, self.max.tau)
        self.constant_distance = fuzzy_eq(self.min.d, self.max.d)

    @property
    def bounds(self):
        return self.curve_segment.bounds

    # Extension to infinity

    def extended_past(self):
        """
        Copy of this segment reaching back to t = -infinity.

        Position and velocity run off towards the side given by the sign of
        a, or of v for zero acceleration. An object at rest stays put and
        its distance stays finite.
        """
        segment = copy.copy(self)
        start = self.min
        if fuzzy_gt(self.a, 0.0):
            v, x = -INF, INF
        elif fuzzy_lt(self.a, 0.0):
            v, x = INF, -INF
        else:
            v = start.v
            if fuzzy_gt(start.v, 0.0):
                x = -INF
            elif fuzzy_lt(start.v, 0.0):
                x = INF
            else:
                x = start.x
        d = start.d if self.zero_velocity else -INF
        segment.min = WorldlineEndpoint(v, x, -INF, -INF, d)

        if isinstance(self.curve_segment, LineSegment):
            line = ConcreteLine.from_velocity(AxisType.T, start.v, self.max.coordinate)
            segment.curve_segment = line.with_infinity(True, False)
        elif isinstance(self.curve_segment, ConcreteLine):
            segment.curve_segment = self.curve_segment.with_infinity(True, self.curve_segment.infinite_plus)
        elif isinstance(self.curve_segment, HyperbolicSegment):
            segment.curve_segment = HyperbolicSegment(self.a, segment.min, segment.max, self.curve)
        else:
            raise ProgrammingError("WorldlineSegment: unexpected curve segment type")

        segment._update_constant_axes()
        return segment

    def extended_future(self):
        """Copy of this segment reaching forward to t = +infinity; it becomes the last segment."""
        segment = copy.copy(self)
        end = self.max
        if fuzzy_gt(self.a, 0.0):
            v, x = INF, INF
        elif fuzzy_lt(self.a, 0.0):
            v, x = -INF, -INF
        else:
            v = end.v
            if fuzzy_gt(end.v, 0.0):
                x = INF
            elif fuzzy_lt(end.v, 0.0):
                x = -INF
            else:
                x = end.x
        d = end.d if self.zero_velocity else INF
        segment.max = WorldlineEndpoint(v, x, INF, INF, d)

        if isinstance(self.curve_segment, LineSegment):
            line = ConcreteLine.from_velocity(AxisType.T, self.min.v, self.min.coordinate)
            segment.curve_segment = line.with_infinity(False, True)
        elif isinstance(self.curve_segment, ConcreteLine):
            segment.curve_segment = self.curve_segment.with_infinity(self.curve_segment.infinite_minus, True)
        elif isinstance(self.curve_segment, HyperbolicSegment):
            segment.curve_segment = HyperbolicSegment(self.a, segment.min, segment.max, self.curve)
        else:
            raise ProgrammingError("WorldlineSegment: unexpected curve segment type")

        segment._update_constant_axes()
        return segment

    @property
    def infinite_past(self):
        return self.min.t == -INF

    @property
    def infinite_future(self):
        return self.max.t == INF

    def restricted(self, min_t, max_t):
        """
        Part of this segment between two times.

        Args:
            min_t: Earliest time to keep
            max_t: Latest time to keep

        Returns
        -------
        WorldlineSegment or None
            self when nothing is cut away, None when nothing is left

        """
        low = max(min_t, self.min.t)
        high = min(max_t, self.max.t)
        if fuzzy_gt(low, high):
            return None
        if low == self.min.t and high == self.max.t:
            return self

        start = self.min if low == self.min.t else WorldlineEndpoint.at_time(low, self.curve)
        end = self.max if high == self.max.t else WorldlineEndpoint.at_time(high, self.curve)

        if not start.is_finite() and not end.is_finite():
            return copy.copy(self)

        # Infinite ends are rebuilt by extending a finite piece
        first = start if start.is_finite() else end
        last = end if end.is_finite() else start
        segment = WorldlineSegment.from_endpoints(
            self.a, first.v, first.coordinate, last.coordinate, first.tau, first.d)
        if not start.is_finite():
            segment = segment.extended_past()
        if not end.is_finite():
            segment = segment.extended_future()
        return segment

    def relative_to(self, frame):
        """
        Same segment seen from another frame.

        The original finite ends are transformed and the infinite
        extensions are applied again.
        """
        start = frame.to_frame(self.original_min.coordinate)
        end = frame.to_frame(self.original_max.coordinate)
        segment = WorldlineSegment.from_endpoints(
            self.a,
            relativity.v_prime(self.original_min.v, frame.v),
            start, end,
            self.original_min.tau, self.original_min.d)
        if self.infinite_past:
            segment = segment.extended_past()
        if self.infinite_future:
            segment = segment.extended_future()
        return segment

    # Queries

    def _range(self, axis):
        if axis == 'x':
            bounds = self.curve_segment.bounds
            return bounds.min.x, bounds.max.x
        low = getattr(self.min, axis)
        high = getattr(self.max, axis)
        return (low, high) if low <= high else (high, low)

    def _is_constant(self, axis):
        if axis == 'v':
            return self.constant_velocity
        if axis == 't':
            return self.constant_time
        if axis == 'tau':
            return self.constant_tau
        if axis == 'd':
            return self.constant_distance
        return self.zero_velocity or self.constant_time

    def _value_at_min(self, target):
        if target == 'gamma':
            return relativity.gamma(self.min.v)
        return getattr(self.min, target)

    def _query(self, source, value, target):
        if np.isnan(value):
            return NAN
        low, high = self._range(source)
        if fuzzy_lt(value, low) or fuzzy_gt(value, high):
            return NAN
        if self._is_constant(source):
            return self._value_at_min(target)
        if source == 'x':
            return self._x_query(value, target)
        return getattr(self.curve, f"{source}_to_{target}")(value)

    def _x_query(self, x, target):
        # A position can be passed twice; take the earliest crossing in range
        for branch in (Branch.EARLIER, Branch.LATER):
            try:
                t = self.curve.x_to_t(x, branch)
            except CurveDomainError:
                return NAN
            if fuzzy_lt(t, self.min.t) or fuzzy_gt(t, self.max.t):
                continue
            if target == 't':
                return t
            return getattr(self.curve, f"t_to_{target}")(t)
        return NAN

    def v_to_x(self, v):
        return self._query('v', v, 'x')

    def v_to_t(self, v):
        return self._query('v', v, 't')

    def v_to_tau(self, v):
        return self._query('v', v, 'tau')

    def v_to_d(self, v):
        return self._query('v', v, 'd')

    def x_to_v(self, x):
        return self._query('x', x, 'v')

    def x_to_t(self, x):
        return self._query('x', x, 't')

    def x_to_tau(self, x):
        return self._query('x', x, 'tau')

    def x_to_d(self, x):
        return self._query('x', x, 'd')

    def x_to_gamma(self, x):
        return self._query('x', x, 'gamma')

    def t_to_v(self, t):
        return self._query('t', t, 'v')

    def t_to_x(self, t):
        return self._query('t', t, 'x')

    def t_to_tau(self, t):
        return self._query('t', t, 'tau')

    def t_to_d(self, t):
        return self._query('t', t, 'd')

    def t_to_gamma(self, t):
        return self._query('t', t, 'gamma')

    def tau_to_v(self, tau):
        return self._query('tau', tau, 'v')

    def tau_to_x(self, tau):
        return self._query('tau', tau, 'x')

    def tau_to_t(self, tau):
        return self._query('tau', tau, 't')

    def tau_to_d(self, tau):
        return self._query('tau', tau, 'd')

    def tau_to_gamma(self, tau):
        return self._query('tau', tau, 'gamma')

    def d_to_v(self, d):
        return self._query('d', d, 'v')

    def d_to_x(self, d):
        return self._query('d', d, 'x')

    def d_to_t(self, d):
        return self._query('d', d, 't')

    def d_to_tau(self, d):
        return self._query('d', d, 'tau')

    def d_to_gamma(self, d):
        return self._query('d', d, 'gamma')

    # Geometry

    def clip(self, bounds):
        """
        Drawable part of this segment inside a box.

        Returns
        -------
        LineSegment, ConcreteLine, HyperbolicSegment or None

        """
        shape = self.curve_segment
        if isinstance(shape, ConcreteLine):
            return shape.infinite_clip(bounds)
        if isinstance(shape, (LineSegment, HyperbolicSegment)):
            return shape.intersect_bounds(bounds)
        raise ProgrammingError("WorldlineSegment.clip(): unexpected curve segment type")

    def contains(self, coord):
        return self.curve_segment.bounds.inside(coord)

    def intersect(self, line):
        """Earliest intersection with a line inside this segment, or None."""
        for intersection in self.curve.intersect(line):
            if self.contains(intersection):
                return intersection
        return None

    def intersect_segment(self, other):
        """
        Earliest point shared by this segment and another one.

        Returns
        -------
        Coordinate or None

        """
        if self.zero_acceleration and other.zero_acceleration:
            candidates = self._line_line_candidates(other)
        elif self.zero_acceleration:
            candidates = other.curve.intersect(self.curve.as_line())
        elif other.zero_acceleration:
            candidates = self.curve.intersect(other.curve.as_line())
        elif self.curve.same_curve(other.curve):
            candidates = [max(self.min.coordinate, other.min.coordinate)]
        else:
            candidates = self._hyperbola_hyperbola_candidates(other)

        for candidate in sorted(candidates, key=lambda c: c.t):
            if self.contains(candidate) and other.contains(candidate):
                return candidate
        return None

    def _line_line_candidates(self, other):
        line = self.curve.as_line()
        other_line = other.curve.as_line()
        if not fuzzy_eq(line.angle, other_line.angle):
            intersection = line.intersect(other_line)
            return [] if intersection is None else [intersection]

        # Parallel lines meet only if they are the same line
        angle = np.radians(line.angle)
        delta = other_line.coordinate.to_array() - line.coordinate.to_array()
        if abs(np.cos(angle) * delta[1] - np.sin(angle) * delta[0]) > 1e-9:
            return []
        return [max(self.min.coordinate, other.min.coordinate)]

    def _hyperbola_hyperbola_candidates(self, other):
        # Both curves satisfy (x - cx)^2 - (t - ct)^2 = 1/a^2. Subtracting
        # the two equations leaves the straight line A x + B t = C.
        c1 = self.curve.hyperbola_center()
        c2 = other.curve.hyperbola_center()
        r1 = 1.0 / (self.a * self.a)
        r2 = 1.0 / (other.a * other.a)

        big_a = -2.0 * (c1.x - c2.x)
        big_b = 2.0 * (c1.t - c2.t)
        big_c = (r1 - r2) - c1.x * c1.x + c2.x * c2.x + c1.t * c1.t - c2.t * c2.t

        if fuzzy_zero(big_a) and fuzzy_zero(big_b):
            return []
        if fuzzy_zero(big_b):
            axis = ConcreteLine(90.0, Coordinate(big_c / big_a, 0.0))
        else:
            angle = float(np.degrees(np.arctan(-big_a / big_b)))
            axis = ConcreteLine(angle, Coordinate(0.0, big_c / big_b))

        results = []
        for candidate in self.curve.intersect(axis):
            if not candidate.is_finite():
                continue
            # The axis also meets the mirror branch of the other hyperbola
            if np.isclose(other.curve.t_to_x(candidate.t), candidate.x, rtol=1e-9, atol=1e-9):
                results.append(candidate)
        return results

    def __repr__(self):
        """Return string representation of segment."""
        return f"WorldlineSegment(a={self.a}, min={self.min!r}, max={self.max!r})"
