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
Observers: complete worldlines made of time-ordered segments.

A ConcreteObserver is built segment by segment from an ObserverOrigin and a
list of SegmentSpec descriptors. Its first segment reaches back to
t = -infinity and its final segment forward to t = +infinity. An
IntervalObserver shows only part of another observer's worldline.
"""

import copy
import logging
from enum import Enum

import numpy as np

from . import relativity
from .coordinate import Coordinate
from .errors import NoSegmentMatchError, ProgrammingError, WorldlineConstructionError
from .worldline_segment import LimitType, WorldlineSegment

logger = logging.getLogger(__name__)

NAN = float('nan')
INF = float('inf')


class Quantity(Enum):
    """Quantities an observer can be queried by."""

    V = "v"
    X = "x"
    T = "t"
    TAU = "tau"
    D = "d"


class ObserverOrigin:
    """Event where a worldline starts, with the proper time and distance there."""

    def __init__(self, origin, tau=0.0, d=0.0):
        if origin is None:
            raise WorldlineConstructionError("The worldline's origin is missing")
        if tau is None:
            raise WorldlineConstructionError("The worldline's initial tau is missing")
        if d is None:
            raise WorldlineConstructionError("The worldline's initial distance is missing")
        self.origin = origin.copy()
        self.tau = float(tau)
        self.d = float(d)

    def relative_to(self, frame):
        return ObserverOrigin(frame.to_frame(self.origin), self.tau, self.d)

    def __repr__(self):
        """Return string representation of origin."""
        return f"ObserverOrigin(origin={self.origin!r}, tau={self.tau}, d={self.d})"


class SegmentSpec:
    """
    Description of one worldline segment.

    A NaN velocity means "keep the velocity the previous segment ended
    with" (0 for the first segment).
    """

    def __init__(self, v=NAN, a=0.0, limit_type=LimitType.NONE, limit_value=NAN):
        self.v = float(v)
        self.a = float(a)
        self.limit_type = limit_type
        self.limit_value = float(limit_value)

    def relative_to(self, frame):
        """
        Same description as seen from another frame.

        Velocities are transformed, distance limits are length-contracted
        and time limits are time-dilated.
        """
        v = self.v
        if not np.isnan(v):
            v = relativity.v_prime(v, frame.v)

        limit = self.limit_value
        if self.limit_type is not LimitType.NONE and not np.isnan(limit):
            if self.limit_type is LimitType.D:
                limit = relativity.length_contraction(limit, frame.v)
            elif self.limit_type is LimitType.T:
                limit = relativity.time_dilation(limit, frame.v)
        return SegmentSpec(v, self.a, self.limit_type, limit)

    def __repr__(self):
        """Return string representation of segment spec."""
        return (f"SegmentSpec(v={self.v}, a={self.a}, limit_type={self.limit_type.name}, "
                f"limit_value={self.limit_value})")


class Observer:
    """
    Query interface shared by all observers.

    Subclasses keep their time-ordered segments in self.segments. Every
    query walks the segments in order and returns the first answer that is
    not NaN, which is the earliest match in time.
    """

    segments = ()

    def _first(self, query, value):
        for segment in self.segments:
            result = getattr(segment, query)(value)
            if not np.isnan(result):
                return result
        return NAN

    def v_to_x(self, v):
        return self._first('v_to_x', v)

    def v_to_t(self, v):
        return self._first('v_to_t', v)

    def v_to_tau(self, v):
        return self._first('v_to_tau', v)

    def v_to_d(self, v):
        return self._first('v_to_d', v)

    def x_to_v(self, x):
        return self._first('x_to_v', x)

    def x_to_t(self, x):
        return self._first('x_to_t', x)

    def x_to_tau(self, x):
        return self._first('x_to_tau', x)

    def x_to_d(self, x):
        return self._first('x_to_d', x)

    def t_to_v(self, t):
        return self._first('t_to_v', t)

    def t_to_x(self, t):
        return self._first('t_to_x', t)

    def t_to_tau(self, t):
        return self._first('t_to_tau', t)

    def t_to_d(self, t):
        return self._first('t_to_d', t)

    def tau_to_v(self, tau):
        return self._first('tau_to_v', tau)

    def tau_to_x(self, tau):
        return self._first('tau_to_x', tau)

    def tau_to_t(self, tau):
        return self._first('tau_to_t', tau)

    def tau_to_d(self, tau):
        return self._first('tau_to_d', tau)

    def d_to_v(self, d):
        return self._first('d_to_v', d)

    def d_to_x(self, d):
        return self._first('d_to_x', d)

    def d_to_t(self, d):
        return self._first('d_to_t', d)

    def d_to_tau(self, d):
        return self._first('d_to_tau', d)

    def x_to_gamma(self, x):
        return self._first('x_to_gamma', x)

    def t_to_gamma(self, t):
        return self._first('t_to_gamma', t)

    def tau_to_gamma(self, tau):
        return self._first('tau_to_gamma', tau)

    def d_to_gamma(self, d):
        return self._first('d_to_gamma', d)

    def convert(self, source, target, value):
        """
        Convert a value of one quantity to another along the worldline.

        Args:
            source: Quantity of value
            target: Quantity wanted
            value: Value to convert

        Returns
        -------
        float
            The converted value (the value itself when source is target)

        Raises
        ------
        NoSegmentMatchError
            If no segment of the worldline reaches value

        """
        if source is target:
            return value
        result = self._first(f"{source.value}_to_{target.value}", value)
        if np.isnan(result):
            raise NoSegmentMatchError(
                f"No segment of the worldline has {source.value} = {value}")
        return result

    def intersect(self, line):
        """Earliest intersection with a line, or None."""
        for segment in self.segments:
            intersection = segment.intersect(line)
            if intersection is not None:
                return intersection
        return None

    def intersect_observer(self, other):
        """
        First intersection found with another observer's worldline.

        Segments are tried in nested order: each of this observer's
        segments against all of the other's, both in time order.
        """
        for segment in self.segments:
            for other_segment in other.segments:
                intersection = segment.intersect_segment(other_segment)
                if intersection is not None:
                    return intersection
        return None

    def curve_segments(self, bounds):
        """Drawable shapes of the worldline clipped to a box."""
        shapes = []
        for segment in self.segments:
            shape = segment.clip(bounds)
            if shape is None:
                logger.debug("Segment %s is outside %s", segment, bounds)
                continue
            shapes.append(shape)
        return shapes

    def relative_to(self, frame):
        raise NotImplementedError


class ConcreteObserver(Observer):
    """Observer built from an origin and a list of segment descriptions."""

    def __init__(self, origin, specs=None):
        """
        Initialize the observer.

        Args:
            origin: ObserverOrigin where the worldline starts
            specs: Optional list of SegmentSpec. When given, every spec but
                the last is added with add_segment() and the last one with
                add_final_segment(); an empty list gives an observer at rest
                forever. When omitted, segments are added by the caller.

        """
        if origin is None:
            raise WorldlineConstructionError("The worldline's origin is missing")
        self.origin = origin
        self.segments = []
        self.terminated = False

        if specs is None:
            return
        specs = list(specs) or [SegmentSpec(0.0, 0.0, LimitType.NONE, NAN)]
        for spec in specs[:-1]:
            self.add_segment(spec.limit_type, spec.limit_value, spec.a, spec.v)
        self.add_final_segment(specs[-1].a, specs[-1].v)

    def _next_start(self, v):
        if not self.segments:
            if np.isnan(v):
                v = 0.0
            return v, self.origin.origin, self.origin.tau, self.origin.d
        last = self.segments[-1].max
        if np.isnan(v):
            v = last.v
        return v, last.coordinate, last.tau, last.d

    def add_segment(self, limit_type, limit_value, a, v=NAN):
        """
        Append a segment that ends when its limit is reached.

        Raises
        ------
        WorldlineConstructionError
            If the observer already has its final segment or the limit
            cannot be reached

        """
        if self.terminated:
            raise WorldlineConstructionError("No segments can be added after the final segment")
        first = not self.segments
        v, start, tau, d = self._next_start(v)
        segment = WorldlineSegment(limit_type, limit_value, a, v, start, tau, d)
        if first:
            segment = segment.extended_past()
        self.segments.append(segment)
        return segment

    def add_final_segment(self, a, v=NAN):
        """Append the last segment, which continues forever."""
        if self.terminated:
            raise WorldlineConstructionError("No segments can be added after the final segment")
        first = not self.segments
        v, start, tau, d = self._next_start(v)
        segment = WorldlineSegment(LimitType.T, 0.0, a, v, start, tau, d)
        if first:
            segment = segment.extended_past()
        segment = segment.extended_future()
        self.segments.append(segment)
        self.terminated = True
        logger.debug("Observer from %s terminated with %d segments", self.origin, len(self.segments))
        return segment

    def copy(self):
        other = ConcreteObserver(self.origin)
        other.segments = [copy.copy(segment) for segment in self.segments]
        other.terminated = self.terminated
        return other

    def relative_to(self, frame):
        """Same worldline seen from another frame."""
        other = ConcreteObserver(self.origin.relative_to(frame))
        other.segments = [segment.relative_to(frame) for segment in self.segments]
        other.terminated = self.terminated
        return other

    def __repr__(self):
        """Return string representation of observer."""
        return f"ConcreteObserver(origin={self.origin!r}, segments={len(self.segments)})"


class IntervalType(Enum):
    """Quantity an Interval is measured in."""

    T = "t"
    TAU = "tau"
    D = "d"


class Interval:
    """Range of time, proper time or distance. min and max are sorted."""

    def __init__(self, interval_type, low, high):
        self.type = interval_type
        self.min = min(low, high)
        self.max = max(low, high)

    @property
    def delta(self):
        return self.max - self.min

    def __repr__(self):
        """Return string representation of interval."""
        return f"Interval({self.type.name}, {self.min}, {self.max})"


class IntervalObserver(Observer):
    """
    Part of another observer's worldline.

    Segments entirely inside the interval are shared with the wrapped
    observer. Segments cut by the interval are rebuilt from their two new
    end points.
    """

    def __init__(self, observer, interval):
        """
        Initialize the restricted observer.

        Args:
            observer: ConcreteObserver, or an IntervalObserver whose
                underlying observer is used
            interval: Interval to keep

        Raises
        ------
        ValueError
            If observer or interval is missing

        """
        if observer is None:
            raise ValueError("An interval observer needs an observer")
        if interval is None:
            raise ValueError("An interval observer needs an interval")

        self.observer = self._unwrap(observer)
        self.interval = interval

        if interval.type is IntervalType.T:
            min_t, max_t = interval.min, interval.max
        elif interval.type is IntervalType.TAU:
            min_t = self.observer.tau_to_t(interval.min)
            max_t = self.observer.tau_to_t(interval.max)
        elif interval.type is IntervalType.D:
            min_t = self.observer.d_to_t(interval.min)
            max_t = self.observer.d_to_t(interval.max)
        else:
            raise ProgrammingError(f"IntervalObserver: unexpected interval type {interval.type}")

        self._restrict(min_t, max_t)

    @staticmethod
    def _unwrap(observer):
        if isinstance(observer, IntervalObserver):
            return observer.observer
        if isinstance(observer, ConcreteObserver):
            return observer
        raise ProgrammingError("IntervalObserver: observer is not an interval or concrete observer")

    @classmethod
    def _from_times(cls, observer, interval, min_t, max_t):
        restricted = cls.__new__(cls)
        restricted.observer = observer
        restricted.interval = interval
        restricted._restrict(min_t, max_t)
        return restricted

    def _restrict(self, min_t, max_t):
        self.min_t = min_t
        self.max_t = max_t
        self.segments = []
        if np.isnan(min_t) or np.isnan(max_t):
            logger.debug("Interval %s is outside the worldline", self.interval)
            return

        kept = [s for s in self.observer.segments if s.min.t <= max_t and s.max.t >= min_t]
        for segment in kept:
            piece = segment.restricted(min_t, max_t)
            if piece is not None:
                self.segments.append(piece)

    def relative_to(self, frame):
        """Same part of the worldline seen from another frame."""
        observer = self.observer.relative_to(frame)
        min_t = self._event_time(self.min_t, frame)
        max_t = self._event_time(self.max_t, frame)
        return IntervalObserver._from_times(observer, self.interval, min_t, max_t)

    def _event_time(self, t, frame):
        if not np.isfinite(t):
            return t
        return frame.to_frame(Coordinate(self.observer.t_to_x(t), t)).t

    def __repr__(self):
        """Return string representation of interval observer."""
        return f"IntervalObserver({self.observer!r}, {self.interval!r})"
