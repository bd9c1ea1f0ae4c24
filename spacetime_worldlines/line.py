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
Straight event lines: light cones, simultaneity lines, frame axes.

A ConcreteLine is given by an angle and a point and may extend to infinity
in one or both directions. The minus direction is the one towards
t = -infinity (x = -infinity for horizontal lines), the plus direction the
opposite one. A BoundedLine is a ConcreteLine restricted to a box.
"""

import logging
from enum import Enum

import numpy as np

from . import relativity
from .bounds import BOTTOM, LEFT, RIGHT, TOP, Bounds
from .coordinate import Coordinate
from .errors import ProgrammingError
from .fuzzy import fuzzy_eq, fuzzy_zero, get_angle, normalize_angle_90
from .line_segment import CurveSegment, LineSegment

logger = logging.getLogger(__name__)

INF = float('inf')


class AxisType(Enum):
    """Axis of an inertial frame."""

    X = "x"
    T = "t"


class Line(CurveSegment):
    """
    Common interface of ConcreteLine and BoundedLine.

    Subclasses provide coordinate, angle, slope, constant_offset,
    infinite_minus, infinite_plus and bounds.
    """

    def intersect(self, other):
        raise NotImplementedError

    def intersect_bounds(self, bounds):
        raise NotImplementedError

    def infinite_clip(self, bounds):
        raise NotImplementedError

    def offset_line(self, offset):
        raise NotImplementedError


class ConcreteLine(Line):
    """Line through a point at an angle, possibly infinite at either end."""

    def __init__(self, angle, coordinate, infinite_minus=True, infinite_plus=True):
        """
        Initialize the line.

        Args:
            angle: Angle in degrees, normalized to (-90, 90]
            coordinate: Point on the line. For a half infinite line it is the
                finite end
            infinite_minus: Line extends towards t = -infinity
            infinite_plus: Line extends towards t = +infinity

        """
        self.angle = normalize_angle_90(angle)
        self._coordinate = coordinate.copy()
        self.slope = INF if self.angle == 90.0 else float(np.tan(np.radians(self.angle)))
        self.infinite_minus = infinite_minus
        self.infinite_plus = infinite_plus
        self._unsorted_min, self._unsorted_max = self._unsorted_bounds()
        self.bounds = Bounds.from_corners(self._unsorted_min, self._unsorted_max)

    @classmethod
    def from_points(cls, coord1, coord2):
        """Fully infinite line through two points."""
        return cls(get_angle(coord1, coord2), coord1)

    @classmethod
    def from_velocity(cls, axis_type, v, point):
        """
        Axis of a frame moving at v, drawn through point.

        AxisType.T gives the worldline of an object moving at v,
        AxisType.X the line of simultaneity of that object.
        """
        if axis_type is AxisType.X:
            return cls(relativity.v_to_x_angle(v), point)
        return cls(relativity.v_to_t_angle(v), point)

    @classmethod
    def from_frame(cls, axis_type, frame, offset=0.0):
        """
        Axis of a frame, optionally shifted along the other axis.

        Args:
            axis_type: AxisType.X or AxisType.T
            frame: Frame whose axis is wanted
            offset: For the x axis, the frame time at which the line is
                drawn; for the t axis, the frame position

        """
        if axis_type is AxisType.X:
            point = frame.to_rest(Coordinate(0.0, offset))
        else:
            point = frame.to_rest(Coordinate(offset, 0.0))
        return cls.from_velocity(axis_type, frame.v, point)

    def with_infinity(self, infinite_minus, infinite_plus):
        return ConcreteLine(self.angle, self._coordinate, infinite_minus, infinite_plus)

    @property
    def coordinate(self):
        return self._coordinate.copy()

    @property
    def constant_offset(self):
        """The k in t = m*x + k."""
        if np.isinf(self.slope):
            return -INF if self._coordinate.x > 0 else INF
        return self._coordinate.t - self.slope * self._coordinate.x

    def offset_line(self, offset):
        """Copy of this line with offset subtracted from its anchor point."""
        moved = self._coordinate.copy().subtract(offset)
        return ConcreteLine(self.angle, moved, self.infinite_minus, self.infinite_plus)

    def relative_to(self, frame):
        return ConcreteLine(
            relativity.to_prime_angle(self.angle, frame.v),
            frame.to_frame(self._coordinate),
            self.infinite_minus,
            self.infinite_plus)

    def _unsorted_bounds(self):
        min_x, min_t = -INF, -INF
        max_x, max_t = INF, INF

        if fuzzy_eq(self.angle, 90.0):
            min_x = max_x = self._coordinate.x
        elif fuzzy_zero(self.angle):
            min_t = max_t = self._coordinate.t
        elif self.angle < 0:
            min_x, max_x = INF, -INF

        if not self.infinite_minus:
            min_x, min_t = self._coordinate.x, self._coordinate.t
        if not self.infinite_plus:
            max_x, max_t = self._coordinate.x, self._coordinate.t
        return Coordinate(min_x, min_t), Coordinate(max_x, max_t)

    # Intersections

    def intersect(self, other):
        """
        Intersect with another line.

        Args:
            other: ConcreteLine or BoundedLine

        Returns
        -------
        Coordinate or None
            The crossing point. Overlapping vertical or horizontal lines
            return the first point of the overlap; other parallel lines
            return None

        """
        if other is None:
            return None
        overlap = self.bounds.intersect(other.bounds)
        if overlap is None:
            return None

        coord = self._coordinate
        other_coord = other.coordinate
        other_slope = other.slope

        if fuzzy_eq(self.slope, other_slope):
            if np.isinf(self.slope) and fuzzy_eq(coord.x, other_coord.x):
                return Coordinate(coord.x, overlap.min.t)
            if fuzzy_zero(self.slope) and fuzzy_eq(coord.t, other_coord.t):
                return Coordinate(overlap.min.x, coord.t)
            return None

        if not np.isinf(self.slope):
            if not np.isinf(other_slope):
                x = (self.slope * coord.x - other_slope * other_coord.x - coord.t + other_coord.t) / \
                    (self.slope - other_slope)
            else:
                x = other_coord.x
            t = self.slope * (x - coord.x) + coord.t
        else:
            x = coord.x
            t = other_slope * (x - other_coord.x) + other_coord.t
        if fuzzy_zero(other_slope):
            t = other_coord.t
        elif fuzzy_zero(self.slope):
            t = coord.t

        intersection = Coordinate(x, t)
        # Half infinite lines can miss each other even when their boxes overlap
        if not overlap.inside(intersection):
            return None
        return intersection

    def intersect_bounds(self, bounds):
        """
        Clip this line to a finite box.

        Returns
        -------
        LineSegment or None
            Clipped segment with point1 no later than point2

        Raises
        ------
        ProgrammingError
            If the box has an infinite edge

        """
        if not bounds.is_finite():
            raise ProgrammingError("ConcreteLine.intersect_bounds() received a box with an infinite edge")

        bounds = bounds.intersect(self.bounds)
        if bounds is None:
            return None

        edge_angle = 0.0 if np.isinf(self.slope) else 90.0
        point1 = self.intersect(ConcreteLine(edge_angle, bounds.min))
        point2 = self.intersect(ConcreteLine(edge_angle, bounds.max))
        if point1 is None or point2 is None:
            return None

        segment = LineSegment(point1, point2).intersect_bounds(bounds)
        if segment is not None and segment.point1.t > segment.point2.t:
            segment = LineSegment(segment.point2, segment.point1)
        return segment

    def infinite_clip(self, bounds):
        """
        Clip this line to a box that may have infinite edges.

        Returns
        -------
        LineSegment, ConcreteLine or None
            A LineSegment when both clipped ends are finite, otherwise a
            half or fully infinite ConcreteLine anchored at its finite end

        """
        clip = self.bounds.intersect(bounds)
        if clip is None:
            return None
        if clip.is_finite():
            return self.intersect_bounds(clip)

        own = self.bounds
        if (clip.min.x == own.min.x and clip.min.t == own.min.t and
                clip.max.x == own.max.x and clip.max.t == own.max.t):
            return self.with_infinity(self.infinite_minus, self.infinite_plus)

        if fuzzy_eq(self.angle, 90.0):
            return self._clip_vertical(clip)
        if fuzzy_zero(self.angle):
            return self._clip_horizontal(clip)

        point1 = self._unsorted_min.copy()
        point2 = self._unsorted_max.copy()
        outcode1 = clip.compute_outcode(point1)
        outcode2 = clip.compute_outcode(point2)

        while True:
            if (outcode1 | outcode2) == 0:
                break
            if (outcode1 & outcode2) != 0:
                logger.debug("Line %s misses %s", self, clip)
                return None

            outcode_out = outcode1 if outcode1 != 0 else outcode2
            if outcode_out & TOP:
                point = self.intersect(ConcreteLine(0.0, Coordinate(0.0, clip.max.t)))
            elif outcode_out & BOTTOM:
                point = self.intersect(ConcreteLine(0.0, Coordinate(0.0, clip.min.t)))
            elif outcode_out & RIGHT:
                point = self.intersect(ConcreteLine(90.0, Coordinate(clip.max.x, 0.0)))
            elif outcode_out & LEFT:
                point = self.intersect(ConcreteLine(90.0, Coordinate(clip.min.x, 0.0)))
            else:
                raise ProgrammingError("ConcreteLine.infinite_clip(): unexpected point position")

            if outcode_out == outcode1:
                point1 = point
                outcode1 = clip.compute_outcode(point1)
            else:
                point2 = point
                outcode2 = clip.compute_outcode(point2)

        if point1.is_finite() and point2.is_finite():
            return LineSegment(point1, point2)
        if point1.is_finite():
            point, inf_point = point1, point2
        else:
            point, inf_point = point2, point1
        return ConcreteLine(self.angle, point, inf_point.t == -INF, inf_point.t == INF)

    def _clip_vertical(self, clip):
        x = self._coordinate.x
        if np.isfinite(clip.min.t) and np.isfinite(clip.max.t):
            return LineSegment(Coordinate(x, clip.min.t), Coordinate(x, clip.max.t))
        if np.isfinite(clip.min.t):
            t = clip.min.t
        elif np.isfinite(clip.max.t):
            t = clip.max.t
        else:
            t = self._coordinate.t
        return ConcreteLine(self.angle, Coordinate(x, t), np.isinf(clip.min.t), np.isinf(clip.max.t))

    def _clip_horizontal(self, clip):
        t = self._coordinate.t
        if np.isfinite(clip.min.x) and np.isfinite(clip.max.x):
            return LineSegment(Coordinate(clip.min.x, t), Coordinate(clip.max.x, t))
        if np.isfinite(clip.min.x):
            x = clip.min.x
        elif np.isfinite(clip.max.x):
            x = clip.max.x
        else:
            x = self._coordinate.x
        return ConcreteLine(self.angle, Coordinate(x, t), np.isinf(clip.min.x), np.isinf(clip.max.x))

    def sample(self, num_points=2):
        """Sample the finite part of the line; infinite ends are left out."""
        points = [c.to_array() for c in (self._unsorted_min, self._unsorted_max) if c.is_finite()]
        if not points:
            points = [self._coordinate.to_array()]
        return np.array(points)

    def __repr__(self):
        """Return string representation of line."""
        return (f"ConcreteLine(angle={self.angle}, coordinate=({self._coordinate.x}, {self._coordinate.t}), "
                f"infinite_minus={self.infinite_minus}, infinite_plus={self.infinite_plus})")


class BoundedLine(Line):
    """ConcreteLine restricted to a bounding box."""

    def __init__(self, line, bounds):
        """
        Initialize the bounded line.

        Args:
            line: ConcreteLine, or a BoundedLine whose underlying line is reused
            bounds: Bounds to restrict the line to (edges may be infinite)

        Raises
        ------
        ValueError
            If line or bounds is missing
        ProgrammingError
            If line is neither a ConcreteLine nor a BoundedLine

        """
        if line is None:
            raise ValueError("A bounded line needs a line")
        if bounds is None:
            raise ValueError("A bounded line needs a bounding box")

        if isinstance(line, BoundedLine):
            self.line = line.line
        elif isinstance(line, ConcreteLine):
            self.line = line
        else:
            raise ProgrammingError("BoundedLine: line is not a bounded or concrete line")

        self.original_bounds = bounds.copy()
        self._set_segment(self.line.infinite_clip(bounds))

    def _set_segment(self, segment):
        self.segment = segment
        self.bounds = segment.bounds.copy() if segment is not None else None

    @classmethod
    def _from_parts(cls, line, original_bounds, segment):
        bounded = cls.__new__(cls)
        bounded.line = line
        bounded.original_bounds = original_bounds.copy()
        bounded._set_segment(segment)
        return bounded

    @property
    def angle(self):
        return self.line.angle

    @property
    def slope(self):
        return self.line.slope

    @property
    def constant_offset(self):
        return self.line.constant_offset

    @property
    def coordinate(self):
        if isinstance(self.segment, ConcreteLine):
            return self.segment.coordinate
        if isinstance(self.segment, LineSegment):
            return self.segment.point1.copy()
        return self.line.coordinate

    @property
    def infinite_minus(self):
        return isinstance(self.segment, ConcreteLine) and self.segment.infinite_minus

    @property
    def infinite_plus(self):
        return isinstance(self.segment, ConcreteLine) and self.segment.infinite_plus

    def offset_line(self, offset):
        moved = self.original_bounds
        moved = Bounds(
            moved.min.x - offset.x, moved.min.t - offset.t,
            moved.max.x - offset.x, moved.max.t - offset.t)
        return BoundedLine(self.line.offset_line(offset), moved)

    def relative_to(self, frame):
        if self.segment is None:
            segment = None
        elif isinstance(self.segment, (ConcreteLine, LineSegment)):
            segment = self.segment.relative_to(frame)
        else:
            raise ProgrammingError("BoundedLine.relative_to(): unexpected curve segment type")
        return BoundedLine._from_parts(self.line.relative_to(frame), self.original_bounds, segment)

    def intersect(self, other):
        if self.segment is None:
            return None
        intersection = self.line.intersect(other)
        if intersection is None or not self.bounds.inside(intersection):
            return None
        return intersection

    def intersect_bounds(self, bounds):
        if self.segment is None:
            return None
        if isinstance(self.segment, ConcreteLine):
            return self.segment.intersect_bounds(bounds)
        if isinstance(self.segment, LineSegment):
            return self.segment.intersect_bounds(bounds)
        raise ProgrammingError("BoundedLine.intersect_bounds(): unexpected curve segment type")

    def infinite_clip(self, bounds):
        if self.segment is None:
            return None
        if isinstance(self.segment, ConcreteLine):
            return self.segment.infinite_clip(bounds)
        if isinstance(self.segment, LineSegment):
            return self.segment.intersect_bounds(bounds)
        raise ProgrammingError("BoundedLine.infinite_clip(): unexpected curve segment type")

    def sample(self, num_points=2):
        if self.segment is None:
            return np.empty((0, 2))
        return self.segment.sample(num_points)

    def __repr__(self):
        """Return string representation of bounded line."""
        return f"BoundedLine({self.line!r}, original_bounds={self.original_bounds!r})"
