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

"""LineSegment - Pure geometry primitive for finite segments in the (x, t) plane."""

import numpy as np

from .bounds import BOTTOM, LEFT, RIGHT, TOP, Bounds
from .coordinate import Coordinate
from .fuzzy import fuzzy_eq, get_angle


class CurveSegment:
    """
    Drawable piece of a worldline or line.

    Concrete shapes are LineSegment, ConcreteLine (half or fully infinite)
    and HyperbolicSegment. Each exposes its bounding box as bounds.
    """

    bounds = None

    def relative_to(self, frame):
        raise NotImplementedError

    def sample(self, num_points):
        """Return an (n, 2) array of [x, t] points along the shape."""
        raise NotImplementedError


class LineSegment(CurveSegment):
    """
    Represent a segment between two finite points.

    Pure geometry class - no worldline-specific logic.
    Used for viewport clipping and zero acceleration worldlines.
    """

    def __init__(self, point1, point2):
        """
        Initialize line segment from its two end points.

        Args:
            point1: First end, a Coordinate or [x, t]
            point2: Second end, a Coordinate or [x, t]

        Raises
        ------
        ValueError
            If points are not 2D

        """
        if not isinstance(point1, Coordinate):
            point1 = Coordinate.from_array(point1)
        if not isinstance(point2, Coordinate):
            point2 = Coordinate.from_array(point2)
        self.point1 = point1.copy()
        self.point2 = point2.copy()
        self.bounds = Bounds.from_corners(self.point1, self.point2)

    @property
    def angle(self):
        """Direction from point1 to point2 in degrees."""
        return get_angle(self.point1, self.point2)

    def relative_to(self, frame):
        return LineSegment(frame.to_frame(self.point1), frame.to_frame(self.point2))

    def intersect(self, line):
        """Intersection with a Line, or None when it misses the segment."""
        from .line import ConcreteLine

        if fuzzy_eq(self.point1.x, self.point2.x) and fuzzy_eq(self.point1.t, self.point2.t):
            carrier = ConcreteLine(90.0, self.point1)
        else:
            carrier = ConcreteLine.from_points(self.point1, self.point2)
        intersection = carrier.intersect(line)
        if intersection is None or not self.bounds.inside(intersection):
            return None
        return intersection

    def intersect_bounds(self, bounds):
        """
        Clip the segment to a box (Cohen-Sutherland).

        The box may have infinite edges; the segment itself must be finite.

        Args:
            bounds: Bounds to clip against

        Returns
        -------
        LineSegment or None
            The part of the segment inside the box

        """
        p1 = self.point1.copy()
        p2 = self.point2.copy()
        outcode1 = bounds.compute_outcode(p1)
        outcode2 = bounds.compute_outcode(p2)

        slope_xt = None
        slope_tx = None

        while True:
            if (outcode1 | outcode2) == 0:
                return LineSegment(p1, p2)
            if (outcode1 & outcode2) != 0:
                return None

            outcode_out = outcode1 if outcode1 != 0 else outcode2

            if slope_xt is None:
                dx = p2.x - p1.x
                dt = p2.t - p1.t
                slope_xt = float('inf') if fuzzy_eq(p2.t, p1.t) else dx / dt
                slope_tx = float('inf') if fuzzy_eq(p2.x, p1.x) else dt / dx

            if outcode_out & TOP:
                t = bounds.max.t
                x = p1.x + slope_xt * (t - p1.t)
            elif outcode_out & BOTTOM:
                t = bounds.min.t
                x = p1.x + slope_xt * (t - p1.t)
            elif outcode_out & RIGHT:
                x = bounds.max.x
                t = p1.t + slope_tx * (x - p1.x)
            elif outcode_out & LEFT:
                x = bounds.min.x
                t = p1.t + slope_tx * (x - p1.x)

            if outcode_out == outcode1:
                p1.set_to(x, t)
                outcode1 = bounds.compute_outcode(p1)
            else:
                p2.set_to(x, t)
                outcode2 = bounds.compute_outcode(p2)

    def sample(self, num_points=2):
        """Sample evenly spaced points from point1 to point2."""
        s = np.linspace(0.0, 1.0, max(num_points, 2))[:, np.newaxis]
        start = self.point1.to_array()
        return start + s * (self.point2.to_array() - start)

    def __repr__(self):
        """Return string representation of line segment."""
        return f"LineSegment(from ({self.point1.x}, {self.point1.t}) to ({self.point2.x}, {self.point2.t}))"
