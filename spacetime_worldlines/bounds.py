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

"""Bounds - axis-aligned rectangle in (x, t), possibly with infinite edges."""

import numpy as np

from .coordinate import Coordinate
from .fuzzy import fuzzy_gt, fuzzy_lt

INSIDE = 0x0
LEFT = 0x1
RIGHT = 0x2
BOTTOM = 0x4
TOP = 0x8


class Bounds:
    """
    Axis-aligned bounding box.

    The corners are sorted on construction, so min.x <= max.x and
    min.t <= max.t always hold. Edges may be +/-infinity.
    """

    def __init__(self, x1, t1, x2, t2):
        """
        Initialize bounds from two opposite corners given in any order.

        Args:
            x1, t1: First corner
            x2, t2: Opposite corner

        """
        self.min = Coordinate(min(x1, x2), min(t1, t2))
        self.max = Coordinate(max(x1, x2), max(t1, t2))

    @classmethod
    def from_corners(cls, a, b):
        """Build bounds from two Coordinates (order-independent)."""
        return cls(a.x, a.t, b.x, b.t)

    def copy(self):
        return Bounds(self.min.x, self.min.t, self.max.x, self.max.t)

    @property
    def width(self):
        return self.max.x - self.min.x

    @property
    def height(self):
        return self.max.t - self.min.t

    def set_to(self, x1, t1, x2, t2):
        self.min.set_to(min(x1, x2), min(t1, t2))
        self.max.set_to(max(x1, x2), max(t1, t2))

    def is_finite(self):
        return self.min.is_finite() and self.max.is_finite()

    def is_empty(self):
        """
        Check for a box that can never bound anything.

        A box whose two edges on one axis sit at the same infinity is
        unreachable.

        """
        if self.min.x == self.max.x and np.isinf(self.min.x):
            return True
        if self.min.t == self.max.t and np.isinf(self.min.t):
            return True
        return False

    # Out codes

    def compute_outcode(self, coord):
        """
        Classify a point against this box (Cohen-Sutherland outcode).

        Args:
            coord: Coordinate to classify

        Returns
        -------
        int
            Bitwise OR of LEFT, RIGHT, BOTTOM and TOP (INSIDE is 0)

        """
        code = INSIDE
        if fuzzy_lt(coord.x, self.min.x):
            code |= LEFT
        elif fuzzy_gt(coord.x, self.max.x):
            code |= RIGHT
        if fuzzy_lt(coord.t, self.min.t):
            code |= BOTTOM
        elif fuzzy_gt(coord.t, self.max.t):
            code |= TOP
        return code

    def inside(self, coord):
        return self.compute_outcode(coord) == INSIDE

    def completely_inside(self, segment):
        """Return True if both ends of a LineSegment are inside."""
        return (self.compute_outcode(segment.point1) | self.compute_outcode(segment.point2)) == 0

    def completely_outside(self, segment):
        """Return True if both ends of a LineSegment share an outside zone."""
        return (self.compute_outcode(segment.point1) & self.compute_outcode(segment.point2)) != 0

    # Intersections

    def intersects(self, other):
        if other is None:
            return False
        return not (
            self.max.x < other.min.x or
            self.min.x > other.max.x or
            self.max.t < other.min.t or
            self.min.t > other.max.t
        )

    def intersect(self, other):
        """
        Intersect two bounding boxes.

        Returns
        -------
        Bounds or None
            The overlap, or None when the boxes do not overlap or either
            one is empty

        """
        if other is None or self.is_empty() or other.is_empty():
            return None
        if not self.intersects(other):
            return None

        return Bounds(
            max(self.min.x, other.min.x),
            max(self.min.t, other.min.t),
            min(self.max.x, other.max.x),
            min(self.max.t, other.max.t))

    def clip_segment(self, segment):
        """Clip a LineSegment to this (finite) box; None if nothing is left."""
        return segment.intersect_bounds(self)

    # Transformations

    def transform(self, affine):
        """
        Transform the box with a 2D affine matrix.

        Args:
            affine: 3x3 homogeneous matrix acting on column vectors [x, t, 1]

        Returns
        -------
        Bounds
            Bounding box of the four transformed corners

        """
        affine = np.asarray(affine, dtype=float)
        if affine.shape != (3, 3):
            raise ValueError("Affine transform must be a 3x3 matrix")

        corners = np.array([
            [self.min.x, self.min.t, 1.0],
            [self.min.x, self.max.t, 1.0],
            [self.max.x, self.min.t, 1.0],
            [self.max.x, self.max.t, 1.0],
        ])
        moved = corners @ affine.T
        lo = moved[:, :2].min(axis=0)
        hi = moved[:, :2].max(axis=0)
        return Bounds(lo[0], lo[1], hi[0], hi[1])

    def __eq__(self, other):
        if not isinstance(other, Bounds):
            return NotImplemented
        return self.min == other.min and self.max == other.max

    __hash__ = None

    def __repr__(self):
        """Return string representation of bounds."""
        return f"Bounds(from ({self.min.x}, {self.min.t}) to ({self.max.x}, {self.max.t}))"
