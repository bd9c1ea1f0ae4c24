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

"""HyperbolicSegment - bounded arc of a constant acceleration curve."""

import numpy as np

from . import relativity
from .acceleration import Branch
from .bounds import Bounds
from .coordinate import Coordinate
from .curve import HyperbolicMotionCurve
from .errors import ProgrammingError
from .fuzzy import fuzzy_gt, fuzzy_le, fuzzy_lt, fuzzy_zero
from .line_segment import CurveSegment


class HyperbolicSegment(CurveSegment):
    """
    Part of a HyperbolicMotionCurve between two times.

    The bounding box includes the turn-around point when the arc passes
    through it, so it is not just the box of the two end points.
    """

    def __init__(self, a, min_endpoint, max_endpoint, curve):
        """
        Initialize the arc.

        Args:
            a: Acceleration, must not be zero
            min_endpoint: Earlier end (anything with x and t)
            max_endpoint: Later end (anything with x and t)
            curve: HyperbolicMotionCurve the arc lies on

        Raises
        ------
        ProgrammingError
            If a is zero or the ends are out of order

        """
        if fuzzy_zero(a):
            raise ProgrammingError("HyperbolicSegment: acceleration is 0")
        if fuzzy_gt(min_endpoint.t, max_endpoint.t):
            raise ProgrammingError("HyperbolicSegment: min is greater than max")

        self.a = a
        self.min = Coordinate(min_endpoint.x, min_endpoint.t)
        self.max = Coordinate(max_endpoint.x, max_endpoint.t)
        self.curve = curve
        self.bounds = self._arc_bounds(self.min.x, self.min.t, self.max.x, self.max.t)

    @classmethod
    def from_times(cls, a, min_t, max_t, curve):
        return cls(
            a,
            Coordinate(curve.t_to_x(min_t), min_t),
            Coordinate(curve.t_to_x(max_t), max_t),
            curve)

    def _arc_bounds(self, min_x, min_t, max_x, max_t):
        offset = self.curve.offset
        if fuzzy_le(min_t, offset.t) and fuzzy_le(offset.t, max_t):
            if fuzzy_lt(self.curve.a, 0.0):
                return Bounds(min(min_x, max_x), min_t, offset.x, max_t)
            return Bounds(offset.x, min_t, max(min_x, max_x), max_t)
        return Bounds(min_x, min_t, max_x, max_t)

    def _x_to_t_within(self, x, min_t, max_t, branch):
        t1 = self.curve.x_to_t(x, Branch.EARLIER)
        t2 = self.curve.x_to_t(x, Branch.LATER)
        if fuzzy_lt(t1, min_t) or fuzzy_gt(t1, max_t):
            return t2
        if fuzzy_lt(t2, min_t) or fuzzy_gt(t2, max_t):
            return t1
        return max(t1, t2) if branch.is_later else min(t1, t2)

    def intersect_bounds(self, bounds):
        """
        Clip the arc to a box.

        Args:
            bounds: Bounds to clip against (edges may be infinite)

        Returns
        -------
        HyperbolicSegment or None
            The part of the arc inside the box

        """
        if self.min.t > bounds.max.t or self.max.t < bounds.min.t:
            return None
        min_t = max(self.min.t, bounds.min.t)
        max_t = min(self.max.t, bounds.max.t)
        min_x = self.curve.t_to_x(min_t)
        max_x = self.curve.t_to_x(max_t)

        clip = self._arc_bounds(min_x, min_t, max_x, max_t).intersect(bounds)
        if clip is None:
            return None

        min_t = clip.min.t
        max_t = clip.max.t
        if min_x < clip.min.x:
            min_t = self._x_to_t_within(clip.min.x, min_t, max_t, Branch.EARLIER)
        elif min_x > clip.max.x:
            min_t = self._x_to_t_within(clip.max.x, min_t, max_t, Branch.EARLIER)
        if max_x < clip.min.x:
            max_t = self._x_to_t_within(clip.min.x, min_t, max_t, Branch.LATER)
        elif max_x > clip.max.x:
            max_t = self._x_to_t_within(clip.max.x, min_t, max_t, Branch.LATER)

        return HyperbolicSegment.from_times(self.a, min_t, max_t, self.curve)

    def relative_to(self, frame):
        """Same arc seen from another frame (ends must be finite)."""
        v = relativity.v_prime(self.curve.t_to_v(self.min.t), frame.v)
        start = frame.to_frame(self.min)
        end = frame.to_frame(self.max)
        curve = HyperbolicMotionCurve(
            self.a, v, start, self.curve.t_to_tau(self.min.t), self.curve.t_to_d(self.min.t))
        return HyperbolicSegment(self.a, start, end, curve)

    def sample(self, num_points):
        """
        Sample points along the arc, evenly spaced in proper time.

        Args:
            num_points: Number of points, at least 2

        Returns
        -------
        np.ndarray
            Array of shape (num_points, 2) holding [x, t] rows

        Raises
        ------
        ValueError
            If the arc has an infinite end

        """
        if not (self.min.is_finite() and self.max.is_finite()):
            raise ValueError("Cannot sample an arc with an infinite end")

        offset = self.curve.offset
        a = self.curve.a
        # Proper time on the standard curve is asinh(a t) / a
        tau = np.linspace(
            np.arcsinh(a * (self.min.t - offset.t)) / a,
            np.arcsinh(a * (self.max.t - offset.t)) / a,
            max(num_points, 2))
        t = np.sinh(a * tau) / a + offset.t
        x = (np.cosh(a * tau) - 1.0) / a + offset.x
        return np.column_stack((x, t))

    def __repr__(self):
        """Return string representation of arc."""
        return (f"HyperbolicSegment(a={self.a}, from ({self.min.x}, {self.min.t}) "
                f"to ({self.max.x}, {self.max.t}))")
