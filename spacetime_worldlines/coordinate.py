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

"""Coordinate - a (position, time) point in the spacetime plane."""

import numpy as np

from .fuzzy import fuzzy_eq, fuzzy_lt


class Coordinate:
    """
    Mutable (x, t) pair.

    Equality and ordering are fuzzy: values come out of chains of
    floating point formulas and are never compared bit for bit.
    Ordering is by time, then by position.
    """

    __slots__ = ('x', 't')

    def __init__(self, x, t):
        self.x = float(x)
        self.t = float(t)

    @classmethod
    def from_array(cls, point):
        """Build a coordinate from a 2-element sequence [x, t]."""
        point = np.asarray(point, dtype=float)
        if point.shape != (2,):
            raise ValueError("Coordinate must be a 2D point [x, t]")
        return cls(point[0], point[1])

    def copy(self):
        return Coordinate(self.x, self.t)

    def set_to(self, x, t):
        self.x = float(x)
        self.t = float(t)
        return self

    def add(self, other):
        """Add other to this coordinate in place."""
        self.x += other.x
        self.t += other.t
        return self

    def subtract(self, other):
        """Subtract other from this coordinate in place."""
        self.x -= other.x
        self.t -= other.t
        return self

    def is_finite(self):
        return bool(np.isfinite(self.x) and np.isfinite(self.t))

    def to_array(self):
        return np.array([self.x, self.t], dtype=float)

    def fuzzy_eq(self, other):
        return fuzzy_eq(self.x, other.x) and fuzzy_eq(self.t, other.t)

    def __eq__(self, other):
        if not isinstance(other, Coordinate):
            return NotImplemented
        return self.fuzzy_eq(other)

    def __lt__(self, other):
        if not isinstance(other, Coordinate):
            return NotImplemented
        if fuzzy_eq(self.t, other.t):
            return fuzzy_lt(self.x, other.x)
        return self.t < other.t

    def __le__(self, other):
        if not isinstance(other, Coordinate):
            return NotImplemented
        return self == other or self < other

    __hash__ = None

    def __iter__(self):
        yield self.x
        yield self.t

    def __repr__(self):
        """Return string representation of coordinate."""
        return f"Coordinate(x={self.x}, t={self.t})"
