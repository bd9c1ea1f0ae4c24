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

"""Frame - inertial reference frames and the transforms into and out of them."""

import logging
from enum import Enum

import numpy as np

from . import relativity
from .coordinate import Coordinate
from .fuzzy import fuzzy_eq
from .observer import Observer, Quantity

logger = logging.getLogger(__name__)


class FrameAt(Enum):
    """Quantity that selects the point of an observer's worldline a frame is taken at."""

    T = "t"
    TAU = "tau"
    D = "d"
    V = "v"


class Frame:
    """
    Inertial frame moving at v whose origin event is origin.

    origin is given in rest frame coordinates. to_frame() maps rest frame
    coordinates into this frame and to_rest() maps them back.
    """

    def __init__(self, origin, v):
        self.origin = origin.copy()
        self.v = float(v)

    @classmethod
    def from_observer_at(cls, observer, at, value):
        """
        Instantaneous frame of an observer.

        The frame moves with the observer's velocity at the selected point
        and its own time there equals the observer's proper time, so its
        origin is where a clock in that frame would have read zero.

        Args:
            observer: Observer to take the frame from
            at: FrameAt naming what value measures
            value: Time, proper time, distance or velocity

        Raises
        ------
        NoSegmentMatchError
            If the observer never reaches value

        """
        source = Quantity(at.value)
        t = observer.convert(source, Quantity.T, value)
        # At a velocity change the earlier segment answers a time lookup
        v = float(value) if source is Quantity.V else observer.convert(Quantity.T, Quantity.V, t)
        x = observer.convert(Quantity.T, Quantity.X, t)
        tau = observer.convert(Quantity.T, Quantity.TAU, t)

        g = relativity.gamma(v)
        origin = Coordinate(x - g * v * tau, t - g * tau)
        logger.debug("Frame at %s=%s: origin %s, v=%s", at.value, value, origin, v)
        return cls(origin, v)

    @classmethod
    def from_observer(cls, observer):
        return cls.from_observer_at(observer, FrameAt.TAU, 0.0)

    @staticmethod
    def promote(obj):
        """Use a Frame as is, or take an Observer's frame at tau = 0."""
        if isinstance(obj, Frame):
            return obj
        if isinstance(obj, Observer):
            return Frame.from_observer(obj)
        raise TypeError(f"Cannot make a frame from {type(obj).__name__}")

    def to_frame(self, coord):
        """Rest frame coordinate to this frame."""
        return relativity.to_prime_frame(coord.copy().subtract(self.origin), self.v)

    def to_rest(self, coord):
        """Coordinate of this frame to the rest frame."""
        return relativity.to_rest_frame(coord, self.v).add(self.origin)

    def to_frame_points(self, points):
        """
        Vectorised to_frame() for an (n, 2) array of [x, t] rows.

        Args:
            points: Array-like of shape (n, 2)

        Returns
        -------
        np.ndarray
            Transformed points, same shape

        """
        points = np.asarray(points, dtype=float)
        shifted = points - self.origin.to_array()
        return shifted @ relativity.boost_matrix(self.v).T

    def to_rest_points(self, points):
        points = np.asarray(points, dtype=float)
        return points @ relativity.boost_matrix(-self.v).T + self.origin.to_array()

    def relative_to(self, prime):
        """This frame as seen from another frame."""
        return Frame(prime.to_frame(self.origin), relativity.v_prime(self.v, prime.v))

    def __eq__(self, other):
        if not isinstance(other, Frame):
            return NotImplemented
        return self.origin == other.origin and fuzzy_eq(self.v, other.v)

    __hash__ = None

    def __repr__(self):
        """Return string representation of frame."""
        return f"Frame(origin={self.origin!r}, v={self.v})"
