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


"""Relativistic motion and geometry in one space and one time dimension."""

from .bounds import Bounds
from .coordinate import Coordinate
from .curve import Branch, HyperbolicMotionCurve
from .errors import CurveDomainError, NoSegmentMatchError, ProgrammingError, WorldlineConstructionError
from .frame import Frame, FrameAt
from .line import AxisType, BoundedLine, ConcreteLine
from .line_segment import LineSegment
from .observer import (ConcreteObserver, Interval, IntervalObserver, IntervalType, ObserverOrigin,
                       Quantity, SegmentSpec)
from .worldline_segment import LimitType, WorldlineSegment

__version__ = '0.1.0'
