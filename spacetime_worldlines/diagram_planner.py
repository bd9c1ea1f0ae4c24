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


"""Diagram planner - clips worldlines and lines to a viewport and samples them."""

import logging

import numpy as np

from .errors import CurveDomainError, NoSegmentMatchError, ProgrammingError
from .frame import Frame, FrameAt
from .hyperbolic_segment import HyperbolicSegment

logger = logging.getLogger(__name__)


class DiagramPlanner:
    """
    Generate polylines for worldlines and event lines inside a viewport.

    Modifies PlottedWorldline objects in-place following the Mutable State pattern.
    """

    SUPPORTED_FRAME_AT = ['t', 'tau', 'd', 'v']
    MAX_POINTS = 10000

    def __init__(self, parameters):
        """
        Initialize planner with diagram parameters.

        Args:
            parameters : dict
                Dictionary with keys:
                - num_points: Samples per hyperbolic arc
                - frame: Optional, 'rest' or the name of an observer whose
                  instantaneous frame the diagram is drawn in
                - frame_at: Optional, one of t, tau, d, v (default tau)
                - frame_value: Optional, where on the observer's worldline
                  the frame is taken (default 0)

        """
        self.num_points = parameters['num_points']
        self.frame_name = parameters.get('frame', 'rest') or 'rest'
        self.frame_at = str(parameters.get('frame_at', 'tau')).lower()
        self.frame_value = float(parameters.get('frame_value', 0.0))

        if not isinstance(self.num_points, int) or not (2 <= self.num_points <= self.MAX_POINTS):
            raise ValueError(f"num_points must be between 2 and {self.MAX_POINTS}, got {self.num_points}")
        if self.frame_at not in self.SUPPORTED_FRAME_AT:
            raise ValueError(f"Unsupported frame_at: {self.frame_at}")

    def resolve_frame(self, observers):
        """
        Frame the diagram is drawn in.

        Args:
            observers : dict
                Observers by name

        Returns
        -------
        Frame or None
            None for the rest frame

        Raises
        ------
        ValueError
            If the frame names an unknown observer or a point the observer
            never reaches

        """
        if self.frame_name == 'rest':
            return None
        if self.frame_name not in observers:
            raise ValueError(f"Frame refers to unknown observer '{self.frame_name}'")
        try:
            return Frame.from_observer_at(
                observers[self.frame_name], FrameAt(self.frame_at), self.frame_value)
        except NoSegmentMatchError as e:
            raise ValueError(f"Cannot take frame of '{self.frame_name}': {e}") from e

    def generate(self, plotted, viewport, frame=None):
        """
        Sample the visible part of a worldline or line.

        Modifies plotted in-place by setting plotted.polylines and
        plotted.is_generated.

        Args:
            plotted : PlottedWorldline
                Worldline or line to process
            viewport : Bounds
                Visible region, in the coordinates of frame
            frame : Frame, optional
                Frame to draw in (default is the rest frame)

        Returns
        -------
        bool
            True if successful, False otherwise

        """
        try:
            shape_source = plotted if frame is None else plotted.relative_to(frame)
            polylines = [self._sample(shape) for shape in shape_source.shapes(viewport)]
        except (ValueError, CurveDomainError, ProgrammingError) as e:
            logger.debug("Cannot sample %s: %s", plotted, e)
            plotted.is_generated = False
            return False

        plotted.polylines = [p for p in polylines if len(p) > 0]
        plotted.is_generated = True
        return True

    def _sample(self, shape):
        if isinstance(shape, HyperbolicSegment):
            points = shape.sample(self.num_points)
        else:
            points = shape.sample(2)
        points = np.asarray(points, dtype=float)
        if not np.isfinite(points).all():
            raise ValueError(f"{shape} has infinite points inside the viewport")
        return points
