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

"""PlottedWorldline - named worldline or event line with its sampled polylines."""


class PlottedWorldline:
    """
    Represent a named observer in a diagram.

    Wraps an Observer for geometry and holds the sampled polylines
    filled in by DiagramPlanner.
    """

    kind = 'worldline'

    def __init__(self, name, observer):
        """
        Initialize from a name and the observer to draw.

        Args:
            name : str
                Label of the worldline
            observer : Observer
                Worldline to sample

        """
        self.name = name
        self.observer = observer
        self.polylines = None
        self.is_generated = False

    def shapes(self, viewport):
        """Drawable pieces inside the viewport."""
        return self.observer.curve_segments(viewport)

    def relative_to(self, frame):
        return PlottedWorldline(self.name, self.observer.relative_to(frame))

    def to_dict(self):
        """
        Convert to dictionary for JSON export.

        Returns
        -------
        dict
            Dictionary with the name and the sampled polylines

        Raises
        ------
        RuntimeError
            If polylines not generated yet

        """
        if not self.is_generated:
            raise RuntimeError(f"Cannot export {self.kind} '{self.name}' - polylines not generated yet")

        return {
            'kind': self.kind,
            'polylines': [polyline.tolist() for polyline in self.polylines],
            'num_points': sum(len(polyline) for polyline in self.polylines),
        }

    def __repr__(self):
        """Return string representation of plotted worldline."""
        status = "generated" if self.is_generated else "not generated"
        return f"PlottedWorldline({self.name!r}, {status})"


class PlottedLine(PlottedWorldline):
    """Named event line (simultaneity line, light ray, ...) in a diagram."""

    kind = 'line'

    def __init__(self, name, line):
        self.name = name
        self.line = line
        self.polylines = None
        self.is_generated = False

    def shapes(self, viewport):
        shape = self.line.infinite_clip(viewport)
        return [] if shape is None else [shape]

    def relative_to(self, frame):
        return PlottedLine(self.name, self.line.relative_to(frame))

    def __repr__(self):
        """Return string representation of plotted line."""
        status = "generated" if self.is_generated else "not generated"
        return f"PlottedLine({self.name!r}, {status})"
