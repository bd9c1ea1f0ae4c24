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


"""File I/O utilities for loading YAML scenarios and exporting JSON polylines."""

import json
import yaml
from pathlib import Path
from datetime import datetime

from .bounds import Bounds
from .coordinate import Coordinate
from .line import ConcreteLine
from .observer import ConcreteObserver, ObserverOrigin, SegmentSpec
from .plotted_worldline import PlottedLine, PlottedWorldline
from .worldline_segment import LimitType

NAN = float('nan')


def _point(value, what):
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"{what} must be a list [x, t], got {value!r}")
    return Coordinate(float(value[0]), float(value[1]))


def parse_segment(segment_dict, index):
    """
    Build a SegmentSpec from its YAML dictionary.

    Missing v inherits the previous segment's final velocity, a defaults to
    0 and limit defaults to none.
    """
    limit_name = str(segment_dict.get('limit', 'none')).lower()
    try:
        limit_type = LimitType(limit_name)
    except ValueError:
        raise ValueError(f"Segment {index} has unknown limit '{limit_name}'") from None

    if limit_type is not LimitType.NONE and 'value' not in segment_dict:
        raise ValueError(f"Segment {index} has limit '{limit_name}' but no 'value'")

    return SegmentSpec(
        float(segment_dict.get('v', NAN)),
        float(segment_dict.get('a', 0.0)),
        limit_type,
        float(segment_dict.get('value', NAN)))


def parse_observer(observer_dict):
    """
    Build a ConcreteObserver from its YAML dictionary.

    Raises
    ------
    ValueError
        If the dictionary is invalid or the worldline cannot be built

    """
    if 'name' not in observer_dict:
        raise ValueError("Observer missing 'name'")
    name = observer_dict['name']

    origin = ObserverOrigin(
        _point(observer_dict.get('origin', [0.0, 0.0]), f"Observer '{name}' origin"),
        float(observer_dict.get('tau', 0.0)),
        float(observer_dict.get('d', 0.0)))

    specs = [parse_segment(s, i) for i, s in enumerate(observer_dict.get('segments') or [])]
    return name, ConcreteObserver(origin, specs)


def parse_line(line_dict):
    """Build a ConcreteLine from {name, angle, point} or {name, points}."""
    if 'name' not in line_dict:
        raise ValueError("Line missing 'name'")
    name = line_dict['name']

    if 'points' in line_dict:
        points = line_dict['points']
        if not isinstance(points, (list, tuple)) or len(points) != 2:
            raise ValueError(f"Line '{name}' 'points' must hold two points")
        return name, ConcreteLine.from_points(
            _point(points[0], f"Line '{name}' point"), _point(points[1], f"Line '{name}' point"))

    if 'angle' not in line_dict or 'point' not in line_dict:
        raise ValueError(f"Line '{name}' needs 'angle' and 'point', or 'points'")
    return name, ConcreteLine(float(line_dict['angle']), _point(line_dict['point'], f"Line '{name}' point"))


def load_scenario(yaml_path):
    """
    Load a diagram scenario from a YAML file.

    Parameters
    ----------
    yaml_path : str
        Path to the YAML scenario file.

    Returns
    -------
    tuple
        A tuple containing the following elements:
        - worldlines : list
            List of PlottedWorldline objects.
        - lines : list
            List of PlottedLine objects.
        - parameters : dict
            Dictionary of diagram parameters.
        - viewport : Bounds
            Visible region of the diagram.

    Raises
    ------
    FileNotFoundError
        If the YAML file does not exist.
    ValueError
        If the YAML structure is invalid.

    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Scenario file not found: {yaml_path}")

    with open(yaml_path, 'r') as f:
        config = yaml.safe_load(f)

    if not isinstance(config, dict):
        raise ValueError("Scenario must be a YAML mapping")

    required_keys = ['viewport', 'parameters', 'observers']
    for key in required_keys:
        if key not in config:
            raise ValueError(f"Missing required key in YAML: '{key}'")

    if 'num_points' not in config['parameters']:
        raise ValueError("Missing required parameter: 'num_points'")

    if 'min' not in config['viewport'] or 'max' not in config['viewport']:
        raise ValueError("Viewport must have 'min' and 'max' keys")

    if not config['observers']:
        raise ValueError("No observers defined in scenario")

    viewport = Bounds.from_corners(
        _point(config['viewport']['min'], "Viewport 'min'"),
        _point(config['viewport']['max'], "Viewport 'max'"))

    worldlines = []
    for observer_dict in config['observers']:
        name, observer = parse_observer(observer_dict)
        if any(w.name == name for w in worldlines):
            raise ValueError(f"Duplicate observer name '{name}'")
        worldlines.append(PlottedWorldline(name, observer))

    lines = []
    for line_dict in config.get('lines') or []:
        name, line = parse_line(line_dict)
        lines.append(PlottedLine(name, line))

    return worldlines, lines, config['parameters'], viewport


def export_to_json(worldlines, lines, output_path, metadata=None):
    """
    Export sampled worldlines and lines to a JSON file.

    Parameters
    ----------
    worldlines : list
        List of PlottedWorldline objects. Polylines must be generated before export.
    lines : list
        List of PlottedLine objects.
    output_path : str
        Path where the JSON file will be written.
    metadata : dict, optional
        Optional metadata to include in the output file.

    Raises
    ------
    RuntimeError
        If any worldline or line has not been generated yet.

    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    for plotted in list(worldlines) + list(lines):
        if not plotted.is_generated:
            raise RuntimeError(f"'{plotted.name}' has not been generated yet - cannot export")

    data = {
        'metadata': {
            'generated_at': datetime.now().isoformat(),
            'num_worldlines': len(worldlines),
            'num_lines': len(lines),
        },
        'worldlines': {w.name: w.to_dict() for w in worldlines},
        'lines': {line.name: line.to_dict() for line in lines},
    }

    if metadata:
        data['metadata'].update(metadata)

    with open(output_path, 'w') as f:
        json.dump(data, f, indent=2)


def auto_generate_output_path(input_path):
    """
    Generate an output path with a timestamp relative to the project root.

    The output directory is generated/ one level up from the package
    source directory.
    """
    input_path = Path(input_path)
    scenario_name = input_path.stem
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    project_root = Path(__file__).parent.parent

    output_dir = project_root / "generated"
    output_dir.mkdir(parents=True, exist_ok=True)

    return output_dir / f"{scenario_name}_{timestamp}.json"
