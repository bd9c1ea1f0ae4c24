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

import json
import math

import numpy as np
import pytest
import yaml

from spacetime_worldlines import scenario_io
from spacetime_worldlines.coordinate import Coordinate
from spacetime_worldlines.errors import WorldlineConstructionError
from spacetime_worldlines.worldline_segment import LimitType

SCENARIO = {
    'viewport': {'min': [-2, -1], 'max': [8, 12]},
    'parameters': {'num_points': 32},
    'observers': [
        {'name': 'home'},
        {'name': 'traveler', 'origin': [0, 0], 'segments': [
            {'v': 0.5, 'limit': 't', 'value': 4},
            {'v': -0.5, 'limit': 't', 'value': 4},
            {'v': 0.0},
        ]},
    ],
    'lines': [
        {'name': 'now', 'angle': 0, 'point': [0, 5]},
        {'name': 'light', 'points': [[0, 0], [1, 1]]},
    ],
}


def write_scenario(path, scenario):
    with open(path, 'w') as f:
        yaml.safe_dump(scenario, f)
    return path


@pytest.fixture
def scenario_file(tmp_path):
    return write_scenario(tmp_path / "twins.yaml", SCENARIO)


class TestParsing:
    """Test building objects from YAML dictionaries."""

    def test_segment(self):
        spec = scenario_io.parse_segment({'a': 1.5, 'limit': 'TAU', 'value': 2}, 0)
        assert spec.limit_type is LimitType.TAU
        assert spec.limit_value == 2.0
        assert spec.a == 1.5
        assert math.isnan(spec.v)

    def test_segment_defaults(self):
        spec = scenario_io.parse_segment({}, 0)
        assert spec.limit_type is LimitType.NONE
        assert spec.a == 0.0

    def test_segment_unknown_limit(self):
        with pytest.raises(ValueError, match="unknown limit 'gamma'"):
            scenario_io.parse_segment({'limit': 'gamma', 'value': 1}, 3)

    def test_segment_without_value(self):
        with pytest.raises(ValueError, match="no 'value'"):
            scenario_io.parse_segment({'limit': 't'}, 0)

    def test_observer(self):
        name, observer = scenario_io.parse_observer(SCENARIO['observers'][1])
        assert name == 'traveler'
        assert len(observer.segments) == 3
        assert observer.t_to_x(6.0) == pytest.approx(1.0)

    def test_observer_without_name(self):
        with pytest.raises(ValueError, match="name"):
            scenario_io.parse_observer({'origin': [0, 0]})

    def test_observer_bad_origin(self):
        with pytest.raises(ValueError, match="origin"):
            scenario_io.parse_observer({'name': 'bad', 'origin': [1, 2, 3]})

    def test_impossible_observer(self):
        with pytest.raises(WorldlineConstructionError):
            scenario_io.parse_observer({'name': 'fast', 'segments': [{'v': 1.2}]})

    def test_line_forms(self):
        name, line = scenario_io.parse_line({'name': 'now', 'angle': 0, 'point': [0, 5]})
        assert name == 'now'
        assert line.coordinate == Coordinate(0.0, 5.0)
        _, light = scenario_io.parse_line({'name': 'light', 'points': [[0, 0], [1, 1]]})
        assert light.angle == pytest.approx(45.0)

    def test_incomplete_line(self):
        with pytest.raises(ValueError, match="'angle' and 'point'"):
            scenario_io.parse_line({'name': 'half', 'angle': 30})


class TestLoadScenario:
    """Test loading whole scenario files."""

    def test_load(self, scenario_file):
        worldlines, lines, parameters, viewport = scenario_io.load_scenario(scenario_file)
        assert [w.name for w in worldlines] == ['home', 'traveler']
        assert [line.name for line in lines] == ['now', 'light']
        assert parameters['num_points'] == 32
        assert viewport.min == Coordinate(-2.0, -1.0)
        assert viewport.max == Coordinate(8.0, 12.0)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            scenario_io.load_scenario(tmp_path / "missing.yaml")

    @pytest.mark.parametrize("key", ['viewport', 'parameters', 'observers'])
    def test_missing_required_key(self, tmp_path, key):
        scenario = {k: v for k, v in SCENARIO.items() if k != key}
        path = write_scenario(tmp_path / "broken.yaml", scenario)
        with pytest.raises(ValueError, match=key):
            scenario_io.load_scenario(path)

    def test_missing_num_points(self, tmp_path):
        scenario = dict(SCENARIO, parameters={})
        with pytest.raises(ValueError, match="num_points"):
            scenario_io.load_scenario(write_scenario(tmp_path / "broken.yaml", scenario))

    def test_empty_observers(self, tmp_path):
        scenario = dict(SCENARIO, observers=[])
        with pytest.raises(ValueError, match="No observers"):
            scenario_io.load_scenario(write_scenario(tmp_path / "broken.yaml", scenario))

    def test_duplicate_names(self, tmp_path):
        scenario = dict(SCENARIO, observers=[{'name': 'twin'}, {'name': 'twin'}])
        with pytest.raises(ValueError, match="Duplicate"):
            scenario_io.load_scenario(write_scenario(tmp_path / "broken.yaml", scenario))

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError, match="mapping"):
            scenario_io.load_scenario(path)


class TestExport:
    """Test writing sampled polylines to JSON."""

    def test_export_requires_generated(self, scenario_file, tmp_path):
        worldlines, lines, _, _ = scenario_io.load_scenario(scenario_file)
        with pytest.raises(RuntimeError, match="not been generated"):
            scenario_io.export_to_json(worldlines, lines, tmp_path / "out.json")

    def test_export(self, scenario_file, tmp_path):
        worldlines, lines, _, _ = scenario_io.load_scenario(scenario_file)
        for plotted in worldlines + lines:
            plotted.polylines = [np.array([[0.0, 0.0], [1.0, 1.0]])]
            plotted.is_generated = True

        output = tmp_path / "nested" / "out.json"
        scenario_io.export_to_json(worldlines, lines, output, {'frame': 'rest'})

        with open(output) as f:
            data = json.load(f)
        assert data['metadata']['num_worldlines'] == 2
        assert data['metadata']['num_lines'] == 2
        assert data['metadata']['frame'] == 'rest'
        assert 'generated_at' in data['metadata']
        assert set(data['worldlines']) == {'home', 'traveler'}
        assert data['lines']['light']['kind'] == 'line'
        assert data['lines']['light']['polylines'] == [[[0.0, 0.0], [1.0, 1.0]]]
