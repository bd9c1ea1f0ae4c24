#!/usr/bin/env python3

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

"""Main user entry point - orchestrates loading, sampling, and exporting."""

import sys
import argparse
import logging
from pathlib import Path

from spacetime_worldlines import scenario_io
from spacetime_worldlines.diagram_planner import DiagramPlanner


def parse_arguments(argv=None):
    """Parse command line arguments with smart defaults."""
    parser = argparse.ArgumentParser(
        description="Sample relativistic worldlines from a YAML scenario",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Use default scenario
  %(prog)s

  # Specify input scenario
  %(prog)s --input twins.yaml

  # Specify both input and output
  %(prog)s --input twins.yaml --output twins.json

  # Verbose output
  %(prog)s --input twins.yaml --verbose
        """
    )

    default_scenario = Path(__file__).parent.parent / "scenarios" / "twin_paradox.yaml"

    parser.add_argument(
        '--input', '-i',
        type=str,
        default=str(default_scenario) if default_scenario.exists() else None,
        help='Input YAML scenario file (default: scenarios/twin_paradox.yaml)'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        default=None,
        help='Output JSON file (default: auto-generated in generated/)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Print detailed information during sampling'
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Orchestrate loading, sampling, and exporting of worldlines."""
    args = parse_arguments(argv)

    if args.input is None:
        print("ERROR: No input file specified and default scenario not found")
        print("Use --input to specify a YAML scenario file")
        return 1

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        # Load Scenario
        if args.verbose:
            print(f"Loading scenario from: {args.input}")

        worldlines, lines, parameters, viewport = scenario_io.load_scenario(args.input)

        if args.verbose:
            print(f"  Scenario: {Path(args.input).stem}")
            print(f"  Observers: {len(worldlines)}")
            print(f"  Lines: {len(lines)}")
            print(f"  Points per arc: {parameters['num_points']}")
            print(f"  Viewport: {viewport}")
            print()

        # Create Planner
        planner = DiagramPlanner(parameters)
        frame = planner.resolve_frame({w.name: w.observer for w in worldlines})

        if args.verbose:
            print(f"Drawing in frame: {planner.frame_name}" + (f" {frame}" if frame else ""))
            print()

        # Sample Each Worldline And Line
        for plotted in worldlines + lines:
            success = planner.generate(plotted, viewport, frame)

            if not success:
                print(f"✗ Failed to sample {plotted.kind} '{plotted.name}'")
                return 1

            if args.verbose:
                print(f"  {plotted.kind} '{plotted.name}': {len(plotted.polylines)} polyline(s)")

        print(f"Sampled {len(worldlines)} worldline(s) and {len(lines)} line(s)")

        # Export to JSON
        if args.output is None:
            output_path = scenario_io.auto_generate_output_path(args.input)
            if args.verbose:
                print(f"Auto-generated output path: {output_path}")
        else:
            output_path = Path(args.output)

        metadata = {
            'input_file': str(Path(args.input).resolve()),
            'frame': planner.frame_name,
            'num_points': parameters['num_points'],
            'viewport': [viewport.min.to_array().tolist(), viewport.max.to_array().tolist()],
        }

        scenario_io.export_to_json(worldlines, lines, output_path, metadata)
        print(f"Wrote {output_path}")

        return 0

    except FileNotFoundError as e:
        print(f"ERROR: {e}")
        return 1
    except ValueError as e:
        print(f"ERROR: Invalid configuration - {e}")
        return 1
    except Exception as e:
        print(f"ERROR: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
