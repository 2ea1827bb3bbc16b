#!/usr/bin/env python3
"""
Plate Heat Exchanger Performance - Command-Line Runner
======================================================

Runs one PHE performance calculation and, optionally, parametric studies
around it.

Analysis sequence:
  [1/3] Calculation   - heat balance closure and sizing for the given point
  [2/3] Studies       - flow rate / plate count / hot fluid sweeps (--sweep)
  [3/3] Output        - JSON snapshot, text summary, figures

Usage:
    python main.py --mode heating --fluid oil --flow 2.5 --T-h-in 80 --T-c-out 60
    python main.py --mode cooling --fluid diesel --flow 2.0 --T-c-in 20 --T-h-out 40 \\
        --sweep all --plot --json results/phe.json
"""

import argparse
import os
import sys
from datetime import datetime

import config
from config import (
    DEFAULT_MODE, DEFAULT_HOT_FLUID,
    DEFAULT_PLATE_LENGTH, DEFAULT_PLATE_BREADTH,
    DEFAULT_PLATE_GAP, DEFAULT_PLATE_COUNT,
)
from thermal_hydraulics.fluid_properties import print_fluid_properties
from thermal_hydraulics.correlations import ComputedValuesError
from heat_exchanger.plate_design import (
    InputValidationError, parse_inputs, calculate_phe,
    describe_inputs, print_phe_results,
)
from heat_exchanger.performance import (
    flow_rate_sweep, plate_count_sweep, hot_fluid_comparison,
    sweep_arrays, print_sweep_results,
)
from utils.tables import save_results_json, save_results_text

EXIT_INVALID_INPUT = 2
EXIT_COMPUTED_VALUES = 3


BANNER = r"""
================================================================================

     Plate Heat Exchanger Performance Engine

     Hot side:   oil / petrol / diesel
     Cold side:  water
     Method:     heat balance closure + Dittus-Boelter + LMTD sizing

================================================================================
"""


def step_header(step, total, title):
    """Print a progress step header."""
    tag = f"[{step}/{total}]"
    print(f"\n{'=' * 80}")
    print(f"  {tag} {title}")
    print(f"{'=' * 80}")


def build_parser():
    """Command-line interface definition."""
    parser = argparse.ArgumentParser(
        description='Plate heat exchanger steady-state performance',
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--mode', default=DEFAULT_MODE,
        help='Operation mode:\n'
             '  heating = hot stream known; give --T-h-in, --T-c-out (default)\n'
             '  cooling = cold stream known; give --T-c-in, --T-h-out'
    )
    parser.add_argument(
        '--fluid', default=DEFAULT_HOT_FLUID,
        help='Hot fluid: oil (default), petrol or diesel'
    )
    parser.add_argument(
        '--flow', type=float, default=None,
        help='Mass flow rate of the driving stream in kg/s\n'
             '  (hot stream when heating, cold stream when cooling)'
    )
    parser.add_argument('--T-h-in', type=float, default=None,
                        help='Hot fluid inlet temperature in C (heating)')
    parser.add_argument('--T-c-out', type=float, default=None,
                        help='Cold fluid outlet temperature in C (heating)')
    parser.add_argument('--T-c-in', type=float, default=None,
                        help='Cold fluid inlet temperature in C (cooling)')
    parser.add_argument('--T-h-out', type=float, default=None,
                        help='Hot fluid outlet temperature in C (cooling)')
    parser.add_argument('-L', '--length', type=float, default=DEFAULT_PLATE_LENGTH,
                        help=f'Plate length in m (default: {DEFAULT_PLATE_LENGTH})')
    parser.add_argument('-B', '--breadth', type=float, default=DEFAULT_PLATE_BREADTH,
                        help=f'Plate breadth in m (default: {DEFAULT_PLATE_BREADTH})')
    parser.add_argument('-b', '--gap', type=float, default=DEFAULT_PLATE_GAP,
                        help=f'Plate gap in m (default: {DEFAULT_PLATE_GAP})')
    parser.add_argument('-N', '--plates', type=float, default=DEFAULT_PLATE_COUNT,
                        help=f'Number of plates (default: {DEFAULT_PLATE_COUNT})')
    parser.add_argument(
        '--sweep', choices=['flow', 'plates', 'fluids', 'all'], default=None,
        help='Parametric study to run around the operating point'
    )
    parser.add_argument('--plot', action='store_true',
                        help='Save sweep figures (requires --sweep flow/plates/all)')
    parser.add_argument('--json', default=None,
                        help='Write a timestamped JSON snapshot to this path')
    parser.add_argument('--text', default=None,
                        help='Write a plain-text summary to this path')
    parser.add_argument('--summary', action='store_true',
                        help='Print the design basis and property tables, then exit')
    return parser


def params_from_args(args):
    """Form-style record from parsed arguments."""
    return {
        'mode': args.mode,
        'hot_fluid': args.fluid,
        'mass_flow_rate': args.flow,
        'T_h_in': args.T_h_in,
        'T_c_out': args.T_c_out,
        'T_c_in': args.T_c_in,
        'T_h_out': args.T_h_out,
        'L': args.length,
        'B': args.breadth,
        'b': args.gap,
        'N': args.plates,
    }


def run_studies(inputs, which, plot):
    """[2/3] Parametric studies around the operating point."""
    step_header(2, 3, "STUDIES - Parametric Sweeps")

    if which in ('flow', 'all'):
        points = flow_rate_sweep(inputs)
        print_sweep_results(points, "Driving-stream flow rate sweep (kg/s)")
        if plot:
            from utils.plotting import plot_sweep
            plot_sweep(sweep_arrays(points), 'Mass flow rate (kg/s)',
                       'Area and U vs. flow rate', 'sweep_flow_rate')

    if which in ('plates', 'all'):
        points = plate_count_sweep(inputs)
        print_sweep_results(points, "Plate count sweep")
        if plot:
            from utils.plotting import plot_sweep
            plot_sweep(sweep_arrays(points), 'Number of plates',
                       'Area and U vs. plate count', 'sweep_plate_count')

    if which in ('fluids', 'all'):
        print_sweep_results(hot_fluid_comparison(inputs), "Hot fluid comparison")


def main(argv=None):
    """Execute one PHE calculation. Returns the process exit status."""
    args = build_parser().parse_args(argv)

    if args.summary:
        config.print_summary()
        print_fluid_properties()
        return 0

    print(BANNER)
    print(f"  Run started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    # ---- [1/3] Calculation ----
    step_header(1, 3, "CALCULATION - Heat Balance & Sizing")
    try:
        inputs = parse_inputs(params_from_args(args))
        res = calculate_phe(inputs)
    except InputValidationError as e:
        print("\n  INPUT ERRORS:")
        for msg in e.errors:
            print(f"    - {msg}")
        return EXIT_INVALID_INPUT
    except ComputedValuesError as e:
        print(f"\n  CALCULATION ERROR: {e}")
        return EXIT_COMPUTED_VALUES

    print_phe_results(res, inputs)

    # ---- [2/3] Studies ----
    if args.sweep:
        run_studies(inputs, args.sweep, args.plot)

    # ---- [3/3] Output ----
    if args.json or args.text:
        step_header(3, 3, "OUTPUT - Saving Results")
        if args.json:
            save_results_json(describe_inputs(inputs), res.to_dict(),
                              os.path.abspath(args.json))
        if args.text:
            save_results_text(res, os.path.abspath(args.text))

    return 0


if __name__ == '__main__':
    sys.exit(main())
