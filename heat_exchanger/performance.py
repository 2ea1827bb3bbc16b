"""
Plate Heat Exchanger Parametric Studies
=======================================

Re-runs the performance engine over a range of operating points:
  - Driving-stream mass flow rate (fraction of the base case)
  - Plate count
  - Hot fluid selection

Every point is an independent engine call on a modified copy of the
base inputs. Points whose inputs or derived values are out of range are
kept in the study with the error message instead of a result.
"""

from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from config import SWEEP_FLOW_FRACTIONS, SWEEP_PLATE_COUNTS
from thermal_hydraulics.fluid_properties import HotFluid
from thermal_hydraulics.correlations import ComputedValuesError
from heat_exchanger.plate_design import (
    PHEResults, InputValidationError, calculate_phe,
)


@dataclass
class SweepPoint:
    """One operating point of a parametric study."""

    parameter: str                      # name of the varied input
    value: object                       # value of the varied input
    results: Optional[PHEResults]       # None when the point failed
    error: Optional[str] = None         # reason the point failed

    @property
    def ok(self):
        return self.results is not None


def _run_point(parameter, value, inputs):
    try:
        return SweepPoint(parameter, value, calculate_phe(inputs))
    except (InputValidationError, ComputedValuesError) as e:
        return SweepPoint(parameter, value, None, str(e))


# =============================================================================
# Parametric Studies
# =============================================================================

def flow_rate_sweep(base_inputs, flow_fractions=None):
    """Performance versus driving-stream mass flow rate.

    Args:
        base_inputs: HeatingInputs or CoolingInputs for the base case
        flow_fractions: Multipliers on the base mass flow rate
            (default: SWEEP_FLOW_FRACTIONS)

    Returns:
        list of SweepPoint, value = absolute mass flow rate in kg/s
    """
    if flow_fractions is None:
        flow_fractions = SWEEP_FLOW_FRACTIONS

    points = []
    for frac in flow_fractions:
        m_dot = base_inputs.mass_flow_rate * frac
        inputs = replace(base_inputs, mass_flow_rate=m_dot)
        points.append(_run_point('mass_flow_rate', m_dot, inputs))

    return points


def plate_count_sweep(base_inputs, plate_counts=None):
    """Performance versus number of plates.

    Args:
        base_inputs: HeatingInputs or CoolingInputs for the base case
        plate_counts: Plate counts to evaluate (default: SWEEP_PLATE_COUNTS)

    Returns:
        list of SweepPoint, value = plate count
    """
    if plate_counts is None:
        plate_counts = SWEEP_PLATE_COUNTS

    points = []
    for N in plate_counts:
        geometry = replace(base_inputs.geometry, N=N)
        inputs = replace(base_inputs, geometry=geometry)
        points.append(_run_point('N', N, inputs))

    return points


def hot_fluid_comparison(base_inputs):
    """Performance of the base case with each available hot fluid.

    Args:
        base_inputs: HeatingInputs or CoolingInputs for the base case

    Returns:
        list of SweepPoint, value = HotFluid
    """
    return [_run_point('hot_fluid', fluid, replace(base_inputs, hot_fluid=fluid))
            for fluid in HotFluid]


def sweep_arrays(points, fields=('Q', 'U', 'A')):
    """Stack a sweep into arrays for plotting.

    Failed points are dropped.

    Args:
        points: list of SweepPoint
        fields: PHEResults attribute names to extract

    Returns:
        dict with key 'value' plus one array per field
    """
    good = [p for p in points if p.ok]
    data = {'value': np.array([p.value for p in good], dtype=float)}
    for name in fields:
        data[name] = np.array([getattr(p.results, name) for p in good], dtype=float)
    return data


# =============================================================================
# Printing
# =============================================================================

def print_sweep_results(points, title=None):
    """Print a parametric study table.

    Args:
        points: list of SweepPoint
        title: Table title (default derived from the varied parameter)
    """
    if not points:
        return
    if title is None:
        title = f"PARAMETRIC STUDY: {points[0].parameter}"

    print("=" * 90)
    print(f"   {title.upper()}")
    print("=" * 90)

    header = (f"  {'Value':>10s}  {'Q [kW]':>9s}  {'m_h':>7s}  {'m_c':>7s}  "
              f"{'Re_h':>8s}  {'Re_c':>8s}  {'U [W/m2K]':>10s}  {'A [m2]':>8s}  "
              f"{'LMTD':>7s}")
    print(header)
    print("  " + "-" * 86)

    for pt in points:
        label = pt.value.value if isinstance(pt.value, HotFluid) else f"{pt.value:g}"
        if not pt.ok:
            print(f"  {label:>10s}  FAILED: {pt.error}")
            continue
        r = pt.results
        print(f"  {label:>10s}  "
              f"{r.Q:9.2f}  "
              f"{r.m_h:7.3f}  "
              f"{r.m_c:7.3f}  "
              f"{r.Re_h:8.0f}  "
              f"{r.Re_c:8.0f}  "
              f"{r.U:10.0f}  "
              f"{r.A:8.3f}  "
              f"{r.LMTD:7.2f}")

    print()


# =============================================================================
# Main
# =============================================================================

if __name__ == '__main__':
    from heat_exchanger.plate_design import HeatingInputs, PlateGeometry

    base = HeatingInputs(HotFluid.OIL, 2.5, 80.0, 60.0,
                         PlateGeometry(0.5, 0.1, 0.003, 10))

    print_sweep_results(flow_rate_sweep(base), "Hot flow rate sweep")
    print_sweep_results(plate_count_sweep(base), "Plate count sweep")
    print_sweep_results(hot_fluid_comparison(base), "Hot fluid comparison")
