"""
Central Configuration for the Plate Heat Exchanger (PHE) Performance Engine

This file defines ALL fixed parameters for the PHE calculations in a tiered structure:
  Tier 1: Fixed Design Basis (closure assumptions, correlation constants)
  Tier 2: Fluid Property Data (hot-fluid constants, water anchor table)
  Tier 3: Default Operating Point (form defaults)
  Tier 4: Numerical Tolerances & Study Defaults
  Tier 5: Output Locations

Temperatures in degrees C, all other values in SI units. Units noted in comments.

Usage:
    from config import print_summary
    print_summary()
"""

import os
from dataclasses import dataclass
from types import MappingProxyType


# =============================================================================
# TIER 1: FIXED DESIGN BASIS
# =============================================================================

# --- HEATING MODE CLOSURE ---
# Hot stream drives; cold inlet and hot outlet are assumed, not solved.
HEATING_COLD_INLET_TEMP = 25.0    # C (assumed cold water supply)
HEATING_HOT_DROP = 20.0           # K (assumed hot-side temperature drop)

# --- COOLING MODE CLOSURE ---
# Cold stream drives; hot inlet and cold outlet are assumed, not solved.
COOLING_HOT_SPAN = 30.0           # K (T_h_in - T_h_out)
COOLING_COLD_RISE = 25.0          # K (T_c_out - T_c_in)

# --- DITTUS-BOELTER CORRELATION ---
# Same exponents for heating and cooling of either stream
DITTUS_BOELTER_C = 0.023
DITTUS_BOELTER_RE_EXP = 0.8
DITTUS_BOELTER_PR_EXP = 0.4


# =============================================================================
# TIER 2: FLUID PROPERTY DATA
# =============================================================================

@dataclass(frozen=True)
class FluidProperties:
    """Thermophysical property set for one fluid at one state."""

    cp: float    # J/(kg-K), specific heat capacity
    rho: float   # kg/m3, density
    mu: float    # Pa-s, dynamic viscosity
    k: float     # W/(m-K), thermal conductivity


# --- Hot fluids (constant over the operating range) ---
HOT_FLUID_PROPERTIES = MappingProxyType({
    'oil': FluidProperties(cp=2100.0, rho=850.0, mu=0.001, k=0.145),
    'petrol': FluidProperties(cp=2220.0, rho=740.0, mu=0.0003, k=0.12),
    'diesel': FluidProperties(cp=2010.0, rho=820.0, mu=0.0025, k=0.135),
})

# --- Cold fluid: liquid water at atmospheric pressure ---
# (T [C], cp [J/kg-K], rho [kg/m3], mu [Pa-s], k [W/m-K]), ascending in T
WATER_TABLE = (
    (20.0, 4182.0, 998.2, 0.001002, 0.598),
    (30.0, 4178.0, 995.7, 0.000798, 0.615),
    (40.0, 4179.0, 992.2, 0.000653, 0.631),
    (50.0, 4181.0, 988.1, 0.000547, 0.644),
    (60.0, 4185.0, 983.2, 0.000467, 0.654),
    (70.0, 4190.0, 977.8, 0.000404, 0.663),
    (80.0, 4197.0, 971.8, 0.000355, 0.670),
    (90.0, 4205.0, 965.3, 0.000315, 0.675),
)
WATER_TABLE_MIN_TEMP = WATER_TABLE[0][0]    # C
WATER_TABLE_MAX_TEMP = WATER_TABLE[-1][0]   # C


# =============================================================================
# TIER 3: DEFAULT OPERATING POINT
# =============================================================================

DEFAULT_MODE = 'heating'
DEFAULT_HOT_FLUID = 'oil'

# --- PLATE PACK ---
DEFAULT_PLATE_LENGTH = 0.5        # m
DEFAULT_PLATE_BREADTH = 0.1       # m
DEFAULT_PLATE_GAP = 0.003         # m (channel gap between adjacent plates)
DEFAULT_PLATE_COUNT = 10          # plates

MIN_PLATE_COUNT = 2               # one channel needs two plates


# =============================================================================
# TIER 4: NUMERICAL TOLERANCES & STUDY DEFAULTS
# =============================================================================

# End temperature differences closer than this (relative) are treated as equal
LMTD_EQUAL_RTOL = 1e-9

# Parametric sweeps
SWEEP_FLOW_FRACTIONS = (0.25, 0.50, 0.75, 1.00, 1.25, 1.50, 2.00)
SWEEP_PLATE_COUNTS = (5, 11, 21, 31, 41, 61)


# =============================================================================
# TIER 5: OUTPUT LOCATIONS
# =============================================================================

PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
RESULTS_DIR = os.environ.get('PHE_RESULTS_DIR', os.path.join(PROJECT_ROOT, 'results'))
FIGURES_DIR = os.path.join(RESULTS_DIR, 'figures')


# =============================================================================
# SUMMARY OUTPUT
# =============================================================================

def print_summary():
    """Print the fixed design basis and property data."""
    print("=" * 72)
    print("     PLATE HEAT EXCHANGER ENGINE - DESIGN BASIS")
    print("=" * 72)

    print("\n--- Heating Mode Assumptions ---")
    print(f"  Cold inlet temperature:   {HEATING_COLD_INLET_TEMP:10.1f} C")
    print(f"  Hot-side temperature drop:{HEATING_HOT_DROP:10.1f} K")

    print("\n--- Cooling Mode Assumptions ---")
    print(f"  Hot-side temperature span:{COOLING_HOT_SPAN:10.1f} K")
    print(f"  Cold-side temperature rise:{COOLING_COLD_RISE:9.1f} K")

    print("\n--- Correlation ---")
    print(f"  Nu = {DITTUS_BOELTER_C} * Re^{DITTUS_BOELTER_RE_EXP} * Pr^{DITTUS_BOELTER_PR_EXP}")

    print("\n--- Hot Fluids ---")
    print(f"  {'Fluid':<8s} {'cp':>8s} {'rho':>8s} {'mu':>10s} {'k':>7s}")
    for name, props in HOT_FLUID_PROPERTIES.items():
        print(f"  {name:<8s} {props.cp:8.0f} {props.rho:8.1f} {props.mu:10.2e} {props.k:7.3f}")

    print(f"\n--- Water Anchors ({WATER_TABLE_MIN_TEMP:.0f}-{WATER_TABLE_MAX_TEMP:.0f} C, held at end values outside) ---")
    print(f"  {'T [C]':>6s} {'cp':>8s} {'rho':>8s} {'mu':>10s} {'k':>7s}")
    for T, cp, rho, mu, k in WATER_TABLE:
        print(f"  {T:6.1f} {cp:8.0f} {rho:8.1f} {mu:10.2e} {k:7.3f}")

    print("\n--- Default Plate Pack ---")
    print(f"  Length L:                 {DEFAULT_PLATE_LENGTH:10.3f} m")
    print(f"  Breadth B:                {DEFAULT_PLATE_BREADTH:10.3f} m")
    print(f"  Gap b:                    {DEFAULT_PLATE_GAP * 1e3:10.2f} mm")
    print(f"  Plates N:                 {DEFAULT_PLATE_COUNT:10d}")

    print("\n" + "=" * 72)


# =============================================================================
# MAIN
# =============================================================================

if __name__ == "__main__":
    print_summary()
