"""
Working Fluid Thermophysical Properties
=======================================
Property provider for the two streams of the plate heat exchanger.

  - Hot stream: one of oil, petrol or diesel. Properties are taken as
    constant over the operating range.
  - Cold stream: liquid water. Properties are linearly interpolated
    between tabulated anchors from 20 to 90 C and held at the end values
    outside that range.

All values in SI units. Temperature T in degrees Celsius.
"""

from enum import Enum

import numpy as np

from config import (
    FluidProperties, HOT_FLUID_PROPERTIES, WATER_TABLE,
)


class HotFluid(str, Enum):
    """Selectable hot-side fluids."""

    OIL = 'oil'
    PETROL = 'petrol'
    DIESEL = 'diesel'


# Column views of the anchor table for np.interp
_WATER = np.array(WATER_TABLE, dtype=float)
_WATER.setflags(write=False)
_T_ANCHORS = _WATER[:, 0]
_CP_ANCHORS = _WATER[:, 1]
_RHO_ANCHORS = _WATER[:, 2]
_MU_ANCHORS = _WATER[:, 3]
_K_ANCHORS = _WATER[:, 4]


# ============================================================
# Hot Fluids (oil / petrol / diesel)
# ============================================================

def hot_fluid_properties(fluid):
    """Constant property set of a hot-side fluid.

    Args:
        fluid: HotFluid member or its string value ('oil', 'petrol', 'diesel')

    Returns:
        FluidProperties

    Raises:
        ValueError: if the fluid is not one of the tabulated hot fluids
    """
    name = HotFluid(fluid).value
    return HOT_FLUID_PROPERTIES[name]


def hot_fluid_prandtl(fluid):
    """Prandtl number of a hot-side fluid, Pr = cp * mu / k."""
    props = hot_fluid_properties(fluid)
    return props.cp * props.mu / props.k


# ============================================================
# Cold Fluid (water)
# ============================================================

def _interpolate(T, anchors):
    # np.interp clamps to the end values outside [20, 90] C
    return float(np.interp(T, _T_ANCHORS, anchors))


def water_specific_heat(T):
    """Water isobaric specific heat capacity.

    Args:
        T: Temperature in C

    Returns:
        float: Specific heat in J/(kg·K)
    """
    return _interpolate(T, _CP_ANCHORS)


def water_density(T):
    """Water density.

    Args:
        T: Temperature in C

    Returns:
        float: Density in kg/m³
    """
    return _interpolate(T, _RHO_ANCHORS)


def water_viscosity(T):
    """Water dynamic viscosity.

    Viscosity falls by a factor of ~3 between 20 and 90 C, so this is
    the property the cold-side Reynolds number is most sensitive to.

    Args:
        T: Temperature in C

    Returns:
        float: Dynamic viscosity in Pa·s
    """
    return _interpolate(T, _MU_ANCHORS)


def water_thermal_conductivity(T):
    """Water thermal conductivity.

    Args:
        T: Temperature in C

    Returns:
        float: Thermal conductivity in W/(m·K)
    """
    return _interpolate(T, _K_ANCHORS)


def water_properties(T):
    """Full water property set at temperature T.

    Each property is interpolated independently between the bracketing
    anchors:  y = y1 + (y2 - y1) * (T - T1) / (T2 - T1).
    At or below the first anchor (20 C) and at or above the last (90 C)
    the end values are returned unchanged. Exact at every anchor.

    Args:
        T: Temperature in C (any real value)

    Returns:
        FluidProperties
    """
    return FluidProperties(
        cp=water_specific_heat(T),
        rho=water_density(T),
        mu=water_viscosity(T),
        k=water_thermal_conductivity(T),
    )


def water_prandtl(T):
    """Water Prandtl number, Pr = cp * mu / k."""
    props = water_properties(T)
    return props.cp * props.mu / props.k


# ============================================================
# Summary / Diagnostic Function
# ============================================================

def print_fluid_properties(T_celsius=50.0):
    """Print hot-fluid constants and water properties at a given temperature.

    Args:
        T_celsius: Water temperature in C (default 50 C)
    """
    print(f"\n{'=' * 60}")
    print(f"  Working Fluid Properties (water at {T_celsius:.1f} C)")
    print(f"{'=' * 60}")

    for fluid in HotFluid:
        props = hot_fluid_properties(fluid)
        print(f"\n  {fluid.value.capitalize()}:")
        print(f"    Density:              {props.rho:.1f} kg/m³")
        print(f"    Viscosity:            {props.mu * 1000:.3f} mPa·s")
        print(f"    Thermal conductivity: {props.k:.3f} W/(m·K)")
        print(f"    Specific heat:        {props.cp:.0f} J/(kg·K)")
        print(f"    Prandtl number:       {hot_fluid_prandtl(fluid):.2f}")

    water = water_properties(T_celsius)
    print(f"\n  Water:")
    print(f"    Density:              {water.rho:.1f} kg/m³")
    print(f"    Viscosity:            {water.mu * 1000:.3f} mPa·s")
    print(f"    Thermal conductivity: {water.k:.3f} W/(m·K)")
    print(f"    Specific heat:        {water.cp:.0f} J/(kg·K)")
    print(f"    Prandtl number:       {water_prandtl(T_celsius):.2f}")


if __name__ == '__main__':
    for T_C in [20.0, 42.5, 90.0]:
        print_fluid_properties(T_C)
