"""
Plate Heat Exchanger Performance Engine
=======================================

Single-pass lumped estimate of PHE thermal-hydraulic performance from a
sparse set of boundary conditions.

Configuration:
  - Hot side: oil, petrol or diesel (constant properties)
  - Cold side: water (properties at the mean cold-side temperature)
  - Flow arrangement: counterflow, (N - 1) / 2 channels per stream

Operating modes:
  HEATING  - hot stream drives. Given T_h_in, T_c_out and the hot mass
             flow; T_c_in and T_h_out are fixed by assumption and the
             cold mass flow is backed out of the heat balance.
  COOLING  - cold stream drives. Given T_c_in, T_h_out and the cold mass
             flow; T_h_in and T_c_out are fixed by assumption and the
             hot mass flow is backed out of the heat balance.

Both modes then share one tail: duty, velocities, Re/Pr/Nu per stream,
overall U, LMTD and required area.

References:
  - Incropera & DeWitt, "Fundamentals of Heat and Mass Transfer", Ch. 11
  - Shah & Sekulic, "Fundamentals of Heat Exchanger Design", Ch. 8
"""

import math
import numbers
from dataclasses import dataclass, asdict
from enum import Enum
from typing import ClassVar, Union

from config import (
    HEATING_COLD_INLET_TEMP, HEATING_HOT_DROP,
    COOLING_HOT_SPAN, COOLING_COLD_RISE,
    MIN_PLATE_COUNT,
)
from thermal_hydraulics.fluid_properties import (
    HotFluid, hot_fluid_properties, water_properties,
)
from thermal_hydraulics.correlations import (
    ComputedValuesError,
    hydraulic_diameter, channel_velocity,
    reynolds_number, prandtl_number, dittus_boelter_nu, film_coefficient,
    overall_U, compute_lmtd, required_area,
)


# =============================================================================
# Input Types
# =============================================================================

class OperatingMode(str, Enum):
    """Which stream is the known, driving stream."""

    HEATING = 'heating'
    COOLING = 'cooling'


@dataclass(frozen=True)
class PlateGeometry:
    """Plate pack dimensions."""

    L: float    # m, plate length
    B: float    # m, plate breadth
    b: float    # m, gap between adjacent plates
    N: int      # number of plates


@dataclass(frozen=True)
class HeatingInputs:
    """HEATING request: hot stream known."""

    mode: ClassVar[OperatingMode] = OperatingMode.HEATING

    hot_fluid: HotFluid
    mass_flow_rate: float       # kg/s, hot stream
    T_h_in: float               # C, hot fluid inlet
    T_c_out: float              # C, cold fluid outlet
    geometry: PlateGeometry


@dataclass(frozen=True)
class CoolingInputs:
    """COOLING request: cold stream known."""

    mode: ClassVar[OperatingMode] = OperatingMode.COOLING

    hot_fluid: HotFluid
    mass_flow_rate: float       # kg/s, cold stream
    T_c_in: float               # C, cold fluid inlet
    T_h_out: float              # C, hot fluid outlet
    geometry: PlateGeometry


PHEInputs = Union[HeatingInputs, CoolingInputs]


# =============================================================================
# PHEResults Dataclass
# =============================================================================

@dataclass(frozen=True)
class PHEResults:
    """Complete PHE performance report."""

    # --- Boundary Temperatures ---
    T_h_in: float               # C
    T_h_out: float              # C
    T_c_in: float               # C
    T_c_out: float              # C

    # --- Thermal Duty & Flows ---
    Q: float                    # kW, heat duty
    m_h: float                  # kg/s, hot mass flow rate
    m_c: float                  # kg/s, cold mass flow rate

    # --- Hydraulics ---
    v_h: float                  # m/s, hot-side channel velocity
    v_c: float                  # m/s, cold-side channel velocity

    # --- Dimensionless Groups ---
    Re_h: float
    Re_c: float
    Pr_h: float
    Pr_c: float
    Nu_h: float
    Nu_c: float

    # --- Sizing ---
    U: float                    # W/(m2-K), overall heat transfer coefficient
    A: float                    # m2, required heat transfer area
    LMTD: float                 # C (= K), log-mean temperature difference

    def to_dict(self):
        """Plain dict of all 18 fields, JSON-serializable."""
        return asdict(self)


# =============================================================================
# Validation
# =============================================================================

class InputValidationError(ValueError):
    """One or more input constraints are violated.

    Attributes:
        errors: Every violated constraint, in reporting order
    """

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("Invalid inputs:\n  - " + "\n  - ".join(self.errors))


def _is_number(value):
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _check_positive(value, label, errors, unit=''):
    """Append a message unless value is a positive number.

    Returns:
        bool: True when the value passed
    """
    if value is not None and not _is_number(value):
        errors.append(f'{label} must be a number')
        return False
    if value is None or not value > 0:
        errors.append(f'{label} must be greater than 0{unit}')
        return False
    return True


def _check_flow(mass_flow_rate, errors):
    _check_positive(mass_flow_rate, 'Mass flow rate', errors)


def _check_geometry(geometry, errors):
    L = getattr(geometry, 'L', None)
    B = getattr(geometry, 'B', None)
    b = getattr(geometry, 'b', None)
    N = getattr(geometry, 'N', None)

    _check_positive(L, 'Plate length', errors)
    _check_positive(B, 'Plate breadth', errors)
    _check_positive(b, 'Plate gap', errors)
    if not _check_positive(N, 'Number of plates', errors):
        return
    if not float(N).is_integer():
        errors.append('Number of plates must be a whole number')
    elif N < MIN_PLATE_COUNT:
        errors.append(f'Number of plates must be at least {MIN_PLATE_COUNT}')


def _check_hot_fluid(hot_fluid, errors):
    try:
        HotFluid(hot_fluid)
    except ValueError:
        names = ', '.join(f.value for f in HotFluid)
        errors.append(f'Hot fluid must be one of: {names}')


def validate_inputs(inputs):
    """Collect every violated input constraint.

    Does not stop at the first failure, so a caller can report all
    problems at once.

    Args:
        inputs: HeatingInputs or CoolingInputs

    Returns:
        list of str: Violation messages (empty when inputs are valid)
    """
    errors = []

    if isinstance(inputs, (HeatingInputs, CoolingInputs)):
        _check_hot_fluid(inputs.hot_fluid, errors)
    _check_flow(getattr(inputs, 'mass_flow_rate', None), errors)

    if isinstance(inputs, HeatingInputs):
        hot_ok = _check_positive(inputs.T_h_in, 'Hot fluid inlet temperature', errors, '°C')
        cold_ok = _check_positive(inputs.T_c_out, 'Cold fluid outlet temperature', errors, '°C')
        if hot_ok and cold_ok and inputs.T_h_in <= inputs.T_c_out:
            errors.append('Hot fluid inlet temperature must be greater than '
                          'cold fluid outlet temperature')
    elif isinstance(inputs, CoolingInputs):
        cold_ok = _check_positive(inputs.T_c_in, 'Cold fluid inlet temperature', errors, '°C')
        hot_ok = _check_positive(inputs.T_h_out, 'Hot fluid outlet temperature', errors, '°C')
        if cold_ok and hot_ok and inputs.T_c_in >= inputs.T_h_out:
            errors.append('Cold fluid inlet temperature must be less than '
                          'hot fluid outlet temperature')
    else:
        errors.append("Operation mode must be 'heating' or 'cooling'")

    _check_geometry(getattr(inputs, 'geometry', None), errors)

    return errors


# =============================================================================
# Parsing Raw Records
# =============================================================================

# field -> accepted keys, first match wins
_FIELD_KEYS = {
    'mode': ('mode',),
    'hot_fluid': ('hot_fluid', 'hotFluid'),
    'mass_flow_rate': ('mass_flow_rate', 'massFlowRate'),
    'T_h_in': ('T_h_in',),
    'T_h_out': ('T_h_out',),
    'T_c_in': ('T_c_in',),
    'T_c_out': ('T_c_out',),
    'L': ('L',),
    'B': ('B',),
    'b': ('b',),
    'N': ('N',),
}


def _lookup(params, field):
    for key in _FIELD_KEYS[field]:
        if key in params:
            return params[key]
    return None


def _number(params, field):
    # Missing, blank or unparseable entries read as "not given"
    value = _lookup(params, field)
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _choice(params, field):
    # Enum members and free text both normalise to the lower-case value
    value = _lookup(params, field)
    if value is None:
        return None
    if isinstance(value, Enum):
        value = value.value
    return str(value).strip().lower()


def parse_inputs(params):
    """Build typed inputs from a form-style record.

    Keys: mode, hot_fluid (or hotFluid), mass_flow_rate (or massFlowRate),
    T_h_in and T_c_out (heating) or T_c_in and T_h_out (cooling),
    L, B, b, N. Temperatures belonging to the other mode are ignored.

    Args:
        params: Mapping of field name -> value (numbers or numeric strings)

    Returns:
        HeatingInputs or CoolingInputs

    Raises:
        InputValidationError: with every violated constraint
    """
    errors = []

    try:
        mode = OperatingMode(_choice(params, 'mode'))
    except ValueError:
        mode = None

    fluid = _choice(params, 'hot_fluid')

    N = _number(params, 'N')
    if N is not None and N.is_integer():
        N = int(N)
    geometry = PlateGeometry(
        L=_number(params, 'L'),
        B=_number(params, 'B'),
        b=_number(params, 'b'),
        N=N,
    )
    m_dot = _number(params, 'mass_flow_rate')

    if mode is OperatingMode.HEATING:
        inputs = HeatingInputs(
            hot_fluid=fluid,
            mass_flow_rate=m_dot,
            T_h_in=_number(params, 'T_h_in'),
            T_c_out=_number(params, 'T_c_out'),
            geometry=geometry,
        )
    elif mode is OperatingMode.COOLING:
        inputs = CoolingInputs(
            hot_fluid=fluid,
            mass_flow_rate=m_dot,
            T_c_in=_number(params, 'T_c_in'),
            T_h_out=_number(params, 'T_h_out'),
            geometry=geometry,
        )
    else:
        errors.append("Operation mode must be 'heating' or 'cooling'")
        _check_hot_fluid(fluid, errors)
        _check_flow(m_dot, errors)
        _check_geometry(geometry, errors)
        raise InputValidationError(errors)

    errors.extend(validate_inputs(inputs))
    if errors:
        raise InputValidationError(errors)

    # Normalise the fluid name to the enum member
    if isinstance(inputs, HeatingInputs):
        return HeatingInputs(HotFluid(fluid), m_dot, inputs.T_h_in, inputs.T_c_out, geometry)
    return CoolingInputs(HotFluid(fluid), m_dot, inputs.T_c_in, inputs.T_h_out, geometry)


def describe_inputs(inputs):
    """Plain dict view of typed inputs, JSON-serializable.

    Args:
        inputs: HeatingInputs or CoolingInputs

    Returns:
        dict
    """
    record = {'mode': inputs.mode.value}
    for key, value in asdict(inputs).items():
        if key == 'geometry':
            record.update(value)
        elif isinstance(value, Enum):
            record[key] = value.value
        else:
            record[key] = value
    return record


# =============================================================================
# Heat Balance Closure
# =============================================================================

def _back_out_flow(quantity, Q, cp, dT, span_name):
    """Mass flow (kg/s) that carries duty Q (kW) over temperature change dT."""
    if not dT > 0:
        raise ComputedValuesError(
            quantity, f"{span_name} is {dT:.3f} K; it must be positive to carry the duty")
    m_dot = Q * 1000.0 / (cp * dT)
    if not (m_dot > 0 and math.isfinite(m_dot)):
        raise ComputedValuesError(quantity, f"mass flow rate evaluated to {m_dot}")
    return m_dot


def _close_heating(inputs, hot):
    """HEATING: fix T_c_in and T_h_out, back out the cold flow."""
    T_h_in = float(inputs.T_h_in)
    T_c_out = float(inputs.T_c_out)
    m_h = float(inputs.mass_flow_rate)

    T_c_in = HEATING_COLD_INLET_TEMP
    T_h_out = T_h_in - HEATING_HOT_DROP

    Q_calc = m_h * hot.cp * (T_h_in - T_h_out) / 1000.0  # kW

    cold = water_properties((T_c_in + T_c_out) / 2.0)
    m_c = _back_out_flow('m_c', Q_calc, cold.cp, T_c_out - T_c_in,
                         'cold-side temperature rise (T_c_out - T_c_in)')

    return T_h_in, T_h_out, T_c_in, T_c_out, m_h, m_c


def _close_cooling(inputs, hot):
    """COOLING: fix T_h_in and T_c_out, back out the hot flow."""
    T_c_in = float(inputs.T_c_in)
    T_h_out = float(inputs.T_h_out)
    m_c = float(inputs.mass_flow_rate)

    T_h_in = T_h_out + COOLING_HOT_SPAN
    T_c_out = T_c_in + COOLING_COLD_RISE

    cold = water_properties((T_c_in + T_c_out) / 2.0)
    Q_calc = m_c * cold.cp * (T_c_out - T_c_in) / 1000.0  # kW

    m_h = _back_out_flow('m_h', Q_calc, hot.cp, T_h_in - T_h_out,
                         'hot-side temperature drop (T_h_in - T_h_out)')

    return T_h_in, T_h_out, T_c_in, T_c_out, m_h, m_c


# =============================================================================
# Main Calculation
# =============================================================================

def calculate_phe(inputs):
    """Compute the full PHE performance report.

    Straight-line pipeline: validation, mode-specific heat balance
    closure, then the shared sizing tail. No iteration.

    Args:
        inputs: HeatingInputs or CoolingInputs

    Returns:
        PHEResults

    Raises:
        InputValidationError: before any arithmetic, listing every violation
        ComputedValuesError: when a derived quantity becomes degenerate
    """
    errors = validate_inputs(inputs)
    if errors:
        raise InputValidationError(errors)

    hot = hot_fluid_properties(inputs.hot_fluid)
    g = inputs.geometry

    if inputs.mode is OperatingMode.HEATING:
        T_h_in, T_h_out, T_c_in, T_c_out, m_h, m_c = _close_heating(inputs, hot)
    else:
        T_h_in, T_h_out, T_c_in, T_c_out, m_h, m_c = _close_cooling(inputs, hot)

    # --- Heat duty (hot-side balance is authoritative) ---
    Q = m_h * hot.cp * (T_h_in - T_h_out) / 1000.0  # kW

    # --- Cold properties at the mean cold temperature ---
    T_c_avg = (T_c_in + T_c_out) / 2.0
    cold = water_properties(T_c_avg)

    # --- Velocities ---
    v_h = channel_velocity(m_h, hot.rho, g.B, g.b, g.N)
    v_c = channel_velocity(m_c, cold.rho, g.B, g.b, g.N)

    # --- Dimensionless groups ---
    D_h = hydraulic_diameter(g.b)

    Re_h = reynolds_number(hot.rho, v_h, D_h, hot.mu)
    Re_c = reynolds_number(cold.rho, v_c, D_h, cold.mu)

    Pr_h = prandtl_number(hot.cp, hot.mu, hot.k)
    Pr_c = prandtl_number(cold.cp, cold.mu, cold.k)

    Nu_h = dittus_boelter_nu(Re_h, Pr_h)
    Nu_c = dittus_boelter_nu(Re_c, Pr_c)

    # --- Heat transfer coefficients ---
    h_h = film_coefficient(Nu_h, hot.k, D_h)
    h_c = film_coefficient(Nu_c, cold.k, D_h)
    U = overall_U(h_h, h_c)

    # --- LMTD & area ---
    LMTD = compute_lmtd(T_h_in, T_h_out, T_c_in, T_c_out)
    A = required_area(Q * 1000.0, U, LMTD)

    return PHEResults(
        T_h_in=T_h_in,
        T_h_out=T_h_out,
        T_c_in=T_c_in,
        T_c_out=T_c_out,
        Q=Q,
        m_h=m_h,
        m_c=m_c,
        v_h=v_h,
        v_c=v_c,
        Re_h=Re_h,
        Re_c=Re_c,
        Pr_h=Pr_h,
        Pr_c=Pr_c,
        Nu_h=Nu_h,
        Nu_c=Nu_c,
        U=U,
        A=A,
        LMTD=LMTD,
    )


def simulate(params):
    """Parse a form-style record and run the calculation.

    Args:
        params: Mapping accepted by parse_inputs()

    Returns:
        PHEResults
    """
    return calculate_phe(parse_inputs(params))


# =============================================================================
# Printing
# =============================================================================

def print_phe_results(res, inputs=None):
    """Print formatted PHE performance summary.

    Args:
        res: PHEResults
        inputs: HeatingInputs or CoolingInputs used for the run (optional,
            adds the operating point header)
    """
    print("=" * 72)
    print("   PLATE HEAT EXCHANGER PERFORMANCE")
    print("=" * 72)

    if inputs is not None:
        g = inputs.geometry
        print("\n--- Operating Point ---")
        print(f"  Mode:                       {inputs.mode.value:>10s}")
        print(f"  Hot fluid:                  {HotFluid(inputs.hot_fluid).value:>10s}")
        print(f"  Plate length L:             {g.L:10.3f} m")
        print(f"  Plate breadth B:            {g.B:10.3f} m")
        print(f"  Plate gap b:                {g.b * 1e3:10.2f} mm")
        print(f"  Number of plates N:         {int(g.N):10d}")
        if int(g.N - 1) % 2:
            print(f"  NOTE: N - 1 = {int(g.N - 1)} is odd; "
                  f"{(g.N - 1) / 2.0:.1f} channels per side used as an approximation.")

    print("\n--- Temperatures ---")
    print(f"  Hot fluid inlet:            {res.T_h_in:10.1f} °C")
    print(f"  Hot fluid outlet:           {res.T_h_out:10.1f} °C")
    print(f"  Cold fluid inlet:           {res.T_c_in:10.1f} °C")
    print(f"  Cold fluid outlet:          {res.T_c_out:10.1f} °C")

    print("\n--- Heat Transfer ---")
    print(f"  Heat duty Q:                {res.Q:10.2f} kW")
    print(f"  Hot mass flow rate:         {res.m_h:10.2f} kg/s")
    print(f"  Cold mass flow rate:        {res.m_c:10.2f} kg/s")
    print(f"  LMTD:                       {res.LMTD:10.2f} °C")

    print("\n--- Flow Velocities ---")
    print(f"  Hot fluid velocity:         {res.v_h:10.3f} m/s")
    print(f"  Cold fluid velocity:        {res.v_c:10.3f} m/s")

    print("\n--- Hot Side ---")
    print(f"  Reynolds number:            {res.Re_h:10.0f}")
    print(f"  Prandtl number:             {res.Pr_h:10.2f}")
    print(f"  Nusselt number:             {res.Nu_h:10.1f}")

    print("\n--- Cold Side ---")
    print(f"  Reynolds number:            {res.Re_c:10.0f}")
    print(f"  Prandtl number:             {res.Pr_c:10.2f}")
    print(f"  Nusselt number:             {res.Nu_c:10.1f}")

    print("\n--- Sizing ---")
    print(f"  Overall U:                  {res.U:10.0f} W/m²K")
    print(f"  Required area:              {res.A:10.2f} m²")

    print("\n" + "=" * 72)


# =============================================================================
# Main
# =============================================================================

if __name__ == '__main__':
    from config import (
        DEFAULT_PLATE_LENGTH, DEFAULT_PLATE_BREADTH,
        DEFAULT_PLATE_GAP, DEFAULT_PLATE_COUNT,
    )

    geom = PlateGeometry(DEFAULT_PLATE_LENGTH, DEFAULT_PLATE_BREADTH,
                         DEFAULT_PLATE_GAP, DEFAULT_PLATE_COUNT)
    case = HeatingInputs(HotFluid.OIL, 2.5, 80.0, 60.0, geom)
    res = calculate_phe(case)
    print_phe_results(res, case)

    # Verify energy balance
    print("\n--- Verification ---")
    print(f"  Q = U*A*LMTD = {res.U * res.A * res.LMTD / 1e3:.2f} kW")
    print(f"  Design Q     = {res.Q:.2f} kW")
