import json
import math
from dataclasses import replace

import pytest

from thermal_hydraulics.fluid_properties import HotFluid
from thermal_hydraulics.correlations import ComputedValuesError
import heat_exchanger.plate_design as plate_design
from heat_exchanger.plate_design import (
    OperatingMode, PlateGeometry, HeatingInputs, CoolingInputs, PHEResults,
    InputValidationError, validate_inputs, parse_inputs, describe_inputs,
    calculate_phe, simulate,
)

FLOW_ERROR = 'Mass flow rate must be greater than 0'


# ---------------------------------------------------------------------------
# Reference scenarios
# ---------------------------------------------------------------------------

def test_heating_oil_reference(heating_case):
    res = calculate_phe(heating_case)

    # Hand-computed reference. Oil: cp 2100, rho 850, mu 1e-3, k 0.145.
    # Water at the cold mean (25 + 60) / 2 = 42.5 C, a quarter of the way
    # from the 40 C to the 50 C anchor.
    cp_c, rho_c, mu_c, k_c = 4179.5, 991.175, 0.0006265, 0.63425
    channels = (10 - 1) / 2
    A_flow = 0.1 * 0.003
    D_h = 2 * 0.003

    Q = 2.5 * 2100 * 20 / 1000
    m_c = Q * 1000 / (cp_c * (60 - 25))
    v_h = 2.5 / (850 * A_flow * channels)
    v_c = m_c / (rho_c * A_flow * channels)
    Re_h = 850 * v_h * D_h / 0.001
    Re_c = rho_c * v_c * D_h / mu_c
    Pr_h = 2100 * 0.001 / 0.145
    Pr_c = cp_c * mu_c / k_c
    Nu_h = 0.023 * Re_h**0.8 * Pr_h**0.4
    Nu_c = 0.023 * Re_c**0.8 * Pr_c**0.4
    h_h = Nu_h * 0.145 / D_h
    h_c = Nu_c * k_c / D_h
    U = 1 / (1 / h_h + 1 / h_c)
    LMTD = (20 - 35) / math.log(20 / 35)
    A = Q * 1000 / (U * LMTD)

    assert res.T_c_in == 25.0
    assert res.T_h_out == 60.0
    assert res.m_h == 2.5
    assert res.Q == pytest.approx(105.0, rel=1e-12)

    expected = dict(m_c=m_c, v_h=v_h, v_c=v_c, Re_h=Re_h, Re_c=Re_c,
                    Pr_h=Pr_h, Pr_c=Pr_c, Nu_h=Nu_h, Nu_c=Nu_c,
                    U=U, A=A, LMTD=LMTD)
    for name, value in expected.items():
        assert getattr(res, name) == pytest.approx(value, rel=1e-6), name

    # Spot values
    assert res.m_c == pytest.approx(0.717789, rel=1e-5)
    assert res.Re_h == pytest.approx(11111.111, rel=1e-6)
    assert res.LMTD == pytest.approx(26.8041, rel=1e-5)


def test_cooling_diesel_reference(cooling_case):
    res = calculate_phe(cooling_case)

    assert res.T_h_in == 70.0
    assert res.T_c_out == 45.0
    assert res.m_c == 2.0

    # Water cp at (20 + 45) / 2 = 32.5 C
    cp_c = 4178.25
    Q_cold = 2.0 * cp_c * 25 / 1000
    assert res.Q == pytest.approx(Q_cold, rel=1e-12)
    assert res.m_h == pytest.approx(Q_cold * 1000 / (2010 * 30), rel=1e-12)

    # Energy balance closes across the two streams
    assert res.m_h * 2010 * (res.T_h_in - res.T_h_out) == pytest.approx(
        res.m_c * cp_c * (res.T_c_out - res.T_c_in), rel=1e-12)

    assert res.LMTD >= 0.0
    assert res.LMTD == pytest.approx(5.0 / math.log(25.0 / 20.0), rel=1e-12)


# ---------------------------------------------------------------------------
# Closure invariants
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("T_h_in, T_c_out", [(80.0, 60.0), (95.0, 30.0), (150.0, 90.0)])
def test_heating_fixed_assumptions(geometry, T_h_in, T_c_out):
    res = calculate_phe(HeatingInputs(HotFluid.PETROL, 1.2, T_h_in, T_c_out, geometry))
    assert res.T_c_in == 25.0
    assert res.T_h_out == T_h_in - 20.0
    assert res.T_h_in == T_h_in
    assert res.T_c_out == T_c_out


@pytest.mark.parametrize("T_c_in, T_h_out", [(20.0, 40.0), (5.0, 12.0), (60.0, 85.0)])
def test_cooling_fixed_assumptions(geometry, T_c_in, T_h_out):
    res = calculate_phe(CoolingInputs(HotFluid.OIL, 0.8, T_c_in, T_h_out, geometry))
    assert res.T_h_in == T_h_out + 30.0
    assert res.T_c_out == T_c_in + 25.0


@pytest.mark.parametrize("fluid", list(HotFluid))
def test_duty_round_trip(heating_case, cooling_case, fluid):
    from config import HOT_FLUID_PROPERTIES
    cp_h = HOT_FLUID_PROPERTIES[fluid.value].cp
    for case in (heating_case, cooling_case):
        res = calculate_phe(replace(case, hot_fluid=fluid))
        Q = res.m_h * cp_h * (res.T_h_in - res.T_h_out) / 1000
        assert Q == pytest.approx(res.Q, rel=1e-12)


def test_heating_cold_flow_closes_balance(heating_case):
    from thermal_hydraulics.fluid_properties import water_properties
    res = calculate_phe(heating_case)
    cp_c = water_properties((res.T_c_in + res.T_c_out) / 2).cp
    Q_cold = res.m_c * cp_c * (res.T_c_out - res.T_c_in) / 1000
    assert Q_cold == pytest.approx(res.Q, rel=1e-12)


def test_area_consistent_with_duty(heating_case):
    res = calculate_phe(heating_case)
    assert res.U * res.A * res.LMTD / 1000 == pytest.approx(res.Q, rel=1e-12)


def test_equal_end_differences_give_lmtd_dt1(geometry):
    # dT1 = 80 - 45 = 35, dT2 = (80 - 20) - 25 = 35
    res = calculate_phe(HeatingInputs(HotFluid.OIL, 2.5, 80.0, 45.0, geometry))
    assert res.LMTD == 35.0
    assert math.isfinite(res.A)


def test_result_record_shape(heating_case):
    res = calculate_phe(heating_case)
    record = res.to_dict()
    assert len(record) == 18
    assert all(isinstance(v, float) for v in record.values())
    json.dumps(record)
    with pytest.raises(AttributeError):
        res.Q = 0.0


def test_integer_inputs_give_float_results(geometry):
    res = calculate_phe(HeatingInputs(HotFluid.OIL, 2, 80, 60, geometry))
    assert isinstance(res.T_h_out, float)
    assert isinstance(res.m_h, float)


# ---------------------------------------------------------------------------
# Computed-value degeneracy
# ---------------------------------------------------------------------------

def test_cold_outlet_below_assumed_inlet(geometry):
    with pytest.raises(ComputedValuesError) as exc:
        calculate_phe(HeatingInputs(HotFluid.OIL, 2.5, 80.0, 20.0, geometry))
    assert exc.value.quantity == 'm_c'


def test_cold_outlet_equal_to_assumed_inlet(geometry):
    with pytest.raises(ComputedValuesError) as exc:
        calculate_phe(HeatingInputs(HotFluid.OIL, 2.5, 80.0, 25.0, geometry))
    assert exc.value.quantity == 'm_c'


def test_hot_outlet_below_cold_inlet(geometry):
    # T_h_out = 40 - 20 = 20 < T_c_in = 25
    with pytest.raises(ComputedValuesError) as exc:
        calculate_phe(HeatingInputs(HotFluid.OIL, 2.5, 40.0, 30.0, geometry))
    assert exc.value.quantity == 'LMTD'


def test_computed_values_error_is_not_validation_error(geometry):
    with pytest.raises(ComputedValuesError) as exc:
        calculate_phe(HeatingInputs(HotFluid.OIL, 2.5, 40.0, 30.0, geometry))
    assert not isinstance(exc.value, InputValidationError)
    assert 'LMTD' in str(exc.value)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def test_valid_inputs_have_no_errors(heating_case, cooling_case):
    assert validate_inputs(heating_case) == []
    assert validate_inputs(cooling_case) == []


def test_heating_ordering_violation_blocks_calculation(geometry, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("calculation attempted")
    monkeypatch.setattr(plate_design, 'water_properties', fail)

    inputs = HeatingInputs(HotFluid.OIL, 2.5, 50.0, 60.0, geometry)
    with pytest.raises(InputValidationError) as exc:
        calculate_phe(inputs)
    assert exc.value.errors == [
        'Hot fluid inlet temperature must be greater than cold fluid outlet temperature']


def test_cooling_ordering_violation(geometry):
    errors = validate_inputs(CoolingInputs(HotFluid.OIL, 1.0, 40.0, 40.0, geometry))
    assert errors == [
        'Cold fluid inlet temperature must be less than hot fluid outlet temperature']


def test_zero_flow_reported_once_with_other_errors():
    inputs = HeatingInputs(HotFluid.OIL, 0.0, None, 60.0,
                           PlateGeometry(L=0.0, B=0.1, b=-0.003, N=10))
    with pytest.raises(InputValidationError) as exc:
        calculate_phe(inputs)
    errors = exc.value.errors
    assert errors.count(FLOW_ERROR) == 1
    assert 'Hot fluid inlet temperature must be greater than 0°C' in errors
    assert 'Plate length must be greater than 0' in errors
    assert 'Plate gap must be greater than 0' in errors
    assert len(errors) == 4


def test_ordering_skipped_when_temperature_missing(geometry):
    errors = validate_inputs(HeatingInputs(HotFluid.OIL, 1.0, None, 60.0, geometry))
    assert errors == ['Hot fluid inlet temperature must be greater than 0°C']


@pytest.mark.parametrize("N, message", [
    (0, 'Number of plates must be greater than 0'),
    (-4, 'Number of plates must be greater than 0'),
    (1, 'Number of plates must be at least 2'),
    (7.5, 'Number of plates must be a whole number'),
])
def test_plate_count_validation(N, message):
    inputs = CoolingInputs(HotFluid.OIL, 1.0, 20.0, 40.0, PlateGeometry(0.5, 0.1, 0.003, N))
    assert validate_inputs(inputs) == [message]


def test_odd_channel_split_accepted(geometry):
    # N - 1 = 9 channels: 4.5 per side
    res = calculate_phe(HeatingInputs(HotFluid.OIL, 2.5, 80.0, 60.0, geometry))
    even = calculate_phe(HeatingInputs(HotFluid.OIL, 2.5, 80.0, 60.0,
                                       PlateGeometry(0.5, 0.1, 0.003, 11)))
    assert res.v_h == pytest.approx(even.v_h * 5.0 / 4.5)


# ---------------------------------------------------------------------------
# Parsing form records
# ---------------------------------------------------------------------------

def test_parse_heating_record(heating_params, heating_case):
    inputs = parse_inputs(heating_params)
    assert inputs == heating_case
    assert inputs.mode is OperatingMode.HEATING
    assert isinstance(inputs.geometry.N, int)


def test_parse_camel_case_and_strings():
    inputs = parse_inputs({
        'mode': 'Cooling', 'hotFluid': 'DIESEL', 'massFlowRate': '2.0',
        'T_c_in': '20', 'T_h_out': 40, 'L': 0.5, 'B': 0.1, 'b': 0.003, 'N': '10',
    })
    assert isinstance(inputs, CoolingInputs)
    assert inputs.hot_fluid is HotFluid.DIESEL
    assert inputs.mass_flow_rate == 2.0
    assert inputs.geometry.N == 10


def test_parse_ignores_other_mode_temperatures(heating_params):
    heating_params['T_c_in'] = 999.0
    heating_params['T_h_out'] = -5.0
    assert isinstance(parse_inputs(heating_params), HeatingInputs)


def test_parse_collects_all_errors(heating_params):
    heating_params.update(mass_flow_rate='', T_h_in=50.0, T_c_out=60.0, N=None)
    with pytest.raises(InputValidationError) as exc:
        parse_inputs(heating_params)
    assert exc.value.errors == [
        FLOW_ERROR,
        'Hot fluid inlet temperature must be greater than cold fluid outlet temperature',
        'Number of plates must be greater than 0',
    ]


def test_parse_unknown_mode_and_fluid(heating_params):
    heating_params.update(mode='steam', hot_fluid='kerosene', mass_flow_rate=0)
    with pytest.raises(InputValidationError) as exc:
        parse_inputs(heating_params)
    errors = exc.value.errors
    assert errors[0] == "Operation mode must be 'heating' or 'cooling'"
    assert 'Hot fluid must be one of: oil, petrol, diesel' in errors
    assert errors.count(FLOW_ERROR) == 1


def test_parse_non_numeric_reads_as_missing(heating_params):
    heating_params['L'] = 'abc'
    with pytest.raises(InputValidationError) as exc:
        parse_inputs(heating_params)
    assert exc.value.errors == ['Plate length must be greater than 0']


def test_parse_accepts_enum_members(heating_params, heating_case):
    heating_params.update(mode=OperatingMode.HEATING, hot_fluid=HotFluid.OIL)
    assert parse_inputs(heating_params) == heating_case

    heating_params.update(mode=OperatingMode.COOLING, hot_fluid=HotFluid.DIESEL,
                          mass_flow_rate=2.0, T_c_in=20.0, T_h_out=40.0)
    inputs = parse_inputs(heating_params)
    assert isinstance(inputs, CoolingInputs)
    assert inputs.hot_fluid is HotFluid.DIESEL


def test_simulate_accepts_enum_members(heating_params, heating_case):
    heating_params.update(mode=OperatingMode.HEATING, hotFluid=HotFluid.OIL)
    del heating_params['hot_fluid']
    assert simulate(heating_params) == calculate_phe(heating_case)


def test_typed_non_numeric_fields_are_reported():
    inputs = HeatingInputs(HotFluid.OIL, '2.5', '80', 60.0,
                           PlateGeometry(L=0.5, B=None, b=0.003, N='10'))
    assert validate_inputs(inputs) == [
        'Mass flow rate must be a number',
        'Hot fluid inlet temperature must be a number',
        'Plate breadth must be greater than 0',
        'Number of plates must be a number',
    ]
    with pytest.raises(InputValidationError):
        calculate_phe(inputs)


def test_typed_boolean_is_not_a_number(geometry):
    errors = validate_inputs(CoolingInputs(HotFluid.OIL, True, 20.0, 40.0, geometry))
    assert errors == ['Mass flow rate must be a number']


def test_simulate_matches_calculate(heating_params, heating_case):
    assert simulate(heating_params) == calculate_phe(heating_case)


def test_describe_inputs(cooling_case):
    record = describe_inputs(cooling_case)
    assert record == {
        'mode': 'cooling', 'hot_fluid': 'diesel', 'mass_flow_rate': 2.0,
        'T_c_in': 20.0, 'T_h_out': 40.0, 'L': 0.5, 'B': 0.1, 'b': 0.003, 'N': 10,
    }
    json.dumps(record)


def test_results_are_plain_dataclass(heating_case):
    assert isinstance(calculate_phe(heating_case), PHEResults)
