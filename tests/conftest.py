import pytest

from thermal_hydraulics.fluid_properties import HotFluid
from heat_exchanger.plate_design import HeatingInputs, CoolingInputs, PlateGeometry


@pytest.fixture
def geometry():
    """Default plate pack: 0.5 x 0.1 m plates, 3 mm gap, 10 plates."""
    return PlateGeometry(L=0.5, B=0.1, b=0.003, N=10)


@pytest.fixture
def heating_case(geometry):
    return HeatingInputs(hot_fluid=HotFluid.OIL, mass_flow_rate=2.5,
                         T_h_in=80.0, T_c_out=60.0, geometry=geometry)


@pytest.fixture
def cooling_case(geometry):
    return CoolingInputs(hot_fluid=HotFluid.DIESEL, mass_flow_rate=2.0,
                         T_c_in=20.0, T_h_out=40.0, geometry=geometry)


@pytest.fixture
def heating_params():
    """Form-style record for the heating reference case."""
    return {
        'mode': 'heating',
        'hot_fluid': 'oil',
        'mass_flow_rate': 2.5,
        'T_h_in': 80.0,
        'T_c_out': 60.0,
        'L': 0.5,
        'B': 0.1,
        'b': 0.003,
        'N': 10,
    }
