"""
Plate Channel Heat Transfer Correlations
========================================
Stateless formulas used to size a gasketed plate heat exchanger:
channel geometry, bulk velocity, dimensionless groups, film and overall
heat transfer coefficients, LMTD and required area.

Channel model:
  - N plates form N - 1 channels, split evenly between the two streams,
    so each stream flows through (N - 1) / 2 parallel channels.
  - Each channel is a slot of breadth B and gap b, hydraulic diameter
    D_h = 4 * (B * b) / (2 * B) = 2 * b for B >> b.

References:
  - Incropera & DeWitt, "Fundamentals of Heat and Mass Transfer", Ch. 8, 11
  - Dittus & Boelter (1930), Univ. Calif. Publ. Eng. 2, 443
"""

import math

from config import (
    DITTUS_BOELTER_C, DITTUS_BOELTER_RE_EXP, DITTUS_BOELTER_PR_EXP,
    LMTD_EQUAL_RTOL,
)


class ComputedValuesError(ValueError):
    """A derived quantity left its physically meaningful range.

    Attributes:
        quantity: Name of the degenerate quantity (e.g. 'LMTD', 'm_c')
        reason: Human-readable cause
    """

    def __init__(self, quantity, reason):
        self.quantity = quantity
        self.reason = reason
        super().__init__(f"Computed value out of range: {quantity}: {reason}")


# =============================================================================
# Channel Geometry
# =============================================================================

def hydraulic_diameter(b):
    """Hydraulic diameter of a plate channel, D_h = 2 * b (m)."""
    return 2.0 * b


def channel_flow_area(B, b):
    """Cross-sectional flow area of one channel, A = B * b (m2)."""
    return B * b


def channels_per_side(N):
    """Number of parallel channels available to each stream.

    Fractional when N - 1 is odd; the fraction is kept as an
    approximation of the unequal split.
    """
    return (N - 1) / 2.0


def channel_velocity(m_dot, rho, B, b, N):
    """Bulk velocity of one stream in its channels.

    v = m_dot / (rho * B * b * (N - 1) / 2)

    Args:
        m_dot: Stream mass flow rate (kg/s)
        rho: Stream density (kg/m3)
        B: Plate breadth (m)
        b: Plate gap (m)
        N: Number of plates

    Returns:
        float: Velocity in m/s
    """
    return m_dot / (rho * channel_flow_area(B, b) * channels_per_side(N))


# =============================================================================
# Dimensionless Groups
# =============================================================================

def reynolds_number(rho, v, D_h, mu):
    """Re = rho * v * D_h / mu."""
    return rho * v * D_h / mu


def prandtl_number(cp, mu, k):
    """Pr = cp * mu / k."""
    return cp * mu / k


def dittus_boelter_nu(Re, Pr):
    """Dittus-Boelter correlation, Nu = 0.023 * Re^0.8 * Pr^0.4.

    The heating exponent 0.4 is applied to both streams irrespective of
    the direction of heat flow.

    Args:
        Re: Reynolds number
        Pr: Prandtl number

    Returns:
        float: Nusselt number

    Raises:
        ComputedValuesError: if Re or Pr is not positive
    """
    if not Re > 0:
        raise ComputedValuesError('Nu', f"Reynolds number must be positive, got {Re}")
    if not Pr > 0:
        raise ComputedValuesError('Nu', f"Prandtl number must be positive, got {Pr}")
    return DITTUS_BOELTER_C * Re**DITTUS_BOELTER_RE_EXP * Pr**DITTUS_BOELTER_PR_EXP


def film_coefficient(Nu, k, D_h):
    """Convective film coefficient h = Nu * k / D_h in W/(m2-K)."""
    return Nu * k / D_h


# =============================================================================
# Overall Heat Transfer Coefficient
# =============================================================================

def overall_U(h_hot, h_cold):
    """Overall heat transfer coefficient from two film resistances in series.

    U = 1 / (1/h_hot + 1/h_cold). Plate wall and fouling resistances
    are neglected.

    Args:
        h_hot: Hot-side film coefficient (W/(m2-K))
        h_cold: Cold-side film coefficient (W/(m2-K))

    Returns:
        float: U in W/(m2-K)
    """
    if not (h_hot > 0 and h_cold > 0):
        raise ComputedValuesError(
            'U', f"film coefficients must be positive, got h_hot={h_hot}, h_cold={h_cold}")
    return 1.0 / (1.0 / h_hot + 1.0 / h_cold)


# =============================================================================
# LMTD & Area
# =============================================================================

def compute_lmtd(T_h_in, T_h_out, T_c_in, T_c_out):
    """Compute log-mean temperature difference for counterflow.

    dT1 = T_h_in - T_c_out  (hot end)
    dT2 = T_h_out - T_c_in  (cold end)
    LMTD = |(dT1 - dT2) / ln(dT1 / dT2)|

    When dT1 and dT2 are equal the limiting value dT1 is returned.

    Args:
        T_h_in: Hot fluid inlet temperature (C)
        T_h_out: Hot fluid outlet temperature (C)
        T_c_in: Cold fluid inlet temperature (C)
        T_c_out: Cold fluid outlet temperature (C)

    Returns:
        float: LMTD in K (non-negative)

    Raises:
        ComputedValuesError: if an end difference is zero or the two ends
            differ in sign (logarithm undefined)
    """
    dT1 = T_h_in - T_c_out
    dT2 = T_h_out - T_c_in

    if not dT1 * dT2 > 0:
        raise ComputedValuesError(
            'LMTD', f"ln(dT1/dT2) undefined for dT1={dT1:.3f} K, dT2={dT2:.3f} K")

    if math.isclose(dT1, dT2, rel_tol=LMTD_EQUAL_RTOL):
        return abs(dT1)

    return abs((dT1 - dT2) / math.log(dT1 / dT2))


def required_area(Q, U, LMTD):
    """Heat transfer area needed to pass duty Q, A = Q / (U * LMTD).

    Args:
        Q: Heat duty (W)
        U: Overall heat transfer coefficient (W/(m2-K))
        LMTD: Log-mean temperature difference (K)

    Returns:
        float: Area in m2
    """
    UdT = U * LMTD
    if not (UdT > 0 and math.isfinite(UdT)):
        raise ComputedValuesError('A', f"U * LMTD must be positive and finite, got {UdT}")
    return Q / UdT
