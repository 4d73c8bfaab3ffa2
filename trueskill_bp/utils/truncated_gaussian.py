#!/usr/bin/env python3
"""
Truncated Gaussian correction functions for TrueSkill factor updates.

V gives the shift of the mean and W the relative reduction of the variance when
a standard Gaussian is truncated. The "exceeds margin" pair handles one-sided
truncation (a decisive win), the "within margin" pair two-sided truncation
(a draw).
"""

import numpy as np
from scipy import special

from ..exceptions import NumericalDomainError


SQRT_HALF_PI = np.sqrt(np.pi / 2.0)
INV_SQRT_2 = 1.0 / np.sqrt(2.0)

# Below this x the Mills-ratio expansion is used for W
ASYMPTOTIC_THRESHOLD = -30.0

# Coefficients (-1)^k (2k-1)!! and (-1)^k (2k+1)!!, highest power first for np.polyval
MILLS_RATIO_SERIES = [10395.0, -945.0, 105.0, -15.0, 3.0, -1.0, 1.0]
W_NUMERATOR_SERIES = [135135.0, -10395.0, 945.0, -105.0, 15.0, -3.0, 1.0]

# Interval probabilities below this are treated as underflow
MIN_INTERVAL_PROBABILITY = 2.222758749e-162


def _check_finite(*values: float):
    for value in values:
        if not np.isfinite(value):
            raise NumericalDomainError(f"Correction function input is not finite: {value}")


def _pdf(x: float) -> float:
    return float(np.exp(-0.5 * x * x) / np.sqrt(2.0 * np.pi))


def _v(x: float) -> float:
    """
    pdf(x) / cdf(x) for the standard normal.

    Computed as 1 / (sqrt(pi/2) * erfcx(-x / sqrt(2))), which is finite for every
    finite x. It tends to -x as x -> -inf and to 0 as x -> +inf.
    """
    scaled = special.erfcx(-x * INV_SQRT_2)
    return float(1.0 / (SQRT_HALF_PI * scaled))


def _w(x: float) -> float:
    """v(x) * (v(x) + x), kept free of cancellation in the lower tail."""
    if x < ASYMPTOTIC_THRESHOLD:
        # cdf(x)/pdf(x) ~ s(u)/|x| with u = 1/x^2, so w = ((1 - s)/u) / s^2
        u = 1.0 / (x * x)
        s = np.polyval(MILLS_RATIO_SERIES, u)
        return float(np.polyval(W_NUMERATOR_SERIES, u) / (s * s))
    v = _v(x)
    return v * (v + x)


def v_exceeds_margin(team_performance_difference: float, draw_margin: float) -> float:
    """
    Mean correction for a difference known to exceed the draw margin.

    Args:
        team_performance_difference: Normalised location t
        draw_margin: Normalised threshold epsilon

    Returns:
        pdf(t - epsilon) / cdf(t - epsilon)
    """
    _check_finite(team_performance_difference, draw_margin)
    return _v(team_performance_difference - draw_margin)


def w_exceeds_margin(team_performance_difference: float, draw_margin: float) -> float:
    """
    Variance correction for a difference known to exceed the draw margin.

    Args:
        team_performance_difference: Normalised location t
        draw_margin: Normalised threshold epsilon

    Returns:
        V * (V + t - epsilon), which lies in [0, 1)
    """
    _check_finite(team_performance_difference, draw_margin)
    return _w(team_performance_difference - draw_margin)


def _within_margin_terms(team_performance_difference: float, draw_margin: float):
    _check_finite(team_performance_difference, draw_margin)
    abs_difference = abs(team_performance_difference)
    upper = draw_margin - abs_difference
    lower = -draw_margin - abs_difference
    denominator = float(special.ndtr(upper) - special.ndtr(lower))
    if denominator < MIN_INTERVAL_PROBABILITY:
        raise NumericalDomainError(
            f"Probability of landing within margin {draw_margin} from "
            f"{team_performance_difference} underflows"
        )
    return upper, lower, denominator


def v_within_margin(team_performance_difference: float, draw_margin: float) -> float:
    """Mean correction for a difference known to lie within +/- draw margin."""
    upper, lower, denominator = _within_margin_terms(team_performance_difference, draw_margin)
    v = (_pdf(lower) - _pdf(upper)) / denominator
    if team_performance_difference < 0:
        return -v
    return v


def w_within_margin(team_performance_difference: float, draw_margin: float) -> float:
    """Variance correction for a difference known to lie within +/- draw margin."""
    upper, lower, denominator = _within_margin_terms(team_performance_difference, draw_margin)
    v = (_pdf(lower) - _pdf(upper)) / denominator
    return v * v + (upper * _pdf(upper) - lower * _pdf(lower)) / denominator
