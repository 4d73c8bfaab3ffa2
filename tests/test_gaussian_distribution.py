"""
Tests for GaussianDistribution.
"""

import dataclasses

import numpy as np
import pytest

from trueskill_bp import GaussianDistribution, NumericalDomainError


def test_moment_parameters():
    dist = GaussianDistribution.from_mean_and_standard_deviation(3.0, 2.0)
    assert dist.precision == pytest.approx(0.25)
    assert dist.precision_mean == pytest.approx(0.75)
    assert dist.mean == pytest.approx(3.0)
    assert dist.variance == pytest.approx(4.0)
    assert dist.standard_deviation == pytest.approx(2.0)


def test_flat_distribution():
    flat = GaussianDistribution.flat()
    assert flat.is_flat
    assert flat.mean == 0.0
    assert np.isinf(flat.variance)
    assert np.isinf(flat.standard_deviation)
    assert GaussianDistribution.from_mean_and_standard_deviation(5.0, np.inf) == flat


def test_rejects_non_finite_parameters():
    with pytest.raises(NumericalDomainError):
        GaussianDistribution(np.nan, 1.0)
    with pytest.raises(NumericalDomainError):
        GaussianDistribution(0.0, np.inf)


def test_rejects_non_positive_standard_deviation():
    with pytest.raises(ValueError):
        GaussianDistribution.from_mean_and_standard_deviation(0.0, 0.0)


def test_values_are_immutable(standard_normal):
    with pytest.raises(dataclasses.FrozenInstanceError):
        standard_normal.precision = 2.0


def test_multiply_adds_natural_parameters():
    a = GaussianDistribution(1.0, 2.0)
    b = GaussianDistribution(-0.5, 3.0)
    product = a * b
    assert product.precision_mean == pytest.approx(0.5)
    assert product.precision == pytest.approx(5.0)
    assert GaussianDistribution.multiply(a, b) == product


@pytest.mark.parametrize("a, b", [
    ((0.0, 1.0), (0.0, 0.0)),
    ((2.5, 0.3), (-1.0, 4.0)),
    ((-40.0, 12.0), (3.0, 0.001)),
    ((1e3, 1e2), (-1e3, 1e-3)),
])
def test_divide_inverts_multiply(a, b):
    dist_a = GaussianDistribution(*a)
    dist_b = GaussianDistribution(*b)
    recovered = (dist_a * dist_b) / dist_b
    assert recovered.precision_mean == pytest.approx(dist_a.precision_mean, rel=1e-12, abs=1e-9)
    assert recovered.precision == pytest.approx(dist_a.precision, rel=1e-12, abs=1e-9)


def test_subtract_is_distance():
    a = GaussianDistribution(1.0, 5.0)
    b = GaussianDistribution(0.5, 1.0)
    assert a - b == pytest.approx(2.0)
    assert GaussianDistribution.subtract(b, a) == pytest.approx(2.0)
    assert a - a == 0.0
    assert a.is_close(GaussianDistribution(1.0 + 1e-12, 5.0))


def test_log_product_normalization():
    a = GaussianDistribution.from_mean_and_standard_deviation(0.0, 1.0)
    b = GaussianDistribution.from_mean_and_standard_deviation(1.0, 1.0)
    # N(0; 1, 2)
    expected = -0.5 * np.log(2.0 * np.pi * 2.0) - 1.0 / 4.0
    assert GaussianDistribution.log_product_normalization(a, b) == pytest.approx(expected)
    assert GaussianDistribution.log_product_normalization(a, GaussianDistribution.flat()) == 0.0


def test_log_ratio_normalization():
    numerator = GaussianDistribution.from_mean_and_standard_deviation(0.0, 1.0)
    denominator = GaussianDistribution.from_mean_and_standard_deviation(0.0, np.sqrt(2.0))
    expected = np.log(2.0) + 0.5 * np.log(2.0 * np.pi)
    assert GaussianDistribution.log_ratio_normalization(numerator, denominator) == pytest.approx(expected)

    with pytest.raises(NumericalDomainError):
        GaussianDistribution.log_ratio_normalization(denominator, numerator)


def test_standard_normal_functions():
    assert GaussianDistribution.cumulative_to(0.0) == pytest.approx(0.5)
    assert GaussianDistribution.cumulative_to(1.0, mean=1.0, standard_deviation=3.0) == pytest.approx(0.5)
    assert GaussianDistribution.at(0.0) == pytest.approx(1.0 / np.sqrt(2.0 * np.pi))
    assert GaussianDistribution.inverse_cumulative_to(0.975) == pytest.approx(1.959963985)
    assert GaussianDistribution.log_cumulative_to(-40.0) == pytest.approx(-804.6084420137538, rel=1e-9)

    with pytest.raises(ValueError):
        GaussianDistribution.inverse_cumulative_to(1.0)
