#!/usr/bin/env python3
"""
Univariate Gaussian distribution in natural (precision) parameters.

Beliefs and messages are combined by adding precisions and precision-means,
so that is the form stored. Moment parameters are derived on access.
"""

import numpy as np
from dataclasses import dataclass
from scipy import special

from .exceptions import NumericalDomainError


LOG_SQRT_2PI = 0.5 * np.log(2.0 * np.pi)


@dataclass(frozen=True)
class GaussianDistribution:
    """Gaussian belief with precision-mean and precision."""
    precision_mean: float = 0.0
    precision: float = 0.0

    def __post_init__(self):
        if not (np.isfinite(self.precision_mean) and np.isfinite(self.precision)):
            raise NumericalDomainError(
                f"Non-finite natural parameters: precision_mean={self.precision_mean}, "
                f"precision={self.precision}"
            )
        object.__setattr__(self, 'precision_mean', float(self.precision_mean))
        object.__setattr__(self, 'precision', float(self.precision))

    @classmethod
    def from_precision_mean(cls, precision_mean: float, precision: float) -> 'GaussianDistribution':
        return cls(precision_mean, precision)

    @classmethod
    def from_mean_and_standard_deviation(cls, mean: float, standard_deviation: float) -> 'GaussianDistribution':
        """
        Build a distribution from moment parameters.

        Args:
            mean: Mean of the distribution
            standard_deviation: Positive standard deviation, or infinity for a flat belief

        Returns:
            The equivalent distribution in natural parameters
        """
        if not standard_deviation > 0:
            raise ValueError(f"Standard deviation must be positive, got {standard_deviation}")
        if np.isinf(standard_deviation):
            return cls.flat()
        precision = 1.0 / (standard_deviation * standard_deviation)
        return cls(mean * precision, precision)

    @classmethod
    def flat(cls) -> 'GaussianDistribution':
        """Uninformative belief (zero precision)."""
        return cls(0.0, 0.0)

    @property
    def is_flat(self) -> bool:
        return self.precision == 0.0

    @property
    def mean(self) -> float:
        if self.precision == 0.0:
            return 0.0
        return self.precision_mean / self.precision

    @property
    def variance(self) -> float:
        if self.precision == 0.0:
            return np.inf
        return 1.0 / self.precision

    @property
    def standard_deviation(self) -> float:
        return float(np.sqrt(self.variance))

    @staticmethod
    def multiply(left: 'GaussianDistribution', right: 'GaussianDistribution') -> 'GaussianDistribution':
        """Product of two densities: natural parameters add."""
        return GaussianDistribution(left.precision_mean + right.precision_mean,
                                    left.precision + right.precision)

    @staticmethod
    def divide(numerator: 'GaussianDistribution', denominator: 'GaussianDistribution') -> 'GaussianDistribution':
        """Ratio of two densities: natural parameters subtract."""
        return GaussianDistribution(numerator.precision_mean - denominator.precision_mean,
                                    numerator.precision - denominator.precision)

    @staticmethod
    def subtract(left: 'GaussianDistribution', right: 'GaussianDistribution') -> float:
        """
        Distance between two distributions, used as a convergence signal.

        Returns:
            max(|difference in precision-mean|, sqrt(|difference in precision|))
        """
        return float(max(abs(left.precision_mean - right.precision_mean),
                         np.sqrt(abs(left.precision - right.precision))))

    @staticmethod
    def log_product_normalization(left: 'GaussianDistribution', right: 'GaussianDistribution') -> float:
        """Log of the normalising constant of left * right."""
        if left.is_flat or right.is_flat:
            return 0.0
        variance_sum = left.variance + right.variance
        mean_difference = left.mean - right.mean
        return float(-LOG_SQRT_2PI - np.log(variance_sum) / 2.0
                     - mean_difference * mean_difference / (2.0 * variance_sum))

    @staticmethod
    def log_ratio_normalization(numerator: 'GaussianDistribution', denominator: 'GaussianDistribution') -> float:
        """Log of the normalising constant of numerator / denominator."""
        if numerator.is_flat or denominator.is_flat:
            return 0.0
        variance_difference = denominator.variance - numerator.variance
        if variance_difference <= 0:
            raise NumericalDomainError("Ratio of Gaussians is not normalisable")
        mean_difference = numerator.mean - denominator.mean
        return float(np.log(denominator.variance) + LOG_SQRT_2PI
                     - np.log(variance_difference) / 2.0
                     + mean_difference * mean_difference / (2.0 * variance_difference))

    @staticmethod
    def at(x: float, mean: float = 0.0, standard_deviation: float = 1.0) -> float:
        """Density at x."""
        z = (x - mean) / standard_deviation
        return float(np.exp(-0.5 * z * z - LOG_SQRT_2PI) / standard_deviation)

    @staticmethod
    def cumulative_to(x: float, mean: float = 0.0, standard_deviation: float = 1.0) -> float:
        """Cumulative distribution function evaluated at x."""
        return float(special.ndtr((x - mean) / standard_deviation))

    @staticmethod
    def log_cumulative_to(x: float, mean: float = 0.0, standard_deviation: float = 1.0) -> float:
        """Log of the cumulative distribution function, accurate deep in the lower tail."""
        return float(special.log_ndtr((x - mean) / standard_deviation))

    @staticmethod
    def inverse_cumulative_to(p: float, mean: float = 0.0, standard_deviation: float = 1.0) -> float:
        if not 0.0 < p < 1.0:
            raise ValueError(f"Probability must lie in (0, 1), got {p}")
        return float(mean + standard_deviation * special.ndtri(p))

    def is_close(self, other: 'GaussianDistribution', tol: float = 1e-9) -> bool:
        return GaussianDistribution.subtract(self, other) <= tol

    def __mul__(self, other: 'GaussianDistribution') -> 'GaussianDistribution':
        return GaussianDistribution.multiply(self, other)

    def __truediv__(self, other: 'GaussianDistribution') -> 'GaussianDistribution':
        return GaussianDistribution.divide(self, other)

    def __sub__(self, other: 'GaussianDistribution') -> float:
        return GaussianDistribution.subtract(self, other)

    def __str__(self):
        return f"N(mean={self.mean:.4f}, sd={self.standard_deviation:.4f})"
