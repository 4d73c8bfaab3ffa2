#!/usr/bin/env python3
"""
Factor for a performance difference that exceeded the draw margin (a decisive win).

The belief about the difference, with this factor's own message removed, is
truncated to (epsilon, inf) and replaced by the Gaussian with the same mean
and variance as the truncated density.
"""

import logging
import numpy as np

from .gaussian_factor import GaussianFactor, message_from_variable
from ..factor_graph import Message, Variable
from ..gaussian_distribution import GaussianDistribution
from ..exceptions import NonPositiveDefiniteError
from ..utils.truncated_gaussian import v_exceeds_margin, w_exceeds_margin

logger = logging.getLogger(__name__)


class GaussianGreaterThanFactor(GaussianFactor):
    """Evidence that the bound variable is greater than epsilon."""

    def __init__(self, epsilon: float, variable: Variable):
        super().__init__(f"{variable} > {epsilon:.3f}")
        self._epsilon = float(epsilon)
        self.create_variable_to_message_binding(variable)

    @property
    def epsilon(self) -> float:
        return self._epsilon

    @property
    def log_normalization(self) -> float:
        """
        Contribution of this factor to the log evidence of the graph.

        Reads the current marginal and message; nothing is written.
        """
        marginal = self._variables[0].value
        message = self._messages[0].value
        cavity = message_from_variable(marginal, message)
        return (-GaussianDistribution.log_product_normalization(cavity, message)
                + GaussianDistribution.log_cumulative_to(
                    (cavity.mean - self._epsilon) / cavity.standard_deviation))

    def _update_message(self, message: Message, variable: Variable) -> float:
        old_marginal = variable.value
        old_message = message.value
        cavity = message_from_variable(old_marginal, old_message)

        c = cavity.precision
        d = cavity.precision_mean
        sqrt_c = np.sqrt(c)
        d_on_sqrt_c = d / sqrt_c
        epsilon_times_sqrt_c = self._epsilon * sqrt_c

        v = v_exceeds_margin(d_on_sqrt_c, epsilon_times_sqrt_c)
        w = w_exceeds_margin(d_on_sqrt_c, epsilon_times_sqrt_c)
        denom = 1.0 - w
        if not denom > 0:
            raise NonPositiveDefiniteError(
                f"{self}: variance correction {w} leaves no variance "
                f"(normalised location {d_on_sqrt_c}, threshold {epsilon_times_sqrt_c})"
            )

        new_precision = c / denom
        new_precision_mean = (d + sqrt_c * v) / denom
        if not (np.isfinite(new_precision) and new_precision > 0):
            raise NonPositiveDefiniteError(f"{self}: updated precision {new_precision} is invalid")

        new_marginal = GaussianDistribution.from_precision_mean(new_precision_mean, new_precision)
        new_message = old_message * new_marginal / old_marginal

        message.value = new_message
        variable.value = new_marginal

        delta = new_marginal - old_marginal
        logger.debug("%s: %s -> %s (delta %.6g)", self, old_marginal, new_marginal, delta)
        return delta
