#!/usr/bin/env python3
"""
Factor for a performance difference that stayed within the draw margin (a draw)
"""

import logging
import numpy as np

from .gaussian_factor import GaussianFactor, message_from_variable
from ..factor_graph import Message, Variable
from ..gaussian_distribution import GaussianDistribution
from ..exceptions import NonPositiveDefiniteError, NumericalDomainError
from ..utils.truncated_gaussian import v_within_margin, w_within_margin

logger = logging.getLogger(__name__)


class GaussianWithinFactor(GaussianFactor):
    """Evidence that the absolute value of the bound variable is at most epsilon."""

    def __init__(self, epsilon: float, variable: Variable):
        super().__init__(f"{variable} <= {epsilon:.3f}")
        self._epsilon = float(epsilon)
        self.create_variable_to_message_binding(variable)

    @property
    def epsilon(self) -> float:
        return self._epsilon

    @property
    def log_normalization(self) -> float:
        marginal = self._variables[0].value
        message = self._messages[0].value
        cavity = message_from_variable(marginal, message)
        mean = cavity.mean
        std = cavity.standard_deviation
        z = (GaussianDistribution.cumulative_to((self._epsilon - mean) / std)
             - GaussianDistribution.cumulative_to((-self._epsilon - mean) / std))
        if not z > 0:
            raise NumericalDomainError(f"{self}: probability of a draw underflows")
        return -GaussianDistribution.log_product_normalization(cavity, message) + float(np.log(z))

    def _update_message(self, message: Message, variable: Variable) -> float:
        old_marginal = variable.value
        old_message = message.value
        cavity = message_from_variable(old_marginal, old_message)

        c = cavity.precision
        d = cavity.precision_mean
        sqrt_c = np.sqrt(c)
        d_on_sqrt_c = d / sqrt_c
        epsilon_times_sqrt_c = self._epsilon * sqrt_c

        denom = 1.0 - w_within_margin(d_on_sqrt_c, epsilon_times_sqrt_c)
        if not denom > 0:
            raise NonPositiveDefiniteError(f"{self}: variance correction leaves no variance")

        new_precision = c / denom
        new_precision_mean = (d + sqrt_c * v_within_margin(d_on_sqrt_c, epsilon_times_sqrt_c)) / denom
        if not (np.isfinite(new_precision) and new_precision > 0):
            raise NonPositiveDefiniteError(f"{self}: updated precision {new_precision} is invalid")

        new_marginal = GaussianDistribution.from_precision_mean(new_precision_mean, new_precision)
        new_message = old_message * new_marginal / old_marginal

        message.value = new_message
        variable.value = new_marginal

        delta = new_marginal - old_marginal
        logger.debug("%s: %s -> %s (delta %.6g)", self, old_marginal, new_marginal, delta)
        return delta
