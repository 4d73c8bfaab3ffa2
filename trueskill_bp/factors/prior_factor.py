#!/usr/bin/env python3
"""
Prior factor: a fixed Gaussian message into one variable
"""

import numpy as np

from .gaussian_factor import GaussianFactor
from ..factor_graph import Message, Variable
from ..gaussian_distribution import GaussianDistribution


class GaussianPriorFactor(GaussianFactor):
    """Supplies a known N(mean, variance) belief about a variable."""

    def __init__(self, mean: float, variance: float, variable: Variable):
        super().__init__(f"Prior value going to {variable}")
        if not variance > 0:
            raise ValueError(f"Prior variance must be positive, got {variance}")
        self._new_message = GaussianDistribution.from_mean_and_standard_deviation(
            mean, np.sqrt(variance)
        )
        self.create_variable_to_message_binding_with_message(
            variable, GaussianDistribution.flat()
        )

    def _update_message(self, message: Message, variable: Variable) -> float:
        old_marginal = variable.value
        old_message = message.value
        # Swap this factor's old contribution for the fixed prior
        new_marginal = GaussianDistribution.from_precision_mean(
            old_marginal.precision_mean + self._new_message.precision_mean - old_message.precision_mean,
            old_marginal.precision + self._new_message.precision - old_message.precision
        )

        variable.value = new_marginal
        message.value = self._new_message
        return old_marginal - new_marginal
