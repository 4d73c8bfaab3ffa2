#!/usr/bin/env python3
"""
Base class for factors whose messages are univariate Gaussians
"""

from ..factor_graph import Factor, Message, Variable
from ..gaussian_distribution import GaussianDistribution
from ..exceptions import NonPositiveDefiniteError


class GaussianFactor(Factor):
    """Factor exchanging GaussianDistribution messages with its variables."""

    def _send_message(self, message: Message, variable: Variable) -> float:
        """Multiply the message into the marginal and return the log normaliser."""
        marginal = variable.value
        message_value = message.value
        log_z = GaussianDistribution.log_product_normalization(marginal, message_value)
        variable.value = marginal * message_value
        return log_z

    def create_variable_to_message_binding(self, variable: Variable) -> Message:
        """Bind to variable with a flat starting message."""
        return self.create_variable_to_message_binding_with_message(
            variable, GaussianDistribution.flat()
        )


def message_from_variable(marginal: GaussianDistribution,
                          message: GaussianDistribution) -> GaussianDistribution:
    """
    Belief the rest of the graph holds about a variable (the cavity).

    Raises:
        NonPositiveDefiniteError: the cavity has no positive precision, so there
            is nothing to truncate
    """
    cavity = marginal / message
    if not cavity.precision > 0:
        raise NonPositiveDefiniteError(
            f"Removing message {message} from marginal {marginal} leaves "
            f"precision {cavity.precision}"
        )
    return cavity
