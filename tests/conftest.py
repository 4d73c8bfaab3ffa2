"""
Shared fixtures for factor graph tests.
"""

import pytest

from trueskill_bp import FactorGraph, GaussianDistribution


@pytest.fixture
def factor_graph():
    """Empty factor graph."""
    return FactorGraph()


@pytest.fixture
def standard_normal():
    """N(0, 1) in natural parameters."""
    return GaussianDistribution.from_precision_mean(0.0, 1.0)


@pytest.fixture
def difference_variable(factor_graph, standard_normal):
    """Performance difference variable whose marginal starts at N(0, 1)."""
    return factor_graph.add_variable("difference", prior=standard_normal)
