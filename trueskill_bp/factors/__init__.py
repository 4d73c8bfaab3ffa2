#!/usr/bin/env python3
"""
Factor node types for TrueSkill factor graphs
"""

from .gaussian_factor import GaussianFactor, message_from_variable
from .prior_factor import GaussianPriorFactor
from .greater_than_factor import GaussianGreaterThanFactor
from .within_factor import GaussianWithinFactor

__all__ = [
    'GaussianFactor',
    'message_from_variable',
    'GaussianPriorFactor',
    'GaussianGreaterThanFactor',
    'GaussianWithinFactor'
]
