#!/usr/bin/env python3
"""
TrueSkill factor graph package

Gaussian belief propagation nodes for inferring skills from match outcomes
"""

from .gaussian_distribution import GaussianDistribution
from .factor_graph import FactorGraph, Variable, Message, Factor
from .factors import (
    GaussianFactor,
    GaussianPriorFactor,
    GaussianGreaterThanFactor,
    GaussianWithinFactor
)
from .schedule import Schedule, ScheduleStep, ScheduleSequence, ScheduleLoop
from .settings import GameSettings
from .exceptions import (
    FactorGraphError,
    InvalidBindingError,
    NonPositiveDefiniteError,
    NumericalDomainError
)
from .utils import (
    v_exceeds_margin,
    w_exceeds_margin,
    v_within_margin,
    w_within_margin
)

__all__ = [
    'GaussianDistribution',
    'FactorGraph',
    'Variable',
    'Message',
    'Factor',
    'GaussianFactor',
    'GaussianPriorFactor',
    'GaussianGreaterThanFactor',
    'GaussianWithinFactor',
    'Schedule',
    'ScheduleStep',
    'ScheduleSequence',
    'ScheduleLoop',
    'GameSettings',
    'FactorGraphError',
    'InvalidBindingError',
    'NonPositiveDefiniteError',
    'NumericalDomainError',
    'v_exceeds_margin',
    'w_exceeds_margin',
    'v_within_margin',
    'w_within_margin'
]
