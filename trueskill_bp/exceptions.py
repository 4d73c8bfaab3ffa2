#!/usr/bin/env python3
"""
Exceptions raised by factor graph operations
"""


class FactorGraphError(Exception):
    """Base class for factor graph errors."""


class InvalidBindingError(FactorGraphError, ValueError):
    """A factor was bound to something that is not a live graph variable."""


class NonPositiveDefiniteError(FactorGraphError, ArithmeticError):
    """An update would produce a belief with non-positive precision."""


class NumericalDomainError(FactorGraphError, ArithmeticError):
    """Inputs fall outside the range where a computation is finite."""
