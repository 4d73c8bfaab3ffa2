#!/usr/bin/env python3
"""
Numerical utilities for TrueSkill factor updates
"""

from .truncated_gaussian import (
    v_exceeds_margin,
    w_exceeds_margin,
    v_within_margin,
    w_within_margin
)

__all__ = [
    'v_exceeds_margin',
    'w_exceeds_margin',
    'v_within_margin',
    'w_within_margin'
]
