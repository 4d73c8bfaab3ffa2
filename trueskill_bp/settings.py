#!/usr/bin/env python3
"""
Game settings for TrueSkill factor graphs
"""

import numpy as np
from dataclasses import dataclass

from .gaussian_distribution import GaussianDistribution

DEFAULT_INITIAL_MEAN = 25.0
DEFAULT_BETA = DEFAULT_INITIAL_MEAN / 6.0
DEFAULT_DRAW_PROBABILITY = 0.10
DEFAULT_DYNAMICS_FACTOR = DEFAULT_INITIAL_MEAN / 300.0
DEFAULT_INITIAL_STANDARD_DEVIATION = DEFAULT_INITIAL_MEAN / 3.0


@dataclass(frozen=True)
class GameSettings:
    """
    Parameters of the skill model.

    Args:
        initial_mean: Prior mean skill of a new player
        initial_standard_deviation: Prior skill uncertainty
        beta: Performance noise around skill
        dynamics_factor: Skill drift added between games
        draw_probability: Chance that two equally skilled sides draw
    """
    initial_mean: float = DEFAULT_INITIAL_MEAN
    initial_standard_deviation: float = DEFAULT_INITIAL_STANDARD_DEVIATION
    beta: float = DEFAULT_BETA
    dynamics_factor: float = DEFAULT_DYNAMICS_FACTOR
    draw_probability: float = DEFAULT_DRAW_PROBABILITY

    def __post_init__(self):
        if not self.initial_standard_deviation > 0:
            raise ValueError("initial_standard_deviation must be positive")
        if not self.beta > 0:
            raise ValueError("beta must be positive")
        if self.dynamics_factor < 0:
            raise ValueError("dynamics_factor must be non-negative")
        if not 0.0 <= self.draw_probability < 1.0:
            raise ValueError(f"draw_probability must lie in [0, 1), got {self.draw_probability}")

    @property
    def default_rating(self) -> GaussianDistribution:
        return GaussianDistribution.from_mean_and_standard_deviation(
            self.initial_mean, self.initial_standard_deviation
        )

    def draw_margin(self, total_players: int = 2) -> float:
        """
        Performance difference below which a game counts as a draw.

        Args:
            total_players: Number of players across both sides

        Returns:
            inverse_cdf((draw_probability + 1) / 2) * sqrt(total_players) * beta
        """
        if total_players < 1:
            raise ValueError(f"total_players must be positive, got {total_players}")
        if self.draw_probability == 0.0:
            return 0.0
        quantile = GaussianDistribution.inverse_cumulative_to(0.5 * (self.draw_probability + 1.0))
        return float(quantile * np.sqrt(total_players) * self.beta)
