#!/usr/bin/env python3
"""
Message update schedules.

A schedule visits factor updates in a fixed order and reports the largest
change it observed, so loops can stop once the graph has settled.
"""

import logging
from typing import List, Sequence

from .factor_graph import Factor

logger = logging.getLogger(__name__)


class Schedule:
    """Base class for schedules."""

    def __init__(self, name: str):
        self.name = name

    def visit(self, depth: int = -1, max_depth: int = 0) -> float:
        raise NotImplementedError

    def __str__(self):
        return self.name


class ScheduleStep(Schedule):
    """Single update of one factor message."""

    def __init__(self, name: str, factor: Factor, index: int):
        super().__init__(name)
        self._factor = factor
        self._index = index

    def visit(self, depth: int = -1, max_depth: int = 0) -> float:
        return self._factor.update_message(self._index)


class ScheduleSequence(Schedule):
    """Visits child schedules in order and returns the largest change."""

    def __init__(self, name: str, schedules: Sequence[Schedule]):
        super().__init__(name)
        self._schedules: List[Schedule] = list(schedules)

    def visit(self, depth: int = -1, max_depth: int = 0) -> float:
        max_delta = 0.0
        for schedule in self._schedules:
            max_delta = max(max_delta, schedule.visit(depth + 1, max_depth))
        return max_delta


class ScheduleLoop(Schedule):
    """Repeats a schedule until its change drops to max_delta."""

    def __init__(self, name: str, schedule_to_loop: Schedule, max_delta: float,
                 max_iterations: int = 100):
        super().__init__(name)
        if max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")
        self._schedule_to_loop = schedule_to_loop
        self._max_delta = max_delta
        self._max_iterations = max_iterations
        self.deltas: List[float] = []

    def visit(self, depth: int = -1, max_depth: int = 0) -> float:
        """
        Run the looped schedule to convergence.

        The change from every pass is kept in self.deltas.

        Returns:
            The change from the final pass
        """
        self.deltas = []
        delta = self._schedule_to_loop.visit(depth + 1, max_depth)
        self.deltas.append(delta)
        while delta > self._max_delta:
            if len(self.deltas) >= self._max_iterations:
                logger.warning("%s: no convergence after %d iterations (delta %.6g)",
                               self, len(self.deltas), delta)
                break
            delta = self._schedule_to_loop.visit(depth + 1, max_depth)
            self.deltas.append(delta)

        logger.debug("%s: %d iterations, final delta %.6g", self, len(self.deltas), delta)
        return delta
