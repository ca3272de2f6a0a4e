"""
This file contains the Optimum class, the swarm-wide best solution shared by all particles.
"""
import logging
import math
import threading
from typing import NamedTuple, Sequence

import numpy as np

log = logging.getLogger(__name__)  # Get logger instance.


class Solution(NamedTuple):
    """A consistent copy of the best position and its merit."""

    best_position: np.ndarray
    best_merit: float


class Optimum:
    """
    The best position found by any particle of the swarm and its merit.

    This is the only state written by more than one worker. Both fields are read and written together under a single
    lock, so no reader ever sees a position paired with the merit of another candidate, and the merit never increases.
    The fields are private; use ``try_improve`` and ``snapshot``.

    Attributes
    ----------
    improvements : int
        The number of successful ``try_improve`` calls so far.
    """

    def __init__(self, num_dimensions: int) -> None:
        """
        Initialize an empty optimum.

        Parameters
        ----------
        num_dimensions : int
            The dimensionality of the problem.
        """
        self._lock = threading.Lock()
        self._best_position = np.zeros(num_dimensions)
        self._best_merit = math.inf
        self._improvements = 0

    def try_improve(self, position: Sequence[float], merit: float) -> bool:
        """
        Replace the stored optimum if ``merit`` is strictly better.

        Parameters
        ----------
        position : Sequence[float]
            The candidate position. It is copied.
        merit : float
            The merit of the candidate position.

        Returns
        -------
        bool
            True if the candidate became the new optimum.
        """
        with self._lock:
            if not merit < self._best_merit:
                return False
            self._best_position = np.array(position, dtype=float)
            self._best_merit = merit
            self._improvements += 1
        log.debug(f"New swarm-wide best merit {merit}.")
        return True

    def snapshot(self) -> Solution:
        """Return a copy of the current best position and merit, decoupled from future updates."""
        with self._lock:
            return Solution(self._best_position.copy(), self._best_merit)

    @property
    def improvements(self) -> int:
        with self._lock:
            return self._improvements

    def __repr__(self) -> str:
        position, merit = self.snapshot()
        return f"Optimum(best_position={position}, best_merit={merit})"
