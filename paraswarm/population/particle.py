"""
This file contains the Particle class, a single candidate solution moving through the search space.
"""
import math
import random
from typing import Optional, Sequence, Tuple

import numpy as np

from ..search_space import SearchSpace


class Particle:
    """
    A particle carries a position, a velocity and the memory of the best position it has visited itself.

    Besides its own memory, each particle holds a private copy of the swarm-wide best position as it was known the
    last time the particle synchronized. This copy is the "social" attractor in the velocity update and is only ever
    replaced via ``refresh_global_best``; a particle never holds a live reference to shared state.

    The velocity update is the inertia-weighted rule of Y. Shi and R. Eberhart, “A modified particle swarm optimizer”,
    1998, https://doi.org/10.1109/ICEC.1998.699146. Positions are not clamped to the search space after an update,
    i.e., particles may leave the domain they were initialized in.

    Attributes
    ----------
    position : numpy.ndarray
        The current position.
    velocity : numpy.ndarray
        The current velocity, same shape as ``position``.
    local_best_position : numpy.ndarray
        The position at which the particle's own best merit was recorded.
    local_best_merit : float
        The particle's own best merit so far, ``inf`` before the first evaluation.
    global_best_position : numpy.ndarray
        The particle's snapshot of the swarm-wide best position.
    inertia : float
        The inertia weight applied to the old velocity.
    velocity_cap : numpy.ndarray, optional
        Per-dimension maximum absolute velocity, or ``None`` for unclamped velocities.
    rng : random.Random
        The uniform random number source of this particle.
    """

    def __init__(
        self,
        num_dimensions: int,
        search_space: SearchSpace,
        global_best: Sequence[float],
        inertia: float = 0.729,
        rng: Optional[random.Random] = None,
        velocity_limit: Optional[float] = None,
    ) -> None:
        """
        Create a particle at a uniformly sampled position inside the search space.

        Every position coordinate is drawn from ``[lower[i], upper[i]]``, every velocity coordinate from
        ``[-|upper[i] - lower[i]|, |upper[i] - lower[i]|]``.

        Parameters
        ----------
        num_dimensions : int
            The dimensionality of the problem.
        search_space : SearchSpace
            The bounds to sample the initial position and velocity from.
        global_best : Sequence[float]
            The swarm-wide best position known at creation time. It is copied.
        inertia : float, optional
            The inertia weight. Default is 0.729.
        rng : random.Random, optional
            The uniform random number source. A fresh unseeded generator is used if not given.
        velocity_limit : float, optional
            If given, velocities are clipped to ``velocity_limit`` times the width of each dimension after every
            velocity update.

        Raises
        ------
        ValueError
            If the search space or ``global_best`` does not have ``num_dimensions`` dimensions.
        """
        if len(search_space) != num_dimensions:
            raise ValueError(
                f"Search space has {len(search_space)} dimensions, expected num_dimensions={num_dimensions}."
            )
        if rng is None:
            rng = random.Random()
        self.rng = rng
        self.inertia = inertia

        span = search_space.span
        self.position: np.ndarray = np.array(
            [self.rng.uniform(search_space.lower[i], search_space.upper[i]) for i in range(num_dimensions)]
        )
        self.velocity: np.ndarray = np.array([self.rng.uniform(-span[i], span[i]) for i in range(num_dimensions)])

        self.local_best_position: np.ndarray = self.position.copy()
        self.local_best_merit = math.inf
        self.global_best_position: np.ndarray = np.array(global_best, dtype=float)
        if self.global_best_position.shape != self.position.shape:
            raise ValueError(
                f"Global best position has shape {self.global_best_position.shape}, expected {self.position.shape}."
            )

        self.velocity_cap: Optional[np.ndarray] = None
        if velocity_limit is not None:
            self.velocity_cap = abs(velocity_limit) * span

    def update_position(self) -> None:
        """Move the particle by its current velocity."""
        self.position += self.velocity

    def update_velocity(self, cognitive_coeff: float, social_coeff: float) -> None:
        """
        Apply the PSO velocity update.

        ``velocity = inertia * velocity + cognitive_coeff * (local_best - position)
        + social_coeff * (global_best - position)``

        Parameters
        ----------
        cognitive_coeff : float
            Scale of the pull towards the particle's own best position, usually a configured coefficient times a
            uniform random number.
        social_coeff : float
            Scale of the pull towards the swarm-wide best position.
        """
        new_velocity = (
            self.inertia * self.velocity
            + cognitive_coeff * (self.local_best_position - self.position)
            + social_coeff * (self.global_best_position - self.position)
        )
        if self.velocity_cap is not None:
            new_velocity = new_velocity.clip(-self.velocity_cap, self.velocity_cap)
        self.velocity = new_velocity

    def draw_coefficients(self, c_cognitive: float, c_social: float) -> Tuple[float, float]:
        """Scale both configured coefficients with fresh, independent draws from [0, 1)."""
        return self.rng.random() * c_cognitive, self.rng.random() * c_social

    def set_local_best_position(self) -> None:
        """Remember the current position as the particle's own best one."""
        self.local_best_position = self.position.copy()

    def update_local_best(self, merit: float) -> bool:
        """
        Record ``merit`` of the current position if it beats the particle's own best.

        Parameters
        ----------
        merit : float
            The merit of the current position.

        Returns
        -------
        bool
            True if the local best was improved.
        """
        if merit < self.local_best_merit:
            self.local_best_merit = merit
            self.set_local_best_position()
            return True
        return False

    def refresh_global_best(self, position: Sequence[float]) -> None:
        """Overwrite the particle's snapshot of the swarm-wide best position with a copy of ``position``."""
        self.global_best_position = np.array(position, dtype=float)

    @property
    def num_dimensions(self) -> int:
        return self.position.shape[0]

    def __repr__(self) -> str:
        return (
            f"Particle(position={self.position}, velocity={self.velocity}, "
            f"local_best_merit={self.local_best_merit})"
        )
