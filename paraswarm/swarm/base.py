"""
This file contains the SwarmOptimizer base class shared by the single- and multi-threaded swarms.
"""
import enum
import logging
import random
from typing import List, Optional

from ..config import SwarmConfig
from ..optimum import Optimum, Solution
from ..population import Particle

log = logging.getLogger(__name__)  # Get logger instance.


class SwarmRunError(RuntimeError):
    """An optimization run failed and has no valid result."""


class SwarmState(enum.Enum):
    """Life cycle of one optimization run."""

    INITIALIZING = "initializing"
    ITERATING = "iterating"
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"


class SwarmOptimizer:
    """
    Base class of particle swarm optimizers.

    On construction, the swarm is initialized: each particle is sampled uniformly from the search space and evaluated
    once, the initial merit becomes the particle's own best, and the best initial sample seeds the swarm-wide optimum. Subclasses implement the iteration phase in
    ``optimize``.

    Attributes
    ----------
    config : SwarmConfig
        The run settings.
    optimum : Optimum
        The swarm-wide best solution.
    rng : random.Random
        The random number generator of the optimizer.
    state : SwarmState
        The current state of the run.
    swarm : List[Particle]
        The particles.

    Methods
    -------
    optimize()
        Run the optimization and return the final optimum.
    summarize()
        Log and return the final optimum.
    """

    def __init__(self, config: SwarmConfig, rng: Optional[random.Random] = None) -> None:
        """
        Initialize the optimum and the swarm.

        Parameters
        ----------
        config : SwarmConfig
            The run settings.
        rng : random.Random, optional
            The random number generator. A fresh unseeded generator is used if not given.
        """
        if rng is None:
            rng = random.Random()
        self.config = config
        self.rng = rng
        self.state = SwarmState.INITIALIZING
        self.optimum = Optimum(config.num_dimensions)
        self.swarm: List[Particle] = self._initialize()

    def _particle_rng(self) -> random.Random:
        """Return the random number generator a newly created particle uses."""
        return self.rng

    def _initialize(self) -> List[Particle]:
        """Create, evaluate and register the particles one after another."""
        swarm = []
        for _ in range(self.config.num_particles):
            particle = Particle(
                self.config.num_dimensions,
                self.config.search_space,
                self.optimum.snapshot().best_position,
                inertia=self.config.inertia,
                rng=self._particle_rng(),
                velocity_limit=self.config.velocity_limit,
            )
            merit = self.config.merit.calculate(particle.position)
            particle.update_local_best(merit)
            self.optimum.try_improve(particle.position, merit)
            swarm.append(particle)
        log.info(
            f"Initialized swarm of {len(swarm)} particles in {self.config.num_dimensions} dimension(s), "
            f"best initial merit {self.optimum.snapshot().best_merit}."
        )
        return swarm

    def _iterate(self, particle: Particle) -> None:
        """
        Perform one iteration of a particle: move, accelerate, evaluate and report improvements.

        Parameters
        ----------
        particle : Particle
            The particle to iterate. Must be owned exclusively by the caller.
        """
        particle.update_position()
        cognitive_coeff, social_coeff = particle.draw_coefficients(self.config.cognitive, self.config.social)
        particle.update_velocity(cognitive_coeff, social_coeff)
        merit = self.config.merit.calculate(particle.position)
        if particle.update_local_best(merit):
            self.optimum.try_improve(particle.local_best_position, particle.local_best_merit)

    def optimize(self, logging_interval: int = 100) -> Solution:
        """
        Run the optimization (not implemented for abstract base class).

        Parameters
        ----------
        logging_interval : int, optional
            Log progress every ``logging_interval``-th iteration. Default is 100.

        Returns
        -------
        Solution
            The final best position and merit.

        Raises
        ------
        NotImplementedError
            Whenever called (abstract base class method).
        """
        raise NotImplementedError()

    def summarize(self) -> Solution:
        """
        Log the result of the optimization.

        Returns
        -------
        Solution
            The final best position and merit.
        """
        best = self.optimum.snapshot()
        log.info(
            "###########\n# SUMMARY #\n###########\n"
            f"Run {self.state.value} after {self.optimum.improvements} improvement(s) of the swarm optimum.\n"
            f"Best merit: {best.best_merit}\n"
            f"Best position: {best.best_position}"
        )
        return best
