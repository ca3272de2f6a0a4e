"""
This file contains the sequential particle swarm optimizer.
"""
import logging

from ..optimum import Solution
from .base import SwarmOptimizer, SwarmState

log = logging.getLogger(__name__)  # Get logger instance.


class SingleThreadedSwarm(SwarmOptimizer):
    """
    Particle swarm optimizer iterating all particles on the calling thread.

    This is the reference implementation of the iteration phase and the faster choice for cheap merit functions and
    small swarms. Seeded with the same random number generator state, two runs yield identical results.

    Particles see improvements of the swarm optimum made by other particles within the same iteration, since each
    particle refreshes its global-best snapshot right before it moves. The run stops as soon as the termination
    predicate holds for the swarm-wide best merit.
    """

    def optimize(self, logging_interval: int = 100) -> Solution:
        """
        Iterate the swarm sequentially.

        Parameters
        ----------
        logging_interval : int, optional
            Log progress every ``logging_interval``-th iteration. Default is 100.

        Returns
        -------
        Solution
            The final best position and merit.
        """
        self.state = SwarmState.ITERATING
        log.info(f"Running {self.config.num_iterations} iterations of {len(self.swarm)} particles on one thread.")

        for iteration in range(self.config.num_iterations):
            if iteration % int(logging_interval) == 0:
                log.info(f"In iteration {iteration}, best merit {self.optimum.snapshot().best_merit}...")
            for particle in self.swarm:
                particle.refresh_global_best(self.optimum.snapshot().best_position)
                self._iterate(particle)
                if self.config.termination.should_stop(self.optimum.snapshot().best_merit):
                    log.info(f"Termination criterion met in iteration {iteration}.")
                    self.state = SwarmState.CONVERGED
                    return self.summarize()

        self.state = SwarmState.EXHAUSTED
        return self.summarize()
