"""
This file contains the particle swarm optimizer running one long-lived job per particle on a worker pool.
"""
import logging
import random
import threading
from typing import Callable

from ..optimum import Solution
from ..population import Particle
from ..worker_pool import WorkerError, WorkerPool
from .base import SwarmOptimizer, SwarmRunError, SwarmState

log = logging.getLogger(__name__)  # Get logger instance.


class MultiThreadedSwarm(SwarmOptimizer):
    """
    Particle swarm optimizer iterating the particles concurrently.

    Initialization is sequential. Afterwards, one job per particle is submitted to a ``WorkerPool`` of
    ``config.num_threads`` threads. Each job owns its particle exclusively and runs the particle's complete iteration
    loop. Particles only communicate through the shared ``Optimum``: once per iteration, a job copies the swarm-wide
    best position into its particle and reports its particle's improvements back.

    When the termination predicate holds, the detecting job sets a shared stop flag that all jobs check at the top of
    each iteration (``config.broadcast_stop=True``), or just leaves its own loop (``config.broadcast_stop=False``).
    Either way, ``optimize`` only returns after every job has exited and all worker threads have been joined.

    Each particle draws from its own random number generator seeded from the optimizer's generator. The interleaving
    of jobs is up to the scheduler, so runs are not reproducible bit by bit.
    """

    def _particle_rng(self) -> random.Random:
        """Derive a separate, seeded generator for each particle."""
        return random.Random(self.rng.getrandbits(64))

    def _make_job(self, index: int, particle: Particle, stop: threading.Event, converged: threading.Event,
                  logging_interval: int) -> Callable[[], None]:
        """
        Build the iteration loop of one particle.

        Parameters
        ----------
        index : int
            The particle's index in the swarm, used for logging.
        particle : Particle
            The particle owned by the job.
        stop : threading.Event
            The stop flag shared by all jobs.
        converged : threading.Event
            Set once the termination predicate held for any job.
        logging_interval : int
            Log progress every ``logging_interval``-th iteration.

        Returns
        -------
        Callable[[], None]
            The job.
        """

        def job() -> None:
            try:
                for iteration in range(self.config.num_iterations):
                    if stop.is_set():
                        log.debug(f"Particle {index}: Stop flag set, leaving after {iteration} iteration(s).")
                        return
                    particle.refresh_global_best(self.optimum.snapshot().best_position)
                    self._iterate(particle)
                    best_merit = self.optimum.snapshot().best_merit
                    if index == 0 and iteration % int(logging_interval) == 0:
                        log.info(f"Particle {index}: In iteration {iteration}, best merit {best_merit}...")
                    if self.config.termination.should_stop(best_merit):
                        log.debug(f"Particle {index}: Termination criterion met in iteration {iteration}.")
                        converged.set()
                        if self.config.broadcast_stop:
                            stop.set()
                        return
            except BaseException:
                stop.set()  # The run has failed, let the other jobs exit early.
                raise

        return job

    def optimize(self, logging_interval: int = 100) -> Solution:
        """
        Iterate the swarm on a worker pool.

        Parameters
        ----------
        logging_interval : int, optional
            Log progress of the first particle every ``logging_interval``-th iteration. Default is 100.

        Returns
        -------
        Solution
            The final best position and merit.

        Raises
        ------
        SwarmRunError
            If any job raised an exception. No partial result is returned in that case.
        """
        num_threads = self.config.num_threads or 1
        self.state = SwarmState.ITERATING
        log.info(
            f"Running {self.config.num_iterations} iterations of {len(self.swarm)} particles "
            f"on {num_threads} worker thread(s)."
        )

        stop = threading.Event()
        converged = threading.Event()
        with WorkerPool(num_threads, name="particle-worker") as pool:
            for index, particle in enumerate(self.swarm):
                pool.execute(self._make_job(index, particle, stop, converged, logging_interval))
        # Leaving the context has drained the queue and joined all workers.

        try:
            pool.raise_errors()
        except WorkerError as e:
            log.error(f"Optimization failed: {e}")
            raise SwarmRunError("At least one particle job failed, no valid optimum available.") from e.__cause__

        self.state = SwarmState.CONVERGED if converged.is_set() else SwarmState.EXHAUSTED
        return self.summarize()
