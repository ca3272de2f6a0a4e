import logging
import random
import threading
from typing import Dict, List, Type

import deepdiff
import numpy as np
import pytest

from paraswarm import (
    MeritWithin,
    MultiThreadedSwarm,
    NeverStop,
    SearchSpace,
    SingleThreadedSwarm,
    SwarmConfig,
    SwarmRunError,
    SwarmState,
    Termination,
    get_optimizer,
    run,
    set_logger_config,
)
from paraswarm.swarm import SwarmOptimizer
from paraswarm.utils.benchmark_functions import parabola, sphere

log = logging.getLogger("paraswarm")  # Get logger instance.


class CountingMerit:
    """Sphere merit function counting its evaluations."""

    def __init__(self, fail_after: int = -1, error: Type[BaseException] = ArithmeticError) -> None:
        self.calls = 0
        self.fail_after = fail_after
        self.error = error
        self.lock = threading.Lock()

    def __call__(self, position: np.ndarray) -> float:
        with self.lock:
            self.calls += 1
            if self.calls == self.fail_after:
                raise self.error("merit evaluation failed")
        return sphere(position)


class StopOnce(Termination):
    """Fire on the very first evaluation only."""

    def __init__(self) -> None:
        self.fired = False
        self.lock = threading.Lock()

    def should_stop(self, merit: float) -> bool:
        with self.lock:
            if self.fired:
                return False
            self.fired = True
            return True


class RecordingTermination(Termination):
    """Never stop, but record the observed best merits per thread."""

    def __init__(self) -> None:
        self.observed: Dict[int, List[float]] = {}
        self.lock = threading.Lock()

    def should_stop(self, merit: float) -> bool:
        with self.lock:
            self.observed.setdefault(threading.get_ident(), []).append(merit)
        return False


@pytest.fixture(params=[SingleThreadedSwarm, MultiThreadedSwarm])
def swarm_class(request: pytest.FixtureRequest) -> Type[SwarmOptimizer]:
    """Iterate over the single- and the multi-threaded swarm."""
    return request.param


def test_parabola(swarm_class: Type[SwarmOptimizer]) -> None:
    """Test that both swarms find the minimum of 1 + x^2 on [-1, 1]."""
    set_logger_config()
    config = SwarmConfig(
        num_iterations=100,
        num_particles=10,
        num_dimensions=1,
        search_space=SearchSpace([-1.0], [1.0]),
        merit=parabola,
        termination=MeritWithin(0.9, 1.1),
        num_threads=2,
    )
    optimizer = swarm_class(config, random.Random(42))
    best = optimizer.optimize()
    assert 0.9 < best.best_merit < 1.1
    assert optimizer.state is SwarmState.CONVERGED
    log.handlers.clear()


@pytest.mark.slow
def test_sphere_multi_threaded() -> None:
    """Test the multi-threaded swarm on the three-dimensional sphere function."""
    config = SwarmConfig(
        num_iterations=3000,
        num_particles=100,
        num_dimensions=3,
        search_space=SearchSpace([-1.0] * 3, [1.0] * 3),
        merit=sphere,
        termination=MeritWithin(-0.1, 0.1),
        num_threads=5,
    )
    best = MultiThreadedSwarm(config, random.Random(0)).optimize(logging_interval=500)
    assert -0.1 < best.best_merit < 0.1
    assert best.best_position.shape == (3,)


def test_no_lost_updates(swarm_class: Type[SwarmOptimizer]) -> None:
    """Test that the swarm optimum is at least as good as every particle's own best and matches its position."""
    config = SwarmConfig(
        num_iterations=50,
        num_particles=20,
        num_dimensions=2,
        search_space=SearchSpace([-5.12, -5.12], [5.12, 5.12]),
        merit=sphere,
        num_threads=4,
    )
    optimizer = swarm_class(config, random.Random(1))
    best = optimizer.optimize()
    assert optimizer.state is SwarmState.EXHAUSTED
    for particle in optimizer.swarm:
        assert best.best_merit <= particle.local_best_merit
        assert particle.position.shape == particle.velocity.shape == (2,)
    assert best.best_merit == sphere(best.best_position)
    assert best.best_merit == min(p.local_best_merit for p in optimizer.swarm)


def test_monotone_optimum() -> None:
    """Test that every worker observes a non-increasing swarm-wide best merit."""
    termination = RecordingTermination()
    config = SwarmConfig(
        num_iterations=100,
        num_particles=16,
        num_dimensions=2,
        search_space=SearchSpace([-5.12, -5.12], [5.12, 5.12]),
        merit=sphere,
        termination=termination,
        num_threads=4,
    )
    MultiThreadedSwarm(config, random.Random(2)).optimize()
    assert sum(len(m) for m in termination.observed.values()) == 16 * 100
    for merits in termination.observed.values():
        assert all(a >= b for a, b in zip(merits, merits[1:]))


def test_iteration_budget() -> None:
    """Test that the single-threaded swarm evaluates each particle once per iteration after initialization."""
    merit = CountingMerit()
    config = SwarmConfig(7, 5, 2, SearchSpace([-1.0, -1.0], [1.0, 1.0]), merit, termination=NeverStop())
    SingleThreadedSwarm(config, random.Random(3)).optimize()
    assert merit.calls == 5 + 5 * 7


@pytest.mark.parametrize("broadcast_stop, expected_extra_calls", [(True, 1), (False, 1 + 4 * 10)])
def test_stop_policy(broadcast_stop: bool, expected_extra_calls: int) -> None:
    """Test that a firing termination stops all jobs or only the detecting one."""
    merit = CountingMerit()
    config = SwarmConfig(
        num_iterations=10,
        num_particles=5,
        num_dimensions=2,
        search_space=SearchSpace([-1.0, -1.0], [1.0, 1.0]),
        merit=merit,
        termination=StopOnce(),
        num_threads=1,  # One worker runs the jobs one after another.
        broadcast_stop=broadcast_stop,
    )
    optimizer = MultiThreadedSwarm(config, random.Random(4))
    optimizer.optimize()
    assert merit.calls == 5 + expected_extra_calls
    assert optimizer.state is SwarmState.CONVERGED


def test_single_threaded_stops_whole_run() -> None:
    """Test that the single-threaded swarm returns right after the termination criterion is met."""
    merit = CountingMerit()
    config = SwarmConfig(10, 5, 2, SearchSpace([-1.0, -1.0], [1.0, 1.0]), merit, termination=StopOnce())
    optimizer = SingleThreadedSwarm(config, random.Random(5))
    optimizer.optimize()
    assert merit.calls == 5 + 1
    assert optimizer.state is SwarmState.CONVERGED


def test_failing_merit_multi_threaded() -> None:
    """Test that an exception inside a job fails the whole run."""
    config = SwarmConfig(
        num_iterations=20,
        num_particles=8,
        num_dimensions=2,
        search_space=SearchSpace([-1.0, -1.0], [1.0, 1.0]),
        merit=CountingMerit(fail_after=8 + 10),
        num_threads=3,
    )
    optimizer = MultiThreadedSwarm(config, random.Random(6))
    with pytest.raises(SwarmRunError) as excinfo:
        optimizer.optimize()
    assert isinstance(excinfo.value.__cause__, ArithmeticError)
    assert optimizer.state is SwarmState.ITERATING


def test_system_exit_in_merit_multi_threaded() -> None:
    """Test that a merit function raising ``SystemExit`` inside a job fails the run instead of returning a result."""
    merit = CountingMerit(fail_after=4 + 3, error=SystemExit)
    config = SwarmConfig(20, 4, 2, SearchSpace([-1.0, -1.0], [1.0, 1.0]), merit, num_threads=2)
    optimizer = MultiThreadedSwarm(config, random.Random(6))
    with pytest.raises(SwarmRunError) as excinfo:
        optimizer.optimize()
    assert isinstance(excinfo.value.__cause__, SystemExit)
    assert optimizer.state is SwarmState.ITERATING
    assert merit.calls < 4 + 4 * 20


def test_failing_merit_single_threaded() -> None:
    """Test that exceptions of the merit function propagate unchanged."""
    config = SwarmConfig(
        20, 8, 2, SearchSpace([-1.0, -1.0], [1.0, 1.0]), CountingMerit(fail_after=8 + 10)
    )
    with pytest.raises(ArithmeticError):
        SingleThreadedSwarm(config, random.Random(6)).optimize()


def test_reproducible_single_threaded() -> None:
    """Test that equally seeded single-threaded runs yield identical results."""
    config = SwarmConfig(30, 10, 3, SearchSpace([-5.12] * 3, [5.12] * 3), sphere)
    results = []
    for _ in range(2):
        best = SingleThreadedSwarm(config, random.Random(7)).optimize()
        results.append({"position": best.best_position.tolist(), "merit": best.best_merit})
    assert len(deepdiff.DeepDiff(results[0], results[1])) == 0


def test_get_optimizer() -> None:
    """Test the choice of optimizer from the configured number of threads."""
    space = SearchSpace([-1.0], [1.0])
    assert isinstance(get_optimizer(SwarmConfig(5, 3, 1, space, sphere)), SingleThreadedSwarm)
    assert isinstance(get_optimizer(SwarmConfig(5, 3, 1, space, sphere, num_threads=1)), SingleThreadedSwarm)
    assert isinstance(get_optimizer(SwarmConfig(5, 3, 1, space, sphere, num_threads=2)), MultiThreadedSwarm)

    best = run(SwarmConfig(50, 10, 1, space, parabola, num_threads=2), random.Random(8))
    assert 1.0 <= best.best_merit < 2.0
