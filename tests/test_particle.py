import math
import random

import numpy as np
import pytest

from paraswarm import Particle, SearchSpace


@pytest.fixture(
    params=[
        SearchSpace([-1.0], [1.0]),
        SearchSpace([-5.12, -5.12, -5.12], [5.12, 5.12, 5.12]),
        SearchSpace([0.0, -600.0, 2.0], [10.0, 600.0, 2.0]),  # Includes a degenerate dimension.
    ]
)
def search_space(request: pytest.FixtureRequest) -> SearchSpace:
    """Iterate over search spaces of different shape."""
    return request.param


def test_particle_initialization(search_space: SearchSpace) -> None:
    """Test that positions and velocities are sampled within their bounds and have matching shapes."""
    rng = random.Random(42)
    dims = len(search_space)
    for _ in range(50):
        particle = Particle(dims, search_space, np.zeros(dims), rng=rng)
        assert particle.position.shape == particle.velocity.shape == (dims,)
        assert search_space.contains(particle.position)
        assert np.all(np.abs(particle.velocity) <= search_space.span)
        assert particle.local_best_merit == math.inf
        assert np.array_equal(particle.local_best_position, particle.position)
        assert particle.local_best_position is not particle.position


def test_particle_seeded_construction(search_space: SearchSpace) -> None:
    """Test that two particles built from equally seeded generators coincide."""
    dims = len(search_space)
    first = Particle(dims, search_space, np.zeros(dims), rng=random.Random(3))
    second = Particle(dims, search_space, np.zeros(dims), rng=random.Random(3))
    assert np.array_equal(first.position, second.position)
    assert np.array_equal(first.velocity, second.velocity)


def test_global_best_is_copied() -> None:
    """Test that the particle's global-best snapshot is not an alias of the passed position."""
    space = SearchSpace([-1.0, -1.0], [1.0, 1.0])
    global_best = np.array([0.5, 0.5])
    particle = Particle(2, space, global_best, rng=random.Random(0))
    global_best[0] = 100.0
    assert particle.global_best_position[0] == 0.5

    new_best = np.array([0.1, 0.2])
    particle.refresh_global_best(new_best)
    new_best[1] = -7.0
    assert np.array_equal(particle.global_best_position, [0.1, 0.2])


@pytest.mark.parametrize(
    "num_dimensions, global_best",
    [
        (3, [0.0, 0.0]),  # Search space has two dimensions.
        (2, [0.0, 0.0, 0.0]),  # Global best has three.
        (2, [[0.0, 0.0]]),
    ],
)
def test_mismatched_dimensions(num_dimensions: int, global_best: list) -> None:
    """Test that a particle whose dimensions disagree with its search space or global best is rejected."""
    space = SearchSpace([-1.0, -1.0], [1.0, 1.0])
    with pytest.raises(ValueError):
        Particle(num_dimensions, space, global_best, rng=random.Random(0))


def test_update_position() -> None:
    """Test that a position update adds the velocity without clamping to the search space."""
    space = SearchSpace([-1.0, -1.0], [1.0, 1.0])
    particle = Particle(2, space, np.zeros(2), rng=random.Random(0))
    particle.position = np.array([0.9, -0.5])
    particle.velocity = np.array([0.5, 0.25])
    particle.update_position()
    assert np.allclose(particle.position, [1.4, -0.25])
    assert not space.contains(particle.position)


def test_update_velocity() -> None:
    """Test the inertia-weighted velocity update rule."""
    space = SearchSpace([-10.0, -10.0], [10.0, 10.0])
    particle = Particle(2, space, np.array([4.0, -2.0]), inertia=0.5, rng=random.Random(0))
    particle.position = np.array([1.0, 1.0])
    particle.velocity = np.array([2.0, -2.0])
    particle.local_best_position = np.array([3.0, 0.0])

    particle.update_velocity(cognitive_coeff=0.25, social_coeff=0.1)

    expected = 0.5 * np.array([2.0, -2.0]) + 0.25 * np.array([2.0, -1.0]) + 0.1 * np.array([3.0, -3.0])
    assert np.allclose(particle.velocity, expected)
    assert particle.velocity.shape == particle.position.shape


def test_velocity_clamping() -> None:
    """Test that velocities are clipped to the given fraction of the search-space width."""
    space = SearchSpace([-1.0, 0.0], [1.0, 10.0])
    particle = Particle(2, space, np.array([100.0, -100.0]), inertia=1.0, rng=random.Random(0), velocity_limit=0.5)
    particle.position = np.zeros(2)
    particle.velocity = np.zeros(2)
    particle.local_best_position = np.zeros(2)

    particle.update_velocity(cognitive_coeff=1.0, social_coeff=1.0)

    assert np.allclose(particle.velocity, [1.0, -5.0])


def test_local_best_is_monotone() -> None:
    """Test that the local best merit never increases and the recorded position is a copy."""
    space = SearchSpace([-1.0], [1.0])
    particle = Particle(1, space, np.zeros(1), rng=random.Random(1))

    assert particle.update_local_best(3.0)
    recorded = particle.position.copy()
    particle.update_position()
    assert not particle.update_local_best(4.0)
    assert particle.local_best_merit == 3.0
    assert np.array_equal(particle.local_best_position, recorded)

    assert particle.update_local_best(2.0)
    assert particle.local_best_merit == 2.0
    assert np.array_equal(particle.local_best_position, particle.position)


def test_set_local_best_position() -> None:
    """Test that the local best position is decoupled from later moves."""
    space = SearchSpace([-1.0, -1.0], [1.0, 1.0])
    particle = Particle(2, space, np.zeros(2), rng=random.Random(5))
    particle.set_local_best_position()
    before = particle.local_best_position.copy()
    particle.update_position()
    assert np.array_equal(particle.local_best_position, before)


def test_draw_coefficients() -> None:
    """Test that the random scaling of the coefficients stays within [0, coefficient)."""
    space = SearchSpace([-1.0], [1.0])
    particle = Particle(1, space, np.zeros(1), rng=random.Random(11))
    for _ in range(100):
        cognitive, social = particle.draw_coefficients(2.0, 0.5)
        assert 0.0 <= cognitive < 2.0
        assert 0.0 <= social < 0.5
