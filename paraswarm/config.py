"""
This file contains the SwarmConfig class bundling all settings of one optimization run.
"""
from typing import Callable, Optional, Union

import numpy as np

from .objective import MeritFunction, Termination, as_merit, as_termination
from .search_space import SearchSpace


class SwarmConfig:
    """
    Settings of one particle swarm optimization run.

    All caller contract violations are detected here, at construction time, instead of somewhere deep inside the
    optimization loop.

    Attributes
    ----------
    num_iterations : int
        The maximum number of iterations of each particle.
    num_particles : int
        The swarm size.
    num_dimensions : int
        The dimensionality of the problem.
    search_space : SearchSpace
        The domain particles are initialized in.
    merit : MeritFunction
        The function to minimize.
    termination : Termination
        The early stopping predicate.
    num_threads : int, optional
        The number of worker threads of the multi-threaded swarm.
    inertia : float
        The particle inertia weight.
    cognitive : float
        The cognitive coefficient.
    social : float
        The social coefficient.
    velocity_limit : float, optional
        The velocity clamping factor relative to the search-space width.
    broadcast_stop : bool
        Whether the termination predicate firing in one job stops all jobs of the multi-threaded swarm.
    """

    def __init__(
        self,
        num_iterations: int,
        num_particles: int,
        num_dimensions: int,
        search_space: SearchSpace,
        merit: Union[MeritFunction, Callable[[np.ndarray], float]],
        termination: Union[Termination, Callable[[float], bool], None] = None,
        num_threads: Optional[int] = None,
        inertia: float = 0.729,
        cognitive: float = 1.49445,
        social: float = 1.49445,
        velocity_limit: Optional[float] = None,
        broadcast_stop: bool = True,
    ) -> None:
        """
        Initialize and validate a configuration.

        Parameters
        ----------
        num_iterations : int
            The maximum number of iterations of each particle.
        num_particles : int
            The swarm size.
        num_dimensions : int
            The dimensionality of the problem.
        search_space : SearchSpace
            The domain particles are initialized in. Must have ``num_dimensions`` dimensions.
        merit : MeritFunction | Callable[[numpy.ndarray], float]
            The function to minimize. Plain callables are wrapped.
        termination : Termination | Callable[[float], bool], optional
            The early stopping predicate, evaluated against the swarm-wide best merit. Default is to never stop early.
        num_threads : int, optional
            The number of worker threads of the multi-threaded swarm. Ignored by the single-threaded swarm.
        inertia : float, optional
            The particle inertia weight in [0, 1]. Default is 0.729.
        cognitive : float, optional
            The cognitive coefficient. Default is 1.49445.
        social : float, optional
            The social coefficient. Default is 1.49445.
        velocity_limit : float, optional
            If given, velocities are clamped to this fraction (0, 1] of each dimension's width.
        broadcast_stop : bool, optional
            If True, the first job observing the termination predicate stops all jobs of the multi-threaded swarm,
            otherwise only itself. Default is True.

        Raises
        ------
        ValueError
            If any of the numeric settings is out of range or the search space does not match ``num_dimensions``.
        TypeError
            If ``merit`` or ``termination`` is not callable.
        """
        if num_iterations < 1:
            raise ValueError(f"Number of iterations must be positive, got {num_iterations}.")
        if num_particles < 1:
            raise ValueError(f"Number of particles must be positive, got {num_particles}.")
        if num_dimensions < 1:
            raise ValueError(f"Number of dimensions must be positive, got {num_dimensions}.")
        if len(search_space) != num_dimensions:
            raise ValueError(
                f"Search space has {len(search_space)} dimensions, but {num_dimensions} dimensions were configured."
            )
        if num_threads is not None and num_threads < 1:
            raise ValueError(f"Number of threads must be positive, got {num_threads}.")
        if not 0.0 <= inertia <= 1.0:
            raise ValueError(f"Inertia weight must be in [0, 1], got {inertia}.")
        if cognitive < 0.0 or social < 0.0:
            raise ValueError(f"Coefficients must be non-negative, got cognitive={cognitive}, social={social}.")
        if velocity_limit is not None and not 0.0 < velocity_limit <= 1.0:
            raise ValueError(f"Velocity limit must be in (0, 1], got {velocity_limit}.")

        self.num_iterations = num_iterations
        self.num_particles = num_particles
        self.num_dimensions = num_dimensions
        self.search_space = search_space
        self.merit = as_merit(merit)
        self.termination = as_termination(termination)
        self.num_threads = num_threads
        self.inertia = inertia
        self.cognitive = cognitive
        self.social = social
        self.velocity_limit = velocity_limit
        self.broadcast_stop = broadcast_stop

    def __repr__(self) -> str:
        return (
            f"SwarmConfig(num_iterations={self.num_iterations}, num_particles={self.num_particles}, "
            f"num_dimensions={self.num_dimensions}, num_threads={self.num_threads}, inertia={self.inertia}, "
            f"cognitive={self.cognitive}, social={self.social}, velocity_limit={self.velocity_limit}, "
            f"broadcast_stop={self.broadcast_stop}, merit={self.merit!r}, termination={self.termination!r})"
        )
