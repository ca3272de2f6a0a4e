"""Benchmark merit function module."""
from typing import Callable, Dict, Tuple

import numpy as np

from ..search_space import SearchSpace


def sphere(position: np.ndarray) -> float:
    """
    Sphere function: continuous, convex, separable, differentiable, unimodal.

    Input domain: -5.12 <= x_i <= 5.12, i = 1,...,N
    Global minimum 0 at (x_i)_N = (0)_N

    Parameters
    ----------
    position : numpy.ndarray
        The position to evaluate.

    Returns
    -------
    float
        The function value.
    """
    x = np.asarray(position, dtype=float)
    return np.sum(x**2).item()


def parabola(position: np.ndarray) -> float:
    """
    Shifted sphere ``1 + sum(x_i^2)``.

    Input domain: -1 <= x_i <= 1, i = 1,...,N
    Global minimum 1 at (x_i)_N = (0)_N
    """
    return 1.0 + sphere(position)


def rosenbrock(position: np.ndarray) -> float:
    """
    Rosenbrock function. This function has a narrow minimum inside a parabola-shaped valley.

    Input domain: -2.048 <= x_i <= 2.048, i = 1,...,N
    Global minimum 0 at (x_i)_N = (1)_N

    Parameters
    ----------
    position : numpy.ndarray
        The position to evaluate.

    Returns
    -------
    float
        The function value.
    """
    x = np.asarray(position, dtype=float)
    return np.sum(100 * (x[1:] - x[:-1] ** 2) ** 2 + (1 - x[:-1]) ** 2).item()


def step(position: np.ndarray) -> float:
    """
    Step function.

    This function represents the problem of flat surfaces. Plateaus pose obstacles to optimizers as they lack
    information about which direction is favorable.

    Input domain: -5.12 <= x_i <= 5.12, i = 1,...,N
    Global minimum -5N at (x_i)_N <= (-5)_N
    """
    x = np.asarray(position, dtype=float)
    return np.sum(x.astype(int), dtype=float).item()


def quartic(position: np.ndarray) -> float:
    """
    Quartic function without the usual Gaussian noise, so that it is deterministic and safe to evaluate concurrently.

    Input domain: -1.28 <= x_i <= 1.28, i = 1,...,N
    Global minimum 0 at (x_i)_N = (0)_N
    """
    x = np.asarray(position, dtype=float)
    idx = np.arange(1, len(x) + 1)
    return np.sum(idx * x**4).item()


def rastrigin(position: np.ndarray) -> float:
    """
    Rastrigin function: continuous, non-convex, separable, differentiable, multimodal.

    A non-linear and highly multimodal function. Its surface is determined by two external variables, controlling
    the modulation's amplitude and frequency. The local minima are located at a rectangular grid with size 1.
    Their functional values increase with the distance to the global minimum.

    Input domain: -5.12 <= x_i <= 5.12, i = 1,...,N
    Global minimum 0 at (x_i)_N = (0)_N

    Parameters
    ----------
    position : numpy.ndarray
        The position to evaluate.

    Returns
    -------
    float
        The function value.
    """
    a = 10.0
    x = np.asarray(position, dtype=float)
    return (a * len(x) + np.sum(x**2 - a * np.cos(2 * np.pi * x))).item()


def griewank(position: np.ndarray) -> float:
    """
    Griewank function.

    Its local optima lie above parabola level but decrease with increasing dimensions, i.e., the larger the search
    range, the flatter the function.

    Input domain: -600 <= x_i <= 600, i = 1,...,N
    Global minimum 0 at (x_i)_N = (0)_N
    """
    x = np.asarray(position, dtype=float)
    idx = np.arange(1, len(x) + 1)
    return (1 + 1.0 / 4000 * np.sum(x**2) - np.prod(np.cos(x / np.sqrt(idx)))).item()


def schwefel(position: np.ndarray) -> float:
    """
    Schwefel function. This function has a second-best minimum far away from the global optimum.

    Input domain: -500 <= x_i <= 500, i = 1,...,N
    Global minimum 0 at (x_i)_N = (420.968746)_N
    """
    v = 418.982887
    x = np.asarray(position, dtype=float)
    return (v * len(x) - np.sum(x * np.sin(np.sqrt(np.abs(x))))).item()


def himmelblau(position: np.ndarray) -> float:
    """
    Himmelblau function: continuous, non-convex, non-separable, differentiable, multimodal.

    Input domain: -6 <= x, y <= 6
    Global minimum 0 at (x, y) = (3, 2)
    """
    x = np.asarray(position, dtype=float)
    return ((x[0] ** 2 + x[1] - 11) ** 2 + (x[0] + x[1] ** 2 - 7) ** 2).item()


# Function, bound per dimension, number of dimensions
_FUNCTIONS: Dict[str, Tuple[Callable[[np.ndarray], float], float, int]] = {
    "sphere": (sphere, 5.12, 2),
    "parabola": (parabola, 1.0, 1),
    "rosenbrock": (rosenbrock, 2.048, 2),
    "step": (step, 5.12, 5),
    "quartic": (quartic, 1.28, 30),
    "rastrigin": (rastrigin, 5.12, 20),
    "griewank": (griewank, 600.0, 10),
    "schwefel": (schwefel, 500.0, 10),
    "himmelblau": (himmelblau, 6.0, 2),
}


def get_function_search_space(fname: str) -> Tuple[Callable[[np.ndarray], float], SearchSpace]:
    """
    Get function and search space from function name.

    Parameters
    ----------
    fname : str
        The function name.

    Returns
    -------
    Callable
        The function.
    SearchSpace
        The search space of the function.

    Raises
    ------
    ValueError
        If the function name is unknown.
    """
    if fname not in _FUNCTIONS:
        raise ValueError(f"Function {fname} undefined, choose one of {sorted(_FUNCTIONS)}.")
    function, bound, dims = _FUNCTIONS[fname]
    names = [chr(ord("a") + i) if i < 26 else f"x{i}" for i in range(dims)]
    return function, SearchSpace([-bound] * dims, [bound] * dims, names=names)


def function_names() -> Tuple[str, ...]:
    """Names understood by ``get_function_search_space``."""
    return tuple(_FUNCTIONS)
