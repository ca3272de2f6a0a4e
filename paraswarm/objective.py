"""
This file contains the interfaces of the caller-supplied merit function and termination predicate.

Both are evaluated concurrently from several worker threads by the multi-threaded swarm, so implementations have to
be side-effect free or synchronize internally.
"""
from typing import Callable, Union

import numpy as np


class MeritFunction:
    """
    Abstract base class of merit (objective) functions. Lower merit is better.

    Methods
    -------
    calculate()
        Evaluate the merit at a position.
    """

    def calculate(self, position: np.ndarray) -> float:
        """
        Evaluate the merit at a position (not implemented for abstract base class).

        Parameters
        ----------
        position : numpy.ndarray
            The position to evaluate.

        Returns
        -------
        float
            The merit.

        Raises
        ------
        NotImplementedError
            Whenever called (abstract base class method).
        """
        raise NotImplementedError()

    def __call__(self, position: np.ndarray) -> float:
        return self.calculate(position)


class FunctionMerit(MeritFunction):
    """Wrap a plain callable ``f(position) -> float`` as a merit function."""

    def __init__(self, function: Callable[[np.ndarray], float]) -> None:
        self.function = function

    def calculate(self, position: np.ndarray) -> float:
        return float(self.function(position))

    def __repr__(self) -> str:
        return f"FunctionMerit({getattr(self.function, '__name__', self.function)!r})"


class Termination:
    """
    Abstract base class of termination predicates.

    A termination predicate is evaluated against the swarm-wide best merit, not against the merit of a single
    particle.
    """

    def should_stop(self, merit: float) -> bool:
        """
        Decide whether the optimization may stop (not implemented for abstract base class).

        Parameters
        ----------
        merit : float
            The current swarm-wide best merit.

        Returns
        -------
        bool
            True to stop.

        Raises
        ------
        NotImplementedError
            Whenever called (abstract base class method).
        """
        raise NotImplementedError()

    def __call__(self, merit: float) -> bool:
        return self.should_stop(merit)


class FunctionTermination(Termination):
    """Wrap a plain callable ``g(merit) -> bool`` as a termination predicate."""

    def __init__(self, function: Callable[[float], bool]) -> None:
        self.function = function

    def should_stop(self, merit: float) -> bool:
        return bool(self.function(merit))


class NeverStop(Termination):
    """Run the full iteration budget."""

    def should_stop(self, merit: float) -> bool:
        return False

    def __repr__(self) -> str:
        return "NeverStop()"


class MeritBelow(Termination):
    """Stop once the best merit drops below a threshold."""

    def __init__(self, threshold: float) -> None:
        self.threshold = threshold

    def should_stop(self, merit: float) -> bool:
        return merit < self.threshold

    def __repr__(self) -> str:
        return f"MeritBelow({self.threshold})"


class MeritWithin(Termination):
    """Stop once the best merit lies strictly between ``lower`` and ``upper``."""

    def __init__(self, lower: float, upper: float) -> None:
        if lower >= upper:
            raise ValueError(f"Empty merit interval ({lower}, {upper}).")
        self.lower = lower
        self.upper = upper

    def should_stop(self, merit: float) -> bool:
        return self.lower < merit < self.upper

    def __repr__(self) -> str:
        return f"MeritWithin({self.lower}, {self.upper})"


def as_merit(merit: Union[MeritFunction, Callable[[np.ndarray], float]]) -> MeritFunction:
    """
    Turn ``merit`` into a ``MeritFunction``.

    Raises
    ------
    TypeError
        If ``merit`` is not callable.
    """
    if isinstance(merit, MeritFunction):
        return merit
    if not callable(merit):
        raise TypeError(f"Merit function must be callable, got {type(merit).__name__}.")
    return FunctionMerit(merit)


def as_termination(termination: Union[Termination, Callable[[float], bool], None]) -> Termination:
    """
    Turn ``termination`` into a ``Termination``. ``None`` means never stop early.

    Raises
    ------
    TypeError
        If ``termination`` is neither None nor callable.
    """
    if termination is None:
        return NeverStop()
    if isinstance(termination, Termination):
        return termination
    if not callable(termination):
        raise TypeError(f"Termination must be callable, got {type(termination).__name__}.")
    return FunctionTermination(termination)
