"""
This file contains the SearchSpace class, the box-shaped domain particles are initialized in.
"""
from typing import Mapping, Optional, Sequence, Tuple

import numpy as np


class SearchSpace:
    """
    Immutable per-dimension lower and upper bounds of a continuous search domain.

    The search space is only used to sample initial particle positions and velocities. Particles are not confined to
    it once they start moving.

    Attributes
    ----------
    lower : numpy.ndarray
        The (read-only) lower bound of each dimension.
    upper : numpy.ndarray
        The (read-only) upper bound of each dimension.
    names : Tuple[str, ...]
        The names of the dimensions. Defaults to the dimension indices as strings.
    """

    def __init__(self, lower: Sequence[float], upper: Sequence[float], names: Optional[Sequence[str]] = None) -> None:
        """
        Initialize a search space from two equally long sequences of bounds.

        Parameters
        ----------
        lower : Sequence[float]
            The lower bound of each dimension.
        upper : Sequence[float]
            The upper bound of each dimension.
        names : Sequence[str], optional
            The names of the dimensions.

        Raises
        ------
        ValueError
            If the bounds are empty, differ in length or any lower bound exceeds its upper bound.
        """
        lower_arr = np.array(lower, dtype=float).reshape(-1)
        upper_arr = np.array(upper, dtype=float).reshape(-1)
        if lower_arr.shape != upper_arr.shape:
            raise ValueError(f"Bounds differ in length: {lower_arr.shape[0]} lower vs. {upper_arr.shape[0]} upper.")
        if lower_arr.shape[0] == 0:
            raise ValueError("Search space needs at least one dimension.")
        if np.any(lower_arr > upper_arr):
            bad = np.flatnonzero(lower_arr > upper_arr).tolist()
            raise ValueError(f"Lower bound exceeds upper bound in dimension(s) {bad}.")
        if names is None:
            names = [str(i) for i in range(lower_arr.shape[0])]
        if len(names) != lower_arr.shape[0]:
            raise ValueError(f"Got {len(names)} names for {lower_arr.shape[0]} dimensions.")

        lower_arr.setflags(write=False)
        upper_arr.setflags(write=False)
        self.lower = lower_arr
        self.upper = upper_arr
        self.names: Tuple[str, ...] = tuple(names)

    @classmethod
    def from_limits(cls, limits: Mapping[str, Tuple[float, float]]) -> "SearchSpace":
        """
        Build a search space from an ordered mapping of dimension names to ``(lower, upper)`` tuples.

        Parameters
        ----------
        limits : Mapping[str, Tuple[float, float]]
            The named limits, e.g., ``{"a": (-5.12, 5.12), "b": (-5.12, 5.12)}``.

        Returns
        -------
        SearchSpace
            The corresponding search space.
        """
        # Since Py 3.7, iterating over dicts is stable, so the dimension order is the insertion order.
        bounds = np.array([limits[k] for k in limits], dtype=float).reshape(-1, 2)
        return cls(bounds[:, 0], bounds[:, 1], names=list(limits))

    @property
    def span(self) -> np.ndarray:
        """Absolute width ``|upper - lower|`` of each dimension."""
        return np.abs(self.upper - self.lower)

    def contains(self, position: Sequence[float]) -> bool:
        """Check whether ``position`` lies inside the bounds (borders included)."""
        position = np.asarray(position, dtype=float)
        return bool(np.all(self.lower <= position) and np.all(position <= self.upper))

    def __len__(self) -> int:
        return self.lower.shape[0]

    def __getitem__(self, index: int) -> Tuple[float, float]:
        return float(self.lower[index]), float(self.upper[index])

    def __repr__(self) -> str:
        bounds = ", ".join(f"{n}: ({lo}, {hi})" for n, lo, hi in zip(self.names, self.lower, self.upper))
        return f"SearchSpace({bounds})"
