"""
This package contains the particle swarm optimizers, i.e., the iteration phase of a run.
"""
__all__ = [
    "SwarmOptimizer",
    "SwarmRunError",
    "SwarmState",
    "SingleThreadedSwarm",
    "MultiThreadedSwarm",
]

from .base import SwarmOptimizer, SwarmRunError, SwarmState
from .multi_threaded import MultiThreadedSwarm
from .single_threaded import SingleThreadedSwarm
