from importlib.metadata import PackageNotFoundError, version

try:
    # Change here if project is renamed and does not equal the package name
    __version__ = version(__name__)
except PackageNotFoundError:
    __version__ = "unknown"
finally:
    del version, PackageNotFoundError

from .config import SwarmConfig
from .objective import MeritBelow, MeritFunction, MeritWithin, NeverStop, Termination
from .optimum import Optimum, Solution
from .population import Particle
from .search_space import SearchSpace
from .swarm import MultiThreadedSwarm, SingleThreadedSwarm, SwarmRunError, SwarmState
from .utils import get_optimizer, run, set_logger_config
from .worker_pool import WorkerError, WorkerPool

__all__ = [
    "MeritBelow",
    "MeritFunction",
    "MeritWithin",
    "MultiThreadedSwarm",
    "NeverStop",
    "Optimum",
    "Particle",
    "SearchSpace",
    "SingleThreadedSwarm",
    "Solution",
    "SwarmConfig",
    "SwarmRunError",
    "SwarmState",
    "Termination",
    "WorkerError",
    "WorkerPool",
    "get_optimizer",
    "run",
    "set_logger_config",
]
