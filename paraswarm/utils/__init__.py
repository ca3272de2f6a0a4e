import logging
import random
import sys
from pathlib import Path
from typing import Optional, Union

import colorlog

from ..config import SwarmConfig
from ..optimum import Solution
from ..swarm import MultiThreadedSwarm, SingleThreadedSwarm, SwarmOptimizer
from . import benchmark_functions

__all__ = [
    "benchmark_functions",
    "get_optimizer",
    "run",
    "set_logger_config",
]


def get_optimizer(config: SwarmConfig, rng: Optional[random.Random] = None) -> SwarmOptimizer:
    """
    Get the particle swarm optimizer matching the configuration.

    The multi-threaded swarm is used if more than one thread is configured, the single-threaded swarm otherwise.

    Parameters
    ----------
    config : SwarmConfig
        The run settings.
    rng : random.Random, optional
        The separate random number generator for the optimization.

    Returns
    -------
    SwarmOptimizer
        An initialized optimizer, ready to ``optimize``.
    """
    if config.num_threads is not None and config.num_threads > 1:
        return MultiThreadedSwarm(config, rng)
    return SingleThreadedSwarm(config, rng)


def run(config: SwarmConfig, rng: Optional[random.Random] = None, logging_interval: int = 100) -> Solution:
    """
    Run a complete optimization.

    Parameters
    ----------
    config : SwarmConfig
        The run settings.
    rng : random.Random, optional
        The separate random number generator for the optimization.
    logging_interval : int, optional
        Log progress every ``logging_interval``-th iteration. Default is 100.

    Returns
    -------
    Solution
        The best position found and its merit.
    """
    return get_optimizer(config, rng).optimize(logging_interval=logging_interval)


def set_logger_config(
    level: int = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    log_to_stdout: bool = True,
    log_thread: bool = False,
    colors: bool = True,
) -> None:
    """
    Set up the logger. Should only need to be done once.

    Parameters
    ----------
    level : int
        The default level for logging. Default is ``logging.INFO``.
    log_file : str | Path, optional
        The file to save the log to.
    log_to_stdout : bool
        A flag indicating if the log should be printed on stdout. Default is True.
    log_thread : bool
        A flag for prepending the name of the emitting thread to the logging message. Default is False.
    colors : bool
        A flag for using colored logs. Default is True.
    """
    thread = "%(threadName)s:" if log_thread else ""
    base_logger = logging.getLogger()
    base_logger.handlers.clear()
    simple_formatter = logging.Formatter(f"{thread}[%(asctime)s][%(name)s][%(levelname)s] - %(message)s")
    if colors:
        formatter = colorlog.ColoredFormatter(
            fmt=f"{thread}[%(cyan)s%(asctime)s%(reset)s][%(blue)s%(name)s%(reset)s]"
            f"[%(log_color)s%(levelname)s%(reset)s] - %(message)s",
            datefmt=None,
            reset=True,
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "red,bg_white",
            },
            secondary_log_colors={},
        )
        std_handler = logging.StreamHandler(stream=sys.stdout)
        std_handler.setFormatter(formatter)
    else:
        std_handler = logging.StreamHandler(stream=sys.stdout)
        std_handler.setFormatter(simple_formatter)

    if log_to_stdout:
        base_logger.addHandler(std_handler)
    if log_file is not None:
        log_file = Path(log_file)
        log_dir = log_file.parents[0]
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(filename=log_file)
        file_handler.setFormatter(simple_formatter)
        base_logger.addHandler(file_handler)
    base_logger.setLevel(level)
