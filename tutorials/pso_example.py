"""
This file contains an example use case of paraswarm. Here, you can choose between benchmark functions and optimize
them with the single- or the multi-threaded particle swarm.
"""
import argparse
import logging
import pathlib
import random

from paraswarm import MeritBelow, SwarmConfig, get_optimizer, set_logger_config
from paraswarm.utils.benchmark_functions import function_names, get_function_search_space


def parse_arguments() -> argparse.Namespace:
    """
    Set up argument parser for particle swarm optimization of simple mathematical functions.

    Returns
    -------
    Namespace
        The namespace of all parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="Simple paraswarm example",
        description="Set up and run a particle swarm optimization of mathematical functions.",
    )
    parser.add_argument("--function", type=str, choices=function_names(), default="sphere")  # Function to optimize
    parser.add_argument("--iterations", type=int, default=1000)  # Number of iterations per particle
    parser.add_argument("--particles", type=int, default=20)  # Swarm size
    parser.add_argument("--threads", type=int, default=None)  # Number of worker threads, None for single-threaded
    parser.add_argument("--seed", type=int, default=0)  # Seed for the random number generator
    parser.add_argument("--inertia", type=float, default=0.729)  # Inertia weight
    parser.add_argument("--cognitive", type=float, default=1.49445)  # Cognitive factor
    parser.add_argument("--social", type=float, default=1.49445)  # Social factor
    parser.add_argument("--clamping_factor", type=float, default=None)  # Velocity clamping factor
    parser.add_argument("--target", type=float, default=None)  # Stop once the best merit drops below this value
    parser.add_argument("--local_stop", action="store_true")  # Only stop the job that reached the target
    parser.add_argument("--logging_interval", type=int, default=100)
    parser.add_argument("--logging_level", type=int, default=logging.INFO)
    parser.add_argument("--log_dir", type=str, default=None)
    return parser.parse_args()


if __name__ == "__main__":
    print(
        "#############################################\n"
        "# PARASWARM: Parallel particle swarm search #\n"
        "#############################################\n"
    )
    config = parse_arguments()

    set_logger_config(
        level=config.logging_level,  # Logging level
        log_file=None if config.log_dir is None else f"{config.log_dir}/{pathlib.Path(__file__).stem}.log",
        log_to_stdout=True,  # Print log on stdout.
        log_thread=config.threads is not None,  # Prepend worker thread names to logging messages.
        colors=True,  # Use colors.
    )

    rng = random.Random(config.seed)  # Separate random number generator for optimization.
    function, search_space = get_function_search_space(config.function)  # Get callable function + search space.

    swarm_config = SwarmConfig(
        num_iterations=config.iterations,
        num_particles=config.particles,
        num_dimensions=len(search_space),
        search_space=search_space,
        merit=function,
        termination=None if config.target is None else MeritBelow(config.target),
        num_threads=config.threads,
        inertia=config.inertia,
        cognitive=config.cognitive,
        social=config.social,
        velocity_limit=config.clamping_factor,
        broadcast_stop=not config.local_stop,
    )
    optimizer = get_optimizer(swarm_config, rng)
    optimizer.optimize(logging_interval=config.logging_interval)
