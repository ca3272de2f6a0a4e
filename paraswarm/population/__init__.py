"""
This package bundles the particles that make up a swarm.
"""
__all__ = ["Particle"]
from .particle import Particle
