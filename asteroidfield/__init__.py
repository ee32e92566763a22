"""A vector-style asteroids arcade game on pygame, with power-ups and a bloom glow."""

__version__ = "0.1.0"
__all__ = ["__version__"]