"""Generator of random graphs embedded in the hyperbolic disk."""

__version__ = "0.1.0"
