"""Reproducibility infrastructure: seeded generators and code provenance tracking."""

from hggen.reproducibility.seed import make_rng
from hggen.reproducibility.git_hash import get_git_hash

__all__ = [
    "make_rng",
    "get_git_hash",
]
