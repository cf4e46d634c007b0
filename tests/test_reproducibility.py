"""Tests for seeded generators and git provenance."""

import re
from pathlib import Path

import numpy as np

from hggen.reproducibility import get_git_hash, make_rng


class TestSeedDeterminism:
    def test_make_rng_determinism(self):
        assert np.array_equal(make_rng(42).random(100), make_rng(42).random(100))

    def test_make_rng_seeds_differ(self):
        assert not np.array_equal(make_rng(1).random(10), make_rng(2).random(10))

    def test_returns_generator(self):
        assert isinstance(make_rng(1), np.random.Generator)


class TestGitHash:
    def test_git_hash_format(self):
        assert re.fullmatch(r"[0-9a-f]{4,40}(-dirty)?|unknown", get_git_hash())

    def test_git_hash_with_directory(self, tmp_path: Path):
        assert re.fullmatch(r"[0-9a-f]{4,40}(-dirty)?|unknown", get_git_hash(tmp_path))
