"""Seed management for reproducible graph generation.

Every random draw of a generation run comes from one explicitly owned
numpy Generator created from the graph seed. Nothing touches global RNG
state, so two runs with the same seed and parameters produce identical
coordinates and edge sets as long as the draw order is unchanged:

1. for node id ascending: radial draw, then angular draw
2. for pairs (i, j), i < j, ascending i then ascending j: one edge draw
"""

import numpy as np


def make_rng(seed: int) -> np.random.Generator:
    """Create the generator that drives one top-level generation call.

    Args:
        seed: Graph seed (>= 1 after parameter normalization).

    Returns:
        Freshly seeded numpy Generator.
    """
    return np.random.default_rng(seed)
