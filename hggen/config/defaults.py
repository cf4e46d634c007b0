"""Default configuration: single source of truth for generator parameters."""

from hggen.config.parameters import GeneratorConfig

# Defaults of the reference command-line tool:
# n=1000, k_bar=10, gamma=2, t=0, zeta=1, seed=1, starting id 1.
DEFAULT_CONFIG = GeneratorConfig()
