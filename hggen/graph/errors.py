"""Exceptions raised by graph generation and persistence."""


class GraphGenerationError(Exception):
    """Raised when no graph can be produced for the requested parameters."""


class CalibrationError(GraphGenerationError):
    """Raised when internal-parameter calibration fails to converge."""


class GraphFormatError(ValueError):
    """Raised when an .hg graph file is malformed."""
