"""
Exceptions raised by the constrained SMACOF engine.

A run either finishes with a SmacofResult (possibly flagged by stop
conditions such as SolverNoUpdate) or aborts with one of these.
"""


class InputValidationError(ValueError):
    """Caller supplied matrices, configurations or PIP blocks that cannot be used."""


class UnsupportedDimensionError(InputValidationError):
    """Requested output dimensionality is not 2."""


class ArtifactIOError(OSError):
    """A problem or solution file could not be written or read."""


class SolutionFormatError(ValueError):
    """The solver wrote a solution file we cannot interpret."""


class IncompleteSolutionError(RuntimeError):
    """The solver returned a solution with coordinates missing."""


class SolverLaunchError(RuntimeError):
    """The external solver executable could not be started."""


class UnsupportedPlatformError(RuntimeError):
    """No default solver binary is known for this operating system."""
