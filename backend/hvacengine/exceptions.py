"""
Exception hierarchy for the HVAC process engine.

Precondition and bracket failures subclass ValueError so API routes can keep
mapping ValueError to HTTP 422.
"""


class HvacEngineError(Exception):
    """Base class for all engine errors."""


class PreconditionError(HvacEngineError, ValueError):
    """Input values violate a documented precondition."""


class MissingInputError(HvacEngineError):
    """A block was run while a required connector had no data."""


class BracketError(HvacEngineError, ValueError):
    """The residual does not change sign over the requested bracket."""


class ConvergenceError(HvacEngineError, ArithmeticError):
    """The root finder ran out of iterations or hit a non-finite residual."""


class ConvergenceMismatchError(HvacEngineError, ArithmeticError):
    """A converged solution failed its post-solve acceptance check."""
