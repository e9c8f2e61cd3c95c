"""
Exception hierarchy for SimLab.

Every failure raised by the generators, table builder, simulators and
randomness tests derives from SimulationError. The concrete classes also
inherit from the matching builtin so callers can catch ValueError /
LookupError / ArithmeticError without importing this module.
"""
from typing import Optional


class SimulationError(Exception):
    """Base exception for all SimLab computations"""
    pass


class InvalidParameter(SimulationError, ValueError):
    """Raised when a scalar input is malformed or out of its domain"""
    pass


class InvalidDistribution(InvalidParameter):
    """Raised when a distribution is empty or its probabilities do not sum to 1"""
    pass


class InsufficientRandomDigits(SimulationError, ValueError):
    """Raised when a random-digit stream is too short for the requested run"""

    def __init__(self, stream: str, required: int, supplied: int):
        self.stream = stream
        self.required = required
        self.supplied = supplied
        super().__init__(
            f"Not enough {stream} random digits: need {required}, got {supplied}"
        )


class NotMapped(SimulationError, LookupError):
    """Raised when a random digit falls outside every cumulative range"""

    def __init__(self, digit, scale: Optional[int] = None, label: str = ""):
        self.digit = digit
        self.scale = scale
        prefix = f"{label}: " if label else ""
        if scale is None:
            message = f"{prefix}random digit {digit} could not be mapped"
        else:
            message = f"{prefix}random digit {digit} could not be mapped (valid range 0-{scale})"
        super().__init__(message)


class NumericDomainError(SimulationError, ArithmeticError):
    """Raised when a formula is evaluated outside its numeric domain"""
    pass
