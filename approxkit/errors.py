"""
Exception hierarchy for approxkit.

Every error raised by the library derives from :class:`ApproxkitError`, which
is itself an ``ArithmeticError`` so callers can treat numeric failures
uniformly. Range exhaustion of log-domain values is *not* an exception; see
:func:`approxkit.lg.would_overflow` and :func:`approxkit.lg.would_underflow`.
"""


class ApproxkitError(ArithmeticError):
    """Base class for all approxkit errors."""


class DomainError(ApproxkitError, ValueError):
    """Input lies outside the domain of a mathematically restricted operation."""


class EmptyAccumulatorError(DomainError):
    """A statistic was requested from an accumulator holding no observations."""


class InsufficientSamplesError(DomainError, ZeroDivisionError):
    """Sample statistics need at least two observations."""

    def __init__(self, required: int, count: int):
        super().__init__(
            f"at least {required} observations required, got {count}"
        )
        self.required = required
        self.count = count


class UnsupportedOperation(DomainError, NotImplementedError):
    """Operation is outside the computational basis of the value type."""


class ConfigurationError(ApproxkitError):
    """An explicitly supplied option name is not recognised."""
