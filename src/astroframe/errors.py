"""Exception hierarchy for astroframe.

Every error raised by the library derives from :class:`AstroFrameError`.
Non-fatal conditions (for example a date outside the coverage of the Earth
orientation data) are not raised at all; they are reported through
:class:`~astroframe.diagnostics.Diagnostics`.
"""

from __future__ import annotations


class AstroFrameError(Exception):
    """Base class for astroframe errors."""


class InvalidInputError(AstroFrameError, ValueError):
    """Malformed parameters, such as an ellipsoid with a non-positive radius
    or a coefficient table of the wrong length."""


class DataUnavailableError(AstroFrameError, LookupError):
    """A record source has no data for the requested date."""


class UnsupportedConfigurationError(AstroFrameError):
    """The requested algorithm, frame or method combination is not implemented."""


class UnsupportedBodyError(UnsupportedConfigurationError):
    """No provider exists for the requested body."""


class ConvergenceError(AstroFrameError, RuntimeError):
    """An iterative solver did not converge within its iteration budget."""

    def __init__(self, message: str, iterations: int) -> None:
        super().__init__(message)
        self.iterations = iterations
