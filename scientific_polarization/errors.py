"""Typed failures raised by the simulation core.

All errors are deterministic functions of the input parameters and are raised
synchronously; nothing in the core retries.
"""

from __future__ import annotations


class PolarizationError(Exception):
    """Base class for all simulation failures."""


class ConfigurationError(PolarizationError, ValueError):
    """Out-of-range parameter or mismatched initial grid."""


class NumericDomainError(PolarizationError, ArithmeticError):
    """Invalid probability mass or division by zero during table precomputation."""


class InvalidOutputMode(PolarizationError, ValueError):
    """Requested output representation is not supported."""

    def __init__(self, mode: object) -> None:
        self.mode = mode
        super().__init__(
            f"Invalid output mode {mode!r}; must be one of "
            "'correct', 'map', 'entropy', 'polarized', or 'storedValues'"
        )
