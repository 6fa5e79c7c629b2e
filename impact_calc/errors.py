# MIT License
"""Exception taxonomy for the impact calculator.

Validation problems are raised before any projection loop runs, so a
failed calculation never leaves a partial result behind.  Every error
carries a human readable message; input errors additionally name the
offending field so the dashboard can point the user at it.
"""
from __future__ import annotations

from typing import Optional


class ImpactCalculatorError(Exception):
    """Base class for all calculator errors."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class InvalidInputError(ImpactCalculatorError):
    """A scalar project input is missing or out of range."""


class InvalidSpeciesDataError(ImpactCalculatorError):
    """Species data is malformed (columns, names or proportions)."""

    def __init__(self, message: str, row: Optional[int] = None, field: Optional[str] = None) -> None:
        super().__init__(message, field=field)
        self.row = row


class DivisionByZeroError(ImpactCalculatorError):
    """A derived ratio would divide by zero."""


class CalculationError(ImpactCalculatorError):
    """Unexpected failure while running a projection."""
