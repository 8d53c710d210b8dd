# app/domain/errors.py
"""
Domain errors raised by the invoice engine.

Only corrupt upstream data is an error. Missing-but-optional fields
(addresses, GSTIN, bank details, notes) resolve to ``"-"`` placeholders
and never raise.
"""

from __future__ import annotations


class ValidationError(ValueError):
    """Raised when input data would produce a wrong statutory figure."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field
