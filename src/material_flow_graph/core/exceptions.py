"""Custom exception hierarchy for the material flow graph processor."""

from __future__ import annotations


class MaterialFlowError(Exception):
    """Base error for the material flow graph processor."""


class StatementFormatError(MaterialFlowError):
    """Raised when the statement payload violates the input contract."""


class EntityLookupError(MaterialFlowError):
    """Raised when the resolved entity lookup cannot be constructed."""


class StatementFetchError(MaterialFlowError):
    """Raised when statements or entities cannot be fetched from the source."""
