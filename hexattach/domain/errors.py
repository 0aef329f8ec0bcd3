# hexattach/domain/errors.py
from __future__ import annotations


class HexattachError(Exception):
    """Base class for errors raised by the association core and its adapters."""


class StoreError(HexattachError):
    """
    The association store failed (unreachable, timeout, constraint violation...).
    Never retried by the core; callers decide.
    """


class NotFoundError(HexattachError):
    """A referenced media identity did not resolve."""

    def __init__(self, message: str, *, media_id=None) -> None:
        super().__init__(message)
        self.media_id = media_id


class UnsupportedOperationError(HexattachError):
    """An operation the current backing store (or caller surface) cannot express."""


class StoreConflictError(StoreError):
    """A write violated a store constraint (e.g. storage location already in use)."""
