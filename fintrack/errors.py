"""Error kinds surfaced by the persistence layer."""

from __future__ import annotations


class FintrackError(Exception):
    """Base class for all fintrack errors."""


class StoreError(FintrackError):
    """Any failure at the persistence layer.

    The message is the underlying driver message, unchanged, so it can be
    handed to API callers verbatim.
    """


class NotFoundError(FintrackError):
    """A statement that must touch a row affected zero rows."""
