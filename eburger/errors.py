"""Error kinds raised by the storefront core."""

from __future__ import annotations


class StorefrontError(Exception):
    """Base class for every error the core raises to its callers."""


class ValidationError(StorefrontError):
    """Caller input was rejected (missing checkout field, empty cart, bad product)."""


class InvalidTransitionError(StorefrontError):
    """An order status change was requested from a terminal state or back to PENDING."""


class NotFoundError(StorefrontError):
    """A mutation targeted an identifier that does not exist."""

    def __init__(self, kind: str, ident: str) -> None:
        super().__init__(f"{kind} not found: {ident}")
        self.kind = kind
        self.ident = ident


class PersistenceError(StorefrontError):
    """Saved state could not be written or read back; in-memory state was left unchanged."""


class ExternalServiceError(StorefrontError):
    """The description generator failed. Always recovered into a fallback string."""
