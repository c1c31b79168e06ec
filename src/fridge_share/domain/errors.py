"""Typed errors raised by the sharing core."""


class FridgeShareError(Exception):
    """Base class for client-correctable errors."""

    code = "error"


class NotFoundError(FridgeShareError):
    """Raised when a product or claim does not exist."""

    code = "not_found"


class NotAvailableError(FridgeShareError):
    """Raised when a claim targets a product that is not AVAILABLE."""

    code = "not_available"


class DuplicateClaimError(FridgeShareError):
    """Raised when the claimer already has an open claim on the product."""

    code = "duplicate_claim"


class InvalidTransitionError(FridgeShareError):
    """Raised when a claim is not in the state a transition requires."""

    code = "invalid_transition"


class NotOwnerError(FridgeShareError):
    """Raised when the acting user may not change the record."""

    code = "not_owner"


class SelfClaimError(FridgeShareError):
    """Raised when an owner tries to claim their own product."""

    code = "self_claim"


class InvalidPayloadError(FridgeShareError):
    """Raised for unknown status or visibility values."""

    code = "invalid_payload"
