"""Error taxonomy shared by the core and the HTTP layer.

Every error leaving the service facade is one of these kinds. Messages are
built from the operation and entity ids only; IdP response bodies never
end up here.
"""
from __future__ import annotations
from typing import Any, Dict, Optional


class IdentityError(Exception):
    """Base exception for all identity operations.

    Attributes:
        message: Human-readable description, safe to return to API callers
        details: Extra machine-readable fields for the error envelope
        status_code: HTTP status the API layer answers with
    """

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = dict(details or {})
        super().__init__(message)

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_details(self) -> Dict[str, Any]:
        """Details block of the error envelope."""
        return {"error": self.kind, **self.details}


class ValidationError(IdentityError):
    """Malformed or missing input, detected before any remote call."""

    status_code = 400


class ImmutableEntityError(IdentityError):
    """Mutation attempted on a System role or a group the IdP does not manage."""

    status_code = 409


class RemoteValidationError(IdentityError):
    """The IdP rejected the payload."""

    status_code = 400


class NotFoundError(IdentityError):
    """The IdP reports the entity absent."""

    status_code = 404


class NotAssignedError(NotFoundError):
    """Unassign/remove of a relation that does not exist."""


class RemoteUnavailableError(IdentityError):
    """Transport failure or server-side error from the IdP (not retried)."""

    status_code = 502


class PartialFailureError(IdentityError):
    """A multi-step operation completed its first step but failed a later one.

    Attributes:
        step: Name of the step that failed (e.g. "delete")
        entity_state: State the entity was left in (e.g. "Deprovisioned")
    """

    status_code = 502

    def __init__(self, message: str, step: str, entity_state: str, details: Optional[Dict[str, Any]] = None):
        self.step = step
        self.entity_state = entity_state
        merged = {"step": step, "entityState": entity_state}
        merged.update(details or {})
        super().__init__(message, merged)


class AdapterError(IdentityError):
    """IdP response is malformed or missing a field required for entity identity."""

    status_code = 500


class CanceledError(IdentityError):
    """The request deadline ran out before the IdP answered."""

    status_code = 504
