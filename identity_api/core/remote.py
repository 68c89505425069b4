"""Translation of IdP client failures into the error taxonomy."""
from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Dict, Iterator

from .exceptions import (
    IdentityError,
    NotFoundError,
    RemoteUnavailableError,
    RemoteValidationError,
)
from .okta.exceptions import OktaAPIError, OktaTransportError

logger = logging.getLogger(__name__)

CLIENT_FAULT_STATUSES = {400, 409, 422}


def translate_remote_error(exc: OktaAPIError, action: str, ids: Dict[str, str]) -> IdentityError:
    """Map a non-2xx IdP response onto one taxonomy kind.

    The IdP error summary stays in the logs: only the action, the
    caller-supplied ids and the upstream status cross this boundary.

    Args:
        exc: Error raised by the Okta client
        action: What was attempted, e.g. "get user"
        ids: Entity ids involved in the call

    Returns:
        Taxonomy error ready to raise
    """
    details = dict(ids)
    details["upstreamStatus"] = exc.status_code

    if exc.status_code == 404:
        return NotFoundError(f"Failed to {action}: not found", details)
    if exc.status_code in CLIENT_FAULT_STATUSES:
        return RemoteValidationError(f"Failed to {action}: rejected by identity provider", details)
    return RemoteUnavailableError(f"Failed to {action}: identity provider error", details)


@contextmanager
def remote_call(action: str, **ids: str) -> Iterator[None]:
    """Run one remote call, translating client failures on the way out.

    Usage:
        with remote_call("get user", userId=user_id):
            raw = users.get_user(user_id)
    """
    try:
        yield
    except OktaAPIError as exc:
        raise translate_remote_error(exc, action, ids) from exc
    except OktaTransportError as exc:
        logger.warning(f"Okta transport failure during '{action}': {exc.reason}")
        raise RemoteUnavailableError(f"Failed to {action}: identity provider unreachable", dict(ids)) from exc
