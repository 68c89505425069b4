"""Okta management API client library.

Architecture:
- client.py: HTTP client with API-token auth, pooled session and deadline binding
- users.py: User lifecycle operations (create, update, activate, suspend, delete)
- groups.py: Group management and membership
- roles.py: Custom roles, permissions and role assignments
- exceptions.py: Typed exceptions for error handling

Every service method is a single remote call returning the raw Okta
representation; conversion to domain objects happens in
``identity_api.core.adapter``.

Usage:
    from identity_api.core.okta import OktaClient, UserService

    client = OktaClient("https://example.okta.com", api_token)
    user = UserService(client).get_user("00u1abcd")
"""
from .client import (
    OktaClient,
    build_session,
    REQUEST_TIMEOUT,
)
from .exceptions import (
    OktaError,
    OktaAPIError,
    OktaTransportError,
)
from .users import UserService
from .groups import GroupService
from .roles import (
    RoleService,
    STANDARD_ROLE_TYPES,
    is_standard_role,
)

__all__ = [
    # Client
    "OktaClient",
    "build_session",
    "REQUEST_TIMEOUT",

    # Exceptions
    "OktaError",
    "OktaAPIError",
    "OktaTransportError",

    # Services
    "UserService",
    "GroupService",
    "RoleService",

    # Roles
    "STANDARD_ROLE_TYPES",
    "is_standard_role",
]
