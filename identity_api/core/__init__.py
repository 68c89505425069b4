"""Core Business Logic Module

This module provides the identity/access domain logic, independent of the
HTTP framework.

Architecture:
    - Pure Python (no Flask dependencies in core logic)
    - Testable by stubbing the IdP HTTP session
    - The IdP client is injected, never a module-level singleton

Module Structure:
    - okta/            : Low-level IdP (Okta management API) client
    - models.py        : User, Group, Role, Permission and request types
    - exceptions.py    : Error taxonomy
    - remote.py        : IdP client failure -> taxonomy translation
    - deadline.py      : Per-request time budget for remote calls
    - adapter.py       : IdP <-> domain transformations
    - merger.py        : Partial-update payload builder
    - assignments.py   : User/Group <-> Role and Group membership calls
    - directory.py     : Service facade used by the HTTP layer

Usage Pattern:
    from identity_api.core.okta import OktaClient
    from identity_api.core.directory import DirectoryService

    client = OktaClient("https://example.okta.com", api_token)
    directory = DirectoryService(client)
    user = directory.get_user("00u1abcd")
"""
