"""Pytest shared fixtures.

Remote calls are stubbed at the ``requests.Session`` seam: every test gets a
MagicMock session whose ``request`` method returns ``StubResponse`` objects,
so tests can assert exact call counts, URLs and payloads.
"""
import json
import pathlib
import sys
from typing import Any, Optional
from unittest.mock import MagicMock

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from identity_api.config import AppConfig
from identity_api.core.directory import DirectoryService
from identity_api.core.okta import OktaClient
from identity_api.flask_app import create_app

OKTA_BASE_URL = "https://example.okta.com"
OKTA_TOKEN = "test-api-token"


class StubResponse:
    """Minimal stand-in for ``requests.Response``."""

    def __init__(self, status_code: int = 200, payload: Optional[Any] = None):
        self.status_code = status_code
        self._payload = payload
        self.text = json.dumps(payload) if payload is not None else ""

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


# ─────────────────────────────────────────────────────────────────────────────
# Remote seam
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture()
def okta_session():
    """Session double; configure ``okta_session.request`` per test."""
    session = MagicMock()
    session.request.return_value = StubResponse(200, {})
    return session


@pytest.fixture()
def okta_client(okta_session):
    return OktaClient(OKTA_BASE_URL, OKTA_TOKEN, session=okta_session)


@pytest.fixture()
def directory(okta_client):
    return DirectoryService(okta_client)


# ─────────────────────────────────────────────────────────────────────────────
# Flask
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture()
def app_config():
    return AppConfig(okta_domain="example.okta.com", okta_api_token=OKTA_TOKEN)


@pytest.fixture()
def app(app_config, okta_client):
    flask_app = create_app(app_config, okta_client)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture()
def http_client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture()
def stub_response():
    """The ``StubResponse`` class, for tests that script remote answers."""
    return StubResponse
