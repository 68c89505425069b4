"""Low-level HTTP client for the Okta management API.

Handles API-token authentication, the shared connection pool, deadline
binding and HTTP error detection.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter

from .. import deadline
from ..exceptions import AdapterError, CanceledError
from .exceptions import OktaAPIError, OktaTransportError

REQUEST_TIMEOUT = 30
POOL_CONNECTIONS = 10
POOL_MAXSIZE = 100

logger = logging.getLogger(__name__)


def build_session() -> requests.Session:
    """Create the long-lived connection pool shared by every request."""
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=POOL_CONNECTIONS, pool_maxsize=POOL_MAXSIZE)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class OktaClient:
    """HTTP client for the Okta management API.

    Features:
    - One pooled ``requests.Session`` for the whole process
    - Socket timeout bounded by the current request deadline
    - Centralized error handling (any non-2xx status is a failure)

    The client is configured once at construction and never changed
    afterwards, so a single instance can be shared by all request threads.

    Usage:
        client = OktaClient("https://example.okta.com", api_token)
        response = client.get("/api/v1/users/00u1abcd")
    """

    def __init__(
        self,
        base_url: str,
        api_token: str,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize Okta client.

        Args:
            base_url: Okta org URL (e.g. https://example.okta.com)
            api_token: SSWS API token
            timeout: Upper bound for a single remote call, in seconds
            session: Pre-built session (defaults to a new pooled session)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._api_token = api_token
        self.session = session if session is not None else build_session()

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self.request("GET", path, params=params)

    def post(
        self,
        path: str,
        json: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        return self.request("POST", path, params=params, json=json)

    def put(self, path: str, json: Optional[Any] = None) -> requests.Response:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> requests.Response:
        return self.request("DELETE", path)

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> requests.Response:
        """Execute one request against the management API.

        Args:
            method: HTTP method
            path: API endpoint path (e.g., "/api/v1/users")
            params: Query parameters
            json: JSON payload

        Returns:
            Response object (status is always 2xx)

        Raises:
            CanceledError: If the request deadline is exhausted
            OktaTransportError: If no HTTP response was received
            OktaAPIError: On non-2xx status
        """
        timeout, bound_by_deadline = self._call_timeout()
        if timeout <= 0:
            raise CanceledError(f"Request deadline exceeded before {method} {path}")

        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(),
                timeout=timeout,
            )
        except requests.Timeout:
            if bound_by_deadline:
                logger.warning(f"Okta call canceled by request deadline: {method} {path}")
                raise CanceledError(f"Request deadline exceeded during {method} {path}")
            raise OktaTransportError(path, "timed out")
        except requests.RequestException as exc:
            raise OktaTransportError(path, type(exc).__name__)

        self._handle_error(resp, method, path)
        return resp

    def test_connection(self) -> None:
        """Validate the org URL and token by reading the org settings."""
        self.get("/api/v1/org")

    @staticmethod
    def json_body(resp: requests.Response) -> Any:
        """Decode the JSON body of a 2xx response.

        Raises:
            AdapterError: If the body is missing or not JSON
        """
        try:
            return resp.json()
        except ValueError as exc:
            logger.warning(f"Okta returned a 2xx without a JSON body (status={resp.status_code})")
            raise AdapterError("Identity provider returned a malformed response") from exc

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"SSWS {self._api_token}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def _call_timeout(self) -> tuple[float, bool]:
        """Return the socket timeout for the next call and whether the deadline set it."""
        left = deadline.remaining()
        if left is None or left >= self.timeout:
            return self.timeout, False
        return left, True

    def _handle_error(self, resp: requests.Response, method: str, path: str) -> None:
        """Centralized error handling for HTTP responses.

        Raises:
            OktaAPIError: If response status is not 2xx
        """
        if 200 <= resp.status_code < 300:
            return

        error_code = ""
        summary = ""
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            error_code = str(body.get("errorCode") or "")
            summary = str(body.get("errorSummary") or "")

        logger.warning(
            f"Okta API error | {method} {path} | status={resp.status_code} | errorCode={error_code or 'none'}"
        )
        raise OktaAPIError(resp.status_code, summary, path, error_code)
