"""Okta-specific exceptions raised by the low-level client."""


class OktaError(Exception):
    """Base exception for all Okta API operations."""
    pass


class OktaAPIError(OktaError):
    """Non-2xx response from the Okta management API.

    Attributes:
        status_code: HTTP status code
        error_code: Okta error code (e.g. E0000007), if the body had one
        summary: Okta errorSummary, for logs only
        endpoint: API endpoint that failed
    """

    def __init__(self, status_code: int, summary: str, endpoint: str, error_code: str = ""):
        self.status_code = status_code
        self.summary = summary
        self.endpoint = endpoint
        self.error_code = error_code
        super().__init__(f"[{status_code}] {endpoint}: {error_code} {summary}".strip())


class OktaTransportError(OktaError):
    """The request never produced an HTTP response (connection, TLS, timeout)."""

    def __init__(self, endpoint: str, reason: str):
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(f"{endpoint}: {reason}")
