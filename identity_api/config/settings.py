"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import os
import re
from dataclasses import dataclass
from pathlib import Path

SECRETS_DIR = Path("/run/secrets")

DEFAULT_PORT = 8080
DEFAULT_READ_TIMEOUT = 10.0
DEFAULT_WRITE_TIMEOUT = 10.0
DEFAULT_IDLE_TIMEOUT = 120.0

_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}
_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|h|m|s)")
_PLAIN_SECONDS = re.compile(r"\d+(?:\.\d+)?")


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = SECRETS_DIR / secret_name

    if secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
        except OSError as e:
            print(f"[settings] ✗ Failed to read {secret_file}: {e}")
        else:
            if secret_value:
                print(f"[settings] ✓ Loaded {secret_name} from {SECRETS_DIR}")
                return secret_value

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            return secret_value

    return None


def parse_duration(raw: str | None, default: float) -> float:
    """Parse a duration such as ``500ms``, ``10s``, ``1m30s`` or ``1h``.

    Bare numbers are seconds. Anything unparseable falls back to ``default``.
    """
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()

    if _PLAIN_SECONDS.fullmatch(value):
        return float(value)

    parts = _DURATION_PART.findall(value)
    if not parts or "".join(number + unit for number, unit in parts) != value:
        print(f"[settings] Invalid duration {raw!r}; using {default}s")
        return default
    return sum(float(number) * _DURATION_UNITS[unit] for number, unit in parts)


def _parse_port(raw: str | None) -> int:
    if not raw:
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError:
        print(f"[settings] Invalid PORT {raw!r}; using {DEFAULT_PORT}")
        return DEFAULT_PORT
    if not 0 < port < 65536:
        print(f"[settings] PORT {port} out of range; using {DEFAULT_PORT}")
        return DEFAULT_PORT
    return port


def _require(var_name: str, value: str | None) -> str:
    if not value:
        raise RuntimeError(f"Environment variable {var_name} is required.")
    return value


@dataclass
class AppConfig:
    """Application configuration container."""
    # Okta
    okta_domain: str
    okta_api_token: str
    okta_issuer: str = ""
    okta_audience: str = ""

    # Server
    port: int = DEFAULT_PORT
    read_timeout: float = DEFAULT_READ_TIMEOUT
    write_timeout: float = DEFAULT_WRITE_TIMEOUT
    idle_timeout: float = DEFAULT_IDLE_TIMEOUT

    @property
    def okta_base_url(self) -> str:
        """Org URL with scheme, e.g. ``https://example.okta.com``."""
        domain = self.okta_domain.strip().rstrip("/")
        if domain.startswith(("https://", "http://")):
            return domain
        return f"https://{domain}"

    def __repr__(self) -> str:
        return (
            f"AppConfig(okta_domain={self.okta_domain!r}, okta_api_token='***', "
            f"port={self.port}, read_timeout={self.read_timeout}, "
            f"write_timeout={self.write_timeout}, idle_timeout={self.idle_timeout})"
        )


def load_settings() -> AppConfig:
    """Load application settings from environment and /run/secrets."""
    okta_domain = _require("OKTA_DOMAIN", os.environ.get("OKTA_DOMAIN", "").strip())
    okta_api_token = _require(
        "OKTA_API_TOKEN",
        _load_secret_from_file("okta_api_token", "OKTA_API_TOKEN"),
    )

    config = AppConfig(
        okta_domain=okta_domain,
        okta_api_token=okta_api_token,
        okta_issuer=os.environ.get("OKTA_ISSUER", ""),
        okta_audience=os.environ.get("OKTA_AUDIENCE", ""),
        port=_parse_port(os.environ.get("PORT")),
        read_timeout=parse_duration(os.environ.get("READ_TIMEOUT"), DEFAULT_READ_TIMEOUT),
        write_timeout=parse_duration(os.environ.get("WRITE_TIMEOUT"), DEFAULT_WRITE_TIMEOUT),
        idle_timeout=parse_duration(os.environ.get("IDLE_TIMEOUT"), DEFAULT_IDLE_TIMEOUT),
    )

    print(f"[settings] Okta org={config.okta_base_url}; port={config.port}")
    return config
