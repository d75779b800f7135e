# =============================================================================
# core/config.py  -  Config Resolver
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the Wagtail connection settings ONCE per process and turns a path
#   fragment plus a query mapping into one absolute request URL.
#
# SETTINGS (environment, optionally from a .env file):
#   WAGTAIL_BASE_URL          required, e.g. "https://cms.example.com"
#   WAGTAIL_API_PATH          optional, default "/api/v2"
#   WAGTAIL_API_KEY           optional, sent as "Authorization: Bearer <key>"
#   WAGTAIL_TIMEOUT_SECONDS   optional, default 12
#
# A missing base URL is NOT an error at load time.  It surfaces as a
# ConfigurationError the first time a URL is built, and the server entry
# point checks it up front so the process refuses to start without it.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import urlencode

from dotenv import load_dotenv

from core.errors import ConfigurationError

DEFAULT_API_PATH = "/api/v2"
DEFAULT_TIMEOUT_SECONDS = 12.0


@dataclass(frozen=True)
class WagtailConfig:
    """Connection settings for one Wagtail API."""

    base_url: Optional[str]
    api_path: str = DEFAULT_API_PATH
    api_key: Optional[str] = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "WagtailConfig":
        """Build a config from environment variables.

        Args:
            environ: Mapping to read from.  Defaults to ``os.environ`` after
                loading a ``.env`` file from the working directory.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        raw_timeout = environ.get("WAGTAIL_TIMEOUT_SECONDS") or ""
        try:
            timeout = float(raw_timeout) if raw_timeout.strip() else DEFAULT_TIMEOUT_SECONDS
        except ValueError:
            raise ConfigurationError(
                f"WAGTAIL_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}."
            ) from None
        if timeout <= 0:
            raise ConfigurationError("WAGTAIL_TIMEOUT_SECONDS must be greater than zero.")

        return cls(
            base_url=(environ.get("WAGTAIL_BASE_URL") or "").strip() or None,
            api_path=(environ.get("WAGTAIL_API_PATH") or "").strip() or DEFAULT_API_PATH,
            api_key=(environ.get("WAGTAIL_API_KEY") or "").strip() or None,
            timeout_seconds=timeout,
        )

    def require_base_url(self) -> str:
        if not self.base_url:
            raise ConfigurationError(
                "Server configuration error: WAGTAIL_BASE_URL is not set."
            )
        return self.base_url

    def build_url(self, path_fragment: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Join base URL, API path and *path_fragment* into one absolute URL.

        Exactly one slash separates each segment no matter how the pieces
        were written ("http://h/" + "/api/v2/" + "/pages/" works the same as
        "http://h" + "api/v2" + "pages/").  A trailing slash on the fragment
        is preserved because Wagtail routes depend on it.

        Example:
            >>> WagtailConfig("http://h/").build_url("/pages/", {"limit": 5})
            'http://h/api/v2/pages/?limit=5'
        """
        base = self.require_base_url().rstrip("/")
        api_path = self.api_path.strip("/")
        fragment = path_fragment.lstrip("/")

        url = base
        if api_path:
            url = f"{url}/{api_path}"
        if fragment:
            url = f"{url}/{fragment}"

        if params:
            url = f"{url}?{urlencode({k: str(v) for k, v in params.items()})}"
        return url

    def headers(self) -> dict[str, str]:
        """Request headers for every provider call."""
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers


_config: Optional[WagtailConfig] = None


def get_config() -> WagtailConfig:
    """Return the process-wide config, reading the environment on first use."""
    global _config
    if _config is None:
        _config = WagtailConfig.from_env()
    return _config


def reset_config() -> None:
    """Forget the cached config (used by tests and after .env changes)."""
    global _config
    _config = None
