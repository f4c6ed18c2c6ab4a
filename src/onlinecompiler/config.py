"""Configuration loader.

The online compiler reads its configuration from environment variables so
that the same build can talk to a hosted judge in production and a local
Judge0 instance during development.  Reasonable defaults are provided so that
local development works out of the box; credentials have no default.

Environment variables:

``ONLINECOMPILER_API_KEY``
    The shared secret used to authenticate incoming API requests.  The
    mobile client must include this value in the ``x-api-key`` header.  When
    empty, authentication is skipped.

``ONLINECOMPILER_JUDGE_URL``
    Base URL of the judge service.  Submissions are posted to
    ``<url>/submissions``.  Defaults to ``https://judge029.p.rapidapi.com``.

``ONLINECOMPILER_JUDGE_API_KEY``
    Key sent to the judge in the ``x-rapidapi-key`` header.  Omitted when
    empty, which is what a self-hosted Judge0 expects.

``ONLINECOMPILER_JUDGE_API_HOST``
    Value of the ``x-rapidapi-host`` header.  Defaults to the host part of
    ``ONLINECOMPILER_JUDGE_URL``.

``ONLINECOMPILER_JUDGE_TIMEOUT_SECONDS``
    Transport timeout for a judge round trip.  Default is 30.

``ONLINECOMPILER_SESSION_IDLE_SECONDS``
    Editor sessions untouched for this long are dropped the next time a
    session is created.  Default is 3600.

``PORT``
    The port on which the API server listens.  Defaults to 8080.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import urlparse

from .exceptions import ConfigurationError


DEFAULT_JUDGE_URL = "https://judge029.p.rapidapi.com"


@dataclass
class Config:
    """Centralised configuration object."""

    api_key: str
    judge_url: str
    judge_api_key: str
    judge_api_host: str
    judge_timeout_seconds: int
    port: int
    session_idle_seconds: int = 3600

    @classmethod
    def load(cls) -> "Config":
        # API key may be empty in local development but should be set in production.
        api_key = os.getenv("ONLINECOMPILER_API_KEY", "")

        judge_url = os.getenv("ONLINECOMPILER_JUDGE_URL", DEFAULT_JUDGE_URL).strip().rstrip("/")
        parsed = urlparse(judge_url)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise ConfigurationError(
                f"Invalid ONLINECOMPILER_JUDGE_URL: {judge_url!r}. Use an http(s) URL."
            )
        judge_api_key = os.getenv("ONLINECOMPILER_JUDGE_API_KEY", "")
        judge_api_host = os.getenv("ONLINECOMPILER_JUDGE_API_HOST") or parsed.hostname or ""

        def _int_var(name: str, default: int) -> int:
            val = os.getenv(name)
            if val is None:
                return default
            try:
                parsed_val = int(val)
            except ValueError:
                raise ConfigurationError(f"Invalid integer for {name}: {val}")
            if parsed_val <= 0:
                raise ConfigurationError(f"{name} must be positive, got {parsed_val}")
            return parsed_val

        judge_timeout_seconds = _int_var("ONLINECOMPILER_JUDGE_TIMEOUT_SECONDS", 30)
        session_idle_seconds = _int_var("ONLINECOMPILER_SESSION_IDLE_SECONDS", 3600)
        port = _int_var("PORT", 8080)

        return cls(
            api_key=api_key,
            judge_url=judge_url,
            judge_api_key=judge_api_key,
            judge_api_host=judge_api_host,
            judge_timeout_seconds=judge_timeout_seconds,
            port=port,
            session_idle_seconds=session_idle_seconds,
        )

    @classmethod
    def from_env(cls) -> "Config":
        """
        Alternate constructor used by the API to load configuration.

        This wrapper calls :meth:`load` to construct the configuration.
        """
        return cls.load()
