"""Plugin configuration — environment variable loading with typed defaults.

Loads settings from .env file (via python-dotenv) and os.environ.
Real environment variables take precedence over .env file values.

The remote origin is validated once, here. An absent or invalid
REMOTE_MEDIA_URL leaves Settings.origin as None, which every component
treats as "rewriting disabled" — URLs pass through untouched.

Usage:
    from remote_media.config import get_settings
    settings = get_settings()
    print(settings.origin)  # RemoteOrigin(scheme='https', host='cdn.example.com', ...)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlsplit, urlunsplit

from dotenv import load_dotenv

logger = logging.getLogger("remote_media")

# Only load .env from the project root — don't traverse parent directories.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
_DOTENV_PATH = PROJECT_ROOT / ".env"

DEFAULT_CACHE_TTL = 604800  # 1 week
DEFAULT_PREFIX = "remest"

_WEB_SCHEMES = ("http", "https")


@dataclass(frozen=True)
class RemoteOrigin:
    """Validated remote origin — where pre-sync media is served from.

    Only scheme and host take part in a rewrite. Any path on the
    configured base URL is kept in base_url for logging but ignored.

    Attributes:
        scheme: "http" or "https".
        host: Hostname plus ":port" when one was given. Userinfo is dropped.
        base_url: The configured URL without userinfo or trailing slashes.
    """

    scheme: str
    host: str
    base_url: str


@dataclass(frozen=True)
class Settings:
    """Typed configuration for the remote media rewriter.

    All fields have sensible defaults for local development. A None
    origin means the subsystem is disabled for the process lifetime.
    """

    origin: RemoteOrigin | None
    cache_ttl: int
    prefix: str
    site_id: str | None
    redis_url: str
    log_level: str

    @property
    def enabled(self) -> bool:
        return self.origin is not None

    @property
    def cache_group(self) -> str:
        return prefixed(self.prefix, "cache_group")

    @property
    def local_meta_key(self) -> str:
        return prefixed(self.prefix, "local_media")


def prefixed(prefix: str, field_name: str | None = None, after: str = "_") -> str:
    """Prepends the plugin prefix to a field name.

    Args:
        prefix: The plugin prefix (e.g. "remest").
        field_name: The name to prefix. None returns the bare prefix.
        after: Separator placed between prefix and field name.

    Returns:
        e.g. "remest_cache_group".
    """
    if field_name is None:
        return prefix
    return f"{prefix}{after}{field_name}"


def parse_remote_origin(value: str | None) -> RemoteOrigin | None:
    """Validates a remote origin base URL.

    Args:
        value: Raw REMOTE_MEDIA_URL value (may be None or blank).

    Returns:
        A RemoteOrigin for an absolute http(s) URL with a host, or None
        if the value is missing or fails validation.
    """
    if value is None:
        return None
    candidate = value.strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        return None

    try:
        parts = urlsplit(candidate)
        # .port raises ValueError for a non-numeric or out-of-range port
        port = parts.port
    except ValueError:
        return None

    if parts.scheme.lower() not in _WEB_SCHEMES or not parts.hostname:
        return None

    # Credentials never reach a public asset URL: host is rebuilt from
    # hostname and port only.
    host = f"[{parts.hostname}]" if ":" in parts.hostname else parts.hostname
    if port is not None:
        host = f"{host}:{port}"
    scheme = parts.scheme.lower()

    return RemoteOrigin(
        scheme=scheme,
        host=host,
        base_url=urlunsplit((scheme, host, parts.path, parts.query, parts.fragment)).rstrip("/"),
    )


def _parse_ttl(value: str | None) -> int:
    """Parses REMOTE_MEDIA_CACHE_TTL, falling back to the default.

    Non-integer, zero and negative values all fall back — a broken TTL
    must not disable caching or make entries immortal.
    """
    if value is None or not value.strip():
        return DEFAULT_CACHE_TTL
    try:
        ttl = int(value.strip())
    except ValueError:
        ttl = 0
    if ttl <= 0:
        logger.warning(
            "Invalid REMOTE_MEDIA_CACHE_TTL %r, using default of %d seconds.",
            value,
            DEFAULT_CACHE_TTL,
        )
        return DEFAULT_CACHE_TTL
    return ttl


def _load_settings() -> Settings:
    """Loads configuration from .env file and environment variables.

    Returns:
        A fully resolved Settings instance.
    """
    load_dotenv(_DOTENV_PATH)

    raw_origin = os.environ.get("REMOTE_MEDIA_URL")
    origin = parse_remote_origin(raw_origin)
    if origin is None:
        if raw_origin is None or not raw_origin.strip():
            logger.info("REMOTE_MEDIA_URL is not set. Remote media rewriting is disabled.")
        else:
            logger.warning(
                "REMOTE_MEDIA_URL %r is not a valid absolute http(s) URL. "
                "Remote media rewriting is disabled.",
                raw_origin,
            )

    return Settings(
        origin=origin,
        cache_ttl=_parse_ttl(os.environ.get("REMOTE_MEDIA_CACHE_TTL")),
        prefix=os.environ.get("REMOTE_MEDIA_PREFIX", DEFAULT_PREFIX) or DEFAULT_PREFIX,
        site_id=os.environ.get("REMOTE_MEDIA_SITE_ID") or None,
        redis_url=os.environ.get("REMOTE_MEDIA_REDIS_URL", ""),
        log_level=os.environ.get("LOG_LEVEL", "info"),
    )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Returns the singleton Settings instance. Loads .env on first call."""
    global _settings
    if _settings is None:
        _settings = _load_settings()
    return _settings
