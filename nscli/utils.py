"""nscli utility functions."""

from __future__ import annotations

import datetime as dt
import hashlib
import os
import re
from collections.abc import Mapping
from urllib.parse import urlparse

from .constants import ENV_API_SECRET, ENV_DEBUG, ENV_SITE, ENV_TIMEOUT, HTTP_TIMEOUT_S
from .exceptions import UserError

_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_TRUTHY = {"1", "true", "yes", "on"}


def utc_now() -> dt.datetime:
    """Return current UTC time as an aware datetime."""
    return dt.datetime.now(dt.UTC)


def parse_int(text: str) -> int | None:
    """Parse a plain signed integer token, or return None.

    Only optional sign plus digits is accepted; "1_000" or " 5" are not counts.
    """
    if not _INTEGER_RE.match(text):
        return None
    return int(text)


def is_absolute_url(text: str | None) -> bool:
    """Return True if text is an absolute http(s) URL with a host."""
    if not text:
        return False
    parsed = urlparse(text)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def parse_timestamp(value: object) -> dt.datetime | None:
    """Parse a Nightscout timestamp into an aware UTC datetime.

    Accepts epoch milliseconds (int/float) or ISO-8601 strings, with or
    without a trailing "Z". Naive strings are taken as UTC.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return dt.datetime.fromtimestamp(value / 1000, dt.UTC)
    if not isinstance(value, str) or not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = dt.datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(dt.UTC)


def format_number(value: float) -> str:
    """Format a number in its shortest form (30, 2.5, 0.05)."""
    if float(value).is_integer():
        return str(int(value))
    return format(value, "f").rstrip("0").rstrip(".")


def hash_api_secret(secret: str) -> str:
    """Return the SHA1 hex digest Nightscout expects in the api-secret header."""
    return hashlib.sha1(secret.encode("utf-8")).hexdigest()


def env_site_url(environ: Mapping[str, str] | None = None) -> str | None:
    """Return the NS_SITE value if set and non-empty."""
    environ = os.environ if environ is None else environ
    return environ.get(ENV_SITE) or None


def env_api_secret(environ: Mapping[str, str] | None = None) -> str | None:
    """Return the NS_API_SECRET value if set and non-empty."""
    environ = os.environ if environ is None else environ
    return environ.get(ENV_API_SECRET) or None


def env_debug(environ: Mapping[str, str] | None = None) -> bool:
    """Return True if NS_DEBUG is set to a truthy value."""
    environ = os.environ if environ is None else environ
    return environ.get(ENV_DEBUG, "").strip().lower() in _TRUTHY


def env_timeout(environ: Mapping[str, str] | None = None) -> float:
    """Return the HTTP timeout from NS_TIMEOUT, or the default.

    Raises:
        UserError: If NS_TIMEOUT is set but not a positive number
    """
    environ = os.environ if environ is None else environ
    raw = environ.get(ENV_TIMEOUT)
    if not raw:
        return float(HTTP_TIMEOUT_S)
    try:
        timeout = float(raw)
    except ValueError:
        raise UserError(f"{ENV_TIMEOUT} must be a number of seconds, got {raw!r}", rc=1)
    if timeout <= 0:
        raise UserError(f"{ENV_TIMEOUT} must be positive, got {raw!r}", rc=1)
    return timeout
