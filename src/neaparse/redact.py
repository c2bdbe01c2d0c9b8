"""Redaction of personal data before payloads reach the logs."""

from __future__ import annotations

import logging
from typing import Any

import orjson

_LOGGER = logging.getLogger(__name__)

REDACTED = "[REDACTED]"

# Matched as substrings of the lowercased key. "address" is always
# sensitive, including device address strings.
SENSITIVE_KEYS = (
    "password",
    "token",
    "authorization",
    "auth",
    "secret",
    "api_key",
    "apikey",
    "email",
    "username",
    "login",
    "credential",
    "address",
    "street",
    "city",
    "zip",
    "postal",
    "country",
    "latitude",
    "longitude",
    "lat",
    "lng",
    "location",
)


def is_sensitive_key(key: str) -> bool:
    lowered = key.lower()
    return any(keyword in lowered for keyword in SENSITIVE_KEYS)


def mask_value(value: Any) -> Any:
    """Mask a sensitive value, keeping the ends of longer strings."""
    if isinstance(value, str) and value:
        if len(value) <= 4:
            return "***"
        return f"{value[:2]}...{value[-2:]}"
    return REDACTED


def redact_sensitive_data(obj: Any) -> Any:
    """Return a copy of ``obj`` with sensitive values masked at any depth."""
    if isinstance(obj, list):
        return [redact_sensitive_data(item) for item in obj]
    if not isinstance(obj, dict):
        return obj
    redacted: dict[str, Any] = {}
    for key, value in obj.items():
        if isinstance(key, str) and is_sensitive_key(key):
            redacted[key] = mask_value(value)
        else:
            redacted[key] = redact_sensitive_data(value)
    return redacted


def debug_dump(label: str, data: Any, condensed: bool = False) -> None:
    """Log ``data`` at debug level with personal data masked."""
    if not _LOGGER.isEnabledFor(logging.DEBUG):
        return
    option = 0 if condensed else orjson.OPT_INDENT_2
    try:
        formatted = orjson.dumps(redact_sensitive_data(data), option=option).decode()
    except (TypeError, RecursionError):
        _LOGGER.debug("[DUMP] %s: [Unable to serialize data]", label)
        return
    separator = " " if condensed else "\n"
    _LOGGER.debug("[DUMP] %s:%s%s", label, separator, formatted)
