"""Utility functions for arvo application."""

import re
from datetime import datetime, timezone

_DISALLOWED_CHARS = re.compile(r'[^a-z0-9\s]')
_WHITESPACE_RUN = re.compile(r'\s+')


def normalize_text(text: str | None) -> str:
    """Canonicalize text for comparison.

    Lowercases, drops everything except ASCII letters, digits and whitespace,
    and collapses whitespace to single spaces. Idempotent.
    """
    if not text:
        return ''
    cleaned = _DISALLOWED_CHARS.sub('', text.lower().strip())
    return _WHITESPACE_RUN.sub(' ', cleaned).strip()


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value) -> datetime | None:
    """Parse an ISO-8601 string or pass a datetime through. None stays None."""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    return ensure_utc(datetime.fromisoformat(value))


def format_timestamp(value: datetime | None) -> str | None:
    """Serialize a timestamp for storage."""
    return value.isoformat() if value else None
