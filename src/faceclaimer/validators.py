"""Input validators shared by configuration and ingest."""

from __future__ import annotations

from urllib.parse import urlsplit

ALLOWED_URL_SCHEMES = frozenset({"http", "https"})


def is_valid_url(value: str) -> bool:
    """Return ``True`` for absolute ``http``/``https`` URLs that carry a host."""

    try:
        parts = urlsplit(value)
        # Accessing ``port`` validates it; malformed ports raise ValueError.
        parts.port
    except ValueError:
        return False
    return parts.scheme in ALLOWED_URL_SCHEMES and bool(parts.hostname)


__all__ = ["ALLOWED_URL_SCHEMES", "is_valid_url"]
