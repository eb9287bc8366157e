"""Helpers for building public image URLs."""

from __future__ import annotations


def build_public_url(base_url: str, relative_path: str) -> str:
    """Join ``base_url`` and a storage-relative path with ``/``.

    The storage root never appears in the result.
    """

    return "/".join([base_url.strip("/"), relative_path.lstrip("/")])
