"""Domain level exceptions shared by storage, ingest and API layers."""

from __future__ import annotations

__all__ = [
    "FaceclaimerError",
    "InvalidURLError",
    "InvalidIdentifierError",
    "ConfinementError",
    "FetchError",
    "DecodeError",
    "EncodeError",
    "AlreadyExistsError",
    "NotFoundError",
    "IsDirectoryError",
    "StorageIOError",
]


class FaceclaimerError(Exception):
    """Base class for application specific errors."""


class InvalidURLError(FaceclaimerError):
    """Raised when a source URL is not an absolute http(s) URL with a host."""


class InvalidIdentifierError(FaceclaimerError):
    """Raised when an identity segment is not a 24-character hex object id."""


class ConfinementError(FaceclaimerError):
    """Raised when caller supplied segments resolve outside the storage root."""


class FetchError(FaceclaimerError):
    """Raised when the remote image cannot be downloaded."""


class DecodeError(FaceclaimerError):
    """Raised when downloaded bytes are not a recognizable raster image."""


class EncodeError(FaceclaimerError):
    """Raised when a decoded image cannot be re-encoded."""


class AlreadyExistsError(FaceclaimerError):
    """Raised when a write-once target path is already occupied."""


class NotFoundError(FaceclaimerError):
    """Raised when nothing exists at a resolved path."""


class IsDirectoryError(FaceclaimerError):
    """Raised when a single-file operation targets a directory."""


class StorageIOError(FaceclaimerError):
    """Raised for filesystem failures not covered by a more specific error."""
