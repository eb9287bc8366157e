"""Confined on-disk storage for character images."""

from .media_store import MediaStore, prune_empty_dirs
from .object_ids import ObjectIdGenerator, is_valid_object_id
from .paths import relative_name, resolve_confined

__all__ = [
    "MediaStore",
    "ObjectIdGenerator",
    "is_valid_object_id",
    "prune_empty_dirs",
    "relative_name",
    "resolve_confined",
]
