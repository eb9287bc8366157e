"""Write-once image storage over a confined directory tree."""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import tempfile
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ..exceptions import (
    AlreadyExistsError,
    InvalidIdentifierError,
    IsDirectoryError,
    NotFoundError,
    StorageIOError,
)
from .object_ids import ObjectIdGenerator, is_valid_object_id
from .paths import relative_name, resolve_confined

logger = logging.getLogger(__name__)


def _is_empty(directory: Path) -> bool:
    try:
        with os.scandir(directory) as entries:
            return next(entries, None) is None
    except OSError as exc:
        raise StorageIOError(f"unable to list {directory}: {exc}") from exc


def _prune(directory: Path, removed: list[Path]) -> None:
    try:
        with os.scandir(directory) as entries:
            subdirs = [Path(entry.path) for entry in entries if entry.is_dir(follow_symlinks=False)]
    except OSError as exc:
        raise StorageIOError(f"unable to list {directory}: {exc}") from exc

    for subdir in subdirs:
        _prune(subdir, removed)
        # Listing and removal are separate steps; a concurrent upload may
        # repopulate ``subdir`` in between, in which case rmdir fails.
        if _is_empty(subdir):
            try:
                subdir.rmdir()
            except OSError as exc:
                raise StorageIOError(f"unable to remove {subdir}: {exc}") from exc
            removed.append(subdir)


def prune_empty_dirs(base_dir: str | os.PathLike[str]) -> list[Path]:
    """Remove empty directories below ``base_dir`` in post-order.

    ``base_dir`` itself is never removed and files are never touched.
    Symlinked directories are treated as entries, not traversed.

    Returns:
        Removed directories in removal order.

    Raises:
        StorageIOError: On the first listing or removal failure. Removals
            already performed are kept; running again finishes the job.
    """

    removed: list[Path] = []
    _prune(Path(base_dir), removed)
    return removed


@dataclass(slots=True)
class MediaStore:
    """Own the on-disk namespace rooted at ``root``.

    Every caller supplied path goes through :func:`resolve_confined` and
    every new filename is minted by ``id_generator``.
    """

    root: Path
    id_generator: ObjectIdGenerator
    extension: str = "webp"
    dir_mode: int = 0o755
    file_mode: int = 0o644
    log: logging.Logger = field(default_factory=lambda: logger)

    def put(self, data: bytes, group_segments: Sequence[str]) -> tuple[Path, str]:
        """Store ``data`` as a new object under ``group_segments``.

        The last segment is the identity key and must be a valid object id.

        Returns:
            The absolute path written and the path relative to ``root``
            joined with ``/``.
        """

        identity = group_segments[-1] if group_segments else ""
        if not is_valid_object_id(identity):
            raise InvalidIdentifierError(f"{identity} is not a valid character ID")

        filename = f"{self.id_generator.new()}.{self.extension}"
        target = resolve_confined(self.root, *group_segments, filename)

        # One retry covers a prune pass removing the fresh parent directory.
        for attempt in range(2):
            self._ensure_parent(target)
            if os.path.lexists(target):
                raise AlreadyExistsError(f"{target} already exists")
            try:
                self._publish(target, data)
                break
            except FileNotFoundError as exc:
                if attempt:
                    raise StorageIOError(f"unable to create {target}: {exc}") from exc

        relative = relative_name(self.root, target)
        self.log.info(
            "storage.put.stored",
            extra={"path": relative, "size_bytes": len(data)},
        )
        return target, relative

    def delete_one(self, segments: Sequence[str]) -> str:
        """Delete the single file addressed by ``segments`` and prune.

        A symlink is removed as an entry; its target is left alone.

        Returns:
            The deleted path relative to ``root``.
        """

        target = resolve_confined(self.root, *segments, follow_last=False)
        if not os.path.lexists(target):
            raise NotFoundError("Image not found")
        if target.is_dir() and not target.is_symlink():
            raise IsDirectoryError("Cannot delete directory")

        try:
            target.unlink()
        except FileNotFoundError as exc:
            raise NotFoundError("Image not found") from exc
        except OSError as exc:
            raise StorageIOError(f"unable to delete {target}: {exc}") from exc

        relative = relative_name(self.root, target)
        self.log.info("storage.delete.removed", extra={"path": relative})
        self.prune()
        return relative

    def delete_subtree(self, segments: Sequence[str]) -> str:
        """Delete everything under ``segments`` and prune.

        The last segment is the identity key and must be a valid object id.

        Returns:
            The deleted path relative to ``root``.
        """

        identity = segments[-1] if segments else ""
        if not is_valid_object_id(identity):
            raise InvalidIdentifierError("Invalid character ID")

        target = resolve_confined(self.root, *segments, follow_last=False)
        if not os.path.lexists(target):
            raise NotFoundError("Character directory not found")

        relative = relative_name(self.root, target)
        self.log.info("storage.delete_subtree.started", extra={"path": relative})
        try:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink()
        except FileNotFoundError as exc:
            raise NotFoundError("Character directory not found") from exc
        except OSError as exc:
            raise StorageIOError(f"unable to delete {target}: {exc}") from exc

        self.prune()
        return relative

    def prune(self) -> list[Path]:
        """Prune empty directories under ``root``; failures are only logged."""
        try:
            removed = prune_empty_dirs(self.root)
        except StorageIOError as exc:
            self.log.warning("storage.prune.failed", extra={"error": str(exc)})
            return []
        if removed:
            self.log.info("storage.prune.removed", extra={"count": len(removed)})
        return removed

    def _ensure_parent(self, target: Path) -> None:
        try:
            os.makedirs(target.parent, mode=self.dir_mode, exist_ok=True)
        except OSError as exc:
            raise StorageIOError(f"unable to create directory {target.parent}: {exc}") from exc

    def _publish(self, target: Path, data: bytes) -> None:
        """Write to a temp file then hard-link it into place.

        ``os.link`` refuses to replace an existing path, so the final
        step is both atomic and write-once.
        """

        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
            )
        except FileNotFoundError:
            raise
        except OSError as exc:
            raise StorageIOError(f"unable to create {target}: {exc}") from exc

        try:
            with os.fdopen(fd, "wb") as sink:
                sink.write(data)
                sink.flush()
                os.fsync(sink.fileno())
            os.chmod(tmp_name, self.file_mode)
            os.link(tmp_name, target)
        except FileExistsError as exc:
            raise AlreadyExistsError(f"{target} already exists") from exc
        except FileNotFoundError:
            raise
        except OSError as exc:
            raise StorageIOError(f"unable to create {target}: {exc}") from exc
        finally:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_name)


__all__ = ["MediaStore", "prune_empty_dirs"]
