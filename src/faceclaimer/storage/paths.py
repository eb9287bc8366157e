"""Confinement of untrusted path segments to a storage root."""

from __future__ import annotations

import os
from pathlib import Path

from ..exceptions import ConfinementError


def _canonical(path: str) -> str:
    if "\x00" in path:
        raise ConfinementError(f"invalid path: {path!r}")
    try:
        return os.path.realpath(path)
    except (OSError, ValueError) as exc:
        raise ConfinementError(f"invalid path: {path!r}") from exc


def resolve_confined(
    root: str | os.PathLike[str], *segments: str, follow_last: bool = True
) -> Path:
    """Resolve ``segments`` under ``root`` and return the canonical absolute path.

    Segments are joined with the path separator before normalisation, so an
    absolute-looking segment such as ``"/etc"`` is re-rooted under ``root``
    instead of replacing it, and ``..`` components collapse against what was
    already joined.

    Both sides are canonicalised with :func:`os.path.realpath`, which also
    resolves symlinks in components that already exist. Neither ``root`` nor
    the target has to exist. A symlink created after resolution is not
    guarded against.

    With ``follow_last=False`` only the parent is canonicalised and the last
    component is kept as named, so a symlink leaf addresses the link itself.

    Raises:
        ConfinementError: If the result is not ``root`` or a descendant of it.
    """

    base = os.fspath(root)
    parts = [base, *(segment for segment in segments if segment)]
    joined = os.path.normpath(os.sep.join(parts))
    if "\x00" in joined:
        raise ConfinementError(f"invalid path: {joined!r}")

    canonical_root = _canonical(base)
    head, tail = os.path.split(joined)
    if follow_last or tail in ("", os.curdir, os.pardir):
        canonical_target = _canonical(joined)
    else:
        canonical_target = os.path.join(_canonical(head or os.curdir), tail)

    prefix = canonical_root.rstrip(os.sep) + os.sep
    if not (canonical_target + os.sep).startswith(prefix):
        raise ConfinementError(f"{canonical_target} is not in {prefix}")
    return Path(canonical_target)


def relative_name(root: str | os.PathLike[str], path: str | os.PathLike[str]) -> str:
    """Return ``path`` relative to ``root`` joined with forward slashes."""

    canonical_root = Path(_canonical(os.fspath(root)))
    return Path(path).relative_to(canonical_root).as_posix()


__all__ = ["relative_name", "resolve_confined"]
