from __future__ import annotations

from pathlib import Path

import pytest

from faceclaimer.exceptions import StorageIOError
from faceclaimer.storage.media_store import prune_empty_dirs

pytestmark = pytest.mark.unit


def _snapshot(root: Path) -> list[str]:
    return sorted(path.relative_to(root).as_posix() for path in root.rglob("*"))


def test_single_empty_directory(storage_root: Path) -> None:
    (storage_root / "empty1").mkdir()

    removed = prune_empty_dirs(storage_root)

    assert removed == [storage_root / "empty1"]
    assert storage_root.is_dir()


def test_nested_empty_directories_removed_post_order(storage_root: Path) -> None:
    (storage_root / "level1" / "level2" / "level3").mkdir(parents=True)

    removed = prune_empty_dirs(storage_root)

    assert removed == [
        storage_root / "level1" / "level2" / "level3",
        storage_root / "level1" / "level2",
        storage_root / "level1",
    ]
    assert list(storage_root.iterdir()) == []


def test_mixed_tree(storage_root: Path) -> None:
    (storage_root / "empty1").mkdir()
    (storage_root / "nonempty" / "subdir_empty").mkdir(parents=True)
    (storage_root / "nonempty" / "subdir_nonempty").mkdir()
    (storage_root / "nonempty" / "file.txt").write_text("test")
    (storage_root / "nonempty" / "subdir_nonempty" / "another.txt").write_text("test")

    prune_empty_dirs(storage_root)

    assert _snapshot(storage_root) == [
        "nonempty",
        "nonempty/file.txt",
        "nonempty/subdir_nonempty",
        "nonempty/subdir_nonempty/another.txt",
    ]


def test_parent_becomes_empty_after_children(storage_root: Path) -> None:
    (storage_root / "parent" / "child1").mkdir(parents=True)
    (storage_root / "parent" / "child2").mkdir()

    prune_empty_dirs(storage_root)

    assert not (storage_root / "parent").exists()


def test_files_are_never_removed(storage_root: Path) -> None:
    (storage_root / "top.webp").write_bytes(b"x")
    (storage_root / "a").mkdir()
    (storage_root / "a" / ".hidden").write_bytes(b"")

    prune_empty_dirs(storage_root)

    assert _snapshot(storage_root) == ["a", "a/.hidden", "top.webp"]


def test_pruning_is_idempotent(storage_root: Path) -> None:
    (storage_root / "x" / "y").mkdir(parents=True)
    (storage_root / "k" / "v").mkdir(parents=True)
    (storage_root / "k" / "v" / "f.webp").write_bytes(b"x")

    prune_empty_dirs(storage_root)
    once = _snapshot(storage_root)
    assert prune_empty_dirs(storage_root) == []
    assert _snapshot(storage_root) == once


def test_empty_base_is_kept(storage_root: Path) -> None:
    assert prune_empty_dirs(storage_root) == []
    assert storage_root.is_dir()


def test_symlinked_directories_are_not_followed(storage_root: Path, tmp_path: Path) -> None:
    outside = tmp_path / "outside"
    (outside / "empty").mkdir(parents=True)
    (storage_root / "link").symlink_to(outside, target_is_directory=True)

    prune_empty_dirs(storage_root)

    assert (outside / "empty").is_dir()
    assert (storage_root / "link").is_symlink()


def test_missing_base_fails(tmp_path: Path) -> None:
    with pytest.raises(StorageIOError):
        prune_empty_dirs(tmp_path / "definitely-does-not-exist")
