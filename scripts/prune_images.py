"""Cron entry point removing empty directories left in the images tree."""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from faceclaimer.exceptions import StorageIOError
from faceclaimer.storage.media_store import prune_empty_dirs


@dataclass(slots=True)
class PruneSummary:
    images_dir: Path
    directories_removed: int


def perform_prune(images_dir: Path) -> PruneSummary:
    """Prune ``images_dir`` and return summary counters."""
    if not images_dir.is_dir():
        raise StorageIOError(f"images-dir does not exist: {images_dir}")
    removed = prune_empty_dirs(images_dir)
    return PruneSummary(images_dir=images_dir, directories_removed=len(removed))


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Remove empty directories under the images directory.")
    parser.add_argument(
        "--images-dir",
        default=os.getenv("FACECLAIMER_IMAGES_DIR", "images"),
        help="Images directory (default: $FACECLAIMER_IMAGES_DIR or ./images).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv or [])
    try:
        summary = perform_prune(Path(args.images_dir).absolute())
    except StorageIOError as exc:
        print(f"prune failed: {exc}", file=sys.stderr)
        return 2

    print(
        f"prune done, images_dir={summary.images_dir}, directories_removed={summary.directories_removed}",
        file=sys.stdout,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
