from __future__ import annotations

import os
from pathlib import Path

import pytest

from faceclaimer.config import AppConfig

os.environ.setdefault("FACECLAIMER_BASE_URL", "https://images.example.com")


@pytest.fixture()
def storage_root(tmp_path: Path) -> Path:
    """Existing images directory in canonical form."""
    root = tmp_path / "images"
    root.mkdir()
    return Path(os.path.realpath(root))


@pytest.fixture()
def app_config(storage_root: Path) -> AppConfig:
    return AppConfig(
        images_dir=storage_root,
        base_url="https://images.example.com/",
        quality=80,
    )
