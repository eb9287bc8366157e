"""Command line entry point starting the HTTP server."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

import uvicorn
from pydantic import ValidationError

from .config import AppConfig
from .main import create_app

logger = logging.getLogger(__name__)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="faceclaimer",
        description=(
            "API for managing character profile images. Images are converted to "
            "WebP and stored as <charId>/<imageId>.webp under the images directory. "
            "THIS API TAKES NO AUTHENTICATION."
        ),
    )
    parser.add_argument("--port", type=int, help="Port to run the server on (default 8080)")
    parser.add_argument("--host", help="Interface to bind (default 0.0.0.0)")
    parser.add_argument("--images-dir", help="Directory to store images (default images)")
    parser.add_argument(
        "--base-url",
        help="Base URL for constructing image URLs (e.g., https://example.com)",
    )
    parser.add_argument("--quality", type=int, help="WebP quality 1-100 (default 90)")
    parser.add_argument("--log-level", help="Logging level (default INFO)")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> AppConfig:
    """Merge command line flags over ``FACECLAIMER_*`` environment settings."""
    overrides: dict[str, Any] = {
        key: value
        for key, value in {
            "port": args.port,
            "host": args.host,
            "images_dir": args.images_dir,
            "base_url": args.base_url,
            "quality": args.quality,
            "log_level": args.log_level,
        }.items()
        if value is not None
    }
    return AppConfig(**overrides)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    try:
        config = build_config(args)
    except ValidationError as exc:
        print(f"invalid configuration: {exc}", file=sys.stderr)
        return 1

    app = create_app(config)
    logger.info(
        "server.starting",
        extra={
            "images_dir": str(config.images_dir),
            "base_url": config.base_url,
            "quality": config.quality,
        },
    )
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
