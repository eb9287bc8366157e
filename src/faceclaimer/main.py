"""FastAPI application entry point.

Run with ``uvicorn faceclaimer.main:create_app --factory`` or the
``faceclaimer`` command.
"""

from __future__ import annotations

from fastapi import FastAPI

from .config import AppConfig
from .dependencies import include_routers
from .ingest.fetcher import ImageFetcher
from .logging import configure_logging


def create_app(
    config: AppConfig | None = None,
    *,
    fetcher: ImageFetcher | None = None,
) -> FastAPI:
    """Build FastAPI instance with configured dependencies."""
    cfg = config or AppConfig()  # type: ignore[call-arg]
    configure_logging(cfg.log_level)
    app = FastAPI(
        title="faceclaimer",
        description="Unauthenticated API for storing character images. Run behind a trusted perimeter.",
    )
    include_routers(app, cfg, fetcher=fetcher)
    return app
