"""Dependency wiring helpers."""

from __future__ import annotations

from fastapi import FastAPI

from .api import register_error_handlers, router
from .config import AppConfig
from .ingest.codec import WebPCodec
from .ingest.fetcher import ImageFetcher
from .ingest.ingest_service import IngestService
from .storage.media_store import MediaStore
from .storage.object_ids import ObjectIdGenerator


def build_media_store(config: AppConfig, codec: WebPCodec) -> MediaStore:
    return MediaStore(
        root=config.images_dir,
        id_generator=ObjectIdGenerator(),
        extension=codec.extension,
    )


def include_routers(
    app: FastAPI,
    config: AppConfig,
    *,
    fetcher: ImageFetcher | None = None,
) -> None:
    """Build services, attach them to ``app.state`` and mount routes."""
    codec = WebPCodec()
    media_store = build_media_store(config, codec)
    ingest_service = IngestService(
        store=media_store,
        fetcher=fetcher
        or ImageFetcher(
            timeout_seconds=config.fetch_timeout_seconds,
            max_bytes=config.max_download_bytes,
        ),
        codec=codec,
        default_quality=config.quality,
    )

    app.state.config = config
    app.state.media_store = media_store
    app.state.ingest_service = ingest_service

    register_error_handlers(app)
    app.include_router(router)
