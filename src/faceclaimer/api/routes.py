"""HTTP routes for image upload and deletion."""

from __future__ import annotations

import asyncio

import structlog
from fastapi import APIRouter, Depends, Request, status

from ..config import AppConfig
from ..ingest.ingest_service import IngestService
from ..storage.media_store import MediaStore
from .links import build_public_url
from .schemas import UploadRequest

router = APIRouter(tags=["images"])
logger = structlog.get_logger(__name__)


def get_config(request: Request) -> AppConfig:
    try:
        return request.app.state.config  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - wiring error
        raise RuntimeError("AppConfig is not configured") from exc


def get_ingest_service(request: Request) -> IngestService:
    try:
        return request.app.state.ingest_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - wiring error
        raise RuntimeError("IngestService is not configured") from exc


def get_media_store(request: Request) -> MediaStore:
    try:
        return request.app.state.media_store  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - wiring error
        raise RuntimeError("MediaStore is not configured") from exc


@router.post("/image/upload", status_code=status.HTTP_201_CREATED)
async def upload_image(
    payload: UploadRequest,
    config: AppConfig = Depends(get_config),
    service: IngestService = Depends(get_ingest_service),
) -> str:
    """Download, convert and store an image; return its public URL."""
    logger.info(
        "image.upload.requested",
        user=payload.user,
        guild=payload.guild,
        charid=payload.charid,
    )
    relative = await service.ingest(payload.image_url, [payload.charid], config.quality)
    return build_public_url(config.base_url, relative)


@router.delete("/image/{image_path:path}")
async def delete_image(
    image_path: str,
    store: MediaStore = Depends(get_media_store),
) -> str:
    """Delete a single stored image."""
    logger.info("image.delete.requested", path=image_path)
    relative = await asyncio.to_thread(store.delete_one, [image_path])
    return f"Deleted {relative}"


@router.delete("/character/{char_id}")
async def delete_character(
    char_id: str,
    store: MediaStore = Depends(get_media_store),
) -> str:
    """Delete every stored image of a character."""
    logger.info("character.delete.requested", charid=char_id)
    await asyncio.to_thread(store.delete_subtree, [char_id])
    return f"Deleted all images: {char_id}"


@router.get("/healthz")
async def healthz(config: AppConfig = Depends(get_config)) -> dict[str, object]:
    return {"status": "ok", "storage_present": config.images_dir.is_dir()}
