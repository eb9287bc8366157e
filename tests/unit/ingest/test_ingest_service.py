from __future__ import annotations

import io
import re
from pathlib import Path

import httpx
import pytest
from PIL import Image

from faceclaimer.exceptions import (
    DecodeError,
    FetchError,
    InvalidIdentifierError,
    InvalidURLError,
)
from faceclaimer.ingest.codec import WebPCodec
from faceclaimer.ingest.fetcher import ImageFetcher
from faceclaimer.ingest.ingest_service import IngestService
from faceclaimer.storage.media_store import MediaStore
from faceclaimer.storage.object_ids import ObjectIdGenerator
from tests.helpers.images import CHAR_ID, make_image_bytes

pytestmark = pytest.mark.unit


class RecordingHandler:
    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


def build_service(
    storage_root: Path, handler: RecordingHandler, *, max_bytes: int = 1024 * 1024
) -> IngestService:
    return IngestService(
        store=MediaStore(root=storage_root, id_generator=ObjectIdGenerator()),
        fetcher=ImageFetcher(transport=httpx.MockTransport(handler), max_bytes=max_bytes),
        codec=WebPCodec(),
    )


@pytest.mark.asyncio
async def test_ingest_jpeg_stores_webp(storage_root: Path) -> None:
    handler = RecordingHandler(httpx.Response(200, content=make_image_bytes("JPEG")))
    service = build_service(storage_root, handler)

    relative = await service.ingest("https://cdn.example.com/portrait.jpg", [CHAR_ID], 90)

    assert re.fullmatch(rf"{CHAR_ID}/[0-9a-f]{{24}}\.webp", relative)
    stored = storage_root / relative
    assert stored.stat().st_size > 0
    with Image.open(io.BytesIO(stored.read_bytes())) as image:
        assert image.format == "WEBP"


@pytest.mark.asyncio
async def test_ingest_uses_default_quality(storage_root: Path) -> None:
    handler = RecordingHandler(httpx.Response(200, content=make_image_bytes("PNG")))
    service = build_service(storage_root, handler)

    relative = await service.ingest("https://cdn.example.com/a.png", [CHAR_ID])

    assert (storage_root / relative).exists()


@pytest.mark.asyncio
async def test_ingest_rejects_ftp_before_network(storage_root: Path) -> None:
    handler = RecordingHandler(httpx.Response(200, content=make_image_bytes()))
    service = build_service(storage_root, handler)

    with pytest.raises(InvalidURLError):
        await service.ingest("ftp://example.com/x.jpg", [CHAR_ID])

    assert handler.requests == []
    assert list(storage_root.iterdir()) == []


@pytest.mark.asyncio
async def test_ingest_rejects_bad_character_before_network(storage_root: Path) -> None:
    handler = RecordingHandler(httpx.Response(200, content=make_image_bytes()))
    service = build_service(storage_root, handler)

    with pytest.raises(InvalidIdentifierError):
        await service.ingest("https://cdn.example.com/a.jpg", ["invalid-not-objectid"])

    assert handler.requests == []


@pytest.mark.asyncio
async def test_ingest_non_image_fails_decode(storage_root: Path) -> None:
    handler = RecordingHandler(httpx.Response(200, content=b"<html>not an image</html>"))
    service = build_service(storage_root, handler)

    with pytest.raises(DecodeError):
        await service.ingest("https://cdn.example.com/a.jpg", [CHAR_ID])

    assert list(storage_root.iterdir()) == []


@pytest.mark.asyncio
async def test_ingest_truncated_download_fails_decode(storage_root: Path) -> None:
    buffer = io.BytesIO()
    Image.effect_noise((64, 64), 64).save(buffer, format="PNG")
    handler = RecordingHandler(httpx.Response(200, content=buffer.getvalue()))
    service = build_service(storage_root, handler, max_bytes=len(buffer.getvalue()) // 2)

    with pytest.raises(DecodeError):
        await service.ingest("https://cdn.example.com/a.png", [CHAR_ID])


@pytest.mark.asyncio
async def test_ingest_propagates_fetch_error(storage_root: Path) -> None:
    handler = RecordingHandler(httpx.Response(404))
    service = build_service(storage_root, handler)

    with pytest.raises(FetchError):
        await service.ingest("https://cdn.example.com/a.jpg", [CHAR_ID])
