"""Domain service for image ingestion."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..exceptions import InvalidIdentifierError, InvalidURLError
from ..storage.media_store import MediaStore
from ..storage.object_ids import is_valid_object_id
from ..validators import is_valid_url
from .codec import WebPCodec
from .fetcher import ImageFetcher

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class IngestService:
    """Fetch a remote image, transcode it and persist it write-once."""

    store: MediaStore
    fetcher: ImageFetcher
    codec: WebPCodec
    default_quality: int = 90
    log: logging.Logger = field(default_factory=lambda: logger)

    async def ingest(
        self,
        source_url: str,
        group_segments: Sequence[str],
        quality: int | None = None,
    ) -> str:
        """Store the image at ``source_url`` under ``group_segments``.

        URL and identity checks run before any network access.

        Returns:
            Path of the stored image relative to the storage root.
        """

        if not is_valid_url(source_url):
            raise InvalidURLError("invalid image URL")
        identity = group_segments[-1] if group_segments else ""
        if not is_valid_object_id(identity):
            raise InvalidIdentifierError(f"{identity} is not a valid character ID")

        data = await self.fetcher.fetch(source_url)
        payload = await asyncio.to_thread(
            self._transcode,
            data,
            self.default_quality if quality is None else quality,
        )
        _, relative = await asyncio.to_thread(self.store.put, payload, list(group_segments))
        self.log.info(
            "ingest.completed",
            extra={"url": source_url, "path": relative, "size_bytes": len(payload)},
        )
        return relative

    def _transcode(self, data: bytes, quality: int) -> bytes:
        image = self.codec.decode(data)
        try:
            return self.codec.encode(image, quality)
        finally:
            image.close()
