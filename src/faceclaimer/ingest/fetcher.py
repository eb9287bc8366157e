"""Bounded download of remote images."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

import httpx

from ..config import DEFAULT_MAX_DOWNLOAD_BYTES
from ..exceptions import FetchError, InvalidURLError
from ..validators import is_valid_url

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ImageFetcher:
    """Download a URL under a whole-request timeout and a size cap.

    Bytes beyond ``max_bytes`` are discarded, not rejected; the truncated
    body is returned and a warning is logged.
    """

    timeout_seconds: float = 30.0
    max_bytes: int = DEFAULT_MAX_DOWNLOAD_BYTES
    transport: httpx.AsyncBaseTransport | None = None
    log: logging.Logger = field(default_factory=lambda: logger)

    async def fetch(self, url: str) -> bytes:
        if not is_valid_url(url):
            raise InvalidURLError("invalid image URL")
        try:
            data = await asyncio.wait_for(self._download(url), timeout=self.timeout_seconds)
        except asyncio.TimeoutError as exc:
            raise FetchError("failed to download image: timed out") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchError(f"failed to download image: {exc}") from exc
        self.log.info("ingest.fetch.downloaded", extra={"url": url, "size_bytes": len(data)})
        return data

    async def _download(self, url: str) -> bytes:
        async with httpx.AsyncClient(
            timeout=self.timeout_seconds,
            follow_redirects=True,
            transport=self.transport,
        ) as client:
            async with client.stream("GET", url) as response:
                if response.status_code != httpx.codes.OK:
                    raise FetchError(
                        f"failed to download image: status {response.status_code}"
                    )
                return await self._read_capped(response, url)

    async def _read_capped(self, response: httpx.Response, url: str) -> bytes:
        chunks: list[bytes] = []
        received = 0
        async for chunk in response.aiter_bytes():
            remaining = self.max_bytes - received
            if len(chunk) > remaining:
                chunks.append(chunk[:remaining])
                received += remaining
                self.log.warning(
                    "ingest.fetch.truncated",
                    extra={"url": url, "limit_bytes": self.max_bytes},
                )
                break
            chunks.append(chunk)
            received += len(chunk)
        return b"".join(chunks)
