"""Image ingestion: bounded fetch, WebP transcode, write-once persist."""

from .codec import WebPCodec
from .fetcher import ImageFetcher
from .ingest_service import IngestService

__all__ = ["ImageFetcher", "IngestService", "WebPCodec"]
