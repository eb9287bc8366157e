"""Pillow backed decode/encode for stored images."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field

from PIL import Image

from ..exceptions import DecodeError, EncodeError

logger = logging.getLogger(__name__)

_ALPHA_MODES = frozenset({"LA", "La", "PA", "RGBa"})


def _normalise_mode(image: Image.Image) -> Image.Image:
    if image.mode in ("RGB", "RGBA"):
        return image
    has_alpha = image.mode in _ALPHA_MODES or "transparency" in image.info
    return image.convert("RGBA" if has_alpha else "RGB")


@dataclass(slots=True)
class WebPCodec:
    """Decode any raster format Pillow knows and encode lossy WebP.

    ``method=0`` is the fastest WebP effort level. Output is marginally
    larger than with higher methods but encoding is much faster.
    """

    method: int = 0
    extension: str = "webp"
    log: logging.Logger = field(default_factory=lambda: logger)

    def decode(self, data: bytes) -> Image.Image:
        """Decode ``data`` into a fully loaded image (first frame only)."""
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except Image.DecompressionBombError as exc:
            raise DecodeError(f"failed to decode image: {exc}") from exc
        except (EOFError, OSError, SyntaxError, ValueError) as exc:
            raise DecodeError(f"failed to decode image: {exc}") from exc
        self.log.info(
            "codec.decoded",
            extra={"format": image.format, "mode": image.mode, "size": image.size},
        )
        return image

    def encode(self, image: Image.Image, quality: int) -> bytes:
        """Encode ``image`` as lossy WebP at ``quality`` (1-100)."""
        if not 1 <= quality <= 100:
            raise EncodeError("quality must be between 1 and 100")
        buffer = io.BytesIO()
        try:
            _normalise_mode(image).save(
                buffer,
                format="WEBP",
                quality=quality,
                method=self.method,
                lossless=False,
            )
        except (OSError, ValueError) as exc:
            raise EncodeError(f"failed to encode image: {exc}") from exc
        return buffer.getvalue()
