"""Request payloads for the image API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class UploadRequest(BaseModel):
    """Body of ``POST /image/upload``."""

    guild: int | None = Field(default=None, description="Owning guild, logged only.")
    user: int | None = Field(default=None, description="Uploading user, logged only.")
    charid: str = Field(description="Character object id (24 hex characters).")
    image_url: str = Field(description="http(s) URL of the source image.")
