"""
Pydantic v2 models for the transcription backend's wire format.

The backend speaks camelCase with a Mongo-style ``_id``; the models expose
snake_case attributes and accept either spelling on input.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Transcription
# ---------------------------------------------------------------------------


class TranscriptionRecord(BaseModel):
    """One stored transcription returned by ``POST /transcribe`` or ``GET /transcriptions``."""

    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    id: str = Field(alias="_id")
    transcript: str = ""
    mime_type: str | None = Field(default=None, alias="mimeType")
    size: int | None = None
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @field_validator("transcript", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        # null transcript reads as empty
        return "" if value is None else value


# ---------------------------------------------------------------------------
# Upload payload
# ---------------------------------------------------------------------------


class AudioFile(BaseModel):
    """A named audio payload ready for the multipart ``audio`` field."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.content)
