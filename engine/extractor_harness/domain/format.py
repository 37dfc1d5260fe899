"""
Track format model.

Describes one elementary stream as announced by an extractor. Only the
fields an extractor sets are meaningful; the rest stay None.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Format(BaseModel):
    """Immutable description of a track's media format."""

    model_config = ConfigDict(frozen=True)

    id: str | None = Field(default=None, description="Track identifier within the container")
    sample_mime_type: str | None = Field(default=None, description="MIME type of samples")
    codecs: str | None = Field(default=None, description="RFC 6381 codecs string")
    bitrate: int | None = Field(default=None, ge=0)
    max_input_size: int | None = Field(default=None, ge=0)

    # Video
    width: int | None = Field(default=None, ge=0)
    height: int | None = Field(default=None, ge=0)

    # Audio
    sample_rate: int | None = Field(default=None, ge=0)
    channel_count: int | None = Field(default=None, ge=0)

    language: str | None = None

    def dump(self) -> dict[str, Any]:
        """Field-for-field record of the format, unset fields included."""
        return self.model_dump(mode="json")
