"""Pydantic models for ffprobe stream reports."""

from dataclasses import dataclass
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

ChannelValue = Annotated[StrictInt, Field(ge=0)]


class StreamRecord(BaseModel):
    """One entry of ffprobe's ``streams`` array.

    ``channels`` is the only field that decides anything, so it is the only
    one validated strictly: strings, floats and booleans are rejected rather
    than coerced. The remaining fields are context for log lines and read as
    None when ffprobe reports something unexpected.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    index: int | None = None
    codec_type: str | None = None
    codec_name: str | None = None
    channel_layout: str | None = None
    channels: ChannelValue | None = None

    @field_validator("index", mode="before")
    @classmethod
    def lenient_index(cls, v: Any) -> int | None:
        """Keep integer indexes only."""
        if isinstance(v, int) and not isinstance(v, bool):
            return v
        return None

    @field_validator("codec_type", "codec_name", "channel_layout", mode="before")
    @classmethod
    def lenient_label(cls, v: Any) -> str | None:
        """Keep string labels only."""
        return v if isinstance(v, str) else None


class ProbeReport(BaseModel):
    """Parsed ``-show_streams`` output."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    streams: list[StreamRecord] = Field(default_factory=list)


@dataclass(frozen=True)
class ChannelCount:
    """Channel count reported for a single stream."""

    stream_index: int
    channels: int
    codec_type: str | None = None
