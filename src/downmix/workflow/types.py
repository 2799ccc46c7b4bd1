"""Value types passed through a downmix run."""

from dataclasses import dataclass, field
from pathlib import Path

from downmix.introspector.models import ChannelCount


@dataclass(frozen=True)
class DownmixRequest:
    """Immutable description of one invocation."""

    input_path: Path
    output_path: Path
    force: bool = False
    """Allow overwriting an existing file at output_path."""


@dataclass(frozen=True)
class DownmixResult:
    """Outcome of a completed run."""

    input_path: Path
    output_path: Path
    downmixed: bool
    channel_counts: tuple[ChannelCount, ...] = field(default_factory=tuple)
    message: str = ""
