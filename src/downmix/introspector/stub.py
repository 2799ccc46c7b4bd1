"""Stub implementation of MediaIntrospector for testing."""

from pathlib import Path

from downmix.introspector.models import ChannelCount


class StubIntrospector:
    """Returns canned channel counts without running ffprobe."""

    def __init__(self, channels: list[int] | None = None) -> None:
        """Initialize the stub.

        Args:
            channels: Channel count per stream, in stream order.
        """
        self._channels = list(channels or [])
        self.calls: list[Path] = []

    def get_channel_counts(self, path: Path) -> list[ChannelCount]:
        self.calls.append(path)
        return [
            ChannelCount(stream_index=i, channels=n, codec_type="audio")
            for i, n in enumerate(self._channels)
        ]
