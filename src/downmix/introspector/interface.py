"""MediaIntrospector interface for audio channel inspection."""

from pathlib import Path
from typing import Protocol

from downmix.introspector.models import ChannelCount


class MediaIntrospector(Protocol):
    """Protocol for media introspection implementations.

    Implementations report the channel count of every stream in a media
    file that carries one.
    """

    def get_channel_counts(self, path: Path) -> list[ChannelCount]:
        """Extract channel counts from a media file.

        Args:
            path: Path to an existing media file.

        Returns:
            Channel counts in stream order.

        Raises:
            ToolInvocationError: If the probe could not be run or failed.
            MetadataParseError: If the probe output cannot be interpreted.
        """
        ...
