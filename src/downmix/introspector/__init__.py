"""Introspector module for downmix.

This module provides media introspection capabilities:

- MediaIntrospector: Protocol defining the introspection interface
- FFprobeIntrospector: Production implementation using ffprobe
- StubIntrospector: Stub implementation for testing
- ChannelCount: Channel count reported for one stream
"""

from downmix.introspector.ffprobe import FFprobeIntrospector
from downmix.introspector.interface import MediaIntrospector
from downmix.introspector.models import ChannelCount, ProbeReport, StreamRecord
from downmix.introspector.parsers import extract_channel_counts, parse_probe_output
from downmix.introspector.stub import StubIntrospector

__all__ = [
    "MediaIntrospector",
    "FFprobeIntrospector",
    "StubIntrospector",
    "ChannelCount",
    "ProbeReport",
    "StreamRecord",
    "extract_channel_counts",
    "parse_probe_output",
]
