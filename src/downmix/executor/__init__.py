"""Executor module for downmix.

- FFmpegDownmixExecutor: writes a stereo copy with video stream-copied
- ExecutorResult: outcome of an executor run
- require_tool / get_tool_path: external tool resolution
"""

from downmix.executor.ffmpeg_downmix import (
    TARGET_CHANNELS,
    FFmpegDownmixExecutor,
    build_downmix_command,
)
from downmix.executor.interface import (
    Executor,
    ExecutorResult,
    get_tool_path,
    require_tool,
)

__all__ = [
    "TARGET_CHANNELS",
    "Executor",
    "ExecutorResult",
    "FFmpegDownmixExecutor",
    "build_downmix_command",
    "get_tool_path",
    "require_tool",
]
