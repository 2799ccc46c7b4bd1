"""Core utilities package.

Pure helpers shared across the codebase, currently the subprocess wrapper
used to invoke ffprobe and ffmpeg.
"""

from downmix.core.subprocess_utils import is_tool_failure, run_command

__all__ = [
    "is_tool_failure",
    "run_command",
]
