"""Executor result type and tool resolution utilities.

This module defines the result returned by executors and the helpers that
locate external tools, honoring configured paths before the system PATH.
"""

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from downmix.exceptions import ToolNotFoundError

logger = logging.getLogger(__name__)

_INSTALL_HINT = (
    "Install ffmpeg, or set DOWNMIX_{env}_PATH / [tools] {tool} in the config file."
)


@dataclass(frozen=True)
class ExecutorResult:
    """Result of an executor operation."""

    message: str = ""
    """Human-readable message describing the result."""


class Executor(Protocol):
    """Protocol for execution adapters.

    Executors write a transformed copy of a media file to a destination.
    """

    def execute(self, input_path: Path, output_path: Path) -> ExecutorResult:
        """Write the transformed copy of input_path to output_path.

        Args:
            input_path: Source media file.
            output_path: Destination path.

        Returns:
            ExecutorResult describing the written file.

        Raises:
            ToolInvocationError: If the external tool fails.
        """
        ...


def _is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def get_tool_path(tool_name: str, configured: Path | None = None) -> Path | None:
    """Get path to a tool, or None if not available.

    Args:
        tool_name: Name of the tool (ffmpeg, ffprobe).
        configured: Explicit path from configuration, checked first.

    Returns:
        Path to the tool or None if not available.
    """
    if configured is not None:
        if _is_executable(configured):
            return configured
        logger.warning(
            "Configured path for %s is not an executable file: %s",
            tool_name,
            configured,
        )
        return None

    found = shutil.which(tool_name)
    return Path(found) if found else None


def require_tool(tool_name: str, configured: Path | None = None) -> Path:
    """Get path to a required tool, raising an error if not available.

    Args:
        tool_name: Name of the tool to find.
        configured: Explicit path from configuration, checked first.

    Returns:
        Path to the tool executable.

    Raises:
        ToolNotFoundError: If the tool is not available.
    """
    path = get_tool_path(tool_name, configured)
    if path is None:
        raise ToolNotFoundError(
            tool_name,
            _INSTALL_HINT.format(env=tool_name.upper(), tool=tool_name),
        )
    return path
