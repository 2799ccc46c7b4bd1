"""FFprobe-based implementation of MediaIntrospector protocol."""

import logging
import subprocess  # nosec B404 - subprocess is required for ffprobe invocation
from pathlib import Path

from downmix.core.subprocess_utils import is_tool_failure, run_command
from downmix.exceptions import (
    ProbeFailedError,
    SpawnFailedError,
    ToolNotFoundError,
)
from downmix.executor.interface import require_tool
from downmix.introspector.models import ChannelCount
from downmix.introspector.parsers import extract_channel_counts, parse_probe_output

module_logger = logging.getLogger(__name__)


class FFprobeIntrospector:
    """ffprobe-based implementation of MediaIntrospector protocol.

    Reads stream metadata as JSON and reports the channel count of every
    stream that has one.
    """

    def __init__(
        self,
        ffprobe_path: Path | None = None,
        timeout: float | None = None,
        strict_stderr: bool = False,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the introspector.

        Args:
            ffprobe_path: Optional explicit path to ffprobe. If not provided,
                ffprobe is looked up in PATH on first use.
            timeout: Seconds before ffprobe is killed (None = no limit).
            strict_stderr: Treat any stderr text as failure.
            logger: Logger for progress messages (default: module logger).
        """
        self._configured_path = ffprobe_path
        self._tool_path: Path | None = None
        self._timeout = timeout
        self._strict_stderr = strict_stderr
        self._logger = logger or module_logger

    @property
    def tool_path(self) -> Path:
        """Get path to ffprobe, verifying availability.

        Raises:
            ToolNotFoundError: If ffprobe is not available.
        """
        if self._tool_path is None:
            self._tool_path = require_tool("ffprobe", self._configured_path)
        return self._tool_path

    def build_command(self, path: Path) -> list[str]:
        """Build the ffprobe argument list for a file."""
        return [
            str(self.tool_path),
            str(path),
            "-show_streams",
            "-loglevel",
            "error",
            "-print_format",
            "json",
        ]

    def get_channel_counts(self, path: Path) -> list[ChannelCount]:
        """Extract channel counts from a media file.

        Args:
            path: Path to an existing media file.

        Returns:
            Channel counts in stream order.

        Raises:
            ToolNotFoundError: If ffprobe cannot be found.
            SpawnFailedError: If ffprobe cannot be started.
            ProbeFailedError: If ffprobe fails or times out.
            MetadataParseError: If the output cannot be interpreted.
        """
        stdout = self._run_ffprobe(path)
        counts = extract_channel_counts(parse_probe_output(stdout))

        for count in counts:
            self._logger.info("Found %d channels for '%s'", count.channels, path)

        return counts

    def _run_ffprobe(self, path: Path) -> str:
        """Run ffprobe and return its standard output.

        Raises:
            ToolNotFoundError: If the executable disappeared.
            SpawnFailedError: If the process cannot be spawned.
            ProbeFailedError: On failure or timeout.
        """
        cmd = self.build_command(path)
        try:
            stdout, stderr, returncode = run_command(cmd, timeout=self._timeout)
        except subprocess.TimeoutExpired as e:
            raise ProbeFailedError(
                f"ffprobe timed out for {path} after {e.timeout}s"
            ) from e
        except FileNotFoundError as e:
            raise ToolNotFoundError("ffprobe", str(e)) from e
        except OSError as e:
            raise SpawnFailedError("ffprobe", str(e)) from e

        if is_tool_failure(returncode, stderr, self._strict_stderr):
            raise ProbeFailedError(
                stderr.strip() or f"ffprobe exited with code {returncode}"
            )
        if stderr.strip():
            self._logger.warning("ffprobe reported for '%s':\n%s", path, stderr.strip())

        return stdout
