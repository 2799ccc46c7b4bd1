"""FFmpeg executor for stereo downmix.

Copies the video stream untouched and re-encodes audio to exactly two
channels. The argument list is fixed.
"""

import logging
import subprocess  # nosec B404 - subprocess is required for FFmpeg invocation
from pathlib import Path

from downmix.core.subprocess_utils import is_tool_failure, run_command
from downmix.exceptions import (
    SpawnFailedError,
    ToolNotFoundError,
    TranscodeFailedError,
)
from downmix.executor import ffmpeg_utils
from downmix.executor.interface import ExecutorResult, require_tool

module_logger = logging.getLogger(__name__)

TARGET_CHANNELS = 2


def build_downmix_command(
    ffmpeg_path: Path | str,
    input_path: Path,
    output_path: Path,
) -> list[str]:
    """Build the ffmpeg command for a stereo downmix.

    Args:
        ffmpeg_path: Path to ffmpeg executable.
        input_path: Source media file.
        output_path: File ffmpeg writes to.

    Returns:
        Command argument list.
    """
    return [
        str(ffmpeg_path),
        "-i",
        str(input_path),
        "-hide_banner",
        "-loglevel",
        "error",
        "-y",
        "-c:v",
        "copy",
        "-ac",
        str(TARGET_CHANNELS),
        str(output_path),
    ]


class FFmpegDownmixExecutor:
    """Executor that writes a stereo-downmixed copy of a media file.

    With atomic_output enabled, ffmpeg writes to a temp file beside the
    destination which is moved into place only after it validates, so an
    interrupted run never leaves a truncated file at the output path.
    """

    def __init__(
        self,
        ffmpeg_path: Path | None = None,
        timeout: float | None = None,
        atomic_output: bool = True,
        strict_stderr: bool = False,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            ffmpeg_path: Optional explicit path to ffmpeg. If not provided,
                ffmpeg is looked up in PATH on first use.
            timeout: Seconds before ffmpeg is killed (None = no limit).
            atomic_output: Write through a temp file and rename on success.
            strict_stderr: Treat any stderr text as failure.
            logger: Logger for progress messages (default: module logger).
        """
        self._configured_path = ffmpeg_path
        self._tool_path: Path | None = None
        self._timeout = timeout
        self._atomic_output = atomic_output
        self._strict_stderr = strict_stderr
        self._logger = logger or module_logger

    @property
    def tool_path(self) -> Path:
        """Get path to ffmpeg, verifying availability.

        Raises:
            ToolNotFoundError: If ffmpeg is not available.
        """
        if self._tool_path is None:
            self._tool_path = require_tool("ffmpeg", self._configured_path)
        return self._tool_path

    def execute(self, input_path: Path, output_path: Path) -> ExecutorResult:
        """Downmix input_path's audio to stereo and write output_path.

        Args:
            input_path: Source media file.
            output_path: Destination; overwritten if it exists.

        Returns:
            ExecutorResult describing the written file.

        Raises:
            ToolNotFoundError: If ffmpeg cannot be found.
            SpawnFailedError: If ffmpeg cannot be started.
            TranscodeFailedError: If ffmpeg fails, times out or writes
                an unusable file.
        """
        target = (
            ffmpeg_utils.create_temp_output(output_path)
            if self._atomic_output
            else output_path
        )
        cmd = build_downmix_command(self.tool_path, input_path, target)

        try:
            self._run_ffmpeg(cmd, output_path)
            if self._atomic_output:
                ffmpeg_utils.commit_output(target, output_path)
        except BaseException:
            if self._atomic_output:
                ffmpeg_utils.discard_temp_output(target)
            raise

        self._logger.info("Successfully downmixed to '%s'", output_path)

        return ExecutorResult(message=f"Downmixed to {output_path}")

    def _run_ffmpeg(self, cmd: list[str], output_path: Path) -> None:
        """Run ffmpeg, logging any non-fatal stderr text as a warning."""
        try:
            _, stderr, returncode = run_command(cmd, timeout=self._timeout)
        except subprocess.TimeoutExpired as e:
            raise TranscodeFailedError(
                f"ffmpeg timed out writing {output_path} after {e.timeout}s"
            ) from e
        except FileNotFoundError as e:
            raise ToolNotFoundError("ffmpeg", str(e)) from e
        except OSError as e:
            raise SpawnFailedError("ffmpeg", str(e)) from e

        if is_tool_failure(returncode, stderr, self._strict_stderr):
            raise TranscodeFailedError(
                stderr.strip() or f"ffmpeg exited with code {returncode}"
            )
        if stderr.strip():
            self._logger.warning(
                "ffmpeg reported while writing '%s':\n%s", output_path, stderr.strip()
            )
