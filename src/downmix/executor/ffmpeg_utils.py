"""Write-then-move helpers for ffmpeg output.

ffmpeg writes to a hidden temp file beside the destination; the file is
checked and renamed over the destination only once ffmpeg has succeeded.
"""

import logging
import os
from pathlib import Path

from downmix.exceptions import TranscodeFailedError

logger = logging.getLogger(__name__)

TEMP_PREFIX = ".downmix_temp_"


def create_temp_output(output_path: Path) -> Path:
    """Return the temp path ffmpeg writes to before the final move.

    It sits beside the output and keeps its suffix, from which ffmpeg picks
    the container format.
    """
    return output_path.with_name(f"{TEMP_PREFIX}{output_path.name}")


def commit_output(temp_path: Path, output_path: Path) -> None:
    """Move a finished temp file over output_path.

    Raises:
        TranscodeFailedError: If the temp file is missing or empty, or the
            rename fails. output_path is untouched in every case.
    """
    try:
        size = temp_path.stat().st_size
    except FileNotFoundError as e:
        raise TranscodeFailedError(f"ffmpeg produced no output at {temp_path}") from e
    except OSError as e:
        raise TranscodeFailedError(f"Could not inspect {temp_path}: {e}") from e
    if size == 0:
        raise TranscodeFailedError(f"ffmpeg produced an empty file at {temp_path}")

    try:
        os.replace(temp_path, output_path)
    except OSError as e:
        raise TranscodeFailedError(
            f"Could not move {temp_path} to {output_path}: {e}"
        ) from e
    logger.debug("Moved %s (%d bytes) to %s", temp_path, size, output_path)


def discard_temp_output(temp_path: Path) -> None:
    """Delete a temp file left by a failed or interrupted run, if any."""
    try:
        temp_path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove temp file %s: %s", temp_path, e)
