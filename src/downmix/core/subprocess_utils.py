"""Subprocess wrapper shared by the ffprobe and ffmpeg steps.

Both tools are run to completion with stdout and stderr captured
separately and decoded as text, undecodable bytes replaced.
"""

from __future__ import annotations

import logging
import shlex
import subprocess  # nosec B404 - subprocess is required for ffprobe/ffmpeg
import time
from collections.abc import Sequence
from pathlib import Path

logger = logging.getLogger(__name__)


def _elapsed(started: float) -> float:
    return round(time.monotonic() - started, 3)


def run_command(
    args: Sequence[str | Path],
    timeout: float | None = None,
) -> tuple[str, str, int]:
    """Run a tool and return ``(stdout, stderr, returncode)``.

    A non-zero exit is returned, not raised; callers decide what counts as
    failure (see is_tool_failure).

    Args:
        args: Executable followed by its arguments. Paths are stringified.
        timeout: Seconds before the child is killed, or None for no limit.

    Raises:
        FileNotFoundError: If the executable does not exist.
        OSError: If the process cannot be spawned.
        subprocess.TimeoutExpired: If timeout elapses. subprocess.run()
            kills the child before raising, as it does on KeyboardInterrupt.
    """
    argv = [str(arg) for arg in args]
    tool = Path(argv[0]).name
    logger.debug(
        "Running %s",
        shlex.join(argv),
        extra={"command": tool, "arg_count": len(argv)},
    )

    started = time.monotonic()
    try:
        proc = subprocess.run(  # nosec B603 - argv is built by downmix, no shell
            argv,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        logger.warning(
            "%s killed after %ss",
            tool,
            timeout,
            extra={
                "command": tool,
                "timeout_seconds": timeout,
                "elapsed_seconds": _elapsed(started),
            },
        )
        raise

    logger.debug(
        "%s exited with code %d",
        tool,
        proc.returncode,
        extra={
            "command": tool,
            "returncode": proc.returncode,
            "elapsed_seconds": _elapsed(started),
        },
    )
    return proc.stdout or "", proc.stderr or "", proc.returncode


def is_tool_failure(returncode: int, stderr: str, strict_stderr: bool = False) -> bool:
    """Decide whether a finished tool run counts as failed.

    ffprobe and ffmpeg are run at ``-loglevel error``, so stderr is normally
    empty on success. The exit code is authoritative unless strict mode is
    on, in which case any stderr text is also fatal.
    """
    if returncode != 0:
        return True
    return strict_stderr and bool(stderr.strip())
