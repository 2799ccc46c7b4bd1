"""CLI module for downmix."""

import dataclasses
import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from downmix.cli.exit_codes import ExitCode, exit_code_for
from downmix.config import LoggingConfig, get_config
from downmix.config.models import DownmixConfig
from downmix.exceptions import DownmixError
from downmix.executor import FFmpegDownmixExecutor
from downmix.introspector import FFprobeIntrospector
from downmix.logging import configure_logging
from downmix.workflow import DownmixProcessor, DownmixRequest

logger = logging.getLogger(__name__)


def _fail(message: str, code: ExitCode) -> NoReturn:
    """Print an error to stderr and exit with code."""
    click.echo(f"Error: {message}", err=True)
    sys.exit(int(code))


def logging_with_overrides(
    base: LoggingConfig,
    quiet: bool = False,
    log_file: Path | None = None,
    log_json: bool = False,
) -> LoggingConfig:
    """Apply the command-line logging flags on top of file/env settings.

    --quiet raises the level to warning so per-stream channel lines and
    progress messages are hidden while warnings and errors still show.
    """
    overrides: dict[str, object] = {}
    if quiet:
        overrides["level"] = "warning"
    if log_file is not None:
        overrides["file"] = log_file
    if log_json:
        overrides["format"] = "json"
    return dataclasses.replace(base, **overrides)

def build_processor(
    config: DownmixConfig,
    run_logger: logging.Logger | None = None,
) -> DownmixProcessor:
    """Create a processor wired with ffprobe and ffmpeg from config.

    Args:
        config: Loaded configuration.
        run_logger: Logger shared by every step of the run.

    Returns:
        DownmixProcessor ready to run.
    """
    run_logger = run_logger or logging.getLogger("downmix")
    processing = config.processing
    return DownmixProcessor(
        introspector=FFprobeIntrospector(
            ffprobe_path=config.tools.ffprobe,
            timeout=processing.probe_timeout,
            strict_stderr=processing.strict_stderr,
            logger=run_logger,
        ),
        executor=FFmpegDownmixExecutor(
            ffmpeg_path=config.tools.ffmpeg,
            timeout=processing.transcode_timeout,
            atomic_output=processing.atomic_output,
            strict_stderr=processing.strict_stderr,
            logger=run_logger,
        ),
        logger=run_logger,
    )


@click.command("downmix")
@click.version_option(package_name="downmix")
@click.argument("input_path", type=click.Path(path_type=Path))
@click.argument("output_path", type=click.Path(path_type=Path))
@click.option("--quiet", "-q", is_flag=True, help="Suppress output.")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing file.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file to use; must exist (default: ~/.downmix/config.toml).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Also write logs to this file.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
def main(
    input_path: Path,
    output_path: Path,
    quiet: bool,
    force: bool,
    config_path: Path | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Downmix a video file's audio into stereo sound if it isn't already.

    INPUT_PATH is the media file to inspect. OUTPUT_PATH is where the
    downmixed copy is written when any audio stream has more than two
    channels.
    """
    try:
        config = get_config(config_path=config_path)
    except DownmixError as e:
        _fail(e.message, exit_code_for(e))

    configure_logging(
        logging_with_overrides(config.logging, quiet, log_file, log_json)
    )

    request = DownmixRequest(
        input_path=input_path,
        output_path=output_path,
        force=force,
    )

    try:
        result = build_processor(config).run(request)
    except DownmixError as e:
        logger.debug("Downmix failed", exc_info=True)
        _fail(e.message, exit_code_for(e))
    except KeyboardInterrupt:
        _fail("Interrupted", ExitCode.INTERRUPTED)

    if not result.downmixed:
        click.echo(result.message)
