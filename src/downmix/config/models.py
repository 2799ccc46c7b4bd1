"""Configuration data models.

Each section validates its own values in ``__post_init__`` and raises
ValueError on anything unusable; the loader turns that into ConfigError.
TOML and environment values arrive untyped, so types are checked
explicitly rather than trusted from the annotations.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

LOG_LEVELS = ("debug", "info", "warning", "error")
LOG_FORMATS = ("text", "json")


def _check_choice(name: str, value: Any, choices: tuple[str, ...]) -> None:
    if not isinstance(value, str) or value.casefold() not in choices:
        raise ValueError(f"{name} must be one of {', '.join(choices)}, got {value!r}")


def _check_bool(name: str, value: Any) -> None:
    if not isinstance(value, bool):
        raise ValueError(f"{name} must be true or false, got {value!r}")


def _check_count(name: str, value: Any, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise ValueError(f"{name} must be an integer >= {minimum}, got {value!r}")


@dataclass
class ToolPathsConfig:
    """Explicit ffmpeg/ffprobe locations. None means look up in PATH."""

    ffmpeg: Path | None = None
    ffprobe: Path | None = None


@dataclass
class ProcessingConfig:
    """Configuration for how the probe and transcode steps run."""

    # Seconds before ffprobe is killed (None = wait indefinitely)
    probe_timeout: float | None = None

    # Seconds before ffmpeg is killed (None = wait indefinitely)
    transcode_timeout: float | None = None

    # Write to a temp file beside the output and move it into place on success
    atomic_output: bool = True

    # Treat any stderr text as failure, even on a zero exit code
    strict_stderr: bool = False

    def __post_init__(self) -> None:
        """Validate configuration."""
        for name in ("probe_timeout", "transcode_timeout"):
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int | float):
                raise ValueError(f"{name} must be a number of seconds, got {value!r}")
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        _check_bool("atomic_output", self.atomic_output)
        _check_bool("strict_stderr", self.strict_stderr)


@dataclass
class LoggingConfig:
    """Configuration for logging output."""

    level: str = "info"
    file: Path | None = None
    format: str = "text"

    # Rotating file handler limits
    max_bytes: int = 10_485_760
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        _check_choice("level", self.level, LOG_LEVELS)
        _check_choice("format", self.format, LOG_FORMATS)
        _check_count("max_bytes", self.max_bytes, 0)
        _check_count("backup_count", self.backup_count, 0)


@dataclass
class DownmixConfig:
    """Main configuration container."""

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    processing: ProcessingConfig = field(default_factory=ProcessingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
