"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI options (applied by the CLI on top of get_config())
2. Environment variables (DOWNMIX_*)
3. Config file (~/.downmix/config.toml)
4. Default values

Environment variables:
- DOWNMIX_CONFIG_PATH: Path to config file (overrides default location)
- DOWNMIX_FFMPEG_PATH: Path to ffmpeg executable
- DOWNMIX_FFPROBE_PATH: Path to ffprobe executable
- DOWNMIX_PROBE_TIMEOUT: Seconds before ffprobe is killed
- DOWNMIX_TRANSCODE_TIMEOUT: Seconds before ffmpeg is killed
- DOWNMIX_ATOMIC_OUTPUT: Write through a temp file (default true)
- DOWNMIX_STRICT_STDERR: Fail on any stderr text (default false)
- DOWNMIX_LOG_LEVEL: debug, info, warning or error
- DOWNMIX_LOG_FORMAT: text or json
- DOWNMIX_LOG_FILE: Path to a rotating log file
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from downmix.config.env import EnvReader
from downmix.config.models import (
    DownmixConfig,
    LoggingConfig,
    ProcessingConfig,
    ToolPathsConfig,
)
from downmix.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Default config location
DEFAULT_CONFIG_DIR = Path.home() / ".downmix"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


def get_default_config_path(env: EnvReader | None = None) -> Path:
    """Get the default config file path.

    Can be overridden by DOWNMIX_CONFIG_PATH environment variable.

    Args:
        env: Environment reader (None reads os.environ).

    Returns:
        Path to config file.
    """
    env = env or EnvReader()
    return env.get_path("DOWNMIX_CONFIG_PATH", fallback=DEFAULT_CONFIG_FILE)


def load_config_file(path: Path | None = None) -> dict:
    """Load configuration from TOML file.

    Args:
        path: Path to config file. If None, uses default location.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.

    Raises:
        ConfigError: If the file exists but cannot be read or parsed.
    """
    if path is None:
        path = get_default_config_path()

    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with path.open("rb") as f:
            config = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in config file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    logger.debug("Loaded config from %s", path)
    return config


def _section(file_config: dict, name: str) -> dict[str, Any]:
    section = file_config.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"Config section [{name}] must be a table")
    return section


def _optional_path(value: Any) -> Path | None:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValueError(f"path values must be strings, got {value!r}")
    return Path(value).expanduser()


def get_config(
    config_path: Path | None = None,
    env: EnvReader | None = None,
) -> DownmixConfig:
    """Build configuration from environment, config file and defaults.

    CLI options are applied on top of the result by the caller.

    Args:
        config_path: Config file given on the command line. It must exist.
            If None, DOWNMIX_CONFIG_PATH or the default location is used,
            and a missing file there simply means no file settings.
        env: Environment reader (None reads os.environ).

    Returns:
        DownmixConfig with merged configuration.

    Raises:
        ConfigError: If the file is missing, unreadable or holds an invalid
            value, or an environment variable cannot be converted.
    """
    env = env or EnvReader()
    if config_path is not None and not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")
    file_config = load_config_file(config_path or get_default_config_path(env))

    tools = _section(file_config, "tools")
    processing = _section(file_config, "processing")
    log = _section(file_config, "logging")

    try:
        tools_config = ToolPathsConfig(
            ffmpeg=env.get_path("DOWNMIX_FFMPEG_PATH")
            or _optional_path(tools.get("ffmpeg")),
            ffprobe=env.get_path("DOWNMIX_FFPROBE_PATH")
            or _optional_path(tools.get("ffprobe")),
        )
        processing_config = ProcessingConfig(
            probe_timeout=env.get_float(
                "DOWNMIX_PROBE_TIMEOUT", processing.get("probe_timeout")
            ),
            transcode_timeout=env.get_float(
                "DOWNMIX_TRANSCODE_TIMEOUT", processing.get("transcode_timeout")
            ),
            atomic_output=env.get_bool(
                "DOWNMIX_ATOMIC_OUTPUT", processing.get("atomic_output", True)
            ),
            strict_stderr=env.get_bool(
                "DOWNMIX_STRICT_STDERR", processing.get("strict_stderr", False)
            ),
        )
        logging_config = LoggingConfig(
            level=env.get_str("DOWNMIX_LOG_LEVEL", log.get("level", "info")),
            format=env.get_str("DOWNMIX_LOG_FORMAT", log.get("format", "text")),
            file=env.get_path("DOWNMIX_LOG_FILE") or _optional_path(log.get("file")),
            max_bytes=log.get("max_bytes", 10_485_760),
            backup_count=log.get("backup_count", 5),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    return DownmixConfig(
        tools=tools_config,
        processing=processing_config,
        logging=logging_config,
    )
