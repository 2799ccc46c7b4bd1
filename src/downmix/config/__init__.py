"""Configuration management for downmix.

This module provides configuration loading with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (DOWNMIX_*)
3. Config file (~/.downmix/config.toml)
4. Default values (lowest priority)
"""

from downmix.config.env import EnvReader
from downmix.config.loader import (
    get_config,
    get_default_config_path,
    load_config_file,
)
from downmix.config.models import (
    DownmixConfig,
    LoggingConfig,
    ProcessingConfig,
    ToolPathsConfig,
)

__all__ = [
    # Models
    "DownmixConfig",
    "LoggingConfig",
    "ProcessingConfig",
    "ToolPathsConfig",
    # Loader
    "get_config",
    "get_default_config_path",
    "load_config_file",
    "EnvReader",
]
