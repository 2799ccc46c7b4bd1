"""Centralized exit codes for the downmix CLI.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Configuration errors
    20-29: Target/file errors
    30-39: Tool/dependency errors
    40-49: Operation errors
    50-59: Parse errors
"""

from enum import IntEnum

from downmix.exceptions import (
    ConfigError,
    DownmixError,
    InputNotAFileError,
    InputNotFoundError,
    MetadataParseError,
    OutputExistsError,
    SpawnFailedError,
    ToolInvocationError,
    ToolNotFoundError,
)


class ExitCode(IntEnum):
    """Exit codes for the downmix CLI."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1
    INTERRUPTED = 2  # Ctrl+C / SIGINT

    # Configuration errors (10-19)
    CONFIG_ERROR = 11

    # Target/file errors (20-29)
    TARGET_NOT_FOUND = 20
    OUTPUT_EXISTS = 23

    # Tool/dependency errors (30-39)
    TOOL_NOT_AVAILABLE = 30

    # Operation errors (40-49)
    OPERATION_FAILED = 40

    # Parse errors (50-59)
    PARSE_ERROR = 51


# Most specific classes first
_ERROR_EXIT_CODES: tuple[tuple[type[DownmixError], ExitCode], ...] = (
    (ConfigError, ExitCode.CONFIG_ERROR),
    (InputNotFoundError, ExitCode.TARGET_NOT_FOUND),
    (InputNotAFileError, ExitCode.TARGET_NOT_FOUND),
    (OutputExistsError, ExitCode.OUTPUT_EXISTS),
    (ToolNotFoundError, ExitCode.TOOL_NOT_AVAILABLE),
    (SpawnFailedError, ExitCode.TOOL_NOT_AVAILABLE),
    (ToolInvocationError, ExitCode.OPERATION_FAILED),
    (MetadataParseError, ExitCode.PARSE_ERROR),
)


def exit_code_for(error: DownmixError) -> ExitCode:
    """Map an error to its CLI exit code."""
    for error_type, code in _ERROR_EXIT_CODES:
        if isinstance(error, error_type):
            return code
    return ExitCode.GENERAL_ERROR
