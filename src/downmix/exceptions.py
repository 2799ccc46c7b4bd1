"""Custom exceptions for downmix operations.

Every failure in a run is terminal. The hierarchy lets the CLI map each
failure kind to an exit code while keeping the message actionable.
"""

from pathlib import Path


class DownmixError(Exception):
    """Base exception for all downmix errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(DownmixError):
    """Raised when configuration from file or environment is invalid."""


# =============================================================================
# Path validation
# =============================================================================


class PathValidationError(DownmixError):
    """Raised when the input or output path fails a precondition check."""

    def __init__(self, message: str, path: Path) -> None:
        """Initialize path validation error.

        Args:
            message: Human-readable error description.
            path: The path that failed validation.
        """
        self.path = path
        super().__init__(message)


class InputNotFoundError(PathValidationError):
    """Raised when the input path does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"'{path}' does not exist", path)


class InputNotAFileError(PathValidationError):
    """Raised when the input path exists but is not a regular file."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"'{path}' is not a file", path)


class OutputExistsError(PathValidationError):
    """Raised when the output path exists and overwriting was not allowed."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"'{path}' already exists. Use --force to overwrite.", path)


# =============================================================================
# External tool invocation
# =============================================================================


class ToolInvocationError(DownmixError):
    """Raised when an external tool cannot be run or reports a failure."""

    def __init__(self, message: str, tool: str, stderr: str | None = None) -> None:
        """Initialize tool invocation error.

        Args:
            message: Human-readable error description.
            tool: Name of the external tool (ffprobe, ffmpeg).
            stderr: Captured standard error text, if any.
        """
        self.tool = tool
        self.stderr = stderr
        super().__init__(message)


class ToolNotFoundError(ToolInvocationError):
    """Raised when the external tool binary cannot be located."""

    def __init__(self, tool: str, hint: str = "") -> None:
        message = f"{tool} is not installed or not in PATH."
        if hint:
            message = f"{message} {hint}"
        super().__init__(message, tool)


class SpawnFailedError(ToolInvocationError):
    """Raised when the operating system refuses to start the tool."""

    def __init__(self, tool: str, reason: str) -> None:
        super().__init__(f"Failed to start {tool}: {reason}", tool)


class ProbeFailedError(ToolInvocationError):
    """Raised when ffprobe reports an error for the input file."""

    def __init__(self, stderr: str, tool: str = "ffprobe") -> None:
        super().__init__(f"Error from {tool}:\n{stderr}", tool, stderr)


class TranscodeFailedError(ToolInvocationError):
    """Raised when ffmpeg reports an error while writing the downmix."""

    def __init__(self, stderr: str, tool: str = "ffmpeg") -> None:
        super().__init__(f"Error from {tool}:\n{stderr}", tool, stderr)


# =============================================================================
# Metadata parsing
# =============================================================================


class MetadataParseError(DownmixError):
    """Raised when the probe output cannot be interpreted."""


class MalformedMetadataError(MetadataParseError):
    """Raised when probe output is not JSON or lacks a 'streams' array."""


class InvalidChannelValueError(MetadataParseError):
    """Raised when a stream's 'channels' value is not a non-negative integer."""

    def __init__(self, value: object, stream_index: int | None = None) -> None:
        """Initialize invalid channel value error.

        Args:
            value: The offending raw value from the probe output.
            stream_index: Position of the stream in the report, if known.
        """
        self.value = value
        self.stream_index = stream_index
        where = f" for stream {stream_index}" if stream_index is not None else ""
        super().__init__(f"invalid metadata value{where}: channels={value!r}")
