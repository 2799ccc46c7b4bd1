"""Downmix processor.

Runs a single request through the fixed pipeline:

    validate paths -> inspect channels -> decide -> (no-op | downmix)

Every failure propagates as a DownmixError subclass; nothing is retried.
"""

import logging
from collections.abc import Iterable

from downmix.exceptions import (
    InputNotAFileError,
    InputNotFoundError,
    OutputExistsError,
)
from downmix.executor.interface import Executor
from downmix.introspector.interface import MediaIntrospector
from downmix.introspector.models import ChannelCount
from downmix.workflow.types import DownmixRequest, DownmixResult

module_logger = logging.getLogger(__name__)

# Streams with more channels than this are downmixed
MAX_CHANNELS = 2


def validate_request(request: DownmixRequest) -> None:
    """Check path preconditions before any external tool runs.

    Args:
        request: The invocation to validate.

    Raises:
        InputNotFoundError: If the input path does not exist.
        InputNotAFileError: If the input path is not a regular file.
        OutputExistsError: If the output exists and force is not set.
    """
    if not request.input_path.exists():
        raise InputNotFoundError(request.input_path)
    if not request.input_path.is_file():
        raise InputNotAFileError(request.input_path)
    if not request.force and request.output_path.exists():
        raise OutputExistsError(request.output_path)


def needs_downmix(counts: Iterable[ChannelCount | int]) -> bool:
    """Return True if any stream has more than two channels."""
    return any(
        (c.channels if isinstance(c, ChannelCount) else c) > MAX_CHANNELS
        for c in counts
    )


class DownmixProcessor:
    """Orchestrates inspection and the conditional downmix for one file."""

    def __init__(
        self,
        introspector: MediaIntrospector,
        executor: Executor,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the processor.

        Args:
            introspector: Reports channel counts for the input file.
            executor: Writes the stereo copy when one is needed.
            logger: Logger for progress messages (default: module logger).
        """
        self.introspector = introspector
        self.executor = executor
        self.logger = logger or module_logger

    def run(self, request: DownmixRequest) -> DownmixResult:
        """Process a request.

        Args:
            request: The invocation to process.

        Returns:
            DownmixResult; downmixed is False when no stream exceeds two
            channels.

        Raises:
            DownmixError: On any validation, tool or parse failure.
        """
        validate_request(request)

        counts = self.introspector.get_channel_counts(request.input_path)

        if not needs_downmix(counts):
            return DownmixResult(
                input_path=request.input_path,
                output_path=request.output_path,
                downmixed=False,
                channel_counts=tuple(counts),
                message=(
                    f"File '{request.input_path}' does not need to be downmixed."
                ),
            )

        self.logger.info(
            "Downmixing '%s' to '%s'", request.input_path, request.output_path
        )
        result = self.executor.execute(request.input_path, request.output_path)

        return DownmixResult(
            input_path=request.input_path,
            output_path=request.output_path,
            downmixed=True,
            channel_counts=tuple(counts),
            message=result.message,
        )
