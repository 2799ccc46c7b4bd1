"""Workflow for a single downmix run."""

from downmix.workflow.processor import (
    MAX_CHANNELS,
    DownmixProcessor,
    needs_downmix,
    validate_request,
)
from downmix.workflow.types import DownmixRequest, DownmixResult

__all__ = [
    "MAX_CHANNELS",
    "DownmixProcessor",
    "DownmixRequest",
    "DownmixResult",
    "needs_downmix",
    "validate_request",
]
