"""Pure parsing functions for ffprobe JSON output.

These functions transform ffprobe's ``-show_streams`` JSON into downmix
domain objects. All functions are pure (no I/O, no side effects) for
easy testing.
"""

import json
import logging

from pydantic import ValidationError

from downmix.exceptions import InvalidChannelValueError, MalformedMetadataError
from downmix.introspector.models import ChannelCount, ProbeReport, StreamRecord

logger = logging.getLogger(__name__)


def parse_stream(raw: dict, position: int) -> StreamRecord:
    """Validate a single ffprobe stream object.

    Args:
        raw: Stream object from the ``streams`` array.
        position: Position of the stream in the array.

    Returns:
        Validated StreamRecord. A missing or unusable ``index`` is replaced
        by ``position``.

    Raises:
        InvalidChannelValueError: If ``channels`` is present but not a
            non-negative integer.
    """
    if "channels" in raw and raw["channels"] is None:
        raise InvalidChannelValueError(None, position)

    try:
        record = StreamRecord.model_validate(raw)
    except ValidationError as e:
        # Only channels is strict; every other field falls back to None
        raise InvalidChannelValueError(raw.get("channels"), position) from e

    if record.index is None:
        record = record.model_copy(update={"index": position})
    return record


def parse_probe_output(raw: str) -> ProbeReport:
    """Parse ffprobe stdout into a ProbeReport.

    Stream entries that are not JSON objects carry no channel information
    and are skipped.

    Args:
        raw: ffprobe standard output.

    Returns:
        ProbeReport with one StreamRecord per stream object.

    Raises:
        MalformedMetadataError: If the output is not a JSON object with a
            ``streams`` array.
        InvalidChannelValueError: If a stream has a non-integer channel count.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedMetadataError(
            f"invalid json at position {e.pos}: {e.msg}"
        ) from e

    if not isinstance(data, dict):
        raise MalformedMetadataError(
            f"invalid json: expected an object, got {type(data).__name__}"
        )

    streams = data.get("streams")
    if not isinstance(streams, list):
        raise MalformedMetadataError("invalid json: missing 'streams' array")

    records: list[StreamRecord] = []
    for position, stream in enumerate(streams):
        if not isinstance(stream, dict):
            logger.debug("Skipping non-object stream entry at %d", position)
            continue
        records.append(parse_stream(stream, position))

    return ProbeReport(streams=records)


def extract_channel_counts(report: ProbeReport) -> list[ChannelCount]:
    """Collect channel counts in stream order.

    Streams without a ``channels`` field (video, subtitles, attachments)
    are skipped.

    Args:
        report: Parsed probe report.

    Returns:
        List of ChannelCount, one per stream that reports channels.
    """
    counts: list[ChannelCount] = []
    for position, stream in enumerate(report.streams):
        if stream.channels is None:
            continue
        counts.append(
            ChannelCount(
                stream_index=stream.index if stream.index is not None else position,
                channels=stream.channels,
                codec_type=stream.codec_type,
            )
        )
    return counts
