"""Tolerant SRT block parser and serializer.

Parsing never raises: every blank-line-delimited block becomes exactly one
entry, either a parsed subtitle or an error entry that keeps the raw block
text and a single syntax issue describing what went wrong.

Grammar of a block::

    block     := [index_line] time_line text_line*
    time_line := TIMESTAMP "-->" TIMESTAMP
"""

import re

from app.core.logging import get_logger
from app.models.subtitle import Document, Issue, IssueKind, SubtitleEntry
from app.services.timecode import parse_timestamp

logger = get_logger(__name__)

TIME_SEPARATOR = "-->"
BLOCK_SEPARATOR = re.compile(r"\n\s*\n")
TIME_LINE_PATTERN = re.compile(
    r"([0-9]{2}:[0-9]{2}:[0-9]{2},[0-9]{3})\s*-->\s*([0-9]{2}:[0-9]{2}:[0-9]{2},[0-9]{3})"
)
INDEX_PATTERN = re.compile(r"\s*\+?([0-9]+)")

TOO_FEW_LINES = "Block has too few lines"
TIMESTAMP_MISSING = "Timestamp missing"
INVALID_TIMESTAMP = "Invalid timestamp format"
INVERTED_TIME_RANGE = "End time is before start time"
EMPTY_TEXT = "Subtitle has no text"


def split_blocks(content: str) -> list[str]:
    """Split document text into raw blocks on blank lines."""
    content = content.strip().replace("\r", "")
    if not content:
        return []
    return BLOCK_SEPARATOR.split(content)


def _parse_index(line: str, position: int) -> int:
    # Leading digits only, so "12 extra" still reads as 12
    match = INDEX_PATTERN.match(line)
    if match:
        index = int(match.group(1))
        if index > 0:
            return index
    return position


def parse_block(block: str, position: int) -> SubtitleEntry:
    """Parse one raw block into an entry.

    Args:
        block: Raw block text without surrounding blank lines
        position: 1-based position of the block in the document

    Returns:
        Parsed entry, or an error entry when the block is malformed
    """
    lines = [line for line in block.split("\n") if line.strip()]
    if len(lines) < 2:
        return SubtitleEntry.error(position, block, TOO_FEW_LINES)

    time_line_index = next(
        (i for i, line in enumerate(lines) if TIME_SEPARATOR in line), None
    )
    if time_line_index is None:
        return SubtitleEntry.error(position, block, TIMESTAMP_MISSING)

    match = TIME_LINE_PATTERN.search(lines[time_line_index])
    if not match:
        return SubtitleEntry.error(position, block, INVALID_TIMESTAMP)

    entry = SubtitleEntry(
        index=_parse_index(lines[0], position),
        start_time_ms=parse_timestamp(match.group(1)),
        end_time_ms=parse_timestamp(match.group(2)),
        text="\n".join(lines[time_line_index + 1 :]),
        raw=block,
    )
    entry.issues.extend(structural_issues(entry))
    return entry


def structural_issues(entry: SubtitleEntry) -> list[Issue]:
    """Non-fatal problems detectable from a single parsed block."""
    issues = []
    if entry.end_time_ms <= entry.start_time_ms:
        issues.append(Issue(IssueKind.SYNTAX, INVERTED_TIME_RANGE))
    if not entry.text:
        issues.append(Issue(IssueKind.FORMATTING, EMPTY_TEXT))
    return issues


def parse_srt(content: str, filename: str | None = None) -> Document:
    """Parse SRT content into a document.

    Args:
        content: Raw SRT file content as string
        filename: Optional source filename kept on the document

    Returns:
        Document with one entry per block, malformed blocks included
    """
    entries = [
        parse_block(block, position)
        for position, block in enumerate(split_blocks(content), start=1)
    ]
    errors = sum(1 for entry in entries if entry.is_error)
    if errors:
        logger.info("Parsed %d blocks (%d malformed)", len(entries), errors)
    else:
        logger.debug("Parsed %d blocks", len(entries))
    return Document(entries, filename=filename)


def reconstruct_srt(entries) -> str:
    """Reconstruct SRT format from entries, skipping malformed blocks.

    Args:
        entries: Document or iterable of SubtitleEntry objects

    Returns:
        SRT formatted string ending with a blank line
    """
    blocks = [
        f"{entry.index}\n{entry.start_time} {TIME_SEPARATOR} {entry.end_time}\n{entry.text}"
        for entry in entries
        if not entry.is_error
    ]
    return "\n\n".join(blocks) + "\n\n"
