"""Batch fixes for subtitle documents.

Every fix mutates parsed entries in place and never adds, removes or
reorders entries. Error entries are left untouched.
"""

from dataclasses import dataclass
import enum
import re

from app.core.exceptions import ConfirmationRequiredError
from app.core.logging import get_logger
from app.models.subtitle import Document, IssueCounts
from app.services.validator import ValidationRules, analyze, overlaps_next

logger = get_logger(__name__)

ANNOTATION_PATTERNS = [re.compile(r"\[.*?\]"), re.compile(r"\(.*?\)")]
MARKUP_PATTERN = re.compile(r"<.*?>")


class FixOperation(str, enum.Enum):
    """Batch fixes offered to users."""

    RESOLVE_COMMON = "resolve_common"
    STRIP_ANNOTATIONS = "strip_annotations"
    STRIP_MARKUP = "strip_markup"

    @property
    def destructive(self) -> bool:
        """Text-removing fixes cannot be undone and need confirmation."""
        return self is not FixOperation.RESOLVE_COMMON


@dataclass
class FixResult:
    """Outcome of one fix: entries changed and the fresh analysis."""

    operation: FixOperation
    changed: int
    counts: IssueCounts


def resolve_common_issues(document: Document, rules: ValidationRules | None = None) -> int:
    """Resolve overlaps, then stretch cues shorter than the minimum duration.

    A single pass in document order. An overlapping cue is cut to end
    ``overlap_gap_ms`` before the next one starts; the duration check runs
    afterwards and may push the end back out, so a repeated call can still
    find an overlap to resolve.

    Args:
        document: Document to fix in place
        rules: Thresholds (defaults come from settings)

    Returns:
        Number of entries whose timing changed
    """
    if rules is None:
        rules = ValidationRules.from_settings()

    changed = 0
    for position, entry in enumerate(document):
        if entry.is_error:
            continue
        original_end = entry.end_time_ms

        if overlaps_next(document, position):
            entry.end_time_ms = document[position + 1].start_time_ms - rules.overlap_gap_ms

        if entry.duration_ms < rules.min_duration_ms:
            entry.end_time_ms = entry.start_time_ms + rules.min_duration_ms

        if entry.end_time_ms != original_end:
            changed += 1

    logger.info("Resolved timing issues on %d entries", changed)
    return changed


def _strip_text(document: Document, patterns: list[re.Pattern]) -> int:
    changed = 0
    for entry in document.valid_entries():
        text = entry.text
        for pattern in patterns:
            text = pattern.sub("", text)
        text = text.strip()
        if text != entry.text:
            entry.text = text
            changed += 1
    return changed


def strip_annotations(document: Document) -> int:
    """Remove ``[...]`` and ``(...)`` spans, such as hearing-impaired cues.

    Returns:
        Number of entries whose text changed
    """
    changed = _strip_text(document, ANNOTATION_PATTERNS)
    logger.info("Stripped bracketed annotations from %d entries", changed)
    return changed


def strip_markup(document: Document) -> int:
    """Remove ``<...>`` styling tags such as ``<i>`` and ``<font>``.

    Returns:
        Number of entries whose text changed
    """
    changed = _strip_text(document, [MARKUP_PATTERN])
    logger.info("Stripped markup tags from %d entries", changed)
    return changed


def apply_fix(
    document: Document,
    operation: FixOperation | str,
    confirmed: bool = False,
    rules: ValidationRules | None = None,
) -> FixResult:
    """Run one fix and re-analyze the document.

    Args:
        document: Document to fix in place
        operation: Fix to apply
        confirmed: Whether the caller confirmed a destructive fix
        rules: Thresholds (defaults come from settings)

    Returns:
        FixResult with the number of changed entries and the new counts

    Raises:
        ConfirmationRequiredError: If a destructive fix is not confirmed
    """
    operation = FixOperation(operation)
    if operation.destructive and not confirmed:
        raise ConfirmationRequiredError(operation.value)

    if rules is None:
        rules = ValidationRules.from_settings()

    if operation is FixOperation.RESOLVE_COMMON:
        changed = resolve_common_issues(document, rules)
    elif operation is FixOperation.STRIP_ANNOTATIONS:
        changed = strip_annotations(document)
    else:
        changed = strip_markup(document)

    return FixResult(operation=operation, changed=changed, counts=analyze(document, rules))
