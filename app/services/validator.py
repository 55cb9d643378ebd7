"""Rule engine that annotates subtitle entries with quality issues."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from app.core.config import Settings, get_settings
from app.core.logging import get_logger
from app.models.subtitle import Document, Issue, IssueCounts, IssueKind, SubtitleEntry
from app.services.srt_parser import structural_issues

logger = get_logger(__name__)

NUMBER_WORDS = ("zero", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine")


@dataclass(frozen=True)
class ValidationRules:
    """Thresholds used by the analysis pass and the timing fixer."""

    min_duration_ms: int = 1000
    max_duration_ms: int = 7000
    max_cpl: int = 42
    max_cps: float = 21.0
    max_lines: int = 2
    overlap_gap_ms: int = 50

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ValidationRules":
        if settings is None:
            settings = get_settings()
        return cls(
            min_duration_ms=settings.min_duration_ms,
            max_duration_ms=settings.max_duration_ms,
            max_cpl=settings.max_cpl,
            max_cps=settings.max_cps,
            max_lines=settings.max_lines,
            overlap_gap_ms=settings.overlap_gap_ms,
        )


def overlaps_next(document: Document, position: int) -> bool:
    """Whether the entry at ``position`` ends after the following entry starts.

    Only the immediately following entry is considered, and only when it
    parsed successfully.
    """
    if position + 1 >= len(document):
        return False
    current, following = document[position], document[position + 1]
    if current.is_error or following.is_error:
        return False
    return current.end_time_ms > following.start_time_ms


def one_decimal(value: float) -> str:
    """Format with one decimal place, rounding exact halves up (7.25 -> "7.3")."""
    return str(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _spelled(number: int) -> str:
    return NUMBER_WORDS[number] if 0 <= number < len(NUMBER_WORDS) else str(number)


def reading_speed(entry: SubtitleEntry) -> float:
    """Characters per second; zero when the cue has no positive duration.

    Characters are Unicode code points, so an emoji counts once.
    """
    duration = entry.duration_ms
    if duration <= 0:
        return 0.0
    return len(entry.text) / (duration / 1000)


def check_entry(document: Document, position: int, rules: ValidationRules) -> list[Issue]:
    """Evaluate every rule against one parsed entry, in display order."""
    entry = document[position]
    issues = structural_issues(entry)

    if overlaps_next(document, position):
        issues.append(Issue(IssueKind.OVERLAP, "Overlaps with next subtitle"))

    duration = entry.duration_ms
    if duration < rules.min_duration_ms:
        issues.append(Issue(IssueKind.SHORT_DURATION, f"Short duration ({duration}ms)"))
    if duration > rules.max_duration_ms:
        seconds = one_decimal(duration / 1000)
        issues.append(Issue(IssueKind.LONG_DURATION, f"Long duration ({seconds}s)"))

    lines = entry.lines
    if any(len(line) > rules.max_cpl for line in lines):
        issues.append(Issue(IssueKind.CPL, f"High characters per line (>{rules.max_cpl})"))

    cps = reading_speed(entry)
    if cps > rules.max_cps:
        issues.append(Issue(IssueKind.CPS, f"High reading speed ({one_decimal(cps)} CPS)"))

    if len(lines) > rules.max_lines:
        limit = _spelled(rules.max_lines)
        issues.append(Issue(IssueKind.FORMATTING, f"More than {limit} lines of text"))

    return issues


def analyze(document: Document, rules: ValidationRules | None = None) -> IssueCounts:
    """Recompute issues for every entry and count them per kind.

    Issues of parsed entries are rebuilt from scratch on each call. Error
    entries keep their single parse issue and only add to the syntax count.

    Args:
        document: Document to annotate in place
        rules: Thresholds (defaults come from settings)

    Returns:
        IssueCounts for this pass
    """
    if rules is None:
        rules = ValidationRules.from_settings()

    counts = IssueCounts()
    for position, entry in enumerate(document):
        if entry.is_error:
            counts.add(IssueKind.SYNTAX)
            continue

        entry.issues = check_entry(document, position, rules)
        for issue in entry.issues:
            counts.add(issue.kind)

    logger.debug("Analysis complete: %s", counts.as_dict())
    return counts
