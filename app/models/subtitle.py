"""Subtitle document model: entries, issues and per-kind issue counts."""

from dataclasses import dataclass
import enum

from app.services.timecode import format_timestamp


class IssueKind(str, enum.Enum):
    """Kinds of problems the validator can report."""

    SYNTAX = "syntax"
    OVERLAP = "overlap"
    SHORT_DURATION = "short_duration"
    LONG_DURATION = "long_duration"
    CPL = "cpl"
    CPS = "cps"
    FORMATTING = "formatting"

    @property
    def severity(self) -> str:
        """Display severity: danger, warning or info."""
        if self in (IssueKind.SYNTAX, IssueKind.OVERLAP, IssueKind.SHORT_DURATION):
            return "danger"
        if self in (IssueKind.LONG_DURATION, IssueKind.CPL, IssueKind.CPS):
            return "warning"
        return "info"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


@dataclass(frozen=True)
class Issue:
    """A single diagnostic attached to an entry."""

    kind: IssueKind
    message: str


class SubtitleEntry:
    """Represents a single subtitle block, parsed or malformed.

    For error entries only ``index``, ``raw`` and the single syntax issue are
    meaningful. The display timestamps are derived from the millisecond
    fields, so time fixes never leave them stale.
    """

    def __init__(
        self,
        index: int,
        start_time_ms: int,
        end_time_ms: int,
        text: str,
        raw: str = "",
        issues: list[Issue] | None = None,
        is_error: bool = False,
    ):
        self.index = index
        self.start_time_ms = start_time_ms
        self.end_time_ms = end_time_ms
        self.text = text
        self.raw = raw
        self.issues = issues if issues is not None else []
        self.is_error = is_error

    @classmethod
    def error(cls, index: int, raw: str, message: str) -> "SubtitleEntry":
        """Build an error entry carrying one syntax issue."""
        return cls(
            index,
            0,
            0,
            "",
            raw=raw,
            issues=[Issue(IssueKind.SYNTAX, message)],
            is_error=True,
        )

    @property
    def start_time(self) -> str:
        return format_timestamp(self.start_time_ms)

    @property
    def end_time(self) -> str:
        return format_timestamp(self.end_time_ms)

    @property
    def duration_ms(self) -> int:
        return self.end_time_ms - self.start_time_ms

    @property
    def lines(self) -> list[str]:
        return self.text.split("\n")

    def has_issue(self, kind: IssueKind) -> bool:
        return any(issue.kind == kind for issue in self.issues)

    def __repr__(self) -> str:
        if self.is_error:
            return f"SubtitleEntry(index={self.index}, error={self.raw!r})"
        return f"SubtitleEntry(index={self.index}, time={self.start_time} --> {self.end_time})"


class Document:
    """Ordered sequence of subtitle entries loaded from one source.

    Entry order drives overlap checks and index fallback; nothing reorders it.
    """

    def __init__(self, entries: list[SubtitleEntry], filename: str | None = None):
        self.entries = entries
        self.filename = filename

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __getitem__(self, position: int) -> SubtitleEntry:
        return self.entries[position]

    def valid_entries(self) -> list[SubtitleEntry]:
        return [entry for entry in self.entries if not entry.is_error]

    def error_entries(self) -> list[SubtitleEntry]:
        return [entry for entry in self.entries if entry.is_error]


class IssueCounts:
    """Number of recorded issues per kind for one analysis pass."""

    def __init__(self):
        self.counts = {kind: 0 for kind in IssueKind}

    def add(self, kind: IssueKind) -> None:
        self.counts[kind] += 1

    def __getitem__(self, kind: IssueKind | str) -> int:
        return self.counts[IssueKind(kind)]

    def __eq__(self, other) -> bool:
        if not isinstance(other, IssueCounts):
            return NotImplemented
        return self.counts == other.counts

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @property
    def has_issues(self) -> bool:
        return self.total > 0

    def as_dict(self) -> dict[str, int]:
        return {kind.value: count for kind, count in self.counts.items()}

    def __repr__(self) -> str:
        return f"IssueCounts({self.as_dict()})"
