"""Pydantic schemas for the subtitle QC API."""

from pydantic import BaseModel, Field

from app.models.subtitle import Document, IssueCounts, IssueKind, SubtitleEntry
from app.services.fixer import FixOperation


class AnalyzeRequest(BaseModel):
    """Request model for the analyze endpoint."""

    srt_content: str = Field(..., description="SRT subtitle file content to check", min_length=1)


class FixRequest(BaseModel):
    """Request model for the fix endpoint."""

    srt_content: str = Field(..., description="SRT subtitle file content to fix", min_length=1)
    operations: list[FixOperation] = Field(
        default_factory=lambda: [FixOperation.RESOLVE_COMMON],
        description="Fixes to apply, in order",
    )
    confirm: bool = Field(
        False,
        description="Confirm text-removing fixes (strip_annotations, strip_markup)",
    )


class ExportRequest(FixRequest):
    """Request model for the export endpoint."""

    operations: list[FixOperation] = Field(
        default_factory=list, description="Optional fixes to apply before export"
    )
    encoding: str | None = Field(None, description="Output encoding (default: utf-8)")
    filename: str | None = Field(None, description="Original filename, used for the download name")


class IssueSchema(BaseModel):
    """A single validation issue."""

    kind: IssueKind
    severity: str
    label: str
    message: str


class EntrySchema(BaseModel):
    """One subtitle block with its issues."""

    index: int
    start_time: str | None = None
    end_time: str | None = None
    start_time_ms: int | None = None
    end_time_ms: int | None = None
    text: str | None = None
    raw: str
    is_error: bool
    issues: list[IssueSchema]

    @classmethod
    def from_entry(cls, entry: SubtitleEntry) -> "EntrySchema":
        issues = [
            IssueSchema(
                kind=issue.kind,
                severity=issue.kind.severity,
                label=issue.kind.label,
                message=issue.message,
            )
            for issue in entry.issues
        ]
        if entry.is_error:
            return cls(index=entry.index, raw=entry.raw, is_error=True, issues=issues)
        return cls(
            index=entry.index,
            start_time=entry.start_time,
            end_time=entry.end_time,
            start_time_ms=entry.start_time_ms,
            end_time_ms=entry.end_time_ms,
            text=entry.text,
            raw=entry.raw,
            is_error=False,
            issues=issues,
        )


class ReportResponse(BaseModel):
    """Analysis report for a document."""

    filename: str | None = Field(None, description="Source filename, if uploaded")
    entry_count: int = Field(..., description="Number of blocks in the document")
    error_count: int = Field(..., description="Number of malformed blocks")
    counts: dict[str, int] = Field(..., description="Issue counts per kind")
    has_issues: bool
    entries: list[EntrySchema]

    @classmethod
    def from_document(cls, document: Document, counts: IssueCounts) -> "ReportResponse":
        return cls(
            filename=document.filename,
            entry_count=len(document),
            error_count=len(document.error_entries()),
            counts=counts.as_dict(),
            has_issues=counts.has_issues,
            entries=[EntrySchema.from_entry(entry) for entry in document],
        )


class FixResponse(BaseModel):
    """Response model for the fix endpoint."""

    fixed_srt: str = Field(..., description="Serialized SRT with malformed blocks removed")
    changes: dict[str, int] = Field(..., description="Entries changed per operation")
    report: ReportResponse


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    service: str
    status: str
    version: str
    authentication: str
    encodings: list[str]
    endpoints: dict[str, list[str]]
