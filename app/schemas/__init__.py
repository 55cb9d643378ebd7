"""Pydantic schemas for API request/response validation."""

from app.schemas.subtitles import (
    AnalyzeRequest,
    EntrySchema,
    ExportRequest,
    FixRequest,
    FixResponse,
    HealthResponse,
    IssueSchema,
    ReportResponse,
)

__all__ = [
    "AnalyzeRequest",
    "FixRequest",
    "ExportRequest",
    "FixResponse",
    "ReportResponse",
    "EntrySchema",
    "IssueSchema",
    "HealthResponse",
]
