"""Subtitle analysis, fixing and export endpoints."""

import logging
from urllib.parse import quote

from fastapi import APIRouter, File, Form, HTTPException, Response, UploadFile, status

from app.core.config import settings
from app.core.exceptions import (
    ConfirmationRequiredError,
    SubtitleDecodeError,
    SubtitleEncodeError,
    UnsupportedEncodingError,
)
from app.schemas import AnalyzeRequest, ExportRequest, FixRequest, FixResponse, ReportResponse
from app.services.encodings import resolve_encoding
from app.services.fixer import FixOperation
from app.services.session import SubtitleSession
from app.services.srt_parser import reconstruct_srt

router = APIRouter()
logger = logging.getLogger(__name__)


def _check_confirmation(operations: list[FixOperation], confirm: bool) -> None:
    # A rejected request must not apply any of its operations
    for operation in operations:
        if operation.destructive and not confirm:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=str(ConfirmationRequiredError(operation.value)),
            )


def _content_disposition(filename: str) -> str:
    # Plain ASCII filename for old clients, RFC 6266 filename* for the real name
    fallback = filename.encode("ascii", "replace").decode("ascii")
    fallback = fallback.replace('"', "_").replace("\\", "_")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


def _apply_fixes(session: SubtitleSession, operations: list[FixOperation]) -> dict[str, int]:
    changes: dict[str, int] = {}
    for operation in operations:
        result = session.fix(operation, confirmed=True)
        changes[operation.value] = changes.get(operation.value, 0) + result.changed
    return changes


@router.post(
    "/analyze",
    response_model=ReportResponse,
    status_code=status.HTTP_200_OK,
    summary="Analyze SRT content",
    description="Parses SRT content and reports timing, readability and syntax issues",
)
async def analyze_srt(request: AnalyzeRequest):
    """Parse and analyze SRT content.

    Malformed blocks are reported as error entries rather than rejected.
    """
    session = SubtitleSession()
    counts = session.load_text(request.srt_content)
    return ReportResponse.from_document(session.document, counts)


@router.post(
    "/upload",
    response_model=ReportResponse,
    status_code=status.HTTP_200_OK,
    summary="Analyze an uploaded SRT file",
)
async def upload_srt(
    file: UploadFile = File(..., description="SRT file to check"),
    encoding: str | None = Form(None, description="Encoding to read the file with"),
):
    """Decode an uploaded SRT file with the chosen encoding and analyze it.

    Raises:
        HTTPException: 400 (unsupported encoding or undecodable file),
            413 (file too large)
    """
    content = await file.read()
    if len(content) > settings.max_file_size:
        logger.warning(
            "File too large: %d bytes (max: %d bytes)", len(content), settings.max_file_size
        )
        raise HTTPException(
            status_code=413,
            detail=(
                f"File size ({len(content):,} bytes) exceeds maximum allowed "
                f"({settings.max_file_size:,} bytes)"
            ),
        )

    session = SubtitleSession()
    try:
        counts = session.load(content, filename=file.filename, encoding=encoding)
    except (UnsupportedEncodingError, SubtitleDecodeError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return ReportResponse.from_document(session.document, counts)


@router.post(
    "/fix",
    response_model=FixResponse,
    status_code=status.HTTP_200_OK,
    summary="Apply batch fixes to SRT content",
)
async def fix_srt(request: FixRequest):
    """Apply fixes in order and return the fixed SRT with a fresh report.

    Raises:
        HTTPException: 409 if a text-removing fix is not confirmed
    """
    _check_confirmation(request.operations, request.confirm)

    session = SubtitleSession()
    session.load_text(request.srt_content)
    changes = _apply_fixes(session, request.operations)

    return FixResponse(
        fixed_srt=reconstruct_srt(session.document),
        changes=changes,
        report=ReportResponse.from_document(session.document, session.counts),
    )


@router.post(
    "/export",
    status_code=status.HTTP_200_OK,
    summary="Download fixed SRT content",
    response_class=Response,
)
async def export_srt(request: ExportRequest):
    """Serialize SRT content, optionally fixed first, as an encoded download.

    Raises:
        HTTPException: 400 (unsupported encoding or unencodable text),
            409 (unconfirmed text-removing fix)
    """
    _check_confirmation(request.operations, request.confirm)

    session = SubtitleSession()
    session.load_text(request.srt_content, filename=request.filename)
    _apply_fixes(session, request.operations)

    try:
        encoding = resolve_encoding(request.encoding)
        filename, payload = session.export(encoding)
    except (UnsupportedEncodingError, SubtitleEncodeError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info("Exporting %s (%d bytes, %s)", filename, len(payload), encoding)
    return Response(
        content=payload,
        media_type=f"text/plain; charset={encoding}",
        headers={"Content-Disposition": _content_disposition(filename)},
    )
