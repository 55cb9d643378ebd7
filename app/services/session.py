"""Controller that owns the currently loaded subtitle document."""

from typing import BinaryIO

from app.core.exceptions import NoDocumentLoadedError
from app.core.logging import get_logger
from app.models.subtitle import Document, IssueCounts
from app.services.encodings import (
    encode_text,
    fixed_filename,
    read_bytes,
    read_text,
    resolve_encoding,
)
from app.services.fixer import FixOperation, FixResult, apply_fix
from app.services.srt_parser import parse_srt, reconstruct_srt
from app.services.validator import ValidationRules, analyze

logger = get_logger(__name__)


class SubtitleSession:
    """Load, fix and export one subtitle document at a time.

    A load builds a complete new document before swapping it in, so a failed
    read leaves the previous document untouched.
    """

    def __init__(self, rules: ValidationRules | None = None):
        self.rules = rules or ValidationRules.from_settings()
        self.document: Document | None = None
        self.counts: IssueCounts | None = None
        self._raw: bytes | None = None

    def _require_document(self) -> Document:
        if self.document is None:
            raise NoDocumentLoadedError("No subtitle file has been loaded")
        return self.document

    def load(
        self, source: bytes | BinaryIO, filename: str | None = None, encoding: str | None = None
    ) -> IssueCounts:
        """Read, parse and analyze a subtitle file, replacing the current document.

        Raises:
            UnsupportedEncodingError: If the encoding is not on the menu
            SubtitleDecodeError: If the file cannot be read or decoded
        """
        encoding = resolve_encoding(encoding)
        raw = read_bytes(source)
        counts = self.load_text(read_text(raw, encoding), filename=filename)
        self._raw = raw
        logger.info(
            "Loaded %s as %s: %d entries, %d issues",
            filename or "subtitles",
            encoding,
            len(self.document),
            counts.total,
        )
        return counts

    def load_text(self, text: str, filename: str | None = None) -> IssueCounts:
        """Parse and analyze already-decoded text, replacing the current document."""
        document = parse_srt(text, filename=filename)
        counts = analyze(document, self.rules)
        self.document, self.counts, self._raw = document, counts, text.encode("utf-8")
        return counts

    def reload(self, encoding: str) -> IssueCounts:
        """Re-read the last loaded file with a different encoding."""
        document = self._require_document()
        return self.load(self._raw, filename=document.filename, encoding=encoding)

    def fix(self, operation: FixOperation | str, confirmed: bool = False) -> FixResult:
        """Apply one fix to the current document and refresh the counts."""
        result = apply_fix(self._require_document(), operation, confirmed, self.rules)
        self.counts = result.counts
        return result

    def export(self, encoding: str | None = None) -> tuple[str, bytes]:
        """Serialize the parsed entries for download.

        Returns:
            Tuple of (suggested filename, encoded payload)
        """
        document = self._require_document()
        encoding = resolve_encoding(encoding)
        payload = encode_text(reconstruct_srt(document), encoding)
        return fixed_filename(document.filename), payload
