"""Text source and byte sink adapters for subtitle files.

Encodings come from a closed menu configured in settings; nothing here
tries to guess the charset of a file.
"""

import codecs
from pathlib import PurePath
from typing import BinaryIO

from app.core.config import Settings, get_settings
from app.core.exceptions import SubtitleDecodeError, SubtitleEncodeError, UnsupportedEncodingError
from app.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_FILENAME = "subtitles.srt"


def supported_encodings(settings: Settings | None = None) -> list[str]:
    if settings is None:
        settings = get_settings()
    return list(settings.supported_encodings)


def resolve_encoding(name: str | None, settings: Settings | None = None) -> str:
    """Validate an encoding name against the supported menu.

    Names are compared by codec identity, so ``UTF8`` and ``cp1256`` match
    ``utf-8`` and ``windows-1256``.

    Args:
        name: User-supplied encoding name (default encoding if empty)
        settings: Settings instance (optional, will use get_settings() if not provided)

    Returns:
        The menu spelling of the encoding

    Raises:
        UnsupportedEncodingError: If the name is unknown or not on the menu
    """
    if settings is None:
        settings = get_settings()
    menu = supported_encodings(settings)
    if not name:
        return settings.default_encoding

    try:
        requested = codecs.lookup(name).name
    except LookupError:
        raise UnsupportedEncodingError(name, menu)

    for option in menu:
        if codecs.lookup(option).name == requested:
            return option
    raise UnsupportedEncodingError(name, menu)


def read_bytes(source: bytes | BinaryIO) -> bytes:
    """Return the full content of ``source``.

    Raises:
        SubtitleDecodeError: If the file-like object cannot be read
    """
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    try:
        return source.read()
    except OSError as e:
        raise SubtitleDecodeError(f"Could not read subtitle file: {e}")


def read_text(source: bytes | BinaryIO, encoding: str) -> str:
    """Read a whole subtitle file as text.

    Args:
        source: Raw bytes or a binary file-like object
        encoding: Encoding to decode with

    Returns:
        Decoded document text without a leading byte order mark

    Raises:
        SubtitleDecodeError: If reading or decoding fails
    """
    data = read_bytes(source)

    try:
        text = data.decode(encoding)
    except UnicodeDecodeError as e:
        logger.warning("Failed to decode %d bytes as %s: %s", len(data), encoding, e)
        raise SubtitleDecodeError(
            f"File is not valid {encoding} text (byte {e.start}). "
            "Try re-reading it with another encoding."
        )
    return text.lstrip("\ufeff")


def encode_text(text: str, encoding: str) -> bytes:
    """Encode serialized subtitles into the chosen output charset.

    Raises:
        SubtitleEncodeError: If the text has characters the charset cannot hold
    """
    try:
        return text.encode(encoding)
    except UnicodeEncodeError as e:
        raise SubtitleEncodeError(
            f"Character {e.object[e.start:e.end]!r} cannot be written as {encoding}"
        )


def fixed_filename(filename: str | None) -> str:
    """Suggested download name for a fixed file: ``movie.srt`` -> ``movie_fixed.srt``."""
    name = PurePath(filename or DEFAULT_FILENAME).name or DEFAULT_FILENAME
    if ".srt" in name:
        return name.replace(".srt", "_fixed.srt", 1)
    return f"{name}_fixed.srt"
