"""Domain exceptions for subtitle loading, fixing and export."""


class SubtitleError(Exception):
    """Base exception for subtitle processing errors."""

    pass


class UnsupportedEncodingError(SubtitleError):
    """Raised when an encoding outside the supported menu is requested."""

    def __init__(self, encoding: str, supported: list[str]):
        self.encoding = encoding
        self.supported = supported
        super().__init__(
            f"Unsupported encoding '{encoding}'. Supported encodings: {', '.join(supported)}"
        )


class SubtitleDecodeError(SubtitleError):
    """Raised when subtitle bytes cannot be read or decoded."""

    pass


class SubtitleEncodeError(SubtitleError):
    """Raised when serialized subtitles cannot be encoded into the target charset."""

    pass


class ConfirmationRequiredError(SubtitleError):
    """Raised when a destructive fix is requested without confirmation."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            f"Operation '{operation}' permanently removes text and requires confirmation"
        )


class NoDocumentLoadedError(SubtitleError):
    """Raised when a session operation needs a document but none is loaded."""

    pass
