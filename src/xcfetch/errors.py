"""Exception hierarchy for the xeno-canto fetch pipeline."""
from __future__ import annotations

from typing import Optional


class XenoCantoError(RuntimeError):
    """Base class for every failure raised by xcfetch."""


class ConfigurationError(XenoCantoError):
    """Raised when required configuration such as the API key is missing."""


class IdentifierParseError(XenoCantoError, ValueError):
    """Raised when a recording identifier cannot be turned into a catalogue number."""

    def __init__(self, text: str, message: Optional[str] = None) -> None:
        self.text = text
        super().__init__(message or f"Unrecognized recording identifier: {text!r}")


class UnrecognizedIdentifierError(IdentifierParseError):
    pass


class IdentifierOverflowError(IdentifierParseError):
    def __init__(self, text: str) -> None:
        super().__init__(text, f"Catalogue number does not fit in 64 bits: {text!r}")


class FetchError(XenoCantoError):
    """Raised when the recording lookup fails."""


class TransportError(FetchError):
    pass


class HTTPStatusError(FetchError):
    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"xeno-canto API error {status_code}: {body}")


class MalformedResponseError(FetchError):
    pass


class APIError(FetchError):
    """The API answered with a 200 status but reported an error in the body."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"xeno-canto API error: {message}")


class RecordingNotFoundError(FetchError):
    def __init__(self, xc_id: int) -> None:
        self.xc_id = xc_id
        super().__init__(f"No recordings found for XC{xc_id}")


class PersistError(XenoCantoError):
    """Raised when metadata or audio cannot be written to disk."""


class DirectoryCreateError(PersistError):
    pass


class MetadataWriteError(PersistError):
    pass


class MissingAudioURLError(PersistError):
    pass


class AudioFetchError(PersistError):
    pass


class AudioWriteError(PersistError):
    pass


class MergeError(XenoCantoError):
    """Raised when the shared sound index cannot be read or rewritten."""


class CorruptIndexError(MergeError):
    pass


class IndexWriteError(MergeError):
    pass
