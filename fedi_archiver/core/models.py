"""Data models and errors for Fedi Archiver."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class ArchiveError(Exception):
    """Base class for every error raised by the archive layer."""


class ConfigurationError(ArchiveError, ValueError):
    """An archive or command was set up incorrectly.

    Raised for a missing or non-directory archive path, an archive whose
    member-matching rule was never configured, or a missing environment value.
    """


class ValidationError(ArchiveError, TypeError):
    """A public operation was called with malformed input."""


class UnsupportedOperationError(ArchiveError, NotImplementedError):
    """The archive does not support the requested capability."""


class TransportError(ArchiveError):
    """An HTTP request failed or returned a non-success status."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class SkipReason(str, Enum):
    """Why an item was left out of a batch."""

    ALREADY_EXISTS = "already exists"
    FILTERED_BY_TAG = "filtered by tag"
    NO_MEDIA = "no media"
    FETCH_FAILED = "fetch failed"


@dataclass
class AddResult:
    """Outcome of one add batch.

    The archive methods return ``count``; the full result is kept on the
    archive as ``last_result`` for callers that want to know what was skipped.
    """
    added: List[str] = field(default_factory=list)
    skipped: Dict[str, SkipReason] = field(default_factory=dict)

    @property
    def count(self) -> int:
        return len(self.added)

    def skip(self, item_id: str, reason: SkipReason) -> None:
        self.skipped[item_id] = reason
