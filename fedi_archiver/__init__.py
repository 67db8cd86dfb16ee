"""
Fedi Archiver - Archive statuses from a Fediverse server

A small library and command line tool for keeping a local archive of a
user's statuses and turning it into static site content:
- Raw status JSON archive
- Media attachment downloads
- Markdown posts with YAML front matter
- Photo posts with copied media
"""

__version__ = "0.1.0"

from fedi_archiver.core.models import (
    AddResult,
    ArchiveError,
    ConfigurationError,
    SkipReason,
    TransportError,
    UnsupportedOperationError,
    ValidationError,
)
from fedi_archiver.core.store import ArchiveStore
from fedi_archiver.core.status_archive import StatusArchive
from fedi_archiver.core.media_archive import MediaArchive
from fedi_archiver.core.creator import ContentCreator
from fedi_archiver.core.content_archive import ContentArchive
from fedi_archiver.core.photo_archive import PhotoArchive
from fedi_archiver.transforms.tags import TagReplacer

__all__ = [
    "AddResult",
    "ArchiveError",
    "ConfigurationError",
    "SkipReason",
    "TransportError",
    "UnsupportedOperationError",
    "ValidationError",
    "ArchiveStore",
    "StatusArchive",
    "MediaArchive",
    "ContentCreator",
    "ContentArchive",
    "PhotoArchive",
    "TagReplacer",
]
