"""Core archive components for Fedi Archiver."""

from fedi_archiver.core.models import AddResult, ArchiveError, SkipReason
from fedi_archiver.core.store import DIRECTORY_MODE, ArchiveStore, CacheState, WritePolicy
from fedi_archiver.core.status_archive import StatusArchive
from fedi_archiver.core.media_archive import MediaArchive
from fedi_archiver.core.creator import ContentCreator
from fedi_archiver.core.content_archive import ContentArchive
from fedi_archiver.core.photo_archive import PhotoArchive

__all__ = [
    "AddResult",
    "ArchiveError",
    "SkipReason",
    "DIRECTORY_MODE",
    "ArchiveStore",
    "CacheState",
    "WritePolicy",
    "StatusArchive",
    "MediaArchive",
    "ContentCreator",
    "ContentArchive",
    "PhotoArchive",
]
