"""Directory-backed content store shared by all archive types."""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Union

from fedi_archiver.core.models import (
    ConfigurationError,
    UnsupportedOperationError,
    ValidationError,
)
from fedi_archiver.core.status import status_has_tag

logger = logging.getLogger(__name__)

# Sentinel for ``file_extension``: members are subdirectories, not files
DIRECTORY_MODE = "<directory>"

READABLE_EXTENSIONS = (".json", ".md")


class CacheState(Enum):
    """Whether the cached directory listing matches the disk."""
    FRESH = "fresh"
    STALE = "stale"


class WritePolicy(Enum):
    """How writes treat an existing file.

    The value is the ``open()`` mode used for text writes.
    """
    CREATE_EXCLUSIVE = "x"
    OVERWRITE = "w"

    @property
    def binary_mode(self) -> str:
        return self.value + "b"


class ArchiveStore:
    """Lists, reads, writes and deletes the members of one archive directory.

    Members are either files ending in ``file_extension`` or, with
    ``DIRECTORY_MODE``, the subdirectories of the archive. The listing is
    cached; any write that adds or removes a member must call ``mark_stale()``.
    """

    def __init__(
        self,
        archive_path: Union[str, Path],
        file_extension: Optional[str] = None,
        overwrite: bool = False,
        status_filter: Optional[str] = None,
        supports_delete: bool = False,
        min_content_id_len: int = 0,
    ):
        """Initialize ArchiveStore.

        Args:
            archive_path: Path to the archive directory
            file_extension: Suffix of member files, DIRECTORY_MODE, or None
                            when the owning archive has not configured it yet
            overwrite: Replace existing files instead of leaving them alone
            status_filter: Tag a status must carry to be archived
            supports_delete: Whether delete_content is allowed
            min_content_id_len: Minimum length of a valid content id

        Raises:
            ConfigurationError: If the path is missing or not a directory
        """
        path = Path(archive_path) if archive_path else None
        if path is None or not path.exists():
            raise ConfigurationError("Archive path not found")

        if not path.is_dir():
            raise ConfigurationError("Archive path must be a directory")

        if status_filter is not None and not isinstance(status_filter, str):
            raise ConfigurationError("The status filter must be a string")

        self.archive_path = path
        self.file_extension = file_extension
        self.write_policy = WritePolicy.OVERWRITE if overwrite else WritePolicy.CREATE_EXCLUSIVE
        self.status_filter = status_filter or None
        self.supports_delete = supports_delete
        self.min_content_id_len = min_content_id_len
        self.contents: List[str] = []
        self.cache_state = CacheState.STALE

    @property
    def overwrite(self) -> bool:
        return self.write_policy is WritePolicy.OVERWRITE

    @property
    def cache_stale(self) -> bool:
        return self.cache_state is CacheState.STALE

    def mark_stale(self) -> None:
        self.cache_state = CacheState.STALE

    def load_contents(self) -> int:
        """Refresh the cached listing if it is stale.

        Returns:
            Number of members in the archive

        Raises:
            ConfigurationError: If no member-matching rule was configured
        """
        if self.file_extension is None:
            raise ConfigurationError("The archive file extension has not been configured")

        if not self.cache_stale:
            return len(self.contents)

        self.contents = self._list_directory()
        self.cache_state = CacheState.FRESH
        return len(self.contents)

    def _list_directory(self) -> List[str]:
        if self.file_extension == DIRECTORY_MODE:
            return [entry.name for entry in self.archive_path.iterdir() if entry.is_dir()]

        return [
            entry.name for entry in self.archive_path.iterdir()
            if entry.suffix == self.file_extension and entry.is_file()
        ]

    def get_contents_count(self) -> int:
        if self.cache_stale:
            self.load_contents()
        return len(self.contents)

    def get_contents(self) -> List[str]:
        if self.cache_stale:
            self.load_contents()
        return self.contents

    def has_member(self, name: str) -> bool:
        """Check the cached listing for a member, loading it first if stale."""
        return name in self.get_contents()

    def should_skip_existing(self, name: str) -> bool:
        """True when the write policy forbids replacing an existing member."""
        return not self.overwrite and self.has_member(name)

    def matches_filter(self, status) -> bool:
        """Check a status against the configured tag filter."""
        if self.status_filter is None:
            return True
        return status_has_tag(status, self.status_filter)

    def validate_content_id(self, content_id: Any) -> str:
        """Validate a content id.

        Raises:
            ValidationError: If the id is not a string of sufficient length
        """
        if not isinstance(content_id, str) or not content_id:
            raise ValidationError("The contentID parameter must be a non-empty string")

        if len(content_id) < self.min_content_id_len:
            raise ValidationError(
                f"The contentID parameter must be at least {self.min_content_id_len} characters"
            )

        return content_id

    def content_path(self, content_id: str) -> Path:
        return self.archive_path / f"{content_id}{self.file_extension}"

    def get_content(self, content_id: str) -> Union[dict, str, bool]:
        """Read one member by id.

        Returns:
            Parsed JSON for ``.json`` archives, raw text for ``.md``
            archives, or False if the member does not exist

        Raises:
            UnsupportedOperationError: If the archive holds other content
        """
        if self.file_extension not in READABLE_EXTENSIONS:
            raise UnsupportedOperationError(
                f"Reading content is not supported for {self.file_extension} archives"
            )

        self.validate_content_id(content_id)
        file_path = self.content_path(content_id)

        if not file_path.is_file():
            return False

        text = file_path.read_text(encoding='utf-8')
        if self.file_extension == ".json":
            return json.loads(text)
        return text

    def delete_content(self, content_id: str) -> bool:
        """Delete one member by id.

        Returns:
            True if a file was removed, False if it was absent or removal failed

        Raises:
            UnsupportedOperationError: If the archive does not support deletion
        """
        if not self.supports_delete:
            raise UnsupportedOperationError("Deleting content is not supported by this archive")

        self.validate_content_id(content_id)
        file_path = self.content_path(content_id)

        if not file_path.is_file():
            return False

        try:
            file_path.unlink()
        except OSError as e:
            logger.warning("Unable to delete %s: %s", file_path, e)
            return False

        self.mark_stale()
        return True

    def write_text(self, path: Path, text: str) -> None:
        """Write a text file under the configured write policy."""
        with open(path, self.write_policy.value, encoding='utf-8') as f:
            f.write(text)

    def write_bytes(self, path: Path, data: bytes) -> None:
        """Write a binary file under the configured write policy."""
        with open(path, self.write_policy.binary_mode) as f:
            f.write(data)
