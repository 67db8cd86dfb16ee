"""Archive of Markdown posts generated from archived statuses."""

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from fedi_archiver.core.creator import ContentCreator
from fedi_archiver.core.models import AddResult, SkipReason, ValidationError
from fedi_archiver.core.status import status_id_from_filename
from fedi_archiver.core.store import ArchiveStore
from fedi_archiver.transforms.tags import TagReplacer

logger = logging.getLogger(__name__)


def read_status(status_archive_path: Union[str, Path], status_file: str) -> dict:
    """Load a status JSON file from the status archive."""
    path = Path(status_archive_path) / status_file
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


class ContentArchive:
    """Writes one ``<id>.md`` post per archived status."""

    FILE_EXTENSION = ".md"

    def __init__(
        self,
        archive_path: Union[str, Path],
        overwrite: bool = False,
        status_filter: Optional[str] = None,
        tag_replacer: Optional[TagReplacer] = None,
    ):
        """Initialize ContentArchive.

        Args:
            archive_path: Path to the content archive directory
            overwrite: Regenerate posts that already exist
            status_filter: Only archive statuses carrying this tag
            tag_replacer: Optional tag mapping for the front matter
        """
        self.store = ArchiveStore(
            archive_path,
            file_extension=self.FILE_EXTENSION,
            overwrite=overwrite,
            status_filter=status_filter,
        )
        self.content_creator = ContentCreator(tag_replacer=tag_replacer)
        self.last_result = AddResult()

    @property
    def archive_path(self) -> Path:
        return self.store.archive_path

    def load_contents(self) -> int:
        return self.store.load_contents()

    def get_contents(self) -> List[str]:
        return self.store.get_contents()

    def get_contents_count(self) -> int:
        return self.store.get_contents_count()

    def get_content(self, status_id: str):
        return self.store.get_content(status_id)

    def add_content(self, statuses: List[str], status_archive_path: Union[str, Path]) -> int:
        """Generate posts for statuses that do not have one yet.

        Args:
            statuses: File names in the status archive, e.g. ``"123.json"``
            status_archive_path: Path to the status archive directory

        Returns:
            Number of posts written

        Raises:
            ValidationError: If the arguments have the wrong type
        """
        if not isinstance(statuses, list):
            raise ValidationError("New statuses must be an array")

        if not isinstance(status_archive_path, (str, Path)):
            raise ValidationError("The statusArchivePath parameter must be a string")

        self.store.load_contents()
        result = AddResult()

        for status_file in statuses:
            status_id = status_id_from_filename(status_file)
            file_name = f"{status_id}{self.FILE_EXTENSION}"

            if self.store.should_skip_existing(file_name):
                logger.debug("Skipping status %s: %s", status_id, SkipReason.ALREADY_EXISTS.value)
                result.skip(status_id, SkipReason.ALREADY_EXISTS)
                continue

            status = read_status(status_archive_path, status_file)

            if not self.store.matches_filter(status):
                logger.debug("Skipping status %s: %s", status_id, SkipReason.FILTERED_BY_TAG.value)
                result.skip(status_id, SkipReason.FILTERED_BY_TAG)
                continue

            document = self.content_creator.build_document(status)
            self.store.write_text(self.archive_path / file_name, document)
            result.added.append(status_id)

        self.store.mark_stale()
        self.last_result = result
        logger.info("Added %d posts to %s", result.count, self.archive_path)
        return result.count
