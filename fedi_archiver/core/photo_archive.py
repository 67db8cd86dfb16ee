"""Archive of photo posts, one directory per status."""

import logging
import shutil
from pathlib import Path
from typing import List, Optional, Union

from fedi_archiver.core.content_archive import read_status
from fedi_archiver.core.creator import ContentCreator
from fedi_archiver.core.models import AddResult, SkipReason, ValidationError
from fedi_archiver.core.status import media_filename, status_has_media, status_id_from_filename
from fedi_archiver.core.store import DIRECTORY_MODE, ArchiveStore
from fedi_archiver.transforms.tags import TagReplacer

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = ["Photos"]
INDEX_FILE_NAME = "index.md"


class PhotoArchive:
    """Writes ``<id>/index.md`` plus copies of the status media.

    Existing entries are never replaced: the overwrite flag is accepted for
    symmetry with the other archives but always ignored.
    """

    def __init__(
        self,
        archive_path: Union[str, Path],
        overwrite: bool = False,
        status_filter: Optional[str] = None,
        tag_replacer: Optional[TagReplacer] = None,
    ):
        if overwrite:
            logger.warning("Overwriting content is not supported by the photo archive")

        self.store = ArchiveStore(
            archive_path,
            file_extension=DIRECTORY_MODE,
            overwrite=False,
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

    def add_content(
        self,
        statuses: List[str],
        status_archive_path: Union[str, Path],
        media_archive_path: Union[str, Path],
        categories: Optional[List[str]] = None,
    ) -> int:
        """Create photo posts for statuses with media.

        Media files must already be in the media archive; they are copied,
        not downloaded.

        Args:
            statuses: File names in the status archive, e.g. ``"123.json"``
            status_archive_path: Path to the status archive directory
            media_archive_path: Path to the media archive directory
            categories: Extra categories added after the default ones

        Returns:
            Number of photo posts created

        Raises:
            ValidationError: If the arguments have the wrong type
        """
        if not isinstance(statuses, list):
            raise ValidationError("New statuses must be an array")

        if not isinstance(status_archive_path, (str, Path)):
            raise ValidationError("The statusArchivePath parameter must be a string")

        if not isinstance(media_archive_path, (str, Path)):
            raise ValidationError("The mediaArchivePath parameter must be a string")

        if categories is not None and not isinstance(categories, list):
            raise ValidationError("The categories parameter must be an array")

        all_categories = list(DEFAULT_CATEGORIES)
        for category in categories or []:
            if category not in all_categories:
                all_categories.append(category)

        self.store.load_contents()
        result = AddResult()

        for status_file in statuses:
            status_id = status_id_from_filename(status_file)

            if self.store.has_member(status_id):
                logger.debug("Skipping status %s: %s", status_id, SkipReason.ALREADY_EXISTS.value)
                result.skip(status_id, SkipReason.ALREADY_EXISTS)
                continue

            status = read_status(status_archive_path, status_file)

            if not self.store.matches_filter(status):
                logger.debug("Skipping status %s: %s", status_id, SkipReason.FILTERED_BY_TAG.value)
                result.skip(status_id, SkipReason.FILTERED_BY_TAG)
                continue

            if not status_has_media(status):
                logger.debug("Skipping status %s: %s", status_id, SkipReason.NO_MEDIA.value)
                result.skip(status_id, SkipReason.NO_MEDIA)
                continue

            document = self.content_creator.build_document(status, all_categories)

            dir_path = self.archive_path / status_id
            dir_path.mkdir()
            try:
                self.store.write_text(dir_path / INDEX_FILE_NAME, document)

                for attachment in status["media_attachments"]:
                    file_name = media_filename(attachment["url"])
                    shutil.copyfile(Path(media_archive_path) / file_name, dir_path / file_name)
            except Exception:
                # A partial entry would be skipped as existing on every later run
                shutil.rmtree(dir_path)
                self.store.mark_stale()
                raise

            result.added.append(status_id)

        self.store.mark_stale()
        self.last_result = result
        logger.info("Added %d photo posts to %s", result.count, self.archive_path)
        return result.count
