"""Archive of raw status JSON files."""

import json
import logging
from pathlib import Path
from typing import List, Union

from fedi_archiver.core.models import AddResult, SkipReason, ValidationError
from fedi_archiver.core.status import Status
from fedi_archiver.core.store import ArchiveStore

logger = logging.getLogger(__name__)


class StatusArchive:
    """Stores each status as ``<id>.json`` in the archive directory."""

    FILE_EXTENSION = ".json"

    def __init__(
        self,
        archive_path: Union[str, Path],
        overwrite: bool = False,
    ):
        self.store = ArchiveStore(
            archive_path,
            file_extension=self.FILE_EXTENSION,
            overwrite=overwrite,
            supports_delete=True,
            min_content_id_len=1,
        )
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

    def delete_content(self, status_id: str) -> bool:
        return self.store.delete_content(status_id)

    def add_statuses(self, statuses: List[Status]) -> int:
        """Write any statuses not yet in the archive.

        Args:
            statuses: Raw status records, e.g. as fetched from the server

        Returns:
            Number of statuses written

        Raises:
            ValidationError: If statuses is not a list
        """
        if not isinstance(statuses, list):
            raise ValidationError("New statuses must be an array")

        self.store.load_contents()
        result = AddResult()

        for status in statuses:
            status_id = str(status["id"])
            file_name = f"{status_id}{self.FILE_EXTENSION}"

            if self.store.should_skip_existing(file_name):
                logger.debug("Skipping status %s: %s", status_id, SkipReason.ALREADY_EXISTS.value)
                result.skip(status_id, SkipReason.ALREADY_EXISTS)
                continue

            self.store.write_text(
                self.archive_path / file_name,
                json.dumps(status, indent=2, ensure_ascii=False),
            )
            result.added.append(status_id)

        self.store.mark_stale()
        self.last_result = result
        logger.info("Added %d statuses to %s", result.count, self.archive_path)
        return result.count
