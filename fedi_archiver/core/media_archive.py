"""Archive of downloaded media attachments."""

import logging
from pathlib import Path
from typing import List, Optional, Union

import requests

from fedi_archiver.core.models import AddResult, SkipReason, TransportError, ValidationError
from fedi_archiver.core.status import Status, media_filename
from fedi_archiver.core.store import ArchiveStore

logger = logging.getLogger(__name__)


class MediaArchive:
    """Downloads media attachments and stores them by URL basename."""

    FILE_EXTENSION = ".jpeg"

    def __init__(
        self,
        archive_path: Union[str, Path],
        overwrite: bool = False,
        timeout: Optional[float] = None,
    ):
        """Initialize MediaArchive.

        Args:
            archive_path: Path to the media archive directory
            overwrite: Download and replace media already in the archive
            timeout: Optional timeout in seconds for each download
        """
        self.store = ArchiveStore(
            archive_path,
            file_extension=self.FILE_EXTENSION,
            overwrite=overwrite,
            supports_delete=True,
            min_content_id_len=1,
        )
        self.timeout = timeout
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

    def delete_content(self, media_id: str) -> bool:
        """Delete a media file by its basename without the extension."""
        return self.store.delete_content(media_id)

    def add_media(self, url: str) -> int:
        """Download one media file unless it is already archived.

        Args:
            url: Absolute URL of the media file

        Returns:
            1 if the file was written, 0 if it was already present

        Raises:
            ValidationError: If url is not an absolute URL
            TransportError: If the download fails
        """
        file_name = media_filename(url)

        self.store.load_contents()
        # The listing only holds .jpeg files; other attachment types are checked on disk
        if self.store.should_skip_existing(file_name) or (
            not self.store.overwrite and (self.archive_path / file_name).exists()
        ):
            logger.debug("Skipping media %s: %s", file_name, SkipReason.ALREADY_EXISTS.value)
            return 0

        data = self._download(url)
        self.store.write_bytes(self.archive_path / file_name, data)
        self.store.mark_stale()
        logger.debug("Downloaded %s", file_name)
        return 1

    def _download(self, url: str) -> bytes:
        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"Unable to fetch {url}: {e}", url) from e

        if not response.ok:
            raise TransportError(
                f"Response status: {response.status_code}", url, response.status_code
            )

        return response.content

    def add_media_from_status(self, status: Status, continue_on_error: bool = False) -> int:
        """Download every media attachment of a status.

        Args:
            status: Raw status record
            continue_on_error: Log a failed download and carry on with the
                               remaining attachments instead of raising

        Returns:
            Number of media files written

        Raises:
            ValidationError: If status.media_attachments is not a list
            TransportError: On the first failed download, unless continue_on_error
        """
        if not isinstance(status, dict) or "media_attachments" not in status:
            raise ValidationError("Status is expected to have a media_attachments property")

        attachments = status["media_attachments"]
        if not isinstance(attachments, list):
            raise ValidationError("Media_attachments property is expected to be an array")

        result = AddResult()
        for attachment in attachments:
            url = attachment["url"]
            try:
                added = self.add_media(url)
            except TransportError as e:
                if not continue_on_error:
                    raise
                logger.warning("Unable to download %s: %s", url, e)
                result.skip(url, SkipReason.FETCH_FAILED)
                continue

            if added:
                result.added.append(url)
            else:
                result.skip(url, SkipReason.ALREADY_EXISTS)

        self.last_result = result
        return result.count
