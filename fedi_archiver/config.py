"""Configuration loaded from the environment."""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from fedi_archiver.core.models import ConfigurationError
from fedi_archiver.transforms.tags import TagReplacer

ENV_VARS = {
    "host": "ITA_HOST",
    "user_id": "ITA_USERID",
    "status_archive_path": "ITA_ARCHIVE_PATH",
    "media_archive_path": "ITA_MEDIA_ARCHIVE_PATH",
    "content_archive_path": "ITA_CONTENT_ARCHIVE_PATH",
    "photo_archive_path": "ITA_PHOTO_ARCHIVE_PATH",
    "tag_mapping_path": "ITA_TAG_MAPPING_PATH",
    "status_filter": "ITA_STATUS_FILTER",
}


@dataclass
class ArchiverConfig:
    """Settings for the archiver commands.

    Attributes:
        host: Server host name
        user_id: Numeric account id whose statuses are archived
        status_archive_path: Directory of raw status JSON files
        media_archive_path: Directory of downloaded media
        content_archive_path: Directory of generated Markdown posts
        photo_archive_path: Directory of generated photo posts
        tag_mapping_path: YAML tag mapping file
        status_filter: Tag a status must carry to become content
    """

    host: Optional[str] = None
    user_id: Optional[str] = None
    status_archive_path: Optional[str] = None
    media_archive_path: Optional[str] = None
    content_archive_path: Optional[str] = None
    photo_archive_path: Optional[str] = None
    tag_mapping_path: Optional[str] = None
    status_filter: Optional[str] = None

    @classmethod
    def from_env(cls, dotenv_path: Optional[Path] = None) -> "ArchiverConfig":
        """Build the config from ``ITA_*`` variables, reading ``.env`` first.

        Variables already set in the environment win over the ``.env`` file.
        Empty values are treated as unset.
        """
        load_dotenv(dotenv_path=dotenv_path)
        values = {name: os.environ.get(var) or None for name, var in ENV_VARS.items()}
        return cls(**values)

    def require(self, name: str) -> str:
        """Get a setting a command cannot run without.

        Raises:
            ConfigurationError: If the setting is missing
        """
        if name not in {f.name for f in fields(self)}:
            raise KeyError(name)

        value = getattr(self, name)
        if value is None:
            raise ConfigurationError(f"Expected the {ENV_VARS[name]} environment variable")
        return value

    def tag_replacer(self) -> Optional[TagReplacer]:
        if self.tag_mapping_path is None:
            return None
        return TagReplacer(self.tag_mapping_path)
