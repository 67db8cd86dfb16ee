"""Tag renaming driven by a YAML mapping file."""

from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml

from fedi_archiver.core.models import ConfigurationError, ValidationError


class TagReplacer:
    """Renames or drops tags using a static mapping.

    The mapping file is a flat YAML mapping of original tag name to either a
    replacement name or ``null``:

        australiannatives: AustralianNatives
        weather: null

    A ``null`` value drops the tag; tags without an entry pass through.
    """

    def __init__(self, mapping_path: Union[str, Path]):
        """Initialize TagReplacer.

        Args:
            mapping_path: Path to the YAML mapping file

        Raises:
            ConfigurationError: If the path is missing or not a regular file
        """
        path = Path(mapping_path) if mapping_path else None
        if path is None or not path.exists():
            raise ConfigurationError("YAML file not found")

        if not path.is_file():
            raise ConfigurationError("Path must be to a file")

        self.mapping_path = path
        self.tag_mappings: Optional[Dict[str, Optional[str]]] = None

    def load_mapping_list(self) -> None:
        """Parse the mapping file once; later calls do nothing."""
        if self.tag_mappings is not None:
            return

        with open(self.mapping_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"Tag mapping file must contain a mapping: {self.mapping_path}")

        self.tag_mappings = {
            str(k): (None if v is None else str(v)) for k, v in data.items()
        }

    def get_mapping_count(self) -> int:
        self.load_mapping_list()
        return len(self.tag_mappings)

    def replace_tags(self, original_tags: List[str]) -> List[str]:
        """Apply the mapping to a list of tags, keeping input order.

        Raises:
            ValidationError: If original_tags is not a list
        """
        if not isinstance(original_tags, list):
            raise ValidationError("originalTags parameter must be an array")

        self.load_mapping_list()

        new_tags = []
        for tag in original_tags:
            if tag not in self.tag_mappings:
                new_tags.append(tag)
                continue

            replacement = self.tag_mappings[tag]
            if replacement is not None:
                new_tags.append(replacement)

        return new_tags

    def __call__(self, tags: List[str]) -> List[str]:
        return self.replace_tags(tags)
