"""Helpers for reading fields of a raw status record."""

from pathlib import PurePosixPath
from typing import Any, Dict
from urllib.parse import urlparse

from fedi_archiver.core.models import ValidationError

Status = Dict[str, Any]


def status_has_tag(status: Status, tag: str) -> bool:
    """Check whether a status carries a tag.

    Args:
        status: Raw status record
        tag: Tag name to look for (exact, case-sensitive)

    Returns:
        True if one of the status tags has this name

    Raises:
        ValidationError: If status is not a mapping or has no tags list
    """
    if not isinstance(status, dict):
        raise ValidationError("The status parameter must be an object")

    tags = status.get("tags")
    if not isinstance(tags, list):
        raise ValidationError("The status.tags property must be an array")

    return any(isinstance(t, dict) and t.get("name") == tag for t in tags)


def status_has_media(status: Any) -> bool:
    """Check whether a status has at least one media attachment.

    Never raises: a status without media is the common case.
    """
    if not isinstance(status, dict):
        return False

    attachments = status.get("media_attachments")
    return isinstance(attachments, list) and len(attachments) > 0


def status_id_from_filename(file_name: str) -> str:
    """Get the status id from a status archive file name (``<id>.json``)."""
    name = PurePosixPath(file_name).name
    if name.endswith(".json"):
        return name[:-len(".json")]
    return name


def parse_absolute_url(url: str, param: str = "url"):
    """Parse a URL, requiring a scheme and a host.

    Raises:
        ValidationError: If the URL is not absolute
    """
    if not isinstance(url, str) or not url:
        raise ValidationError(f"The {param} parameter must be a valid URL")

    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise ValidationError(f"The {param} parameter must be a valid URL")

    return parsed


def media_filename(url: str) -> str:
    """Derive the archive file name for a media URL from its path basename."""
    parsed = parse_absolute_url(url)
    name = PurePosixPath(parsed.path).name
    if not name:
        raise ValidationError("The url parameter must point to a file")
    return name
