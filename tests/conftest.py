"""Shared fixtures for Fedi Archiver tests."""

import copy
import json
from pathlib import Path

import pytest

SAMPLE_STATUS = {
    "id": "112793425453345288",
    "created_at": "2024-07-14T05:28:54.000Z",
    "url": "https://theblower.au/@ausbirdsnaps/112793425453345288",
    "content": (
        "<p>Hello Blowerians! There&#39;s been an uptick in reported posts lately, "
        "for probably obvious reasons. Criticism is fine.</p>"
        "<p>Please be kind to each other.</p>"
        '<p><a href="https://theblower.au/tags/moderation" class="mention hashtag" rel="tag">'
        "#<span>moderation</span></a></p>"
    ),
    "tags": [
        {"name": "moderation", "url": "https://theblower.au/tags/moderation"},
        {"name": "weather", "url": "https://theblower.au/tags/weather"},
    ],
    "media_attachments": [],
}

PHOTO_STATUS = {
    "id": "112546982904162819",
    "created_at": "2024-05-31T23:42:11.000Z",
    "url": "https://theblower.au/@ausbirdsnaps/112546982904162819",
    "content": "<p>A New Holland Honeyeater in the garden this morning. It did not sit still for long.</p>",
    "tags": [
        {"name": "australiannatives", "url": "https://theblower.au/tags/australiannatives"},
        {"name": "SouthAustralia", "url": "https://theblower.au/tags/SouthAustralia"},
    ],
    "media_attachments": [
        {
            "id": "112546982645822223",
            "type": "image",
            "url": (
                "https://static.theblower.au/media_attachments/files/112/546/982/645/822/223/"
                "original/dfb3792535a960dd.jpeg"
            ),
        }
    ],
}

TAG_MAPPING_YAML = """\
australiannatives: AustralianNatives
teddybear: TeddyBear
honeyeater: Honeyeater
photography: Photography
weather: null
"""


@pytest.fixture
def sample_status():
    return copy.deepcopy(SAMPLE_STATUS)


@pytest.fixture
def photo_status():
    return copy.deepcopy(PHOTO_STATUS)


@pytest.fixture
def tag_mapping_file(tmp_path) -> Path:
    path = tmp_path / "tag-mapping.yml"
    path.write_text(TAG_MAPPING_YAML, encoding="utf-8")
    return path


def write_statuses(directory: Path, *statuses) -> list:
    """Write statuses as ``<id>.json`` files and return the file names."""
    names = []
    for status in statuses:
        name = f"{status['id']}.json"
        (directory / name).write_text(json.dumps(status, indent=2), encoding="utf-8")
        names.append(name)
    return names


@pytest.fixture
def archive_dirs(tmp_path):
    """Create empty status, media, content and photo archive directories."""
    dirs = {}
    for name in ("statuses", "media", "content", "photos"):
        path = tmp_path / name
        path.mkdir()
        dirs[name] = path
    return dirs
