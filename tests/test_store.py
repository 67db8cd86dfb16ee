"""Tests for ArchiveStore and the status helpers."""

import json
from unittest.mock import patch

import pytest

from fedi_archiver.core.models import (
    ConfigurationError,
    UnsupportedOperationError,
    ValidationError,
)
from fedi_archiver.core.status import (
    media_filename,
    status_has_media,
    status_has_tag,
    status_id_from_filename,
)
from fedi_archiver.core.store import DIRECTORY_MODE, ArchiveStore, CacheState, WritePolicy


class TestArchiveStoreConstruction:
    """Tests for ArchiveStore construction."""

    def test_missing_path(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Archive path not found"):
            ArchiveStore(tmp_path / "missing")

    def test_empty_path(self):
        with pytest.raises(ConfigurationError, match="Archive path not found"):
            ArchiveStore("")

    def test_path_is_file(self, tmp_path):
        file_path = tmp_path / "file.txt"
        file_path.write_text("x")
        with pytest.raises(ConfigurationError, match="must be a directory"):
            ArchiveStore(file_path)

    def test_default_write_policy(self, tmp_path):
        store = ArchiveStore(tmp_path, ".json")
        assert store.write_policy is WritePolicy.CREATE_EXCLUSIVE
        assert not store.overwrite

    def test_overwrite_write_policy(self, tmp_path):
        store = ArchiveStore(tmp_path, ".json", overwrite=True)
        assert store.write_policy is WritePolicy.OVERWRITE
        assert store.overwrite

    def test_starts_stale(self, tmp_path):
        store = ArchiveStore(tmp_path, ".json")
        assert store.cache_state is CacheState.STALE
        assert store.cache_stale


class TestArchiveStoreListing:
    """Tests for listing and the cache."""

    @pytest.fixture
    def populated(self, tmp_path):
        (tmp_path / "1.json").write_text("{}")
        (tmp_path / "2.json").write_text("{}")
        (tmp_path / "notes.md").write_text("# notes")
        (tmp_path / "3").mkdir()
        (tmp_path / "4").mkdir()
        return tmp_path

    def test_load_without_extension(self, populated):
        store = ArchiveStore(populated)
        with pytest.raises(ConfigurationError):
            store.load_contents()

    def test_file_mode_matches_extension(self, populated):
        store = ArchiveStore(populated, ".json")
        assert store.load_contents() == 2
        assert sorted(store.get_contents()) == ["1.json", "2.json"]
        assert not store.cache_stale

    def test_directory_mode_lists_subdirectories(self, populated):
        store = ArchiveStore(populated, DIRECTORY_MODE)
        assert store.load_contents() == 2
        assert sorted(store.get_contents()) == ["3", "4"]

    def test_empty_archive(self, tmp_path):
        store = ArchiveStore(tmp_path, ".json")
        assert store.get_contents_count() == 0
        assert store.get_contents() == []

    def test_cached_contents_are_returned_without_reading(self, tmp_path):
        store = ArchiveStore(tmp_path, ".json")
        store.contents = []
        store.cache_state = CacheState.FRESH

        with patch.object(store, "_list_directory") as listing:
            assert store.get_contents_count() == 0
            assert store.get_contents() == []

        listing.assert_not_called()

    def test_single_read_until_stale(self, populated):
        store = ArchiveStore(populated, ".json")

        with patch.object(store, "_list_directory", wraps=store._list_directory) as listing:
            store.get_contents()
            store.get_contents()
            store.get_contents_count()
            assert listing.call_count == 1

            store.mark_stale()
            store.get_contents()
            assert listing.call_count == 2

    def test_new_file_visible_after_mark_stale(self, populated):
        store = ArchiveStore(populated, ".json")
        assert store.get_contents_count() == 2

        (populated / "5.json").write_text("{}")
        assert store.get_contents_count() == 2

        store.mark_stale()
        assert store.get_contents_count() == 3


class TestArchiveStoreContent:
    """Tests for reading, validating and deleting content."""

    def test_get_json_content(self, tmp_path):
        (tmp_path / "123.json").write_text(json.dumps({"id": "123"}))
        store = ArchiveStore(tmp_path, ".json")
        assert store.get_content("123") == {"id": "123"}

    def test_get_markdown_content(self, tmp_path):
        (tmp_path / "123.md").write_text("# Hello\n")
        store = ArchiveStore(tmp_path, ".md")
        assert store.get_content("123") == "# Hello\n"

    def test_get_missing_content(self, tmp_path):
        store = ArchiveStore(tmp_path, ".json")
        assert store.get_content("404") is False

    def test_get_content_unsupported_extension(self, tmp_path):
        store = ArchiveStore(tmp_path, ".jpeg")
        with pytest.raises(UnsupportedOperationError):
            store.get_content("abc")

    @pytest.mark.parametrize("content_id", ["", None, 123])
    def test_invalid_content_id(self, tmp_path, content_id):
        store = ArchiveStore(tmp_path, ".json")
        with pytest.raises(ValidationError):
            store.get_content(content_id)

    def test_minimum_content_id_length(self, tmp_path):
        store = ArchiveStore(tmp_path, ".json", min_content_id_len=5)
        with pytest.raises(ValidationError, match="at least 5"):
            store.validate_content_id("1234")
        assert store.validate_content_id("12345") == "12345"

    def test_delete_unsupported(self, tmp_path):
        store = ArchiveStore(tmp_path, ".md")
        with pytest.raises(UnsupportedOperationError):
            store.delete_content("123")

    def test_delete_existing(self, tmp_path):
        (tmp_path / "123.json").write_text("{}")
        store = ArchiveStore(tmp_path, ".json", supports_delete=True)
        assert store.get_contents_count() == 1

        assert store.delete_content("123") is True
        assert store.cache_stale
        assert store.get_contents_count() == 0
        assert store.delete_content("123") is False

    def test_delete_missing_keeps_cache_fresh(self, tmp_path):
        (tmp_path / "123.json").write_text("{}")
        store = ArchiveStore(tmp_path, ".json", supports_delete=True)
        store.load_contents()

        assert store.delete_content("999") is False
        assert not store.cache_stale
        assert store.get_contents_count() == 1

    def test_delete_failure_returns_false(self, tmp_path):
        (tmp_path / "123.json").write_text("{}")
        store = ArchiveStore(tmp_path, ".json", supports_delete=True)

        with patch("pathlib.Path.unlink", side_effect=PermissionError("denied")):
            assert store.delete_content("123") is False

        assert (tmp_path / "123.json").exists()

    def test_exclusive_write_refuses_existing_file(self, tmp_path):
        store = ArchiveStore(tmp_path, ".md")
        store.write_text(tmp_path / "a.md", "first")
        with pytest.raises(FileExistsError):
            store.write_text(tmp_path / "a.md", "second")
        assert (tmp_path / "a.md").read_text() == "first"

    def test_overwrite_replaces_file(self, tmp_path):
        store = ArchiveStore(tmp_path, ".md", overwrite=True)
        store.write_text(tmp_path / "a.md", "first")
        store.write_text(tmp_path / "a.md", "second")
        assert (tmp_path / "a.md").read_text() == "second"


class TestStatusHelpers:
    """Tests for the status helper functions."""

    def test_status_has_tag(self, sample_status):
        assert status_has_tag(sample_status, "moderation")
        assert not status_has_tag(sample_status, "Moderation")
        assert not status_has_tag(sample_status, "missing")

    def test_status_has_tag_requires_object(self):
        with pytest.raises(ValidationError, match="status parameter"):
            status_has_tag("not a status", "tag")

    def test_status_has_tag_requires_tags(self):
        with pytest.raises(ValidationError, match="status.tags"):
            status_has_tag({"id": "1"}, "tag")

    def test_status_has_media(self, sample_status, photo_status):
        assert status_has_media(photo_status)
        assert not status_has_media(sample_status)
        assert not status_has_media({"id": "1"})
        assert not status_has_media({"media_attachments": None})
        assert not status_has_media(None)

    def test_status_id_from_filename(self):
        assert status_id_from_filename("112793425453345288.json") == "112793425453345288"
        assert status_id_from_filename("112793425453345288") == "112793425453345288"

    def test_media_filename(self):
        url = "https://static.theblower.au/media/files/original/dfb3792535a960dd.jpeg"
        assert media_filename(url) == "dfb3792535a960dd.jpeg"

    @pytest.mark.parametrize("url", ["", "not a url", "/relative/path.jpeg", None])
    def test_media_filename_requires_absolute_url(self, url):
        with pytest.raises(ValidationError):
            media_filename(url)
