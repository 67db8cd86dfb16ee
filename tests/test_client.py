"""Tests for the server API client."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from fedi_archiver.client import StatusFetcher, UserLookup, validate_host
from fedi_archiver.core.models import TransportError, ValidationError


def make_response(data=None, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.json.return_value = data
    return response


class TestValidateHost:
    """Tests for host name validation."""

    @pytest.mark.parametrize("host", ["theblower.au", "mastodon.social", "a-b.example.co.uk"])
    def test_valid_hosts(self, host):
        assert validate_host(host) == host

    @pytest.mark.parametrize(
        "host", ["", "localhost", "https://theblower.au", "-bad.example.com", "theblower.au/", None]
    )
    def test_invalid_hosts(self, host):
        with pytest.raises(ValidationError, match="FQDN"):
            validate_host(host)


class TestStatusFetcher:
    """Tests for StatusFetcher class."""

    def test_url(self):
        fetcher = StatusFetcher("theblower.au", "109318341162891456")
        assert fetcher.url_to_fetch == (
            "https://theblower.au/api/v1/accounts/109318341162891456/statuses"
            "?exclude_replies=true&exclude_reblogs=true"
        )

    @pytest.mark.parametrize("user_id", ["", "abc", "12a", None, 123])
    def test_requires_numeric_user_id(self, user_id):
        with pytest.raises(ValidationError, match="numeric userId"):
            StatusFetcher("theblower.au", user_id)

    def test_requires_valid_host(self):
        with pytest.raises(ValidationError):
            StatusFetcher("not a host", "123")

    def test_fetch_statuses(self, sample_status):
        fetcher = StatusFetcher("theblower.au", "123", timeout=5)

        with patch("fedi_archiver.client.requests.get", return_value=make_response([sample_status])) as get:
            statuses = fetcher.fetch_statuses()

        assert statuses == [sample_status]
        assert fetcher.fetched_status_data == [sample_status]
        get.assert_called_once_with(
            fetcher.url_to_fetch, timeout=5, headers={"Accept": "application/json"}
        )

    def test_http_error(self):
        fetcher = StatusFetcher("theblower.au", "123")

        with patch("fedi_archiver.client.requests.get", return_value=make_response(status_code=503)):
            with pytest.raises(TransportError, match="503") as exc_info:
                fetcher.fetch_statuses()

        assert exc_info.value.status_code == 503
        assert fetcher.fetched_status_data is None

    def test_network_error(self):
        fetcher = StatusFetcher("theblower.au", "123")

        with patch("fedi_archiver.client.requests.get", side_effect=requests.Timeout("slow")):
            with pytest.raises(TransportError):
                fetcher.fetch_statuses()

    def test_invalid_json(self):
        fetcher = StatusFetcher("theblower.au", "123")
        response = make_response()
        response.json.side_effect = ValueError("not json")

        with patch("fedi_archiver.client.requests.get", return_value=response):
            with pytest.raises(TransportError, match="Invalid JSON"):
                fetcher.fetch_statuses()

    def test_unexpected_payload(self):
        fetcher = StatusFetcher("theblower.au", "123")

        with patch("fedi_archiver.client.requests.get", return_value=make_response({"error": "x"})):
            with pytest.raises(TransportError, match="list of statuses"):
                fetcher.fetch_statuses()


class TestUserLookup:
    """Tests for UserLookup class."""

    def test_strips_leading_at(self):
        lookup = UserLookup("theblower.au", "@ausbirdsnaps")
        assert lookup.user_name == "ausbirdsnaps"
        assert lookup.url_to_fetch == "https://theblower.au/api/v1/accounts/lookup?acct=ausbirdsnaps"

    @pytest.mark.parametrize("user_name", ["", "@", "two words", None])
    def test_requires_user_name(self, user_name):
        with pytest.raises(ValidationError):
            UserLookup("theblower.au", user_name)

    def test_get_user_id_fetches_once(self):
        lookup = UserLookup("theblower.au", "ausbirdsnaps")
        response = make_response({"id": "109318341162891456", "username": "ausbirdsnaps"})

        with patch("fedi_archiver.client.requests.get", return_value=response) as get:
            assert lookup.get_user_id() == "109318341162891456"
            assert lookup.get_user_id() == "109318341162891456"

        assert get.call_count == 1

    def test_numeric_id_is_returned_as_string(self):
        lookup = UserLookup("theblower.au", "ausbirdsnaps")

        with patch("fedi_archiver.client.requests.get", return_value=make_response({"id": 42})):
            assert lookup.get_user_id() == "42"

    def test_not_found(self):
        lookup = UserLookup("theblower.au", "nobody")

        with patch("fedi_archiver.client.requests.get", return_value=make_response(status_code=404)):
            with pytest.raises(TransportError):
                lookup.get_user_id()
