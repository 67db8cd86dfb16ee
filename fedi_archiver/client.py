"""Minimal client for the Mastodon-compatible server API."""

import logging
import re
from typing import Any, Dict, List, Optional

import requests

from fedi_archiver.core.models import TransportError, ValidationError

logger = logging.getLogger(__name__)

# Labels of 1-63 alphanumerics/hyphens, at least two labels, alphabetic TLD
FQDN_PATTERN = re.compile(
    r'^(?=.{1,253}$)(?:(?!-)[A-Za-z0-9-]{1,63}(?<!-)\.)+[A-Za-z]{2,63}$'
)
USER_ID_PATTERN = re.compile(r'^[0-9]+$')
USER_NAME_PATTERN = re.compile(r'^@?([A-Za-z0-9._%+-]+)$')


def validate_host(host_name: str) -> str:
    if not isinstance(host_name, str) or not FQDN_PATTERN.match(host_name):
        raise ValidationError("A valid FQDN is required")
    return host_name


def get_json(url: str, timeout: Optional[float] = None) -> Any:
    """GET a URL and decode the JSON body.

    Raises:
        TransportError: On a network failure or non-success response
    """
    try:
        response = requests.get(url, timeout=timeout, headers={"Accept": "application/json"})
    except requests.RequestException as e:
        raise TransportError(f"Unable to fetch {url}: {e}", url) from e

    if not response.ok:
        raise TransportError(f"Response status: {response.status_code}", url, response.status_code)

    try:
        return response.json()
    except ValueError as e:
        raise TransportError(f"Invalid JSON from {url}", url, response.status_code) from e


class StatusFetcher:
    """Fetches the most recent public statuses of a user."""

    def __init__(self, host_name: str, user_id: str, timeout: Optional[float] = None):
        """Initialize StatusFetcher.

        Args:
            host_name: Fully-qualified domain name of the server
            user_id: Numeric account id on the server
            timeout: Optional request timeout in seconds

        Raises:
            ValidationError: If the host or user id is invalid
        """
        validate_host(host_name)

        if not isinstance(user_id, str) or not USER_ID_PATTERN.match(user_id):
            raise ValidationError("A numeric userId is required")

        self.url_to_fetch = (
            f"https://{host_name}/api/v1/accounts/{user_id}/statuses"
            "?exclude_replies=true&exclude_reblogs=true"
        )
        self.timeout = timeout
        self.fetched_status_data: Optional[List[Dict[str, Any]]] = None

    def fetch_statuses(self) -> List[Dict[str, Any]]:
        data = get_json(self.url_to_fetch, self.timeout)
        if not isinstance(data, list):
            raise TransportError("Expected a list of statuses", self.url_to_fetch)

        logger.debug("Fetched %d statuses from %s", len(data), self.url_to_fetch)
        self.fetched_status_data = data
        return data


class UserLookup:
    """Looks up account details for a user name."""

    def __init__(self, host_name: str, user_name: str, timeout: Optional[float] = None):
        validate_host(host_name)

        match = USER_NAME_PATTERN.match(user_name) if isinstance(user_name, str) else None
        if not match:
            raise ValidationError("A valid user name is required")

        self.user_name = match.group(1)
        self.url_to_fetch = f"https://{host_name}/api/v1/accounts/lookup?acct={self.user_name}"
        self.timeout = timeout
        self.fetched_user_data: Optional[Dict[str, Any]] = None

    def fetch_user(self) -> Dict[str, Any]:
        data = get_json(self.url_to_fetch, self.timeout)
        if not isinstance(data, dict):
            raise TransportError("Expected an account object", self.url_to_fetch)

        self.fetched_user_data = data
        return data

    def get_user_id(self) -> str:
        """Return the account id, fetching the account first if needed."""
        if self.fetched_user_data is None:
            self.fetch_user()
        return str(self.fetched_user_data["id"])
