"""
HTTP client for the remote contact import source.

The source is an endpoint returning a JSON array of loosely-typed contact
objects. No retries and no timeout beyond httpx's default.

File: remote/client.py
Created: 2026-10-16
Last Modified: 2026-10-16
"""

import json
import logging
from typing import List, Optional

import httpx

from ..errors import MalformedResponseError, RemoteFetchError
from ..models import RemoteContactRecord

log = logging.getLogger(__name__)


class RemoteContactSource:
    """
    Fetches contact records from a remote JSON endpoint.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize the source.

        Args:
            transport: Optional httpx transport (tests pass an httpx.MockTransport)
        """
        self._transport = transport
        self._request_count = 0

    async def fetch(self, url: str) -> List[RemoteContactRecord]:
        """
        GET the url and parse the response into records.

        Args:
            url: Endpoint returning a JSON array

        Returns:
            One RemoteContactRecord per array item, in order

        Raises:
            RemoteFetchError: Invalid url, network failure or non-2xx status
            MalformedResponseError: Body is not JSON or not an array
        """
        self._request_count += 1
        log.info(f"Fetching contacts from {url}")

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(url)
        except httpx.InvalidURL as e:
            log.error(f"Import source URL is invalid: {e}")
            raise RemoteFetchError(f"Invalid URL: {e}") from e
        except httpx.HTTPError as e:
            log.error(f"Import source request failed: {e}")
            raise RemoteFetchError(f"Request failed: {e}") from e

        if not response.is_success:
            log.error(f"Import source returned HTTP {response.status_code}")
            raise RemoteFetchError(f"HTTP {response.status_code}")

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedResponseError(f"Response is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise MalformedResponseError(
                f"Expected a JSON array, got {type(data).__name__}"
            )

        records = [RemoteContactRecord.from_json(item) for item in data]
        log.info(f"Fetched {len(records)} remote records")
        return records

    @property
    def request_count(self) -> int:
        """Number of fetches made."""
        return self._request_count
