"""
Spaceship provider module for Spaceship-DNS.

This module is responsible for interfacing with the Spaceship API to manage DNS records.
"""

import json
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from spaceship_dns.models.errors import APIError, TransportError
from spaceship_dns.models.models import WireItem

DEFAULT_BASE_URL = "https://spaceship.dev/api/v1"
DEFAULT_PAGE_SIZE = 500


class SpaceshipClient:
    """
    Client that interfaces with the Spaceship DNS API.
    """

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        base_url: str = DEFAULT_BASE_URL,
        page_size: int = DEFAULT_PAGE_SIZE,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize a SpaceshipClient.

        Args:
            api_key: Spaceship API key
            api_secret: Spaceship API secret
            base_url: API base URL
            page_size: Number of records requested when listing
            timeout: Request timeout in seconds, None for the httpx default
            transport: Optional httpx transport, used to stub the network in tests
        """
        self._api_key = api_key
        self._api_secret = api_secret
        self.base_url = base_url.rstrip("/")
        self.page_size = page_size
        self.timeout = timeout
        self.transport = transport
        self.logger = logging.getLogger("spaceship-dns.provider.spaceship")

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-Api-Key": self._api_key,
            "X-Api-Secret": self._api_secret,
        }

    def _client(self) -> httpx.AsyncClient:
        kwargs: Dict[str, Any] = {"headers": self._headers()}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        if self.transport is not None:
            kwargs["transport"] = self.transport
        return httpx.AsyncClient(**kwargs)

    @staticmethod
    def _records_path(domain: str) -> str:
        return f"/dns/records/{quote(domain, safe='')}"

    async def _request(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Performs one request and classifies the response.

        Args:
            method: HTTP method
            endpoint: Path relative to the base URL
            body: JSON-serializable request body
            params: Query parameters

        Returns:
            Any: Parsed JSON, raw text, or None for an empty response

        Raises:
            TransportError: If the request could not be sent
            APIError: If the API answered with a non-success status
        """
        url = f"{self.base_url}{endpoint}"
        self.logger.debug(f"{method} {url}")
        try:
            async with self._client() as client:
                response = await client.request(
                    method,
                    url,
                    json=body,
                    params=params,
                )
        except httpx.TransportError as e:
            self.logger.error(f"Request to Spaceship API failed: {method} {url}: {e}")
            raise TransportError(f"Spaceship API request failed: {e}") from e

        if not response.is_success:
            detail = self._error_detail(response)
            self.logger.error(
                f"Spaceship API error on {method} {url}: {response.status_code} {detail}"
            )
            raise APIError(response.status_code, response.reason_phrase, detail)

        if response.status_code == 204 or not response.content:
            return None

        if self._is_json(response):
            try:
                return response.json()
            except ValueError:
                self.logger.warning(
                    f"Spaceship API returned malformed JSON on {method} {url}, using raw text"
                )

        return response.text

    @staticmethod
    def _is_json(response: httpx.Response) -> bool:
        return "application/json" in response.headers.get("content-type", "")

    @classmethod
    def _error_detail(cls, response: httpx.Response) -> str:
        """
        Extracts a readable error detail from a failed response.

        Args:
            response: Failed response

        Returns:
            str: Detail taken from a JSON body if possible, otherwise the raw text
        """
        if cls._is_json(response):
            try:
                payload = response.json()
            except ValueError:
                return response.text
            if isinstance(payload, dict):
                for key in ("detail", "error", "message"):
                    if isinstance(payload.get(key), str):
                        return payload[key]
            return json.dumps(payload)
        return response.text

    async def list_records(self, domain: str) -> Any:
        """
        Returns the first page of DNS records for a domain.

        Args:
            domain: Domain name

        Returns:
            Any: The API response body
        """
        self.logger.info(f"Listing DNS records for {domain}")
        return await self._request(
            "GET",
            self._records_path(domain),
            params={"take": self.page_size, "skip": 0},
        )

    async def upsert_records(self, domain: str, items: List[WireItem]) -> None:
        """
        Saves DNS records for a domain, overwriting conflicting records.

        Args:
            domain: Domain name
            items: Normalized wire items
        """
        self.logger.info(f"Saving {len(items)} DNS record(s) for {domain}")
        await self._request(
            "PUT",
            self._records_path(domain),
            body={"force": True, "items": items},
        )

    async def delete_records(self, domain: str, keys: List[WireItem]) -> None:
        """
        Deletes DNS records for a domain.

        Args:
            domain: Domain name
            keys: Name/type pairs identifying the records
        """
        self.logger.info(f"Deleting {len(keys)} DNS record(s) for {domain}")
        await self._request("DELETE", self._records_path(domain), body=keys)
