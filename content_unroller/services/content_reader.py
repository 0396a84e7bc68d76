# Content Reader Service
"""HTTP client for fetching content from the content store in batches."""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

import httpx

from content_unroller.config import settings
from content_unroller.errors import ContentReaderError, UUIDNotFoundError
from content_unroller.middleware.transaction import TRANSACTION_ID_HEADER, get_transaction_id
from content_unroller.models.content import ID_FIELD, Content
from content_unroller.services.uuid_utils import extract_uuid

logger = logging.getLogger("content_unroller.services.content_reader")


def unique_uuids(uuids: Iterable[str]) -> List[str]:
    """Drop repeated UUIDs, keeping first-seen order."""
    return list(dict.fromkeys(uuids))


class ContentReader:
    """Batched reader for the content store's public and internal endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        content_path: Optional[str] = None,
        internal_content_path: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.content_store_host).rstrip("/")
        self.content_path = content_path or settings.content_path
        self.internal_content_path = internal_content_path or settings.internal_content_path
        self.timeout = timeout or settings.content_store_timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def _build_headers(self, transaction_id: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": f"UPP {settings.app_system_code}",
        }
        transaction_id = transaction_id or get_transaction_id()
        if transaction_id:
            headers[TRANSACTION_ID_HEADER] = transaction_id
        return headers

    async def get(self, uuids: Iterable[str], transaction_id: str) -> Dict[str, Content]:
        """
        Fetch content for the given UUIDs in one request.

        UUIDs unknown to the content store are simply absent from the result.

        Args:
            uuids: UUIDs to fetch, duplicates allowed
            transaction_id: transaction id forwarded downstream

        Returns:
            Mapping of UUID to content

        Raises:
            ContentReaderError: on transport errors, non-200 responses or
                undecodable bodies
        """
        return await self._fetch(self.content_path, uuids, transaction_id)

    async def get_internal(self, uuids: Iterable[str], transaction_id: str) -> Dict[str, Content]:
        """Same contract as ``get`` against the internal content endpoint."""
        return await self._fetch(self.internal_content_path, uuids, transaction_id)

    async def _fetch(self, path: str, uuids: Iterable[str], transaction_id: str) -> Dict[str, Content]:
        unique = unique_uuids(uuids)
        if not unique:
            return {}

        client = await self._get_client()
        url = f"{self.base_url}{path}"
        params = [("uuid", u) for u in unique]

        try:
            response = await client.get(
                url,
                params=params,
                headers=self._build_headers(transaction_id),
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"[{transaction_id}] Request to {url} failed: {e}")
            raise ContentReaderError(f"error connecting to content store at {url}: {e}") from e

        if response.status_code != 200:
            logger.error(
                f"[{transaction_id}] Content store {url} returned status {response.status_code}"
            )
            raise ContentReaderError(
                f"content store request to {url} failed with status {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ContentReaderError(f"invalid JSON from content store at {url}: {e}") from e

        result = self._index_by_uuid(data, transaction_id)
        logger.debug(f"[{transaction_id}] Fetched {len(result)} of {len(unique)} requested items from {path}")
        return result

    @staticmethod
    def _index_by_uuid(data: Any, transaction_id: str) -> Dict[str, Content]:
        if isinstance(data, dict):
            data = [data]
        if not isinstance(data, list):
            raise ContentReaderError("unexpected content store response: expected a list of content")

        result: Dict[str, Content] = {}
        for item in data:
            if not isinstance(item, dict):
                continue
            try:
                result[extract_uuid(item.get(ID_FIELD))] = item
            except UUIDNotFoundError:
                logger.warning(f"[{transaction_id}] Dropping content store item without a valid id")
        return result

    async def check_health(self, transaction_id: Optional[str] = None) -> Tuple[bool, str]:
        """
        Check that the content store is good to go.

        Returns:
            Tuple of (ok, message)
        """
        client = await self._get_client()
        url = f"{self.base_url}/__gtg"
        try:
            response = await client.get(url, headers=self._build_headers(transaction_id))
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return False, f"{settings.content_store_app_name} is unreachable: {e}"
        if response.status_code != 200:
            return False, f"{settings.content_store_app_name} returned status {response.status_code}"
        return True, f"{settings.content_store_app_name} is good to go"


# Global reader instance
content_reader = ContentReader()
