"""
HTTP provider client.

Reaches providers through a remote search server that exposes
``/providers`` and ``/search`` endpoints.
"""

import logging
from typing import Any

import httpx

from ..errors import ProviderCallError, parse_error
from ..types import ProviderRecord, ResultItem
from ..utils import format_duration, parse_timestamp

logger = logging.getLogger("federated_search.clients.http")


class HttpProviderClient:
    """Provider client backed by a remote search server."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        limit: int = 10,
        *,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the HTTP provider client

        Args:
            base_url: Server URL, e.g. "http://localhost:3030/"
            timeout: Per-call timeout in seconds, also forwarded to the server
            limit: Maximum number of results per provider
            client: Optional preconfigured httpx client (owned by the caller)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.limit = limit
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            # Leave headroom over the server-side timeout so the server reports it first
            self._client = httpx.AsyncClient(timeout=self.timeout + 1.0)
        return self._client

    async def search(self, provider_name: str, query: str) -> list[ResultItem]:
        """
        Search one provider through the server.

        Args:
            provider_name: Provider identifier
            query: Query text (already transformed for the provider)

        Returns:
            Ordered list of result items

        Raises:
            ProviderCallError: If the request fails or the server reports an error
        """
        params = {
            "provider": str(provider_name),
            "keyword": str(query),
            "timeout": format_duration(self.timeout),
            "limit": str(self.limit),
        }
        data = await self._get_json("/search", params)

        if not isinstance(data, list):
            raise ProviderCallError(502, "invalid search response")

        results: list[ResultItem] = []
        for entry in data:
            if not isinstance(entry, dict):
                continue
            results.append(
                ResultItem(
                    title=entry.get("title", ""),
                    link=entry.get("link", ""),
                    description=entry.get("description") or "",
                    timestamp=parse_timestamp(entry.get("date")),
                )
            )
        return results

    async def discover(self) -> list[ProviderRecord]:
        """
        Fetch the provider list from the server.

        Raises:
            ProviderCallError: If the request fails
        """
        data = await self._get_json("/providers")
        if not isinstance(data, list):
            raise ProviderCallError(502, "invalid providers response")

        records: list[ProviderRecord] = []
        for entry in data:
            if not isinstance(entry, dict) or not entry.get("name"):
                continue
            records.append(
                ProviderRecord(
                    name=entry["name"],
                    title=entry.get("title") or entry["name"],
                    priority=entry.get("priority", 0),
                )
            )
        logger.info(f"Discovered {len(records)} providers at {self.base_url}")
        return records

    async def _get_json(self, path: str, params: dict[str, str] | None = None) -> Any:
        try:
            response = await self.client.get(self.base_url + path, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            error = parse_error(e)
            raise ProviderCallError(error.code, error.message) from e
        except ValueError as e:
            raise ProviderCallError(502, f"invalid JSON response: {e}") from e

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> "HttpProviderClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
