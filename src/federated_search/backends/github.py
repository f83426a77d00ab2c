"""
GitHub code search backend.
"""

import httpx

from ..errors import ProviderCallError
from ..types import ResultItem
from ..utils import truncate
from .base import Searcher


class GithubSearcher(Searcher):
    """Searches code through the GitHub search API."""

    name = "github"
    title = "Github"

    def __init__(
        self,
        url: str = "https://api.github.com",
        token: str = "",
        search_user: str = "",
        priority: int = 0,
        per_page: int = 10,
        *,
        client: httpx.AsyncClient | None = None,
    ):
        self.url = url.rstrip("/")
        self.token = token
        self.search_user = search_user
        self.priority = priority
        self.per_page = per_page
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client

    async def search(self, keyword: str, page: int = 1) -> list[ResultItem]:
        """
        Perform a GitHub code search.

        Args:
            keyword: The search query string
            page: Result page, 1-based

        Returns:
            List of result items

        Raises:
            ProviderCallError: If GitHub returns a non-2xx status or invalid JSON
        """
        query = keyword
        if self.search_user:
            query += f" user:{self.search_user}"

        params = {
            "page": str(max(page, 1)),
            "per_page": str(self.per_page),
            "q": query,
        }
        headers = {"Accept": "application/vnd.github.v3.text-match+json"}
        if self.token:
            headers["Authorization"] = f"token {self.token}"

        response = await self.client.get(
            f"{self.url}/search/code", params=params, headers=headers
        )
        if not response.is_success:
            raise ProviderCallError(
                response.status_code, f"bad response: {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderCallError(
                502, f"failed to unmarshal JSON data. Error: {e}"
            ) from e

        results: list[ResultItem] = []
        for item in data.get("items") or []:
            repository = item.get("repository") or {}
            results.append(
                ResultItem(
                    title=f"{repository.get('full_name', '')}/{item.get('path', '').lstrip('/')}",
                    link=item.get("html_url", ""),
                    description=self._describe(item, repository),
                    timestamp=None,
                )
            )
        return results

    @staticmethod
    def _describe(item: dict, repository: dict) -> str:
        """Join text-match fragments, falling back to the repository description."""
        matches = item.get("text_matches") or []
        if matches:
            description = "".join(f"{m.get('fragment', '')}..." for m in matches)
        else:
            description = repository.get("description") or ""
        description = description.removesuffix("...").strip()
        return truncate(description, 255)

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None
