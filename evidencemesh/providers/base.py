# evidencemesh/providers/base.py
"""Base class for literature providers."""

from abc import ABC, abstractmethod
from collections.abc import Mapping

import httpx

from evidencemesh.config import SearchConfig
from evidencemesh.fetch import fetch_with_retry
from evidencemesh.models import DocumentSummary


class Provider(ABC):
    """Base class for literature providers.

    A provider resolves a query to identifiers, fetches batch metadata for
    them and the full record of a single identifier. Use it as an async
    context manager; the HTTP client lives for the duration of the block.
    """

    name: str

    def __init__(
        self,
        api_key: str | None = None,
        config: SearchConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or SearchConfig()
        # An explicit "" means keyless access, so only None falls through.
        if api_key is None:
            api_key = self._config.api_key if config is not None else self._load_from_env()
        self._api_key = api_key or ""
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def config(self) -> SearchConfig:
        return self._config

    @abstractmethod
    def _load_from_env(self) -> str | None:
        """Load API key from environment variable."""
        ...

    @abstractmethod
    async def search_ids(self, query: str, max_results: int) -> list[str]:
        """Resolve a query to an ordered list of document identifiers."""
        ...

    @abstractmethod
    async def fetch_summaries(self, ids: list[str]) -> dict[str, DocumentSummary]:
        """Fetch title, year and venue for each identifier."""
        ...

    @abstractmethod
    async def fetch_abstract(self, doc_id: str) -> str:
        """Fetch the abstract of a single document; "" if it has none."""
        ...

    @abstractmethod
    def document_url(self, doc_id: str) -> str:
        """Public landing page for a document."""
        ...

    async def _get(self, url: str, params: Mapping[str, str | int]) -> httpx.Response:
        if self._client is None:
            raise RuntimeError("Provider not initialized. Use 'async with provider:'")
        return await fetch_with_retry(
            self._client, url, self._config.retry_attempts, params=params
        )

    async def __aenter__(self) -> "Provider":
        self._client = httpx.AsyncClient(
            timeout=self._config.request_timeout, transport=self._transport
        )
        return self

    async def __aexit__(self, *_: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
