from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from evidencemesh.config import SearchConfig
from evidencemesh.fetch import NetworkError
from evidencemesh.models import DocumentSummary
from evidencemesh.providers.base import Provider


class FakePubMed:
    """In-memory E-utilities served through httpx.MockTransport."""

    def __init__(
        self,
        hits: dict[str, list[str]] | None = None,
        summaries: dict[str, dict] | None = None,
        abstracts: dict[str, str] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.hits = hits or {}
        self.summaries = summaries or {}
        self.abstracts = abstracts or {}
        self.failing = failing or set()
        self.requests: list[httpx.Request] = []

    def add(
        self,
        doc_id: str,
        title: str,
        abstract: str | None,
        pubdate: str = "2021 Jan",
        source: str = "J Nutr",
    ) -> None:
        self.summaries[doc_id] = {"uid": doc_id, "title": title, "pubdate": pubdate, "source": source}
        if abstract is not None:
            self.abstracts[doc_id] = abstract

    @property
    def search_terms(self) -> list[str]:
        return [r.url.params["term"] for r in self.requests if r.url.path.endswith("esearch.fcgi")]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        params = request.url.params
        path = request.url.path

        if path.endswith("esearch.fcgi"):
            ids = self.hits.get(params["term"], [])
            return httpx.Response(200, json={"esearchresult": {"idlist": ids}})

        if path.endswith("esummary.fcgi"):
            ids = params["id"].split(",")
            result: dict = {"uids": ids}
            for doc_id in ids:
                if doc_id in self.summaries:
                    result[doc_id] = self.summaries[doc_id]
            return httpx.Response(200, json={"result": result})

        if path.endswith("efetch.fcgi"):
            doc_id = params["id"]
            if doc_id in self.failing:
                return httpx.Response(500, text="server error")
            abstract = self.abstracts.get(doc_id)
            body = "<PubmedArticle><ArticleTitle>x</ArticleTitle>"
            if abstract is not None:
                body += f"<Abstract><AbstractText>{abstract}</AbstractText></Abstract>"
            body += "</PubmedArticle>"
            return httpx.Response(200, text=body)

        return httpx.Response(404, text=json.dumps({"error": "unknown endpoint"}))

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class StubProvider(Provider):
    """Provider backed by plain dicts, with optional per-document latency."""

    name = "stub"

    def __init__(
        self,
        hits: dict[str, list[str]] | None = None,
        summaries: dict[str, DocumentSummary] | None = None,
        abstracts: dict[str, str] | None = None,
        failing: set[str] | None = None,
        delays: dict[str, float] | None = None,
        config: SearchConfig | None = None,
    ) -> None:
        super().__init__(config=config or SearchConfig(api_key="", summary_delay=0))
        self.hits = hits or {}
        self.summaries = summaries or {}
        self.abstracts = abstracts or {}
        self.failing = failing or set()
        self.delays = delays or {}
        self.searched: list[str] = []
        self.summary_calls: list[list[str]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def _load_from_env(self) -> str | None:
        return None

    async def search_ids(self, query: str, max_results: int) -> list[str]:
        self.searched.append(query)
        return self.hits.get(query, [])[:max_results]

    async def fetch_summaries(self, ids: list[str]) -> dict[str, DocumentSummary]:
        self.summary_calls.append(list(ids))
        return {i: self.summaries[i] for i in ids if i in self.summaries}

    async def fetch_abstract(self, doc_id: str) -> str:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(doc_id, 0.001))
            if doc_id in self.failing:
                raise NetworkError(f"HTTP 500 for {doc_id}", f"stub://{doc_id}", 500)
            return self.abstracts.get(doc_id, "")
        finally:
            self.in_flight -= 1

    def document_url(self, doc_id: str) -> str:
        return f"https://example.org/{doc_id}/"


@pytest.fixture
def config(monkeypatch) -> SearchConfig:
    monkeypatch.delenv("PUBMED_API_KEY", raising=False)
    return SearchConfig(api_key="", summary_delay=0)


@pytest.fixture
def fake_pubmed() -> FakePubMed:
    return FakePubMed()


@pytest.fixture
def stub_provider():
    return StubProvider


@pytest.fixture
def sleeps(monkeypatch) -> list[float]:
    """Record asyncio.sleep calls instead of waiting."""
    recorded: list[float] = []

    async def fake_sleep(delay, *args, **kwargs):
        recorded.append(delay)

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    return recorded
