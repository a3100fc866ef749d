# evidencemesh/providers/pubmed.py
import asyncio
import logging
import os
from collections.abc import AsyncIterator

import streamish as st

from evidencemesh.extract import extract_abstract
from evidencemesh.models import UNKNOWN_YEAR, DocumentSummary
from evidencemesh.providers.base import Provider

logger = logging.getLogger(__name__)


class PubMed(Provider):
    """PubMed search through the NCBI E-utilities."""

    name = "pubmed"
    BASE_URL = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils"
    ARTICLE_URL = "https://pubmed.ncbi.nlm.nih.gov/{id}/"

    def _load_from_env(self) -> str | None:
        return os.getenv("PUBMED_API_KEY")

    def _params(self, **extra: str | int) -> dict[str, str | int]:
        params: dict[str, str | int] = {"db": "pubmed", **extra}
        if self._api_key:
            params["api_key"] = self._api_key
        return params

    def document_url(self, doc_id: str) -> str:
        return self.ARTICLE_URL.format(id=doc_id)

    async def search_ids(self, query: str, max_results: int) -> list[str]:
        """Run esearch and return PMIDs in relevance order."""
        if not query:
            logger.debug("Empty query, returning no results")
            return []

        params = self._params(retmode="json", retmax=max_results, term=query)
        response = await self._get(f"{self.BASE_URL}/esearch.fcgi", params)
        ids = response.json().get("esearchresult", {}).get("idlist", []) or []
        logger.debug("esearch returned %d ids for %r", len(ids), query)
        return [str(i) for i in ids]

    async def fetch_summaries(self, ids: list[str]) -> dict[str, DocumentSummary]:
        """Run esummary in fixed-size batches, pausing after each batch."""
        chunk_size = self._config.summary_chunk_size

        async def fetch_chunks() -> AsyncIterator[dict]:
            for start in range(0, len(ids), chunk_size):
                chunk = ids[start : start + chunk_size]
                params = self._params(retmode="json", id=",".join(chunk))
                response = await self._get(f"{self.BASE_URL}/esummary.fcgi", params)
                yield response.json().get("result", {}) or {}
                await asyncio.sleep(self._config.summary_delay)

        stream = (
            st.stream(fetch_chunks())
            .flat_map(lambda result: [(uid, result[uid]) for uid in result if uid != "uids"])
            .filter(lambda item: isinstance(item[1], dict))
            .map(lambda item: (str(item[0]), self._parse_summary(item[1])))
        )
        summaries: dict[str, DocumentSummary] = {}
        async for uid, summary in stream:
            summaries[uid] = summary
        return summaries

    async def fetch_abstract(self, doc_id: str) -> str:
        """Run efetch for one PMID and pull out its abstract."""
        params = self._params(retmode="xml", id=doc_id)
        response = await self._get(f"{self.BASE_URL}/efetch.fcgi", params)
        return extract_abstract(response.text)

    def _parse_summary(self, data: dict) -> DocumentSummary:
        """Parse an esummary record into a DocumentSummary."""
        year = UNKNOWN_YEAR
        pubdate = data.get("pubdate") or ""
        if pubdate:
            try:
                year = int(pubdate[:4])
            except ValueError:
                pass

        return DocumentSummary(
            title=data.get("title") or "",
            year=year,
            venue=data.get("source") or "",
        )
