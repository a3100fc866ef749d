# evidencemesh/fetcher.py
"""Resolve a query to scored candidate documents."""

import asyncio
import logging

from evidencemesh.extract import classify_document, decode_entities
from evidencemesh.fetch import NetworkError
from evidencemesh.models import CandidateDocument, DocumentSummary
from evidencemesh.providers.base import Provider
from evidencemesh.scoring import compute_score

logger = logging.getLogger(__name__)


class DocumentFetcher:
    """Fetch metadata and abstracts for a query's hits and score them.

    Identifier search and batch metadata failures propagate. A failed
    abstract fetch only degrades that one document.
    """

    def __init__(self, provider: Provider) -> None:
        self._provider = provider
        self._config = provider.config

    async def fetch(self, query: str) -> list[CandidateDocument]:
        """Return one scored document per hit, in the provider's order."""
        ids = await self._provider.search_ids(query, self._config.max_results)
        if not ids:
            logger.info("No results for %r", query)
            return []

        summaries = await self._provider.fetch_summaries(ids)
        semaphore = asyncio.Semaphore(self._config.fetch_concurrency)

        async def fetch_one(doc_id: str) -> CandidateDocument:
            async with semaphore:
                return await self._build_document(doc_id, summaries.get(doc_id), query)

        # gather keeps input order regardless of completion order
        return list(await asyncio.gather(*[fetch_one(doc_id) for doc_id in ids]))

    async def _build_document(
        self,
        doc_id: str,
        summary: DocumentSummary | None,
        query: str,
    ) -> CandidateDocument:
        summary = summary or DocumentSummary(title="")
        title = decode_entities(summary.title)
        url = self._provider.document_url(doc_id)

        try:
            raw_abstract = await self._provider.fetch_abstract(doc_id)
        except NetworkError as e:
            logger.warning("Abstract fetch failed for %s: %s", doc_id, e)
            return CandidateDocument(id=doc_id, title=title, abstract="", url=url)

        abstract = decode_entities(raw_abstract)
        document_type = classify_document(title, abstract)
        return CandidateDocument(
            id=doc_id,
            title=title,
            abstract=abstract,
            url=url,
            publication_year=summary.year,
            venue=summary.venue,
            document_type=document_type,
            score=compute_score(query, abstract, summary.year, summary.venue, document_type),
        )
