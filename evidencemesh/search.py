# evidencemesh/search.py
import logging

from evidencemesh.config import SearchConfig
from evidencemesh.fetcher import DocumentFetcher
from evidencemesh.models import CandidateDocument, SearchResult
from evidencemesh.providers.base import Provider
from evidencemesh.providers.pubmed import PubMed
from evidencemesh.query.normalizer import normalize
from evidencemesh.query.reformulate import REFORMULATIONS, Reformulation, reformulations
from evidencemesh.scoring import rank

logger = logging.getLogger(__name__)


class ResilientSearch:
    """Search that falls back to terminology rewrites when nothing is found.

    The normalized question is tried first. If it yields no usable papers,
    each reformulation rule is tried once, in declared order, and the first
    rewrite that finds papers wins. Network failures on the search or
    metadata calls propagate to the caller.
    """

    def __init__(
        self,
        provider: Provider,
        rules: tuple[Reformulation, ...] = REFORMULATIONS,
    ) -> None:
        self._config = provider.config
        self._fetcher = DocumentFetcher(provider)
        self._rules = rules

    async def search(self, question: str) -> SearchResult:
        query = normalize(question)
        attempts = [query]
        logger.info("Searching with query: %r", query)
        papers = await self._search_once(query)
        if papers:
            return SearchResult(query_used=query, papers=tuple(papers), attempts=tuple(attempts))

        for reformulation, candidate in reformulations(query, rules=self._rules):
            attempts.append(candidate)
            logger.info("Trying %s rewrite: %r", reformulation.name, candidate)
            papers = await self._search_once(candidate)
            if papers:
                logger.info("Reformulated %r -> %r", query, candidate)
                return SearchResult(
                    query_used=candidate,
                    papers=tuple(papers),
                    reformulated=candidate,
                    attempts=tuple(attempts),
                )

        logger.info("No papers found for %r after %d attempts", query, len(attempts))
        return SearchResult(query_used=query, attempts=tuple(attempts))

    async def _search_once(self, query: str) -> list[CandidateDocument]:
        documents = await self._fetcher.fetch(query)
        return rank(documents, self._config.return_top_n)


def check_config(config: SearchConfig | None, provider: Provider | None) -> None:
    """Reject a config that would disagree with the one the provider runs on."""
    if provider is not None and config is not None and config != provider.config:
        raise ValueError(
            "config differs from provider.config; build the provider with that config instead"
        )


async def resilient_search(
    question: str,
    config: SearchConfig | None = None,
    provider: Provider | None = None,
) -> SearchResult:
    """
    Search the literature for a natural-language question.

    Args:
        question: Free-text question, e.g. "Is creatine safe for long-term use?"
        config: Limits and credentials; defaults to SearchConfig() from the environment
        provider: An initialized provider; when omitted a PubMed provider is
            opened for the duration of the call. A provider carries its own
            config, so passing a different config alongside it is an error

    Returns:
        SearchResult with at most config.return_top_n papers, best first.
        An empty result is a normal outcome, not an error.

    Raises:
        NetworkError: if the search or metadata request fails for good.
        ValueError: if config differs from the given provider's config.

    Examples:
        result = await resilient_search("Does caffeine impact sleep quality?")
        for paper in result.papers:
            print(paper.score, paper.title)
    """
    check_config(config, provider)
    if provider is not None:
        return await ResilientSearch(provider).search(question)

    async with PubMed(config=config or SearchConfig()) as pubmed:
        return await ResilientSearch(pubmed).search(question)
