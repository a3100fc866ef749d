# evidencemesh/ask.py
"""Answer a health question from the literature, end to end."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from openai import AsyncOpenAI

from evidencemesh.agents.decompose import decompose_question
from evidencemesh.agents.llm import build_client
from evidencemesh.agents.summarize import summarize_papers
from evidencemesh.config import SearchConfig
from evidencemesh.models import CandidateDocument, SearchResult
from evidencemesh.providers.base import Provider
from evidencemesh.providers.pubmed import PubMed
from evidencemesh.search import ResilientSearch, check_config

logger = logging.getLogger(__name__)

NOT_FOUND_ANSWER = "No relevant research papers found."


@dataclass(frozen=True)
class Reference:
    n: int
    title: str
    url: str


@dataclass
class Answer:
    """Synthesized answer plus the trail of how the papers were found."""

    answer: str
    papers: list[CandidateDocument] = field(default_factory=list)
    clarified: list[str] = field(default_factory=list)
    used_sub_questions: list[str] = field(default_factory=list)
    queries_used: list[str] = field(default_factory=list)
    reformulations: list[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.papers)

    @property
    def references(self) -> list[Reference]:
        return [Reference(n, p.title, p.url) for n, p in enumerate(self.papers, start=1)]

    def record(self, sub_question: str, result: SearchResult) -> None:
        """Merge a successful search, skipping papers already collected."""
        seen = {p.url for p in self.papers}
        self.papers.extend(p for p in result.papers if p.url not in seen)
        self.used_sub_questions.append(sub_question)
        self.queries_used.append(result.query_used)
        if result.reformulated:
            self.reformulations.append(result.reformulated)


async def ask(
    question: str,
    config: SearchConfig | None = None,
    provider: Provider | None = None,
    client: AsyncOpenAI | None = None,
) -> Answer:
    """Decompose, search each sub-question, then summarize all papers found.

    When decomposition yields nothing, the original question is searched
    directly. When no sub-question finds papers, the original question gets
    one more search before giving up.
    """
    check_config(config, provider)
    client = client or build_client()
    if provider is not None:
        return await _ask(question, ResilientSearch(provider), client)

    async with PubMed(config=config or SearchConfig()) as pubmed:
        return await _ask(question, ResilientSearch(pubmed), client)


async def _ask(question: str, searcher: ResilientSearch, client: AsyncOpenAI) -> Answer:
    clarified = await decompose_question(question, client=client)
    sub_questions = clarified or [question]
    result = Answer(answer="", clarified=clarified)

    for sub_question in sub_questions:
        found = await searcher.search(sub_question)
        if found.papers:
            result.record(sub_question, found)

    if not result.papers and question not in sub_questions:
        logger.info("Sub-questions found nothing, searching the original question")
        found = await searcher.search(question)
        if found.papers:
            result.record(question, found)

    if not result.papers:
        result.answer = NOT_FOUND_ANSWER
        return result

    result.answer = await summarize_papers(question, result.papers, client=client)
    return result
