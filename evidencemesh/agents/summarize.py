# evidencemesh/agents/summarize.py
"""Synthesize a cited, plain-language summary from retrieved abstracts."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence

from openai import AsyncOpenAI

from evidencemesh.agents.llm import complete
from evidencemesh.models import CandidateDocument

SUMMARY_MAX_TOKENS = int(os.getenv("SUMMARY_MAX_TOKENS", "900"))
NO_PAPERS_MESSAGE = (
    "No research papers found for your query. Try a different or broader phrasing."
)

logger = logging.getLogger(__name__)


def format_references(papers: Sequence[CandidateDocument]) -> str:
    blocks = []
    for n, paper in enumerate(papers, start=1):
        marker = "**[Review/Meta-analysis]**\n" if paper.is_review else ""
        blocks.append(
            f"Paper [{n}]:\n{marker}Title: {paper.title}\nURL: {paper.url}\n"
            f"Abstract: {paper.abstract}\n"
        )
    return "\n".join(blocks)


def build_prompt(question: str, papers: Sequence[CandidateDocument]) -> str:
    return f"""You are an expert scientific research assistant for health and fitness. A user has asked: "{question}"

Below are the abstracts of relevant peer-reviewed papers. Your job is to:
- **Synthesize a clear, accurate, and balanced summary of the evidence.**
- **Start with a "Key Takeaways" section in bullet points** for non-experts, focusing on what a smart health-conscious person should remember or act on.
- Highlight where the evidence is strong, weak, or conflicting. Mention if the research is based on human studies, animals, or reviews/meta-analyses.
- If studies disagree, explain why and what is still unknown.
- Reference each paper as [1], [2], etc., but DO NOT include any reference list at the end.

{format_references(papers)}
Please format your answer in Markdown.
"""


async def summarize_papers(
    question: str,
    papers: Sequence[CandidateDocument],
    client: AsyncOpenAI | None = None,
) -> str:
    """Summarize papers against the user's question; no model call without papers."""
    if not papers:
        return NO_PAPERS_MESSAGE

    logger.info("Summarizing %d papers", len(papers))
    messages = [{"role": "user", "content": build_prompt(question, papers)}]
    return await complete(messages, max_tokens=SUMMARY_MAX_TOKENS, client=client)
