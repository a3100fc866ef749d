# evidencemesh/agents/decompose.py
"""Break a health question into researchable sub-questions."""

from __future__ import annotations

import json
import logging
import re
from json import JSONDecodeError

from openai import AsyncOpenAI

from evidencemesh.agents.llm import complete

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a helpful research assistant for health and fitness topics.
For every user query, your job is to break it down into 2-4 precise, researchable sub-questions
that could be answered by searching peer-reviewed scientific literature.
These should be highly specific and clearly written, to enable a search agent to find concrete, evidence-based answers.
Always return ONLY a valid JSON array of strings, with no extra explanation, no markdown, no commentary."""

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```$")


def parse_sub_questions(content: str) -> list[str]:
    """Parse model output into a list of strings, or [] if it is not one."""
    text = content.strip()
    if text.startswith("```"):
        text = _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", text)).strip()

    try:
        parsed = json.loads(text)
    except JSONDecodeError:
        logger.error("Failed to parse sub-questions from response: %r", content)
        return []

    if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
        logger.error("Expected a JSON array of strings, got: %r", content)
        return []
    return parsed


async def decompose_question(question: str, client: AsyncOpenAI | None = None) -> list[str]:
    messages = [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": f'Query: "{question}"'},
    ]
    content = await complete(messages, client=client)
    sub_questions = parse_sub_questions(content)
    logger.info("Decomposed question into %d sub-questions", len(sub_questions))
    return sub_questions
