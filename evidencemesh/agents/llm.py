# evidencemesh/agents/llm.py
"""Thin async wrapper over the OpenAI chat completions API."""

from __future__ import annotations

import logging
import os

from openai import AsyncOpenAI

OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")
OPENAI_TEMPERATURE = float(os.getenv("OPENAI_TEMPERATURE", "0.3"))

logger = logging.getLogger(__name__)

Message = dict[str, str]


def build_client() -> AsyncOpenAI:
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise RuntimeError("OPENAI_API_KEY environment variable is required")
    return AsyncOpenAI(api_key=api_key)


async def complete(
    messages: list[Message],
    model: str = OPENAI_MODEL,
    temperature: float = OPENAI_TEMPERATURE,
    max_tokens: int | None = None,
    client: AsyncOpenAI | None = None,
) -> str:
    """Send role-tagged messages and return the generated text ("" if none)."""
    client = client or build_client()
    kwargs: dict = {}
    if max_tokens is not None:
        kwargs["max_tokens"] = max_tokens

    logger.debug("Requesting completion from %s (%d messages)", model, len(messages))
    response = await client.chat.completions.create(
        model=model,
        temperature=temperature,
        messages=messages,
        **kwargs,
    )
    return response.choices[0].message.content or ""
