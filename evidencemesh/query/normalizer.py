# evidencemesh/query/normalizer.py
"""Turn free-text health questions into compact literature search queries."""

import re

# Interrogatives and conversational filler. Multi-word phrases are matched
# as a unit, so order only matters where one entry contains another.
QUESTION_FILLER = (
    "what",
    "who",
    "when",
    "where",
    "why",
    "how",
    "does",
    "do",
    "did",
    "is",
    "are",
    "was",
    "were",
    "the",
    "in",
    "on",
    "of",
    "and",
    "for",
    "to",
    "with",
    "about",
    "this",
    "that",
    "any",
    "current",
    "present",
    "say",
    "tell me",
    "can you",
    "give me",
    "please",
    "long-term",
    "long term",
    "explain",
    "find",
    "show",
    "report",
)

STOPWORDS = frozenset(
    {
        "what",
        "is",
        "are",
        "do",
        "does",
        "did",
        "the",
        "a",
        "an",
        "of",
        "in",
        "on",
        "to",
        "and",
        "with",
        "for",
        "by",
        "about",
        "that",
        "this",
        "it",
        "any",
    }
)

MIN_TOKEN_LENGTH = 3

_FILLER_PATTERNS = tuple(
    re.compile(rf"\b{re.escape(phrase)}\b", re.IGNORECASE) for phrase in QUESTION_FILLER
)
_PUNCTUATION = re.compile(r"[?.,!]")
_WHITESPACE = re.compile(r"\s+")
_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9\s]")


def extract_keywords(question: str) -> str:
    """Strip question words, filler phrases and sentence punctuation.

    Example:
        >>> extract_keywords("Is creatine safe for long-term use?")
        'creatine safe use'
    """
    text = question.lower()
    for pattern in _FILLER_PATTERNS:
        text = pattern.sub("", text)
    text = _PUNCTUATION.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def simplify(raw: str) -> str:
    """Keep only alphanumeric tokens of three or more characters that are not stopwords."""
    text = _NON_ALPHANUMERIC.sub("", raw.lower())
    return " ".join(
        word for word in text.split() if len(word) >= MIN_TOKEN_LENGTH and word not in STOPWORDS
    )


def normalize(question: str) -> str:
    """Normalize a question into the literal query sent to the provider.

    A question made only of filler and short tokens normalizes to "", which
    is a valid query that simply finds nothing.
    """
    return simplify(extract_keywords(question))
