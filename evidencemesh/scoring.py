# evidencemesh/scoring.py
"""Deterministic relevance scoring and top-N ranking."""

from collections.abc import Iterable

from evidencemesh.models import CandidateDocument, DocumentType

RECENT_YEAR = 2018


def compute_score(
    query: str,
    abstract: str,
    year: int,
    venue: str,
    document_type: DocumentType,
) -> int:
    """Score a document from 0 to 6.

    - 2 if published in or after 2018
    - 1 if at least one query keyword occurs in the abstract, 2 if three or more do
    - 1 if the venue is known
    - 1 for systematic reviews and meta-analyses

    Keywords are the whitespace-separated tokens of the query, each matched
    as a case-insensitive substring, so multi-word terms count per token.
    """
    text = abstract.lower()
    matches = sum(1 for keyword in query.lower().split() if keyword in text)

    year_score = 2 if year >= RECENT_YEAR else 0
    if matches >= 3:
        keyword_score = 2
    elif matches >= 1:
        keyword_score = 1
    else:
        keyword_score = 0
    venue_score = 1 if venue else 0
    review_bonus = 1 if document_type is DocumentType.REVIEW else 0
    return year_score + keyword_score + venue_score + review_bonus


def rank(documents: Iterable[CandidateDocument], top_n: int) -> list[CandidateDocument]:
    """Drop documents without title or abstract, then keep the top_n by score.

    Documents with equal scores keep their input order.
    """
    usable = [d for d in documents if d.title and d.abstract]
    return sorted(usable, key=lambda d: d.score, reverse=True)[:top_n]
