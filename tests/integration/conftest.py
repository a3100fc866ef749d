from __future__ import annotations

import os

import pytest

from evidencemesh.models import CandidateDocument

requires_live = pytest.mark.skipif(
    not os.environ.get("EVIDENCEMESH_LIVE_TESTS"),
    reason="EVIDENCEMESH_LIVE_TESTS not set",
)


def assert_valid_paper(paper: CandidateDocument) -> None:
    assert paper.title and len(paper.title) > 0, "Paper must have title"
    assert paper.abstract and len(paper.abstract) > 0, "Paper must have abstract"
    assert paper.url.startswith("https://pubmed.ncbi.nlm.nih.gov/"), f"Unexpected URL: {paper.url}"
    assert 0 <= paper.score <= 6, f"Score out of range: {paper.score}"
    assert 1900 <= paper.publication_year <= 2100, f"Invalid year: {paper.publication_year}"
