"""evidencemesh - Literature-backed answers to health and nutrition questions."""

from evidencemesh.ask import Answer, ask
from evidencemesh.config import SearchConfig
from evidencemesh.fetch import NetworkError, fetch_with_retry
from evidencemesh.fetcher import DocumentFetcher
from evidencemesh.models import CandidateDocument, DocumentSummary, DocumentType, SearchResult
from evidencemesh.query import REFORMULATIONS, Reformulation, normalize, reformulations, simplify
from evidencemesh.scoring import compute_score, rank
from evidencemesh.search import ResilientSearch, resilient_search

__all__ = [
    # Models
    "CandidateDocument",
    "DocumentSummary",
    "DocumentType",
    "SearchResult",
    "Answer",
    # Configuration
    "SearchConfig",
    # Query handling
    "normalize",
    "simplify",
    "Reformulation",
    "REFORMULATIONS",
    "reformulations",
    # Retrieval
    "fetch_with_retry",
    "NetworkError",
    "DocumentFetcher",
    "compute_score",
    "rank",
    # Search
    "ResilientSearch",
    "resilient_search",
    "ask",
]
