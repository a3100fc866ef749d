# evidencemesh/models.py
from dataclasses import dataclass, field
from enum import Enum

UNKNOWN_YEAR = 1900


class DocumentType(str, Enum):
    """Kind of publication, as far as title and abstract reveal it."""

    NORMAL = "normal"
    REVIEW = "review"


@dataclass(frozen=True)
class DocumentSummary:
    """Batch metadata for one identifier, as returned by a provider."""

    title: str
    year: int = UNKNOWN_YEAR
    venue: str = ""


@dataclass(frozen=True)
class CandidateDocument:
    """One retrieved and scored bibliographic item."""

    id: str
    title: str
    abstract: str
    url: str
    publication_year: int = UNKNOWN_YEAR
    venue: str = ""
    document_type: DocumentType = DocumentType.NORMAL
    score: int = 0

    @property
    def is_review(self) -> bool:
        return self.document_type is DocumentType.REVIEW


@dataclass(frozen=True)
class SearchResult:
    """Outcome of one resilient search call."""

    query_used: str
    papers: tuple[CandidateDocument, ...] = ()
    reformulated: str | None = None
    attempts: tuple[str, ...] = field(default_factory=tuple)

    @property
    def found(self) -> bool:
        return bool(self.papers)
