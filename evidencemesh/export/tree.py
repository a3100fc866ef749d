# evidencemesh/export/tree.py
from evidencemesh.ask import Answer
from evidencemesh.models import CandidateDocument, SearchResult

from .base import Exporter


class TreeExporter(Exporter):
    """Human-readable listing for the terminal."""

    def format_paper(self, paper: CandidateDocument, n: int) -> str:
        marker = " [Review/Meta-analysis]" if paper.is_review else ""
        lines = [
            f"[{n}] {paper.title}{marker}",
            f"├── url: {paper.url}",
            f"├── year: {paper.publication_year}",
        ]
        if paper.venue:
            lines.append(f"├── venue: {paper.venue}")
        lines.append(f"└── score: {paper.score}")
        return "\n".join(lines)

    def to_string(self, result: SearchResult | Answer) -> str:
        if isinstance(result, Answer):
            refs = "\n".join(f"[{r.n}] {r.title} ({r.url})" for r in result.references)
            return f"{result.answer}\n\n{refs}" if refs else result.answer
        return "\n\n".join(
            self.format_paper(paper, n) for n, paper in enumerate(result.papers, start=1)
        )
