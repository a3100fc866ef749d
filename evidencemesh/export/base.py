# evidencemesh/export/base.py
"""Base class for result exporters."""

from abc import ABC, abstractmethod
from pathlib import Path

from evidencemesh.ask import Answer
from evidencemesh.models import SearchResult


class Exporter(ABC):
    """Render search results or answers as text."""

    @abstractmethod
    def to_string(self, result: SearchResult | Answer) -> str: ...

    def export(self, result: SearchResult | Answer, output: Path) -> None:
        output.write_text(self.to_string(result), encoding="utf-8")
