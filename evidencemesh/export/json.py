# evidencemesh/export/json.py
import json
from dataclasses import asdict
from enum import Enum

from evidencemesh.ask import Answer
from evidencemesh.models import SearchResult

from .base import Exporter


class JsonExporter(Exporter):
    """Export results to JSON format."""

    def __init__(self, indent: int = 2):
        self.indent = indent

    def to_string(self, result: SearchResult | Answer) -> str:
        def default_serializer(obj):
            if isinstance(obj, Enum):
                return obj.value
            raise TypeError(f"Object of type {type(obj)} is not JSON serializable")

        if isinstance(result, Answer):
            data = {
                "answer": result.answer,
                "found": result.found,
                "references": [asdict(r) for r in result.references],
                "clarified": result.clarified,
                "used_sub_questions": result.used_sub_questions,
                "queries_used": result.queries_used,
                "reformulations": result.reformulations,
            }
        else:
            data = {
                "query_used": result.query_used,
                "reformulated": result.reformulated,
                "attempts": list(result.attempts),
                "papers": [asdict(p) for p in result.papers],
                "total": len(result.papers),
            }
        return json.dumps(data, indent=self.indent, ensure_ascii=False, default=default_serializer)
