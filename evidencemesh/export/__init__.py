from .base import Exporter
from .json import JsonExporter
from .tree import TreeExporter

EXPORTERS: dict[str, type[Exporter]] = {
    "json": JsonExporter,
    "tree": TreeExporter,
}


def get_exporter(format: str) -> Exporter:
    """Return an exporter instance for the given format name."""
    try:
        return EXPORTERS[format]()
    except KeyError:
        raise ValueError(
            f"Unknown format: {format!r}. Available: {', '.join(EXPORTERS)}"
        ) from None


__all__ = ["Exporter", "JsonExporter", "TreeExporter", "get_exporter"]
