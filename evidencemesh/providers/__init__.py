from .base import Provider
from .pubmed import PubMed

__all__ = ["Provider", "PubMed"]
