# evidencemesh/extract.py
"""Pure helpers for pulling clean text out of provider payloads."""

import re

from evidencemesh.models import DocumentType

HTML_ENTITIES = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&#x2013;", "–"),
    ("&#x2014;", "—"),
    ("&nbsp;", " "),
    ("&hellip;", "…"),
    ("&#x2026;", "…"),
)

_TAG = re.compile(r"<[^>]+>")
_WHITESPACE = re.compile(r"\s+")
_REVIEW = re.compile(r"meta-?analysis|systematic review", re.IGNORECASE)


def decode_entities(text: str | None) -> str:
    """Decode the handful of HTML entities literature providers emit.

    Only the listed entities are decoded; anything else is left as is.
    """
    if not text:
        return ""
    for entity, char in HTML_ENTITIES:
        text = text.replace(entity, char)
    return text


def extract_abstract(payload: str, marker: str = "Abstract") -> str:
    """Return the text of the first <marker>...</marker> region, or "".

    Embedded tags are removed and whitespace is collapsed.
    """
    if not payload:
        return ""
    tag = re.escape(marker)
    match = re.search(rf"<{tag}>(.*?)</{tag}>", payload, re.DOTALL)
    if not match:
        return ""
    text = _TAG.sub("", match.group(1))
    return _WHITESPACE.sub(" ", text).strip()


def classify_document(title: str, abstract: str) -> DocumentType:
    """Flag systematic reviews and meta-analyses."""
    if _REVIEW.search(title) or _REVIEW.search(abstract):
        return DocumentType.REVIEW
    return DocumentType.NORMAL
