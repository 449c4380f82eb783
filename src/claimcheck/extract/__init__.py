"""Content extraction: HTML documents and text heuristics."""

from claimcheck.extract.html import ExtractedDocument, extract_document
from claimcheck.extract.text import (
    extract_claims,
    extract_entities,
    extract_keywords,
    sentiment_score,
    tokenize,
)

__all__ = [
    "ExtractedDocument",
    "extract_claims",
    "extract_document",
    "extract_entities",
    "extract_keywords",
    "sentiment_score",
    "tokenize",
]
