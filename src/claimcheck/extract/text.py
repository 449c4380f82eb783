"""Lightweight text heuristics: entities, keywords, embedded claims, sentiment.

All functions are pure and deterministic. They are shared by the claim
preprocessor and the extraction engine.
"""

import re
from collections import Counter

from claimcheck.data import clamp

ENTITY_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b[A-Z][a-z]+ [A-Z][a-z]+\b"),
    re.compile(r"\b[A-Z][a-z]+ [A-Z][a-z]+ [A-Z][a-z]+\b"),
    re.compile(r"\b\d{4}\b"),
    re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*\b"),
)

DOMAIN_TERM_PATTERN = re.compile(
    r"\b(?:COVID-19|coronavirus|pandemic|vaccine|climate change|election|"
    r"president|minister|government)\b",
    re.IGNORECASE,
)

CLAIM_INDICATORS: tuple[str, ...] = (
    "claims that",
    "states that",
    "reports that",
    "according to",
    "alleges that",
    "says that",
)
MAX_CLAIMS = 5

POSITIVE_WORDS = frozenset({"good", "great", "excellent", "positive", "true", "correct", "verified"})
NEGATIVE_WORDS = frozenset(
    {"bad", "terrible", "false", "wrong", "fake", "debunked", "misleading"}
)

_NON_WORD = re.compile(r"[^\w\s]")
_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_PUNCTUATION = ".,;:!?\"'()[]{}"


def extract_entities(text: str, *, limit: int = 10, domain_terms: bool = False) -> list[str]:
    """Named-entity-like spans in discovery order, de-duplicated.

    Args:
        text: Source text.
        limit: Maximum number of entities returned.
        domain_terms: Also match a fixed list of topical terms (COVID-19,
            election, ...) regardless of capitalisation.
    """
    patterns = list(ENTITY_PATTERNS)
    if domain_terms:
        patterns.append(DOMAIN_TERM_PATTERN)

    seen: dict[str, None] = {}
    for pattern in patterns:
        for match in pattern.findall(text):
            entity = match.strip()
            if entity:
                seen.setdefault(entity, None)
    return list(seen)[:limit]


def tokenize(text: str, *, min_length: int = 4, max_length: int | None = None) -> list[str]:
    """Lowercase word tokens with punctuation removed and length filtering."""
    words = _NON_WORD.sub(" ", text.lower()).split()
    return [
        w for w in words if len(w) >= min_length and (max_length is None or len(w) <= max_length)
    ]


def extract_keywords(text: str, *, limit: int = 10) -> list[str]:
    """Most frequent words of four or more letters. Ties keep first occurrence."""
    counts = Counter(tokenize(text))
    # Counter.most_common is stable for equal counts (insertion order).
    return [word for word, _ in counts.most_common(limit)]


def extract_claims(content: str) -> list[str]:
    """Sentences that report someone else's assertion, at most five."""
    claims: list[str] = []
    for sentence in _SENTENCE_SPLIT.split(content):
        lowered = sentence.lower()
        if any(indicator in lowered for indicator in CLAIM_INDICATORS):
            claims.append(sentence.strip())
            if len(claims) == MAX_CLAIMS:
                break
    return claims


def sentiment_score(content: str) -> float:
    """Lexicon polarity in [-1, 1].

    ``(positive_hits - negative_hits) / token_count * 100``, clamped. Empty
    content scores 0.
    """
    words = [w.strip(_PUNCTUATION) for w in content.lower().split()]
    if not words:
        return 0.0
    score = 0
    for word in words:
        if word in POSITIVE_WORDS:
            score += 1
        elif word in NEGATIVE_WORDS:
            score -= 1
    return clamp(score / len(words) * 100, -1.0, 1.0)
