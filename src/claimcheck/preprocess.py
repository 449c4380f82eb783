"""Claim preprocessing: entities, ranked keywords, classification and search variations.

Everything here is a pure function of the claim text.
"""

import logging
import re

from claimcheck.data import Level, PreprocessedClaim
from claimcheck.extract.text import extract_entities, tokenize

logger = logging.getLogger(__name__)

MAX_ENTITIES = 15
MAX_KEYWORDS = 10
MAX_VARIATIONS = 15
MAX_VARIATION_LENGTH = 200

STOP_WORDS = frozenset(
    {
        "about", "after", "all", "also", "and", "any", "are", "because", "been",
        "but", "can", "could", "did", "for", "from", "has", "have", "how", "into",
        "its", "just", "like", "more", "most", "not", "now", "only", "other",
        "out", "over", "should", "some", "such", "than", "that", "the", "their",
        "then", "there", "these", "they", "this", "those", "through", "thus",
        "too", "under", "until", "upon", "very", "was", "were", "what", "when",
        "where", "which", "while", "who", "whom", "why", "will", "with", "would",
        "your",
    }
)

# Boosted x3 when they appear as keywords.
CONTEXT_TERMS = frozenset(
    {
        "claim", "fact", "check", "verify", "debunk", "false", "true", "misleading",
        "evidence", "source", "report", "study", "official", "expert", "analysis",
        "covid", "vaccine", "election", "government", "climate", "policy", "finance",
    }
)

# Order matters: the first matching category wins.
CLAIM_CATEGORIES: dict[str, tuple[str, ...]] = {
    "HEALTH": ("covid", "vaccine", "virus", "pandemic", "health", "medical", "doctor", "hospital"),
    "POLITICAL": ("election", "vote", "government", "president", "minister", "policy", "law"),
    "SCIENTIFIC": ("study", "research", "climate", "data", "scientist", "experiment", "evidence"),
    "BREAKING_NEWS": ("breaking", "urgent", "just in", "developing", "alert", "now"),
    "CONSPIRACY": (
        "conspiracy", "cover-up", "secret", "hidden", "they don't want", "mainstream media",
    ),
    "CELEBRITY": ("celebrity", "actor", "singer", "famous", "hollywood", "star"),
    "TECHNOLOGY": ("ai", "artificial intelligence", "tech", "computer", "internet", "social media"),
}

URGENT_TERMS = (
    "breaking", "urgent", "just in", "developing", "alert", "emergency",
    "crisis", "disaster", "attack", "death", "killed", "injured",
)

COMPLEX_TERMS = (
    "study", "research", "statistics", "data", "analysis", "correlation",
    "causation", "peer-reviewed", "meta-analysis", "clinical trial",
)

CORE_PLATFORMS = ("GOOGLE", "GOOGLE_NEWS", "BING", "REDDIT", "ACADEMIC", "FACT_CHECK", "NEWS")
PLATFORM_TRIGGERS: tuple[tuple[tuple[str, ...], tuple[str, ...]], ...] = (
    (("viral", "trending"), ("TWITTER", "FACEBOOK", "INSTAGRAM", "TIKTOK")),
    (("professional", "business"), ("LINKEDIN",)),
    (("video", "youtube"), ("YOUTUBE",)),
    (("question", "answer"), ("QUORA",)),
    (("conspiracy", "secret"), ("TELEGRAM", "DISCORD")),
)

RISK_FACTORS: dict[str, tuple[str, ...]] = {
    "Misinformation potential": ("false", "fake", "hoax", "conspiracy"),
    "Health misinformation": ("covid", "vaccine", "cure", "treatment"),
    "Political misinformation": ("election", "fraud", "rigged", "stolen"),
    "Viral potential": ("breaking", "urgent", "shocking", "unbelievable"),
    "Conspiracy theory": ("cover-up", "they don't want", "hidden truth", "secret"),
}

AUDIENCES: dict[str, tuple[str, ...]] = {
    "General public": ("everyone", "people", "public", "citizens"),
    "Health-conscious": ("health", "medical", "vaccine", "covid"),
    "Political": ("voters", "election", "government", "political"),
    "Tech-savvy": ("ai", "technology", "internet", "social media"),
    "Parents": ("children", "kids", "school", "family"),
    "Elderly": ("seniors", "elderly", "retirement", "medicare"),
}
DEFAULT_AUDIENCE = "General public"

FACT_CHECK_SUFFIXES = (
    "fact check",
    "debunked",
    "hoax",
    "evidence",
    "verified",
    "true or false",
    "analysis",
    "official statement",
)


def _contains_term(lowered: str, term: str) -> bool:
    # Whole-word match so short terms like "law" do not fire inside "flawed".
    return re.search(rf"(?<!\w){re.escape(term)}(?!\w)", lowered) is not None


def _count_terms(lowered: str, terms: tuple[str, ...]) -> int:
    return sum(1 for term in terms if _contains_term(lowered, term))


def rank_keywords(claim: str, entities: list[str]) -> list[str]:
    """Rank claim words by boosted frequency.

    Each occurrence counts 1, or 3 for context terms; a word that also
    appears capitalised in the claim gets +1 per occurrence; every token of
    an extracted entity gets +5. Ties keep first-occurrence order.
    """
    weights: dict[str, int] = {}
    for word in tokenize(claim, min_length=4, max_length=24):
        if word in STOP_WORDS:
            continue
        boost = 3 if word in CONTEXT_TERMS else 1
        if word.capitalize() in claim:
            boost += 1
        weights[word] = weights.get(word, 0) + boost

    for entity in entities:
        for token in entity.lower().split():
            if len(token) > 2 and token not in STOP_WORDS:
                weights[token] = weights.get(token, 0) + 5

    ranked = sorted(weights.items(), key=lambda item: item[1], reverse=True)
    return [word for word, _ in ranked[:MAX_KEYWORDS]]


def classify_claim(claim: str) -> str:
    lowered = claim.lower()
    for category, terms in CLAIM_CATEGORIES.items():
        if any(_contains_term(lowered, term) for term in terms):
            return category
    return "GENERAL"


def search_variations(claim: str, keywords: list[str]) -> list[str]:
    """Search queries derived from the claim, unique and order-preserving."""
    candidates: list[str] = [claim]
    if keywords:
        core = " ".join(keywords[:2])
        candidates.append(" ".join(keywords[:3]))
        candidates.append(core)
        candidates.append(f'"{claim}"')
        candidates.extend(f"{core} {suffix}" for suffix in FACT_CHECK_SUFFIXES)
        candidates.append(f"{keywords[0]} news")
    if not claim.rstrip().endswith("?"):
        candidates.append(f"Is it true that {claim}?")

    unique: dict[str, None] = {}
    for variation in candidates:
        if 0 < len(variation) < MAX_VARIATION_LENGTH:
            unique.setdefault(variation, None)
    return list(unique)[:MAX_VARIATIONS]


def assess_urgency(claim: str) -> Level:
    count = _count_terms(claim.lower(), URGENT_TERMS)
    if count >= 2:
        return Level.HIGH
    if count >= 1:
        return Level.MEDIUM
    return Level.LOW


def assess_complexity(claim: str) -> Level:
    count = _count_terms(claim.lower(), COMPLEX_TERMS)
    word_count = len(claim.split())
    if count >= 2 or word_count > 50:
        return Level.HIGH
    if count >= 1 or word_count > 25:
        return Level.MEDIUM
    return Level.LOW


def target_platforms(claim: str) -> list[str]:
    lowered = claim.lower()
    platforms = list(CORE_PLATFORMS)
    for triggers, extra in PLATFORM_TRIGGERS:
        if any(_contains_term(lowered, t) for t in triggers):
            platforms.extend(p for p in extra if p not in platforms)
    return platforms


def risk_factors(claim: str) -> list[str]:
    lowered = claim.lower()
    return [
        factor
        for factor, terms in RISK_FACTORS.items()
        if any(_contains_term(lowered, t) for t in terms)
    ]


def target_audience(claim: str) -> list[str]:
    lowered = claim.lower()
    audiences = [
        audience
        for audience, terms in AUDIENCES.items()
        if any(_contains_term(lowered, t) for t in terms)
    ]
    return audiences or [DEFAULT_AUDIENCE]


def preprocess_claim(claim: str) -> PreprocessedClaim:
    """Turn a raw claim into structured search inputs and classifications.

    Args:
        claim: The validated claim text.

    Returns:
        PreprocessedClaim with entities, ranked keywords, claim type, search
        variations, urgency, complexity, platforms, risk factors and
        audience.
    """
    entities = extract_entities(claim, limit=MAX_ENTITIES, domain_terms=True)
    keywords = rank_keywords(claim, entities)
    result = PreprocessedClaim(
        claim=claim,
        entities=tuple(entities),
        keywords=tuple(keywords),
        claim_type=classify_claim(claim),
        search_variations=tuple(search_variations(claim, keywords)),
        urgency=assess_urgency(claim),
        complexity=assess_complexity(claim),
        target_platforms=tuple(target_platforms(claim)),
        risk_factors=tuple(risk_factors(claim)),
        target_audience=tuple(target_audience(claim)),
    )
    logger.debug(
        f"Preprocessed claim: type={result.claim_type} keywords={list(result.keywords)}"
    )
    return result
