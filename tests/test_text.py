"""Tests for text heuristics."""

from claimcheck.extract import (
    extract_claims,
    extract_entities,
    extract_keywords,
    sentiment_score,
    tokenize,
)


def test_extract_entities_in_discovery_order() -> None:
    """Should return entities in the order they appear."""
    entities = extract_entities("Joe Biden met Angela Merkel in 2021")
    assert entities == ["Joe Biden", "Angela Merkel", "2021"]


def test_extract_entities_respects_limit() -> None:
    text = " ".join(str(year) for year in range(2000, 2020))
    assert len(extract_entities(text, limit=5)) == 5


def test_extract_entities_domain_terms() -> None:
    assert extract_entities("the vaccine rollout") == []
    assert extract_entities("the vaccine rollout", domain_terms=True) == ["vaccine"]


def test_tokenize_filters_short_words_and_punctuation() -> None:
    assert tokenize("The cat, sat on a mat! Really?") == ["really"]
    assert tokenize("alpha beta extraordinarily", max_length=5) == ["alpha", "beta"]


def test_extract_keywords_by_frequency() -> None:
    keywords = extract_keywords("climate climate change change change policy")
    assert keywords == ["change", "climate", "policy"]


def test_extract_keywords_limit() -> None:
    assert extract_keywords("alpha beta gamma delta epsilon", limit=2) == ["alpha", "beta"]


def test_extract_claims() -> None:
    content = (
        "The senator claims that taxes fell. It rained. Reports that crime rose! "
        "According to the data, prices dropped?"
    )
    assert extract_claims(content) == [
        "The senator claims that taxes fell",
        "Reports that crime rose",
        "According to the data, prices dropped",
    ]


def test_extract_claims_caps_at_five() -> None:
    """Should return at most five claims."""
    content = ". ".join(f"Person {i} says that thing {i}" for i in range(8))
    assert len(extract_claims(content)) == 5


def test_sentiment_score_bounds() -> None:
    """Should keep the score within -1 and 1."""
    assert sentiment_score("") == 0.0
    assert sentiment_score("This is great and true") == 1.0
    assert sentiment_score("Totally fake and debunked") == -1.0


def test_sentiment_score_scales_with_length() -> None:
    content = "fake " + "word " * 199
    assert sentiment_score(content) == -0.5


def test_sentiment_score_strips_punctuation() -> None:
    assert sentiment_score("False! " + "filler " * 399) == -0.25
