"""Tests for URL helpers and source classification."""

import pytest

from claimcheck.data import SourceType
from claimcheck.url import (
    classify_source_type,
    credibility_for_domain,
    date_from_snippet,
    extract_domain,
    is_verified_source,
    normalize_url,
    platform_for_url,
)


def test_extract_domain_strips_www() -> None:
    assert extract_domain("https://www.Example.com/a/b") == "example.com"


def test_extract_domain_unknown_for_garbage() -> None:
    assert extract_domain("not a url") == "Unknown"


def test_normalize_url_drops_query_and_fragment() -> None:
    """Should lowercase and drop query and fragment."""
    assert normalize_url("HTTPS://A.com/Path?q=1#frag") == "https://a.com/path"
    assert normalize_url("  https://a.com/x  ") == "https://a.com/x"


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://www.reuters.com/world/story", SourceType.NEWS),
        ("https://www.snopes.com/fact-check/moon-cheese/", SourceType.FACT_CHECK),
        ("https://x.com/user/status/1", SourceType.SOCIAL_MEDIA),
        ("https://www.youtube.com/watch?v=abc", SourceType.VIDEO),
        ("https://youtu.be/abc", SourceType.VIDEO),
        ("https://www.reddit.com/r/science/", SourceType.FORUM),
        ("https://web.mit.edu/paper", SourceType.ACADEMIC),
        ("https://www.cdc.gov/vaccines", SourceType.OFFICIAL),
        ("https://someone.substack.com/p/post", SourceType.BLOG),
        ("https://example.org/post", SourceType.WEB),
    ],
)
def test_classify_source_type(url: str, expected: SourceType) -> None:
    assert classify_source_type(url) == expected


def test_classify_does_not_match_domain_suffix_inside_other_names() -> None:
    # "x.com" must not match "box.com".
    assert classify_source_type("https://box.com/file") == SourceType.WEB


def test_credibility_for_domain() -> None:
    """Should score known domains and default the rest."""
    assert credibility_for_domain("https://www.reuters.com/a") == 10.0
    assert credibility_for_domain("https://www.bbc.co.uk/news/1") == 9.0
    assert credibility_for_domain("https://www.tiktok.com/@user") == 4.0
    assert credibility_for_domain("https://youtu.be/abc") == 6.0
    assert credibility_for_domain("https://unknown-blog.net/a") == 5.0


def test_is_verified_source() -> None:
    assert is_verified_source("https://www.reuters.com/article")
    assert is_verified_source("Politifact.com")
    assert not is_verified_source("https://random.example")


def test_platform_for_url() -> None:
    assert platform_for_url("https://twitter.com/user") == "Twitter"
    assert platform_for_url("https://x.com/user/status/1") == "Twitter"
    assert platform_for_url("https://bsky.app/profile/a") == "Bluesky"
    assert platform_for_url("https://youtu.be/abc") == "YouTube"
    assert platform_for_url("https://www.reuters.com/a") is None


@pytest.mark.parametrize(
    ("snippet", "expected"),
    [
        ("Posted 2023-03-04 by staff", "2023-03-04"),
        ("Updated 03/15/2024 at noon", "2024-03-15"),
        ("Published Jan 5, 2024 by Reuters", "2024-01-05"),
        ("On September 12, 2022 officials said", "2022-09-12"),
        ("No date here", None),
    ],
)
def test_date_from_snippet(snippet: str, expected: str | None) -> None:
    assert date_from_snippet(snippet) == expected
