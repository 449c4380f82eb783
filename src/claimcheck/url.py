"""URL handling and source classification utilities."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from urllib.parse import urlparse

from claimcheck.data import SourceType

logger = logging.getLogger(__name__)

# Substring of hostname -> credibility (0-10). First match wins.
CREDIBILITY_BY_DOMAIN: dict[str, float] = {
    "reuters.com": 10,
    "apnews.com": 10,
    "bbc.com": 9,
    "bbc.co.uk": 9,
    "snopes.com": 9,
    "factcheck.org": 9,
    "politifact.com": 9,
    "fullfact.org": 9,
    "scholar.google.com": 9,
    "who.int": 9,
    "cdc.gov": 9,
    "pubmed.ncbi.nlm.nih.gov": 9,
    "cnn.com": 8,
    "theguardian.com": 8,
    "nytimes.com": 8,
    "washingtonpost.com": 8,
    "linkedin.com": 7,
    "reddit.com": 6,
    "youtube.com": 6,
    "youtu.be": 6,
    "quora.com": 6,
    "twitter.com": 5,
    "x.com": 5,
    "facebook.com": 5,
    "instagram.com": 4,
    "tiktok.com": 4,
    "pinterest.com": 4,
    "t.me": 4,
    "discord": 4,
}
DEFAULT_CREDIBILITY = 5.0

VERIFIED_DOMAINS: tuple[str, ...] = (
    "reuters.com",
    "apnews.com",
    "bbc.com",
    "cnn.com",
    "nytimes.com",
    "washingtonpost.com",
    "theguardian.com",
    "snopes.com",
    "factcheck.org",
    "politifact.com",
    "scholar.google.com",
)

PLATFORM_BY_DOMAIN: dict[str, str] = {
    "twitter.com": "Twitter",
    "x.com": "Twitter",
    "facebook.com": "Facebook",
    "instagram.com": "Instagram",
    "youtube.com": "YouTube",
    "youtu.be": "YouTube",
    "tiktok.com": "TikTok",
    "linkedin.com": "LinkedIn",
    "reddit.com": "Reddit",
    "quora.com": "Quora",
    "pinterest.com": "Pinterest",
    "bsky.app": "Bluesky",
    "t.me": "Telegram",
    "discord": "Discord",
}

_SOURCE_TYPE_RULES: tuple[tuple[SourceType, tuple[str, ...]], ...] = (
    (SourceType.SOCIAL_MEDIA, ("twitter.com", "x.com", "facebook.com", "instagram.com", "tiktok.com", "bsky.app", "t.me")),
    (SourceType.VIDEO, ("youtube.com", "youtu.be", "vimeo.com")),
    (SourceType.FORUM, ("reddit.com", "quora.com", "discord")),
    (SourceType.FACT_CHECK, ("snopes.com", "factcheck.org", "politifact.com", "fullfact.org", "/fact-check", "ap-fact-check")),
    (SourceType.NEWS, ("reuters.com", "apnews.com", "bbc.com", "bbc.co.uk", "cnn.com", "theguardian.com", "nytimes.com", "washingtonpost.com", "news.")),
    (SourceType.ACADEMIC, ("scholar.google.com", ".edu", "researchgate.net", "academia.edu", "pubmed.ncbi.nlm.nih.gov", "arxiv.org")),
    (SourceType.OFFICIAL, (".gov", "who.int", "europa.eu", ".mil")),
    (SourceType.BLOG, ("medium.com", "substack.com", "blogspot.", "wordpress.")),
)

_DATE_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\b\d{4}-\d{2}-\d{2}\b"), "%Y-%m-%d"),
    (re.compile(r"\b\d{1,2}/\d{1,2}/\d{4}\b"), "%m/%d/%Y"),
    (re.compile(r"\b[A-Z][a-z]{2} \d{1,2}, \d{4}\b"), "%b %d, %Y"),
    (re.compile(r"\b[A-Z][a-z]+ \d{1,2}, \d{4}\b"), "%B %d, %Y"),
)


def extract_domain(url: str) -> str:
    """Extract domain name from URL.

    Args:
        url: The URL to extract the domain from.

    Returns:
        The domain name (without 'www.' prefix), or "Unknown" if extraction fails.
    """
    try:
        parsed = urlparse(url)
        domain = parsed.netloc.lower()
        if not domain:
            logger.warning(f"Could not get domain from url {url}")
            return "Unknown"
        if domain.startswith("www."):
            domain = domain[4:]
        return domain
    except ValueError:
        return "Unknown"


def normalize_url(url: str) -> str:
    """Deduplication key for a URL: lowercased, query and fragment dropped."""
    return re.sub(r"[?#].*$", "", url.strip().lower())


def _host_and_path(url: str) -> str:
    try:
        parsed = urlparse(url.lower())
    except ValueError:
        return url.lower()
    host = parsed.netloc[4:] if parsed.netloc.startswith("www.") else parsed.netloc
    return f"{host}{parsed.path}"


def _domain_matches(host_path: str, needle: str) -> bool:
    host = host_path.split("/", 1)[0]
    if needle.startswith((".", "/")) or needle.endswith(".") or "." not in needle:
        return needle in host_path
    return host == needle or host.endswith(f".{needle}") or host_path.startswith(needle)


def classify_source_type(url: str) -> SourceType:
    """Map a URL onto a ``SourceType`` by fixed domain rules."""
    host_path = _host_and_path(url)
    for source_type, needles in _SOURCE_TYPE_RULES:
        if any(_domain_matches(host_path, n) for n in needles):
            return source_type
    return SourceType.WEB


def credibility_for_domain(url: str) -> float:
    host_path = _host_and_path(url)
    for needle, score in CREDIBILITY_BY_DOMAIN.items():
        if _domain_matches(host_path, needle):
            return float(score)
    return DEFAULT_CREDIBILITY


def is_verified_source(url_or_name: str) -> bool:
    lowered = url_or_name.lower()
    return any(domain in lowered for domain in VERIFIED_DOMAINS)


def platform_for_url(url: str) -> str | None:
    """Return the social platform hosting ``url``, or None for other sites."""
    host_path = _host_and_path(url)
    for needle, platform in PLATFORM_BY_DOMAIN.items():
        if _domain_matches(host_path, needle):
            return platform
    return None


def date_from_snippet(snippet: str) -> str | None:
    """Find the first recognisable date in free text, as an ISO-8601 string."""
    for pattern, fmt in _DATE_PATTERNS:
        match = pattern.search(snippet)
        if not match:
            continue
        try:
            return datetime.strptime(match.group(0), fmt).date().isoformat()
        except ValueError:
            continue
    return None
