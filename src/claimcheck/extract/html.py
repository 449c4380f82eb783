"""HTML document extraction with BeautifulSoup."""

import logging
import re
from dataclasses import dataclass
from datetime import datetime

from bs4 import BeautifulSoup

from claimcheck.url import date_from_snippet

logger = logging.getLogger(__name__)

CONTENT_LIMIT = 2000
MIN_REGION_LENGTH = 100

NOISE_TAGS = ("script", "style", "noscript", "nav", "footer", "header", "aside")
NOISE_SELECTORS = (".advertisement", ".ads", ".cookie-banner")

CONTENT_SELECTORS = (
    "article",
    '[role="main"]',
    ".content",
    ".post-content",
    ".entry-content",
    ".article-content",
    "main",
    "#content",
    ".main-content",
)
AUTHOR_SELECTORS = (
    '[rel="author"]',
    ".author",
    ".byline",
    ".post-author",
    '[name="author"]',
    ".article-author",
)
DATE_SELECTORS = (
    "time[datetime]",
    ".published",
    ".post-date",
    ".article-date",
    ".date",
)

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class ExtractedDocument:
    """Structured fields pulled from one fetched page."""

    title: str
    content: str
    author: str | None = None
    published_date: str | None = None


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def _strip_noise(soup: BeautifulSoup) -> None:
    for el in soup(list(NOISE_TAGS)):
        el.decompose()
    for selector in NOISE_SELECTORS:
        for el in soup.select(selector):
            el.decompose()


def _title(soup: BeautifulSoup, fallback: str) -> str:
    if soup.title and soup.title.get_text(strip=True):
        return _collapse(soup.title.get_text())
    h1 = soup.find("h1")
    if h1 and h1.get_text(strip=True):
        return _collapse(h1.get_text())
    return fallback


def _main_content(soup: BeautifulSoup) -> str:
    for selector in CONTENT_SELECTORS:
        text = _collapse(" ".join(el.get_text(" ") for el in soup.select(selector)))
        if len(text) > MIN_REGION_LENGTH:
            return text
    body = soup.body or soup
    return _collapse(body.get_text(" "))


def _author(soup: BeautifulSoup) -> str | None:
    for selector in AUTHOR_SELECTORS:
        el = soup.select_one(selector)
        if el is None:
            continue
        text = _collapse(el.get_text(" "))
        if text:
            return text
    meta = soup.find("meta", attrs={"name": "author"})
    if meta and meta.get("content"):
        return str(meta["content"]).strip() or None
    return None


def _parse_date(raw: str) -> str | None:
    try:
        return datetime.fromisoformat(raw.strip()).isoformat()
    except ValueError:
        return date_from_snippet(raw)


def _published_date(soup: BeautifulSoup) -> str | None:
    for selector in DATE_SELECTORS:
        el = soup.select_one(selector)
        if el is None:
            continue
        raw = el.get("datetime") or el.get_text(" ", strip=True)
        if not raw:
            continue
        parsed = _parse_date(str(raw))
        if parsed:
            return parsed
    return None


def extract_document(html: str, fallback_title: str = "") -> ExtractedDocument:
    """Extract title, main content, author and publication date from HTML.

    Noise elements (scripts, navigation, footers, ads) are removed first.
    The main content is the first prioritized region holding more than 100
    characters, else the whitespace-normalized body text, truncated to
    2000 characters.

    Args:
        html: Raw page markup.
        fallback_title: Title used when the page has neither ``<title>``
            nor ``<h1>``.

    Returns:
        The extracted document.
    """
    soup = BeautifulSoup(html, "html.parser")
    # Read metadata before noise stripping removes <header> bylines.
    author = _author(soup)
    published = _published_date(soup)
    title = _title(soup, fallback_title)

    _strip_noise(soup)
    content = _main_content(soup)[:CONTENT_LIMIT]

    return ExtractedDocument(
        title=title,
        content=content,
        author=author,
        published_date=published,
    )
