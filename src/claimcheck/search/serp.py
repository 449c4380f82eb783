"""Search-engine discovery through the unlocker SERP zone."""

import logging
from dataclasses import dataclass
from typing import Literal
from urllib.parse import parse_qs, quote_plus, urljoin, urlparse

from bs4 import BeautifulSoup, Tag

from claimcheck.access.base import SearchPageFetcher
from claimcheck.data import DiscoveryCandidate, SearchTerms, SourceType
from claimcheck.search.base import AdapterKind
from claimcheck.search.candidates import web_candidate

logger = logging.getLogger(__name__)

SerpEngine = Literal["google", "google_news", "bing", "scholar"]


def _text(el: Tag | None) -> str:
    return el.get_text(" ", strip=True) if el is not None else ""


def _resolve_google_href(href: str) -> str:
    # Result links are sometimes wrapped as /url?q=<target>&sa=...
    if href.startswith("/url?"):
        target = parse_qs(urlparse(href).query).get("q", [""])[0]
        return target
    return href


def parse_google_results(html: str, *, source_name: str | None = None) -> list[DiscoveryCandidate]:
    """Parse organic results from a Google results page."""
    soup = BeautifulSoup(html, "html.parser")
    seen: set[str] = set()
    results: list[DiscoveryCandidate] = []
    for block in soup.select("div.g, div.tF2Cxc, div.yuRUbf"):
        title = _text(block.find("h3"))
        link = block.find("a", href=True)
        if link is None or not title:
            continue
        url = _resolve_google_href(str(link["href"]))
        if not url.startswith("http") or url in seen:
            continue
        seen.add(url)
        snippet = _text(block.select_one("div.VwiC3b, span.st, div.s"))
        results.append(web_candidate(url, title, snippet, source_name=source_name))
    return results


def parse_google_news_results(html: str) -> list[DiscoveryCandidate]:
    """Parse article cards from a Google News search page."""
    soup = BeautifulSoup(html, "html.parser")
    seen: set[str] = set()
    results: list[DiscoveryCandidate] = []
    for card in soup.select("article"):
        link = card.find("a", href=True)
        title = _text(card.find(["h3", "h4"])) or _text(link)
        if link is None or not title:
            continue
        url = urljoin("https://news.google.com/", str(link["href"]))
        if url in seen:
            continue
        seen.add(url)
        source = _text(card.select_one("div[data-n-tid], .source"))
        time_el = card.find("time")
        published = str(time_el["datetime"]) if time_el and time_el.has_attr("datetime") else None
        results.append(
            web_candidate(
                url,
                title,
                source_name=source or "Google News",
                source_type=SourceType.NEWS,
                published_date=published,
            )
        )
    return results


def parse_bing_results(html: str) -> list[DiscoveryCandidate]:
    soup = BeautifulSoup(html, "html.parser")
    results: list[DiscoveryCandidate] = []
    for item in soup.select("li.b_algo"):
        link = item.select_one("h2 a[href]")
        if link is None:
            continue
        url = str(link["href"])
        title = _text(link)
        if not url.startswith("http") or not title:
            continue
        snippet = _text(item.select_one(".b_caption p, p"))
        results.append(web_candidate(url, title, snippet))
    return results


def parse_scholar_results(html: str) -> list[DiscoveryCandidate]:
    soup = BeautifulSoup(html, "html.parser")
    results: list[DiscoveryCandidate] = []
    for item in soup.select("div.gs_ri"):
        link = item.select_one("h3 a[href]")
        if link is None:
            continue
        url = str(link["href"])
        title = _text(link)
        if not title:
            continue
        results.append(
            web_candidate(
                url,
                title,
                _text(item.select_one("div.gs_rs")),
                source_name="Google Scholar",
                source_type=SourceType.ACADEMIC,
                credibility=9,
                author=_text(item.select_one("div.gs_a")) or None,
            )
        )
    return results


@dataclass(frozen=True)
class _EngineProfile:
    url_template: str
    kind: AdapterKind
    use_serp_zone: bool
    query: Literal["primary", "secondary", "keywords"]


ENGINES: dict[str, _EngineProfile] = {
    "google": _EngineProfile(
        "https://www.google.com/search?q={q}&num=10&gl=us&hl=en",
        AdapterKind.SEARCH_ENGINE,
        use_serp_zone=True,
        query="primary",
    ),
    "google_news": _EngineProfile(
        "https://news.google.com/search?q={q}",
        AdapterKind.NEWS,
        use_serp_zone=True,
        query="primary",
    ),
    "bing": _EngineProfile(
        "https://www.bing.com/search?q={q}",
        AdapterKind.SEARCH_ENGINE,
        use_serp_zone=True,
        query="secondary",
    ),
    "scholar": _EngineProfile(
        "https://scholar.google.com/scholar?q={q}",
        AdapterKind.ACADEMIC,
        use_serp_zone=False,
        query="keywords",
    ),
}

_PARSERS = {
    "google": parse_google_results,
    "google_news": parse_google_news_results,
    "bing": parse_bing_results,
    "scholar": parse_scholar_results,
}


class SerpAdapter:
    """Discover candidates from one search engine's results page.

    Google falls back to a plain Web Unlocker fetch of the same URL when
    the SERP zone fails.

    Args:
        fetcher: Unlocker capable of SERP and plain fetches.
        engine: One of google, google_news, bing, scholar.
        max_results: Maximum candidates returned.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        fetcher: SearchPageFetcher,
        *,
        engine: SerpEngine = "google",
        max_results: int = 10,
        timeout: float = 15.0,
    ) -> None:
        if engine not in ENGINES:
            raise ValueError(f"Unknown search engine: {engine}")
        self._fetcher = fetcher
        self._engine = engine
        self._profile = ENGINES[engine]
        self._max_results = max_results
        self._timeout = timeout
        self.name = f"serp:{engine}"
        self.kind = self._profile.kind

    def _query(self, terms: SearchTerms) -> str:
        if self._profile.query == "secondary":
            return terms.secondary
        if self._profile.query == "keywords":
            return terms.keyword_query(3)
        return terms.primary

    async def discover(self, terms: SearchTerms) -> list[DiscoveryCandidate]:
        query = self._query(terms)
        url = self._profile.url_template.format(q=quote_plus(query))
        try:
            if self._profile.use_serp_zone:
                html = await self._fetcher.serp(url, timeout=self._timeout)
                if html is None and self._engine == "google":
                    logger.info("Google SERP failed, falling back to Web Unlocker")
                    html = await self._fetcher.fetch(url, timeout=self._timeout)
            else:
                html = await self._fetcher.fetch(url, timeout=self._timeout)
            if html is None:
                return []
            results = _PARSERS[self._engine](html)
        except Exception as e:
            logger.warning(f"Error in {self.name} discovery. Error: {e}")
            return []
        return results[: self._max_results]
