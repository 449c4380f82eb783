"""Social platform discovery through platform search pages."""

import logging
import re
from dataclasses import dataclass
from typing import Literal
from urllib.parse import parse_qs, quote, quote_plus, urljoin, urlparse

from bs4 import BeautifulSoup

from claimcheck.access.base import ContentFetcher
from claimcheck.data import (
    DiscoveryCandidate,
    Engagement,
    PlaceholderCandidate,
    SearchTerms,
    SourceType,
)
from claimcheck.errors import AdapterError
from claimcheck.search.base import AdapterKind

logger = logging.getLogger(__name__)

Platform = Literal[
    "twitter",
    "facebook",
    "instagram",
    "youtube",
    "tiktok",
    "linkedin",
    "reddit",
    "quora",
    "pinterest",
    "bluesky",
    "telegram",
]

MIN_TITLE_LENGTH = 6


@dataclass(frozen=True)
class PlatformProfile:
    """How to search one platform and recognise links to its posts."""

    display_name: str
    search_url: str
    post_pattern: re.Pattern[str]
    source_type: SourceType
    credibility: float


PLATFORMS: dict[str, PlatformProfile] = {
    "twitter": PlatformProfile(
        "Twitter",
        "https://twitter.com/search?q={query}&f=live",
        re.compile(r"^https://(?:www\.)?(?:twitter|x)\.com/\w+/status/\d+"),
        SourceType.SOCIAL_MEDIA,
        5,
    ),
    "facebook": PlatformProfile(
        "Facebook",
        "https://www.facebook.com/search/posts/?q={query}",
        re.compile(r"^https://(?:www\.)?facebook\.com/(?:[^/]+/posts/|permalink\.php|groups/[^/]+/posts/)"),
        SourceType.SOCIAL_MEDIA,
        5,
    ),
    "instagram": PlatformProfile(
        "Instagram",
        "https://www.instagram.com/explore/tags/{tag}/",
        re.compile(r"^https://(?:www\.)?instagram\.com/(?:p|reel)/[\w-]+"),
        SourceType.SOCIAL_MEDIA,
        4,
    ),
    "youtube": PlatformProfile(
        "YouTube",
        "https://www.youtube.com/results?search_query={query}",
        re.compile(r"^https://(?:(?:www\.)?youtube\.com/(?:watch\?v=|shorts/)|youtu\.be/)[\w-]+"),
        SourceType.VIDEO,
        6,
    ),
    "tiktok": PlatformProfile(
        "TikTok",
        "https://www.tiktok.com/search?q={query}",
        re.compile(r"^https://(?:www\.)?tiktok\.com/@[\w.]+/video/\d+"),
        SourceType.SOCIAL_MEDIA,
        4,
    ),
    "linkedin": PlatformProfile(
        "LinkedIn",
        "https://www.linkedin.com/search/results/content/?keywords={query}",
        re.compile(r"^https://(?:www\.)?linkedin\.com/(?:posts|pulse|feed/update)/"),
        SourceType.SOCIAL_MEDIA,
        7,
    ),
    "reddit": PlatformProfile(
        "Reddit",
        "https://www.reddit.com/search/?q={query}&sort=hot",
        re.compile(r"^https://(?:www\.|old\.)?reddit\.com/r/\w+/comments/"),
        SourceType.FORUM,
        6,
    ),
    "quora": PlatformProfile(
        "Quora",
        "https://www.quora.com/search?q={query}",
        re.compile(r"^https://(?:www\.)?quora\.com/(?!search|profile|topic)[A-Z][\w-]+$"),
        SourceType.FORUM,
        6,
    ),
    "pinterest": PlatformProfile(
        "Pinterest",
        "https://www.pinterest.com/search/pins/?q={query}",
        re.compile(r"^https://(?:www\.)?pinterest\.com/pin/\d+"),
        SourceType.SOCIAL_MEDIA,
        4,
    ),
    "bluesky": PlatformProfile(
        "Bluesky",
        "https://bsky.app/search?q={query}",
        re.compile(r"^https://bsky\.app/profile/[^/]+/post/\w+"),
        SourceType.SOCIAL_MEDIA,
        5,
    ),
    "telegram": PlatformProfile(
        "Telegram",
        "https://t.me/s/{tag}",
        re.compile(r"^https://t\.me/\w+/\d+"),
        SourceType.SOCIAL_MEDIA,
        4,
    ),
}


def canonical_post_url(url: str) -> str:
    """Rewrite posts identified by query parameters into path-only URLs.

    Deduplication keys drop the query string, so ``watch?v=<id>`` and
    ``permalink.php?story_fbid=<id>&id=<page>`` links would otherwise all
    collapse into a single candidate per platform.
    """
    parsed = urlparse(url)
    host = parsed.netloc.lower().removeprefix("www.")
    params = parse_qs(parsed.query)
    if host == "youtube.com" and parsed.path == "/watch" and params.get("v"):
        return f"https://youtu.be/{params['v'][0]}"
    if host == "facebook.com" and parsed.path == "/permalink.php":
        story, page = params.get("story_fbid"), params.get("id")
        if story and page:
            return f"https://www.facebook.com/{page[0]}/posts/{story[0]}"
    return url


def parse_post_links(
    html: str,
    profile: PlatformProfile,
    *,
    base_url: str,
    max_results: int = 10,
) -> list[DiscoveryCandidate]:
    """Collect links to individual posts from a platform search page."""
    soup = BeautifulSoup(html, "html.parser")
    seen: set[str] = set()
    results: list[DiscoveryCandidate] = []
    for link in soup.find_all("a", href=True):
        url = urljoin(base_url, str(link["href"])).split("#")[0]
        if not profile.post_pattern.match(url):
            continue
        url = canonical_post_url(url)
        if url in seen:
            continue
        title = link.get_text(" ", strip=True) or str(link.get("aria-label", "")).strip()
        if len(title) < MIN_TITLE_LENGTH:
            continue
        seen.add(url)
        results.append(
            DiscoveryCandidate(
                url=url,
                title=title[:200],
                description=title,
                source_name=profile.display_name,
                source_type=profile.source_type,
                provisional_credibility=profile.credibility,
                platform=profile.display_name,
            )
        )
        if len(results) >= max_results:
            break
    return results


class SocialPlatformAdapter:
    """Discover posts on one social platform via its public search page.

    When the page cannot be fetched and ``placeholder_on_failure`` is set,
    a single ``PlaceholderCandidate`` pointing at the search page is
    returned instead of nothing. It carries zero engagement and is never
    turned into evidence.

    Args:
        fetcher: Content-fetch capability (Web Unlocker).
        platform: Platform key, e.g. "reddit".
        max_results: Maximum posts returned.
        timeout: Per-request timeout in seconds.
        placeholder_on_failure: Emit a tagged placeholder when the fetch fails.
    """

    kind = AdapterKind.SOCIAL

    def __init__(
        self,
        fetcher: ContentFetcher,
        *,
        platform: Platform,
        max_results: int = 10,
        timeout: float = 30.0,
        placeholder_on_failure: bool = False,
    ) -> None:
        if platform not in PLATFORMS:
            raise ValueError(f"Unknown social platform: {platform}")
        self._fetcher = fetcher
        self._profile = PLATFORMS[platform]
        self._max_results = max_results
        self._timeout = timeout
        self._placeholder_on_failure = placeholder_on_failure
        self.name = f"social:{platform}"

    def search_url(self, terms: SearchTerms) -> str:
        query = terms.keyword_query(3)
        tag = re.sub(r"\W+", "", terms.keywords[0] if terms.keywords else query)
        return self._profile.search_url.format(query=quote_plus(query), tag=quote(tag))

    def placeholder(self, terms: SearchTerms, reason: str) -> PlaceholderCandidate:
        profile = self._profile
        query = terms.keyword_query(3)
        return PlaceholderCandidate(
            url=self.search_url(terms),
            title=f"{profile.display_name} search results for {query}",
            description=f"Search page on {profile.display_name}; not fetched.",
            source_name=profile.display_name,
            source_type=profile.source_type,
            provisional_credibility=profile.credibility,
            platform=profile.display_name,
            engagement=Engagement(),
            reason=reason,
        )

    async def _search_page(self, url: str) -> str:
        """Fetch the platform search page.

        Raises:
            AdapterError: If the page could not be fetched.
        """
        try:
            html = await self._fetcher.fetch(url, timeout=self._timeout)
        except Exception as e:
            raise AdapterError(f"{self.name} search page request failed: {e}") from e
        if html is None:
            raise AdapterError(f"{self.name} search page unavailable")
        return html

    async def discover(self, terms: SearchTerms) -> list[DiscoveryCandidate]:
        url = self.search_url(terms)
        try:
            html = await self._search_page(url)
        except AdapterError as e:
            logger.warning(f"Error in {self.name} discovery. Error: {e}")
            if self._placeholder_on_failure:
                return [self.placeholder(terms, str(e))]
            return []

        try:
            return parse_post_links(
                html, self._profile, base_url=url, max_results=self._max_results
            )
        except Exception as e:
            logger.warning(f"Could not parse {self.name} results. Error: {e}")
            return []
