"""Construction of discovery candidates from raw search hits."""

from claimcheck.data import DiscoveryCandidate, Engagement, SourceType
from claimcheck.url import (
    classify_source_type,
    credibility_for_domain,
    date_from_snippet,
    extract_domain,
    platform_for_url,
)


def web_candidate(
    url: str,
    title: str,
    description: str = "",
    *,
    source_name: str | None = None,
    source_type: SourceType | None = None,
    credibility: float | None = None,
    published_date: str | None = None,
    author: str | None = None,
    engagement: Engagement | None = None,
    verified: bool = False,
) -> DiscoveryCandidate:
    """Build a candidate, classifying whatever the caller did not supply.

    Source type, credibility and platform come from the URL's domain; the
    publication date falls back to the first date found in ``description``.
    """
    return DiscoveryCandidate(
        url=url,
        title=title.strip(),
        description=description.strip(),
        source_name=source_name or extract_domain(url),
        source_type=source_type or classify_source_type(url),
        provisional_credibility=(
            credibility if credibility is not None else credibility_for_domain(url)
        ),
        published_date=published_date or date_from_snippet(description),
        author=author,
        platform=platform_for_url(url),
        verified=verified,
        engagement=engagement,
    )
