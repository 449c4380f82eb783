"""Site-restricted Google searches over a cluster of trusted sites."""

import logging
from dataclasses import dataclass
from typing import Literal
from urllib.parse import quote_plus

from claimcheck.access.base import SearchPageFetcher
from claimcheck.data import DiscoveryCandidate, SearchTerms
from claimcheck.fanout import fan_out
from claimcheck.search.base import AdapterKind
from claimcheck.search.serp import parse_google_results

logger = logging.getLogger(__name__)

SiteCluster = Literal["fact_check", "major_news", "government", "expert"]

GOOGLE_SEARCH_URL = "https://www.google.com/search?q={q}"


@dataclass(frozen=True)
class ClusterProfile:
    sites: tuple[str, ...]
    kind: AdapterKind
    query: Literal["claim", "primary", "keywords"]


CLUSTERS: dict[str, ClusterProfile] = {
    "fact_check": ClusterProfile(
        sites=(
            "snopes.com",
            "factcheck.org",
            "politifact.com",
            "reuters.com/fact-check",
            "apnews.com/hub/ap-fact-check",
        ),
        kind=AdapterKind.FACT_CHECK,
        query="claim",
    ),
    "major_news": ClusterProfile(
        sites=("reuters.com", "apnews.com", "bbc.com", "cnn.com", "theguardian.com"),
        kind=AdapterKind.NEWS,
        query="primary",
    ),
    "government": ClusterProfile(
        sites=("gov", "who.int", "cdc.gov", "fda.gov"),
        kind=AdapterKind.OFFICIAL,
        query="keywords",
    ),
    "expert": ClusterProfile(
        sites=("researchgate.net", "academia.edu", "pubmed.ncbi.nlm.nih.gov"),
        kind=AdapterKind.EXPERT,
        query="keywords",
    ),
}


class SiteSearchAdapter:
    """Search every site of a cluster concurrently with ``site:`` queries.

    A failing or slow site costs only its own results.

    Args:
        fetcher: Unlocker capable of SERP fetches.
        cluster: Name of the site cluster.
        sites: Override the cluster's default site list.
        max_results: Maximum candidates returned across all sites.
        site_timeout: Per-site request timeout in seconds.
    """

    def __init__(
        self,
        fetcher: SearchPageFetcher,
        *,
        cluster: SiteCluster = "fact_check",
        sites: list[str] | None = None,
        max_results: int = 20,
        site_timeout: float = 10.0,
    ) -> None:
        if cluster not in CLUSTERS:
            raise ValueError(f"Unknown site cluster: {cluster}")
        self._fetcher = fetcher
        self._profile = CLUSTERS[cluster]
        self._sites = tuple(sites) if sites else self._profile.sites
        self._max_results = max_results
        self._site_timeout = site_timeout
        self.name = f"site_search:{cluster}"
        self.kind = self._profile.kind

    def _query(self, terms: SearchTerms) -> str:
        if self._profile.query == "claim":
            return terms.claim
        if self._profile.query == "keywords":
            return terms.keyword_query(3)
        return terms.primary

    async def discover(self, terms: SearchTerms) -> list[DiscoveryCandidate]:
        query = self._query(terms)
        outcome = await fan_out(
            [self._search_site(site, query) for site in self._sites],
            item_timeout=self._site_timeout + 1.0,
            labels=[f"{self.name} {site}" for site in self._sites],
        )
        results: list[DiscoveryCandidate] = []
        for site_results in outcome.values():
            results.extend(site_results)
        return results[: self._max_results]

    async def _search_site(self, site: str, query: str) -> list[DiscoveryCandidate]:
        url = GOOGLE_SEARCH_URL.format(q=quote_plus(f"site:{site} {query}"))
        html = await self._fetcher.serp(url, timeout=self._site_timeout)
        if html is None:
            return []
        return parse_google_results(html, source_name=site)
