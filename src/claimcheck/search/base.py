from enum import StrEnum
from typing import Protocol

from claimcheck.data import DiscoveryCandidate, SearchTerms


class AdapterKind(StrEnum):
    """Closed set of discovery channel categories."""

    SEARCH_ENGINE = "search_engine"
    NEWS = "news"
    FACT_CHECK = "fact_check"
    ACADEMIC = "academic"
    OFFICIAL = "official"
    EXPERT = "expert"
    SOCIAL = "social"


class SourceAdapter(Protocol):
    """Interface for one discovery channel (search engine, platform, site cluster)."""

    name: str
    kind: AdapterKind

    async def discover(self, terms: SearchTerms) -> list[DiscoveryCandidate]:
        """Find candidate references for the given search terms.

        Implementations swallow their own failures and return an empty list
        (or a ``PlaceholderCandidate``) instead of raising. Callers still
        guard every call and bound it with a timeout.

        Args:
            terms: Claim, ranked keywords and search variations.

        Returns:
            Candidate references with provisional credibility.
        """
        ...
