"""Source discovery: adapters and the discovery fan-out."""

from claimcheck.search.base import AdapterKind, SourceAdapter
from claimcheck.search.claude import ClaudeSearchAdapter
from claimcheck.search.discovery import DiscoveryFanOut, reduce_candidates
from claimcheck.search.exa import ExaAdapter
from claimcheck.search.gnews import GNewsAdapter
from claimcheck.search.serp import SerpAdapter
from claimcheck.search.site import SiteSearchAdapter
from claimcheck.search.social import SocialPlatformAdapter
from claimcheck.search.x import XAdapter

__all__ = [
    "AdapterKind",
    "ClaudeSearchAdapter",
    "DiscoveryFanOut",
    "ExaAdapter",
    "GNewsAdapter",
    "SerpAdapter",
    "SiteSearchAdapter",
    "SocialPlatformAdapter",
    "SourceAdapter",
    "XAdapter",
    "reduce_candidates",
]
