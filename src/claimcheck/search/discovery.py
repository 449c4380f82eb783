"""Discovery fan-out across all source adapters, and candidate reduction."""

import dataclasses
import logging
import time

from claimcheck.data import DiscoveryCandidate, SearchTerms, SourceType
from claimcheck.fanout import fan_out
from claimcheck.run_logger import RunLogger
from claimcheck.search.base import SourceAdapter
from claimcheck.url import is_verified_source, normalize_url, platform_for_url

logger = logging.getLogger(__name__)

TYPE_PRIORITY: dict[SourceType, int] = {
    SourceType.FACT_CHECK: 10,
    SourceType.ACADEMIC: 9,
    SourceType.NEWS: 8,
    SourceType.OFFICIAL: 7,
    SourceType.FORUM: 6,
    SourceType.VIDEO: 5,
    SourceType.SOCIAL_MEDIA: 4,
    SourceType.WEB: 3,
}


def type_priority(source_type: SourceType) -> int:
    return TYPE_PRIORITY.get(source_type, 0)


def rank_key(candidate: DiscoveryCandidate) -> tuple[float, int, int, str]:
    """Sort key: credibility, type priority and verified flag descending, then URL."""
    return (
        -candidate.provisional_credibility,
        -type_priority(candidate.source_type),
        -int(candidate.verified),
        normalize_url(candidate.url),
    )


def enrich_candidate(candidate: DiscoveryCandidate) -> DiscoveryCandidate:
    """Fill the verified flag and platform from the URL when missing."""
    verified = candidate.verified or is_verified_source(candidate.url)
    platform = candidate.platform or platform_for_url(candidate.url)
    if verified == candidate.verified and platform == candidate.platform:
        return candidate
    return dataclasses.replace(candidate, verified=verified, platform=platform)


def _preference(candidate: DiscoveryCandidate) -> tuple[float, int, int, str, str, str]:
    # Full tie-break so the survivor never depends on arrival order.
    return (
        -candidate.provisional_credibility,
        -type_priority(candidate.source_type),
        -int(candidate.verified),
        candidate.url,
        candidate.title,
        candidate.source_name,
    )


def dedupe_candidates(candidates: list[DiscoveryCandidate]) -> list[DiscoveryCandidate]:
    """Keep one candidate per normalized URL, the most credible one."""
    best: dict[str, DiscoveryCandidate] = {}
    for candidate in candidates:
        key = normalize_url(candidate.url)
        current = best.get(key)
        if current is None or _preference(candidate) < _preference(current):
            best[key] = candidate
    return list(best.values())


def reduce_candidates(
    candidates: list[DiscoveryCandidate],
    limit: int = 50,
) -> list[DiscoveryCandidate]:
    """Deduplicate, enrich, rank and truncate discovery output.

    Pure and idempotent. The ranking is a total order, so the result does
    not depend on the order adapters happened to finish in.

    Args:
        candidates: Concatenated adapter outputs.
        limit: Maximum candidates kept.

    Returns:
        Ranked candidates, at most ``limit`` long.
    """
    unique = [enrich_candidate(c) for c in dedupe_candidates(candidates)]
    unique.sort(key=rank_key)
    return unique[:limit]


class DiscoveryFanOut:
    """Run every registered source adapter concurrently and reduce the results.

    Flow:
    1. All adapters run in parallel, each bounded by ``adapter_timeout``
    2. The whole phase is bounded by the ``timeout`` passed to ``run``;
       adapters still running at the deadline are cancelled
    3. Whatever settled is deduplicated, ranked and truncated

    Args:
        adapters: Source adapters to fan out to.
        adapter_timeout: Per-adapter timeout in seconds.
        max_candidates: Bound on the ranked output.
        run_logger: Optional RunLogger for per-adapter stage records.
    """

    def __init__(
        self,
        adapters: list[SourceAdapter],
        *,
        adapter_timeout: float = 45.0,
        max_candidates: int = 50,
        run_logger: RunLogger | None = None,
    ) -> None:
        self._adapters = adapters
        self._adapter_timeout = adapter_timeout
        self._max_candidates = max_candidates
        self._run_logger = run_logger

    @property
    def adapters(self) -> list[SourceAdapter]:
        return list(self._adapters)

    async def run(
        self,
        terms: SearchTerms,
        *,
        timeout: float | None = None,
    ) -> tuple[list[DiscoveryCandidate], bool]:
        """Discover, deduplicate and rank candidates for the given terms.

        Args:
            terms: Claim search terms.
            timeout: Phase deadline in seconds.

        Returns:
            Tuple of (ranked candidates, whether the deadline fired).
        """
        t0 = time.monotonic()
        outcome = await fan_out(
            [adapter.discover(terms) for adapter in self._adapters],
            timeout=timeout,
            item_timeout=self._adapter_timeout,
            labels=[adapter.name for adapter in self._adapters],
        )
        duration = time.monotonic() - t0

        collected: list[DiscoveryCandidate] = []
        for index, found in outcome.results:
            adapter = self._adapters[index]
            collected.extend(found)
            logger.debug(f"{adapter.name} returned {len(found)} candidate(s)")
            if self._run_logger:
                self._run_logger.log_stage(
                    stage="discovery",
                    component=adapter.name,
                    input_data=terms,
                    output_data={"candidate_count": len(found)},
                    duration_seconds=duration,
                )

        ranked = reduce_candidates(collected, self._max_candidates)
        logger.info(
            f"Discovery settled {len(outcome.results)}/{len(self._adapters)} adapter(s) "
            f"in {duration:.1f}s: {len(collected)} raw, {len(ranked)} ranked candidate(s)"
        )
        return (ranked, outcome.timed_out)
