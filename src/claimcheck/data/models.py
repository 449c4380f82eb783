"""Core data models for claimcheck."""

from dataclasses import dataclass, field
from enum import StrEnum

SNIPPET_LENGTH = 1000


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into ``[low, high]``."""
    return max(low, min(high, value))


class SourceType(StrEnum):
    """Category of the site or platform an item was found on."""

    NEWS = "NEWS"
    FACT_CHECK = "FACT_CHECK"
    SOCIAL_MEDIA = "SOCIAL_MEDIA"
    ACADEMIC = "ACADEMIC"
    OFFICIAL = "OFFICIAL"
    FORUM = "FORUM"
    VIDEO = "VIDEO"
    BLOG = "BLOG"
    WEB = "WEB"
    OTHER = "OTHER"


class Verdict(StrEnum):
    """Final truth label of a fact-check."""

    TRUE = "TRUE"
    FALSE = "FALSE"
    PARTIALLY_TRUE = "PARTIALLY_TRUE"
    MISLEADING = "MISLEADING"
    UNVERIFIED = "UNVERIFIED"


class RiskLevel(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class Level(StrEnum):
    """Three-step scale used for claim urgency and complexity."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class SocialSentiment(StrEnum):
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    NEUTRAL = "NEUTRAL"
    MIXED = "MIXED"


class JobState(StrEnum):
    WAITING = "waiting"
    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class Engagement:
    """Public interaction counts reported for a post or page."""

    likes: int = 0
    shares: int = 0
    comments: int = 0
    views: int = 0

    @property
    def weighted_total(self) -> float:
        # Views are two orders of magnitude cheaper than active interactions.
        return self.likes + self.shares + self.comments + self.views / 100


@dataclass(frozen=True)
class SearchTerms:
    """The search inputs handed to every discovery adapter."""

    claim: str
    keywords: tuple[str, ...] = ()
    variations: tuple[str, ...] = ()

    @property
    def primary(self) -> str:
        return self.variations[0] if self.variations else self.claim

    @property
    def secondary(self) -> str:
        return self.variations[1] if len(self.variations) > 1 else self.primary

    def keyword_query(self, n: int = 3) -> str:
        """Join the top ``n`` keywords, falling back to the claim itself."""
        if not self.keywords:
            return self.claim
        return " ".join(self.keywords[:n])


@dataclass(frozen=True)
class PreprocessedClaim:
    """Structured view of a claim produced by the preprocessor."""

    claim: str
    entities: tuple[str, ...]
    keywords: tuple[str, ...]
    claim_type: str
    search_variations: tuple[str, ...]
    urgency: Level
    complexity: Level
    target_platforms: tuple[str, ...] = ()
    risk_factors: tuple[str, ...] = ()
    target_audience: tuple[str, ...] = ()

    def to_terms(self) -> SearchTerms:
        return SearchTerms(
            claim=self.claim,
            keywords=self.keywords,
            variations=self.search_variations,
        )


@dataclass(frozen=True)
class DiscoveryCandidate:
    """A reference returned by a discovery adapter, before extraction."""

    url: str
    title: str
    source_name: str
    source_type: SourceType = SourceType.WEB
    provisional_credibility: float = 5.0
    description: str = ""
    published_date: str | None = None
    author: str | None = None
    platform: str | None = None
    verified: bool = False
    engagement: Engagement | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "provisional_credibility", clamp(float(self.provisional_credibility), 0.0, 10.0)
        )

    @property
    def is_placeholder(self) -> bool:
        return False


@dataclass(frozen=True)
class PlaceholderCandidate(DiscoveryCandidate):
    """Synthetic stand-in emitted when an adapter could not reach its source.

    It only points at where a human could look (e.g. a platform search
    page). It is never fetched, never turned into Evidence and never counted
    in any credibility statistic.
    """

    reason: str = ""

    @property
    def is_placeholder(self) -> bool:
        return True


@dataclass
class Evidence:
    """A scored excerpt extracted from one discovered source.

    ``credibility_score`` is clamped to [0, 10] and ``sentiment`` to [-1, 1]
    on construction. Interaction enrichment only ever touches ``content``
    and ``claims``.
    """

    url: str
    title: str
    content: str
    source_name: str
    source_type: SourceType = SourceType.WEB
    credibility_score: float = 5.0
    sentiment: float = 0.0
    snippet: str = ""
    author: str | None = None
    published_date: str | None = None
    entities: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    claims: list[str] = field(default_factory=list)
    platform: str | None = None
    verified: bool = False
    engagement: Engagement | None = None

    def __post_init__(self) -> None:
        self.credibility_score = clamp(float(self.credibility_score), 0.0, 10.0)
        self.sentiment = clamp(float(self.sentiment), -1.0, 1.0)
        if not self.snippet:
            self.snippet = self.content[:SNIPPET_LENGTH]

    def merge_interaction(self, content: str, claims: list[str]) -> None:
        """Replace content with richer rendered text and append new claims."""
        if content:
            self.content = content
        for claim in claims:
            if claim not in self.claims:
                self.claims.append(claim)


@dataclass(frozen=True)
class EvidenceBuckets:
    supporting: tuple[Evidence, ...] = ()
    contradicting: tuple[Evidence, ...] = ()
    neutral: tuple[Evidence, ...] = ()

    def all(self) -> list[Evidence]:
        return [*self.supporting, *self.contradicting, *self.neutral]

    def __len__(self) -> int:
        return len(self.supporting) + len(self.contradicting) + len(self.neutral)


@dataclass(frozen=True)
class SourceStats:
    total: int = 0
    by_platform: dict[str, int] = field(default_factory=dict)
    high_credibility: int = 0
    verified: int = 0


@dataclass(frozen=True)
class KeyEvent:
    date: str
    event: str
    source: str


@dataclass(frozen=True)
class Timeline:
    earliest: str = ""
    latest: str = ""
    key_events: tuple[KeyEvent, ...] = ()


@dataclass(frozen=True)
class SocialSignals:
    total_engagement: float = 0.0
    sentiment: SocialSentiment = SocialSentiment.NEUTRAL
    virality_score: float = 0.0
    influencer_mentions: int = 0


@dataclass(frozen=True)
class RiskAssessment:
    level: RiskLevel = RiskLevel.LOW
    factors: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True)
class AnalyzerVerdict:
    """Raw answer of the AI-analysis capability."""

    verdict: Verdict
    confidence: int
    reasoning: str


@dataclass(frozen=True)
class Analysis:
    """Verdict, confidence and explanatory text for one claim."""

    verdict: Verdict
    confidence: int
    summary: str
    reasoning: str
    used_fallback: bool = False


@dataclass(frozen=True)
class FactCheckResult:
    """The single output of a pipeline run.

    ``processing_time`` is wall-clock seconds. ``pipeline`` names the run
    that produced it (``comprehensive``, ``simplified`` or ``degraded``).
    """

    verdict: Verdict
    confidence: int
    summary: str
    reasoning: str
    evidence: EvidenceBuckets
    sources: SourceStats
    timeline: Timeline
    social_signals: SocialSignals
    risk_assessment: RiskAssessment
    processing_time: float
    methodology: str
    pipeline: str = "comprehensive"
    placeholders_discarded: int = 0

    @property
    def evidence_count(self) -> int:
        return len(self.evidence)

    def all_evidence(self) -> list[Evidence]:
        return self.evidence.all()


@dataclass(frozen=True)
class JobStatus:
    """Externally visible state of one submitted job."""

    job_id: str
    state: JobState
    progress: int = 0
    result: FactCheckResult | None = None
    error: str | None = None
