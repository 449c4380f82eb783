"""Data models for claimcheck."""

from claimcheck.data.models import (
    Analysis,
    AnalyzerVerdict,
    DiscoveryCandidate,
    Engagement,
    Evidence,
    EvidenceBuckets,
    FactCheckResult,
    JobState,
    JobStatus,
    KeyEvent,
    Level,
    PlaceholderCandidate,
    PreprocessedClaim,
    RiskAssessment,
    RiskLevel,
    SearchTerms,
    SocialSentiment,
    SocialSignals,
    SourceStats,
    SourceType,
    Timeline,
    Verdict,
    clamp,
)

__all__ = [
    "Analysis",
    "AnalyzerVerdict",
    "DiscoveryCandidate",
    "Engagement",
    "Evidence",
    "EvidenceBuckets",
    "FactCheckResult",
    "JobState",
    "JobStatus",
    "KeyEvent",
    "Level",
    "PlaceholderCandidate",
    "PreprocessedClaim",
    "RiskAssessment",
    "RiskLevel",
    "SearchTerms",
    "SocialSentiment",
    "SocialSignals",
    "SourceStats",
    "SourceType",
    "Timeline",
    "Verdict",
    "clamp",
]
