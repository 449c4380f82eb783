"""Pure aggregation over extracted evidence.

None of these functions mutate their input or perform I/O.
"""

from collections import Counter
from datetime import UTC, datetime

from claimcheck.data import (
    Evidence,
    EvidenceBuckets,
    KeyEvent,
    RiskAssessment,
    RiskLevel,
    SocialSentiment,
    SocialSignals,
    SourceStats,
    SourceType,
    Timeline,
    Verdict,
)

SENTIMENT_THRESHOLD = 0.2
HIGH_CREDIBILITY = 8.0
KEY_EVENT_CREDIBILITY = 7.0
MAX_KEY_EVENTS = 5
VIRAL_SHARES = 1000

SOCIAL_TYPES = frozenset({SourceType.SOCIAL_MEDIA, SourceType.VIDEO, SourceType.FORUM})
SOCIAL_PLATFORM_NAMES = (
    "twitter",
    "facebook",
    "instagram",
    "tiktok",
    "linkedin",
    "reddit",
    "youtube",
    "quora",
    "pinterest",
    "bluesky",
)


def platform_label(evidence: Evidence) -> str:
    return evidence.platform or evidence.source_name


def categorize_evidence(evidence: list[Evidence]) -> EvidenceBuckets:
    """Partition evidence by sentiment: > 0.2 supporting, < -0.2 contradicting, else neutral."""
    supporting: list[Evidence] = []
    contradicting: list[Evidence] = []
    neutral: list[Evidence] = []
    for item in evidence:
        if item.sentiment > SENTIMENT_THRESHOLD:
            supporting.append(item)
        elif item.sentiment < -SENTIMENT_THRESHOLD:
            contradicting.append(item)
        else:
            neutral.append(item)
    return EvidenceBuckets(
        supporting=tuple(supporting),
        contradicting=tuple(contradicting),
        neutral=tuple(neutral),
    )


def source_stats(evidence: list[Evidence]) -> SourceStats:
    by_platform = Counter(platform_label(e) for e in evidence)
    return SourceStats(
        total=len(evidence),
        by_platform=dict(by_platform),
        high_credibility=sum(1 for e in evidence if e.credibility_score >= HIGH_CREDIBILITY),
        verified=sum(1 for e in evidence if e.verified),
    )


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 date or datetime; naive values are taken as UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def build_timeline(evidence: list[Evidence]) -> Timeline:
    """Earliest and latest publication dates plus up to five key events.

    Key events are dated items with credibility of at least 7, most recent
    first. Items whose date cannot be parsed are ignored.
    """
    dated = [(ts, e) for e in evidence if (ts := parse_timestamp(e.published_date)) is not None]
    if not dated:
        return Timeline()

    timestamps = sorted(ts for ts, _ in dated)
    notable = [(ts, e) for ts, e in dated if e.credibility_score >= KEY_EVENT_CREDIBILITY]
    notable.sort(key=lambda pair: pair[0], reverse=True)
    key_events = tuple(
        KeyEvent(date=ts.isoformat(), event=e.title, source=e.source_name)
        for ts, e in notable[:MAX_KEY_EVENTS]
    )
    return Timeline(
        earliest=timestamps[0].isoformat(),
        latest=timestamps[-1].isoformat(),
        key_events=key_events,
    )


def is_social(evidence: Evidence) -> bool:
    if evidence.source_type in SOCIAL_TYPES:
        return True
    label = f"{evidence.platform or ''} {evidence.source_name}".lower()
    return any(name in label for name in SOCIAL_PLATFORM_NAMES)


def _is_influencer(evidence: Evidence) -> bool:
    engagement = evidence.engagement
    return (
        evidence.verified
        or evidence.credibility_score >= HIGH_CREDIBILITY
        or (engagement is not None and (engagement.likes > 1000 or engagement.views > 50000))
    )


def _sentiment_label(positive: int, negative: int) -> SocialSentiment:
    if positive > negative * 1.5:
        return SocialSentiment.POSITIVE
    if negative > positive * 1.5:
        return SocialSentiment.NEGATIVE
    if abs(positive - negative) < 2:
        return SocialSentiment.NEUTRAL
    return SocialSentiment.MIXED


def analyze_social_signals(evidence: list[Evidence]) -> SocialSignals:
    """Engagement, sentiment and virality over social, video and forum evidence.

    virality = min(100, engagement / 500 + 3 * distinct platforms)
    """
    social = [e for e in evidence if is_social(e)]
    if not social:
        return SocialSignals()

    total = sum(e.engagement.weighted_total for e in social if e.engagement is not None)
    positive = sum(1 for e in social if e.sentiment > SENTIMENT_THRESHOLD)
    negative = sum(1 for e in social if e.sentiment < -SENTIMENT_THRESHOLD)
    platforms = {platform_label(e) for e in social}
    virality = min(100.0, min(100.0, total / 500) + len(platforms) * 3)
    return SocialSignals(
        total_engagement=total,
        sentiment=_sentiment_label(positive, negative),
        virality_score=virality,
        influencer_mentions=sum(1 for e in social if _is_influencer(e)),
    )


def _escalate(level: RiskLevel) -> RiskLevel:
    return RiskLevel.MEDIUM if level is RiskLevel.LOW else RiskLevel.HIGH


def assess_risk(verdict: Verdict, confidence: int, evidence: list[Evidence]) -> RiskAssessment:
    """Combine verdict, confidence and evidence quality into a risk level."""
    factors: list[str] = []
    level = RiskLevel.LOW

    if verdict is Verdict.FALSE and confidence > 80:
        factors.append("High confidence false claim detected")
        level = RiskLevel.HIGH
    if verdict is Verdict.MISLEADING:
        factors.append("Misleading information identified")
        level = RiskLevel.MEDIUM

    viral = [e for e in evidence if e.engagement is not None and e.engagement.shares > VIRAL_SHARES]
    if viral:
        factors.append("Viral content detected")
        level = _escalate(level)

    low_credibility = sum(1 for e in evidence if e.credibility_score < 5)
    if low_credibility > len(evidence) * 0.5:
        factors.append("Majority of sources have low credibility")
        level = _escalate(level)

    if verdict is Verdict.FALSE and confidence > 90 and len(viral) > 2:
        factors.append("High-confidence false claim with viral spread")
        level = RiskLevel.CRITICAL

    recommendations: list[str] = []
    if level in (RiskLevel.HIGH, RiskLevel.CRITICAL):
        recommendations.append("Monitor for further spread")
        recommendations.append("Consider fact-check publication")
    if viral:
        recommendations.append("Track social media engagement")
    if not evidence:
        recommendations.append("Seek additional sources")

    return RiskAssessment(
        level=level,
        factors=tuple(factors),
        recommendations=tuple(recommendations),
    )
