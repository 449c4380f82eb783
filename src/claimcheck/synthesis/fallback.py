"""Deterministic verdict rule and report text used when AI analysis is unavailable."""

from claimcheck.data import Analysis, Evidence, SourceType, Verdict
from claimcheck.synthesis.aggregate import (
    analyze_social_signals,
    categorize_evidence,
    is_social,
    platform_label,
)

NO_EVIDENCE_CONFIDENCE = 10

VERDICT_PHRASES: dict[Verdict, str] = {
    Verdict.FALSE: "appears to be false",
    Verdict.TRUE: "appears to be true",
    Verdict.PARTIALLY_TRUE: "appears to be partially true",
    Verdict.MISLEADING: "is likely misleading",
    Verdict.UNVERIFIED: "remains unverified",
}

SOURCE_TYPE_LINES: tuple[tuple[SourceType, str], ...] = (
    (SourceType.FACT_CHECK, "**Fact-Checking Organizations**: {n} sources reviewed."),
    (SourceType.NEWS, "**News Outlets**: {n} reports consulted."),
    (SourceType.ACADEMIC, "**Academic Publications**: {n} studies or papers considered."),
    (SourceType.OFFICIAL, "**Official Sources**: {n} documents or statements analyzed."),
)


def fallback_verdict(evidence: list[Evidence]) -> tuple[Verdict, int]:
    """Classify by the share of supporting and contradicting evidence.

    - supporting > 70%: TRUE at 80
    - contradicting > 70%: FALSE at 80
    - supporting > 40% and contradicting < 30%: PARTIALLY_TRUE at 65
    - contradicting > 40%: MISLEADING at 70
    - otherwise UNVERIFIED at 50, or at 10 when there is no evidence at all
    """
    if not evidence:
        return (Verdict.UNVERIFIED, NO_EVIDENCE_CONFIDENCE)

    buckets = categorize_evidence(evidence)
    support_ratio = len(buckets.supporting) / len(evidence)
    contradict_ratio = len(buckets.contradicting) / len(evidence)

    if support_ratio > 0.7:
        return (Verdict.TRUE, 80)
    if contradict_ratio > 0.7:
        return (Verdict.FALSE, 80)
    if support_ratio > 0.4 and contradict_ratio < 0.3:
        return (Verdict.PARTIALLY_TRUE, 65)
    if contradict_ratio > 0.4:
        return (Verdict.MISLEADING, 70)
    return (Verdict.UNVERIFIED, 50)


def generate_summary(claim: str, evidence: list[Evidence], verdict: Verdict, confidence: int) -> str:
    if verdict is Verdict.UNVERIFIED:
        if not evidence:
            return (
                f'The claim "{claim}" could not be verified due to a lack of available '
                f"evidence. Confidence is {confidence}%."
            )
        return (
            f'The claim "{claim}" remains unverified after reviewing {len(evidence)} sources. '
            f"More conclusive evidence is needed. Confidence is {confidence}%."
        )

    summary = (
        f'Based on an analysis of {len(evidence)} sources, the claim "{claim}" '
        f"{VERDICT_PHRASES[verdict]} with a confidence level of {confidence}%."
    )
    source_types = list(dict.fromkeys(str(e.source_type) for e in evidence))
    if source_types:
        summary += f" Evidence was gathered from types such as: {', '.join(source_types[:3])}."
    return summary


def _evidence_line(evidence: Evidence) -> str:
    return (
        f"- *{evidence.title}* (Source: {evidence.source_name}, Type: {evidence.source_type}, "
        f"Credibility: {evidence.credibility_score:.1f}/10)"
    )


def generate_reasoning(claim: str, evidence: list[Evidence], verdict: Verdict, confidence: int) -> str:
    """Render a markdown report explaining a verdict from evidence counts."""
    label = verdict.replace("_", " ").lower().capitalize()
    lines = [
        f'# Fact-Check Analysis: "{claim}"',
        "",
        f"## Verdict: {label}",
        f"**Confidence Level**: {confidence}%",
        "",
        "### Overall Summary:",
        generate_summary(claim, evidence, verdict, confidence),
        "",
        "### Evidence Breakdown:",
    ]

    if not evidence:
        lines.append("- No direct evidence found for this claim.")
    else:
        buckets = categorize_evidence(evidence)
        lines += [
            f"- **Total Sources Analyzed**: {len(evidence)}",
            f"- **Supporting Evidence**: {len(buckets.supporting)} sources",
            f"- **Contradicting Evidence**: {len(buckets.contradicting)} sources",
            f"- **Neutral Evidence**: {len(buckets.neutral)} sources",
        ]
        if buckets.supporting:
            lines += ["", "#### Key Supporting Evidence:"]
            lines += [_evidence_line(e) for e in buckets.supporting[:2]]
        if buckets.contradicting:
            lines += ["", "#### Key Contradicting Evidence:"]
            lines += [_evidence_line(e) for e in buckets.contradicting[:2]]
    lines.append("")

    lines.append("### Source Type Analysis:")
    for source_type, template in SOURCE_TYPE_LINES:
        n = sum(1 for e in evidence if e.source_type == source_type)
        if n:
            lines.append(f"- {template.format(n=n)}")
    social = [e for e in evidence if is_social(e)]
    if social:
        platforms = list(dict.fromkeys(platform_label(e) for e in social))
        lines.append(
            f"- **Social Media & Forums**: {len(social)} posts or discussions identified. "
            f"Key platforms include {', '.join(platforms[:3])}."
        )
    if evidence:
        average = sum(e.credibility_score for e in evidence) / len(evidence)
        lines.append(f"- **Average Source Credibility**: {average:.1f}/10")
    lines.append("")

    signals = analyze_social_signals(evidence)
    if signals.total_engagement > 0 or signals.influencer_mentions > 0:
        lines += [
            "### Social Media Signals:",
            f"- **Total Engagement**: approximately {signals.total_engagement:.0f}",
            f"- **Overall Sentiment**: {signals.sentiment}",
            f"- **Virality Score**: {signals.virality_score:.0f}/100",
            f"- **Influencer/Verified Mentions**: {signals.influencer_mentions}",
            "",
        ]

    lines += [
        "### Methodology Notes:",
        "This verdict was produced by a rule over heuristic sentiment scores, "
        "not by reading the sources in depth.",
    ]
    if verdict is Verdict.UNVERIFIED and confidence < 50:
        lines.append(
            "Limitations: a low-confidence unverified status usually means too little "
            "relevant data could be accessed, or credible sources conflict."
        )
    return "\n".join(lines)


def fallback_analysis(claim: str, evidence: list[Evidence]) -> Analysis:
    verdict, confidence = fallback_verdict(evidence)
    return Analysis(
        verdict=verdict,
        confidence=confidence,
        summary=generate_summary(claim, evidence, verdict, confidence),
        reasoning=generate_reasoning(claim, evidence, verdict, confidence),
        used_fallback=True,
    )
