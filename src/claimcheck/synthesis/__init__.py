"""Evidence aggregation and verdict synthesis."""

from claimcheck.synthesis.aggregate import (
    analyze_social_signals,
    assess_risk,
    build_timeline,
    categorize_evidence,
    source_stats,
)
from claimcheck.synthesis.fallback import fallback_analysis, fallback_verdict
from claimcheck.synthesis.synthesizer import Synthesizer, analysis_sample

__all__ = [
    "Synthesizer",
    "analysis_sample",
    "analyze_social_signals",
    "assess_risk",
    "build_timeline",
    "categorize_evidence",
    "fallback_analysis",
    "fallback_verdict",
    "source_stats",
]
