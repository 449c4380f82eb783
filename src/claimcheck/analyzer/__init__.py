"""AI verdict analysis."""

from claimcheck.analyzer.base import AIAnalyzer
from claimcheck.analyzer.claude import ClaudeAnalyzer

__all__ = ["AIAnalyzer", "ClaudeAnalyzer"]
