"""claimcheck: multi-source fact-checking of short natural-language claims."""

from claimcheck.access import AccessExtractionEngine, UnlockerClient
from claimcheck.analyzer import AIAnalyzer, ClaudeAnalyzer
from claimcheck.config import ClaimCheckConfig, create_from_config, load_config
from claimcheck.data import (
    Analysis,
    DiscoveryCandidate,
    Engagement,
    Evidence,
    EvidenceBuckets,
    FactCheckResult,
    JobState,
    JobStatus,
    PlaceholderCandidate,
    PreprocessedClaim,
    RiskAssessment,
    RiskLevel,
    SearchTerms,
    SocialSignals,
    SourceStats,
    SourceType,
    Timeline,
    Verdict,
)
from claimcheck.errors import (
    BudgetExhaustedError,
    ClaimCheckError,
    ClaimValidationError,
    PhaseTimeoutError,
    PipelineFailedError,
)
from claimcheck.interaction import DynamicInteractionStage
from claimcheck.jobs import FactCheckProcessor, JobAdmission, SubmissionRegistry
from claimcheck.pipeline import ComprehensivePipeline, Pipeline, SimplifiedPipeline
from claimcheck.preprocess import preprocess_claim
from claimcheck.run_logger import RunLogger
from claimcheck.search import (
    ClaudeSearchAdapter,
    DiscoveryFanOut,
    ExaAdapter,
    GNewsAdapter,
    SerpAdapter,
    SiteSearchAdapter,
    SocialPlatformAdapter,
    SourceAdapter,
    XAdapter,
)
from claimcheck.store import InMemoryRecordStore, RecordStore
from claimcheck.synthesis import Synthesizer
from claimcheck.url import extract_domain

__all__ = [
    # Models
    "Analysis",
    "DiscoveryCandidate",
    "Engagement",
    "Evidence",
    "EvidenceBuckets",
    "FactCheckResult",
    "JobState",
    "JobStatus",
    "PlaceholderCandidate",
    "PreprocessedClaim",
    "RiskAssessment",
    "RiskLevel",
    "SearchTerms",
    "SocialSignals",
    "SourceStats",
    "SourceType",
    "Timeline",
    "Verdict",
    # Errors
    "BudgetExhaustedError",
    "ClaimCheckError",
    "ClaimValidationError",
    "PhaseTimeoutError",
    "PipelineFailedError",
    # Functions
    "extract_domain",
    "preprocess_claim",
    # Protocols
    "AIAnalyzer",
    "Pipeline",
    "RecordStore",
    "SourceAdapter",
    # Adapters
    "ClaudeSearchAdapter",
    "ExaAdapter",
    "GNewsAdapter",
    "SerpAdapter",
    "SiteSearchAdapter",
    "SocialPlatformAdapter",
    "XAdapter",
    # Stages
    "AccessExtractionEngine",
    "DiscoveryFanOut",
    "DynamicInteractionStage",
    "Synthesizer",
    "UnlockerClient",
    # Analyzers
    "ClaudeAnalyzer",
    # Pipelines
    "ComprehensivePipeline",
    "SimplifiedPipeline",
    # Jobs
    "FactCheckProcessor",
    "JobAdmission",
    "SubmissionRegistry",
    # Persistence
    "InMemoryRecordStore",
    # Logging
    "RunLogger",
    # Config
    "ClaimCheckConfig",
    "create_from_config",
    "load_config",
]
