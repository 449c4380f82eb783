"""Configuration module for claimcheck."""

from claimcheck.config.factory import (
    create_adapter,
    create_analyzer,
    create_from_config,
    create_pipeline,
    create_simplified_pipeline,
)
from claimcheck.config.loader import get_default_config_path, load_config
from claimcheck.config.models import (
    AdapterConfig,
    AdmissionConfig,
    AnalyzerConfig,
    BudgetConfig,
    ClaimCheckConfig,
    ClaudeAnalyzerConfig,
    ClaudeSearchAdapterConfig,
    ExaAdapterConfig,
    GNewsAdapterConfig,
    InteractionConfig,
    LoggingConfig,
    RuleAnalyzerConfig,
    SerpAdapterConfig,
    SimplifiedConfig,
    SimplifiedStepConfig,
    SiteSearchAdapterConfig,
    SocialAdapterConfig,
    UnlockerConfig,
    XAdapterConfig,
)

__all__ = [
    "AdapterConfig",
    "AdmissionConfig",
    "AnalyzerConfig",
    "BudgetConfig",
    "ClaimCheckConfig",
    "ClaudeAnalyzerConfig",
    "ClaudeSearchAdapterConfig",
    "ExaAdapterConfig",
    "GNewsAdapterConfig",
    "InteractionConfig",
    "LoggingConfig",
    "RuleAnalyzerConfig",
    "SerpAdapterConfig",
    "SimplifiedConfig",
    "SimplifiedStepConfig",
    "SiteSearchAdapterConfig",
    "SocialAdapterConfig",
    "UnlockerConfig",
    "XAdapterConfig",
    "create_adapter",
    "create_analyzer",
    "create_from_config",
    "create_pipeline",
    "create_simplified_pipeline",
    "get_default_config_path",
    "load_config",
]
