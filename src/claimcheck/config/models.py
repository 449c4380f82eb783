"""Pydantic configuration models for claimcheck components."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from claimcheck.search.serp import SerpEngine
from claimcheck.search.site import SiteCluster
from claimcheck.search.social import Platform

# ============================================================
# Unlocker Config
# ============================================================


class UnlockerConfig(BaseModel):
    """Configuration for the content-unlocking client (fetch, SERP, browser)."""

    web_unlocker_zone: str = "web_unlocker1"
    serp_zone: str = "serp_api1"
    browser_zone: str = "scraping_browser1"

    model_config = {"frozen": True}


# ============================================================
# Source Adapter Configs
# ============================================================


class SerpAdapterConfig(BaseModel):
    """Configuration for SerpAdapter."""

    type: Literal["serp"] = "serp"
    engine: SerpEngine = "google"
    max_results: int = 10

    model_config = {"frozen": True}


class SiteSearchAdapterConfig(BaseModel):
    """Configuration for SiteSearchAdapter."""

    type: Literal["site_search"] = "site_search"
    cluster: SiteCluster = "fact_check"
    sites: list[str] | None = None
    max_results: int = 20

    model_config = {"frozen": True}


class SocialAdapterConfig(BaseModel):
    """Configuration for SocialPlatformAdapter."""

    type: Literal["social"] = "social"
    platform: Platform
    max_results: int = 10
    placeholder_on_failure: bool = False

    model_config = {"frozen": True}


class XAdapterConfig(BaseModel):
    """Configuration for XAdapter."""

    type: Literal["x"] = "x"
    max_results: int = 10

    model_config = {"frozen": True}


class ExaAdapterConfig(BaseModel):
    """Configuration for ExaAdapter."""

    type: Literal["exa"] = "exa"
    max_results: int = 10

    model_config = {"frozen": True}


class GNewsAdapterConfig(BaseModel):
    """Configuration for GNewsAdapter."""

    type: Literal["gnews"] = "gnews"
    lang: str = "en"
    max_results: int = 10

    model_config = {"frozen": True}


class ClaudeSearchAdapterConfig(BaseModel):
    """Configuration for ClaudeSearchAdapter."""

    type: Literal["claude"] = "claude"
    model: str = "claude-haiku-4-5-20251001"
    max_searches: int = 2
    max_results: int = 10

    model_config = {"frozen": True}


AdapterConfig = Annotated[
    SerpAdapterConfig
    | SiteSearchAdapterConfig
    | SocialAdapterConfig
    | XAdapterConfig
    | ExaAdapterConfig
    | GNewsAdapterConfig
    | ClaudeSearchAdapterConfig,
    Field(discriminator="type"),
]


# ============================================================
# Budget & Stage Configs
# ============================================================


class BudgetConfig(BaseModel):
    """Phase sub-timeouts, per-call timeouts and bounds, in seconds."""

    preprocess_timeout: float = 15.0
    discovery_timeout: float = 90.0
    access_timeout: float = 120.0
    interaction_timeout: float = 30.0
    analysis_timeout: float = 20.0
    total_timeout: float = 275.0
    min_start: float = 30.0
    fetch_timeout: float = 10.0
    per_interaction_timeout: float = 12.0
    adapter_timeout: float = 45.0
    serp_timeout: float = 15.0
    site_timeout: float = 10.0
    max_candidates: int = 50
    max_extraction_candidates: int = 50

    model_config = {"frozen": True}


class InteractionConfig(BaseModel):
    """Configuration for the dynamic interaction stage."""

    enabled: bool = True

    model_config = {"frozen": True}


class SimplifiedStepConfig(BaseModel):
    """One adapter call of the simplified pipeline."""

    adapter: AdapterConfig
    timeout: float = 5.0
    take: int = 5

    model_config = {"frozen": True}


def _default_simplified_steps() -> list[SimplifiedStepConfig]:
    return [
        SimplifiedStepConfig(adapter=SerpAdapterConfig(engine="google"), timeout=8.0, take=5),
        SimplifiedStepConfig(adapter=SerpAdapterConfig(engine="google_news"), timeout=5.0, take=3),
        SimplifiedStepConfig(adapter=SiteSearchAdapterConfig(cluster="fact_check"), timeout=5.0, take=3),
    ]


class SimplifiedConfig(BaseModel):
    """Configuration for the simplified fallback pipeline."""

    steps: list[SimplifiedStepConfig] = Field(default_factory=_default_simplified_steps)
    max_candidates: int = 10
    analysis_timeout: float = 10.0

    model_config = {"frozen": True}


# ============================================================
# Analyzer Configs
# ============================================================


class ClaudeAnalyzerConfig(BaseModel):
    """Configuration for ClaudeAnalyzer."""

    type: Literal["claude"] = "claude"
    model: str = "claude-haiku-4-5-20251001"
    max_tokens: int = 2048
    sample_size: int = 15

    model_config = {"frozen": True}


class RuleAnalyzerConfig(BaseModel):
    """Skip AI analysis; always use the rule-based verdict."""

    type: Literal["rule"] = "rule"

    model_config = {"frozen": True}


AnalyzerConfig = Annotated[
    ClaudeAnalyzerConfig | RuleAnalyzerConfig,
    Field(discriminator="type"),
]


# ============================================================
# Admission Config
# ============================================================


class AdmissionConfig(BaseModel):
    """Configuration for the job admission layer."""

    slots: int = 2
    dedup_window: float = 30.0
    # Global budget plus the simplified fallback plus slack.
    max_runtime: float | None = 330.0
    # Finished jobs kept queryable; older ones are dropped.
    retain_completed: int = Field(default=5, ge=0)
    retain_failed: int = Field(default=10, ge=0)

    model_config = {"frozen": True}


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for JSON run logging."""

    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class ClaimCheckConfig(BaseModel):
    """Root configuration for claimcheck."""

    unlocker: UnlockerConfig = Field(default_factory=UnlockerConfig)
    adapters: list[AdapterConfig] = Field(default_factory=list)
    budget: BudgetConfig = Field(default_factory=BudgetConfig)
    interaction: InteractionConfig = Field(default_factory=InteractionConfig)
    simplified: SimplifiedConfig = Field(default_factory=SimplifiedConfig)
    analyzer: AnalyzerConfig = Field(default_factory=ClaudeAnalyzerConfig)
    admission: AdmissionConfig = Field(default_factory=AdmissionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
