"""Factory functions to create components from configuration."""

from pathlib import Path

from claimcheck.access import AccessExtractionEngine, UnlockerClient
from claimcheck.analyzer import AIAnalyzer, ClaudeAnalyzer
from claimcheck.config.models import (
    AdapterConfig,
    BudgetConfig,
    ClaimCheckConfig,
    ClaudeAnalyzerConfig,
    ClaudeSearchAdapterConfig,
    ExaAdapterConfig,
    GNewsAdapterConfig,
    RuleAnalyzerConfig,
    SerpAdapterConfig,
    SimplifiedConfig,
    SiteSearchAdapterConfig,
    SocialAdapterConfig,
    UnlockerConfig,
    XAdapterConfig,
)
from claimcheck.interaction import DynamicInteractionStage
from claimcheck.jobs import FactCheckProcessor, JobAdmission
from claimcheck.pipeline import (
    ComprehensivePipeline,
    PhaseBudgets,
    SimplifiedPipeline,
    SimplifiedStep,
)
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


def create_unlocker(config: UnlockerConfig, budget: BudgetConfig) -> UnlockerClient:
    return UnlockerClient(
        web_unlocker_zone=config.web_unlocker_zone,
        serp_zone=config.serp_zone,
        browser_zone=config.browser_zone,
        fetch_timeout=budget.fetch_timeout,
        serp_timeout=budget.serp_timeout,
        interaction_timeout=budget.per_interaction_timeout,
    )


def create_adapter(
    config: AdapterConfig,
    unlocker: UnlockerClient,
    budget: BudgetConfig | None = None,
) -> SourceAdapter:
    """Create a source adapter from config.

    Uses explicit type matching rather than getattr.
    """
    budget = budget or BudgetConfig()
    if isinstance(config, SerpAdapterConfig):
        return SerpAdapter(
            unlocker,
            engine=config.engine,
            max_results=config.max_results,
            timeout=budget.serp_timeout,
        )
    if isinstance(config, SiteSearchAdapterConfig):
        return SiteSearchAdapter(
            unlocker,
            cluster=config.cluster,
            sites=config.sites,
            max_results=config.max_results,
            site_timeout=budget.site_timeout,
        )
    if isinstance(config, SocialAdapterConfig):
        return SocialPlatformAdapter(
            unlocker,
            platform=config.platform,
            max_results=config.max_results,
            timeout=budget.adapter_timeout,
            placeholder_on_failure=config.placeholder_on_failure,
        )
    if isinstance(config, XAdapterConfig):
        return XAdapter(max_results=config.max_results, timeout=budget.adapter_timeout)
    if isinstance(config, ExaAdapterConfig):
        return ExaAdapter(max_results=config.max_results)
    if isinstance(config, GNewsAdapterConfig):
        return GNewsAdapter(
            lang=config.lang,
            max_results=config.max_results,
            timeout=budget.adapter_timeout,
        )
    if isinstance(config, ClaudeSearchAdapterConfig):
        return ClaudeSearchAdapter(
            model=config.model,
            max_searches=config.max_searches,
            max_results=config.max_results,
        )
    # Type checker ensures this is exhaustive
    msg = f"Unknown adapter config type: {type(config)}"
    raise ValueError(msg)


def create_analyzer(config: ClaudeAnalyzerConfig | RuleAnalyzerConfig) -> AIAnalyzer | None:
    """Create the AI analyzer from config; None means rule-based verdicts only."""
    if isinstance(config, ClaudeAnalyzerConfig):
        return ClaudeAnalyzer(model=config.model, max_tokens=config.max_tokens)
    if isinstance(config, RuleAnalyzerConfig):
        return None
    msg = f"Unknown analyzer config type: {type(config)}"
    raise ValueError(msg)


def create_synthesizer(config: ClaimCheckConfig) -> Synthesizer:
    sample_size = 15
    if isinstance(config.analyzer, ClaudeAnalyzerConfig):
        sample_size = config.analyzer.sample_size
    return Synthesizer(
        create_analyzer(config.analyzer),
        analysis_timeout=config.budget.analysis_timeout,
        sample_size=sample_size,
    )


def phase_budgets(budget: BudgetConfig) -> PhaseBudgets:
    return PhaseBudgets(
        preprocess=budget.preprocess_timeout,
        discovery=budget.discovery_timeout,
        access=budget.access_timeout,
        interaction=budget.interaction_timeout,
        analysis=budget.analysis_timeout,
        total=budget.total_timeout,
        min_start=budget.min_start,
    )


def create_pipeline(
    config: ClaimCheckConfig,
    unlocker: UnlockerClient,
    synthesizer: Synthesizer,
    run_logger: RunLogger | None = None,
) -> ComprehensivePipeline:
    """Create the comprehensive pipeline from config."""
    budget = config.budget
    adapters = [create_adapter(a, unlocker, budget) for a in config.adapters]
    discovery = DiscoveryFanOut(
        adapters,
        adapter_timeout=budget.adapter_timeout,
        max_candidates=budget.max_candidates,
        run_logger=run_logger,
    )
    engine = AccessExtractionEngine(
        unlocker,
        max_candidates=budget.max_extraction_candidates,
        fetch_timeout=budget.fetch_timeout,
    )
    interaction = None
    if config.interaction.enabled:
        interaction = DynamicInteractionStage(
            unlocker, interaction_timeout=budget.per_interaction_timeout
        )
    return ComprehensivePipeline(
        discovery,
        engine,
        interaction,
        synthesizer,
        budgets=phase_budgets(budget),
        run_logger=run_logger,
    )


def _step_budget(timeout: float) -> BudgetConfig:
    return BudgetConfig(serp_timeout=timeout, site_timeout=timeout, adapter_timeout=timeout)


def create_simplified_pipeline(
    config: SimplifiedConfig,
    unlocker: UnlockerClient,
    synthesizer: Synthesizer,
) -> SimplifiedPipeline:
    """Create the simplified fallback pipeline from config."""
    steps = [
        SimplifiedStep(
            adapter=create_adapter(s.adapter, unlocker, _step_budget(s.timeout)),
            timeout=s.timeout,
            take=s.take,
        )
        for s in config.steps
    ]
    return SimplifiedPipeline(
        steps,
        synthesizer,
        max_candidates=config.max_candidates,
        analysis_timeout=config.analysis_timeout,
    )


def create_from_config(
    config: ClaimCheckConfig,
    *,
    store: RecordStore | None = None,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
) -> tuple[JobAdmission, RunLogger | None]:
    """Create the complete job admission layer from root config.

    Args:
        config: Root configuration.
        store: Persistence collaborator (defaults to an in-memory store).
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.

    Returns:
        Tuple of (job admission, run_logger).
        run_logger is None if logging is disabled.
    """
    log_enabled = log_override if log_override is not None else config.logging.enabled
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)

    run_logger: RunLogger | None = None
    if log_enabled:
        run_logger = RunLogger(log_dir=log_dir, enabled=True)

    unlocker = create_unlocker(config.unlocker, config.budget)
    synthesizer = create_synthesizer(config)
    processor = FactCheckProcessor(
        create_pipeline(config, unlocker, synthesizer, run_logger=run_logger),
        create_simplified_pipeline(config.simplified, unlocker, synthesizer),
        store or InMemoryRecordStore(),
        run_logger=run_logger,
    )
    admission = JobAdmission(
        processor,
        slots=config.admission.slots,
        dedup_window=config.admission.dedup_window,
        max_runtime=config.admission.max_runtime,
        retain_completed=config.admission.retain_completed,
        retain_failed=config.admission.retain_failed,
    )
    return (admission, run_logger)
