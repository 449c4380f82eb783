"""Tests for configuration loading and factory functions."""

from __future__ import annotations

from pathlib import Path
from tempfile import NamedTemporaryFile

import pytest
from pydantic import ValidationError

from claimcheck.access import UnlockerClient
from claimcheck.analyzer import ClaudeAnalyzer
from claimcheck.config import (
    AdmissionConfig,
    BudgetConfig,
    ClaimCheckConfig,
    ClaudeAnalyzerConfig,
    ClaudeSearchAdapterConfig,
    ExaAdapterConfig,
    GNewsAdapterConfig,
    RuleAnalyzerConfig,
    SerpAdapterConfig,
    SiteSearchAdapterConfig,
    SocialAdapterConfig,
    XAdapterConfig,
    create_adapter,
    create_analyzer,
    create_from_config,
    create_pipeline,
    create_simplified_pipeline,
    get_default_config_path,
    load_config,
)
from claimcheck.config.factory import phase_budgets
from claimcheck.jobs import JobAdmission
from claimcheck.pipeline import ComprehensivePipeline, SimplifiedPipeline
from claimcheck.run_logger import RunLogger
from claimcheck.search import (
    ClaudeSearchAdapter,
    ExaAdapter,
    GNewsAdapter,
    SerpAdapter,
    SiteSearchAdapter,
    SocialPlatformAdapter,
    XAdapter,
)
from claimcheck.synthesis import Synthesizer

CONFIGS_DIR = Path(__file__).parent.parent / "configs"


@pytest.fixture(autouse=True)
def credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BRIGHT_DATA_API_TOKEN", "test-token")
    monkeypatch.setenv("CLAUDE_API_KEY", "test-key")
    monkeypatch.setenv("TWITTER_BEARER_TOKEN", "test-bearer")
    monkeypatch.setenv("EXA_API_KEY", "test-exa")
    monkeypatch.setenv("GNEWS_API_KEY", "test-gnews")


def _load(yaml_content: str) -> ClaimCheckConfig:
    with NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        f.write(yaml_content)
        f.flush()
        return load_config(Path(f.name))


class TestConfigModels:
    """Tests for Pydantic config models."""

    def test_root_defaults(self) -> None:
        """Should build a usable config with no input."""
        config = ClaimCheckConfig()
        assert config.adapters == []
        assert isinstance(config.analyzer, ClaudeAnalyzerConfig)
        assert config.admission.slots == 2
        assert config.admission.dedup_window == 30
        assert config.admission.max_runtime == 330
        assert config.admission.retain_completed == 5
        assert config.admission.retain_failed == 10
        assert config.logging.enabled is False

    def test_budget_defaults(self) -> None:
        budget = BudgetConfig()
        assert budget.total_timeout == 275
        assert budget.min_start == 30
        assert budget.discovery_timeout == 90
        assert budget.access_timeout == 120

    def test_simplified_defaults(self) -> None:
        config = ClaimCheckConfig()
        steps = config.simplified.steps
        assert [s.take for s in steps] == [5, 3, 3]
        assert isinstance(steps[2].adapter, SiteSearchAdapterConfig)
        assert config.simplified.max_candidates == 10

    def test_configs_are_frozen(self) -> None:
        """Should reject mutation of a loaded config."""
        config = SerpAdapterConfig()
        with pytest.raises(ValidationError):
            config.max_results = 3  # type: ignore[misc]

    def test_retention_must_not_be_negative(self) -> None:
        with pytest.raises(ValidationError):
            AdmissionConfig(retain_failed=-1)

    def test_social_requires_platform(self) -> None:
        with pytest.raises(ValidationError):
            SocialAdapterConfig()  # type: ignore[call-arg]


class TestConfigLoader:
    """Tests for YAML config loading."""

    def test_load_adapters_by_type(self) -> None:
        """Should pick the adapter model from each entry's type field."""
        config = _load(
            """
adapters:
  - type: serp
    engine: bing
  - type: site_search
    cluster: government
  - type: social
    platform: reddit
    placeholder_on_failure: true
  - type: gnews
    lang: it
analyzer:
  type: rule
budget:
  total_timeout: 120
"""
        )

        assert isinstance(config.adapters[0], SerpAdapterConfig)
        assert config.adapters[0].engine == "bing"
        assert isinstance(config.adapters[1], SiteSearchAdapterConfig)
        assert config.adapters[1].cluster == "government"
        assert isinstance(config.adapters[2], SocialAdapterConfig)
        assert config.adapters[2].placeholder_on_failure is True
        assert isinstance(config.adapters[3], GNewsAdapterConfig)
        assert isinstance(config.analyzer, RuleAnalyzerConfig)
        assert config.budget.total_timeout == 120
        assert config.budget.discovery_timeout == 90

    def test_unknown_adapter_type_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _load("adapters:\n  - type: carrier_pigeon\n")

    def test_unknown_analyzer_type_is_rejected(self) -> None:
        """Should reject an analyzer type outside the union."""
        with pytest.raises(ValidationError):
            _load("analyzer:\n  type: oracle\n")

    def test_claude_analyzer_options(self) -> None:
        config = _load("analyzer:\n  type: claude\n  sample_size: 8\n")
        assert isinstance(config.analyzer, ClaudeAnalyzerConfig)
        assert config.analyzer.sample_size == 8

    def test_empty_file_gives_defaults(self) -> None:
        assert _load("") == ClaimCheckConfig()

    def test_get_default_config_path(self) -> None:
        path = get_default_config_path()
        assert path.name == "default.yaml"
        assert "configs" in str(path)

    @pytest.mark.parametrize("name", ["default.yaml", "api_sources.yaml", "rules_only.yaml"])
    def test_shipped_configs_load(self, name: str) -> None:
        """Should load every config shipped in configs/."""
        config = load_config(CONFIGS_DIR / name)
        assert isinstance(config, ClaimCheckConfig)
        assert config.adapters


class TestFactoryFunctions:
    """Tests for component factory functions."""

    @pytest.fixture
    def unlocker(self) -> UnlockerClient:
        return UnlockerClient()

    @pytest.mark.parametrize(
        ("config", "expected"),
        [
            (SerpAdapterConfig(engine="google_news"), SerpAdapter),
            (SiteSearchAdapterConfig(cluster="fact_check"), SiteSearchAdapter),
            (SocialAdapterConfig(platform="youtube"), SocialPlatformAdapter),
            (XAdapterConfig(), XAdapter),
            (ExaAdapterConfig(), ExaAdapter),
            (GNewsAdapterConfig(lang="it"), GNewsAdapter),
            (ClaudeSearchAdapterConfig(), ClaudeSearchAdapter),
        ],
    )
    def test_create_adapter(self, unlocker: UnlockerClient, config: object, expected: type) -> None:
        assert isinstance(create_adapter(config, unlocker), expected)  # type: ignore[arg-type]

    def test_create_adapter_unknown(self, unlocker: UnlockerClient) -> None:
        """Should reject a config that is not an adapter config."""
        with pytest.raises(ValueError, match="Unknown adapter config type"):
            create_adapter(BudgetConfig(), unlocker)  # type: ignore[arg-type]

    def test_create_analyzer(self) -> None:
        assert isinstance(create_analyzer(ClaudeAnalyzerConfig()), ClaudeAnalyzer)
        assert create_analyzer(RuleAnalyzerConfig()) is None

    def test_phase_budgets(self) -> None:
        """Should carry budget settings into the phase budgets."""
        budgets = phase_budgets(BudgetConfig(total_timeout=100, analysis_timeout=5))
        assert budgets.total == 100
        assert budgets.analysis == 5
        assert budgets.min_start == 30

    def test_create_pipeline(self, unlocker: UnlockerClient) -> None:
        config = ClaimCheckConfig(adapters=[SerpAdapterConfig(), SocialAdapterConfig(platform="tiktok")])
        pipeline = create_pipeline(config, unlocker, Synthesizer(None))
        assert isinstance(pipeline, ComprehensivePipeline)

    def test_create_simplified_pipeline(self, unlocker: UnlockerClient) -> None:
        config = ClaimCheckConfig()
        pipeline = create_simplified_pipeline(config.simplified, unlocker, Synthesizer(None))
        assert isinstance(pipeline, SimplifiedPipeline)

    def test_create_from_config(self) -> None:
        config = ClaimCheckConfig(adapters=[SerpAdapterConfig()], analyzer=RuleAnalyzerConfig())
        admission, run_logger = create_from_config(config)
        assert isinstance(admission, JobAdmission)
        assert run_logger is None

    def test_create_from_config_with_logging(self, tmp_path: Path) -> None:
        config = ClaimCheckConfig(adapters=[SerpAdapterConfig()])
        admission, run_logger = create_from_config(
            config, log_override=True, log_dir_override=str(tmp_path)
        )
        assert isinstance(admission, JobAdmission)
        assert isinstance(run_logger, RunLogger)

    def test_missing_unlocker_token(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should fail fast without a Bright Data token."""
        monkeypatch.delenv("BRIGHT_DATA_API_TOKEN")
        with pytest.raises(ValueError, match="BRIGHT_DATA_API_TOKEN"):
            create_from_config(ClaimCheckConfig())
