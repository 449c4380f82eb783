"""Fact-check pipelines and their time budget."""

from claimcheck.pipeline.base import (
    PhaseBudgets,
    Pipeline,
    PipelineState,
    ProgressCallback,
    Recovery,
)
from claimcheck.pipeline.budget import TimeBudget, run_phase
from claimcheck.pipeline.comprehensive import ComprehensivePipeline, PipelineRun
from claimcheck.pipeline.simplified import SimplifiedPipeline, SimplifiedStep, degraded_result

__all__ = [
    "ComprehensivePipeline",
    "PhaseBudgets",
    "Pipeline",
    "PipelineRun",
    "PipelineState",
    "ProgressCallback",
    "Recovery",
    "SimplifiedPipeline",
    "SimplifiedStep",
    "TimeBudget",
    "degraded_result",
    "run_phase",
]
