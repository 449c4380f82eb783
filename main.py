#!/usr/bin/env python
"""CLI for claimcheck fact-checking."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, ValidationError, field_validator

from claimcheck.config import create_from_config, get_default_config_path, load_config
from claimcheck.data import FactCheckResult, JobState
from claimcheck.errors import ClaimValidationError

logger = logging.getLogger(__name__)

POLL_INTERVAL = 1.0


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    claim: str
    config: Path
    log: bool = False
    log_dir: str = "logs"

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v


def print_result(result: FactCheckResult) -> None:
    """Log a human-readable summary of a fact-check result."""
    logger.info(f"\nVerdict: {result.verdict} ({result.confidence}% confidence)")
    logger.info(f"Summary: {result.summary}")
    logger.info(f"Pipeline: {result.pipeline}, {result.processing_time:.1f}s")

    logger.info("\n--- Evidence ---")
    logger.info(f"Supporting: {len(result.evidence.supporting)}")
    logger.info(f"Contradicting: {len(result.evidence.contradicting)}")
    logger.info(f"Neutral: {len(result.evidence.neutral)}")
    for i, item in enumerate(result.all_evidence()[:10], 1):
        logger.info(f"{i}. {item.title}")
        logger.info(f"   Source: {item.source_name} (credibility {item.credibility_score:.1f})")
        logger.info(f"   URL: {item.url}")

    logger.info("\n--- Risk ---")
    logger.info(f"Level: {result.risk_assessment.level}")
    for factor in result.risk_assessment.factors:
        logger.info(f"- {factor}")
    for recommendation in result.risk_assessment.recommendations:
        logger.info(f"> {recommendation}")


async def run(args: CLIArgs) -> int:
    """Submit the claim, follow its progress and print the result.

    Args:
        args: Validated CLI arguments.

    Returns:
        Process exit code.
    """
    config = load_config(args.config)
    admission, run_logger = create_from_config(
        config,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir if args.log_dir != "logs" else None,
    )

    logger.info(f"Checking claim: {args.claim}")
    logger.info(f"Config: {args.config}")

    try:
        job_id = await admission.submit(args.claim)
        last_progress = -1
        while True:
            status = admission.status(job_id)
            if status.progress != last_progress:
                logger.info(f"[{status.state}] {status.progress}%")
                last_progress = status.progress
            if status.state in (JobState.COMPLETED, JobState.FAILED):
                break
            await asyncio.sleep(POLL_INTERVAL)
    finally:
        await admission.shutdown()

    if status.state == JobState.FAILED or status.result is None:
        logger.error(f"Fact-check failed: {status.error}")
        return 1

    print_result(status.result)

    if run_logger and run_logger.last_log_path:
        logger.info(f"\nRun log written to: {run_logger.last_log_path}")
    return 0


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Fact-check a claim against many sources.")
    parser.add_argument(
        "claim",
        help="Claim to fact-check (10-1000 characters)",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: configs/default.yaml)",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Enable per-phase run logging to JSON file",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for log files (default: logs/)",
    )

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()
    config_path: Path = ns.config if ns.config else get_default_config_path()

    try:
        args = CLIArgs(
            claim=ns.claim,
            config=config_path,
            log=ns.log,
            log_dir=ns.log_dir,
        )
    except Exception as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        sys.exit(asyncio.run(run(args)))
    except (ClaimValidationError, ValidationError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
