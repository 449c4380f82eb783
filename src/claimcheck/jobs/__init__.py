"""Job admission layer: validation, duplicate suppression, worker slots."""

from claimcheck.jobs.admission import JobAdmission
from claimcheck.jobs.claims import claim_hash, normalize_claim, validate_claim
from claimcheck.jobs.processor import FactCheckProcessor, JobProcessor, job_progress
from claimcheck.jobs.registry import SubmissionRegistry

__all__ = [
    "FactCheckProcessor",
    "JobAdmission",
    "JobProcessor",
    "SubmissionRegistry",
    "claim_hash",
    "job_progress",
    "normalize_claim",
    "validate_claim",
]
