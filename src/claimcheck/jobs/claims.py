"""Claim validation and normalization for job admission."""

import hashlib
import re

from claimcheck.errors import ClaimValidationError

MIN_CLAIM_LENGTH = 10
MAX_CLAIM_LENGTH = 1000


def validate_claim(claim: object) -> str:
    """Return the stripped claim, or raise if it cannot be fact-checked.

    Raises:
        ClaimValidationError: If the claim is not a string of 10-1000
            characters after stripping surrounding whitespace.
    """
    if not isinstance(claim, str):
        raise ClaimValidationError("Claim must be a string")
    stripped = claim.strip()
    if len(stripped) < MIN_CLAIM_LENGTH:
        raise ClaimValidationError(f"Claim must be at least {MIN_CLAIM_LENGTH} characters")
    if len(stripped) > MAX_CLAIM_LENGTH:
        raise ClaimValidationError(f"Claim must be at most {MAX_CLAIM_LENGTH} characters")
    return stripped


def normalize_claim(claim: str) -> str:
    return re.sub(r"\s+", " ", claim.strip().lower())


def claim_hash(claim: str) -> str:
    """SHA-256 of the lowercased, whitespace-collapsed claim."""
    return hashlib.sha256(normalize_claim(claim).encode("utf-8")).hexdigest()
