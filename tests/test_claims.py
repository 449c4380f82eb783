"""Tests for claim validation and hashing."""

import pytest

from claimcheck.errors import ClaimValidationError
from claimcheck.jobs import claim_hash, normalize_claim, validate_claim


def test_validate_strips_whitespace() -> None:
    assert validate_claim("   The earth is flat   ") == "The earth is flat"


@pytest.mark.parametrize("claim", [None, 42, ["The earth is flat"]])
def test_validate_rejects_non_strings(claim: object) -> None:
    with pytest.raises(ClaimValidationError, match="string"):
        validate_claim(claim)


def test_validate_length_bounds() -> None:
    """Should enforce the 10 to 1000 character bounds after stripping."""
    assert validate_claim("x" * 10) == "x" * 10
    assert validate_claim("x" * 1000) == "x" * 1000
    with pytest.raises(ClaimValidationError, match="at least 10"):
        validate_claim("   too short   ")
    with pytest.raises(ClaimValidationError, match="at most 1000"):
        validate_claim("x" * 1001)


def test_normalize_claim() -> None:
    assert normalize_claim("  The   Earth\tis\nFLAT ") == "the earth is flat"


def test_hash_ignores_case_and_whitespace() -> None:
    """Should hash case and spacing variants identically."""
    assert claim_hash("The Earth is flat") == claim_hash("  the earth   IS flat")
    assert claim_hash("The Earth is flat") != claim_hash("The Earth is round")
    assert len(claim_hash("The Earth is flat")) == 64
