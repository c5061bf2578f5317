"""Tests for request validation."""

from __future__ import annotations

import pytest

from totp_generator.engine import HashAlgorithm, OtpResult
from totp_generator.models import (
    AlgorithmLabel,
    GenerateTotpQuery,
    GenerateTotpResponse,
    InvalidRequest,
    parse_query,
)

KEY = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


def test_defaults_applied() -> None:
    query = parse_query({"key": KEY, "digits": None, "period": None, "algorithm": None})
    assert query.digits == 6
    assert query.period == 30
    assert query.algorithm is AlgorithmLabel.SHA1
    assert query.hash_algorithm is HashAlgorithm.SHA1
    assert query.secret == b"12345678901234567890"


def test_string_values_parsed() -> None:
    query = parse_query(
        {"key": KEY, "digits": "8", "period": "60", "algorithm": "SHA-512"}
    )
    assert query.digits == 8
    assert query.period == 60
    assert query.hash_algorithm is HashAlgorithm.SHA512


@pytest.mark.parametrize(
    "label, expected",
    [
        ("SHA-1", HashAlgorithm.SHA1),
        ("SHA-256", HashAlgorithm.SHA256),
        ("SHA-512", HashAlgorithm.SHA512),
    ],
)
def test_algorithm_label_mapping(label: str, expected: HashAlgorithm) -> None:
    assert AlgorithmLabel(label).to_hash_algorithm() is expected


def test_short_key_rejected() -> None:
    with pytest.raises(InvalidRequest) as exc_info:
        parse_query({"key": "GEZDGNBVGY"})
    assert list(exc_info.value.details) == ["key"]
    assert "16" in exc_info.value.details["key"]


def test_missing_key_rejected() -> None:
    with pytest.raises(InvalidRequest) as exc_info:
        parse_query({})
    assert "key" in exc_info.value.details


def test_non_base32_key_rejected() -> None:
    with pytest.raises(InvalidRequest) as exc_info:
        parse_query({"key": "this-is-not-base32!"})
    assert exc_info.value.details["key"] == "Key must be a valid Base32 string."


@pytest.mark.parametrize("field, value", [("digits", "5"), ("digits", "9"), ("period", "9"), ("period", "61")])
def test_out_of_range_rejected(field: str, value: str) -> None:
    with pytest.raises(InvalidRequest) as exc_info:
        parse_query({"key": KEY, field: value})
    assert field in exc_info.value.details


@pytest.mark.parametrize("value", ["six", "-6", "6.0", " 6", ""])
def test_digits_must_be_unsigned_integer(value: str) -> None:
    with pytest.raises(InvalidRequest) as exc_info:
        parse_query({"key": KEY, "digits": value})
    assert exc_info.value.details["digits"] == "Must be an unsigned integer."


@pytest.mark.parametrize("value", ["MD5", "sha1", "SHA-384"])
def test_unknown_algorithm_rejected(value: str) -> None:
    with pytest.raises(InvalidRequest) as exc_info:
        parse_query({"key": KEY, "algorithm": value})
    assert "algorithm" in exc_info.value.details


def test_multiple_field_errors_reported() -> None:
    with pytest.raises(InvalidRequest) as exc_info:
        parse_query({"key": "short", "digits": "99", "algorithm": "MD5"})
    assert set(exc_info.value.details) == {"key", "digits", "algorithm"}


def test_query_model_direct() -> None:
    query = GenerateTotpQuery(key=KEY, digits=7)
    assert query.digits == 7


def test_response_from_result() -> None:
    response = GenerateTotpResponse.from_result(OtpResult(code="012345", remaining=4))
    assert response.model_dump() == {"otp": "012345", "remaining": 4}


def test_overlong_digits_rejected_with_field_message() -> None:
    with pytest.raises(InvalidRequest) as exc_info:
        parse_query({"key": KEY, "digits": "9" * 5000})
    assert exc_info.value.details["digits"] == "Must be an unsigned integer."
