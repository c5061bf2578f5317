"""Request and response models for TOTP generation.

Inbound parameters arrive as strings (query parameters, CLI options, MCP
tool arguments). ``GenerateTotpQuery`` validates and normalises them into
the engine's input contract; ``parse_query`` turns a validation failure into
``InvalidRequest`` with one message per field.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator

from .engine import HashAlgorithm, InvalidSecret, OtpResult, decode_secret

MIN_KEY_LENGTH = 16
_UNSIGNED_INT = re.compile(r"[0-9]+")


class AlgorithmLabel(str, Enum):
    """Algorithm names as callers spell them."""

    SHA1 = "SHA-1"
    SHA256 = "SHA-256"
    SHA512 = "SHA-512"

    def to_hash_algorithm(self) -> HashAlgorithm:
        """Map to the engine digest (``SHA-256`` -> ``sha256``)."""

        return HashAlgorithm.from_label(self.value)


class InvalidRequest(ValueError):
    """Inbound parameters failed validation.

    Attributes:
        details: Field name to human-readable message.
    """

    def __init__(self, details: dict[str, str]) -> None:
        super().__init__("Invalid request parameters")
        self.details = details


class GenerateTotpQuery(BaseModel):
    """Validated parameters for one generation call."""

    key: str = Field(
        ...,
        min_length=MIN_KEY_LENGTH,
        description="Base32 secret key for generating TOTP (at least 16 characters).",
    )
    digits: int = Field(
        default=6, ge=6, le=8, description="Number of digits in the OTP (6 to 8)."
    )
    period: int = Field(
        default=30,
        ge=10,
        le=60,
        description="Time period in seconds for OTP expiration (10 to 60).",
    )
    algorithm: AlgorithmLabel = Field(
        default=AlgorithmLabel.SHA1,
        description="HMAC digest algorithm (SHA-1, SHA-256 or SHA-512).",
    )

    @field_validator("digits", "period", mode="before")
    @classmethod
    def _unsigned_integer(cls, value: Any) -> Any:
        if isinstance(value, str):
            if not _UNSIGNED_INT.fullmatch(value):
                raise ValueError("Must be an unsigned integer.")
            try:
                return int(value)
            except ValueError:
                # int() refuses strings beyond the interpreter digit limit
                raise ValueError("Must be an unsigned integer.") from None
        return value

    @field_validator("key")
    @classmethod
    def _base32_key(cls, value: str) -> str:
        try:
            decode_secret(value)
        except InvalidSecret as exc:
            raise ValueError("Key must be a valid Base32 string.") from exc
        return value

    @property
    def hash_algorithm(self) -> HashAlgorithm:
        return self.algorithm.to_hash_algorithm()

    @property
    def secret(self) -> bytes:
        """Decoded secret bytes; computed on access, never stored."""

        return decode_secret(self.key)


class GenerateTotpResponse(BaseModel):
    """Successful generation result."""

    otp: str
    remaining: int

    @classmethod
    def from_result(cls, result: OtpResult) -> GenerateTotpResponse:
        return cls(otp=result.code, remaining=result.remaining)


class ErrorResponse(BaseModel):
    """Error body returned for 400 and 500 responses."""

    error: str
    details: dict[str, str] | None = None


def _error_details(exc: ValidationError) -> dict[str, str]:
    """Collapse pydantic errors into one message per top-level field."""
    details: dict[str, str] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err.get("loc") else "__root__"
        message = str(err.get("msg", "Invalid value"))
        # Strip pydantic's "Value error, " prefix for custom validators
        if err.get("type") == "value_error" and message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        details.setdefault(field, message)
    return details


def parse_query(params: Mapping[str, Any]) -> GenerateTotpQuery:
    """Validate raw string parameters.

    ``None`` values are treated as absent so defaults apply.

    Raises:
        InvalidRequest: if any parameter is missing, malformed or out of range.
    """
    data = {name: value for name, value in params.items() if value is not None}
    try:
        return GenerateTotpQuery.model_validate(data)
    except ValidationError as exc:
        raise InvalidRequest(_error_details(exc)) from exc
