"""TOTP engine: HOTP/TOTP computation per RFC 4226 and RFC 6238.

This module defines:
- HashAlgorithm: closed set of supported HMAC digests
- OtpResult: code plus remaining validity for the current window
- decode_secret / hotp / generate: pure functions over explicit inputs

Nothing here reads configuration, the clock or any module-level mutable
state, so every function is safe to call concurrently.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import secrets
import struct
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

BASE32_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
MIN_DIGITS = 1
MAX_DIGITS = 10


class TotpError(Exception):
    """Base class for engine failures."""


class InvalidSecret(TotpError):
    """The shared secret is malformed or decodes to nothing."""


class UnsupportedAlgorithm(TotpError):
    """The requested digest is not one of the supported algorithms."""


class InvalidParameters(TotpError):
    """Digits, period or time fall outside what the algorithm accepts."""


class HashAlgorithm(str, Enum):
    """HMAC digests accepted by the engine."""

    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"

    @property
    def digestmod(self) -> Callable[..., Any]:
        """hashlib constructor backing this algorithm."""

        digest_map: dict[HashAlgorithm, Callable[..., Any]] = {
            HashAlgorithm.SHA1: hashlib.sha1,
            HashAlgorithm.SHA256: hashlib.sha256,
            HashAlgorithm.SHA512: hashlib.sha512,
        }
        return digest_map[self]

    @classmethod
    def from_label(cls, label: str) -> HashAlgorithm:
        """Map an external label such as ``SHA-256`` to a member.

        Raises:
            UnsupportedAlgorithm: if the label names no supported digest.
        """
        normalized = label.replace("-", "").strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            raise UnsupportedAlgorithm(
                f"Unsupported algorithm: {label!r}"
            ) from None


@dataclass(frozen=True)
class OtpResult:
    """A generated code and the seconds left before it rolls over."""

    code: str
    remaining: int


def decode_secret(encoded: str) -> bytes:
    """Decode a Base32 secret, tolerating missing padding.

    Spaces are ignored and decoding is case-insensitive.

    Raises:
        InvalidSecret: if the string is not Base32 or decodes to no bytes.
    """
    value = encoded.strip().replace(" ", "").upper().rstrip("=")
    # Add required padding for base32 if missing
    missing = (-len(value)) % 8
    if missing:
        value += "=" * missing
    try:
        secret = base64.b32decode(value, casefold=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidSecret("Secret is not a valid Base32 string") from exc
    if not secret:
        raise InvalidSecret("Secret decodes to an empty byte string")
    return secret


def random_base32(length: int = 16) -> str:
    """Return a random Base32 key of ``length`` characters."""
    if length <= 0:
        raise InvalidParameters("Key length must be positive")
    return "".join(secrets.choice(BASE32_ALPHABET) for _ in range(length))


def _check_period(period: int) -> None:
    if period <= 0:
        raise InvalidParameters(f"Period must be positive, got {period}")


def time_counter(now: float, period: int) -> int:
    """Return the moving factor ``floor(now / period)``."""
    _check_period(period)
    if now < 0:
        raise InvalidParameters(f"Time must not be negative, got {now}")
    return int(now) // period


def remaining_seconds(now: float, period: int) -> int:
    """Seconds left in the current window, in ``[1, period]``.

    A window that has just started reports the full period, never 0.
    """
    _check_period(period)
    return period - (int(now) % period)


def hotp(
    secret: bytes,
    counter: int,
    digits: int,
    algorithm: HashAlgorithm = HashAlgorithm.SHA1,
) -> str:
    """Generate an HOTP code.

    Args:
        secret: Raw shared secret bytes.
        counter: Moving factor (8-byte unsigned integer).
        digits: Number of digits in the output code.
        algorithm: HMAC digest to use.
    """
    if not secret:
        raise InvalidSecret("Secret must not be empty")
    if not isinstance(algorithm, HashAlgorithm):
        raise UnsupportedAlgorithm(f"Unsupported algorithm: {algorithm!r}")
    if not MIN_DIGITS <= digits <= MAX_DIGITS:
        raise InvalidParameters(
            f"Digits must be between {MIN_DIGITS} and {MAX_DIGITS}, got {digits}"
        )
    if not 0 <= counter < 2**64:
        raise InvalidParameters(f"Counter out of range: {counter}")

    counter_bytes = struct.pack(">Q", counter)
    hmac_digest = hmac.new(secret, counter_bytes, algorithm.digestmod).digest()
    offset = hmac_digest[-1] & 0x0F
    (code,) = struct.unpack(">I", hmac_digest[offset : offset + 4])
    hotp_value = (code & 0x7FFFFFFF) % (10**digits)
    return str(hotp_value).zfill(digits)


def generate(
    secret: bytes,
    digits: int,
    period: int,
    algorithm: HashAlgorithm,
    now: float,
) -> OtpResult:
    """Compute the TOTP code valid at ``now`` and its remaining lifetime.

    Args:
        secret: Raw shared secret bytes.
        digits: Number of digits in the output code.
        period: Time step in seconds.
        algorithm: HMAC digest to use.
        now: Unix timestamp in seconds.
    """
    counter = time_counter(now, period)
    return OtpResult(
        code=hotp(secret, counter, digits, algorithm),
        remaining=remaining_seconds(now, period),
    )
