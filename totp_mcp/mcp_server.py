from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional, Union

from fastmcp import FastMCP
from pydantic import BaseModel, Field

from totp_generator.api import generate_for_query
from totp_generator.models import MIN_KEY_LENGTH, InvalidRequest, parse_query


logger = logging.getLogger(__name__)

mcp = FastMCP("TOTP MCP Server")


class GenerateTotpCodeRequest(BaseModel):
    """Request to generate a TOTP code.

    Attributes:
        key: Base32-encoded shared secret (at least 16 characters).
        digits: Number of digits in the code, 6 to 8. Defaults to 6.
        period: The time step in seconds, 10 to 60. Defaults to 30.
        algorithm: One of SHA-1, SHA-256, SHA-512. Defaults to SHA-1.
    """

    key: str = Field(..., min_length=MIN_KEY_LENGTH)
    digits: Optional[Union[int, str]] = Field(default=None)
    period: Optional[Union[int, str]] = Field(default=None)
    algorithm: Optional[str] = Field(default=None)


def _totp_response(
    request: GenerateTotpCodeRequest, now: Optional[int] = None
) -> Dict[str, Any]:
    """Validate tool arguments and compute the code.

    Args:
        request: Tool arguments.
        now: Optional unix timestamp override for testing.

    Raises:
        ValueError: if the arguments fail validation.
    """
    try:
        query = parse_query(request.model_dump())
    except InvalidRequest as exc:
        logger.info(
            "totp_mcp.invalid_request", extra={"fields": sorted(exc.details)}
        )
        details = "; ".join(f"{k}: {v}" for k, v in exc.details.items())
        raise ValueError(f"Invalid request parameters: {details}") from exc
    unix_time = int(now if now is not None else time.time())
    return generate_for_query(query, now=unix_time).model_dump()


def generate_totp_code(request: GenerateTotpCodeRequest) -> Dict[str, Any]:
    """Return the current TOTP code and its remaining seconds."""
    return _totp_response(request)


mcp.tool(
    name="generate_totp_code",
    description="Generate the current TOTP code for a Base32 secret.",
)(generate_totp_code)


if __name__ == "__main__":
    mcp.run(transport="stdio")
