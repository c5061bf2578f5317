"""FastAPI application exposing the TOTP generator.

Routes:
- GET /generate-totp: current code and remaining seconds for a secret
- GET /healthz: liveness probe
"""

from __future__ import annotations

import logging
import os
import time

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import engine
from .config import get_settings
from .models import (
    ErrorResponse,
    GenerateTotpQuery,
    GenerateTotpResponse,
    InvalidRequest,
    parse_query,
)

logger = logging.getLogger(__name__)


def generate_for_query(query: GenerateTotpQuery, now: float) -> GenerateTotpResponse:
    """Run the engine for validated parameters at ``now``."""
    result = engine.generate(
        secret=query.secret,
        digits=query.digits,
        period=query.period,
        algorithm=query.hash_algorithm,
        now=now,
    )
    return GenerateTotpResponse.from_result(result)


def create_app() -> FastAPI:
    """Build the ASGI application from current settings."""
    settings = get_settings()
    application = FastAPI(
        title="TOTP Generator API",
        description="Generates time-based one-time passwords (RFC 6238).",
        docs_url=settings.docs_url,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.get(
        "/generate-totp",
        tags=["TOTP"],
        summary="Generate a TOTP code",
        description=(
            "Generates a Time-based One-Time Password (TOTP) based on a provided "
            "secret key, number of digits, time period and digest algorithm."
        ),
        response_model=GenerateTotpResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Invalid request parameters"},
            500: {"model": ErrorResponse, "description": "Internal Server Error"},
        },
    )
    def generate_totp(
        key: str | None = Query(
            default=None,
            description="Base32 secret key for generating TOTP (at least 16 characters).",
        ),
        digits: str | None = Query(
            default=None, description="Number of digits in the OTP (6 to 8)."
        ),
        period: str | None = Query(
            default=None,
            description="Time period in seconds for OTP expiration (10 to 60).",
        ),
        algorithm: str | None = Query(
            default=None, description="Digest algorithm: SHA-1, SHA-256 or SHA-512."
        ),
    ) -> GenerateTotpResponse | JSONResponse:
        try:
            query = parse_query(
                {"key": key, "digits": digits, "period": period, "algorithm": algorithm}
            )
        except InvalidRequest as exc:
            logger.info(
                "totp.generate.invalid_request",
                extra={"fields": sorted(exc.details)},
            )
            return JSONResponse(
                status_code=400,
                content={"error": "Invalid request parameters", "details": exc.details},
            )

        try:
            return generate_for_query(query, now=int(time.time()))
        except Exception:
            logger.exception("totp.generate.error")
            return JSONResponse(
                status_code=500, content={"error": "Internal Server Error"}
            )

    @application.get("/healthz")
    def healthz() -> dict[str, str]:
        return {"status": "ok", "env": get_settings().environment}

    return application


app = create_app()

# Lambda handler (via Mangum) when running inside AWS Lambda
if os.getenv("AWS_LAMBDA_FUNCTION_NAME"):
    # Lazy import to avoid hard dependency outside Lambda runtime
    from mangum import Mangum  # type: ignore

    handler = Mangum(app)
