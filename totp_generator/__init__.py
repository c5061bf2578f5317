"""
TOTP Generator Service Package.

This package computes RFC 6238 time-based one-time passwords and exposes
them over HTTP, a command line and an MCP tool server.
"""

from __future__ import annotations

from dotenv import load_dotenv

# Pick up LOG_LEVEL, CORS_ALLOW_ORIGINS and friends from a local .env file.
load_dotenv()

__version__ = "0.1.0"
__all__: list[str] = []
