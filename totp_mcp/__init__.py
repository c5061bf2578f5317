"""TOTP MCP package.

Provides a minimal MCP server that returns the current TOTP code for a
caller-supplied Base32 secret.
"""

__all__ = [
    "mcp_server",
]
