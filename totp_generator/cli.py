"""Click CLI for the TOTP generator."""

from __future__ import annotations

import json
import sys
import time

import click
from dotenv import load_dotenv

from .api import generate_for_query
from .config import configure_logging, get_settings
from .engine import random_base32
from .models import InvalidRequest, MIN_KEY_LENGTH, AlgorithmLabel, parse_query

load_dotenv()


@click.group()
def cli() -> None:
    """TOTP Generator CLI."""


@cli.command("code")
@click.option("--key", required=True, help="Base32 secret key")
@click.option("--digits", default=None, help="Number of digits (6-8)")
@click.option("--period", default=None, help="Time step in seconds (10-60)")
@click.option(
    "--algorithm",
    type=click.Choice([a.value for a in AlgorithmLabel], case_sensitive=False),
    default=None,
    help="HMAC digest algorithm",
)
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output raw JSON instead of formatted text",
)
def code_cmd(
    key: str,
    digits: str | None,
    period: str | None,
    algorithm: str | None,
    output_json: bool,
) -> None:
    """Print the current code for KEY."""
    try:
        query = parse_query(
            {
                "key": key,
                "digits": digits,
                "period": period,
                "algorithm": algorithm.upper() if algorithm else None,
            }
        )
    except InvalidRequest as exc:
        for field, message in exc.details.items():
            click.echo(f"{field}: {message}", err=True)
        sys.exit(2)

    response = generate_for_query(query, now=int(time.time()))
    if output_json:
        click.echo(json.dumps(response.model_dump(), indent=2))
    else:
        click.echo(f"{response.otp} ({response.remaining}s remaining)")


@cli.command("random-key")
@click.option(
    "--length",
    type=click.IntRange(min=MIN_KEY_LENGTH),
    default=MIN_KEY_LENGTH,
    show_default=True,
    help="Number of Base32 characters",
)
def random_key_cmd(length: int) -> None:
    """Print a random Base32 key."""
    click.echo(random_base32(length))


def _run_server(host: str, port: int) -> None:
    import uvicorn

    uvicorn.run("totp_generator.api:app", host=host, port=port)


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (default: HOST or 127.0.0.1)")
@click.option(
    "--port", type=int, default=None, help="Bind port (default: PORT or 8000)"
)
def serve_cmd(host: str | None, port: int | None) -> None:
    """Serve the HTTP API with uvicorn."""
    settings = get_settings()
    configure_logging()
    bind_host = host or settings.host
    bind_port = port or settings.port
    click.echo(f"Serving TOTP API on http://{bind_host}:{bind_port}")
    _run_server(bind_host, bind_port)


if __name__ == "__main__":
    cli()
