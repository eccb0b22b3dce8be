"""nscli command-line entry point using Click."""

from __future__ import annotations

import logging
import sys

import click

from .client import NightscoutClient
from .exceptions import NightscoutCliError, UserError
from .fetch import fetch_display_data
from .options import parse_options, usage_text
from .render import render_display_data
from .utils import env_api_secret, env_debug, env_site_url, env_timeout

# Module logger
logger = logging.getLogger("nscli")


def setup_logging(debug: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if debug else logging.WARNING
    logger.setLevel(level)
    if any(
        isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stderr
        for h in logger.handlers
    ):
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)


def print_error(message: str) -> None:
    """Print a one-line error to stderr."""
    click.echo(click.style("error: ", fg="red", bold=True) + message, err=True)


def run(tokens: tuple[str, ...]) -> None:
    """Parse, fetch and render for one invocation."""
    plan = parse_options(tokens, env_site_url())
    if plan.show_help:
        click.echo(usage_text())
        return

    with NightscoutClient(
        plan.site_url, api_secret=env_api_secret(), timeout=env_timeout()
    ) as client:
        data = fetch_display_data(plan, client)
    render_display_data(data)


@click.command(
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
    add_help_option=False,
)
@click.argument("tokens", nargs=-1, type=click.UNPROCESSED)
def cli(tokens: tuple[str, ...]):
    """Display recent Nightscout entries, treatments, and device statuses."""
    setup_logging(debug=env_debug())
    try:
        run(tokens)
    except UserError as e:
        print_error(str(e))
        sys.exit(e.rc)
    except NightscoutCliError as e:
        print_error(str(e))
        sys.exit(getattr(e, "rc", 1))


def main():
    """Main entry point for the CLI."""
    try:
        cli(prog_name="ns")
    except KeyboardInterrupt:
        print_error("interrupted")
        sys.exit(130)
