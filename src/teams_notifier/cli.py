"""Command line interface for teams-notifier."""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone

import click
from colorama import init, Fore, Style

from teams_notifier import __version__
from teams_notifier.card import CardBuilder
from teams_notifier.config import CARD_TIMESTAMP_FORMAT, ENV_REPO, LOG_FORMAT, PluginSettings
from teams_notifier.context import Context
from teams_notifier.delivery import send_card

init(autoreset=True)


def setup_logging(debug: bool = False) -> None:
    """Setup logging configuration."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
    )


def print_debug_info(context: Context, payload: bytes) -> None:
    """Dump the sorted environment and the serialized card."""
    click.echo(f"\n{Fore.YELLOW}** DEBUG ENABLED **")
    click.echo(f"\n{Fore.CYAN}Environment Variables:{Style.RESET_ALL}")
    for key, value in context.items():
        click.echo(f" {key:<30} = {value}")

    click.echo(f"\n{Fore.CYAN}Card JSON:{Style.RESET_ALL}")
    click.echo(payload.decode("utf-8"))


def print_build_info(
    context: Context,
    settings: PluginSettings,
    version: str,
    timestamp: datetime,
) -> None:
    click.echo(f"\n{Fore.CYAN}Build Info:{Style.RESET_ALL}")
    click.echo(f" PROJECT: {context.get(ENV_REPO)}")
    click.echo(f" VERSION: {version}")
    click.echo(f" STATUS:  {settings.status}")
    click.echo(f" DATE:    {timestamp.strftime(CARD_TIMESTAMP_FORMAT)}")


@click.command()
@click.version_option(version=__version__, prog_name="teams-notifier")
@click.pass_obj
def cli(context: Context | None) -> None:
    """Send a pipeline status card to a Microsoft Teams webhook.

    All options are read from the environment (PLUGIN_* and CI_* variables).
    PLUGIN_FACTS, PLUGIN_BUTTONS and PLUGIN_VARIABLES are comma-separated
    names; blank entries are ignored, so "FOO,,BAR" yields two rows.
    """
    if context is None:
        context = Context.from_environ()

    settings = PluginSettings.from_context(context)
    if not settings.webhook_url:
        click.echo(f"{Fore.RED}Need to set MS Teams Webhook URL", err=True)
        sys.exit(1)

    now = datetime.now(timezone.utc)
    builder = CardBuilder(context, settings, now=now)
    message = builder.build()

    try:
        payload = message.to_json_bytes()
    except ValueError as e:
        click.echo(f"{Fore.RED}Error creating card JSON: {e}", err=True)
        sys.exit(1)

    if settings.debug:
        print_debug_info(context, payload)

    print_build_info(context, settings, builder.version, now)

    click.echo("\nSending to Microsoft Teams...")
    result = send_card(settings.webhook_url, payload)

    if result.error:
        click.echo(f"{Fore.RED}Error sending to Teams: {result.error}", err=True)
        sys.exit(1)

    if not result.success:
        click.echo(
            f"{Fore.RED}Error response from Teams (HTTP {result.status_code}): {result.body}",
            err=True,
        )
        sys.exit(1)

    click.echo(f"{Fore.GREEN}✓ Done!")


def main() -> None:
    context = Context.from_environ()
    setup_logging(PluginSettings.from_context(context).debug)
    cli(obj=context)
