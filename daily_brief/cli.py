"""
Daily Brief Command Line Interface.

Runs the brief pipeline once, serves the HTTP trigger, or validates the
configuration.

Example Usage:
    # Generate and email today's brief
    daily-brief run

    # Generate only the news sections and save the HTML without sending
    daily-brief run --dry-run --section ai_research --section world_news

    # Serve POST /api/daily-brief for an external scheduler
    daily-brief serve --port 8000

Environment Variables:
    OPENAI_API_KEY: API key for OpenAI
    ALPHA_VANTAGE_API_KEY: API key for Alpha Vantage market data
    PRODUCT_HUNT_API_KEY: Bearer token for the Product Hunt API
    RESEND_API_KEY: API key for Resend email delivery
    EMAIL_RECIPIENTS: Comma-separated list of recipient emails
    EMAIL_SENDER: Sender identity, e.g. "Daily Brief <on@resend.dev>"
    EMAIL_TRANSPORT: "resend" (default) or "smtp"
    BRIEF_SECTIONS: Comma-separated enabled sections (default: all)
    CRON_SECRET: Optional bearer token required by the HTTP trigger

For all configuration options, see config/settings.py
"""
import sys

import click

from daily_brief.config.settings import Settings
from daily_brief.core.constants import SECTION_ORDER
from daily_brief.core.errors import ConfigurationError
from daily_brief.core.types import Section
from daily_brief.logging_cfg.logger import setup_logger
from daily_brief.pipeline import run_daily_brief

logger = setup_logger()

SECTION_NAMES = [section.value for section in SECTION_ORDER]


def load_settings() -> Settings:
    try:
        return Settings.from_env()
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)


@click.group()
def cli():
    """Aggregate news and market data into an emailed daily brief."""


@cli.command()
@click.option('--dry-run', is_flag=True, help='Generate the brief and save it without sending email.')
@click.option('--section', 'sections', multiple=True, type=click.Choice(SECTION_NAMES),
              help='Enable only these sections (repeatable).')
def run(dry_run, sections):
    """Run one brief invocation."""
    settings = load_settings()
    if sections:
        settings = settings.with_sections(Section(name) for name in sections)

    result = run_daily_brief(settings, dry_run=dry_run)
    if not result.succeeded:
        click.echo(f"Daily brief failed: {result.error}", err=True)
        sys.exit(1)
    if result.output_path:
        click.echo(f"Brief saved to {result.output_path}")
    else:
        click.echo("Daily brief sent successfully")


@cli.command()
@click.option('--host', default='0.0.0.0', show_default=True)
@click.option('--port', default=8000, show_default=True, type=int)
def serve(host, port):
    """Serve the HTTP trigger endpoint."""
    import uvicorn
    from daily_brief.web.app import create_app

    uvicorn.run(create_app(load_settings()), host=host, port=port)


@cli.command('check-config')
def check_config():
    """Report required settings that are missing."""
    settings = load_settings()
    missing = settings.missing_keys()
    if missing:
        click.echo(f"Missing environment variables: {', '.join(missing)}", err=True)
        sys.exit(1)
    enabled = ', '.join(s.value for s in SECTION_ORDER if settings.enabled(s))
    click.echo(f"Configuration is valid. Enabled sections: {enabled}")


if __name__ == "__main__":
    cli()
