"""Allows `python -m daily_brief`."""
from daily_brief.cli import cli

if __name__ == "__main__":
    cli()
