# === FILE: link_scout/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for the LinkScout broken-link checker.

Usage:
  link_scout URL [options]

Options:
  --debug, -d         Per-step tracing (sets the log level to DEBUG)
  --progress, -p      One-line live counters, overwritten in place
  --timer, -t         Print total elapsed seconds at the end
  --config, -c PATH   YAML/JSON config (timeouts, concurrency, retry, headers)
  --log-level LEVEL   Log level when --debug is not given (default WARNING)
  --log-file PATH     Also write logs to this file
  --version, -v       Show the LinkScout version

Exit status is 0 when no broken URL was found, 1 otherwise.

Example:
  link_scout https://example.com --progress --timer
"""
import asyncio
import sys
from pathlib import Path

import click

from link_scout import __version__
from link_scout.config import load_config, validate_base_url
from link_scout.crawler.frontier import FrontierState
from link_scout.logger import setup_logging
from link_scout.report.text_report import render_text
from link_scout.scanner import start_scan

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def print_progress(state: FrontierState) -> None:
    click.echo(
        f"\rInternal pages checked: {len(state.visited_pages)}, "
        f"Pages to go: {len(state.pending_pages)}, "
        f"External links checked: {len(state.visited_links)}" + " " * 25,
        nl=False,
    )


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='LinkScout, version %(version)s')
@click.argument('url')
@click.option('--debug', '-d', is_flag=True, help='Turn debugging information on.')
@click.option('--progress', '-p', is_flag=True, help='Show a progress one-liner.')
@click.option('--timer', '-t', is_flag=True, help='Time execution.')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON config file.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Log level (ignored with --debug)'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file path (stdout only if omitted)'
)
def cli(url, debug, progress, timer, config_path, log_level, log_file):
    """Check URL and every page and external link reachable from it."""
    setup_logging(debug=debug, level=log_level, log_file=log_file)
    try:
        validate_base_url(url)
    except ValueError as e:
        print_error(str(e))
    try:
        cfg = load_config(config_path, base_url=url)
    except Exception as e:
        print_error(f'Error loading configuration: {e}')

    try:
        report = asyncio.run(start_scan(cfg, on_progress=print_progress if progress else None))
    except Exception as e:
        print_error(f'Error while checking: {e}')

    if progress:
        click.echo()
    click.echo(render_text(report, show_timer=timer))
    sys.exit(0 if report.success else 1)


if __name__ == "__main__":
    cli()
