"""tsdoc-coverage CLI: top-level command group."""

from __future__ import annotations

import logging

import click

from tsdoc_coverage import __version__
from tsdoc_coverage.analyzers.coverage import DocCoverageAnalyzer
from tsdoc_coverage.config import CheckConfig
from tsdoc_coverage.reporters.terminal import reporter

logger = logging.getLogger(__name__)

# click's exit code for usage errors
_USAGE_ERROR_EXIT_CODE = 2


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="tsdoc-coverage")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """A tool for checking documentation coverage."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(_USAGE_ERROR_EXIT_CODE)


@cli.command()
def check() -> None:
    """Check documentation coverage.

    Scans every .ts and .tsx file below the current directory (skipping
    node_modules) and prints how many top-level functions carry a valid
    TSDoc comment.
    """
    config = CheckConfig()
    logger.debug("Checking documentation coverage in %s", config.root)
    summary = DocCoverageAnalyzer(config).run()
    reporter.print_coverage_summary(summary)


def main() -> None:
    """Console-script entry point."""
    cli()
