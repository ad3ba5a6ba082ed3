"""Output reporters."""

from tsdoc_coverage.reporters.terminal import CLIReporter, reporter

__all__ = ["CLIReporter", "reporter"]
