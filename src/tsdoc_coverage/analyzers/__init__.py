"""Documentation coverage analysis."""

from tsdoc_coverage.analyzers.coverage import DocCoverageAnalyzer, tally_source_unit

__all__ = ["DocCoverageAnalyzer", "tally_source_unit"]
