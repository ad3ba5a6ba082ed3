"""Data models for source units and documentation coverage."""

from tsdoc_coverage.models.coverage import (
    CoverageSummary,
    DeclarationFinding,
    DeclarationStatus,
    FileCoverage,
    format_percentage,
)
from tsdoc_coverage.models.source import Declaration, DeclarationKind, SourceUnit

__all__ = [
    "CoverageSummary",
    "Declaration",
    "DeclarationFinding",
    "DeclarationKind",
    "DeclarationStatus",
    "FileCoverage",
    "SourceUnit",
    "format_percentage",
]
