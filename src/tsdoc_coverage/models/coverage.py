"""Documentation coverage models."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tsdoc_coverage.models.source import Declaration
    from tsdoc_coverage.tsdoc.messages import ParserMessage

NOT_APPLICABLE = "N/A"


def format_percentage(documented: int, total: int) -> str:
    """Render ``documented / total`` as a whole percent string.

    Halves round up. A zero *total* has no meaningful ratio and renders
    as ``N/A``.
    """
    if total == 0:
        return NOT_APPLICABLE
    return f"{math.floor(documented * 100 / total + 0.5)}%"


class DeclarationStatus(Enum):
    """Outcome of checking one declaration for a doc comment."""

    DOCUMENTED = "documented"
    """Preceded by a TSDoc comment with no diagnostics."""

    MISSING = "missing"
    """No leading comment at all."""

    INVALID = "invalid"
    """Preceded by a ``/**`` comment that produced diagnostics."""

    INFORMAL = "informal"
    """Preceded by a comment that is not a ``/**`` doc comment."""


@dataclass
class DeclarationFinding:
    """Result of checking a single declaration."""

    declaration: Declaration
    status: DeclarationStatus
    messages: list[ParserMessage] = field(default_factory=list)
    """Validator diagnostics (only for ``INVALID``)."""


@dataclass
class FileCoverage:
    """Documentation coverage for a single source unit."""

    file_path: str
    """Resolved path of the source file."""

    total: int = 0
    """Number of collected declarations."""

    documented: int = 0
    """Declarations carrying a valid doc comment."""

    undocumented_ranges: list[str] = field(default_factory=list)
    """``start-end`` line ranges of missing or invalid doc comments."""

    findings: list[DeclarationFinding] = field(default_factory=list)
    """Per-declaration results in collection order."""

    @property
    def informal(self) -> int:
        """Declarations led by a non-doc comment (in neither bucket)."""
        return sum(1 for f in self.findings if f.status is DeclarationStatus.INFORMAL)

    @property
    def undocumented_lines(self) -> str:
        """Undocumented ranges joined for display."""
        return ", ".join(self.undocumented_ranges)

    @property
    def percentage(self) -> str:
        """Documented share as a percent string."""
        return format_percentage(self.documented, self.total)

    def record(self, finding: DeclarationFinding) -> None:
        """Tally one declaration's finding."""
        self.findings.append(finding)
        self.total += 1
        if finding.status is DeclarationStatus.DOCUMENTED:
            self.documented += 1
        elif finding.status in (DeclarationStatus.MISSING, DeclarationStatus.INVALID):
            self.undocumented_ranges.append(finding.declaration.line_range)


@dataclass
class CoverageSummary:
    """Aggregate coverage across every included source unit."""

    files: list[FileCoverage] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Sum of per-file declaration counts."""
        return sum(f.total for f in self.files)

    @property
    def documented(self) -> int:
        """Sum of per-file documented counts."""
        return sum(f.documented for f in self.files)

    @property
    def percentage(self) -> str:
        """Aggregate documented share as a percent string."""
        return format_percentage(self.documented, self.total)
