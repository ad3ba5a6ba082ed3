"""DocCoverageAnalyzer: measures how many declarations carry a valid TSDoc comment.

For each source unit:
1. Collect the top-level function-like declarations
2. Find the comment leading each declaration in the raw source text
3. Validate ``/**`` comments with the doc-comment validator
4. Tally documented declarations and undocumented line ranges

The analyzer then aggregates every unit into a :class:`CoverageSummary`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tsdoc_coverage.models.coverage import (
    CoverageSummary,
    DeclarationFinding,
    DeclarationStatus,
    FileCoverage,
)
from tsdoc_coverage.parsing.comments import nearest_leading_comment
from tsdoc_coverage.parsing.declarations import collect_declarations
from tsdoc_coverage.project import Project
from tsdoc_coverage.tsdoc.validator import DocCommentValidator, TSDocValidator

if TYPE_CHECKING:
    from collections.abc import Callable

    from tsdoc_coverage.config import CheckConfig
    from tsdoc_coverage.models.source import Declaration, SourceUnit

logger = logging.getLogger(__name__)

DOC_COMMENT_OPENER = "/**"


def _check_declaration(
    unit: SourceUnit, declaration: Declaration, validator: DocCommentValidator
) -> DeclarationFinding:
    comment = nearest_leading_comment(unit.source, declaration.pos)
    if comment is None:
        return DeclarationFinding(declaration, DeclarationStatus.MISSING)
    if not comment.startswith(DOC_COMMENT_OPENER):
        return DeclarationFinding(declaration, DeclarationStatus.INFORMAL)
    messages = validator.validate(comment)
    if messages:
        return DeclarationFinding(declaration, DeclarationStatus.INVALID, messages)
    return DeclarationFinding(declaration, DeclarationStatus.DOCUMENTED)


def tally_source_unit(
    unit: SourceUnit,
    validator: DocCommentValidator | None = None,
    collector: Callable[[SourceUnit], list[Declaration]] = collect_declarations,
) -> FileCoverage:
    """Compute documentation coverage for one source unit.

    A declaration led by a comment that is not a ``/**`` doc comment counts
    towards the total but is neither documented nor listed as undocumented.
    """
    validator = validator or TSDocValidator()
    coverage = FileCoverage(file_path=str(unit.file_path))
    for declaration in collector(unit):
        finding = _check_declaration(unit, declaration, validator)
        if finding.messages:
            logger.debug(
                "%s:%s %s: %s",
                unit.file_path,
                declaration.line_range,
                declaration.name,
                "; ".join(str(m) for m in finding.messages),
            )
        coverage.record(finding)
    return coverage


class DocCoverageAnalyzer:
    """Runs the tallier over every source unit of a project."""

    def __init__(
        self,
        config: CheckConfig,
        *,
        validator: DocCommentValidator | None = None,
        collector: Callable[[SourceUnit], list[Declaration]] = collect_declarations,
    ) -> None:
        self._config = config
        self._validator = validator or TSDocValidator()
        self._collector = collector

    def run(self) -> CoverageSummary:
        """Load the project and tally each unit in load order."""
        project = Project(self._config)
        summary = CoverageSummary()
        for unit in project.add_source_files():
            summary.files.append(self.analyze_unit(unit))
        logger.info(
            "Documented %d of %d declarations across %d files",
            summary.documented,
            summary.total,
            len(summary.files),
        )
        return summary

    def analyze_unit(self, unit: SourceUnit) -> FileCoverage:
        return tally_source_unit(unit, self._validator, self._collector)
