"""Load the TypeScript sources of a project into parsed source units."""

from __future__ import annotations

import fnmatch
import logging
from typing import TYPE_CHECKING

from tsdoc_coverage.models.source import SourceUnit
from tsdoc_coverage.parsing.treesitter import (
    collect_error_ranges,
    detect_language,
    has_parse_errors,
    parse_file,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from tsdoc_coverage.config import CheckConfig

logger = logging.getLogger(__name__)


class ProjectError(Exception):
    """Raised when the project root cannot be scanned."""


def _iter_source_files(root: Path, patterns: list[str], exclude_path: str) -> Iterable[Path]:
    """Yield matching files under *root* in sorted order, skipping excluded paths.

    Hidden entries (names starting with ".") are never matched or descended into.
    """
    for child in sorted(root.iterdir()):
        if child.name.startswith(".") or exclude_path in str(child):
            continue
        if child.is_dir():
            # Symlinked directories can form cycles.
            if child.is_symlink():
                continue
            yield from _iter_source_files(child, patterns, exclude_path)
        elif child.is_file() and any(fnmatch.fnmatchcase(child.name, p) for p in patterns):
            yield child


class Project:
    """Loads the source units found under a root.

    Lives for a single run; nothing is cached between runs.
    """

    def __init__(self, config: CheckConfig) -> None:
        self.config = config

    def add_source_files(self) -> list[SourceUnit]:
        """Parse every included file below the root and return the new units."""
        root = self.config.root.resolve()
        if not root.is_dir():
            raise ProjectError(f"Project root is not a directory: {root}")

        added: list[SourceUnit] = []
        patterns = self.config.file_name_patterns
        for path in _iter_source_files(root, patterns, self.config.exclude_path):
            added.append(self._load(path))
        logger.info("Loaded %d source files from %s", len(added), root)
        return added

    def _load(self, path: Path) -> SourceUnit:
        language = detect_language(path)
        if language is None:
            raise ValueError(f"Cannot detect language for: {path}")
        source, tree = parse_file(path)
        if has_parse_errors(tree.root_node):
            logger.warning(
                "Syntax errors in %s at lines %s",
                path,
                ", ".join(f"{start}-{end}" for start, end in collect_error_ranges(tree.root_node)),
            )
        return SourceUnit(file_path=path, source=source, language=language, tree=tree)
