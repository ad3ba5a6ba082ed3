"""Source unit and declaration models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    import tree_sitter


class DeclarationKind(Enum):
    """How a function-like binding was declared."""

    FUNCTION = "function"
    VARIABLE = "variable"


@dataclass(frozen=True)
class Declaration:
    """A top-level function-like binding."""

    name: str
    """Bound name (``default`` for an anonymous default export)."""

    kind: DeclarationKind
    """Function declaration or function-valued variable."""

    pos: int
    """Byte offset where leading trivia (and so leading comments) begins."""

    start_line: int
    """1-based first line of the declaration."""

    end_line: int
    """1-based last line of the declaration."""

    @property
    def line_range(self) -> str:
        """Line range rendered as ``start-end``."""
        return f"{self.start_line}-{self.end_line}"


@dataclass
class SourceUnit:
    """A parsed TypeScript file."""

    file_path: Path
    """Resolved absolute path of the file."""

    source: bytes
    """Raw file contents."""

    language: str
    """Tree-sitter language name (``typescript`` or ``tsx``)."""

    tree: tree_sitter.Tree
    """Parse tree of :attr:`source`."""

    @property
    def text(self) -> str:
        """Full text of the file."""
        return self.source.decode("utf-8", errors="replace")
