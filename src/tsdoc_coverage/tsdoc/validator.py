"""Doc-comment validators used by the coverage tallier."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from tsdoc_coverage.tsdoc.parser import TSDocParser

if TYPE_CHECKING:
    from tsdoc_coverage.tsdoc.messages import ParserMessage


class DocCommentValidator(ABC):
    """Checks a doc comment block for syntax problems."""

    @abstractmethod
    def validate(self, comment: str) -> list[ParserMessage]:
        """Return the diagnostics for *comment*; empty when it is well formed."""


class TSDocValidator(DocCommentValidator):
    """Validates comments against the standard TSDoc syntax."""

    def __init__(self, parser: TSDocParser | None = None) -> None:
        self._parser = parser or TSDocParser()

    def validate(self, comment: str) -> list[ParserMessage]:
        return self._parser.parse_string(comment).log.messages
