"""TSDoc comment parsing and validation."""

from tsdoc_coverage.tsdoc.messages import ParserLog, ParserMessage, TSDocMessageId
from tsdoc_coverage.tsdoc.parser import (
    DocBlock,
    DocComment,
    DocInlineTag,
    ParserContext,
    TSDocParser,
)
from tsdoc_coverage.tsdoc.tags import StandardTags, TagDefinition, TagSyntaxKind, find_tag
from tsdoc_coverage.tsdoc.validator import DocCommentValidator, TSDocValidator

__all__ = [
    "DocBlock",
    "DocComment",
    "DocCommentValidator",
    "DocInlineTag",
    "ParserContext",
    "ParserLog",
    "ParserMessage",
    "StandardTags",
    "TSDocMessageId",
    "TSDocParser",
    "TSDocValidator",
    "TagDefinition",
    "TagSyntaxKind",
    "find_tag",
]
