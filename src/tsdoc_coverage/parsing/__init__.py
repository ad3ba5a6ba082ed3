"""Source parsing, declaration collection and comment lookup."""

from tsdoc_coverage.parsing.comments import CommentRange, get_leading_comment_ranges
from tsdoc_coverage.parsing.declarations import collect_declarations
from tsdoc_coverage.parsing.treesitter import (
    detect_language,
    has_parse_errors,
    parse_code,
    parse_file,
)

__all__ = [
    "CommentRange",
    "collect_declarations",
    "detect_language",
    "get_leading_comment_ranges",
    "has_parse_errors",
    "parse_code",
    "parse_file",
]
