"""Diagnostics reported while parsing a TSDoc comment."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TSDocMessageId(Enum):
    """Identifiers for TSDoc syntax problems."""

    COMMENT_MISSING_OPENING_DELIMITER = "tsdoc-comment-missing-opening-delimiter"
    COMMENT_MISSING_CLOSING_DELIMITER = "tsdoc-comment-missing-closing-delimiter"
    UNDEFINED_TAG = "tsdoc-undefined-tag"
    AT_SIGN_IN_WORD = "tsdoc-at-sign-in-word"
    AT_SIGN_WITHOUT_TAG_NAME = "tsdoc-at-sign-without-tag-name"
    CHARACTERS_AFTER_BLOCK_TAG = "tsdoc-characters-after-block-tag"
    INLINE_TAG_MISSING_BRACES = "tsdoc-inline-tag-missing-braces"
    TAG_SHOULD_NOT_HAVE_BRACES = "tsdoc-tag-should-not-have-braces"
    MALFORMED_INLINE_TAG = "tsdoc-malformed-inline-tag"
    INLINE_TAG_MISSING_RIGHT_BRACE = "tsdoc-inline-tag-missing-right-brace"
    CHARACTERS_AFTER_INLINE_TAG = "tsdoc-characters-after-inline-tag"
    LINK_TAG_EMPTY = "tsdoc-link-tag-empty"
    ESCAPE_RIGHT_BRACE = "tsdoc-escape-right-brace"
    ESCAPE_GREATER_THAN = "tsdoc-escape-greater-than"
    MALFORMED_HTML_NAME = "tsdoc-malformed-html-name"
    HTML_TAG_MISSING_GREATER_THAN = "tsdoc-html-tag-missing-greater-than"
    HTML_TAG_MISSING_EQUALS = "tsdoc-html-tag-missing-equals"
    HTML_TAG_MISSING_STRING = "tsdoc-html-tag-missing-string"
    HTML_STRING_MISSING_QUOTE = "tsdoc-html-string-missing-quote"
    UNNECESSARY_BACKSLASH = "tsdoc-unnecessary-backslash"
    CODE_SPAN_EMPTY = "tsdoc-code-span-empty"
    CODE_SPAN_MISSING_DELIMITER = "tsdoc-code-span-missing-delimiter"
    CODE_FENCE_MISSING_DELIMITER = "tsdoc-code-fence-missing-delimiter"
    PARAM_TAG_WITH_INVALID_TYPE = "tsdoc-param-tag-with-invalid-type"
    PARAM_TAG_WITH_INVALID_OPTIONAL_NAME = "tsdoc-param-tag-with-invalid-optional-name"
    PARAM_TAG_WITH_INVALID_NAME = "tsdoc-param-tag-with-invalid-name"
    PARAM_TAG_MISSING_HYPHEN = "tsdoc-param-tag-missing-hyphen"
    MISSING_DEPRECATION_MESSAGE = "tsdoc-missing-deprecation-message"
    INHERITDOC_INCOMPATIBLE_TAG = "tsdoc-inheritdoc-incompatible-tag"
    INHERITDOC_INCOMPATIBLE_SUMMARY = "tsdoc-inheritdoc-incompatible-summary"


@dataclass(frozen=True)
class ParserMessage:
    """A single diagnostic, positioned within the comment text."""

    message_id: TSDocMessageId
    text: str
    line: int
    """1-based line within the comment."""

    column: int
    """1-based column within that line."""

    def __str__(self) -> str:
        return f"({self.line}:{self.column}): {self.text}"


@dataclass
class ParserLog:
    """Diagnostics accumulated while parsing one comment."""

    messages: list[ParserMessage] = field(default_factory=list)

    def add_message(
        self, message_id: TSDocMessageId, text: str, line: int, column: int
    ) -> None:
        self.messages.append(ParserMessage(message_id, text, line, column))
