"""TSDoc comment parser.

Parses a ``/** ... */`` block into a :class:`DocComment` and records every
syntax problem in a :class:`ParserLog`. A comment is well formed exactly when
the log is empty.

Usage:
    context = TSDocParser().parse_string("/** Adds two numbers. */")
    if context.log.messages:
        ...
"""

from __future__ import annotations

import re
import string
from dataclasses import dataclass, field

from tsdoc_coverage.tsdoc.messages import ParserLog, TSDocMessageId
from tsdoc_coverage.tsdoc.tags import TagSyntaxKind, find_tag

_OPENING_DELIMITER = "/**"
_CLOSING_DELIMITER = "*/"
_CODE_FENCE = "```"

_TAG_NAME_RE = re.compile(r"[A-Za-z][A-Za-z0-9]*")
_PARAM_NAME_RE = re.compile(r"[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*")
_HTML_NAME_RE = re.compile(r"[A-Za-z][A-Za-z0-9-]*")

_PUNCTUATION = frozenset(string.punctuation)
_PARAM_TAGS = frozenset({"@PARAM", "@TYPEPARAM"})


@dataclass
class DocBlock:
    """A block tag and the text that follows it."""

    tag_name: str
    content: str = ""
    param_name: str | None = None
    """Parameter name for ``@param`` / ``@typeParam`` blocks."""


@dataclass
class DocInlineTag:
    """An inline tag such as ``{@link Foo}``."""

    tag_name: str
    content: str = ""


@dataclass
class DocComment:
    """Structured content of a TSDoc comment."""

    summary: str = ""
    blocks: list[DocBlock] = field(default_factory=list)
    modifier_tags: list[str] = field(default_factory=list)
    inline_tags: list[DocInlineTag] = field(default_factory=list)

    @property
    def params(self) -> list[DocBlock]:
        return [b for b in self.blocks if b.tag_name.upper() == "@PARAM"]

    @property
    def returns(self) -> DocBlock | None:
        return self._first_block("@RETURNS")

    @property
    def deprecated(self) -> DocBlock | None:
        return self._first_block("@DEPRECATED")

    @property
    def inherit_doc(self) -> DocInlineTag | None:
        for tag in self.inline_tags:
            if tag.tag_name.upper() == "@INHERITDOC":
                return tag
        return None

    def _first_block(self, upper_name: str) -> DocBlock | None:
        for block in self.blocks:
            if block.tag_name.upper() == upper_name:
                return block
        return None


@dataclass
class ParserContext:
    """Everything produced by one :meth:`TSDocParser.parse_string` call."""

    source: str
    doc_comment: DocComment = field(default_factory=DocComment)
    log: ParserLog = field(default_factory=ParserLog)


@dataclass
class _Line:
    text: str
    line: int
    column: int
    """1-based column of ``text[0]`` in the original comment line."""


def _extract_lines(context: ParserContext) -> list[_Line] | None:
    """Strip the delimiters and leading ``*`` decoration from each line."""
    source = context.source
    if not source.startswith(_OPENING_DELIMITER):
        context.log.add_message(
            TSDocMessageId.COMMENT_MISSING_OPENING_DELIMITER,
            'Expecting a "/**" comment',
            1,
            1,
        )
        return None
    close = source.rfind(_CLOSING_DELIMITER)
    if close < len(_OPENING_DELIMITER):
        raw_lines = source.split("\n")
        context.log.add_message(
            TSDocMessageId.COMMENT_MISSING_CLOSING_DELIMITER,
            'Expecting a closing "*/" for the doc comment',
            len(raw_lines),
            len(raw_lines[-1]) + 1,
        )
        return None

    lines: list[_Line] = []
    body = source[len(_OPENING_DELIMITER) : close]
    for index, raw in enumerate(body.split("\n")):
        raw = raw.rstrip()
        column = len(_OPENING_DELIMITER) + 1 if index == 0 else 1
        stripped = raw.lstrip()
        column += len(raw) - len(stripped)
        if index > 0 and stripped.startswith("*"):
            stripped = stripped[1:]
            column += 1
            if stripped.startswith(" "):
                stripped = stripped[1:]
                column += 1
        lines.append(_Line(stripped, index + 1, column))

    while lines and not lines[0].text:
        lines.pop(0)
    while lines and not lines[-1].text:
        lines.pop()
    return lines


class _NodeParser:
    """Single pass over the extracted comment text."""

    def __init__(self, context: ParserContext, lines: list[_Line]) -> None:
        self.context = context
        self.doc = context.doc_comment
        self.lines = lines
        self.text = "\n".join(line.text for line in lines)
        self.positions: list[tuple[int, int]] = []
        self.line_starts: dict[int, _Line] = {}
        for line in lines:
            self.line_starts[len(self.positions)] = line
            for offset in range(len(line.text) + 1):
                self.positions.append((line.line, line.column + offset))
        if not self.positions:
            self.positions.append((1, 1))
        self._parts: list[str] = []
        self._block: DocBlock | None = None

    # -- driver --

    def parse(self) -> None:
        text = self.text
        i = 0
        while i < len(text):
            line = self.line_starts.get(i)
            if line is not None and line.text.startswith(_CODE_FENCE):
                i = self._parse_code_fence(i)
                continue
            ch = text[i]
            if ch == "\\":
                i = self._parse_backslash(i)
            elif ch == "`":
                i = self._parse_code_span(i)
            elif ch == "@":
                i = self._parse_block_tag(i)
            elif ch == "{":
                i = self._parse_inline_tag(i)
            elif ch == "}":
                self._error(
                    TSDocMessageId.ESCAPE_RIGHT_BRACE,
                    'The "}" character should be escaped using a backslash to avoid '
                    "confusion with a TSDoc inline tag",
                    i,
                )
                self._parts.append(ch)
                i += 1
            elif ch == "<":
                i = self._parse_html_tag(i)
            elif ch == ">":
                self._error(
                    TSDocMessageId.ESCAPE_GREATER_THAN,
                    'The ">" character should be escaped using a backslash to avoid '
                    "confusion with an HTML tag",
                    i,
                )
                self._parts.append(ch)
                i += 1
            else:
                self._parts.append(ch)
                i += 1
        self._flush()
        self._validate()

    # -- helpers --

    def _error(self, message_id: TSDocMessageId, message: str, index: int) -> None:
        line, column = self.positions[min(index, len(self.positions) - 1)]
        self.context.log.add_message(message_id, message, line, column)

    def _flush(self) -> None:
        content = "".join(self._parts).strip()
        if self._block is None:
            self.doc.summary = content
        else:
            self._block.content = content
        self._parts = []

    def _skip_spaces(self, i: int) -> int:
        while i < len(self.text) and self.text[i] in " \t":
            i += 1
        return i

    def _skip_whitespace(self, i: int) -> int:
        while i < len(self.text) and self.text[i].isspace():
            i += 1
        return i

    def _parse_code_fence(self, i: int) -> int:
        text = self.text
        end_of_line = text.find("\n", i)
        search = len(text) if end_of_line == -1 else end_of_line + 1
        while search < len(text):
            line = self.line_starts.get(search)
            next_newline = text.find("\n", search)
            line_end = len(text) if next_newline == -1 else next_newline
            if line is not None and line.text.startswith(_CODE_FENCE):
                self._parts.append(text[i:line_end])
                return line_end
            search = line_end + 1
        self._error(
            TSDocMessageId.CODE_FENCE_MISSING_DELIMITER,
            "Error parsing code fence: Missing closing delimiter",
            i,
        )
        self._parts.append(text[i:])
        return len(text)

    def _parse_backslash(self, i: int) -> int:
        following = self.text[i + 1 : i + 2]
        if following and following in _PUNCTUATION:
            self._parts.append(following)
            return i + 2
        self._error(
            TSDocMessageId.UNNECESSARY_BACKSLASH,
            "A backslash must precede another character that is being escaped",
            i,
        )
        self._parts.append("\\")
        return i + 1

    def _parse_code_span(self, i: int) -> int:
        text = self.text
        end_of_line = text.find("\n", i)
        if end_of_line == -1:
            end_of_line = len(text)
        close = text.find("`", i + 1, end_of_line)
        if close == -1:
            self._error(
                TSDocMessageId.CODE_SPAN_MISSING_DELIMITER,
                "The code span is missing its closing backtick",
                i,
            )
            self._parts.append("`")
            return i + 1
        if close == i + 1:
            self._error(
                TSDocMessageId.CODE_SPAN_EMPTY,
                "A code span must contain at least one character between the backticks",
                i,
            )
        self._parts.append(text[i : close + 1])
        return close + 1

    def _parse_block_tag(self, i: int) -> int:
        text = self.text
        if i > 0 and not text[i - 1].isspace():
            self._error(
                TSDocMessageId.AT_SIGN_IN_WORD,
                'The "@" character looks like part of a TSDoc tag; use a backslash to escape it',
                i,
            )
            self._parts.append("@")
            return i + 1
        match = _TAG_NAME_RE.match(text, i + 1)
        if match is None:
            self._error(
                TSDocMessageId.AT_SIGN_WITHOUT_TAG_NAME,
                'Expecting a TSDoc tag name after "@"; if it is not a tag, use a backslash '
                "to escape this character",
                i,
            )
            self._parts.append("@")
            return i + 1

        end = match.end()
        tag_name = "@" + match.group()
        if end < len(text) and not text[end].isspace():
            self._error(
                TSDocMessageId.CHARACTERS_AFTER_BLOCK_TAG,
                f'The token "{tag_name}" looks like a TSDoc tag but contains an invalid '
                f'character "{text[end]}"; if it is not a tag, use a backslash to escape the "@"',
                i,
            )
            self._parts.append(text[i:end])
            return end

        definition = find_tag(tag_name)
        if definition is None:
            self._error(
                TSDocMessageId.UNDEFINED_TAG,
                f'The TSDoc tag "{tag_name}" is not defined in this configuration',
                i,
            )
        elif definition.syntax_kind is TagSyntaxKind.INLINE:
            self._error(
                TSDocMessageId.INLINE_TAG_MISSING_BRACES,
                f'The TSDoc tag "{tag_name}" is an inline tag; it must be enclosed in "{{ }}" '
                "braces",
                i,
            )
            self._parts.append(tag_name)
            return end
        elif definition.syntax_kind is TagSyntaxKind.MODIFIER:
            self.doc.modifier_tags.append(definition.tag_name)
            return end

        self._flush()
        block = DocBlock(tag_name=definition.tag_name if definition else tag_name)
        self.doc.blocks.append(block)
        self._block = block
        if block.tag_name.upper() in _PARAM_TAGS:
            return self._parse_param_name(end, block)
        return end

    def _parse_param_name(self, i: int, block: DocBlock) -> int:
        text = self.text
        tag = block.tag_name
        i = self._skip_spaces(i)

        if text[i : i + 1] == "{":
            self._error(
                TSDocMessageId.PARAM_TAG_WITH_INVALID_TYPE,
                f"The {tag} block should not include a JSDoc-style '{{type}}'",
                i,
            )
            close = text.find("}", i)
            i = len(text) if close == -1 else close + 1
            i = self._skip_spaces(i)

        if text[i : i + 1] == "[":
            self._error(
                TSDocMessageId.PARAM_TAG_WITH_INVALID_OPTIONAL_NAME,
                f"The {tag} should not include a JSDoc-style optional name; it must not be "
                "enclosed in '[ ]' brackets.",
                i,
            )
            close = text.find("]", i)
            if close == -1:
                return len(text)
            block.param_name = text[i + 1 : close].split("=", 1)[0].strip() or None
            i = close + 1
        else:
            match = _PARAM_NAME_RE.match(text, i)
            if match is None:
                self._error(
                    TSDocMessageId.PARAM_TAG_WITH_INVALID_NAME,
                    f"The {tag} block should be followed by a valid parameter name",
                    i,
                )
                return i
            block.param_name = match.group()
            i = match.end()

        i = self._skip_spaces(i)
        if text[i : i + 1] != "-":
            self._error(
                TSDocMessageId.PARAM_TAG_MISSING_HYPHEN,
                f"The {tag} block should be followed by a parameter name and then a hyphen",
                i,
            )
            return i
        return i + 1

    def _parse_inline_tag(self, i: int) -> int:
        text = self.text
        if text[i + 1 : i + 2] != "@":
            self._error(
                TSDocMessageId.MALFORMED_INLINE_TAG,
                'Expecting a TSDoc tag starting with "{@"',
                i,
            )
            self._parts.append("{")
            return i + 1
        match = _TAG_NAME_RE.match(text, i + 2)
        if match is None:
            self._error(
                TSDocMessageId.MALFORMED_INLINE_TAG,
                'Expecting a TSDoc tag name after "{@"',
                i,
            )
            self._parts.append("{@")
            return i + 2

        end = match.end()
        tag_name = "@" + match.group()
        close = text.find("}", end)
        if close == -1:
            self._error(
                TSDocMessageId.INLINE_TAG_MISSING_RIGHT_BRACE,
                'The TSDoc inline tag name is missing its closing "}"',
                i,
            )
            self._parts.append(text[i:])
            return len(text)
        # The inherited content replaces the tag, so it is not section text.
        if tag_name.upper() != "@INHERITDOC":
            self._parts.append(text[i : close + 1])

        if close != end and not text[end].isspace():
            self._error(
                TSDocMessageId.CHARACTERS_AFTER_INLINE_TAG,
                f'The token "{tag_name}" looks like a TSDoc tag but contains an invalid '
                f'character "{text[end]}"; if it is not a tag, use a backslash to escape the "{{"',
                i,
            )
            return close + 1

        content = text[end:close].strip()
        definition = find_tag(tag_name)
        if definition is None:
            self._error(
                TSDocMessageId.UNDEFINED_TAG,
                f'The TSDoc tag "{tag_name}" is not defined in this configuration',
                i,
            )
        elif definition.syntax_kind is not TagSyntaxKind.INLINE:
            self._error(
                TSDocMessageId.TAG_SHOULD_NOT_HAVE_BRACES,
                f'The TSDoc tag "{tag_name}" is not an inline tag; it must not be enclosed in '
                '"{ }" braces',
                i,
            )
        elif definition.tag_name == "@link" and not content:
            self._error(TSDocMessageId.LINK_TAG_EMPTY, "The @link tag content is missing", i)

        name = definition.tag_name if definition else tag_name
        self.doc.inline_tags.append(DocInlineTag(tag_name=name, content=content))
        return close + 1

    def _parse_html_tag(self, i: int) -> int:
        text = self.text
        j = i + 1
        closing = text[j : j + 1] == "/"
        if closing:
            j += 1
        match = _HTML_NAME_RE.match(text, j)
        if match is None:
            self._malformed_html_name(i)
            self._parts.append("<")
            return i + 1
        j = match.end()

        while not closing:
            j = self._skip_whitespace(j)
            if j >= len(text) or text[j] in "/>":
                break
            attribute = _HTML_NAME_RE.match(text, j)
            if attribute is None:
                self._malformed_html_name(j)
                self._parts.append(text[i:j])
                return j
            j = self._skip_whitespace(attribute.end())
            if text[j : j + 1] != "=":
                self._error(
                    TSDocMessageId.HTML_TAG_MISSING_EQUALS,
                    'The HTML element has an invalid attribute: Expecting "=" after HTML '
                    "attribute name",
                    j,
                )
                self._parts.append(text[i:j])
                return j
            j = self._skip_whitespace(j + 1)
            quote = text[j : j + 1]
            if quote not in ('"', "'"):
                self._error(
                    TSDocMessageId.HTML_TAG_MISSING_STRING,
                    "The HTML element has an invalid attribute: Expecting an HTML string "
                    "starting with a single-quote or double-quote character",
                    j,
                )
                self._parts.append(text[i:j])
                return j
            end_quote = text.find(quote, j + 1)
            if end_quote == -1:
                self._error(
                    TSDocMessageId.HTML_STRING_MISSING_QUOTE,
                    "The HTML element has an invalid attribute: The HTML string is missing "
                    "its closing quote",
                    j,
                )
                self._parts.append(text[i:])
                return len(text)
            j = end_quote + 1

        j = self._skip_whitespace(j)
        if not closing and text[j : j + 2] == "/>":
            j += 2
        elif text[j : j + 1] == ">":
            j += 1
        else:
            self._error(
                TSDocMessageId.HTML_TAG_MISSING_GREATER_THAN,
                'The HTML tag must be terminated by ">"',
                j,
            )
        self._parts.append(text[i:j])
        return j

    def _malformed_html_name(self, index: int) -> None:
        self._error(
            TSDocMessageId.MALFORMED_HTML_NAME,
            "Invalid HTML element: An HTML name must be an ASCII letter followed by "
            "optional letters, numbers, or hyphens",
            index,
        )

    def _validate(self) -> None:
        deprecated = self.doc.deprecated
        if deprecated is not None and not deprecated.content:
            self._block_error(
                TSDocMessageId.MISSING_DEPRECATION_MESSAGE,
                "The @deprecated block must include a deprecation message, e.g. describing "
                "the recommended alternative",
            )
        if self.doc.inherit_doc is None:
            return
        if self.doc.summary:
            self._block_error(
                TSDocMessageId.INHERITDOC_INCOMPATIBLE_SUMMARY,
                "The summary section must not have any content, because that content will be "
                "replaced by the @inheritDoc target",
            )
        if any(b.tag_name == "@remarks" for b in self.doc.blocks):
            self._block_error(
                TSDocMessageId.INHERITDOC_INCOMPATIBLE_TAG,
                'A "@remarks" block must not be used, because that content is provided by the '
                "@inheritDoc tag",
            )

    def _block_error(self, message_id: TSDocMessageId, message: str) -> None:
        line, column = self.positions[0]
        self.context.log.add_message(message_id, message, line, column)


class TSDocParser:
    """Parses TSDoc comments using the standard tag set."""

    def parse_string(self, text: str) -> ParserContext:
        """Parse a complete ``/** ... */`` comment."""
        context = ParserContext(source=text.replace("\r\n", "\n"))
        lines = _extract_lines(context)
        if lines is not None:
            _NodeParser(context, lines).parse()
        return context
