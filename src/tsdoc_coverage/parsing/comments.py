"""Leading comment lookup over raw source text.

Mirrors the TypeScript scanner's notion of *leading* comments: starting at a
node's full start (the end of the previous token), every comment in the
trivia up to the node is collected, except comments that sit on the same line
as the previous token, which belong to that token as trailing comments.
At the very start of a file everything counts as leading.
"""

from __future__ import annotations

from dataclasses import dataclass

_LF = 0x0A
_CR = 0x0D
_SLASH = 0x2F
_STAR = 0x2A
_INLINE_WHITESPACE = frozenset({0x20, 0x09, 0x0B, 0x0C})
_BOM = b"\xef\xbb\xbf"


@dataclass(frozen=True)
class CommentRange:
    """Byte span of one comment in the source."""

    pos: int
    end: int
    multi_line: bool
    """True for ``/* ... */`` comments, False for ``//`` comments."""

    has_trailing_new_line: bool = False

    def text_of(self, source: bytes) -> str:
        """Return the comment text from *source*."""
        return source[self.pos : self.end].decode("utf-8", errors="replace")


def _skip_shebang(text: bytes, pos: int) -> int:
    if text.startswith(_BOM, pos):
        pos += len(_BOM)
    if text.startswith(b"#!", pos):
        while pos < len(text) and text[pos] not in (_LF, _CR):
            pos += 1
    return pos


def get_leading_comment_ranges(text: bytes, pos: int) -> list[CommentRange] | None:
    """Collect the leading comments starting at byte offset *pos*.

    Returns None when there are none.
    """
    collecting = pos == 0
    if pos == 0:
        pos = _skip_shebang(text, pos)

    ranges: list[CommentRange] = []
    size = len(text)
    while pos < size:
        ch = text[pos]
        if ch in (_LF, _CR):
            pos += 2 if ch == _CR and pos + 1 < size and text[pos + 1] == _LF else 1
            collecting = True
            if ranges and not ranges[-1].has_trailing_new_line:
                last = ranges[-1]
                ranges[-1] = CommentRange(last.pos, last.end, last.multi_line, True)
            continue
        if ch in _INLINE_WHITESPACE:
            pos += 1
            continue
        if ch == _SLASH and pos + 1 < size and text[pos + 1] in (_SLASH, _STAR):
            start = pos
            multi_line = text[pos + 1] == _STAR
            if multi_line:
                close = text.find(b"*/", pos + 2)
                pos = size if close == -1 else close + 2
            else:
                pos += 2
                while pos < size and text[pos] not in (_LF, _CR):
                    pos += 1
            if collecting:
                ranges.append(CommentRange(start, pos, multi_line))
            continue
        break

    return ranges or None


def nearest_leading_comment(text: bytes, pos: int) -> str | None:
    """Return the text of the comment closest to the token after *pos*."""
    ranges = get_leading_comment_ranges(text, pos)
    if not ranges:
        return None
    return ranges[-1].text_of(text)
