"""Standard TSDoc tag definitions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TagSyntaxKind(Enum):
    """Where a tag may appear."""

    BLOCK = "block"
    """Starts a new section, e.g. ``@returns``."""

    MODIFIER = "modifier"
    """A bare flag with no content, e.g. ``@public``."""

    INLINE = "inline"
    """Appears inside braces within text, e.g. ``{@link Foo}``."""


@dataclass(frozen=True)
class TagDefinition:
    tag_name: str
    syntax_kind: TagSyntaxKind


def _define(kind: TagSyntaxKind, *names: str) -> list[TagDefinition]:
    return [TagDefinition(name, kind) for name in names]


_STANDARD_TAGS: list[TagDefinition] = [
    *_define(
        TagSyntaxKind.BLOCK,
        "@decorator",
        "@defaultValue",
        "@deprecated",
        "@example",
        "@param",
        "@privateRemarks",
        "@remarks",
        "@returns",
        "@see",
        "@throws",
        "@typeParam",
    ),
    *_define(
        TagSyntaxKind.MODIFIER,
        "@alpha",
        "@beta",
        "@eventProperty",
        "@experimental",
        "@internal",
        "@override",
        "@packageDocumentation",
        "@public",
        "@readonly",
        "@sealed",
        "@virtual",
    ),
    *_define(TagSyntaxKind.INLINE, "@inheritDoc", "@label", "@link"),
]

# Tag names are matched case-insensitively.
StandardTags: dict[str, TagDefinition] = {tag.tag_name.upper(): tag for tag in _STANDARD_TAGS}


def find_tag(tag_name: str) -> TagDefinition | None:
    """Look up a standard tag by name (with its ``@``)."""
    return StandardTags.get(tag_name.upper())
