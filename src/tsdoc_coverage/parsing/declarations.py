"""Collect top-level function-like declarations from a TypeScript AST."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tsdoc_coverage.models.source import Declaration, DeclarationKind
from tsdoc_coverage.parsing.treesitter import node_text

if TYPE_CHECKING:
    import tree_sitter

    from tsdoc_coverage.models.source import SourceUnit

logger = logging.getLogger(__name__)

_FUNCTION_DECLARATION_TYPES = frozenset({"function_declaration", "generator_function_declaration"})

# Older grammars name function expressions ``function``.
_FUNCTION_EXPRESSION_TYPES = frozenset({"function_expression", "function", "generator_function"})

_FUNCTION_LITERAL_TYPES = _FUNCTION_EXPRESSION_TYPES | {"arrow_function"}

_VARIABLE_STATEMENT_TYPES = frozenset({"lexical_declaration", "variable_declaration"})


def _full_start(node: tree_sitter.Node) -> int:
    """Byte offset just past the previous non-comment sibling of *node*."""
    sibling = node.prev_sibling
    while sibling is not None and sibling.type == "comment":
        sibling = sibling.prev_sibling
    return sibling.end_byte if sibling is not None else 0


def _lines(node: tree_sitter.Node) -> tuple[int, int]:
    return node.start_point.row + 1, node.end_point.row + 1


class DeclarationCollector:
    """Finds the function-like declarations that should carry doc comments.

    Function declarations come first, then function-valued variable
    declarators, each group in file order.
    """

    def collect(self, root: tree_sitter.Node) -> list[Declaration]:
        functions: list[Declaration] = []
        variables: list[Declaration] = []
        for statement in root.children:
            if statement.type == "comment":
                continue
            inner, ambient = self._unwrap(statement)
            if inner is None:
                continue
            if self._is_function(inner, ambient=ambient):
                functions.append(self._parse_function(statement, inner))
            elif inner.type in _VARIABLE_STATEMENT_TYPES:
                variables.extend(self._parse_variables(statement, inner))
        return functions + variables

    # -- helpers --

    def _unwrap(self, node: tree_sitter.Node) -> tuple[tree_sitter.Node | None, bool]:
        """Strip ``export`` / ``export default`` / ``declare`` wrappers.

        Returns the wrapped declaration and whether it is ambient.
        """
        if node.type == "export_statement":
            declaration = node.child_by_field_name("declaration")
            if declaration is not None:
                return self._unwrap(declaration)
            value = node.child_by_field_name("value")
            if value is not None and value.is_named and value.type in _FUNCTION_EXPRESSION_TYPES:
                return value, False
            return None, False
        if node.type == "ambient_declaration":
            for child in node.named_children:
                inner, _ = self._unwrap(child)
                return inner, True
            return None, True
        return node, False

    def _is_function(self, node: tree_sitter.Node, *, ambient: bool) -> bool:
        if node.type in _FUNCTION_DECLARATION_TYPES or node.type in _FUNCTION_EXPRESSION_TYPES:
            return True
        # Bodyless signatures only count when ambient; otherwise they are overloads.
        return ambient and node.type == "function_signature"

    def _parse_function(self, statement: tree_sitter.Node, node: tree_sitter.Node) -> Declaration:
        start_line, end_line = _lines(statement)
        return Declaration(
            name=node_text(node.child_by_field_name("name")) or "default",
            kind=DeclarationKind.FUNCTION,
            pos=_full_start(statement),
            start_line=start_line,
            end_line=end_line,
        )

    def _parse_variables(
        self, statement: tree_sitter.Node, node: tree_sitter.Node
    ) -> list[Declaration]:
        results: list[Declaration] = []
        first = True
        for child in node.children:
            if child.type != "variable_declarator":
                continue
            # The first declarator shares the statement's leading comments.
            pos = _full_start(statement) if first else _full_start(child)
            first = False
            value = child.child_by_field_name("value")
            if value is None or value.type not in _FUNCTION_LITERAL_TYPES:
                continue
            start_line, end_line = _lines(child)
            results.append(
                Declaration(
                    name=node_text(child.child_by_field_name("name")),
                    kind=DeclarationKind.VARIABLE,
                    pos=pos,
                    start_line=start_line,
                    end_line=end_line,
                )
            )
        return results


def collect_declarations(unit: SourceUnit) -> list[Declaration]:
    """Return the function-like declarations of *unit* in evaluation order."""
    declarations = DeclarationCollector().collect(unit.tree.root_node)
    logger.debug("Collected %d declarations from %s", len(declarations), unit.file_path)
    return declarations
