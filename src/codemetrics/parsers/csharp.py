# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""C# parser implementation backed by tree-sitter."""

import logging
from functools import lru_cache

import tree_sitter_c_sharp
from tree_sitter import Language, Node, Parser

from codemetrics.parser import ParseOutcome, ParserUnavailableError
from codemetrics.syntax import (
    BinaryOperator,
    Block,
    CatchClause,
    Conditional,
    Loop,
    MethodDeclaration,
    OtherNode,
    Switch,
    SwitchSection,
    SyntaxNode,
    TryStatement,
)

logger = logging.getLogger(__name__)

LOOP_TYPES: frozenset[str] = frozenset(
    {"while_statement", "do_statement", "for_statement", "foreach_statement", "for_each_statement"}
)
CASE_LABEL_TYPES: frozenset[str] = frozenset(
    {"case_switch_label", "case_pattern_switch_label"}
)
DEFAULT_LABEL_TYPE = "default_switch_label"


@lru_cache(maxsize=1)
def get_csharp_language() -> Language:
    """Load the tree-sitter C# grammar.

    Returns:
        The C# language object.

    Raises:
        ParserUnavailableError: If the grammar cannot be loaded.
    """
    try:
        return Language(tree_sitter_c_sharp.language())
    except (TypeError, ValueError, OSError) as exc:
        raise ParserUnavailableError(f"Failed to load C# grammar: {exc}") from exc


class CSharpParser:
    """Parse C# source and lower it into the metrics syntax model."""

    def __init__(self) -> None:
        """Initialize the tree-sitter parser.

        Raises:
            ParserUnavailableError: If the grammar cannot be loaded.
        """
        self._parser = Parser(get_csharp_language())

    def parse(self, source_text: str) -> ParseOutcome:
        """Parse C# source text.

        Args:
            source_text: Raw file content.

        Returns:
            The lowered tree and the number of ERROR/MISSING nodes.
        """
        tree = self._parser.parse(source_text.encode("utf-8"))
        root = tree.root_node
        error_count = count_syntax_errors(root)
        if error_count:
            logger.debug(f"C# parse reported errors (error_count={error_count})")
        return ParseOutcome(tree=self._lower(root), error_count=error_count)

    def _lower(self, root: Node) -> SyntaxNode:
        """Lower a tree-sitter tree bottom-up without recursion."""
        lowered: dict[int, SyntaxNode] = {}
        pending: list[tuple[Node, bool]] = [(root, False)]
        while pending:
            node, expanded = pending.pop()
            if not expanded:
                pending.append((node, True))
                for child in reversed(node.named_children):
                    pending.append((child, False))
                continue
            lowered[node.id] = self._lower_node(node, lowered)
        return lowered[root.id]

    def _lower_node(self, node: Node, lowered: dict[int, SyntaxNode]) -> SyntaxNode:
        node_type = node.type
        if node_type in ("method_declaration", "local_function_statement"):
            return MethodDeclaration(
                name=_field_text(node, "name"),
                start_line=_declaration_line(node),
                parameter_count=_count_parameters(
                    _field_or_last_child(node, "parameters", "parameter_list")
                ),
                body=_lowered_or_none(_method_body(node), lowered),
                nested=node_type == "local_function_statement",
            )
        if node_type == "anonymous_method_expression":
            body = _field_or_last_child(node, "body", "block")
            return MethodDeclaration(
                name="<anonymous>",
                start_line=_declaration_line(node),
                parameter_count=_count_parameters(
                    _field_or_last_child(node, "parameters", "parameter_list")
                ),
                body=_lowered_or_none(body, lowered),
                nested=True,
            )
        if node_type == "lambda_expression":
            return _lower_lambda(node, lowered)
        if node_type == "block":
            return Block(statements=_lowered_children(node, lowered))
        if node_type == "if_statement":
            return Conditional(children=_lowered_children(node, lowered))
        if node_type in LOOP_TYPES:
            return Loop(children=_lowered_children(node, lowered))
        if node_type == "switch_statement":
            body = _field_or_last_child(node, "body", "switch_body")
            sections = () if body is None else tuple(
                _lower_switch_section(section, lowered)
                for section in body.named_children
                if section.type == "switch_section"
            )
            return Switch(sections=sections)
        if node_type == "switch_expression":
            return Switch(
                sections=tuple(
                    _lower_switch_arm(arm, lowered)
                    for arm in node.named_children
                    if arm.type == "switch_expression_arm"
                )
            )
        if node_type == "try_statement":
            catches = tuple(
                CatchClause(
                    body=_lowered_or_none(
                        _field_or_last_child(clause, "body", "block"), lowered
                    )
                )
                for clause in node.named_children
                if clause.type == "catch_clause"
            )
            finally_clause = _last_child_of_type(node, "finally_clause")
            finally_body = None
            if finally_clause is not None:
                finally_body = _lowered_or_none(
                    _last_child_of_type(finally_clause, "block"), lowered
                )
            body = node.child_by_field_name("body")
            if body is None:
                body = next(
                    (child for child in node.named_children if child.type == "block"), None
                )
            return TryStatement(
                body=_lowered_or_none(body, lowered),
                catches=catches,
                finally_body=finally_body,
            )
        if node_type == "binary_expression":
            operator = node.child_by_field_name("operator")
            return BinaryOperator(
                operator=operator.type if operator is not None else "",
                left=_lowered_field(node, "left", lowered),
                right=_lowered_field(node, "right", lowered),
            )
        return OtherNode(children=_lowered_children(node, lowered))


def count_syntax_errors(root: Node) -> int:
    """Count ERROR and MISSING nodes beneath a tree-sitter root.

    Args:
        root: Root node of a parsed tree.

    Returns:
        Number of structural errors.
    """
    if not root.has_error:
        return 0
    count = 0
    pending = [root]
    while pending:
        node = pending.pop()
        if node.type == "ERROR" or node.is_missing:
            count += 1
        pending.extend(child for child in node.children if child.has_error or child.is_missing)
    return count


def _lower_lambda(node: Node, lowered: dict[int, SyntaxNode]) -> SyntaxNode:
    body = node.child_by_field_name("body")
    if body is None or body.type != "block":
        return OtherNode(children=_lowered_children(node, lowered))
    parameters = node.child_by_field_name("parameters")
    if parameters is None:
        parameters = next(
            (
                child
                for child in node.named_children
                if child.type in ("parameter_list", "implicit_parameter")
            ),
            None,
        )
    if parameters is None:
        parameter_count = 0
    elif parameters.type == "parameter_list":
        parameter_count = _count_parameters(parameters)
    else:
        parameter_count = 1
    return MethodDeclaration(
        name="<lambda>",
        start_line=_declaration_line(node),
        parameter_count=parameter_count,
        body=lowered.get(body.id),
        nested=True,
    )


def _lower_switch_section(section: Node, lowered: dict[int, SyntaxNode]) -> SwitchSection:
    """Split a switch section into its labels and statements.

    Older grammars wrap labels in ``*_switch_label`` nodes; newer ones emit bare
    ``case``/``default`` tokens followed by the label expression and ``:``.
    """
    case_labels = 0
    has_default = False
    in_label = False
    statements: list[SyntaxNode] = []
    for child in section.children:
        if child.type == "when_clause":
            statements.append(lowered[child.id])
        elif child.type in CASE_LABEL_TYPES or (child.type == "case" and not child.is_named):
            case_labels += 1
            in_label = child.type == "case"
            statements.extend(
                lowered[guard.id]
                for guard in child.named_children
                if guard.type == "when_clause"
            )
        elif child.type == DEFAULT_LABEL_TYPE or (
            child.type == "default" and not child.is_named
        ):
            has_default = True
            in_label = child.type == "default"
        elif child.type == ":" and in_label:
            in_label = False
        elif child.is_named and not in_label and child.id in lowered:
            statements.append(lowered[child.id])
    return SwitchSection(
        case_labels=case_labels, has_default=has_default, statements=tuple(statements)
    )


def _lower_switch_arm(arm: Node, lowered: dict[int, SyntaxNode]) -> SwitchSection:
    children = arm.named_children
    if not children:
        return SwitchSection()
    is_default = children[0].type == "discard"
    # the pattern is skipped; a when guard and the result expression are traversed
    return SwitchSection(
        case_labels=0 if is_default else 1,
        has_default=is_default,
        statements=tuple(lowered[child.id] for child in children[1:]),
    )


def _count_parameters(parameters: Node | None) -> int:
    if parameters is None:
        return 0
    return sum(1 for child in parameters.named_children if child.type != "comment")


def _declaration_line(node: Node) -> int:
    """Return the 1-based line where a declaration starts, after its attributes."""
    for child in node.children:
        if child.type not in ("attribute_list", "comment"):
            return child.start_point[0] + 1
    return node.start_point[0] + 1


def _field_text(node: Node, field_name: str) -> str:
    child = node.child_by_field_name(field_name)
    if child is None or child.text is None:
        return ""
    return child.text.decode("utf-8", errors="replace")


def _last_child_of_type(node: Node, node_type: str) -> Node | None:
    for child in reversed(node.named_children):
        if child.type == node_type:
            return child
    return None


def _method_body(node: Node) -> Node | None:
    body = node.child_by_field_name("body")
    if body is not None:
        return body
    for child in reversed(node.named_children):
        if child.type in ("block", "arrow_expression_clause"):
            return child
    return None


def _field_or_last_child(node: Node, field_name: str, node_type: str) -> Node | None:
    child = node.child_by_field_name(field_name)
    if child is not None:
        return child
    return _last_child_of_type(node, node_type)


def _lowered_field(
    node: Node, field_name: str, lowered: dict[int, SyntaxNode]
) -> SyntaxNode | None:
    return _lowered_or_none(node.child_by_field_name(field_name), lowered)


def _lowered_or_none(node: Node | None, lowered: dict[int, SyntaxNode]) -> SyntaxNode | None:
    if node is None:
        return None
    return lowered.get(node.id)


def _lowered_children(node: Node, lowered: dict[int, SyntaxNode]) -> tuple[SyntaxNode, ...]:
    return tuple(lowered[child.id] for child in node.named_children)
