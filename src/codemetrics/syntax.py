# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Syntax tree node model consumed by the metrics engine.

The engine only needs a handful of node kinds. Parser adapters lower their
concrete trees into these frozen dataclasses; everything the engine does not
care about becomes an ``OtherNode`` that keeps its children in source order.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class MethodDeclaration:
    """Represent a method or a method-like construct.

    Attributes:
        name: Declared identifier (``<lambda>``/``<anonymous>`` for unnamed ones).
        start_line: First source line of the declaration (1-based).
        parameter_count: Number of declared parameters.
        body: Method body; ``None`` for abstract or extern declarations.
        nested: ``True`` for local functions, anonymous methods and
            block-bodied lambdas found inside another body.
    """

    name: str
    start_line: int
    parameter_count: int = 0
    body: "SyntaxNode | None" = None
    nested: bool = False


@dataclass(frozen=True)
class Block:
    """Represent a ``{ }`` statement block."""

    statements: "tuple[SyntaxNode, ...]" = ()


@dataclass(frozen=True)
class Conditional:
    """Represent an ``if`` statement with its condition and branches."""

    children: "tuple[SyntaxNode, ...]" = ()


@dataclass(frozen=True)
class Loop:
    """Represent any iteration statement (while, do, for, foreach)."""

    children: "tuple[SyntaxNode, ...]" = ()


@dataclass(frozen=True)
class SwitchSection:
    """Represent one switch section.

    Attributes:
        case_labels: Number of non-default case labels on the section.
        has_default: Whether the section carries the default label.
        statements: Section statements in source order.
    """

    case_labels: int = 0
    has_default: bool = False
    statements: "tuple[SyntaxNode, ...]" = ()


@dataclass(frozen=True)
class Switch:
    """Represent a switch statement or switch expression."""

    sections: tuple[SwitchSection, ...] = ()


@dataclass(frozen=True)
class CatchClause:
    """Represent one catch clause of a try statement."""

    body: "SyntaxNode | None" = None


@dataclass(frozen=True)
class TryStatement:
    """Represent a try statement.

    Attributes:
        body: The guarded block.
        catches: Catch clauses in source order.
        finally_body: The finally block, if any.
    """

    body: "SyntaxNode | None" = None
    catches: tuple[CatchClause, ...] = ()
    finally_body: "SyntaxNode | None" = None


@dataclass(frozen=True)
class BinaryOperator:
    """Represent a binary expression such as ``a && b``."""

    operator: str
    left: "SyntaxNode | None" = None
    right: "SyntaxNode | None" = None


@dataclass(frozen=True)
class OtherNode:
    """Represent any node kind without metric semantics."""

    children: "tuple[SyntaxNode, ...]" = ()


SyntaxNode = Union[
    MethodDeclaration,
    Block,
    Conditional,
    Loop,
    Switch,
    TryStatement,
    BinaryOperator,
    OtherNode,
]

LOGICAL_OPERATORS: frozenset[str] = frozenset({"&&", "||"})
