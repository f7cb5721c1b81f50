# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Cyclomatic complexity and nesting depth traversal."""

import logging
from dataclasses import dataclass, field
from typing import Literal, cast

from codemetrics.config import NestedCallablePolicy
from codemetrics.syntax import (
    LOGICAL_OPERATORS,
    BinaryOperator,
    Block,
    Conditional,
    Loop,
    MethodDeclaration,
    OtherNode,
    Switch,
    SyntaxNode,
    TryStatement,
)

logger = logging.getLogger(__name__)

_Step = Literal["visit", "leave_block", "leave_method"]


@dataclass(frozen=True)
class MethodComplexity:
    """Represent the traversal output for one method declaration.

    Attributes:
        declaration: The visited declaration.
        cyclomatic_complexity: One plus the decision points in the body.
        nesting_depth: Deepest block nesting below the body block.
    """

    declaration: MethodDeclaration
    cyclomatic_complexity: int
    nesting_depth: int


@dataclass
class _Frame:
    declaration: MethodDeclaration
    slot: int
    complexity: int = 1
    current_depth: int = 0
    max_depth: int = 0

    def enter_block(self) -> None:
        self.current_depth += 1
        if self.current_depth > self.max_depth:
            self.max_depth = self.current_depth

    def leave_block(self) -> None:
        self.current_depth -= 1

    def finish(self) -> MethodComplexity:
        return MethodComplexity(
            declaration=self.declaration,
            cyclomatic_complexity=self.complexity,
            nesting_depth=self.max_depth,
        )


@dataclass
class _Walk:
    """Mutable state of one traversal."""

    pending: list[tuple[_Step, object]] = field(default_factory=list)
    frames: list[_Frame] = field(default_factory=list)
    finished: list[MethodComplexity | None] = field(default_factory=list)

    def schedule(self, *nodes: SyntaxNode | None) -> None:
        """Schedule nodes so they are visited in the given order."""
        for node in reversed(nodes):
            if node is not None:
                self.pending.append(("visit", node))

    def add_decision_points(self, count: int) -> None:
        if self.frames:
            self.frames[-1].complexity += count


class ComplexityVisitor:
    """Walk a syntax tree and measure every method declaration in it.

    Each method gets its own accumulator frame holding complexity and depth.
    Frames live on an explicit stack so method-like constructs nested in a
    body are measured independently of the enclosing method, and the walk
    itself uses a work list instead of recursion so arbitrarily deep trees
    are accepted.
    """

    def __init__(self, nested_callables: NestedCallablePolicy = "separate") -> None:
        """Initialize the visitor.

        Args:
            nested_callables: ``separate`` to measure nested method-like
                constructs on their own, ``flatten`` to fold them into the
                enclosing method.
        """
        self._nested_callables = nested_callables

    def measure(self, root: SyntaxNode) -> list[MethodComplexity]:
        """Measure all method declarations beneath ``root``.

        Args:
            root: Root of the tree to traverse.

        Returns:
            One entry per measured declaration, in declaration order.
        """
        walk = _Walk()
        walk.schedule(root)
        while walk.pending:
            step, payload = walk.pending.pop()
            if step == "leave_block":
                cast(_Frame, payload).leave_block()
            elif step == "leave_method":
                frame = walk.frames.pop()
                walk.finished[frame.slot] = frame.finish()
            else:
                self._visit(cast(SyntaxNode, payload), walk)
        measured = [entry for entry in walk.finished if entry is not None]
        logger.debug(f"Complexity traversal completed (methods={len(measured)})")
        return measured

    def _visit(self, node: SyntaxNode, walk: _Walk) -> None:
        if isinstance(node, MethodDeclaration):
            self._visit_method(node, walk)
        elif isinstance(node, Block):
            if walk.frames:
                frame = walk.frames[-1]
                frame.enter_block()
                walk.pending.append(("leave_block", frame))
            walk.schedule(*node.statements)
        elif isinstance(node, (Conditional, Loop)):
            walk.add_decision_points(1)
            walk.schedule(*node.children)
        elif isinstance(node, Switch):
            walk.add_decision_points(
                1 + sum(section.case_labels for section in node.sections)
            )
            walk.schedule(
                *(statement for section in node.sections for statement in section.statements)
            )
        elif isinstance(node, TryStatement):
            walk.add_decision_points(len(node.catches))
            walk.schedule(
                node.body,
                *(clause.body for clause in node.catches),
                node.finally_body,
            )
        elif isinstance(node, BinaryOperator):
            if node.operator in LOGICAL_OPERATORS:
                walk.add_decision_points(1)
            walk.schedule(node.left, node.right)
        elif isinstance(node, OtherNode):
            walk.schedule(*node.children)
        else:
            raise TypeError(f"Unsupported syntax node: {type(node).__name__}")

    def _visit_method(self, node: MethodDeclaration, walk: _Walk) -> None:
        if node.nested and (not walk.frames or self._nested_callables == "flatten"):
            walk.schedule(node.body)
            return
        frame = _Frame(declaration=node, slot=len(walk.finished))
        walk.finished.append(None)
        walk.frames.append(frame)
        walk.pending.append(("leave_method", frame))
        if isinstance(node.body, Block):
            walk.schedule(*node.body.statements)
        else:
            walk.schedule(node.body)
