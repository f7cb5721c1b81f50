# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Method metric building from syntax trees."""

import logging

from codemetrics.config import NestedCallablePolicy
from codemetrics.model import MethodMetric
from codemetrics.syntax import SyntaxNode
from codemetrics.visitor import ComplexityVisitor

logger = logging.getLogger(__name__)


class MethodMetricBuilder:
    """Build method metric records from a syntax tree."""

    def __init__(self, nested_callables: NestedCallablePolicy = "separate") -> None:
        """Initialize the builder.

        Args:
            nested_callables: Policy forwarded to the complexity visitor.
        """
        self._visitor = ComplexityVisitor(nested_callables=nested_callables)

    def build(self, tree: SyntaxNode) -> list[MethodMetric]:
        """Build one record per method declaration.

        Args:
            tree: Root of a parsed syntax tree.

        Returns:
            Method metrics in declaration order, overloads included.
        """
        records: list[MethodMetric] = []
        for measured in self._visitor.measure(tree):
            declaration = measured.declaration
            if declaration.body is None:
                logger.debug(
                    "Method has no body; reporting base complexity",
                    extra={"method": declaration.name, "line": declaration.start_line},
                )
            records.append(
                MethodMetric(
                    name=declaration.name,
                    start_line=declaration.start_line,
                    cyclomatic_complexity=measured.cyclomatic_complexity,
                    nesting_depth=measured.nesting_depth,
                    parameter_count=declaration.parameter_count,
                )
            )
        return records
