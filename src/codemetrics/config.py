# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Analyzer options and recommended metric thresholds."""

from dataclasses import dataclass
from typing import Literal

from codemetrics.lines import CommentMode
from codemetrics.model import AnalysisResult, MethodMetric

NestedCallablePolicy = Literal["separate", "flatten"]

NESTED_CALLABLE_POLICIES: tuple[NestedCallablePolicy, ...] = ("separate", "flatten")
COMMENT_MODES: tuple[CommentMode, ...] = ("legacy", "tokenized")

DEFAULT_MAX_LINES_OF_CODE = 500
DEFAULT_MAX_CYCLOMATIC_COMPLEXITY = 10
DEFAULT_MAX_NESTING_DEPTH = 4
DEFAULT_MAX_PARAMETERS = 5


@dataclass(frozen=True)
class AnalyzerOptions:
    """Describe how one analysis interprets the source.

    Attributes:
        nested_callables: ``separate`` records local functions, anonymous
            methods and block lambdas as their own methods; ``flatten`` folds
            them into the enclosing method.
        comment_mode: Line classifier mode, see ``codemetrics.lines``.
    """

    nested_callables: NestedCallablePolicy = "separate"
    comment_mode: CommentMode = "legacy"

    def __post_init__(self) -> None:
        if self.nested_callables not in NESTED_CALLABLE_POLICIES:
            raise ValueError(
                f"Unsupported nested callable policy: {self.nested_callables}"
            )
        if self.comment_mode not in COMMENT_MODES:
            raise ValueError(f"Unsupported comment mode: {self.comment_mode}")


@dataclass(frozen=True)
class MetricThresholds:
    """Recommended upper bounds; values above them are flagged.

    Attributes:
        max_lines_of_code: Maximum code lines per file.
        max_cyclomatic_complexity: Maximum cyclomatic complexity per method.
        max_nesting_depth: Maximum block nesting per method.
        max_parameters: Maximum parameters per method.
    """

    max_lines_of_code: int = DEFAULT_MAX_LINES_OF_CODE
    max_cyclomatic_complexity: int = DEFAULT_MAX_CYCLOMATIC_COMPLEXITY
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH
    max_parameters: int = DEFAULT_MAX_PARAMETERS

    def __post_init__(self) -> None:
        for name in (
            "max_lines_of_code",
            "max_cyclomatic_complexity",
            "max_nesting_depth",
            "max_parameters",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")

    def exceeded_summary_metrics(self, result: AnalysisResult) -> set[str]:
        """Return the names of file-level metrics above their threshold.

        Args:
            result: Analysis result to check.

        Returns:
            Subset of ``lines_of_code``, ``max_cyclomatic_complexity``,
            ``max_nesting_depth`` and ``max_parameters``.
        """
        exceeded: set[str] = set()
        if result.lines_of_code > self.max_lines_of_code:
            exceeded.add("lines_of_code")
        if result.max_cyclomatic_complexity > self.max_cyclomatic_complexity:
            exceeded.add("max_cyclomatic_complexity")
        if result.max_nesting_depth > self.max_nesting_depth:
            exceeded.add("max_nesting_depth")
        if result.max_parameters > self.max_parameters:
            exceeded.add("max_parameters")
        return exceeded

    def method_exceeds(self, method: MethodMetric) -> bool:
        """Return whether a method is above the complexity or nesting limit."""
        return (
            method.cyclomatic_complexity > self.max_cyclomatic_complexity
            or method.nesting_depth > self.max_nesting_depth
        )
