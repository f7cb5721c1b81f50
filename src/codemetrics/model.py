# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Domain models for analysis results."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

FailureReason = Literal["source_unavailable", "parse_failure", "unexpected_failure"]


@dataclass(frozen=True)
class MethodMetric:
    """Represent the metrics of one method declaration.

    Attributes:
        name: Declared method name; overloads share a name.
        start_line: Declaration start line in source (1-based).
        cyclomatic_complexity: One plus the number of decision points.
        nesting_depth: Deepest block nesting below the method's own body.
        parameter_count: Number of declared parameters.
    """

    name: str
    start_line: int
    cyclomatic_complexity: int = 1
    nesting_depth: int = 0
    parameter_count: int = 0


@dataclass(frozen=True)
class AnalysisResult:
    """Represent one immutable analysis snapshot.

    Aggregates are derived from ``methods`` on read.

    Attributes:
        file_name: Label of the analyzed source.
        analyzed_at: Analysis timestamp; ``None`` on the empty result.
        lines_of_code: Code line count.
        comment_lines: Comment line count.
        blank_lines: Blank line count.
        methods: Method metrics in declaration order.
    """

    file_name: str = ""
    analyzed_at: datetime | None = None
    lines_of_code: int = 0
    comment_lines: int = 0
    blank_lines: int = 0
    methods: tuple[MethodMetric, ...] = ()

    @property
    def method_count(self) -> int:
        return len(self.methods)

    @property
    def total_complexity(self) -> int:
        return sum(method.cyclomatic_complexity for method in self.methods)

    @property
    def comment_ratio(self) -> float:
        """Return comment lines per code line, or 0 when there is no code."""
        if self.lines_of_code > 0:
            return self.comment_lines / self.lines_of_code
        return 0.0

    @property
    def avg_cyclomatic_complexity(self) -> float:
        """Return the mean method complexity, or 0 when there are no methods."""
        if self.methods:
            return self.total_complexity / len(self.methods)
        return 0.0

    @property
    def max_cyclomatic_complexity(self) -> int:
        return max((method.cyclomatic_complexity for method in self.methods), default=0)

    @property
    def max_nesting_depth(self) -> int:
        return max((method.nesting_depth for method in self.methods), default=0)

    @property
    def max_parameters(self) -> int:
        return max((method.parameter_count for method in self.methods), default=0)

    @property
    def is_empty(self) -> bool:
        """Return whether this is the well-known empty result."""
        return self == EMPTY_RESULT

    def __str__(self) -> str:
        return (
            f"CC={self.max_cyclomatic_complexity} "
            f"(avg: {self.avg_cyclomatic_complexity:.2f}), "
            f"LoC={self.lines_of_code}, Methods={self.method_count}"
        )


EMPTY_RESULT = AnalysisResult()


@dataclass(frozen=True)
class AnalysisOutcome:
    """Represent the tagged outcome of one analysis call.

    Attributes:
        result: The analysis result; ``EMPTY_RESULT`` when ``failure`` is set.
        failure: Failure reason, ``None`` on success.
        detail: Human-readable failure detail.
    """

    result: AnalysisResult
    failure: FailureReason | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def failed(cls, failure: FailureReason, detail: str) -> "AnalysisOutcome":
        """Build a failed outcome carrying the empty result."""
        return cls(result=EMPTY_RESULT, failure=failure, detail=detail)
