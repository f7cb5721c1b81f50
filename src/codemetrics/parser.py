# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Parser interfaces and DTOs for syntax tree production."""

from dataclasses import dataclass
from typing import Protocol

from codemetrics.syntax import SyntaxNode


class ParserUnavailableError(RuntimeError):
    """Represent a parser backend that cannot be loaded."""


@dataclass(frozen=True)
class ParseOutcome:
    """Represent the output of one parse.

    Attributes:
        tree: Root node of the lowered syntax tree.
        error_count: Number of structural errors reported by the parser.
    """

    tree: SyntaxNode
    error_count: int = 0

    @property
    def ok(self) -> bool:
        """Return whether the tree is free of structural errors."""
        return self.error_count == 0


class SourceParser(Protocol):
    """Language parser contract."""

    def parse(self, source_text: str) -> ParseOutcome:
        """Parse source text into a syntax tree plus an error count."""
