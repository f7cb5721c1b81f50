# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Analysis orchestration for one compilation unit."""

import logging
import threading
from datetime import datetime, timezone
from typing import Callable

from codemetrics.config import AnalyzerOptions
from codemetrics.lines import classify_lines
from codemetrics.model import AnalysisOutcome, AnalysisResult
from codemetrics.model_builder import MethodMetricBuilder
from codemetrics.parser import SourceParser
from codemetrics.result_store import LAST_RESULT, LastResultCell
from codemetrics.source import FileSourceProvider, SourceProvider

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


class MetricsAnalyzer:
    """Compute line and method metrics for single source files.

    Every successful analysis replaces the result held by ``result_cell``;
    failures leave it untouched. Calls are serialized per analyzer instance.
    """

    def __init__(
        self,
        parser: SourceParser | None = None,
        source_provider: SourceProvider | None = None,
        options: AnalyzerOptions | None = None,
        result_cell: LastResultCell | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the analyzer.

        Args:
            parser: Parser producing the syntax tree; a tree-sitter C# parser is
                created on first use when omitted.
            source_provider: Reader used by ``analyze_file``; local files by default.
            options: Analyzer options.
            result_cell: Holder of the last successful result; the process-wide
                cell by default.
            clock: Timestamp source for ``analyzed_at``.
        """
        self._parser = parser
        self._source_provider = source_provider or FileSourceProvider()
        self._options = options or AnalyzerOptions()
        self._result_cell = result_cell or LAST_RESULT
        self._clock = clock
        self._lock = threading.Lock()

    @property
    def options(self) -> AnalyzerOptions:
        return self._options

    @property
    def last_result(self) -> AnalysisResult:
        """Return the last successful result, or the empty result."""
        return self._result_cell.get()

    def analyze(self, source_text: str, file_name: str) -> AnalysisResult:
        """Analyze source text.

        Args:
            source_text: Raw file content; may be empty.
            file_name: Label stored on the result.

        Returns:
            The new result, or ``EMPTY_RESULT`` when analysis fails.
        """
        return self.analyze_detailed(source_text, file_name).result

    def analyze_file(self, file_name: str) -> AnalysisResult:
        """Read and analyze one file.

        Args:
            file_name: Name passed to the source provider.

        Returns:
            The new result, or ``EMPTY_RESULT`` when reading or analysis fails.
        """
        return self.analyze_file_detailed(file_name).result

    def analyze_file_detailed(self, file_name: str) -> AnalysisOutcome:
        """Read and analyze one file, reporting why a failure happened.

        Args:
            file_name: Name passed to the source provider.

        Returns:
            Tagged analysis outcome.
        """
        try:
            source_text = self._source_provider.read(file_name)
        except Exception as exc:
            logger.exception(f"Source provider failed (file_name={file_name})")
            return AnalysisOutcome.failed("unexpected_failure", str(exc))
        if source_text is None:
            return AnalysisOutcome.failed(
                "source_unavailable", f"Source not available: {file_name}"
            )
        return self.analyze_detailed(source_text, file_name)

    def analyze_detailed(self, source_text: str, file_name: str) -> AnalysisOutcome:
        """Analyze source text, reporting why a failure happened.

        Args:
            source_text: Raw file content; may be empty.
            file_name: Label stored on the result.

        Returns:
            Tagged analysis outcome. On success the last-result cell holds the
            returned result; listeners are notified after the analyzer lock
            is released.
        """
        with self._lock:
            outcome = self._measure(source_text, file_name)
        if outcome.ok:
            self._result_cell.replace(outcome.result)
        return outcome

    def _measure(self, source_text: str, file_name: str) -> AnalysisOutcome:
        try:
            parsed = self._get_parser().parse(source_text)
            if not parsed.ok:
                logger.warning(
                    f"Skipping analysis due to parse errors (file_name={file_name} "
                    f"error_count={parsed.error_count})"
                )
                return AnalysisOutcome.failed(
                    "parse_failure",
                    f"Parser reported {parsed.error_count} error(s)",
                )
            counts = classify_lines(source_text, self._options.comment_mode)
            methods = MethodMetricBuilder(
                nested_callables=self._options.nested_callables
            ).build(parsed.tree)
            result = AnalysisResult(
                file_name=file_name,
                analyzed_at=self._clock(),
                lines_of_code=counts.lines_of_code,
                comment_lines=counts.comment_lines,
                blank_lines=counts.blank_lines,
                methods=tuple(methods),
            )
        except Exception as exc:
            logger.exception(f"Code metrics analysis failed (file_name={file_name})")
            return AnalysisOutcome.failed("unexpected_failure", str(exc))
        logger.info(
            f"Analysis completed (file_name={file_name} loc={result.lines_of_code} "
            f"methods={result.method_count})"
        )
        return AnalysisOutcome(result=result)

    def _get_parser(self) -> SourceParser:
        if self._parser is None:
            from codemetrics.parsers import CSharpParser

            self._parser = CSharpParser()
        return self._parser
