# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Process-wide holder for the most recent successful analysis."""

import logging
import threading
from typing import Callable

from codemetrics.model import EMPTY_RESULT, AnalysisResult

logger = logging.getLogger(__name__)

ResultListener = Callable[[AnalysisResult], None]


class LastResultCell:
    """Hold one immutable analysis snapshot for any number of readers.

    Writers swap the whole snapshot under a lock, so a reader sees either the
    previous or the new result and never a partially built one.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._result: AnalysisResult = EMPTY_RESULT
        self._listeners: list[ResultListener] = []

    def get(self) -> AnalysisResult:
        """Return the latest result, or ``EMPTY_RESULT`` before any success."""
        with self._lock:
            return self._result

    def replace(self, result: AnalysisResult) -> None:
        """Store a new result and notify listeners.

        Listeners run after the swap, outside the lock. A failing listener is
        logged and skipped.

        Args:
            result: The new snapshot.
        """
        with self._lock:
            self._result = result
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(result)
            except Exception:
                logger.exception(
                    f"Result listener failed (file_name={result.file_name})"
                )

    def subscribe(self, listener: ResultListener) -> Callable[[], None]:
        """Register a listener called with every new result.

        Args:
            listener: Callable receiving the new result.

        Returns:
            A callable that removes the listener.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def reset(self) -> None:
        """Return the cell to ``EMPTY_RESULT`` without notifying listeners."""
        with self._lock:
            self._result = EMPTY_RESULT


LAST_RESULT = LastResultCell()


def get_last_result() -> AnalysisResult:
    """Return the process-wide last successful result."""
    return LAST_RESULT.get()
