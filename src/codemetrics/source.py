# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Source text providers."""

import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class SourceProvider(Protocol):
    """Define the contract for reading source text by name."""

    def read(self, file_name: str) -> str | None:
        """Return the source text, or ``None`` when it is missing or unreadable."""


class FileSourceProvider:
    """Read source text from the local file system as UTF-8, dropping any BOM."""

    def read(self, file_name: str) -> str | None:
        """Read one file.

        Args:
            file_name: Path of the file to read.

        Returns:
            File content, or ``None`` when the file is missing or unreadable.
        """
        file_path = Path(file_name)
        if not file_path.is_file():
            logger.warning(f"Source file not found (file_path={file_path})")
            return None
        try:
            return file_path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(
                f"Skipping source due to read failure (file_path={file_path} error={exc})"
            )
            return None
