# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Parser adapters for the code metrics scanner."""

from codemetrics.parsers.csharp import CSharpParser

__all__ = ["CSharpParser"]
