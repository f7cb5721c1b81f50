# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Physical line classification into code, comment and blank lines."""

from dataclasses import dataclass
from typing import Literal

CommentMode = Literal["legacy", "tokenized"]

LINE_COMMENT = "//"
BLOCK_COMMENT_START = "/*"
BLOCK_COMMENT_END = "*/"


@dataclass(frozen=True)
class LineCounts:
    """Represent line statistics for one source text.

    Attributes:
        lines_of_code: Lines carrying code.
        blank_lines: Whitespace-only lines.
        comment_lines: Lines carrying comment text. May overlap ``lines_of_code``.
        total_lines: Physical line count.
    """

    lines_of_code: int = 0
    blank_lines: int = 0
    comment_lines: int = 0
    total_lines: int = 0


def split_lines(source_text: str) -> list[str]:
    """Split text into physical lines on ``\\n``.

    A trailing ``\\r`` is dropped from each line and a terminating newline does
    not start an extra line.

    Args:
        source_text: Raw file content.

    Returns:
        Physical lines without terminators.
    """
    if not source_text:
        return []
    lines = source_text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def classify_lines(source_text: str, comment_mode: CommentMode = "legacy") -> LineCounts:
    """Count code, blank and comment lines.

    Args:
        source_text: Raw file content.
        comment_mode: ``legacy`` for the prefix heuristic, ``tokenized`` for the
            literal-aware scanner.

    Returns:
        Line statistics.

    Raises:
        ValueError: If ``comment_mode`` is unknown.
    """
    lines = split_lines(source_text)
    if comment_mode == "legacy":
        blank_lines = sum(1 for line in lines if not line.strip())
        lines_of_code = sum(
            1
            for line in lines
            if line.strip() and not line.lstrip().startswith(LINE_COMMENT)
        )
        comment_lines = count_comment_lines(lines)
    elif comment_mode == "tokenized":
        blank_lines = sum(1 for line in lines if not line.strip())
        lines_of_code, comment_lines = _scan_tokenized(lines)
    else:
        raise ValueError(f"Unsupported comment mode: {comment_mode}")
    return LineCounts(
        lines_of_code=lines_of_code,
        blank_lines=blank_lines,
        comment_lines=comment_lines,
        total_lines=len(lines),
    )


def count_comment_lines(lines: list[str]) -> int:
    """Count comment lines with the prefix heuristic.

    Block comments are tracked only when they open at the start of a line. A
    ``//`` later on the line counts unless the text before it ends with a
    double quote, which approximates "the marker sits inside a string".
    """
    count = 0
    in_block_comment = False
    for line in lines:
        trimmed = line.strip()
        if in_block_comment:
            count += 1
            if BLOCK_COMMENT_END in trimmed:
                in_block_comment = False
            continue
        if trimmed.startswith(BLOCK_COMMENT_START):
            count += 1
            in_block_comment = BLOCK_COMMENT_END not in trimmed
            continue
        if trimmed.startswith(LINE_COMMENT):
            count += 1
            continue
        marker_index = line.find(LINE_COMMENT)
        if marker_index > 0 and not line[:marker_index].strip().endswith('"'):
            count += 1
    return count


def _scan_tokenized(lines: list[str]) -> tuple[int, int]:
    """Scan lines with a small lexer that skips string and char literals.

    Regular, verbatim, interpolated and raw (``\"\"\"``) literals are skipped,
    including interpolation holes of regular interpolated strings. Holes inside
    verbatim or raw interpolated strings are not tracked.

    Returns:
        ``(lines_of_code, comment_lines)``.
    """
    lines_of_code = 0
    comment_lines = 0
    in_block_comment = False
    in_verbatim_string = False
    raw_quotes = 0
    for line in lines:
        has_code = False
        has_comment = False
        index = 0
        length = len(line)
        while index < length:
            char = line[index]
            if in_block_comment:
                has_comment = True
                end = line.find(BLOCK_COMMENT_END, index)
                if end < 0:
                    index = length
                else:
                    in_block_comment = False
                    index = end + 2
                continue
            if raw_quotes:
                has_code = True
                end = line.find('"' * raw_quotes, index)
                if end < 0:
                    index = length
                else:
                    index = end + raw_quotes
                    raw_quotes = 0
                continue
            if in_verbatim_string:
                has_code = True
                index, in_verbatim_string = _skip_verbatim(line, index)
                continue
            if char.isspace():
                index += 1
                continue
            if line.startswith(LINE_COMMENT, index):
                has_comment = True
                break
            if line.startswith(BLOCK_COMMENT_START, index):
                has_comment = True
                in_block_comment = True
                index += 2
                continue
            has_code = True
            quotes_start = index
            while quotes_start < length and line[quotes_start] == "$":
                quotes_start += 1
            quotes = _count_quotes(line, quotes_start)
            if quotes >= 3:
                raw_quotes = quotes
                index = quotes_start + quotes
            elif line.startswith(('@"', '$@"', '@$"'), index):
                index += line.index('"', index) - index + 1
                index, in_verbatim_string = _skip_verbatim(line, index)
            elif line.startswith('$"', index):
                index = _skip_interpolated(line, index + 2)
            elif char in "\"'":
                index = _skip_quoted(line, index + 1, char)
            else:
                index += 1
        if has_code:
            lines_of_code += 1
        if has_comment:
            comment_lines += 1
    return lines_of_code, comment_lines


def _skip_quoted(line: str, index: int, quote: str) -> int:
    """Return the index after a regular string or char literal closing quote."""
    length = len(line)
    while index < length:
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char == quote:
            return index + 1
        index += 1
    return length


def _count_quotes(line: str, index: int) -> int:
    end = index
    while end < len(line) and line[end] == '"':
        end += 1
    return end - index


def _skip_interpolated(line: str, index: int) -> int:
    """Return the index after an interpolated string, skipping ``{...}`` holes."""
    length = len(line)
    while index < length:
        char = line[index]
        if char == "\\" or line.startswith("{{", index):
            index += 2
        elif char == "{":
            index = _skip_hole(line, index + 1)
        elif char == '"':
            return index + 1
        else:
            index += 1
    return length


def _skip_hole(line: str, index: int) -> int:
    """Return the index after the ``}`` closing an interpolation hole."""
    depth = 1
    length = len(line)
    while index < length:
        char = line[index]
        if line.startswith('$"', index):
            index = _skip_interpolated(line, index + 2)
        elif char in "\"'":
            index = _skip_quoted(line, index + 1, char)
        elif char == "{":
            depth += 1
            index += 1
        elif char == "}":
            depth -= 1
            index += 1
            if depth == 0:
                return index
        else:
            index += 1
    return length


def _skip_verbatim(line: str, index: int) -> tuple[int, bool]:
    """Skip verbatim string content where ``""`` escapes a quote.

    Returns:
        The next index and whether the literal is still open at end of line.
    """
    length = len(line)
    while index < length:
        if line[index] == '"':
            if line.startswith('""', index):
                index += 2
                continue
            return index + 1, False
        index += 1
    return length, True
