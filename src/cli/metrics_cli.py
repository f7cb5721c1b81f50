# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Command line front end for single-file code metrics."""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.style import Style
from rich.table import Table

from codemetrics.analyzer import MetricsAnalyzer
from codemetrics.config import (
    COMMENT_MODES,
    DEFAULT_MAX_CYCLOMATIC_COMPLEXITY,
    DEFAULT_MAX_LINES_OF_CODE,
    DEFAULT_MAX_NESTING_DEPTH,
    DEFAULT_MAX_PARAMETERS,
    NESTED_CALLABLE_POLICIES,
    AnalyzerOptions,
    MetricThresholds,
)
from codemetrics.model import AnalysisResult
from codemetrics.parser import SourceParser
from codemetrics.result_store import LastResultCell

logger = logging.getLogger(__name__)

WARNING_STYLE = Style(color="black", bgcolor="light_goldenrod1")


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(prog="codemetrics")
    subparsers = parser.add_subparsers(dest="command", required=True)
    analyze_parser = subparsers.add_parser("analyze")
    analyze_parser.add_argument("--path", required=True, help="C# source file to analyze.")
    analyze_parser.add_argument(
        "--format",
        choices=("table", "json"),
        default="table",
        help="Output format.",
    )
    analyze_parser.add_argument(
        "--output",
        required=False,
        help="Optional output file path for raw JSON when --format json is used.",
    )
    analyze_parser.add_argument(
        "--nested-callables",
        choices=NESTED_CALLABLE_POLICIES,
        default="separate",
        help="Report local functions and block lambdas separately or fold them in.",
    )
    analyze_parser.add_argument(
        "--comment-mode",
        choices=COMMENT_MODES,
        default="legacy",
        help="Comment line detection mode.",
    )
    analyze_parser.add_argument(
        "--max-loc", type=int, default=DEFAULT_MAX_LINES_OF_CODE, help="Lines of code limit."
    )
    analyze_parser.add_argument(
        "--max-cc",
        type=int,
        default=DEFAULT_MAX_CYCLOMATIC_COMPLEXITY,
        help="Cyclomatic complexity limit per method.",
    )
    analyze_parser.add_argument(
        "--max-nesting",
        type=int,
        default=DEFAULT_MAX_NESTING_DEPTH,
        help="Nesting depth limit per method.",
    )
    analyze_parser.add_argument(
        "--max-params",
        type=int,
        default=DEFAULT_MAX_PARAMETERS,
        help="Parameter count limit per method.",
    )
    return parser


def run(
    argv: list[str],
    stdout: TextIO,
    stderr: TextIO,
    source_parser: SourceParser | None = None,
) -> int:
    """Run CLI command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.
        source_parser: Parser override; the tree-sitter C# parser when omitted.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning(f"Argument parsing failed (argv={argv})")
        return 2
    if args.command == "analyze":
        return _run_analyze(
            args=args, stdout=stdout, stderr=stderr, source_parser=source_parser
        )

    logger.warning(f"Unsupported command (command={args.command})")
    stderr.write(f"Unsupported command: {args.command}\n")
    return 2


def _run_analyze(
    args: argparse.Namespace,
    stdout: TextIO,
    stderr: TextIO,
    source_parser: SourceParser | None,
) -> int:
    """Run analyze command.

    Args:
        args: Parsed CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.
        source_parser: Parser override.

    Returns:
        Exit code.
    """
    source_path = Path(args.path)
    if not source_path.exists():
        logger.warning(f"Path does not exist (path={source_path})")
        stderr.write(f"Path does not exist: {source_path}\n")
        return 2
    try:
        thresholds = MetricThresholds(
            max_lines_of_code=args.max_loc,
            max_cyclomatic_complexity=args.max_cc,
            max_nesting_depth=args.max_nesting,
            max_parameters=args.max_params,
        )
        options = AnalyzerOptions(
            nested_callables=args.nested_callables, comment_mode=args.comment_mode
        )
    except ValueError as exc:
        logger.warning(f"Invalid option value (error={exc})")
        stderr.write(f"Invalid option: {exc}\n")
        return 2

    analyzer = MetricsAnalyzer(
        parser=source_parser, options=options, result_cell=LastResultCell()
    )
    outcome = analyzer.analyze_file_detailed(str(source_path))
    if not outcome.ok:
        stderr.write(f"Analysis failed ({outcome.failure}): {outcome.detail}\n")
        return 1

    result = outcome.result
    if args.format == "json":
        payload = result_to_payload(result=result, thresholds=thresholds)
        if args.output:
            try:
                _write_json_file(payload=payload, output_path=Path(args.output))
            except OSError as exc:
                logger.warning(
                    f"Failed to write JSON output file (output_path={args.output} error={exc})"
                )
                stderr.write(f"Failed to write JSON output file: {args.output}\n")
                return 2
        else:
            _write_json(payload=payload, stdout=stdout)
    else:
        _write_tables(result=result, thresholds=thresholds, stdout=stdout)
    return 0


def result_to_payload(
    result: AnalysisResult, thresholds: MetricThresholds
) -> dict[str, Any]:
    """Convert a result into a JSON-serializable mapping.

    Args:
        result: Analysis result.
        thresholds: Limits used to flag exceeded metrics.

    Returns:
        Summary values, derived aggregates and per-method rows.
    """
    return {
        "file_name": result.file_name,
        "analyzed_at": result.analyzed_at.isoformat() if result.analyzed_at else None,
        "lines_of_code": result.lines_of_code,
        "comment_lines": result.comment_lines,
        "blank_lines": result.blank_lines,
        "comment_ratio": result.comment_ratio,
        "method_count": result.method_count,
        "max_cyclomatic_complexity": result.max_cyclomatic_complexity,
        "avg_cyclomatic_complexity": result.avg_cyclomatic_complexity,
        "max_nesting_depth": result.max_nesting_depth,
        "max_parameters": result.max_parameters,
        "exceeded": sorted(thresholds.exceeded_summary_metrics(result)),
        "methods": [
            {**asdict(method), "exceeds_threshold": thresholds.method_exceeds(method)}
            for method in result.methods
        ],
    }


def _write_json(payload: dict[str, Any], stdout: TextIO) -> None:
    """Write the payload in JSON format.

    Args:
        payload: Serializable result payload.
        stdout: Standard output stream.
    """
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    console.print(
        json.dumps(payload, indent=2, sort_keys=True),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


def _write_json_file(payload: dict[str, Any], output_path: Path) -> None:
    """Write raw JSON payload to an output file.

    Args:
        payload: Serializable result payload.
        output_path: Target file path.

    Raises:
        OSError: If directory creation or file writing fails.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")


def _write_tables(
    result: AnalysisResult, thresholds: MetricThresholds, stdout: TextIO
) -> None:
    """Write the summary and method tables.

    Rows above a threshold are highlighted.

    Args:
        result: Analysis result.
        thresholds: Limits used to flag rows.
        stdout: Standard output stream.
    """
    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    console.rule(result.file_name, style=Style(color="cyan"), characters="-")
    exceeded = thresholds.exceeded_summary_metrics(result)
    analyzed_at = result.analyzed_at.strftime("%H:%M:%S") if result.analyzed_at else ""

    summary = Table(show_header=True, expand=True)
    summary.add_column("metric", ratio=2)
    summary.add_column("value", ratio=1, justify="right")
    rows = [
        ("file", result.file_name, None),
        ("analyzed at", analyzed_at, None),
        ("lines of code", str(result.lines_of_code), "lines_of_code"),
        (
            "comment lines",
            f"{result.comment_lines} ({result.comment_ratio:.1%})",
            None,
        ),
        ("blank lines", str(result.blank_lines), None),
        ("methods", str(result.method_count), None),
        (
            "max cyclomatic complexity",
            str(result.max_cyclomatic_complexity),
            "max_cyclomatic_complexity",
        ),
        ("avg cyclomatic complexity", f"{result.avg_cyclomatic_complexity:.2f}", None),
        ("max nesting depth", str(result.max_nesting_depth), "max_nesting_depth"),
        ("max parameters", str(result.max_parameters), "max_parameters"),
    ]
    for label, value, metric in rows:
        style = WARNING_STYLE if metric in exceeded else None
        summary.add_row(label, value, style=style)
    console.print(summary)

    methods = Table(show_header=True, expand=True)
    methods.add_column("method", ratio=4, overflow="fold")
    methods.add_column("line", ratio=1, justify="right")
    methods.add_column("cc", ratio=1, justify="right")
    methods.add_column("nesting", ratio=1, justify="right")
    methods.add_column("params", ratio=1, justify="right")
    for method in result.methods:
        methods.add_row(
            method.name,
            str(method.start_line),
            str(method.cyclomatic_complexity),
            str(method.nesting_depth),
            str(method.parameter_count),
            style=WARNING_STYLE if thresholds.method_exceeds(method) else None,
        )
    console.print(methods)


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
