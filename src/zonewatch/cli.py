"""Command-line interface for ZONEWATCH.

Runs zone classification and pattern rules on a series read from a file
(or stdin). Values may be separated by commas, whitespace or newlines.

Usage:
    zonewatch patterns series.txt
    zonewatch patterns series.txt --collapse --format json
    zonewatch zones series.txt
    zonewatch normality series.txt --alpha 0.01
    zonewatch outliers series.txt
    zonewatch sequences series.txt --cluster-size 4 --threshold 0.75
    cat series.txt | zonewatch patterns -
    zonewatch rules
"""

import argparse
import json
import logging
import re
import sys
from pathlib import Path
from typing import Optional

from zonewatch import __version__
from zonewatch.config import settings
from zonewatch.engine.report import ReportAssembler
from zonewatch.engine.rules import RULE_DESCRIPTIONS, RULE_WINDOWS
from zonewatch.engine.zones import ZoneClassifier
from zonewatch.stats.normality import run_normality_tests
from zonewatch.stats.outliers import find_outliers
from zonewatch.stats.sequences import DEFAULT_CLUSTER_SIZE, sequence_analysis
from zonewatch.validation import validate_sample

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[,;\s]+")


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser.

    Returns:
        Configured ArgumentParser with all commands and arguments.
    """
    parser = argparse.ArgumentParser(
        prog="zonewatch",
        description="ZONEWATCH: control-chart zones and pattern rules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  zonewatch patterns series.txt
  zonewatch patterns series.txt --collapse --format json
  zonewatch zones series.txt
  cat series.txt | zonewatch patterns -
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_source(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "source",
            type=str,
            help="File with the series (comma/whitespace separated), or '-' for stdin",
        )
        sub.add_argument(
            "--format",
            type=str,
            choices=["text", "json"],
            default="text",
            help="Output format (default: text)",
        )

    # patterns command
    patterns_parser = subparsers.add_parser(
        "patterns",
        help="Run all pattern rules and summary statistics",
        description="Classify zones, run rules alpha … hotel, report statistics",
    )
    add_source(patterns_parser)
    patterns_parser.add_argument(
        "--collapse",
        action="store_true",
        default=None,
        help="Merge overlapping rule hits into contiguous ranges "
             "(default: ZONEWATCH_COLLAPSE)",
    )

    # zones command
    zones_parser = subparsers.add_parser(
        "zones",
        help="Show zone boundaries and per-point zone labels",
    )
    add_source(zones_parser)

    # normality command
    normality_parser = subparsers.add_parser(
        "normality",
        help="Run normality tests",
    )
    add_source(normality_parser)
    normality_parser.add_argument(
        "--alpha",
        type=float,
        default=None,
        help="Significance level (default: ZONEWATCH_NORMALITY_ALPHA)",
    )

    # outliers command
    outliers_parser = subparsers.add_parser(
        "outliers",
        help="Run z-score, modified z-score and IQR filters",
    )
    add_source(outliers_parser)

    # sequences command
    sequences_parser = subparsers.add_parser(
        "sequences",
        help="Count recurring clusters of consecutive values",
    )
    add_source(sequences_parser)
    sequences_parser.add_argument(
        "--cluster-size",
        type=int,
        default=DEFAULT_CLUSTER_SIZE,
        help=f"Points per cluster (default: {DEFAULT_CLUSTER_SIZE})",
    )
    sequences_parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Also report partial matches at this similarity, in (0, 1]",
    )

    # rules command
    subparsers.add_parser(
        "rules",
        help="List pattern rules and their window lengths",
    )

    # version command
    subparsers.add_parser(
        "version",
        help="Show version information",
    )

    return parser


def read_series(source: str) -> list[str]:
    """Read raw tokens from a file path or '-' (stdin).

    Tokens are returned as strings; numeric coercion happens in
    ``validate_sample``.
    """
    if source == "-":
        text = sys.stdin.read()
    else:
        text = Path(source).read_text(encoding="utf-8")
    return [token for token in _SEPARATORS.split(text) if token]


def _emit(payload: dict, text: str, fmt: str) -> None:
    if fmt == "json":
        print(json.dumps(payload, indent=2))
    else:
        print(text)


def cmd_patterns(args: argparse.Namespace) -> int:
    """Execute the patterns command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    collapse = settings.collapse if args.collapse is None else args.collapse
    sample = read_series(args.source)
    logger.info("Running pattern rules on %d values (collapse=%s)", len(sample), collapse)

    report = ReportAssembler().assemble(sample, collapse=collapse)
    _emit(report.to_dict(), report.format_text(), args.format)
    return 0


def cmd_zones(args: argparse.Namespace) -> int:
    """Execute the zones command."""
    result = ZoneClassifier().classify(read_series(args.source))

    lines = [f"mean = {result.mean:.4f}  σ = {result.std:.4f}  median = {result.median:.4f}"]
    for boundary in result.boundaries:
        lines.append(
            f"Zone {boundary.zone.value}: [{boundary.lower:.4f}, {boundary.upper:.4f})"
        )
    lines.append(f"Labels: {result.label_string()}")
    lines.append("Counts: " + ", ".join(f"{k}={v}" for k, v in result.counts().items()))
    _emit(result.to_dict(), "\n".join(lines), args.format)
    return 0


def cmd_normality(args: argparse.Namespace) -> int:
    """Execute the normality command."""
    alpha = settings.normality_alpha if args.alpha is None else args.alpha
    sample = validate_sample(read_series(args.source))
    results = run_normality_tests(sample, alpha)

    lines = []
    for name, result in results.items():
        if result.statistic is None:
            lines.append(f"{name:<20} N/A")
            continue
        verdict = "normal" if result.is_normal else "not normal"
        p_text = f"p = {result.p_value:.4f}" if result.p_value is not None else "p = n/a"
        lines.append(f"{name:<20} {result.statistic:.4f}  {p_text}  ({verdict} at α = {alpha})")
    _emit({k: v.to_dict() for k, v in results.items()}, "\n".join(lines), args.format)
    return 0


def cmd_outliers(args: argparse.Namespace) -> int:
    """Execute the outliers command."""
    sample = validate_sample(read_series(args.source))
    outliers = find_outliers(sample)
    lines = [f"{name:<16} {values if values else '-'}" for name, values in outliers.items()]
    _emit(outliers, "\n".join(lines), args.format)
    return 0


def cmd_sequences(args: argparse.Namespace) -> int:
    """Execute the sequences command."""
    result = sequence_analysis(
        read_series(args.source),
        cluster_size=args.cluster_size,
        threshold=args.threshold,
    )

    lines = [f"Repeated clusters of {result.cluster_size}: {result.strict_duplicates}"]
    lines.extend(f"  [{key}]  x{count}" for key, count in result.sequences.items())
    for key, matches in result.partials.items():
        for other, match in matches.items():
            lines.append(f"  [{key}] ~ [{other}]  coeff={match.coeff}  x{match.count}")
    _emit(result.to_dict(), "\n".join(lines), args.format)
    return 0


def cmd_rules(args: argparse.Namespace) -> int:
    """Execute the rules command."""
    for name, description in RULE_DESCRIPTIONS.items():
        print(f"{name:<8} L={RULE_WINDOWS[name]:<3} {description}")
    return 0


def cmd_version(args: argparse.Namespace) -> int:
    """Execute the version command."""
    print(f"ZONEWATCH v{__version__}")
    print("Control-chart zone classifier and pattern-rule engine")
    return 0


_COMMANDS = {
    "patterns": cmd_patterns,
    "zones": cmd_zones,
    "normality": cmd_normality,
    "outliers": cmd_outliers,
    "sequences": cmd_sequences,
    "rules": cmd_rules,
    "version": cmd_version,
}


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    parser = create_parser()
    args = parser.parse_args(argv)

    handler = _COMMANDS.get(args.command)
    if handler is None:
        # No command specified
        parser.print_help()
        return 0

    try:
        return handler(args)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130
    except Exception as e:
        logger.error("%s failed: %s", args.command, e, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cli_entry() -> None:
    """Console script entry point for setuptools."""
    sys.exit(main())


if __name__ == "__main__":
    cli_entry()
