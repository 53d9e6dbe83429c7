"""Command-line entry point for the Magento code scanner."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from .config import ScanConfig, load_config
from .engine import ScanEngine
from .errors import CodeScanError, ScanRootUnavailable
from .registry import default_registry
from .result import ScanResult, format_findings_table

DEFAULT_ROOT = "app/code"
EXIT_FINDINGS = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codescan",
        description="Scan custom Magento modules for common bad practices.",
    )
    parser.add_argument(
        "root",
        nargs="?",
        default=DEFAULT_ROOT,
        help=f"Directory holding the custom modules (defaults to {DEFAULT_ROOT}).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML configuration file (defaults to .codescan.yaml when present).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of files scanned in parallel (overrides configuration).",
    )
    parser.add_argument(
        "--out",
        "--output",
        dest="output_path",
        type=str,
        default=None,
        help="Path to write the JSON report (e.g., artifacts/codescan.json).",
    )
    parser.add_argument(
        "--fail-on-findings",
        action="store_true",
        help="Exit with status 1 when any finding is reported.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log per-file progress.",
    )
    return parser


def run_scan(root: str, config: ScanConfig) -> ScanResult:
    registry = default_registry().without(config.disabled_rules)
    engine = ScanEngine(
        registry,
        workers=config.workers,
        exclude=config.exclude,
        strict_markup=config.strict_markup,
    )
    return engine.scan(Path(root))


def write_output(result: ScanResult, output_path: str | None) -> None:
    print("DevHelper Code Scanner")
    print("=" * 40)
    print("Scanning for bad practices...")
    print()
    if result.passed:
        print("[OK] No bad practices found!")
    else:
        print("[WARNING] Possible bad practices found:")
        print()
        print(format_findings_table(result))
    for diagnostic in result.diagnostics:
        print(f"[SKIPPED] {diagnostic.file}: {diagnostic.kind} ({diagnostic.message})")

    if output_path:
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")
        print(f"\nReport written to {output_path}")


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.workers is not None and args.workers < 1:
        parser.error("--workers must be at least 1")

    try:
        config = load_config(args.config)
        if args.workers is not None:
            config.workers = args.workers
        result = run_scan(args.root, config)
    except ScanRootUnavailable as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except CodeScanError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    write_output(result, args.output_path)
    if args.fail_on_findings and not result.passed:
        return EXIT_FINDINGS
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
