#!/usr/bin/env python3
"""
MSL CLI - Run and inspect MediaScrapeLang scripts

Usage:
    msl run <script.msl> [--verbose] [--download-dir DIR]
    msl parse <script.msl> [--format summary|json|yaml]
"""

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

import yaml

from msl_core.config import config
from msl_core.diagnostics import enable_diagnostics
from msl_core.errors import IoError, MSLError, ParseError, format_user_friendly_error
from msl_core.executor import run_script
from msl_core.parser import MSLParser
from msl_core.types import Script

logger = logging.getLogger(__name__)

SCRIPT_ARG_HELP = "Path to the MSL script file"


def _load_script(path: str) -> Script:
    logger.info(f"Loading script from: {path}")
    try:
        content = Path(path).read_text(encoding='utf-8')
    except OSError as e:
        raise IoError(path, f"failed to read script file: {e}") from e

    logger.info("Parsing script...")
    return MSLParser().parse(content)


def _report_error(error: Exception):
    info = format_user_friendly_error(error)
    logger.debug(f"{info['message']}", exc_info=error)
    print(f"Error: {info['technical']}", file=sys.stderr)
    if isinstance(error, ParseError) and error.remaining:
        print(f"  near: {error.remaining.splitlines()[0].strip()}", file=sys.stderr)
    print(f"Hint: {info['suggestion']}", file=sys.stderr)


def cmd_run(args) -> int:
    """Parse and execute a script"""
    enable_diagnostics("DEBUG" if args.verbose or config.debug else "INFO")
    run_config = replace(config, download_dir=args.download_dir) if args.download_dir else config

    try:
        script = _load_script(args.script)
        logger.info("Executing script...")
        report = asyncio.run(run_script(script, run_config))
    except MSLError as e:
        _report_error(e)
        return 1

    logger.info(
        f"Script execution completed successfully! "
        f"({report.commands_executed} commands, {len(report.downloads)} downloads)"
    )
    return 0


def print_summary(script: Script):
    print(f"Script contains {len(script.commands)} commands")
    for i, command in enumerate(script.commands, 1):
        print(f"  {i}: {command.describe()}")


def cmd_parse(args) -> int:
    """Parse a script and describe it without executing anything"""
    enable_diagnostics("INFO" if args.format == "summary" else "WARNING")

    try:
        script = _load_script(args.script)
    except MSLError as e:
        _report_error(e)
        return 1

    logger.info("Script parsed successfully!")
    if args.format == "json":
        print(json.dumps(script.to_dict(), indent=2, ensure_ascii=False))
    elif args.format == "yaml":
        print(yaml.safe_dump(script.to_dict(), default_flow_style=False, allow_unicode=True, sort_keys=False))
    else:
        print_summary(script)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="msl",
        description="MSL - MediaScrapeLang script runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    run_parser = subparsers.add_parser('run', help='Run an MSL script file')
    run_parser.add_argument('script', help=SCRIPT_ARG_HELP)
    run_parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose output')
    run_parser.add_argument('--download-dir', '-d', help=f'Media download directory (default: {config.download_dir})')
    run_parser.set_defaults(func=cmd_run)

    parse_parser = subparsers.add_parser('parse', help='Parse and validate an MSL script without executing')
    parse_parser.add_argument('script', help=SCRIPT_ARG_HELP)
    parse_parser.add_argument(
        '--format', '-f',
        choices=['summary', 'json', 'yaml'],
        default='summary',
        help='Output format',
    )
    parse_parser.set_defaults(func=cmd_parse)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1
    return int(args.func(args) or 0)


if __name__ == "__main__":
    sys.exit(main())
