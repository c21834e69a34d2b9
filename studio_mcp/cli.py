#!/usr/bin/env python3
"""Command-line entry point: turn a templated command into an MCP stdio server.

Usage::

    studio-mcp [--debug] <command> [template words...]

Everything from the first positional word on is the command template, so
flags such as ``say -v siri`` belong to the command rather than to this CLI.
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from studio_mcp import __version__
from studio_mcp.blueprint import Blueprint
from studio_mcp.config.settings import settings
from studio_mcp.errors import UsageError
from studio_mcp.server import describe_tool, run_stdio

cli_logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [studio-mcp] %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="studio-mcp",
        description="Expose a shell command as an MCP tool. Use {{name#description}} "
        "for required arguments, [name] for an optional argument and [name...] for "
        "additional arguments.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Verbose logging on stderr"
    )
    parser.add_argument(
        "--describe",
        action="store_true",
        help="Print the generated tool as JSON and exit instead of serving"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command to expose, followed by its template words"
    )
    return parser


def parse_command(parser: argparse.ArgumentParser, argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse host flags, leaving every word after the command untouched."""
    args = parser.parse_args(argv)
    if not args.command:
        raise UsageError("a command to expose is required")
    return args


def configure_logging(level: str) -> None:
    # stdout carries the MCP protocol, so logs must go to stderr.
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for serving a command blueprint."""
    parser = build_parser()
    try:
        args = parse_command(parser, argv)
    except UsageError as e:
        parser.print_usage(sys.stderr)
        print(f"Error: {e}", file=sys.stderr)
        return 2

    config = settings.with_overrides(log_level="DEBUG") if args.debug else settings
    configure_logging(config.log_level)

    blueprint = Blueprint.from_args(args.command)

    if args.describe:
        print(json.dumps(describe_tool(blueprint), indent=2))
        return 0

    try:
        asyncio.run(run_stdio(blueprint, config))
    except KeyboardInterrupt:
        cli_logger.info("Interrupted, shutting down")
    return 0


if __name__ == "__main__":
    sys.exit(main())
