"""CLI argument parsing and the mcp-eval entry point."""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from . import __version__
from .assistants import AssistantName, DEFAULT_ASSISTANT
from .config import Settings, parse_headers
from .errors import MCPEvalError

logger = logging.getLogger("mcpeval")

NOISY_LOGGERS = ("httpx", "httpcore", "mcp", "openai")


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcp-eval",
        description="Evaluate how well a model picks MCP tools and their parameters",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Run a test suite against an MCP server")
    run.add_argument("tests", help="Path to the YAML test suite")
    run.add_argument("--url", required=True, help="URL of the MCP server")
    run.add_argument(
        "--assistant",
        default=DEFAULT_ASSISTANT.value,
        choices=[a.value for a in AssistantName],
        help="Assistant to emulate (default: %(default)s)",
    )
    run.add_argument(
        "--header",
        action="append",
        default=[],
        metavar="'Name: value'",
        help="HTTP header sent to the MCP server (repeatable)",
    )
    run.add_argument("--api-key", help="Model endpoint API key (default: $OPENROUTER_API_KEY)")
    run.add_argument("--output", help="Results file path (default: mcp-eval-results.json)")
    run.add_argument("--concurrency", type=_positive_int, help="Max test cases in flight")
    run.add_argument("--timeout", type=_positive_float, help="Per-test timeout in seconds")
    run.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(name)s - %(message)s",
    )
    if not verbose:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def run_command(args: argparse.Namespace) -> int:
    from .app import run_suite

    try:
        headers = parse_headers(args.header)
        settings = Settings.from_env().with_overrides(
            api_key=args.api_key,
            results_path=args.output,
            max_concurrency=args.concurrency,
            test_timeout=args.timeout,
        )
        result = asyncio.run(
            run_suite(
                args.tests,
                url=args.url,
                assistant=args.assistant,
                headers=headers,
                settings=settings,
            )
        )
    except MCPEvalError as e:
        logger.error(str(e))
        return 1

    print(result.aggregator.render_summary())
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    if args.command == "run":
        return run_command(args)

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
