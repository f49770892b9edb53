"""
Command-line interface for whatif.

Usage:
    whatif recompute request.json
    whatif recompute request.json -o result.json --tax-year 2025
    cat request.json | whatif recompute
"""

import argparse
import sys
from pathlib import Path

import orjson
from pydantic import ValidationError

from whatif.core.errors import ScenarioError
from whatif.core.logging import configure_logging, get_logger
from whatif.scenarios.schemas import ScenarioRequest, recompute_scenario_from_request

logger = get_logger(__name__)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="whatif",
        description="Recompute low/base/high tax totals for a taxable-income change",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    recompute_parser = subparsers.add_parser(
        "recompute",
        help="Recompute a scenario from a JSON request",
    )
    recompute_parser.add_argument(
        "input",
        type=Path,
        nargs="?",
        help="Request JSON file (default: stdin)",
    )
    recompute_parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Output file path (default: stdout)",
    )
    recompute_parser.add_argument(
        "--tax-year",
        type=int,
        help="Tax year (default: TAX_YEAR setting)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    configure_logging()

    if args.input is not None and not args.input.exists():
        print(f"Error: {args.input} not found", file=sys.stderr)
        sys.exit(1)

    raw = args.input.read_bytes() if args.input is not None else sys.stdin.buffer.read()

    try:
        request = ScenarioRequest.model_validate_json(raw)
    except ValidationError as exc:
        print(f"Error: invalid request\n{exc}", file=sys.stderr)
        sys.exit(2)

    try:
        result = recompute_scenario_from_request(request, tax_year=args.tax_year)
    except ScenarioError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    # Decimal amounts serialize as strings
    output = orjson.dumps(result, default=str, option=orjson.OPT_INDENT_2)

    if args.output:
        args.output.write_bytes(output)
        logger.info("scenario_written", path=str(args.output))
    else:
        sys.stdout.write(output.decode("utf-8") + "\n")


if __name__ == "__main__":
    main()
