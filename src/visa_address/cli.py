"""Command-line interface for visa-address.

Usage:
    # Show the fields of a resource string
    visa-address parse "USB0::0x0957::0x0407::MY12345678::INSTR"

    # Same, as JSON
    visa-address parse "USB::0x1A34::0x5678::A22-5" --json

    # Check every resource string in a YAML config
    visa-address check resources.yaml
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from visa_address.address import parse_address
from visa_address.config import check_config, load_config
from visa_address.errors import AddressError


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def cmd_parse(args: argparse.Namespace) -> int:
    """Parse one resource string and print its fields."""
    try:
        address = parse_address(args.address)
    except AddressError as exc:
        if args.json:
            print(
                json.dumps(
                    {
                        "error": type(exc).__name__,
                        "message": str(exc),
                        "found": exc.found,
                        "span": [exc.span.start, exc.span.end],
                    },
                    indent=2,
                )
            )
        else:
            print(f"Error: {exc.diagnostic()}")
        return 1

    if args.json:
        print(json.dumps(address.to_dict(), indent=2))
        return 0

    print(f"Kind: {address.kind.prefix}")
    print(f"Canonical: {address.render()}")
    for name, value in address.resource.to_dict().items():
        print(f"  {name}: {'(none)' if value is None else value}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Parse every resource string in a config file."""
    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}")
        return 1

    failures = 0
    for result in check_config(config):
        entry = result.entry
        if result.ok and result.address is not None:
            print(f"  OK    {entry.name}: {result.address.render()}")
        elif result.skipped:
            print(f"  SKIP  {entry.name}: {result.error}")
        else:
            failures += 1
            print(f"  FAIL  {entry.name}: {result.error}")
            if result.error is not None:
                # Skip the message line; it was printed above.
                for line in result.error.diagnostic().splitlines()[1:]:
                    print(f"      {line}")

    print(f"\n{len(config)} resource(s), {failures} failure(s)")
    return 1 if failures else 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="VISA resource string parser",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    parse_parser = subparsers.add_parser("parse", help="Parse a resource string")
    parse_parser.add_argument("address", help="VISA resource string")
    parse_parser.add_argument("--json", action="store_true", help="Print JSON output")

    check_parser = subparsers.add_parser("check", help="Check resource strings in a YAML config")
    check_parser.add_argument("config", help="Path to the YAML config file")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    setup_logging(args.debug)

    if args.command == "parse":
        return cmd_parse(args)
    elif args.command == "check":
        return cmd_check(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
