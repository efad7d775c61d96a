"""Main module for the image identification CLI."""

import os
import sys
import argparse
from typing import List, Optional

from . import __version__
from .core.exceptions import ConfigurationError
from .core.factories import ServiceFactory
from .core.logging_config import get_logger


def _read_payload(source: str) -> bytes:
    if source == "-":
        return sys.stdin.buffer.read()
    with open(source, "rb") as handle:
        return handle.read()


def build_parser() -> argparse.ArgumentParser:
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="image-identification",
        description="Image identification - classify an uploaded image and store the result",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Replay a saved object storage event against the configured buckets
  OCI_NAMESPACE=mytenancy image-identification invoke --payload event.json

  # Read the event from stdin with debug logging
  cat event.json | image-identification invoke --payload - --debug

  # Show version
  image-identification version
        """,
    )

    subparsers: argparse._SubParsersAction = parser.add_subparsers(
        dest="command", help="Available commands"
    )

    invoke_parser: argparse.ArgumentParser = subparsers.add_parser(
        "invoke", help="Handle one event payload using settings from the environment"
    )
    invoke_parser.add_argument(
        "--payload", required=True, help="Path to the event JSON, or '-' for stdin"
    )
    invoke_parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging"
    )

    subparsers.add_parser("version", help="Show version information")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """
    Entry point for the command-line interface.

    ``invoke`` runs exactly what the deployed function runs for one event,
    with configuration taken from environment variables. The exit status is
    1 when the outcome is the generic error, 0 otherwise.
    """
    parser = build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    if args.command == "invoke":
        settings = dict(os.environ)
        if args.debug:
            settings["DEBUG"] = "true"

        try:
            service = ServiceFactory.from_settings(settings)
        except ConfigurationError as e:
            get_logger().error(str(e))
            sys.exit(2)

        outcome = service.handle(_read_payload(args.payload))
        print(outcome.message)
        sys.exit(0 if outcome.success else 1)

    elif args.command == "version":
        print("Image Identification Function")
        print(f"Version {__version__}")
        sys.exit(0)

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
