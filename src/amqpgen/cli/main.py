import argparse
import logging
import sys

from amqpgen.cli import generate, inspect
from amqpgen.errors import SchemaError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="amqpgen",
        description=(
            "Command line interface for amqpgen. Generates typed AMQP codecs "
            "from a protocol schema."
        ),
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.set_defaults(func=lambda args: parser.print_help())

    # amqpgen CLI Subcommands
    subparsers = parser.add_subparsers(dest="command")
    generate.add_parser(subparsers)
    inspect.add_parser(subparsers)

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    try:
        args.func(args)
    except (SchemaError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
