import logging
from pathlib import Path
from textwrap import dedent

from amqpgen.codegen import generate_source
from amqpgen.schema.loader import load_schema_file

logger = logging.getLogger(__name__)


def _run_generate(args) -> None:
    schema = load_schema_file(Path(args.schema))
    source = generate_source(schema)
    if args.output is None:
        print(source, end="")
        return

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(source, encoding="utf-8")
    logger.info(f"Wrote {output_path}")


def add_parser(subparsers) -> None:
    parser = subparsers.add_parser(
        "generate",
        help="Generate a Python codec module from a protocol schema.",
        description=dedent("""
            Generate a Python module from a JSON protocol schema containing:
            - TypedDict declarations for properties, method arguments and values
            - encode functions for every method and class header
            - decodeMethod and decodeHeader dispatchers
            - one constant per schema constant

            The module is written to stdout unless --output is given.
        """),
    )
    parser.add_argument("schema", help="Path to the JSON protocol schema")
    parser.add_argument("-o", "--output", help="Output file path (*.py)")
    parser.set_defaults(func=_run_generate)
