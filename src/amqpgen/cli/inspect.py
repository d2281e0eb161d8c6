from pathlib import Path
from textwrap import dedent

from rich.console import Console
from rich.table import Table

from amqpgen.codegen import symbols
from amqpgen.schema import Schema
from amqpgen.schema.loader import load_schema_file
from amqpgen.schema.types import resolve_type


def create_methods_table(schema: Schema) -> Table:
    """Create a table listing every method and its wire discriminators."""
    table = Table(title="Methods", show_header=True, header_style="bold")
    table.add_column("Class", style="cyan")
    table.add_column("Method")
    table.add_column("Ids", justify="right")
    table.add_column("Arguments")
    table.add_column("Flags", style="dim")

    for clazz, method in schema.methods():
        arguments = ", ".join(
            f"{arg.name}: {resolve_type(schema, arg)}" + ("?" if arg.optional else "")
            for arg in method.arguments
        )
        flags = []
        if method.synchronous:
            flags.append("sync")
        if method.content:
            flags.append("content")
        if method.response:
            flags.append(f"-> {method.response}")
        table.add_row(
            clazz.name,
            symbols.method_value_name(clazz, method),
            f"{clazz.id}/{method.id}",
            arguments,
            " ".join(flags),
        )
    return table


def create_properties_table(schema: Schema) -> Table:
    table = Table(title="Header properties", show_header=True, header_style="bold")
    table.add_column("Class", style="cyan")
    table.add_column("Property")
    table.add_column("Type")
    for clazz in schema.classes:
        for prop in clazz.properties:
            table.add_row(clazz.name, prop.name, prop.type)
    return table


def create_constants_table(schema: Schema) -> Table:
    table = Table(title="Constants", show_header=True, header_style="bold")
    table.add_column("Name")
    table.add_column("Value", justify="right")
    table.add_column("Class", style="dim")
    for constant in schema.constants:
        table.add_row(constant.name, str(constant.value), constant.class_name or "")
    return table


def _run_inspect(args) -> None:
    schema = load_schema_file(Path(args.schema))
    console = Console()
    console.print(create_methods_table(schema))
    if any(clazz.properties for clazz in schema.classes):
        console.print(create_properties_table(schema))
    if schema.constants:
        console.print(create_constants_table(schema))


def add_parser(subparsers) -> None:
    parser = subparsers.add_parser(
        "inspect",
        help="Display the classes, methods and constants of a protocol schema.",
        description=dedent("""
            Display a protocol schema as tables:
            - every method with its class id, method id and resolved argument types
            - header properties per class
            - constants
        """),
    )
    parser.add_argument("schema", help="Path to the JSON protocol schema")
    parser.set_defaults(func=_run_inspect)
