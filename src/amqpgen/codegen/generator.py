"""Run every synthesis pass over a schema and assemble the generated module."""
from __future__ import annotations

import keyword
import logging
from types import ModuleType

from amqpgen.codegen import symbols
from amqpgen.codegen.constants import constant_declarations
from amqpgen.codegen.decoders import decoder_declarations, dispatch_declarations
from amqpgen.codegen.encoders import encoder_declarations
from amqpgen.codegen.interfaces import interface_declarations
from amqpgen.codegen.ir import DEFAULT_IMPORTS, Declaration, GeneratedModule
from amqpgen.codegen.printer import render
from amqpgen.errors import SchemaError
from amqpgen.schema import Schema

logger = logging.getLogger(__name__)


def _imported_names(imports: tuple[str, ...]) -> set[str]:
    names: set[str] = set()
    for line in imports:
        if ' import ' in line:
            names.update(name.strip() for name in line.split(' import ', 1)[1].split(','))
    return names


def check_symbols(schema: Schema, imports: tuple[str, ...] = DEFAULT_IMPORTS) -> None:
    """Reject schemas whose generated names cannot coexist in one module.

    Raises:
        SchemaError: A generated name is not a valid identifier, shadows one of
            ``imports`` or is produced twice.
    """
    imported = _imported_names(imports)
    seen: dict[str, str] = {}
    for name, origin in symbols.schema_symbols(schema):
        if not name.isidentifier() or keyword.iskeyword(name):
            raise SchemaError(f"{origin}: generated name '{name}' is not a valid identifier")
        if name in imported:
            raise SchemaError(f"{origin}: generated name '{name}' shadows an imported name")
        if name in seen:
            raise SchemaError(f"{origin}: generated name '{name}' is already used by {seen[name]}")
        seen[name] = origin


def generate_module(schema: Schema) -> GeneratedModule:
    """Build the declarations for ``schema``.

    Generated names are checked first. The passes only read the schema, so the
    first malformed element aborts the run with the error raised by the type
    resolver.
    """
    check_symbols(schema)
    declarations: list[Declaration] = []
    declarations.extend(constant_declarations(schema))
    declarations.extend(interface_declarations(schema))
    declarations.extend(encoder_declarations(schema))
    declarations.extend(decoder_declarations(schema))
    declarations.extend(dispatch_declarations(schema))
    logger.debug(
        f"Generated {len(declarations)} declarations for "
        f"{len(schema.classes)} classes and {len(schema.methods())} methods"
    )
    return GeneratedModule(tuple(declarations))


def generate_source(schema: Schema) -> str:
    """Return the source text of the module generated for ``schema``."""
    return render(generate_module(schema))


def compile_module(schema: Schema, name: str = 'amqp_generated') -> ModuleType:
    """Generate, compile and execute the module for ``schema``.

    The returned module is not registered in ``sys.modules``.
    """
    source = generate_source(schema)
    module = ModuleType(name)
    code = compile(source, f'<{name}>', 'exec')
    exec(code, module.__dict__)
    logger.debug(f"Compiled generated module {name}")
    return module


__all__ = ["check_symbols", "compile_module", "generate_module", "generate_source"]
