from amqpgen.codegen import compile_module, generate_module, generate_source
from amqpgen.errors import (
    AmqpGenError,
    DecodeError,
    EncodingError,
    SchemaError,
    UnknownClassError,
    UnknownDomainError,
    UnknownMethodError,
    UnknownPrimitiveTypeError,
    UnresolvedTypeError
)
from amqpgen.schema import Schema
from amqpgen.schema.loader import load_schema, load_schema_file

__version__ = "0.1.0"

__all__ = [
    "AmqpGenError",
    "DecodeError",
    "EncodingError",
    "Schema",
    "SchemaError",
    "UnknownClassError",
    "UnknownDomainError",
    "UnknownMethodError",
    "UnknownPrimitiveTypeError",
    "UnresolvedTypeError",
    "compile_module",
    "generate_module",
    "generate_source",
    "load_schema",
    "load_schema_file",
]
