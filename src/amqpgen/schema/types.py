"""Resolve schema arguments to primitive wire types and Python storage types."""
from amqpgen.errors import (
    UnknownDomainError,
    UnknownPrimitiveTypeError,
    UnresolvedTypeError
)
from amqpgen.schema import (
    PRIMITIVE_TYPE_MAP,
    Argument,
    ByDomain,
    Explicit,
    Schema
)


def resolve_type(schema: Schema, argument: Argument) -> str:
    """Return the primitive type of ``argument``.

    An explicit type is returned as is. A domain reference is looked up in the
    schema's domain table.

    Raises:
        UnknownDomainError: The domain is not defined by the schema.
        UnresolvedTypeError: The argument carries no usable type information.
    """
    arg_type = argument.type
    if isinstance(arg_type, Explicit):
        return arg_type.type
    if isinstance(arg_type, ByDomain):
        if (primitive := schema.domain_type(arg_type.domain)) is None:
            raise UnknownDomainError(arg_type.domain)
        return primitive
    raise UnresolvedTypeError(f"Cannot determine type of argument '{argument.name}'")


def python_type(primitive: str) -> str:
    """Return the Python annotation used to store values of ``primitive``."""
    try:
        return PRIMITIVE_TYPE_MAP[primitive]
    except KeyError:
        raise UnknownPrimitiveTypeError(primitive) from None


def check_primitive(primitive: str) -> str:
    """Return ``primitive`` unchanged if it is in the closed primitive set."""
    python_type(primitive)
    return primitive


def resolve_python_type(schema: Schema, argument: Argument) -> str:
    return python_type(resolve_type(schema, argument))


__all__ = ["check_primitive", "python_type", "resolve_python_type", "resolve_type"]
