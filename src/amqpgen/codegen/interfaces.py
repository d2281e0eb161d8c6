"""Typed value declarations for every class and method in a schema."""
from amqpgen.codegen import symbols
from amqpgen.codegen.ir import Declaration, Field, ShapeDecl, UnionDecl
from amqpgen.naming import camel_case
from amqpgen.schema import Class, Method, Schema
from amqpgen.schema.types import python_type, resolve_python_type


def properties_shape(clazz: Class) -> ShapeDecl:
    """Header properties of ``clazz``; a header need not carry any of them."""
    return ShapeDecl(
        name=symbols.properties_name(clazz),
        fields=tuple(
            Field(camel_case(prop.name), python_type(prop.type), required=False)
            for prop in clazz.properties
        ),
    )


def method_args_shape(schema: Schema, clazz: Class, method: Method) -> ShapeDecl:
    """Arguments accepted by the encoder; defaulted arguments may be omitted."""
    return ShapeDecl(
        name=symbols.method_args_name(clazz, method),
        fields=tuple(
            Field(
                camel_case(arg.name),
                resolve_python_type(schema, arg),
                required=not arg.optional,
                default=arg.default,
            )
            for arg in method.arguments
        ),
    )


def method_value_shape(schema: Schema, clazz: Class, method: Method) -> ShapeDecl:
    """The method value after defaults are applied; every field is present."""
    return ShapeDecl(
        name=symbols.method_value_name(clazz, method),
        fields=tuple(
            Field(camel_case(arg.name), resolve_python_type(schema, arg))
            for arg in method.arguments
        ),
        doc=f"``{clazz.name}.{method.name}``",
    )


def receive_method_shape(clazz: Class, method: Method) -> ShapeDecl:
    return ShapeDecl(
        name=symbols.receive_method_name(clazz, method),
        fields=(
            Field('classId', f'Literal[{clazz.id}]'),
            Field('methodId', f'Literal[{method.id}]'),
            Field('args', symbols.method_value_name(clazz, method)),
        ),
    )


def header_shape(clazz: Class) -> ShapeDecl:
    return ShapeDecl(
        name=symbols.header_name(clazz),
        fields=(
            Field('classId', f'Literal[{clazz.id}]'),
            Field('props', symbols.properties_name(clazz)),
            Field('size', 'int'),
        ),
    )


def receive_method_union(schema: Schema) -> UnionDecl:
    return UnionDecl(
        symbols.RECEIVE_METHOD,
        tuple(symbols.receive_method_name(c, m) for c, m in schema.methods()),
    )


def header_union(schema: Schema) -> UnionDecl:
    return UnionDecl(
        symbols.HEADER,
        tuple(symbols.header_name(c) for c in schema.classes),
    )


def interface_declarations(schema: Schema) -> list[Declaration]:
    declarations: list[Declaration] = []
    for clazz in schema.classes:
        declarations.append(properties_shape(clazz))
        for method in clazz.methods:
            declarations.append(method_args_shape(schema, clazz, method))
            declarations.append(method_value_shape(schema, clazz, method))
            declarations.append(receive_method_shape(clazz, method))
        declarations.append(header_shape(clazz))
    declarations.append(receive_method_union(schema))
    declarations.append(header_union(schema))
    return declarations


__all__ = [
    "header_shape",
    "header_union",
    "interface_declarations",
    "method_args_shape",
    "method_value_shape",
    "properties_shape",
    "receive_method_shape",
    "receive_method_union",
]
