"""Encoder functions for method frames and class header frames."""
import ast

from amqpgen.codegen import symbols
from amqpgen.codegen._ast import (
    _assign,
    _call,
    _literal,
    _method,
    _name,
    _subscript,
    _tuple
)
from amqpgen.codegen.ir import FunctionDecl
from amqpgen.naming import camel_case
from amqpgen.schema import Argument, Class, Method, Schema
from amqpgen.schema.types import check_primitive, resolve_type


def _argument_value(arg: Argument) -> ast.expr:
    key = ast.Constant(value=camel_case(arg.name))
    if arg.optional:
        # args.get('key', default)
        return _method('args', 'get', [key, _literal(arg.default)])
    # args['key']
    return _subscript(_name('args'), key)


def _describe(clazz: Class, method: Method) -> str:
    doc = f"Encode a ``{clazz.name}.{method.name}`` method frame payload."
    notes = []
    if method.synchronous:
        notes.append("Synchronous")
    if method.response is not None:
        notes.append(f"answered by ``{clazz.name}.{method.response}``")
    if method.content:
        notes.append("followed by a content header and body")
    if notes:
        doc += f"\n\n{', '.join(notes)}."
    return doc


def encode_method_function(schema: Schema, clazz: Class, method: Method) -> FunctionDecl:
    """Build ``encode<Class><Method>(args)``.

    Class id and method id are written as shorts, followed by one ``fields``
    call over ``(type, value)`` pairs in argument order. Missing optional
    arguments are replaced by their declared default here.
    """
    pairs = [
        _tuple([
            ast.Constant(value=check_primitive(resolve_type(schema, arg))),
            _argument_value(arg),
        ])
        for arg in method.arguments
    ]
    body: list[ast.stmt] = [
        _assign(['encoder'], _call(_name('AmqpEncoder'))),
        ast.Expr(value=_method('encoder', 'short', [ast.Constant(value=clazz.id)])),
        ast.Expr(value=_method('encoder', 'short', [ast.Constant(value=method.id)])),
        ast.Expr(value=_method('encoder', 'fields', [ast.List(elts=pairs, ctx=ast.Load())])),
        ast.Return(value=_method('encoder', 'save')),
    ]
    return FunctionDecl(
        name=symbols.encode_method_name(clazz, method),
        params=(('args', symbols.method_args_name(clazz, method)),),
        returns='bytes',
        body=tuple(body),
        doc=_describe(clazz, method),
    )


def encode_header_function(clazz: Class) -> FunctionDecl:
    """Build ``encode<Class>Header(size, props)``.

    Writes the class id, a zero weight, the body size as a longlong and the
    properties as optional fields.
    """
    pairs = [
        _tuple([
            ast.Constant(value=check_primitive(prop.type)),
            # props.get('key')
            _method('props', 'get', [ast.Constant(value=camel_case(prop.name))]),
        ])
        for prop in clazz.properties
    ]
    body: list[ast.stmt] = [
        _assign(['encoder'], _call(_name('AmqpEncoder'))),
        ast.Expr(value=_method('encoder', 'short', [ast.Constant(value=clazz.id)])),
        ast.Expr(value=_method('encoder', 'short', [ast.Constant(value=0)])),
        ast.Expr(value=_method('encoder', 'longlong', [_name('size')])),
        ast.Expr(value=_method('encoder', 'optional_fields', [ast.List(elts=pairs, ctx=ast.Load())])),
        ast.Return(value=_method('encoder', 'save')),
    ]
    return FunctionDecl(
        name=symbols.encode_header_name(clazz),
        params=(('size', 'int'), ('props', symbols.properties_name(clazz))),
        returns='bytes',
        body=tuple(body),
        doc=f"Encode a ``{clazz.name}`` content header frame payload.",
    )


def encoder_declarations(schema: Schema) -> list[FunctionDecl]:
    declarations = []
    for clazz in schema.classes:
        for method in clazz.methods:
            declarations.append(encode_method_function(schema, clazz, method))
        declarations.append(encode_header_function(clazz))
    return declarations


__all__ = ["encode_header_function", "encode_method_function", "encoder_declarations"]
