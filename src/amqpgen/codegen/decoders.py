"""Decoder functions and the class/method dispatchers built on them.

Every decoder reads its fields with the same ordered type list the matching
encoder writes and maps the positional results back onto keys. Decoding never
fills in defaults: a value is whatever the field codec produced.
"""
import ast

from amqpgen.codegen import symbols
from amqpgen.codegen._ast import (
    _assign,
    _call,
    _method,
    _name,
    _subscript,
    _tuple
)
from amqpgen.codegen.ir import Declaration, FunctionDecl, TableDecl
from amqpgen.naming import camel_case
from amqpgen.schema import Class, Method, Schema
from amqpgen.schema.types import check_primitive, resolve_type

_DECODER_PARAMS = (('decoder', 'AmqpDecoder'),)


def _field(index: int) -> ast.Subscript:
    # fields[index]
    return _subscript(_name('fields'), ast.Constant(value=index))


def _read_fields(method: str, types: list[str]) -> ast.Assign:
    # fields = decoder.<method>((type, ...))
    return _assign(
        ['fields'],
        _method('decoder', method, [_tuple([ast.Constant(value=t) for t in types])]),
    )


def decode_method_function(schema: Schema, clazz: Class, method: Method) -> FunctionDecl:
    types = [check_primitive(resolve_type(schema, arg)) for arg in method.arguments]
    value = ast.Dict(
        keys=[ast.Constant(value=camel_case(arg.name)) for arg in method.arguments],
        values=[_field(index) for index in range(len(method.arguments))],
    )
    return FunctionDecl(
        name=symbols.decode_method_name(clazz, method),
        params=_DECODER_PARAMS,
        returns=symbols.method_value_name(clazz, method),
        body=(_read_fields('fields', types), ast.Return(value=value)),
    )


def decode_header_function(clazz: Class) -> FunctionDecl:
    """Build the header decoder for ``clazz``.

    The class id has already been consumed by the dispatcher. Properties
    missing from the frame are left out of ``props``.
    """
    types = [check_primitive(prop.type) for prop in clazz.properties]
    properties = symbols.properties_name(clazz)
    body: list[ast.stmt] = [
        _assign(['_weight'], _method('decoder', 'short')),
        _assign(['size'], _method('decoder', 'longlong')),
        _read_fields('optional_fields', types),
        # props: <Class>Properties = {}
        ast.AnnAssign(
            target=_name('props', ast.Store()),
            annotation=_name(properties),
            value=ast.Dict(keys=[], values=[]),
            simple=1,
        ),
    ]
    for index, prop in enumerate(clazz.properties):
        # if fields[i] is not None: props['key'] = fields[i]
        body.append(ast.If(
            test=ast.Compare(
                left=_field(index),
                ops=[ast.IsNot()],
                comparators=[ast.Constant(value=None)],
            ),
            body=[ast.Assign(
                targets=[_subscript(
                    _name('props'),
                    ast.Constant(value=camel_case(prop.name)),
                    ast.Store(),
                )],
                value=_field(index),
            )],
            orelse=[],
        ))
    body.append(ast.Return(value=ast.Dict(
        keys=[ast.Constant(value=k) for k in ('classId', 'props', 'size')],
        values=[ast.Constant(value=clazz.id), _name('props'), _name('size')],
    )))
    return FunctionDecl(
        name=symbols.decode_header_name(clazz),
        params=_DECODER_PARAMS,
        returns=symbols.header_name(clazz),
        body=tuple(body),
    )


def method_decoder_table(schema: Schema) -> TableDecl:
    """``class id -> method id -> decoder`` for every method in the schema."""
    return TableDecl(
        name=symbols.METHOD_DECODERS,
        annotation='dict[int, dict[int, Callable[[AmqpDecoder], Any]]]',
        entries=tuple(
            (clazz.id, tuple(
                (method.id, symbols.decode_method_name(clazz, method))
                for method in clazz.methods
            ))
            for clazz in schema.classes
        ),
    )


def header_decoder_table(schema: Schema) -> TableDecl:
    return TableDecl(
        name=symbols.HEADER_DECODERS,
        annotation=f'dict[int, Callable[[AmqpDecoder], {symbols.HEADER}]]',
        entries=tuple(
            (clazz.id, symbols.decode_header_name(clazz)) for clazz in schema.classes
        ),
    )


def _raise(error: str, args: list[str]) -> ast.Raise:
    return ast.Raise(exc=_call(_name(error), [_name(a) for a in args]), cause=None)


def method_dispatch_function() -> FunctionDecl:
    """Build ``decodeMethod(data)``.

    Reads the class id and routes on it, then reads the method id and routes
    on that. An unknown class raises ``UnknownClassError``; an unknown method
    of a known class raises ``UnknownMethodError``.
    """
    body: list[ast.stmt] = [
        _assign(['decoder'], _call(_name('AmqpDecoder'), [_name('data')])),
        _assign(['class_id'], _method('decoder', 'short')),
        _assign(['methods'], _method(symbols.METHOD_DECODERS, 'get', [_name('class_id')])),
        ast.If(
            test=ast.Compare(left=_name('methods'), ops=[ast.Is()], comparators=[ast.Constant(value=None)]),
            body=[_raise('UnknownClassError', ['class_id'])],
            orelse=[],
        ),
        _assign(['method_id'], _method('decoder', 'short')),
        _assign(['decode'], _method('methods', 'get', [_name('method_id')])),
        ast.If(
            test=ast.Compare(left=_name('decode'), ops=[ast.Is()], comparators=[ast.Constant(value=None)]),
            body=[_raise('UnknownMethodError', ['class_id', 'method_id'])],
            orelse=[],
        ),
        ast.Return(value=ast.Dict(
            keys=[ast.Constant(value=k) for k in ('classId', 'methodId', 'args')],
            values=[_name('class_id'), _name('method_id'), _call(_name('decode'), [_name('decoder')])],
        )),
    ]
    return FunctionDecl(
        name=symbols.DECODE_METHOD,
        params=(('data', 'bytes'),),
        returns=symbols.RECEIVE_METHOD,
        body=tuple(body),
        doc="Decode a method frame payload into its class id, method id and arguments.",
    )


def header_dispatch_function() -> FunctionDecl:
    body: list[ast.stmt] = [
        _assign(['decoder'], _call(_name('AmqpDecoder'), [_name('data')])),
        _assign(['class_id'], _method('decoder', 'short')),
        _assign(['decode'], _method(symbols.HEADER_DECODERS, 'get', [_name('class_id')])),
        ast.If(
            test=ast.Compare(left=_name('decode'), ops=[ast.Is()], comparators=[ast.Constant(value=None)]),
            body=[_raise('UnknownClassError', ['class_id'])],
            orelse=[],
        ),
        ast.Return(value=_call(_name('decode'), [_name('decoder')])),
    ]
    return FunctionDecl(
        name=symbols.DECODE_HEADER,
        params=(('data', 'bytes'),),
        returns=symbols.HEADER,
        body=tuple(body),
        doc="Decode a content header frame payload.",
    )


def decoder_declarations(schema: Schema) -> list[Declaration]:
    declarations: list[Declaration] = []
    for clazz in schema.classes:
        for method in clazz.methods:
            declarations.append(decode_method_function(schema, clazz, method))
        declarations.append(decode_header_function(clazz))
    return declarations


def dispatch_declarations(schema: Schema) -> list[Declaration]:
    return [
        method_decoder_table(schema),
        header_decoder_table(schema),
        method_dispatch_function(),
        header_dispatch_function(),
    ]


__all__ = [
    "decode_header_function",
    "decode_method_function",
    "decoder_declarations",
    "dispatch_declarations",
    "header_decoder_table",
    "header_dispatch_function",
    "method_decoder_table",
    "method_dispatch_function",
]
