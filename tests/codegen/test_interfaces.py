"""Tests for the TypedDict declarations synthesized from a schema."""

from amqpgen.codegen.interfaces import (
    header_shape,
    interface_declarations,
    method_args_shape,
    method_value_shape,
    properties_shape,
    receive_method_shape,
    receive_method_union
)
from amqpgen.codegen.ir import Field, ShapeDecl, UnionDecl
from amqpgen.schema import Schema


def _lookup(schema: Schema, class_name: str, method_name: str):
    for clazz, method in schema.methods():
        if clazz.name == class_name and method.name == method_name:
            return clazz, method
    raise KeyError(f"{class_name}.{method_name}")


def test_method_args_shape(amqp_schema):
    clazz, method = _lookup(amqp_schema, "connection", "start-ok")
    shape = method_args_shape(amqp_schema, clazz, method)
    assert shape.name == "ConnectionStartOkArgs"
    assert shape.fields == (
        Field("clientProperties", "dict[str, Any]", required=True),
        Field("mechanism", "str", required=False, default="PLAIN"),
        Field("response", "str", required=True),
        Field("locale", "str", required=False, default="en_US"),
    )


def test_false_default_makes_argument_optional(amqp_schema):
    clazz, method = _lookup(amqp_schema, "queue", "declare")
    fields = {f.name: f for f in method_args_shape(amqp_schema, clazz, method).fields}
    assert fields["durable"].annotation == "bool"
    assert not fields["durable"].required
    assert fields["durable"].default is False
    assert fields["nowait"].annotation == "bool"
    assert fields["arguments"].default == {}


def test_method_value_shape_has_every_field(amqp_schema):
    clazz, method = _lookup(amqp_schema, "queue", "declare")
    shape = method_value_shape(amqp_schema, clazz, method)
    assert shape.name == "QueueDeclare"
    assert shape.doc == "``queue.declare``"
    assert all(f.required for f in shape.fields)
    assert [f.name for f in shape.fields] == [
        "reserved1", "queue", "passive", "durable",
        "exclusive", "autoDelete", "nowait", "arguments",
    ]


def test_receive_method_shape(amqp_schema):
    clazz, method = _lookup(amqp_schema, "basic", "deliver")
    assert receive_method_shape(clazz, method) == ShapeDecl(
        name="ReceiveBasicDeliver",
        fields=(
            Field("classId", "Literal[60]"),
            Field("methodId", "Literal[60]"),
            Field("args", "BasicDeliver"),
        ),
    )


def test_properties_and_header_shapes(amqp_schema):
    basic = amqp_schema.classes[-1]
    props = properties_shape(basic)
    assert props.name == "BasicProperties"
    assert not any(f.required for f in props.fields)
    assert props.fields[2] == Field("headers", "dict[str, Any]", required=False)
    assert props.fields[9] == Field("timestamp", "int", required=False)

    assert header_shape(basic) == ShapeDecl(
        name="BasicHeader",
        fields=(
            Field("classId", "Literal[60]"),
            Field("props", "BasicProperties"),
            Field("size", "int"),
        ),
    )


def test_class_without_properties_has_empty_shape(amqp_schema):
    connection = amqp_schema.classes[0]
    assert properties_shape(connection) == ShapeDecl("ConnectionProperties")


def test_receive_method_union_lists_every_method(amqp_schema):
    union = receive_method_union(amqp_schema)
    assert union.name == "ReceiveMethod"
    assert len(union.members) == len(amqp_schema.methods())
    assert union.members[0] == "ReceiveConnectionStart"
    assert "ReceiveBasicQosOk" in union.members


def test_declaration_order(amqp_schema):
    declarations = interface_declarations(amqp_schema)
    names = [d.name for d in declarations]
    assert names[:5] == [
        "ConnectionProperties",
        "ConnectionStartArgs",
        "ConnectionStart",
        "ReceiveConnectionStart",
        "ConnectionStartOkArgs",
    ]
    assert names.index("ConnectionHeader") < names.index("ChannelProperties")
    assert isinstance(declarations[-2], UnionDecl)
    assert [d.name for d in declarations[-2:]] == ["ReceiveMethod", "Header"]


def test_empty_schema_has_empty_unions():
    declarations = interface_declarations(Schema())
    assert declarations == [UnionDecl("ReceiveMethod"), UnionDecl("Header")]
