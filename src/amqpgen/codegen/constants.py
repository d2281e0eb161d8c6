from amqpgen.codegen.ir import ConstantDecl
from amqpgen.naming import constant_name
from amqpgen.schema import Constant, Schema


def constant_declaration(constant: Constant) -> ConstantDecl:
    # The owning class is informational only
    return ConstantDecl(constant_name(constant.name), constant.value, constant.class_name)


def constant_declarations(schema: Schema) -> list[ConstantDecl]:
    return [constant_declaration(c) for c in schema.constants]


__all__ = ["constant_declaration", "constant_declarations"]
