"""Names of the symbols emitted for each class and method."""
from amqpgen.naming import constant_name, pascal_case
from amqpgen.schema import Class, Method, Schema

RECEIVE_METHOD = 'ReceiveMethod'
HEADER = 'Header'
METHOD_DECODERS = '_METHOD_DECODERS'
HEADER_DECODERS = '_HEADER_DECODERS'
DECODE_METHOD = 'decodeMethod'
DECODE_HEADER = 'decodeHeader'


def method_value_name(clazz: Class, method: Method) -> str:
    return f'{pascal_case(clazz.name)}{pascal_case(method.name)}'


def method_args_name(clazz: Class, method: Method) -> str:
    return f'{method_value_name(clazz, method)}Args'


def receive_method_name(clazz: Class, method: Method) -> str:
    return f'Receive{method_value_name(clazz, method)}'


def properties_name(clazz: Class) -> str:
    return f'{pascal_case(clazz.name)}Properties'


def header_name(clazz: Class) -> str:
    return f'{pascal_case(clazz.name)}Header'


def encode_method_name(clazz: Class, method: Method) -> str:
    return f'encode{method_value_name(clazz, method)}'


def decode_method_name(clazz: Class, method: Method) -> str:
    return f'_decode{method_value_name(clazz, method)}'


def encode_header_name(clazz: Class) -> str:
    return f'encode{header_name(clazz)}'


def decode_header_name(clazz: Class) -> str:
    return f'_decode{header_name(clazz)}'


def schema_symbols(schema: Schema) -> list[tuple[str, str]]:
    """Every module level name generated for ``schema`` with the element it comes from."""
    names = [
        (name, "the generated module")
        for name in (RECEIVE_METHOD, HEADER, METHOD_DECODERS, HEADER_DECODERS, DECODE_METHOD, DECODE_HEADER)
    ]
    for constant in schema.constants:
        names.append((constant_name(constant.name), f"constant {constant.name}"))
    for clazz in schema.classes:
        where = f"class {clazz.name}"
        names.append((properties_name(clazz), where))
        names.append((header_name(clazz), where))
        names.append((encode_header_name(clazz), where))
        names.append((decode_header_name(clazz), where))
    for clazz, method in schema.methods():
        where = f"method {clazz.name}.{method.name}"
        for symbol in (
            method_args_name,
            method_value_name,
            receive_method_name,
            encode_method_name,
            decode_method_name,
        ):
            names.append((symbol(clazz, method), where))
    return names
