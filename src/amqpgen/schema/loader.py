import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from amqpgen.errors import SchemaError, UnresolvedTypeError
from amqpgen.naming import camel_case
from amqpgen.schema import (
    Argument,
    ArgumentType,
    ByDomain,
    Class,
    Constant,
    Domain,
    Explicit,
    Method,
    Property,
    Schema
)

logger = logging.getLogger(__name__)


def _require(record: Mapping[str, Any], key: str, kind: type | tuple[type, ...], where: str) -> Any:
    if key not in record:
        raise SchemaError(f"{where}: missing '{key}'")
    value = record[key]
    # bool is an int subclass but never a valid id or value
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise SchemaError(f"{where}: '{key}' has invalid value {value!r}")
    return value


def _records(value: Any, where: str) -> list[Mapping[str, Any]]:
    if not isinstance(value, list) or not all(isinstance(v, Mapping) for v in value):
        raise SchemaError(f"{where}: expected a list of objects")
    return value


def _check_keys(names: list[str], where: str) -> None:
    # Names become dictionary keys in their lower-camel form
    seen: dict[str, str] = {}
    for name in names:
        if not name:
            raise SchemaError(f"{where}: empty name")
        key = camel_case(name)
        if key in seen:
            raise SchemaError(
                f"{where}: '{seen[key]}' and '{name}' both map to key '{key}'"
            )
        seen[key] = name


def _parse_argument_type(record: Mapping[str, Any], where: str) -> ArgumentType:
    # An explicit type wins over a domain reference
    if (type_name := record.get('type')) is not None:
        if not isinstance(type_name, str):
            raise SchemaError(f"{where}: 'type' must be a string")
        return Explicit(type_name)
    if (domain := record.get('domain')) is not None:
        if not isinstance(domain, str):
            raise SchemaError(f"{where}: 'domain' must be a string")
        return ByDomain(domain)
    raise UnresolvedTypeError(f"{where}: argument has neither 'type' nor 'domain'")


def _parse_argument(record: Mapping[str, Any], where: str) -> Argument:
    name = _require(record, 'name', str, where)
    where = f"{where}.{name}"
    return Argument(
        name=name,
        type=_parse_argument_type(record, where),
        default=record.get('default-value'),
    )


def _parse_method(record: Mapping[str, Any], where: str) -> Method:
    name = _require(record, 'name', str, where)
    where = f"{where}.{name}"
    response = record.get('response')
    if response is not None and not isinstance(response, str):
        raise SchemaError(f"{where}: 'response' must be a string")
    arguments = tuple(
        _parse_argument(arg, where)
        for arg in _records(record.get('arguments', []), f"{where}.arguments")
    )
    _check_keys([arg.name for arg in arguments], f"{where}.arguments")
    return Method(
        id=_require(record, 'id', int, where),
        name=name,
        arguments=arguments,
        synchronous=bool(record.get('synchronous', False)),
        response=response,
        content=bool(record.get('content', False)),
    )


def _parse_class(record: Mapping[str, Any]) -> Class:
    name = _require(record, 'name', str, "class")
    where = f"class {name}"
    methods = tuple(
        _parse_method(method, where)
        for method in _records(record.get('methods', []), f"{where}.methods")
    )
    seen: set[int] = set()
    for method in methods:
        if method.id in seen:
            raise SchemaError(f"{where}: duplicate method id {method.id}")
        seen.add(method.id)

    properties = tuple(
        Property(
            name=_require(prop, 'name', str, f"{where}.properties"),
            type=_require(prop, 'type', str, f"{where}.properties"),
        )
        for prop in _records(record.get('properties') or [], f"{where}.properties")
    )
    _check_keys([prop.name for prop in properties], f"{where}.properties")
    return Class(
        id=_require(record, 'id', int, where),
        name=name,
        methods=methods,
        properties=properties,
    )


def _parse_domains(value: Any) -> tuple[Domain, ...]:
    if not isinstance(value, list):
        raise SchemaError("domains: expected a list of [name, type] pairs")
    domains = []
    for pair in value:
        if (
            not isinstance(pair, (list, tuple))
            or len(pair) != 2
            or not all(isinstance(v, str) for v in pair)
        ):
            raise SchemaError(f"domains: invalid entry {pair!r}")
        domains.append(Domain(pair[0], pair[1]))
    return tuple(domains)


def _parse_constant(record: Mapping[str, Any]) -> Constant:
    name = _require(record, 'name', str, "constant")
    class_name = record.get('class')
    if class_name is not None and not isinstance(class_name, str):
        raise SchemaError(f"constant {name}: 'class' must be a string")
    return Constant(
        name=name,
        value=_require(record, 'value', int, f"constant {name}"),
        class_name=class_name,
    )


def load_schema(document: Mapping[str, Any]) -> Schema:
    """Convert an untyped schema document into a :class:`Schema`.

    The document holds ``classes``, ``domains`` (a list of ``[name, type]``
    pairs) and ``constants``. Every record is validated here so that the
    generator only ever sees well-formed input.
    """
    if not isinstance(document, Mapping):
        raise SchemaError("Schema document must be an object")

    classes = tuple(_parse_class(c) for c in _records(document.get('classes', []), "classes"))
    seen: dict[int, str] = {}
    for clazz in classes:
        if clazz.id in seen:
            raise SchemaError(
                f"Duplicate class id {clazz.id} ({seen[clazz.id]}, {clazz.name})"
            )
        seen[clazz.id] = clazz.name

    schema = Schema(
        classes=classes,
        domains=_parse_domains(document.get('domains', [])),
        constants=tuple(
            _parse_constant(c) for c in _records(document.get('constants', []), "constants")
        ),
    )
    logger.debug(
        f"Loaded schema with {len(schema.classes)} classes, "
        f"{len(schema.domains)} domains and {len(schema.constants)} constants"
    )
    return schema


def load_schema_file(path: Path | str) -> Schema:
    """Read a JSON schema document from ``path``."""
    path = Path(path)
    logger.debug(f"Reading schema from {path}")
    try:
        document = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise SchemaError(f"{path}: invalid JSON ({e})") from e
    return load_schema(document)


__all__ = ["load_schema", "load_schema_file"]
