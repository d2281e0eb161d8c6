from __future__ import annotations

from abc import ABC
from dataclasses import dataclass
from typing import Any

# Map AMQP primitive field types to the Python types used to store them
PRIMITIVE_TYPE_MAP = {
    'octet': 'int',
    'short': 'int',
    'long': 'int',
    'longlong': 'int',
    'bit': 'bool',
    'shortstr': 'str',
    'longstr': 'str',
    'table': 'dict[str, Any]',
    'timestamp': 'int',
}
PRIMITIVE_TYPES = frozenset(PRIMITIVE_TYPE_MAP)


@dataclass(frozen=True)
class ArgumentType(ABC):
    ...


@dataclass(frozen=True)
class Explicit(ArgumentType):
    type: str


@dataclass(frozen=True)
class ByDomain(ArgumentType):
    domain: str


@dataclass(frozen=True)
class Domain:
    name: str
    type: str


@dataclass(frozen=True)
class Constant:
    name: str
    value: int
    class_name: str | None = None


@dataclass(frozen=True)
class Argument:
    name: str
    type: ArgumentType
    default: Any = None

    @property
    def optional(self) -> bool:
        return self.default is not None


@dataclass(frozen=True)
class Property:
    name: str
    type: str


@dataclass(frozen=True)
class Method:
    id: int
    name: str
    arguments: tuple[Argument, ...] = ()
    synchronous: bool = False
    response: str | None = None
    content: bool = False


@dataclass(frozen=True)
class Class:
    id: int
    name: str
    methods: tuple[Method, ...] = ()
    properties: tuple[Property, ...] = ()


@dataclass(frozen=True)
class Schema:
    classes: tuple[Class, ...] = ()
    domains: tuple[Domain, ...] = ()
    constants: tuple[Constant, ...] = ()

    def domain_type(self, name: str) -> str | None:
        """Primitive type mapped to domain ``name``, or None when undefined."""
        for domain in self.domains:
            if domain.name == name:
                return domain.type
        return None

    def methods(self) -> list[tuple[Class, Method]]:
        """All ``(class, method)`` pairs in schema order."""
        return [(clazz, method) for clazz in self.classes for method in clazz.methods]


__all__ = [
    "PRIMITIVE_TYPES",
    "PRIMITIVE_TYPE_MAP",
    "Argument",
    "ArgumentType",
    "ByDomain",
    "Class",
    "Constant",
    "Domain",
    "Explicit",
    "Method",
    "Property",
    "Schema",
]
