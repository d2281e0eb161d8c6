"""Declarations produced by the synthesizers and consumed by the printer."""
from __future__ import annotations

import ast
from dataclasses import dataclass, field
from typing import Any, TypeAlias


@dataclass(frozen=True)
class Field:
    name: str
    annotation: str
    required: bool = True
    default: Any = None  # documentation only


@dataclass(frozen=True)
class ShapeDecl:
    """A ``TypedDict`` declaration."""
    name: str
    fields: tuple[Field, ...] = ()
    doc: str | None = None


@dataclass(frozen=True)
class UnionDecl:
    name: str
    members: tuple[str, ...] = ()


@dataclass(frozen=True)
class ConstantDecl:
    name: str
    value: int
    comment: str | None = None


@dataclass(frozen=True)
class FunctionDecl:
    name: str
    params: tuple[tuple[str, str], ...]
    returns: str
    body: tuple[ast.stmt, ...]
    doc: str | None = None


# A table entry maps an integer key to a function name or to a nested table
TableEntries: TypeAlias = 'tuple[tuple[int, str | TableEntries], ...]'


@dataclass(frozen=True)
class TableDecl:
    """A module level dispatch table."""
    name: str
    annotation: str
    entries: TableEntries = ()


Declaration: TypeAlias = ShapeDecl | UnionDecl | ConstantDecl | FunctionDecl | TableDecl

DEFAULT_IMPORTS = (
    'from typing import Any, Callable, Literal, NoReturn, NotRequired, TypedDict, Union',
    '',
    'from amqpgen.encoding.amqp import AmqpDecoder, AmqpEncoder',
    'from amqpgen.errors import UnknownClassError, UnknownMethodError',
)


@dataclass(frozen=True)
class GeneratedModule:
    declarations: tuple[Declaration, ...]
    imports: tuple[str, ...] = field(default=DEFAULT_IMPORTS)

    def find(self, name: str) -> Declaration:
        """Return the declaration called ``name``."""
        for declaration in self.declarations:
            if declaration.name == name:
                return declaration
        raise KeyError(name)


__all__ = [
    "DEFAULT_IMPORTS",
    "ConstantDecl",
    "Declaration",
    "Field",
    "FunctionDecl",
    "GeneratedModule",
    "ShapeDecl",
    "TableDecl",
    "UnionDecl",
]
