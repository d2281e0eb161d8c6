"""Helpers to create AST nodes more concisely."""
import ast
from typing import Any


def _name(id: str, ctx=None) -> ast.Name:
    """Create a Name node."""
    return ast.Name(id=id, ctx=ctx or ast.Load())


def _attr(value: ast.expr, attr: str, ctx=None) -> ast.Attribute:
    """Create an Attribute node."""
    return ast.Attribute(value=value, attr=attr, ctx=ctx or ast.Load())


def _call(func: ast.expr, args: list[ast.expr] | None = None, keywords: list[ast.keyword] | None = None) -> ast.Call:
    """Create a Call node."""
    return ast.Call(func=func, args=args or [], keywords=keywords or [])


def _method(target: str, method: str, args: list[ast.expr] | None = None) -> ast.Call:
    """Create a ``target.method(*args)`` call."""
    return _call(_attr(_name(target), method), args)


def _assign(targets: list[str], value: ast.expr) -> ast.Assign:
    """Create an assignment statement."""
    return ast.Assign(
        targets=[_name(t, ast.Store()) for t in targets],
        value=value
    )


def _subscript(value: ast.expr, slice: ast.expr, ctx=None) -> ast.Subscript:
    """Create a Subscript node."""
    return ast.Subscript(value=value, slice=slice, ctx=ctx or ast.Load())


def _literal(value: Any) -> ast.expr:
    """Create an expression evaluating to the JSON-like ``value``."""
    if isinstance(value, dict):
        return ast.Dict(
            keys=[ast.Constant(value=k) for k in value],
            values=[_literal(v) for v in value.values()],
        )
    if isinstance(value, (list, tuple)):
        return ast.List(elts=[_literal(v) for v in value], ctx=ast.Load())
    return ast.Constant(value=value)


def _tuple(values: list[ast.expr]) -> ast.Tuple:
    return ast.Tuple(elts=values, ctx=ast.Load())


def _function(name: str, params: list[tuple[str, str]], returns: str, body: list[ast.stmt]) -> ast.FunctionDef:
    """Create a function definition with annotated parameters."""
    signature = ', '.join(f'{param}: {annotation}' for param, annotation in params)
    func = ast.parse(f'def {name}({signature}) -> {returns}:\n    pass').body[0]
    assert isinstance(func, ast.FunctionDef)
    func.body = body
    return func
