"""Render generated declarations as Python source text."""
import ast
import keyword

from amqpgen.codegen._ast import _function
from amqpgen.codegen.ir import (
    ConstantDecl,
    Declaration,
    Field,
    FunctionDecl,
    GeneratedModule,
    ShapeDecl,
    TableDecl,
    UnionDecl
)

DISCLAIMER = (
    '# This is a generated file.\n'
    '# Do not edit it by hand; regenerate it from the protocol schema instead.'
)
_TAB = '    '


def _is_identifier(name: str) -> bool:
    return name.isidentifier() and not keyword.iskeyword(name)


def _field_annotation(field: Field) -> str:
    return field.annotation if field.required else f'NotRequired[{field.annotation}]'


def _default_comment(field: Field) -> str:
    if field.required or field.default is None:
        return ''
    return f'  # default {field.default!r}'


def render_shape(shape: ShapeDecl) -> str:
    if all(_is_identifier(f.name) for f in shape.fields):
        lines = [f'class {shape.name}(TypedDict):']
        if shape.doc:
            lines.append(f'{_TAB}"""{shape.doc}"""')
        for field in shape.fields:
            lines.append(f'{_TAB}{field.name}: {_field_annotation(field)}{_default_comment(field)}')
        if not shape.doc and not shape.fields:
            lines.append(f'{_TAB}pass')
        return '\n'.join(lines)

    # Keys such as ``global`` can only be declared with the functional syntax
    lines = []
    if shape.doc:
        lines.append(f'# {shape.doc}')
    lines.append(f'{shape.name} = TypedDict({shape.name!r}, {{')
    for field in shape.fields:
        lines.append(f'{_TAB}{field.name!r}: {_field_annotation(field)},{_default_comment(field)}')
    lines.append('})')
    return '\n'.join(lines)


def render_union(union: UnionDecl) -> str:
    if not union.members:
        return f'{union.name} = NoReturn'
    members = ''.join(f'{_TAB}{member},\n' for member in union.members)
    return f'{union.name} = Union[\n{members}]'


def render_constant(constant: ConstantDecl) -> str:
    line = f'{constant.name} = {constant.value!r}'
    if constant.comment:
        line += f'  # {constant.comment}'
    return line


def _render_entries(entries, depth: int) -> str:
    if not entries:
        return '{}'
    pad = _TAB * depth
    lines = ['{']
    for key, value in entries:
        rendered = value if isinstance(value, str) else _render_entries(value, depth + 1)
        lines.append(f'{pad}{_TAB}{key!r}: {rendered},')
    lines.append(f'{pad}}}')
    return '\n'.join(lines)


def render_table(table: TableDecl) -> str:
    return f'{table.name}: {table.annotation} = {_render_entries(table.entries, 0)}'


def render_function(function: FunctionDecl) -> str:
    body = list(function.body)
    if function.doc:
        body.insert(0, ast.Expr(value=ast.Constant(value=function.doc)))
    node = _function(function.name, list(function.params), function.returns, body)
    ast.fix_missing_locations(node)
    return ast.unparse(node)


def render_declaration(declaration: Declaration) -> str:
    if isinstance(declaration, ShapeDecl):
        return render_shape(declaration)
    if isinstance(declaration, UnionDecl):
        return render_union(declaration)
    if isinstance(declaration, ConstantDecl):
        return render_constant(declaration)
    if isinstance(declaration, TableDecl):
        return render_table(declaration)
    if isinstance(declaration, FunctionDecl):
        return render_function(declaration)
    raise TypeError(f"Cannot render {type(declaration).__name__}")


def render(module: GeneratedModule) -> str:
    """Render ``module`` as the text of a Python source file."""
    chunks = [DISCLAIMER, '\n'.join(module.imports)]
    previous: Declaration | None = None
    for declaration in module.declarations:
        text = render_declaration(declaration)
        # Runs of constants and unions stay together
        if type(declaration) is type(previous) and isinstance(declaration, (ConstantDecl, UnionDecl)):
            chunks[-1] += '\n' + text
        else:
            chunks.append(text)
        previous = declaration
    return '\n\n\n'.join(chunks) + '\n'


__all__ = ["DISCLAIMER", "render", "render_declaration"]
