"""AST node classes consumed by the evaluator.

Nodes are frozen dataclasses; every variant carries the source line it came
from so runtime errors can point back at the script.
"""
from __future__ import annotations

from dataclasses import dataclass, fields, is_dataclass
from typing import Any, List, Tuple, Union
from typing_extensions import TypeAlias


@dataclass(frozen=True)
class Block:
    exprs: Tuple['Expr', ...]
    line_number: int = 0


@dataclass(frozen=True)
class Literal:
    value: Any  # int, str or UNDEFINED
    line_number: int = 0


@dataclass(frozen=True)
class Call:
    qualifier: 'Expr'
    args: Tuple['Expr', ...]
    line_number: int = 0


@dataclass(frozen=True)
class Identifier:
    name: str
    line_number: int = 0


@dataclass(frozen=True)
class VarAssignment:
    name: str
    expr: 'Expr'
    declaration: bool
    line_number: int = 0


@dataclass(frozen=True)
class Fun:
    name: str
    parameters: Tuple[str, ...]
    toplevel: bool
    body: Block
    line_number: int = 0


@dataclass(frozen=True)
class Return:
    expr: 'Expr'
    line_number: int = 0


@dataclass(frozen=True)
class If:
    condition: 'Expr'
    true_block: Block
    false_block: Block
    line_number: int = 0


@dataclass(frozen=True)
class ObjectLiteral:
    # (name, expr) pairs in declaration order
    fields: Tuple[Tuple[str, 'Expr'], ...]
    line_number: int = 0


@dataclass(frozen=True)
class FieldAccess:
    receiver: 'Expr'
    name: str
    line_number: int = 0


@dataclass(frozen=True)
class FieldAssignment:
    receiver: 'Expr'
    name: str
    expr: 'Expr'
    line_number: int = 0


@dataclass(frozen=True)
class MethodCall:
    receiver: 'Expr'
    name: str
    args: Tuple['Expr', ...]
    line_number: int = 0


Expr: TypeAlias = Union[
    Block,
    Literal,
    Call,
    Identifier,
    VarAssignment,
    Fun,
    Return,
    If,
    ObjectLiteral,
    FieldAccess,
    FieldAssignment,
    MethodCall,
]

EXPR_TYPES: Tuple[type, ...] = (
    Block,
    Literal,
    Call,
    Identifier,
    VarAssignment,
    Fun,
    Return,
    If,
    ObjectLiteral,
    FieldAccess,
    FieldAssignment,
    MethodCall,
)


@dataclass(frozen=True)
class Script:
    body: Block


def is_expr(node: object) -> bool:
    return isinstance(node, EXPR_TYPES)


def node_line(node: object) -> int | None:
    line = getattr(node, "line_number", None)
    if not line:
        return None

    return line


def pretty(node: object, indent: str = '  ') -> str:
    """Return an indented, one-node-per-line dump of an AST."""
    lines: List[str] = []

    def _scalar(value: object) -> str:
        if isinstance(value, str):
            return repr(value)
        return str(value)

    def _pretty(value: object, level: int, label: str = '') -> None:
        pad = indent * level
        prefix = f"{label}: " if label else ''

        if isinstance(value, Script):
            lines.append(f"{pad}{prefix}Script")
            _pretty(value.body, level + 1)
            return

        if is_dataclass(value) and not isinstance(value, type):
            head = [type(value).__name__]
            nested: List[Tuple[str, object]] = []

            for f in fields(value):
                if f.name == 'line_number':
                    continue
                item = getattr(value, f.name)
                if is_expr(item) or isinstance(item, tuple):
                    nested.append((f.name, item))
                else:
                    head.append(f"{f.name}={_scalar(item)}")

            lines.append(f"{pad}{prefix}{' '.join(head)} @{value.line_number}")

            for name, item in nested:
                _pretty(item, level + 1, name)
            return

        if isinstance(value, tuple):
            if all(isinstance(v, str) for v in value):
                lines.append(f"{pad}{prefix}({', '.join(value)})")
                return

            lines.append(f"{pad}{prefix}[{len(value)}]")

            for item in value:
                if isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], str):
                    _pretty(item[1], level + 1, item[0])
                else:
                    _pretty(item, level + 1)
            return

        lines.append(f"{pad}{prefix}{_scalar(value)}")

    _pretty(node, 0)
    return "\n".join(lines) + "\n"
