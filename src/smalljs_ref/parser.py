"""Reference front end: smalljs source text to the evaluator's AST."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterator, List, Optional, Tuple

from lark import Lark, Token, Transformer, UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken, v_args
from lark.exceptions import LexError as LarkLexError

from .runtime import UNDEFINED
from .tree import (
    Block,
    Call,
    Expr,
    FieldAccess,
    FieldAssignment,
    Fun,
    Identifier,
    If,
    Literal,
    MethodCall,
    ObjectLiteral,
    Return,
    Script,
    VarAssignment,
)

GRAMMAR_PATH = Path(__file__).resolve().parent / "grammar.lark"

ANONYMOUS_FUNCTION_NAME = "lambda"

KEYWORDS = frozenset({"function", "var", "let", "if", "else", "return"})

class ParseError(Exception):
    def __init__(self, message: str, line: Optional[int]=None, column: Optional[int]=None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def __str__(self) -> str:
        if self.line is None:
            return self.message

        if self.column is None:
            return f"{self.message} (line {self.line})"

        return f"{self.message} (line {self.line}, col {self.column})"

@lru_cache(maxsize=None)
def make_parser() -> Lark:
    grammar = GRAMMAR_PATH.read_text(encoding="utf-8")
    return Lark(grammar, parser="lalr", start="start", propagate_positions=True, maybe_placeholders=True)

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
}

_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)

def unquote(raw: str) -> str:
    body = raw[1:-1]
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), body)

def _line(meta: Any, fallback: int=1) -> int:
    if getattr(meta, "empty", False):
        return fallback

    return getattr(meta, "line", fallback)

@v_args(meta=True)
class AstBuilder(Transformer):
    """Turn the lark parse tree into frozen AST nodes."""

    def start(self, meta, children: List[Expr]) -> Script:
        return Script(Block(tuple(children), _line(meta)))

    def block(self, meta, children: List[Expr]) -> Block:
        return Block(tuple(children), _line(meta))

    def params(self, meta, children: List[Token]) -> Tuple[str, ...]:
        return tuple(str(tok) for tok in children)

    def args(self, meta, children: List[Expr]) -> Tuple[Expr, ...]:
        return tuple(children)

    def fundecl(self, meta, children: List[Any]) -> Fun:
        name, params, body = children
        return Fun(str(name), params or (), True, body, _line(meta))

    def funexpr(self, meta, children: List[Any]) -> Fun:
        params, body = children
        return Fun(ANONYMOUS_FUNCTION_NAME, params or (), False, body, _line(meta))

    def vardecl(self, meta, children: List[Any]) -> VarAssignment:
        name = children[0]
        value = children[1] if len(children) > 1 else None
        line = _line(meta)

        if value is None:
            value = Literal(UNDEFINED, line)

        return VarAssignment(str(name), value, True, line)

    def assignstmt(self, meta, children: List[Any]) -> VarAssignment:
        name, value = children
        return VarAssignment(str(name), value, False, _line(meta))

    def fieldassignstmt(self, meta, children: List[Any]) -> FieldAssignment:
        receiver, name, value = children
        return FieldAssignment(receiver, str(name), value, _line(meta))

    def ifstmt(self, meta, children: List[Any]) -> If:
        cond, true_block = children[0], children[1]
        other = children[2] if len(children) > 2 else None
        line = _line(meta)

        if other is None:
            false_block = Block((), line)
        elif isinstance(other, If):
            false_block = Block((other,), other.line_number)
        else:
            false_block = other

        return If(cond, true_block, false_block, line)

    def returnstmt(self, meta, children: List[Any]) -> Return:
        line = _line(meta)
        value = children[0] if children else None

        if value is None:
            value = Literal(UNDEFINED, line)

        return Return(value, line)

    def exprstmt(self, meta, children: List[Expr]) -> Expr:
        return children[0]

    def binop(self, meta, children: List[Any]) -> Call:
        lhs, op, rhs = children
        line = _line(meta)
        return Call(Identifier(str(op), op.line or line), (lhs, rhs), line)

    def opcall(self, meta, children: List[Any]) -> Call:
        op = children[0]
        args = children[1] if len(children) > 1 else None
        line = _line(meta)
        return Call(Identifier(str(op), line), args or (), line)

    def call(self, meta, children: List[Any]) -> Call:
        qualifier = children[0]
        args = children[1] if len(children) > 1 else None
        return Call(qualifier, args or (), _line(meta))

    def methodcall(self, meta, children: List[Any]) -> MethodCall:
        receiver, name = children[0], children[1]
        args = children[2] if len(children) > 2 else None
        return MethodCall(receiver, str(name), args or (), _line(meta))

    def fieldaccess(self, meta, children: List[Any]) -> FieldAccess:
        receiver, name = children
        return FieldAccess(receiver, str(name), _line(meta))

    def object(self, meta, children: List[Any]) -> ObjectLiteral:
        fields = children[0] if children and children[0] is not None else ()
        return ObjectLiteral(tuple(fields), _line(meta))

    def fields(self, meta, children: List[Any]) -> Tuple[Tuple[str, Expr], ...]:
        return tuple(child for child in children if isinstance(child, tuple))

    def field(self, meta, children: List[Any]) -> Tuple[str, Expr]:
        key, value = children
        name = unquote(str(key)) if key.type == "STRING" else str(key)
        return (name, value)

    def number(self, meta, children: List[Token]) -> Literal:
        return Literal(int(children[0]), _line(meta))

    def signed_number(self, meta, children: List[Token]) -> Literal:
        sign, digits = children
        value = int(digits)
        return Literal(-value if str(sign) == "-" else value, _line(meta))

    def string(self, meta, children: List[Token]) -> Literal:
        return Literal(unquote(str(children[0])), _line(meta))

    def identifier(self, meta, children: List[Token]) -> Identifier:
        return Identifier(str(children[0]), _line(meta))

def _describe_expected(exc: UnexpectedInput) -> str:
    expected = getattr(exc, "expected", None) or getattr(exc, "allowed", None)
    if not expected:
        return ""

    names = sorted(str(name) for name in expected)
    return f"; expected one of {', '.join(names[:8])}"

def parse_source(src: str) -> Script:
    """Parse smalljs source into a `Script`; syntax problems raise ParseError."""
    parser = make_parser()

    try:
        tree = parser.parse(src)
    except UnexpectedCharacters as exc:
        raise ParseError(f"Unexpected character {src[exc.pos_in_stream]!r}", exc.line, exc.column) from None
    except UnexpectedEOF as exc:
        raise ParseError(f"Unexpected end of input{_describe_expected(exc)}", getattr(exc, "line", None), getattr(exc, "column", None)) from None
    except UnexpectedToken as exc:
        tok = exc.token
        if tok.type == "$END":
            raise ParseError(f"Unexpected end of input{_describe_expected(exc)}", exc.line, exc.column) from None
        raise ParseError(f"Unexpected token {str(tok)!r}{_describe_expected(exc)}", exc.line, exc.column) from None

    return AstBuilder().transform(tree)

def lex_source(src: str) -> Iterator[Token]:
    """Tokenize without parsing, keeping comments (for highlighting and the REPL)."""
    parser = make_parser()

    try:
        yield from parser.lex(src, dont_ignore=True)
    except (UnexpectedInput, LarkLexError) as exc:
        raise ParseError("Unexpected character", getattr(exc, "line", None), getattr(exc, "column", None)) from None
