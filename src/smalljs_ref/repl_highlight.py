"""prompt_toolkit lexer for live smalljs syntax highlighting in the REPL."""

from __future__ import annotations

from typing import Callable

from lark import Token
from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from .parser import KEYWORDS, ParseError, lex_source
from .runtime import GLOBAL_SELF_NAME, init_stdlib
from .types import builtin_names

# Map highlight groups → prompt_toolkit style strings.
GROUP_STYLE = {
    "keyword": "bold ansicyan",
    "number": "ansimagenta",
    "string": "ansigreen",
    "identifier": "",
    "builtin": "bold ansiyellow",
    "this": "italic ansicyan",
    "operator": "",
    "punctuation": "",
    "comment": "italic ansigray",
    "error": "bold ansired",
}

# Token type → highlight group for the named terminals of grammar.lark.
_TYPE_GROUP = {
    "NUMBER": "number",
    "STRING": "string",
    "CMP_OP": "operator",
    "ADD_OP": "operator",
    "MUL_OP": "operator",
    "LINE_COMMENT": "comment",
    "BLOCK_COMMENT": "comment",
}

_SKIP = {"WS"}


def token_group(tok: Token) -> str:
    value = str(tok)

    if tok.type in _TYPE_GROUP:
        return _TYPE_GROUP[tok.type]

    if value in KEYWORDS:
        return "keyword"

    if tok.type == "NAME":
        if value == "this":
            return "this"
        init_stdlib()
        if value == GLOBAL_SELF_NAME or value in builtin_names():
            return "builtin"
        return "identifier"

    if value == "=":
        return "operator"

    return "punctuation"


def _highlight_line(text: str) -> StyleAndTextTuples:
    """Tokenize a single line and return styled fragments."""
    if not text:
        return [("", "")]

    try:
        tokens = list(lex_source(text))
    except ParseError:
        return [("", text)]

    result: StyleAndTextTuples = []
    pos = 0

    for tok in tokens:
        if tok.type in _SKIP:
            continue

        start = tok.start_pos
        if start is None or start < pos:
            continue

        # Unstyled gap before token.
        if start > pos:
            result.append(("", text[pos:start]))

        tok_text = str(tok)
        result.append((GROUP_STYLE.get(token_group(tok), ""), tok_text))
        pos = start + len(tok_text)

    # Trailing unstyled text.
    if pos < len(text):
        result.append(("", text[pos:]))

    return result if result else [("", text)]


class SmallJSLexer(Lexer):
    """prompt_toolkit Lexer that highlights smalljs source using the grammar's lexer."""

    def __init__(self) -> None:
        init_stdlib()

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines

        # Pre-compute highlights lazily, one line at a time.
        cache: dict[int, StyleAndTextTuples] = {}

        def get_line(lineno: int) -> StyleAndTextTuples:
            if lineno not in cache:
                if lineno < len(lines):
                    cache[lineno] = _highlight_line(lines[lineno])
                else:
                    cache[lineno] = [("", "")]

            return cache[lineno]

        return get_line
