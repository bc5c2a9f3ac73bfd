from __future__ import annotations

import sys
import traceback
from pathlib import Path
from typing import Optional, TextIO

from .evaluator import eval_node, interpret
from .eval.blocks import declare
from .parser import ParseError, parse_source
from .runtime import UNDEFINED, JSObject, JSRuntimeError, JSValue, init_stdlib, is_return
from .tree import Block, FieldAssignment, Fun, If, Return, VarAssignment, pretty
from .utils import debug_trace_enabled, set_debug_trace

USAGE = "usage: smalljs [--trace] [--ast] [--repl] [FILE | - | SOURCE]"

def run(src: str, out: Optional[TextIO]=None) -> None:
    """Parse and execute a whole script, writing `print` output to `out`."""
    init_stdlib()
    script = parse_source(src)
    interpret(script, out)

_STATEMENT_NODES = (Block, If, Return, VarAssignment, FieldAssignment)

def repl_eval(src: str, env: JSObject) -> tuple[JSValue, bool]:
    """Run one REPL entry in a persistent environment.

    Returns the value of the last statement and whether that statement is a
    declaration or control statement, whose value the REPL does not echo.
    """
    script = parse_source(src)
    body = script.body
    declare(body, env)
    result: JSValue = UNDEFINED

    for stmt in body.exprs:
        value = eval_node(stmt, env)
        if is_return(value):
            return value.value, False
        result = value

    if not body.exprs:
        return UNDEFINED, True

    last = body.exprs[-1]
    is_stmt = isinstance(last, _STATEMENT_NODES) or (isinstance(last, Fun) and last.toplevel)
    return result, is_stmt

def _load_source(arg: Optional[str]) -> str:
    """
    Resolve CLI input into source text.
    - None or "-" => read stdin.
    - Existing path => read file contents.
    - Otherwise treat the argument as literal source.
    """

    if arg is None or arg == "-":
        data = sys.stdin.read()
        if not data:
            raise SystemExit("No input provided on stdin")
        return data

    candidate = Path(arg)
    if candidate.exists():
        return candidate.read_text(encoding="utf-8")

    return arg

def _report(exc: Exception) -> None:
    print(f"Error: {exc}", file=sys.stderr)

    if debug_trace_enabled():
        print("\nPython traceback:", file=sys.stderr)
        print("".join(traceback.format_tb(exc.__traceback__)), file=sys.stderr, end="")

def main(argv: Optional[list[str]]=None) -> int:
    show_ast = False
    start_repl = False
    arg = None
    it = iter(sys.argv[1:] if argv is None else argv)

    for token in it:
        if token == "--trace":
            set_debug_trace(True)
            continue

        if token == "--ast":
            show_ast = True
            continue

        if token == "--repl":
            start_repl = True
            continue

        if token in ("-h", "--help"):
            print(USAGE)
            return 0

        if token.startswith("--"):
            raise SystemExit(f"Unknown flag: {token}\n{USAGE}")

        if arg is None:
            arg = token
        else:
            raise SystemExit(f"Unexpected argument: {token}")

    if start_repl:
        from .repl import repl  # prompt_toolkit is only needed here
        repl()
        return 0

    source = _load_source(arg)

    try:
        if show_ast:
            sys.stdout.write(pretty(parse_source(source)))
            return 0
        run(source)
    except (ParseError, JSRuntimeError) as exc:
        _report(exc)
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
