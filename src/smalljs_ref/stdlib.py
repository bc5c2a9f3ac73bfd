"""Built-in global functions (print and the operators) registered via runtime."""

from __future__ import annotations

import sys
from typing import Callable, List

from .runtime import register_stdlib, UNDEFINED, JSValue, JSTypeError, JSArithmeticError, StdlibContext
from .types import is_js_int
from .utils import debug_trace_enabled, js_compare, js_equals, stringify, type_name

@register_stdlib("print")
def std_print(ctx: StdlibContext, args: List[JSValue]) -> JSValue:
    if debug_trace_enabled():
        print(f"print called with {args!r}", file=sys.stderr)

    ctx.out.write(" ".join(stringify(arg) for arg in args) + "\n")
    return UNDEFINED

def _int_operands(op: str, args: List[JSValue]) -> tuple[int, int]:
    lhs, rhs = args

    for arg in (lhs, rhs):
        if not is_js_int(arg):
            raise JSTypeError(f"{op} expects integer operands; got {type_name(arg)} {stringify(arg)}")

    return lhs, rhs  # type: ignore[return-value]

def _truncating_div(lhs: int, rhs: int) -> int:
    quotient = abs(lhs) // abs(rhs)
    return quotient if (lhs < 0) == (rhs < 0) else -quotient

@register_stdlib("+", arity=2)
def std_add(_ctx, args: List[JSValue]) -> JSValue:
    lhs, rhs = _int_operands("+", args)
    return lhs + rhs

@register_stdlib("-", arity=2)
def std_sub(_ctx, args: List[JSValue]) -> JSValue:
    lhs, rhs = _int_operands("-", args)
    return lhs - rhs

@register_stdlib("*", arity=2)
def std_mul(_ctx, args: List[JSValue]) -> JSValue:
    lhs, rhs = _int_operands("*", args)
    return lhs * rhs

@register_stdlib("/", arity=2)
def std_div(_ctx, args: List[JSValue]) -> JSValue:
    lhs, rhs = _int_operands("/", args)

    if rhs == 0:
        raise JSArithmeticError("/ by zero")

    # integer division rounds toward zero
    return _truncating_div(lhs, rhs)

@register_stdlib("%", arity=2)
def std_mod(_ctx, args: List[JSValue]) -> JSValue:
    lhs, rhs = _int_operands("%", args)

    if rhs == 0:
        raise JSArithmeticError("% by zero")

    # remainder takes the sign of the dividend
    return lhs - rhs * _truncating_div(lhs, rhs)

@register_stdlib("==", arity=2)
def std_eq(_ctx, args: List[JSValue]) -> JSValue:
    return 1 if js_equals(args[0], args[1]) else 0

@register_stdlib("!=", arity=2)
def std_ne(_ctx, args: List[JSValue]) -> JSValue:
    return 0 if js_equals(args[0], args[1]) else 1

def _register_ordering(op: str, test: Callable[[int], bool]) -> None:
    @register_stdlib(op, arity=2)
    def _ordering(_ctx, args: List[JSValue]) -> JSValue:
        return 1 if test(js_compare(args[0], args[1])) else 0

_register_ordering("<", lambda c: c < 0)
_register_ordering("<=", lambda c: c <= 0)
_register_ordering(">", lambda c: c > 0)
_register_ordering(">=", lambda c: c >= 0)
