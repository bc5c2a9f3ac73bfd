from __future__ import annotations

import importlib
import sys
from typing import List, Optional, TextIO

from .types import (
    UNDEFINED, NOT_FOUND, JSUndefined, JSObject, JSValue, Invoker,
    ReturnSignal, Completion, is_return, is_js_object, is_js_int,
    JSRuntimeError, JSTypeError, JSUndefinedVariableError, JSArityError,
    JSArithmeticError, StdlibContext, StdlibFunction, StdlibFn, Builtins,
)

_STDLIB_INITIALIZED = False

GLOBAL_SELF_NAME = "globalThis"

def init_stdlib() -> None:
    """Load stdlib modules (idempotent) so register_stdlib hooks run."""
    global _STDLIB_INITIALIZED

    if _STDLIB_INITIALIZED:
        return

    importlib.import_module("smalljs_ref.stdlib")
    _STDLIB_INITIALIZED = True

def register_stdlib(name: str, *, arity: Optional[int] = None):
    def dec(fn: StdlibFn):
        if name in Builtins.stdlib_functions:
            raise RuntimeError(f"builtin {name!r} registered twice")
        Builtins.stdlib_functions[name] = StdlibFunction(fn=fn, arity=arity)
        return fn

    return dec

def _builtin_invoker(name: str, std: StdlibFunction, ctx: StdlibContext) -> Invoker:
    def invoke(_receiver: JSValue, args: List[JSValue]) -> JSValue:
        if std.arity is not None and len(args) != std.arity:
            raise JSArityError(f"Wrong number of arguments for {name}: expects {std.arity}, got {len(args)}")
        return std.fn(ctx, args)

    return invoke

def create_global_env(out: Optional[TextIO]=None) -> JSObject:
    """Build the root environment: globalThis plus every registered builtin."""
    init_stdlib()

    sink = out if out is not None else sys.stdout
    ctx = StdlibContext(sink)
    global_env = JSObject.new_env(None)
    global_env.register(GLOBAL_SELF_NAME, global_env)

    for name, std in Builtins.stdlib_functions.items():
        global_env.register(name, JSObject.new_function(name, _builtin_invoker(name, std, ctx)))

    return global_env

__all__ = [
    "UNDEFINED", "NOT_FOUND", "JSUndefined", "JSObject", "JSValue", "Invoker",
    "ReturnSignal", "Completion", "is_return", "is_js_object", "is_js_int",
    "JSRuntimeError", "JSTypeError", "JSUndefinedVariableError", "JSArityError",
    "JSArithmeticError", "StdlibContext", "StdlibFunction", "Builtins",
    "GLOBAL_SELF_NAME", "init_stdlib", "register_stdlib", "create_global_env",
]
