from __future__ import annotations

import os as _os

from .types import (
    JSObject,
    JSUndefined,
    JSValue,
    JSTypeError,
    is_js_int,
)

DEBUG_TRACE_ENV = "SMALLJS_DEBUG_TRACE"

_TRUTHY_FLAGS = {"1", "true", "yes", "on"}


def debug_trace_enabled() -> bool:
    """Check the env flag that turns on stderr tracing and Python tracebacks."""
    raw = _os.environ.get(DEBUG_TRACE_ENV)
    if raw is None:
        return False

    return raw.strip().lower() in _TRUTHY_FLAGS


def set_debug_trace(enabled: bool) -> None:
    if enabled:
        _os.environ[DEBUG_TRACE_ENV] = "1"
    else:
        _os.environ.pop(DEBUG_TRACE_ENV, None)


def stringify(value: JSValue) -> str:
    if isinstance(value, str):
        return value

    if is_js_int(value):
        return str(value)

    if isinstance(value, JSUndefined):
        return "undefined"

    return str(value)


def type_name(value: JSValue) -> str:
    match value:
        case JSUndefined():
            return "undefined"
        case str():
            return "string"
        case JSObject(kind="function"):
            return "function"
        case JSObject():
            return "object"
        case _ if is_js_int(value):
            return "integer"
        case _:
            return type(value).__name__


def js_equals(lhs: JSValue, rhs: JSValue) -> bool:
    match (lhs, rhs):
        case (JSObject(), _) | (_, JSObject()):
            return lhs is rhs
        case (JSUndefined(), JSUndefined()):
            return True
        case (str(), str()):
            return lhs == rhs
        case _ if is_js_int(lhs) and is_js_int(rhs):
            return lhs == rhs
        case _:
            return False


def js_compare(lhs: JSValue, rhs: JSValue) -> int:
    """Three-way comparison over integers or over strings."""
    comparable = (
        (is_js_int(lhs) and is_js_int(rhs))
        or (isinstance(lhs, str) and isinstance(rhs, str))
    )

    if not comparable:
        raise JSTypeError(f"cannot compare {type_name(lhs)} {stringify(lhs)} with {type_name(rhs)} {stringify(rhs)}")

    if lhs < rhs:  # type: ignore[operator]
        return -1
    if lhs > rhs:  # type: ignore[operator]
        return 1
    return 0
