from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Union

from ..runtime import Completion, JSObject, JSTypeError, JSUndefined, JSValue, ReturnSignal, is_return
from ..tree import Expr
from ..utils import stringify, type_name

EvalFunc = Callable[[Expr, JSObject], Completion]

def describe(value: JSValue) -> str:
    match value:
        case str():
            return repr(value)
        case JSObject(kind="object"):
            return f"object {stringify(value)}"
        case JSObject() | JSUndefined():
            return stringify(value)
        case _:
            return f"{type_name(value)} {stringify(value)}"

def expect_object(value: JSValue) -> JSObject:
    if isinstance(value, JSObject):
        return value

    raise JSTypeError(f"type error: {describe(value)} is not an object")

def expect_invocable(value: JSValue, label: Optional[str]=None) -> JSObject:
    if isinstance(value, JSObject) and value.is_callable():
        return value

    subject = label if label is not None else describe(value)
    raise JSTypeError(f"type error: {subject} is not a function")

def eval_args(nodes: Sequence[Expr], env: JSObject, eval_func: EvalFunc) -> Union[List[JSValue], ReturnSignal]:
    """Evaluate call arguments left to right."""
    values: List[JSValue] = []

    for node in nodes:
        value = eval_func(node, env)
        if is_return(value):
            return value
        values.append(value)

    return values
