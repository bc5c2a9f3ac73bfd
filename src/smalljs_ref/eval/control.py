from __future__ import annotations

from typing import Optional

from ..runtime import NOT_FOUND, UNDEFINED, Completion, JSObject, JSValue, ReturnSignal, is_js_int, is_return
from ..tree import If, Return
from .blocks import eval_block
from .common import EvalFunc

def branch_for(value: JSValue) -> Optional[bool]:
    """Map a condition value onto a branch.

    Only undefined, 0 and 1 are meaningful conditions; anything else selects
    no branch at all.
    """
    if value is UNDEFINED or value is NOT_FOUND:
        return False

    if is_js_int(value):
        if value == 1:
            return True
        if value == 0:
            return False

    return None

def eval_if(node: If, env: JSObject, eval_func: EvalFunc) -> Completion:
    cond = eval_func(node.condition, env)
    if is_return(cond):
        return cond

    taken = branch_for(cond)
    if taken is None:
        return UNDEFINED

    branch = node.true_block if taken else node.false_block
    result = eval_block(branch, env, eval_func, predeclared=True)

    if is_return(result):
        return result

    return UNDEFINED

def eval_return(node: Return, env: JSObject, eval_func: EvalFunc) -> ReturnSignal:
    value = eval_func(node.expr, env)
    if is_return(value):
        return value

    return ReturnSignal(value)
