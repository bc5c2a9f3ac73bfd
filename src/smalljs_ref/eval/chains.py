from __future__ import annotations

from ..runtime import UNDEFINED, Completion, JSObject, is_return
from ..tree import Call, MethodCall
from .common import EvalFunc, describe, eval_args, expect_invocable, expect_object

def eval_call(node: Call, env: JSObject, eval_func: EvalFunc) -> Completion:
    callee = eval_func(node.qualifier, env)
    if is_return(callee):
        return callee

    fn = expect_invocable(callee)
    args = eval_args(node.args, env, eval_func)
    if is_return(args):
        return args

    return fn.invoke(UNDEFINED, args)

def eval_method_call(node: MethodCall, env: JSObject, eval_func: EvalFunc) -> Completion:
    recv = eval_func(node.receiver, env)
    if is_return(recv):
        return recv

    obj = expect_object(recv)
    member = obj.lookup_or_undefined(node.name)
    method = expect_invocable(member, label=f"{node.name} ({describe(member)})")

    args = eval_args(node.args, env, eval_func)
    if is_return(args):
        return args

    return method.invoke(obj, args)
