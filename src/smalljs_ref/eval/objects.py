from __future__ import annotations

from ..runtime import Completion, JSObject, is_return
from ..tree import FieldAccess, FieldAssignment, ObjectLiteral
from .common import EvalFunc, expect_object

def eval_object_literal(node: ObjectLiteral, env: JSObject, eval_func: EvalFunc) -> Completion:
    obj = JSObject.new_object(None)

    for name, expr in node.fields:
        value = eval_func(expr, env)
        if is_return(value):
            return value
        obj.register(name, value)

    return obj

def eval_field_access(node: FieldAccess, env: JSObject, eval_func: EvalFunc) -> Completion:
    recv = eval_func(node.receiver, env)
    if is_return(recv):
        return recv

    obj = expect_object(recv)
    return obj.lookup_or_undefined(node.name)

def eval_field_assignment(node: FieldAssignment, env: JSObject, eval_func: EvalFunc) -> Completion:
    recv = eval_func(node.receiver, env)
    if is_return(recv):
        return recv

    obj = expect_object(recv)
    value = eval_func(node.expr, env)
    if is_return(value):
        return value

    obj.register(node.name, value)
    return value
