from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from ..runtime import UNDEFINED, JSArityError, JSObject, JSValue, is_return
from ..tree import Block, Fun
from .common import EvalFunc

THIS_NAME = "this"

@dataclass
class Closure:
    """Invocation behavior of a user function.

    Holds the environment the function was defined in; every call gets a fresh
    child of that environment.
    """
    name: str
    params: Tuple[str, ...]
    body: Block
    env: JSObject
    eval_func: EvalFunc

    def __call__(self, receiver: JSValue, args: List[JSValue]) -> JSValue:
        return call_closure(self, receiver, args)

    def __repr__(self) -> str:
        return f"<closure {self.name}({', '.join(self.params)})>"

def call_closure(fn: Closure, receiver: JSValue, args: List[JSValue]) -> JSValue:
    if len(args) != len(fn.params):
        raise JSArityError(f"Wrong number of arguments for {fn.name}: expects {len(fn.params)}, got {len(args)}")

    callee_env = JSObject.new_env(fn.env)
    callee_env.register(THIS_NAME, receiver)

    for name, val in zip(fn.params, args):
        callee_env.register(name, val)

    # evaluating the body block runs its declaration pass first
    result = fn.eval_func(fn.body, callee_env)

    if is_return(result):
        return result.value

    return UNDEFINED

def eval_fun(node: Fun, env: JSObject, eval_func: EvalFunc) -> JSObject:
    closure = Closure(
        name=node.name,
        params=tuple(node.parameters),
        body=node.body,
        env=env,
        eval_func=eval_func,
    )
    fun = JSObject.new_function(node.name, closure)

    if node.toplevel:
        env.register(node.name, fun)

    return fun
