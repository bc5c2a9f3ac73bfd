from __future__ import annotations

from ..runtime import UNDEFINED, Completion, JSObject, is_return
from ..tree import Block, Expr, If, VarAssignment
from .common import EvalFunc

def declare(node: Expr, env: JSObject) -> None:
    """Register every name a block declares as undefined before it runs.

    Walks nested blocks and both branches of ifs; function bodies are left
    alone since each call runs its own pass.
    """
    match node:
        case Block(exprs=exprs):
            for expr in exprs:
                declare(expr, env)
        case VarAssignment(name=name, declaration=True):
            env.register(name, UNDEFINED)
        case If(true_block=true_block, false_block=false_block):
            declare(true_block, env)
            declare(false_block, env)
        case _:
            pass

def eval_block(block: Block, env: JSObject, eval_func: EvalFunc, predeclared: bool=False) -> Completion:
    """Run a block for its side effects; the value is always undefined.

    `predeclared` is set for blocks an enclosing pass already walked (if
    branches, directly nested blocks) so their names are not reset mid-body.
    """
    if not predeclared:
        declare(block, env)

    for expr in block.exprs:
        if isinstance(expr, Block):
            result = eval_block(expr, env, eval_func, predeclared=True)
        else:
            result = eval_func(expr, env)

        if is_return(result):
            return result

    return UNDEFINED
