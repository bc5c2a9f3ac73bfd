from __future__ import annotations

from typing import Optional, TextIO

from typing_extensions import assert_never

from .runtime import (
    NOT_FOUND,
    Completion,
    JSObject,
    JSRuntimeError,
    JSUndefinedVariableError,
    JSValue,
    create_global_env,
    is_return,
)
from .tree import (
    Block,
    Call,
    Expr,
    FieldAccess,
    FieldAssignment,
    Fun,
    Identifier,
    If,
    Literal,
    MethodCall,
    ObjectLiteral,
    Return,
    Script,
    VarAssignment,
    node_line,
)

from .eval.blocks import declare, eval_block
from .eval.chains import eval_call, eval_method_call
from .eval.control import eval_if, eval_return
from .eval.fn import eval_fun
from .eval.objects import eval_field_access, eval_field_assignment, eval_object_literal


def _maybe_attach_location(exc: JSRuntimeError, node: Expr) -> None:
    if exc.line is not None:
        return

    exc.line = node_line(node)

# ---------------- Public API ----------------

def interpret(script: Script, out: Optional[TextIO]=None) -> None:
    """Run a parsed script against a fresh global environment."""
    global_env = create_global_env(out)
    execute(script.body, global_env)

def execute(body: Block, env: JSObject) -> JSValue:
    """Run a top-level body; a stray `return` just ends it."""
    result = eval_node(body, env)

    if is_return(result):
        return result.value

    return result

# ---------------- Core evaluator ----------------

def eval_node(n: Expr, env: JSObject) -> Completion:
    try:
        return _eval_node_inner(n, env)
    except JSRuntimeError as e:
        _maybe_attach_location(e, n)
        raise


def _eval_node_inner(n: Expr, env: JSObject) -> Completion:
    match n:
        case Block():
            return eval_block(n, env, eval_node)
        case Literal(value=value):
            return value
        case Call():
            return eval_call(n, env, eval_node)
        case Identifier(name=name):
            return _eval_identifier(name, env)
        case VarAssignment():
            return _eval_var_assignment(n, env)
        case Fun():
            return eval_fun(n, env, eval_node)
        case Return():
            return eval_return(n, env, eval_node)
        case If():
            return eval_if(n, env, eval_node)
        case ObjectLiteral():
            return eval_object_literal(n, env, eval_node)
        case FieldAccess():
            return eval_field_access(n, env, eval_node)
        case FieldAssignment():
            return eval_field_assignment(n, env, eval_node)
        case MethodCall():
            return eval_method_call(n, env, eval_node)
        case _:
            assert_never(n)

# ---------------- Names ----------------

def _eval_identifier(name: str, env: JSObject) -> JSValue:
    value = env.lookup(name)

    if value is NOT_FOUND:
        raise JSUndefinedVariableError(name)

    return value

def _eval_var_assignment(n: VarAssignment, env: JSObject) -> Completion:
    if not n.declaration and env.lookup(n.name) is NOT_FOUND:
        raise JSUndefinedVariableError(n.name)

    value = eval_node(n.expr, env)
    if is_return(value):
        return value

    # writes land in the current environment, not the declaring one
    env.register(n.name, value)
    return value

__all__ = ["interpret", "execute", "eval_node", "declare"]
