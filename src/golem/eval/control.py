from __future__ import annotations

from typing import Callable

from ..tree import IfExpression, LetStatement, Node, ReturnStatement, WhileStatement
from ..types import NULL, Environment, GlmReturn, GlmValue, is_error
from .blocks import eval_statements
from .helpers import is_signal, is_truthy

EvalFunc = Callable[[Node, Environment], GlmValue]

def eval_if(n: IfExpression, env: Environment, eval_func: EvalFunc) -> GlmValue:
    condition = eval_func(n.condition, env)
    if is_error(condition):
        return condition

    if is_truthy(condition):
        return eval_func(n.consequence, env)

    if n.alternative is not None:
        return eval_func(n.alternative, env)

    return NULL

def eval_while(n: WhileStatement, env: Environment, eval_func: EvalFunc) -> GlmValue:
    """Loop while the condition is truthy; the body shares the enclosing scope."""
    while True:
        condition = eval_func(n.condition, env)
        if is_error(condition):
            return condition

        if not is_truthy(condition):
            return NULL

        result = eval_statements(n.body.statements, env, eval_func)
        if is_signal(result):
            return result

def eval_return(n: ReturnStatement, env: Environment, eval_func: EvalFunc) -> GlmValue:
    if n.return_value is None:
        return GlmReturn(NULL)

    val = eval_func(n.return_value, env)
    if is_error(val):
        return val

    return GlmReturn(val)

def eval_let(n: LetStatement, env: Environment, eval_func: EvalFunc) -> GlmValue:
    val = eval_func(n.value, env)
    if is_error(val):
        return val

    return env.set(n.name.value, val)
