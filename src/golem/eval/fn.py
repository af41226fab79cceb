from __future__ import annotations

from typing import Callable, Iterable, List, Union

from ..runtime import apply_function, lookup_builtin
from ..tree import CallExpression, Expression, FunctionLiteral, Identifier, Node
from ..types import Environment, GlmError, GlmFn, GlmValue, is_error
from .helpers import new_error

EvalFunc = Callable[[Node, Environment], GlmValue]

def eval_function_literal(n: FunctionLiteral, env: Environment) -> GlmFn:
    # closes over `env`; the body runs only when called
    return GlmFn(params=n.parameters, body=n.body, env=env)

def eval_identifier(n: Identifier, env: Environment) -> GlmValue:
    val, found = env.get(n.value)
    if found and val is not None:
        return val

    builtin = lookup_builtin(n.value)
    if builtin is not None:
        return builtin

    return new_error(f"identifier not found: {n.value}")

def eval_expressions(exprs: Iterable[Expression], env: Environment, eval_func: EvalFunc) -> Union[List[GlmValue], GlmError]:
    """Evaluate left to right; the first Error replaces the whole list."""
    values: List[GlmValue] = []

    for expr in exprs:
        val = eval_func(expr, env)
        if is_error(val):
            return val
        values.append(val)

    return values

def eval_call(n: CallExpression, env: Environment, eval_func: EvalFunc) -> GlmValue:
    fn = eval_func(n.function, env)
    if is_error(fn):
        return fn

    args = eval_expressions(n.arguments, env, eval_func)
    if is_error(args):
        return args

    return apply_function(fn, args, env)
