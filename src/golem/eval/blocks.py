from __future__ import annotations

from typing import Callable, Iterable

from ..tree import BlockStatement, Node, Program, Statement
from ..types import NULL, Environment, GlmValue
from .helpers import is_signal, unwrap_return_value

EvalFunc = Callable[[Node, Environment], GlmValue]

def eval_statements(statements: Iterable[Statement], env: Environment, eval_func: EvalFunc) -> GlmValue:
    """Run statements in `env`; an Error or ReturnValue ends the run as-is."""
    result: GlmValue = NULL

    for stmt in statements:
        result = eval_func(stmt, env)

        if is_signal(result):
            return result

    return result

def eval_program(program: Program, env: Environment, eval_func: EvalFunc) -> GlmValue:
    # a top-level `return` ends the program with its value
    return unwrap_return_value(eval_statements(program.statements, env, eval_func))

def eval_block(block: BlockStatement, env: Environment, eval_func: EvalFunc) -> GlmValue:
    """Evaluate a block in its own child scope."""
    return eval_statements(block.statements, env.enclosed(), eval_func)
