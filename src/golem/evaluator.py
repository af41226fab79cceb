from __future__ import annotations

import logging
import sys
from typing import Callable, Optional

from .config import EngineConfig, load_config
from .runtime import init_builtins
from .tree import (
    ArrayLiteral,
    BlockStatement,
    Boolean,
    CallExpression,
    ExpressionStatement,
    FunctionLiteral,
    HashLiteral,
    Identifier,
    IfExpression,
    IndexExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    Node,
    PrefixExpression,
    Program,
    ReturnStatement,
    StringLiteral,
    WhileStatement,
    node_label,
)
from .types import Environment, EvaluationError, GlmInteger, GlmString, GlmValue, native_bool

from .eval.blocks import eval_block, eval_program
from .eval.control import eval_if, eval_let, eval_return, eval_while
from .eval.expr import eval_infix, eval_prefix
from .eval.fn import eval_call, eval_function_literal, eval_identifier
from .eval.helpers import new_error
from .eval.objects import eval_array, eval_hash, eval_index

log = logging.getLogger(__name__)

EvalFunc = Callable[[Node, Environment], GlmValue]

# upper bound on Python frames used by one user-function call
HOST_FRAMES_PER_CALL = 40
HOST_FRAME_MARGIN = 200

# ---------------- Public API ----------------

def new_environment(config: Optional[EngineConfig]=None) -> Environment:
    """Fresh root scope; config comes from GOLEM_* variables when omitted."""
    return Environment(config=config if config is not None else load_config())

def evaluate(node: Node, env: Optional[Environment]=None) -> GlmValue:
    init_builtins()

    if env is None:
        env = new_environment()

    old_limit = sys.getrecursionlimit()
    needed = env.config.max_call_depth * HOST_FRAMES_PER_CALL + HOST_FRAME_MARGIN

    # the host stack must outlast the call-depth budget
    if needed > old_limit:
        sys.setrecursionlimit(needed)

    try:
        return eval_node(node, env)
    except RecursionError:
        log.debug("Host recursion limit hit while evaluating %s", node_label(node))
        return new_error("maximum recursion depth exceeded")
    finally:
        sys.setrecursionlimit(old_limit)

# ---------------- Core evaluator ----------------

def eval_node(n: Node, env: Environment) -> GlmValue:
    handler = _NODE_DISPATCH.get(type(n))
    if handler is None:
        raise EvaluationError(f"Unknown node: {type(n).__name__}")

    return handler(n, env)

_NODE_DISPATCH: dict[type, EvalFunc] = {
    Program: lambda n, env: eval_program(n, env, eval_node),
    ExpressionStatement: lambda n, env: eval_node(n.expression, env),
    BlockStatement: lambda n, env: eval_block(n, env, eval_node),
    LetStatement: lambda n, env: eval_let(n, env, eval_node),
    ReturnStatement: lambda n, env: eval_return(n, env, eval_node),
    WhileStatement: lambda n, env: eval_while(n, env, eval_node),
    IfExpression: lambda n, env: eval_if(n, env, eval_node),
    IntegerLiteral: lambda n, _: GlmInteger(n.value),
    StringLiteral: lambda n, _: GlmString(n.value),
    Boolean: lambda n, _: native_bool(n.value),
    Identifier: eval_identifier,
    PrefixExpression: lambda n, env: eval_prefix(n, env, eval_node),
    InfixExpression: lambda n, env: eval_infix(n, env, eval_node),
    FunctionLiteral: eval_function_literal,
    CallExpression: lambda n, env: eval_call(n, env, eval_node),
    ArrayLiteral: lambda n, env: eval_array(n, env, eval_node),
    IndexExpression: lambda n, env: eval_index(n, env, eval_node),
    HashLiteral: lambda n, env: eval_hash(n, env, eval_node),
}
