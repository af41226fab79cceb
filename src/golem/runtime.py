from __future__ import annotations

import importlib
import logging
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional

from .eval.blocks import eval_statements
from .eval.helpers import new_error, unwrap_return_value
from .types import (
    Builtins, Environment, GlmBuiltin, GlmFn, GlmValue,
)

log = logging.getLogger(__name__)

_BUILTINS_INITIALIZED = False

BuiltinImpl = Callable[[List[GlmValue]], GlmValue]

def init_builtins() -> None:
    """Load the stdlib module (idempotent) so register_builtin hooks run."""
    global _BUILTINS_INITIALIZED

    if _BUILTINS_INITIALIZED:
        return

    importlib.import_module("golem.stdlib")
    _BUILTINS_INITIALIZED = True
    log.debug("Registered builtins: %s", ", ".join(sorted(Builtins.functions)))

def register_builtin(name: str):
    def dec(fn: BuiltinImpl):
        if name in Builtins.functions:
            raise ValueError(f"builtin {name!r} registered twice")
        Builtins.functions[name] = GlmBuiltin(name=name, fn=fn)
        return fn

    return dec

def lookup_builtin(name: str) -> Optional[GlmBuiltin]:
    init_builtins()
    return Builtins.functions.get(name)

def builtins() -> Mapping[str, GlmBuiltin]:
    init_builtins()
    return MappingProxyType(Builtins.functions)

def apply_function(fn: GlmValue, args: List[GlmValue], caller_env: Environment) -> GlmValue:
    match fn:
        case GlmFn():
            return call_glmfn(fn, args, caller_env)
        case GlmBuiltin():
            return fn.fn(args)
        case _:
            return new_error(f"not a function: {fn.kind}")

def call_glmfn(fn: GlmFn, args: List[GlmValue], caller_env: Environment) -> GlmValue:
    """
    Call semantics:
    - the callee scope is a child of the closure scope, not the caller's
    - arity must match len(fn.params)
    - a `return` anywhere in the body stops the body and is unwrapped here
    """
    from .evaluator import eval_node  # local import to avoid cycle

    if len(args) != len(fn.params):
        return new_error(f"wrong number of arguments: want={len(fn.params)}, got={len(args)}")

    config = caller_env.config
    depth = caller_env.depth + 1

    if depth > config.max_call_depth:
        log.debug("Call depth %d exceeds limit %d", depth, config.max_call_depth)
        return new_error("maximum recursion depth exceeded")

    callee_env = Environment(outer=fn.env, config=config, depth=depth)

    for param, val in zip(fn.params, args):
        callee_env.set(param.value, val)

    evaluated = eval_statements(fn.body.statements, callee_env, eval_node)
    return unwrap_return_value(evaluated)
