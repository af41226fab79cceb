"""Built-in functions (len, puts, etc.) registered via golem.runtime."""

from __future__ import annotations

from typing import List

from .eval.helpers import new_error
from .runtime import register_builtin
from .types import NULL, GlmArray, GlmInteger, GlmString, GlmValue


def _expect_arity(args: List[GlmValue], expected: int) -> GlmValue | None:
    if len(args) != expected:
        return new_error(f"wrong number of arguments. got={len(args)}, want={expected}")
    return None


def _expect_array(name: str, arg: GlmValue) -> GlmValue | None:
    if not isinstance(arg, GlmArray):
        return new_error(f"argument to `{name}` must be ARRAY, got {arg.kind}")
    return None


@register_builtin("len")
def std_len(args: List[GlmValue]) -> GlmValue:
    err = _expect_arity(args, 1)
    if err is not None:
        return err

    match args[0]:
        case GlmArray(elements=elements):
            return GlmInteger(len(elements))
        case GlmString(value=value):
            return GlmInteger(len(value.encode("utf-8")))
        case other:
            return new_error(f"argument to `len` not supported, got {other.kind}")


@register_builtin("first")
def std_first(args: List[GlmValue]) -> GlmValue:
    err = _expect_arity(args, 1) or _expect_array("first", args[0])
    if err is not None:
        return err

    elements = args[0].elements
    return elements[0] if elements else NULL


@register_builtin("last")
def std_last(args: List[GlmValue]) -> GlmValue:
    err = _expect_arity(args, 1) or _expect_array("last", args[0])
    if err is not None:
        return err

    elements = args[0].elements
    return elements[-1] if elements else NULL


@register_builtin("rest")
def std_rest(args: List[GlmValue]) -> GlmValue:
    err = _expect_arity(args, 1) or _expect_array("rest", args[0])
    if err is not None:
        return err

    elements = args[0].elements
    if not elements:
        return NULL
    return GlmArray(list(elements[1:]))


@register_builtin("push")
def std_push(args: List[GlmValue]) -> GlmValue:
    err = _expect_arity(args, 2) or _expect_array("push", args[0])
    if err is not None:
        return err

    # returns a new array; the argument is left untouched
    return GlmArray([*args[0].elements, args[1]])


@register_builtin("puts")
def std_puts(args: List[GlmValue]) -> GlmValue:
    for arg in args:
        print(arg.inspect())
    return NULL
