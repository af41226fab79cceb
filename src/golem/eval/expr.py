from __future__ import annotations

from typing import Callable

from ..tree import InfixExpression, Node, PrefixExpression
from ..types import (
    Environment,
    GlmInteger,
    GlmString,
    GlmValue,
    is_error,
    native_bool,
)
from .helpers import is_truthy, new_error

EvalFunc = Callable[[Node, Environment], GlmValue]

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

def wrap_int64(value: int) -> int:
    """Fold an unbounded int into signed 64-bit two's complement."""
    return ((value - INT64_MIN) % (1 << 64)) + INT64_MIN

def eval_prefix(n: PrefixExpression, env: Environment, eval_func: EvalFunc) -> GlmValue:
    right = eval_func(n.right, env)
    if is_error(right):
        return right

    return eval_prefix_operator(n.operator, right)

def eval_prefix_operator(op: str, right: GlmValue) -> GlmValue:
    match op:
        case '!':
            return native_bool(not is_truthy(right))
        case '-':
            if not isinstance(right, GlmInteger):
                return new_error(f"unknown operator: -{right.kind}")
            return GlmInteger(wrap_int64(-right.value))
        case _:
            return new_error(f"unknown operator: {op}{right.kind}")

def eval_infix(n: InfixExpression, env: Environment, eval_func: EvalFunc) -> GlmValue:
    left = eval_func(n.left, env)
    if is_error(left):
        return left

    right = eval_func(n.right, env)
    if is_error(right):
        return right

    return eval_infix_operator(n.operator, left, right)

def eval_infix_operator(op: str, left: GlmValue, right: GlmValue) -> GlmValue:
    if isinstance(left, GlmInteger) and isinstance(right, GlmInteger):
        return eval_integer_infix(op, left, right)

    if op == '+' and (isinstance(left, GlmString) or isinstance(right, GlmString)):
        return eval_string_concat(left, right)

    if isinstance(left, GlmString) and isinstance(right, GlmString) and op in ('==', '!='):
        same = left.value == right.value
        return native_bool(same if op == '==' else not same)

    # everything else compares by identity: right for the TRUE/FALSE/NULL singletons
    if op == '==':
        return native_bool(left is right)
    if op == '!=':
        return native_bool(left is not right)

    if left.kind != right.kind:
        return new_error(f"type mismatch: {left.kind} {op} {right.kind}")

    return new_error(f"unknown operator: {left.kind} {op} {right.kind}")

def eval_integer_infix(op: str, left: GlmInteger, right: GlmInteger) -> GlmValue:
    lhs, rhs = left.value, right.value

    match op:
        case '+':
            return GlmInteger(wrap_int64(lhs + rhs))
        case '-':
            return GlmInteger(wrap_int64(lhs - rhs))
        case '*':
            return GlmInteger(wrap_int64(lhs * rhs))
        case '/':
            if rhs == 0:
                return new_error("division by zero")
            return GlmInteger(wrap_int64(_truncating_div(lhs, rhs)))
        case '<':
            return native_bool(lhs < rhs)
        case '>':
            return native_bool(lhs > rhs)
        case '==':
            return native_bool(lhs == rhs)
        case '!=':
            return native_bool(lhs != rhs)
        case _:
            return new_error(f"unknown operator: {left.kind} {op} {right.kind}")

def eval_string_concat(left: GlmValue, right: GlmValue) -> GlmValue:
    if not isinstance(left, GlmString) or not isinstance(right, GlmString):
        return new_error(f"type mismatch: {left.kind} + {right.kind}")

    return GlmString(left.value + right.value)

def _truncating_div(lhs: int, rhs: int) -> int:
    quotient = abs(lhs) // abs(rhs)
    return -quotient if (lhs < 0) != (rhs < 0) else quotient
