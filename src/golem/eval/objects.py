from __future__ import annotations

from typing import Callable, Dict

from ..tree import ArrayLiteral, HashLiteral, IndexExpression, Node
from ..types import (
    NULL,
    Environment,
    GlmArray,
    GlmHash,
    GlmInteger,
    GlmValue,
    HashKey,
    HashPair,
    is_error,
    is_hashable,
)
from .fn import eval_expressions
from .helpers import new_error

EvalFunc = Callable[[Node, Environment], GlmValue]

def eval_array(n: ArrayLiteral, env: Environment, eval_func: EvalFunc) -> GlmValue:
    elements = eval_expressions(n.elements, env, eval_func)
    if is_error(elements):
        return elements

    return GlmArray(elements)

def eval_hash(n: HashLiteral, env: Environment, eval_func: EvalFunc) -> GlmValue:
    pairs: Dict[HashKey, HashPair] = {}

    for key_node, value_node in n.pairs:
        key = eval_func(key_node, env)
        if is_error(key):
            return key

        if not is_hashable(key):
            return new_error(f"unusable as hash key: {key.kind}")

        value = eval_func(value_node, env)
        if is_error(value):
            return value

        pairs[key.hash_key()] = HashPair(key=key, value=value)

    return GlmHash(pairs)

def eval_index(n: IndexExpression, env: Environment, eval_func: EvalFunc) -> GlmValue:
    left = eval_func(n.left, env)
    if is_error(left):
        return left

    index = eval_func(n.index, env)
    if is_error(index):
        return index

    return index_value(left, index)

def index_value(left: GlmValue, index: GlmValue) -> GlmValue:
    match left:
        case GlmArray():
            return _array_index(left, index)
        case GlmHash():
            return _hash_index(left, index)
        case _:
            return new_error(f"index operator not supported: {left.kind}")

def _array_index(array: GlmArray, index: GlmValue) -> GlmValue:
    if not isinstance(index, GlmInteger):
        return NULL

    idx = index.value
    if idx < 0 or idx > len(array.elements) - 1:
        return NULL

    return array.elements[idx]

def _hash_index(hash_obj: GlmHash, index: GlmValue) -> GlmValue:
    if not is_hashable(index):
        return new_error(f"unusable as hash key: {index.kind}")

    pair = hash_obj.pairs.get(index.hash_key())
    if pair is None:
        # deliberate: an index whose kind no key shares is an error, not a miss
        # ({1: "x"}[true]); a miss within a kind present in the hash is Null
        if hash_obj.pairs and all(key.type is not index.kind for key in hash_obj.pairs):
            return new_error(f"unusable as hash key: {index.kind}")
        return NULL

    return pair.value
