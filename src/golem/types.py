from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from typing_extensions import TypeAlias, TypeGuard

from .config import EngineConfig
from .tree import BlockStatement, Identifier

# ---------- Value Model ----------

class ObjectType(str, Enum):
    INTEGER = "INTEGER"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"
    ERROR = "ERROR"
    RETURN_VALUE = "RETURN_VALUE"
    FUNCTION = "FUNCTION"
    BUILTIN = "BUILTIN"
    ARRAY = "ARRAY"
    HASH = "HASH"

    def __str__(self) -> str:
        return self.value

@dataclass(frozen=True)
class HashKey:
    type: ObjectType
    value: object

@dataclass(frozen=True)
class GlmInteger:
    value: int
    kind = ObjectType.INTEGER

    def inspect(self) -> str:
        return str(self.value)

    def hash_key(self) -> HashKey:
        return HashKey(self.kind, self.value)

@dataclass(frozen=True)
class GlmString:
    value: str
    kind = ObjectType.STRING

    def inspect(self) -> str:
        return self.value

    def hash_key(self) -> HashKey:
        return HashKey(self.kind, self.value)

@dataclass(frozen=True, eq=False)
class GlmBool:
    """Only the TRUE and FALSE singletons below should ever exist."""
    value: bool
    kind = ObjectType.BOOLEAN

    def inspect(self) -> str:
        return "true" if self.value else "false"

    def hash_key(self) -> HashKey:
        return HashKey(self.kind, int(self.value))

@dataclass(frozen=True, eq=False)
class GlmNull:
    kind = ObjectType.NULL

    def inspect(self) -> str:
        return "null"

@dataclass(frozen=True)
class GlmError:
    message: str
    kind = ObjectType.ERROR

    def inspect(self) -> str:
        return f"ERROR: {self.message}"

@dataclass(frozen=True)
class GlmReturn:
    """Carries a `return` value up to the enclosing call; never user-visible."""
    value: GlmValue
    kind = ObjectType.RETURN_VALUE

    def inspect(self) -> str:
        return self.value.inspect()

@dataclass(eq=False)
class GlmFn:
    params: Tuple[Identifier, ...]
    body: BlockStatement
    env: Environment  # closure scope
    kind = ObjectType.FUNCTION

    def inspect(self) -> str:
        params = ", ".join(p.value for p in self.params)
        return f"fn({params}) {self.body}"

    def __repr__(self) -> str:
        return f"<fn params={len(self.params)}>"

BuiltinFn = Callable[..., 'GlmValue']

@dataclass(frozen=True, eq=False)
class GlmBuiltin:
    name: str
    fn: BuiltinFn
    kind = ObjectType.BUILTIN

    def inspect(self) -> str:
        return "builtin function"

@dataclass(eq=False)
class GlmArray:
    elements: List[GlmValue]
    kind = ObjectType.ARRAY

    def inspect(self) -> str:
        return "[" + ", ".join(e.inspect() for e in self.elements) + "]"

@dataclass(frozen=True)
class HashPair:
    key: GlmValue
    value: GlmValue

@dataclass(eq=False)
class GlmHash:
    pairs: Dict[HashKey, HashPair] = field(default_factory=dict)
    kind = ObjectType.HASH

    def inspect(self) -> str:
        pairs = []

        for pair in self.pairs.values():
            pairs.append(f"{pair.key.inspect()}: {pair.value.inspect()}")

        return "{" + ", ".join(pairs) + "}"

GlmValue: TypeAlias = (
    GlmInteger
    | GlmString
    | GlmBool
    | GlmNull
    | GlmError
    | GlmReturn
    | GlmFn
    | GlmBuiltin
    | GlmArray
    | GlmHash
)

Hashable: TypeAlias = GlmInteger | GlmString | GlmBool

TRUE = GlmBool(True)
FALSE = GlmBool(False)
NULL = GlmNull()

_HASHABLE_TYPES: Tuple[type, ...] = (GlmInteger, GlmString, GlmBool)

def is_hashable(value: GlmValue) -> TypeGuard[Hashable]:
    return isinstance(value, _HASHABLE_TYPES)

def is_error(value: Optional[GlmValue]) -> TypeGuard[GlmError]:
    return isinstance(value, GlmError)

def native_bool(value: bool) -> GlmBool:
    return TRUE if value else FALSE

# ---------- Environment ----------

class Environment:
    """One lexical scope; lookups walk `outer`, writes stay local."""

    def __init__(self, outer: Optional['Environment']=None, config: Optional[EngineConfig]=None, depth: Optional[int]=None):
        self.outer = outer
        self.store: Dict[str, GlmValue] = {}

        if config is not None:
            self.config = config
        elif outer is not None:
            self.config = outer.config
        else:
            self.config = EngineConfig()

        if depth is not None:
            self.depth = depth
        elif outer is not None:
            self.depth = outer.depth
        else:
            self.depth = 0

    def get(self, name: str) -> Tuple[Optional[GlmValue], bool]:
        env: Optional[Environment] = self

        while env is not None:
            if name in env.store:
                return env.store[name], True
            env = env.outer

        return None, False

    def set(self, name: str, val: GlmValue) -> GlmValue:
        self.store[name] = val
        return val

    def enclosed(self) -> 'Environment':
        """Child scope for a block; shares config and call depth."""
        return Environment(outer=self)

    def __contains__(self, name: str) -> bool:
        return self.get(name)[1]

# ---------- Exceptions ----------

class GolemError(Exception):
    """Host-level failure: malformed input, never a script-level error."""

class EvaluationError(GolemError):
    pass

class ParseError(GolemError):
    """Parse error with position info"""
    def __init__(self, message: str, line: Optional[int]=None, column: Optional[int]=None):
        self.message = message
        self.line = line
        self.column = column

        if line is None:
            super().__init__(message)
        elif column is None:
            super().__init__(f"{message} at line {line}")
        else:
            super().__init__(f"{message} at line {line}, col {column}")

class Builtins:
    """Process-wide registry filled by `runtime.register_builtin`."""
    functions: Dict[str, GlmBuiltin] = {}
