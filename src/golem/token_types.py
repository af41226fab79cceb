"""
Token Types for Golem

Shared between the lexer, the parser adapter and the AST so none of them
has to import the others.
"""

from dataclasses import dataclass
from enum import Enum, auto


class TT(Enum):
    """Token Types - member names double as grammar terminal names"""

    # Special
    EOF = auto()
    ILLEGAL = auto()

    # Literals
    IDENT = auto()
    INT = auto()
    STRING = auto()

    # Operators
    ASSIGN = auto()
    PLUS = auto()
    MINUS = auto()
    ASTERISK = auto()
    SLASH = auto()
    BANG = auto()

    # Comparison
    LT = auto()
    GT = auto()
    EQ = auto()
    NOT_EQ = auto()

    # Punctuation
    COMMA = auto()
    SEMICOLON = auto()
    COLON = auto()
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()

    # Keywords
    FUNCTION = auto()
    LET = auto()
    TRUE = auto()
    FALSE = auto()
    IF = auto()
    ELSE = auto()
    RETURN = auto()
    WHILE = auto()


@dataclass(frozen=True)
class Tok:
    """Token with position info"""

    type: TT
    value: str
    line: int = 0
    column: int = 0

    def __repr__(self):
        return f"<{self.type.name} {self.value!r} :{self.column}>"
