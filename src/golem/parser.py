"""
Parser for Golem

The hand-written `Lexer` produces tokens; lark drives an LALR parse over
them using `grammar.lark`, and `AstBuilder` turns lark's parse tree into
`golem.tree` nodes.

Structure:
- Lexer: golem.lexer, adapted to lark's custom lexer interface
- Parser: lark LALR, built once per process
- AST: frozen dataclasses from golem.tree
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator, List, Optional

from lark import Lark, Token
from lark.visitors import Transformer_NonRecursive
from lark.exceptions import UnexpectedInput, UnexpectedToken, VisitError
from lark.lexer import Lexer as LarkLexer

from .eval.expr import INT64_MAX
from .lexer import Lexer
from .token_types import TT, Tok
from .tree import (
    ArrayLiteral,
    BlockStatement,
    Boolean,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionLiteral,
    HashLiteral,
    Identifier,
    IfExpression,
    IndexExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    StringLiteral,
    WhileStatement,
)
from .types import ParseError

log = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).resolve().parent / "grammar.lark"

_PARSER: Optional[Lark] = None

# ============================================================================
# Lexer bridge
# ============================================================================

class GolemLarkLexer(LarkLexer):
    """Feeds golem.lexer tokens to lark; EOF is left for lark's own $END."""

    def __init__(self, lexer_conf: Any):
        pass

    def lex(self, data: str) -> Iterator[Token]:  # type: ignore[override]
        for tok in Lexer(data):
            if tok.type is TT.EOF:
                return
            yield Token(tok.type.name, tok.value, line=tok.line, column=tok.column)

def _tok(token: Token) -> Tok:
    return Tok(TT[token.type], str(token), token.line or 0, token.column or 0)

# ============================================================================
# Parse tree -> AST
# ============================================================================

class AstBuilder(Transformer_NonRecursive):
    """Builds golem.tree nodes bottom-up without recursing, so deep nesting is fine."""

    def start(self, c):
        token = c[0].token if c else Tok(TT.EOF, '', 1, 1)
        return Program(token=token, statements=tuple(c))

    def let_stmt(self, c):
        let_tok, name, _assign, value = c[:4]
        ident = Identifier(token=_tok(name), value=str(name))
        return LetStatement(token=_tok(let_tok), name=ident, value=value)

    def return_stmt(self, c):
        ret_tok, *rest = c
        value = rest[0] if rest and isinstance(rest[0], Expression) else None
        return ReturnStatement(token=_tok(ret_tok), return_value=value)

    def while_stmt(self, c):
        while_tok, _lp, condition, _rp, body = c
        return WhileStatement(token=_tok(while_tok), condition=condition, body=body)

    def expr_stmt(self, c):
        expr = c[0]
        return ExpressionStatement(token=expr.token, expression=expr)

    def block(self, c):
        lbrace, *stmts, _rbrace = c
        return BlockStatement(token=_tok(lbrace), statements=tuple(stmts))

    def infix(self, c):
        left, op, right = c
        return InfixExpression(token=_tok(op), left=left, operator=str(op), right=right)

    def prefix(self, c):
        op, right = c
        return PrefixExpression(token=_tok(op), operator=str(op), right=right)

    def call(self, c):
        function, lparen, *rest = c
        args = rest[0] if isinstance(rest[0], list) else []
        return CallExpression(token=_tok(lparen), function=function, arguments=tuple(args))

    def index(self, c):
        left, lbracket, idx, _rbracket = c
        return IndexExpression(token=_tok(lbracket), left=left, index=idx)

    def identifier(self, c):
        return Identifier(token=_tok(c[0]), value=str(c[0]))

    def integer(self, c):
        tok = _tok(c[0])
        value = int(tok.value)

        if value > INT64_MAX:
            raise ParseError(f"could not parse {tok.value} as integer", tok.line, tok.column)

        return IntegerLiteral(token=tok, value=value)

    def string(self, c):
        return StringLiteral(token=_tok(c[0]), value=str(c[0]))

    def boolean(self, c):
        tok = _tok(c[0])
        return Boolean(token=tok, value=tok.type is TT.TRUE)

    def group(self, c):
        return c[1]

    def arguments(self, c) -> List[Expression]:
        return [x for x in c if isinstance(x, Expression)]

    def array(self, c):
        lbracket, *rest = c
        elements = rest[0] if isinstance(rest[0], list) else []
        return ArrayLiteral(token=_tok(lbracket), elements=tuple(elements))

    def hash(self, c):
        lbrace, *rest = c
        pairs = tuple(x for x in rest if isinstance(x, tuple))
        return HashLiteral(token=_tok(lbrace), pairs=pairs)

    def pair(self, c):
        key, _colon, value = c
        return (key, value)

    def if_expr(self, c):
        if_tok, _lp, condition, _rp, consequence, *rest = c
        alternative = rest[1] if rest else None
        return IfExpression(token=_tok(if_tok), condition=condition,
                            consequence=consequence, alternative=alternative)

    def function(self, c):
        fn_tok, _lp, *rest = c
        params = rest[0] if isinstance(rest[0], tuple) else ()
        return FunctionLiteral(token=_tok(fn_tok), parameters=params, body=c[-1])

    def params(self, c):
        return tuple(Identifier(token=_tok(t), value=str(t)) for t in c if t.type == 'IDENT')

# ============================================================================
# Public API
# ============================================================================

def make_parser() -> Lark:
    """Return the process-wide LALR parser, building it on first use."""
    global _PARSER

    if _PARSER is None:
        grammar = GRAMMAR_PATH.read_text(encoding="utf-8")
        _PARSER = Lark(grammar, parser="lalr", lexer=GolemLarkLexer, start="start")

    return _PARSER

def parse_source(source: str) -> Program:
    log.debug("Parsing %d characters", len(source))

    try:
        tree = make_parser().parse(source)
    except UnexpectedToken as exc:
        raise _unexpected_token_error(exc) from None
    except UnexpectedInput as exc:
        raise ParseError(f"unexpected input: {exc}", getattr(exc, "line", None), getattr(exc, "column", None)) from None

    try:
        program = AstBuilder().transform(tree)
    except VisitError as exc:
        if isinstance(exc.orig_exc, ParseError):
            raise exc.orig_exc from None
        raise

    log.debug("Parsed %d statements", len(program.statements))
    return program

def _unexpected_token_error(exc: UnexpectedToken) -> ParseError:
    token = exc.token
    line = getattr(token, "line", None)
    column = getattr(token, "column", None)

    if token.type == '$END':
        return ParseError("unexpected end of input", line, column)

    if token.type == TT.ILLEGAL.name:
        return ParseError(f"illegal token {str(token)!r}", line, column)

    return ParseError(f"unexpected token {str(token)!r}", line, column)
