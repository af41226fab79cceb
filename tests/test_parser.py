from __future__ import annotations

from typing import Optional

import pytest

from golem.parser import make_parser, parse_source
from golem.tree import (
    ArrayLiteral,
    Boolean,
    HashLiteral,
    IfExpression,
    IndexExpression,
    IntegerLiteral,
    LetStatement,
    ReturnStatement,
    StringLiteral,
    WhileStatement,
)
from golem.types import GolemError, ParseError

ERROR_CASES = [
    pytest.param("let = 5;", "unexpected token '='", 1, 5, id="let-missing-name"),
    pytest.param("let x 5;", "unexpected token '5'", 1, 7, id="let-missing-assign"),
    pytest.param("let x = @;", "illegal token '@'", 1, 9, id="illegal-char"),
    pytest.param('let s = "open', "illegal token '\"open'", 1, 9, id="unterminated-string"),
    pytest.param("1 +\n  $", "illegal token '$'", 2, 3, id="illegal-on-second-line"),
    pytest.param("(1 + 2", "unexpected end of input", None, None, id="eof-in-group"),
    pytest.param("fn(x) { x", "unexpected end of input", None, None, id="eof-in-block"),
    pytest.param("let", "unexpected end of input", None, None, id="eof-after-let"),
    pytest.param("if x { 1 }", "unexpected token 'x'", 1, 4, id="if-needs-parens"),
    pytest.param("fn(1) { 1 }", "unexpected token '1'", 1, 4, id="param-not-ident"),
    pytest.param("[1, 2", "unexpected end of input", None, None, id="eof-in-array"),
    pytest.param("{1 2}", "unexpected token '2'", 1, 4, id="hash-missing-colon"),
    pytest.param(
        "9223372036854775808",
        "could not parse 9223372036854775808 as integer",
        1,
        1,
        id="int-out-of-range",
    ),
]


@pytest.mark.parametrize("source, message, line, column", ERROR_CASES)
def test_parse_errors(source: str, message: str, line: Optional[int], column: Optional[int]) -> None:
    with pytest.raises(ParseError) as exc_info:
        parse_source(source)

    err = exc_info.value
    assert err.message == message
    assert isinstance(err, GolemError)

    if line is not None:
        assert err.line == line, f"expected line {line}, got {err.line}"
        assert err.column == column, f"expected col {column}, got {err.column}"
        assert str(err) == f"{message} at line {line}, col {column}"


def test_parse_error_message_without_position() -> None:
    assert str(ParseError("boom")) == "boom"
    assert str(ParseError("boom", 3)) == "boom at line 3"


def test_parser_is_built_once() -> None:
    assert make_parser() is make_parser()


def test_let_statements() -> None:
    program = parse_source("let x = 5;\nlet y = true;\nlet foobar = y")
    names = [stmt.name.value for stmt in program.statements]

    assert all(isinstance(stmt, LetStatement) for stmt in program.statements)
    assert names == ["x", "y", "foobar"]
    assert isinstance(program.statements[0].value, IntegerLiteral)
    assert isinstance(program.statements[1].value, Boolean)


def test_semicolons_are_optional() -> None:
    with_semis = parse_source("let a = 1; a; return a;")
    without = parse_source("let a = 1\na\nreturn a")

    assert str(with_semis) == str(without)


def test_return_without_value() -> None:
    stmt = parse_source("return;").statements[0]

    assert isinstance(stmt, ReturnStatement)
    assert stmt.return_value is None


def test_if_else_shape() -> None:
    expr = parse_source("if (x) { 1 } else { 2; 3 }").statements[0].expression

    assert isinstance(expr, IfExpression)
    assert len(expr.consequence.statements) == 1
    assert expr.alternative is not None
    assert len(expr.alternative.statements) == 2


def test_while_shape() -> None:
    stmt = parse_source("while (i < 10) { let i = i + 1; }").statements[0]

    assert isinstance(stmt, WhileStatement)
    assert str(stmt.condition) == "(i < 10)"
    assert isinstance(stmt.body.statements[0], LetStatement)


def test_collection_literals() -> None:
    array, index, hash_lit = (s.expression for s in parse_source('[1, "two"]; xs[1 + 1]; {"a": 1, 2: true}').statements)

    assert isinstance(array, ArrayLiteral)
    assert isinstance(array.elements[1], StringLiteral)
    assert isinstance(index, IndexExpression)
    assert str(index.index) == "(1 + 1)"
    assert isinstance(hash_lit, HashLiteral)
    assert [(str(k), str(v)) for k, v in hash_lit.pairs] == [('"a"', "1"), ("2", "true")]


def test_largest_int_literal_parses() -> None:
    expr = parse_source("9223372036854775807").statements[0].expression
    assert expr.value == 9223372036854775807


def test_long_left_associative_chain() -> None:
    program = parse_source("1" + " + 1" * 3000)

    assert len(program.statements) == 1
    expr = program.statements[0].expression
    assert expr.operator == "+"
    assert expr.right.value == 1


def test_deeply_parenthesised_expression() -> None:
    program = parse_source("(" * 800 + "7" + ")" * 800)

    assert program.statements[0].expression.value == 7
