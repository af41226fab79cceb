from __future__ import annotations

import dataclasses

import pytest

from golem.parser import parse_source
from golem.token_types import TT, Tok
from golem.tree import (
    BlockStatement,
    CallExpression,
    ExpressionStatement,
    FunctionLiteral,
    Identifier,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    Program,
    ReturnStatement,
    VariableDeclaration,
)


def _ident(name: str) -> Identifier:
    return Identifier(token=Tok(TT.IDENT, name), value=name)


STRING_CASES = [
    pytest.param("let x = 5;", "let x = 5;", id="let"),
    pytest.param("return 10;", "return 10;", id="return"),
    pytest.param("return;", "return;", id="return-bare"),
    pytest.param("-a * b", "((-a) * b)", id="prefix-binds-tighter"),
    pytest.param("!-a", "(!(-a))", id="prefix-nested"),
    pytest.param("a + b + c", "((a + b) + c)", id="sum-left-assoc"),
    pytest.param("a * b / c", "((a * b) / c)", id="product-left-assoc"),
    pytest.param("a + b * c + d / e - f", "(((a + (b * c)) + (d / e)) - f)", id="mixed-precedence"),
    pytest.param("5 > 4 == 3 < 4", "((5 > 4) == (3 < 4))", id="comparison-below-equality"),
    pytest.param("3 + 4 * 5 == 3 * 1 + 4 * 5", "((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))", id="equality-lowest"),
    pytest.param("(5 + 5) * 2", "((5 + 5) * 2)", id="grouping"),
    pytest.param("-(5 + 5)", "(-(5 + 5))", id="prefix-group"),
    pytest.param("!(true == true)", "(!(true == true))", id="bang-group"),
    pytest.param("a + add(b * c) + d", "((a + add((b * c))) + d)", id="call-in-sum"),
    pytest.param(
        "add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))",
        "add(a, b, 1, (2 * 3), (4 + 5), add(6, (7 * 8)))",
        id="call-args",
    ),
    pytest.param(
        "a * [1, 2, 3, 4][b * c] * d",
        "((a * ([1, 2, 3, 4][(b * c)])) * d)",
        id="index-precedence",
    ),
    pytest.param(
        "add(a * b[2], b[1], 2 * [1, 2][1])",
        "add((a * (b[2])), (b[1]), (2 * ([1, 2][1])))",
        id="index-in-args",
    ),
    pytest.param('"hello world"', '"hello world"', id="string"),
    pytest.param("[]", "[]", id="array-empty"),
    pytest.param('{"one": 1, "two": 2}', '{"one": 1, "two": 2}', id="hash"),
    pytest.param("{}", "{}", id="hash-empty"),
    pytest.param("if (x < y) { x }", "if ((x < y)) {\n  x\n}", id="if"),
    pytest.param(
        "if (x < y) { x } else { y }",
        "if ((x < y)) {\n  x\n} else {\n  y\n}",
        id="if-else",
    ),
    pytest.param("fn(x, y) { x + y; }", "fn(x, y) {\n  (x + y)\n}", id="fn-literal"),
    pytest.param("function() {}", "function() { }", id="function-keyword-empty"),
    pytest.param("while (i < 3) { i }", "while ((i < 3)) {\n  i\n}", id="while"),
    pytest.param("fn(x) { x }(5)", "fn(x) {\n  x\n}(5)", id="immediate-call"),
]


@pytest.mark.parametrize("source, expected", STRING_CASES)
def test_statement_string_form(source: str, expected: str) -> None:
    program = parse_source(source)

    assert len(program.statements) == 1
    assert str(program.statements[0]) == expected


def test_program_string_joins_statements() -> None:
    program = parse_source("let a = 1; a + 2; return a")
    assert str(program) == "let a = 1;\n(a + 2)\nreturn a;\n"


def test_string_form_round_trips() -> None:
    source = "let f = fn(a, b) { if (a > b) { return a; } else { b } }; f(1, [2][0] * -3)"
    first = parse_source(source)
    second = parse_source(str(first))

    assert str(second) == str(first)


@pytest.mark.parametrize("literal", ["0", "7", "42", "9223372036854775807"])
def test_integer_literal_round_trips(literal: str) -> None:
    node = parse_source(literal).statements[0].expression
    reparsed = parse_source(str(node)).statements[0].expression

    assert isinstance(node, IntegerLiteral)
    assert node.value == int(literal)
    assert reparsed.value == node.value


def test_hand_built_let_string() -> None:
    stmt = LetStatement(
        token=Tok(TT.LET, "let"),
        name=_ident("myVar"),
        value=_ident("anotherVar"),
    )
    program = Program(token=stmt.token, statements=(stmt,))

    assert str(program) == "let myVar = anotherVar;\n"
    assert program.token_literal() == "let"
    assert VariableDeclaration is LetStatement


def test_empty_program() -> None:
    program = parse_source("")

    assert program.statements == ()
    assert program.token_literal() == ""
    assert str(program) == ""


def test_nodes_are_immutable() -> None:
    node = _ident("x")
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.value = "y"  # type: ignore[misc]


def test_token_literal_is_first_token() -> None:
    program = parse_source("let x = 1 + 2; return x; fn(a) { a }")
    literals = [stmt.token_literal() for stmt in program.statements]

    assert literals == ["let", "return", "fn"]
    infix = program.statements[0].value
    assert isinstance(infix, InfixExpression)
    assert infix.token_literal() == "+"


def test_function_and_call_shapes() -> None:
    program = parse_source("let add = fn(a, b) { return a + b; }; add(1, 2)")
    let_stmt, call_stmt = program.statements

    assert isinstance(let_stmt, LetStatement)
    fn_lit = let_stmt.value
    assert isinstance(fn_lit, FunctionLiteral)
    assert [p.value for p in fn_lit.parameters] == ["a", "b"]
    assert isinstance(fn_lit.body, BlockStatement)
    assert isinstance(fn_lit.body.statements[0], ReturnStatement)

    assert isinstance(call_stmt, ExpressionStatement)
    call = call_stmt.expression
    assert isinstance(call, CallExpression)
    assert [arg.value for arg in call.arguments] == [1, 2]
