from __future__ import annotations

import golem
from golem.runner import run


def test_package_exports_entry_points() -> None:
    result = golem.run("let greet = fn(name) { \"hi \" + name }; greet(\"ada\")")

    assert result.inspect() == "hi ada"
    assert golem.parse_source("1").statements[0].expression.value == 1
    assert [tok.value for tok in golem.tokenize("a")] == ["a", ""]


def test_run_reuses_given_environment() -> None:
    env = golem.new_environment(golem.EngineConfig(max_call_depth=10))

    run("let count = 1;", env)
    run("let count = count + 1;", env)

    assert env.get("count")[0].value == 2
    assert env.config.max_call_depth == 10


def test_run_returns_error_objects_not_exceptions() -> None:
    result = run("1 + true")

    assert result.kind.value == "ERROR"


def test_run_long_expression() -> None:
    result = run("1" + "+1" * 3000)

    assert result.value == 3001
