from __future__ import annotations

import sys
from collections import Counter
from pathlib import Path
from typing import List

import pytest

BASE_DIR = Path(__file__).resolve().parent.parent
SRC_DIR = (BASE_DIR / "src").resolve()

for path in (BASE_DIR, SRC_DIR):
    if str(path) not in sys.path:
        sys.path.append(str(path))


@pytest.fixture(autouse=True)
def _isolate_golem_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Runs must not pick up GOLEM_* settings from the developer's shell."""
    monkeypatch.delenv("GOLEM_MAX_CALL_DEPTH", raising=False)
    monkeypatch.delenv("GOLEM_LOG_LEVEL", raising=False)


@pytest.fixture
def root_env():
    from golem.evaluator import new_environment

    return new_environment()


def pytest_collection_modifyitems(
    session: pytest.Session,
    config: pytest.Config,
    items: List[pytest.Item],
) -> None:
    """Scenario tables share one test function; reject repeated ids."""
    del session
    del config

    counts = Counter(item.nodeid for item in items)
    duplicates = sorted(nodeid for nodeid, count in counts.items() if count > 1)
    if not duplicates:
        return

    lines = "\n".join(f"- {nodeid}" for nodeid in duplicates)
    raise pytest.UsageError(f"Duplicate pytest nodeids detected during collection:\n{lines}")
