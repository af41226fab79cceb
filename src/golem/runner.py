from __future__ import annotations

import logging
from typing import Optional

from .evaluator import evaluate, new_environment
from .parser import parse_source
from .types import Environment, GlmValue

log = logging.getLogger(__name__)

def run(src: str, env: Optional[Environment]=None) -> GlmValue:
    """Parse `src` and evaluate it; a fresh root scope is used unless `env` is given."""
    program = parse_source(src)

    if env is None:
        env = new_environment()

    result = evaluate(program, env)
    log.debug("Program finished with %s", result.kind)
    return result
