"""Engine settings shared by every environment of one evaluation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_MAX_CALL_DEPTH = 500
DEFAULT_LOG_LEVEL = "WARNING"

ENV_MAX_CALL_DEPTH = "GOLEM_MAX_CALL_DEPTH"
ENV_LOG_LEVEL = "GOLEM_LOG_LEVEL"


@dataclass(frozen=True)
class EngineConfig:
    """Limits and logging level for an evaluation.

    `max_call_depth` bounds nested user-function calls; going past it turns
    into a script-level error instead of exhausting the host stack.
    """

    max_call_depth: int = DEFAULT_MAX_CALL_DEPTH
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if self.max_call_depth < 1:
            raise ValueError(f"max_call_depth must be positive, got {self.max_call_depth}")


def load_config(environ: Optional[Mapping[str, str]] = None) -> EngineConfig:
    """Build an EngineConfig from GOLEM_* variables, falling back to defaults."""
    if environ is None:
        environ = os.environ

    depth_raw = environ.get(ENV_MAX_CALL_DEPTH)
    max_call_depth = DEFAULT_MAX_CALL_DEPTH

    if depth_raw:
        try:
            max_call_depth = int(depth_raw)
        except ValueError:
            raise ValueError(f"{ENV_MAX_CALL_DEPTH} must be an integer, got {depth_raw!r}") from None

    log_level = environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper()

    return EngineConfig(max_call_depth=max_call_depth, log_level=log_level)
