"""Golem: a small dynamically-typed scripting language engine."""

from .config import EngineConfig, load_config
from .evaluator import evaluate, new_environment
from .lexer import Lexer, tokenize
from .logging_config import setup_logging
from .parser import parse_source
from .runner import run
from .types import Environment, EvaluationError, GolemError, ParseError

__all__ = [
    "EngineConfig",
    "Environment",
    "EvaluationError",
    "GolemError",
    "Lexer",
    "ParseError",
    "evaluate",
    "load_config",
    "new_environment",
    "parse_source",
    "run",
    "setup_logging",
    "tokenize",
]
