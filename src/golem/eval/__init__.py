"""Evaluator helper modules for the Golem runtime."""

__all__ = [
    "blocks",
    "control",
    "expr",
    "fn",
    "helpers",
    "objects",
]
