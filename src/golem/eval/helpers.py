from __future__ import annotations

import logging

from ..types import FALSE, NULL, GlmError, GlmReturn, GlmValue

log = logging.getLogger(__name__)

def is_truthy(value: GlmValue) -> bool:
    """Only `null` and `false` are falsy; 0 and "" are truthy."""
    return value is not NULL and value is not FALSE

def is_signal(value: GlmValue) -> bool:
    """Error and ReturnValue stop the statement sequence they appear in."""
    return isinstance(value, (GlmError, GlmReturn))

def new_error(message: str) -> GlmError:
    log.debug("Script error: %s", message)
    return GlmError(message)

def unwrap_return_value(value: GlmValue) -> GlmValue:
    if isinstance(value, GlmReturn):
        return value.value
    return value
