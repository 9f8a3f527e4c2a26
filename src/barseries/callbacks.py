"""Invocation of user-supplied render functions.

Label functions are called as ``fn(props, {})`` and background functions as
``fn(props)``. Either kind may use the other shape: the arity is checked once
per render pass and the function is called with whatever it accepts. A
function that raises is logged and draws nothing for that item.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Mapping

logger = logging.getLogger(__name__)

RenderFunction = Callable[..., Any]


def _binds(signature: inspect.Signature, count: int) -> bool:
    try:
        signature.bind(*([None] * count))
    except TypeError:
        return False
    return True


def positional_count(fn: RenderFunction, preferred: int) -> int:
    """``preferred`` (1 or 2) when ``fn`` accepts it, else the other shape."""
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        # No introspectable signature (some builtins); trust the convention.
        return preferred
    if _binds(signature, preferred):
        return preferred
    other = 1 if preferred == 2 else 2
    if _binds(signature, other):
        return other
    return preferred


def call_render_function(
    fn: RenderFunction,
    props: Mapping[str, Any],
    count: int,
    index: int,
    kind: str,
) -> Any:
    args = (props, {})[:count]
    try:
        return fn(*args)
    except Exception:
        logger.warning("%s function failed for item %d, skipped", kind, index, exc_info=True)
        return None
