from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from barseries.types import AnimationState

logger = logging.getLogger(__name__)

_TRANSITIONS: dict[str, frozenset[str]] = {
    "idle": frozenset({"animating", "settled"}),
    "animating": frozenset({"settled", "animating"}),
    "settled": frozenset({"animating"}),
}


def _noop() -> None:
    return None


@dataclass
class AnimationGate:
    """Enter/transition lifecycle of one series: idle -> animating -> settled.

    Labels are only drawn once the final geometry is stable, so a series with
    animation enabled shows no labels until ``settle`` is called.
    """

    is_active: bool = True
    state: AnimationState = "idle"
    on_start: Callable[[], None] = field(default=_noop, repr=False)
    on_end: Callable[[], None] = field(default=_noop, repr=False)

    def _move(self, target: AnimationState) -> None:
        if target not in _TRANSITIONS[self.state]:
            raise ValueError(f"cannot move animation from {self.state} to {target}")
        logger.debug("animation %s -> %s", self.state, target)
        self.state = target

    def begin(self) -> None:
        """Start a render pass; without animation the pass settles at once."""
        if not self.is_active:
            self.state = "settled"
            return
        self._move("animating")
        self.on_start()

    def settle(self) -> None:
        if self.state == "settled":
            return
        was_animating = self.state == "animating"
        self._move("settled")
        if was_animating:
            self.on_end()

    @property
    def labels_visible(self) -> bool:
        if not self.is_active:
            return True
        return self.state == "settled"
