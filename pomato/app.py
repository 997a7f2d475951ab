"""The render / poll / dispatch loop."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from rich.console import Console, RenderableType

from pomato import display
from pomato.dispatch import Action, dispatch
from pomato.keys import KeyEvent
from pomato.models import StateSnapshot
from pomato.state import State

log = logging.getLogger(__name__)


class KeySource(Protocol):
    def poll(self, timeout: float) -> Optional[KeyEvent]: ...


class Screen(Protocol):
    console: Console

    def update(self, renderable: RenderableType, *, refresh: bool = False) -> None: ...


def _newly_finished(previous: Optional[StateSnapshot], current: StateSnapshot) -> bool:
    if previous is None:
        return False
    return (current.work.finished and not previous.work.finished) or (
        current.break_timer.finished and not previous.break_timer.finished
    )


def run_app(state: State, keys: KeySource, screen: Screen, poll_interval: float = 0.1) -> None:
    """Render, wait up to ``poll_interval`` for a key, dispatch; until quit."""
    previous: Optional[StateSnapshot] = None
    blink = False
    while True:
        snapshot = state.snapshot()
        if _newly_finished(previous, snapshot):
            log.info("Timer finished (pomodoro #%d)", snapshot.pomodoro_count)
            screen.console.bell()
        previous = snapshot

        blink = not blink
        screen.update(display.render(snapshot, blink=blink, width=screen.console.width), refresh=True)

        event = keys.poll(poll_interval)
        if event is None:
            continue
        if dispatch(state, event) is Action.QUIT:
            log.info("Quit requested")
            return
