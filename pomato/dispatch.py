"""Mode-dependent key handling.

Each mode has one handler taking the state and a key event. ``dispatch``
looks the handler up by the current mode, so the transition table is a plain
dict that tests can enumerate.
"""

from __future__ import annotations

import enum
import logging
from typing import Callable

from pomato.keys import Key, KeyEvent
from pomato.models import KeyKind, Mode
from pomato.state import State

log = logging.getLogger(__name__)


class Action(str, enum.Enum):
    """What the run loop should do after a key has been handled."""

    CONTINUE = "continue"
    QUIT = "quit"


Handler = Callable[[State, KeyEvent], Action]


def handle_normal_mode(state: State, event: KeyEvent) -> Action:
    code = event.code
    if code == "q":
        return Action.QUIT
    if code == "p":
        state.pause_timer()
    elif code == "s":
        state.start_timer()
    elif code == "r":
        state.reset_timer()
    elif code == "i":
        state.enter_insert_mode()
    elif code == "e":
        state.enter_edit_mode()
    elif code == "?":
        state.toggle_help_popup()
    elif code == Key.ESC:
        state.hide_help_popup()
    elif code == "b":
        state.start_break_timer()
    return Action.CONTINUE


def handle_insert_mode(state: State, event: KeyEvent) -> Action:
    if event.code == Key.ENTER:
        state.submit_input()
    elif event.code == Key.ESC:
        state.return_to_normal_mode()
    else:
        state.input.handle_key(event)
    return Action.CONTINUE


def handle_edit_mode(state: State, event: KeyEvent) -> Action:
    code = event.code
    if code == Key.ESC:
        state.return_to_normal_mode()
    elif code in (Key.DOWN, "j"):
        state.next_table_row()
    elif code in (Key.UP, "k"):
        state.previous_table_row()
    elif code == "m":
        state.mark_current_task_as_completed()
    elif code == "d":
        state.delete_current_task()
    elif code == "?":
        state.toggle_help_popup()
    return Action.CONTINUE


def handle_break_mode(state: State, event: KeyEvent) -> Action:
    if event.code in (Key.ESC, "b"):
        state.reset_break_timer()
    elif event.code == "?":
        state.toggle_help_popup()
    return Action.CONTINUE


HANDLERS: dict[Mode, Handler] = {
    Mode.NORMAL: handle_normal_mode,
    Mode.INSERT: handle_insert_mode,
    Mode.EDIT: handle_edit_mode,
    Mode.BREAK: handle_break_mode,
}


def dispatch(state: State, event: KeyEvent) -> Action:
    """Route a key event to the handler for the current mode."""
    if event.kind is not KeyKind.PRESS:
        return Action.CONTINUE
    if event.code == Key.F1:
        state.toggle_help_popup()
        return Action.CONTINUE
    return HANDLERS[state.mode](state, event)
