"""Tests for mode-dependent key dispatch."""

from __future__ import annotations

import itertools

import pytest

from pomato.dispatch import HANDLERS, Action, dispatch
from pomato.keys import Key, KeyEvent
from pomato.models import KeyKind, Mode
from pomato.state import State

ALL_KEYS: list = list(Key) + list("qpsrieb?jkmdx ")


def _press(state: State, *codes) -> list[Action]:
    return [dispatch(state, KeyEvent(code=code)) for code in codes]


def _state_in(mode: Mode, clock) -> State:
    state = State(clock=clock)
    if mode is Mode.INSERT:
        state.enter_insert_mode()
    elif mode is Mode.EDIT:
        state.enter_edit_mode()
    elif mode is Mode.BREAK:
        state.start_break_timer()
    assert state.mode is mode
    return state


class TestTotality:
    def test_every_mode_has_a_handler(self) -> None:
        assert set(HANDLERS) == set(Mode)

    @pytest.mark.parametrize("mode,code", list(itertools.product(Mode, ALL_KEYS)))
    def test_every_key_in_every_mode(self, mode: Mode, code, clock) -> None:
        state = _state_in(mode, clock)
        action = dispatch(state, KeyEvent(code=code))
        assert action in (Action.CONTINUE, Action.QUIT)
        assert state.mode in Mode

    @pytest.mark.parametrize("mode,code", list(itertools.product(Mode, ALL_KEYS)))
    def test_every_key_with_tasks(self, mode: Mode, code, clock) -> None:
        state = _state_in(mode, clock)
        for name in ("a", "b"):
            state.add_new_task(name)
        state.tasks.select(1)
        dispatch(state, KeyEvent(code=code))
        assert state.tasks.selected is None or state.tasks.selected < len(state.tasks)

    def test_non_press_events_ignored(self, state: State) -> None:
        for kind in (KeyKind.RELEASE, KeyKind.REPEAT):
            assert dispatch(state, KeyEvent(code="i", kind=kind)) is Action.CONTINUE
        assert state.mode is Mode.NORMAL


class TestNormalMode:
    def test_quit(self, state: State) -> None:
        assert _press(state, "q") == [Action.QUIT]

    def test_start_pause(self, state: State, clock) -> None:
        _press(state, "s")
        clock.advance(1)
        reading = state.timer_state()
        assert reading.elapsed == 1
        assert reading.remaining == 1499
        _press(state, "p")
        clock.advance(10)
        assert state.timer_state().remaining == 1499

    def test_reset(self, state: State) -> None:
        _press(state, "r", "r")
        assert state.pomodoro_no == 3

    def test_help(self, state: State) -> None:
        _press(state, "?")
        assert state.show_help_popup
        _press(state, Key.ESC)
        assert not state.show_help_popup

    def test_break(self, state: State, clock) -> None:
        _press(state, "s", "b")
        assert state.mode is Mode.BREAK
        assert not state.timer.running
        assert state.break_timer.running
        clock.advance(30)
        _press(state, Key.ESC)
        assert state.mode is Mode.NORMAL
        assert state.break_timer_state().remaining == 300


class TestInsertMode:
    def test_enter_task(self, state: State) -> None:
        _press(state, "i", *"write report", Key.ENTER)
        assert state.mode is Mode.INSERT
        assert [t.model_dump() for t in state.get_tasks()] == [
            {"completed": False, "description": "write report", "estimation": 0}
        ]
        assert state.input.value == ""

    def test_continuous_entry(self, state: State) -> None:
        _press(state, "i", "a", Key.ENTER, "b", Key.ENTER, Key.ESC)
        assert [t.description for t in state.get_tasks()] == ["a", "b"]
        assert state.mode is Mode.NORMAL

    def test_command_letters_are_text(self, state: State) -> None:
        actions = _press(state, "i", "q", "?", "b")
        assert Action.QUIT not in actions
        assert state.input.value == "q?b"
        assert not state.show_help_popup
        assert state.mode is Mode.INSERT

    def test_empty_enter(self, state: State) -> None:
        _press(state, "i", Key.ENTER)
        assert state.get_tasks() == []

    def test_editing_keys(self, state: State) -> None:
        _press(state, "i", "a", "c", Key.LEFT, "b", Key.END, Key.BACKSPACE)
        assert state.input.value == "ab"

    def test_f1_toggles_help(self, state: State) -> None:
        _press(state, "i", Key.F1)
        assert state.show_help_popup
        assert state.mode is Mode.INSERT


class TestEditMode:
    def _with_tasks(self, state: State) -> State:
        for name in ("one", "two", "three"):
            state.add_new_task(name)
        _press(state, "e")
        return state

    def test_delete_first(self, state: State) -> None:
        self._with_tasks(state)
        _press(state, "j", "d")
        tasks = state.get_tasks()
        assert len(tasks) == 2
        assert tasks[0].description == "two"

    def test_navigation_wraps(self, state: State) -> None:
        self._with_tasks(state)
        _press(state, Key.UP)
        assert state.tasks.selected == 2
        _press(state, "j")
        assert state.tasks.selected == 0
        _press(state, Key.DOWN, "k")
        assert state.tasks.selected == 0

    def test_mark(self, state: State) -> None:
        self._with_tasks(state)
        _press(state, "j", "j", "m")
        assert [t.completed for t in state.get_tasks()] == [False, True, False]

    def test_escape_clears_selection(self, state: State) -> None:
        self._with_tasks(state)
        _press(state, "j", Key.ESC)
        assert state.mode is Mode.NORMAL
        assert state.tasks.selected is None

    def test_delete_everything(self, state: State) -> None:
        self._with_tasks(state)
        _press(state, "j", "d", "d", "d", "d")
        assert state.get_tasks() == []
        assert state.tasks.selected is None

    def test_quit_key_does_not_quit(self, state: State) -> None:
        self._with_tasks(state)
        assert _press(state, "q") == [Action.CONTINUE]


class TestBreakMode:
    def test_b_dismisses(self, state: State) -> None:
        _press(state, "b", "b")
        assert state.mode is Mode.NORMAL

    def test_other_keys_ignored(self, state: State) -> None:
        _press(state, "b", "s", "i", "q")
        assert state.mode is Mode.BREAK
        assert not state.timer.running
