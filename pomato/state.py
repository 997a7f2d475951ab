"""Application state: timers, task list, input mode and text entry."""

from __future__ import annotations

import logging
from typing import Optional

from pomato.input_buffer import InputBuffer
from pomato.models import Mode, StateSnapshot, Task, TimerReading
from pomato.tasks import Direction, TaskList
from pomato.timer import Clock, Timer, monotonic_us

log = logging.getLogger(__name__)

DEFAULT_WORK_MINUTES = 25
DEFAULT_BREAK_MINUTES = 5


class State:
    """Everything the run loop owns. All mutations go through these methods."""

    def __init__(
        self,
        work_minutes: int = DEFAULT_WORK_MINUTES,
        break_minutes: int = DEFAULT_BREAK_MINUTES,
        clock: Clock = monotonic_us,
    ) -> None:
        self.timer = Timer(work_minutes * 60, clock=clock)
        self.break_timer = Timer(break_minutes * 60, clock=clock)
        self.pomodoro_no = 1
        self.input = InputBuffer()
        self.tasks = TaskList()
        self.show_help_popup = False
        self._mode = Mode.NORMAL

    @property
    def mode(self) -> Mode:
        return self._mode

    def _set_mode(self, mode: Mode) -> None:
        log.debug("Mode %s -> %s", self._mode.value, mode.value)
        self._mode = mode

    # -- work timer -----------------------------------------------------

    def start_timer(self) -> None:
        self.timer.start()

    def pause_timer(self) -> None:
        self.timer.pause()

    def reset_timer(self) -> None:
        """Reset the work timer and advance to the next pomodoro."""
        self.timer.reset()
        self.pomodoro_no += 1
        log.debug("Advanced to pomodoro #%d", self.pomodoro_no)

    def timer_state(self) -> TimerReading:
        return self.timer.read()

    def timer_is_finished(self) -> bool:
        return self.timer.finished

    # -- break timer ----------------------------------------------------

    def start_break_timer(self) -> None:
        """Pause work and start the break. Only valid from Normal mode."""
        if self._mode is not Mode.NORMAL:
            log.debug("Ignoring break request in %s mode", self._mode.value)
            return
        self.timer.pause()
        self.break_timer.start()
        self._set_mode(Mode.BREAK)

    def reset_break_timer(self) -> None:
        """Dismiss the break: reset its timer and return to Normal mode."""
        if self._mode is not Mode.BREAK:
            return
        self.break_timer.reset()
        self._set_mode(Mode.NORMAL)

    def break_timer_state(self) -> TimerReading:
        return self.break_timer.read()

    # -- modes ----------------------------------------------------------

    def enter_insert_mode(self) -> None:
        if self._mode is Mode.NORMAL:
            self._set_mode(Mode.INSERT)

    def enter_edit_mode(self) -> None:
        if self._mode is Mode.NORMAL:
            self._set_mode(Mode.EDIT)

    def return_to_normal_mode(self) -> None:
        """Leave Insert or Edit mode. Leaving Edit clears the row selection."""
        if self._mode is Mode.EDIT:
            self.unselect_table_item()
        elif self._mode is not Mode.INSERT:
            return
        self._set_mode(Mode.NORMAL)

    def toggle_help_popup(self) -> None:
        self.show_help_popup = not self.show_help_popup

    def hide_help_popup(self) -> None:
        self.show_help_popup = False

    # -- tasks ----------------------------------------------------------

    def add_new_task(self, description: str) -> Optional[Task]:
        description = description.strip()
        if not description:
            log.debug("Ignoring blank task description")
            return None
        return self.tasks.add(description)

    def submit_input(self) -> Optional[Task]:
        """Turn the text buffer into a task and clear the buffer."""
        task = self.add_new_task(self.input.value)
        self.input.reset()
        return task

    def next_table_row(self) -> None:
        self.tasks.move_selection(Direction.NEXT)

    def previous_table_row(self) -> None:
        self.tasks.move_selection(Direction.PREVIOUS)

    def mark_current_task_as_completed(self) -> None:
        self.tasks.mark_selected_completed()

    def delete_current_task(self) -> None:
        self.tasks.remove_selected()

    def unselect_table_item(self) -> None:
        self.tasks.unselect()

    def get_tasks(self) -> list[Task]:
        return list(self.tasks)

    # -- rendering ------------------------------------------------------

    def snapshot(self) -> StateSnapshot:
        """Read both timers and freeze the current state for rendering."""
        return StateSnapshot(
            mode=self._mode,
            pomodoro_count=self.pomodoro_no,
            input_value=self.input.value,
            input_cursor=self.input.cursor,
            tasks=tuple(task.model_copy() for task in self.tasks),
            selected=self.tasks.selected,
            show_help=self.show_help_popup,
            work=self.timer.read(),
            break_timer=self.break_timer.read(),
        )
