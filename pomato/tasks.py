"""Ordered task list with an optional selected row."""

from __future__ import annotations

import enum
import logging
from typing import Iterator, Optional

from pomato.models import Task

log = logging.getLogger(__name__)


class Direction(int, enum.Enum):
    """Row navigation step."""

    NEXT = 1
    PREVIOUS = -1


class TaskList:
    """Tasks in insertion order, plus the row currently selected in Edit mode."""

    def __init__(self) -> None:
        self._tasks: list[Task] = []
        self.selected: Optional[int] = None

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __getitem__(self, index: int) -> Task:
        return self._tasks[index]

    def add(self, description: str) -> Task:
        """Append a new, uncompleted task."""
        task = Task(description=description)
        self._tasks.append(task)
        log.debug("Added task #%d: %s", len(self._tasks), description)
        return task

    def remove_at(self, index: Optional[int]) -> Optional[Task]:
        """Remove the task at ``index``. ``None`` means nothing is selected."""
        if index is None:
            return None
        if not 0 <= index < len(self._tasks):
            raise IndexError(f"No task at index {index} (list has {len(self._tasks)})")
        return self._tasks.pop(index)

    def mark_completed_at(self, index: Optional[int]) -> None:
        if index is None:
            return
        if not 0 <= index < len(self._tasks):
            raise IndexError(f"No task at index {index} (list has {len(self._tasks)})")
        self._tasks[index].completed = True

    def remove_selected(self) -> Optional[Task]:
        """Remove the selected task and keep the selection within bounds."""
        removed = self.remove_at(self.selected)
        if removed is None:
            return None
        if not self._tasks:
            self.selected = None
        elif self.selected is not None and self.selected >= len(self._tasks):
            self.selected = len(self._tasks) - 1
        log.debug("Removed task: %s", removed.description)
        return removed

    def mark_selected_completed(self) -> None:
        self.mark_completed_at(self.selected)

    def move_selection(self, direction: Direction) -> Optional[int]:
        """Select the next or previous row, wrapping at either end."""
        count = len(self._tasks)
        if count == 0:
            self.selected = None
        elif self.selected is None:
            self.selected = 0 if direction is Direction.NEXT else count - 1
        else:
            self.selected = (self.selected + direction.value) % count
        return self.selected

    def select(self, index: int) -> None:
        if not 0 <= index < len(self._tasks):
            raise IndexError(f"No task at index {index} (list has {len(self._tasks)})")
        self.selected = index

    def unselect(self) -> None:
        self.selected = None
