"""Single-line editable text field."""

from __future__ import annotations

from pomato.keys import Key, KeyEvent


def visual_scroll(cursor: int, width: int) -> int:
    """Horizontal offset that keeps ``cursor`` inside ``width`` columns."""
    if width <= 0:
        return cursor
    return max(0, cursor - width + 1)


class InputBuffer:
    """Text with a cursor, edited one key at a time."""

    def __init__(self, value: str = "") -> None:
        self.value = value
        self.cursor = len(value)

    def insert(self, char: str) -> None:
        self.value = self.value[: self.cursor] + char + self.value[self.cursor :]
        self.cursor += len(char)

    def backspace(self) -> bool:
        if self.cursor == 0:
            return False
        self.value = self.value[: self.cursor - 1] + self.value[self.cursor :]
        self.cursor -= 1
        return True

    def delete(self) -> bool:
        if self.cursor >= len(self.value):
            return False
        self.value = self.value[: self.cursor] + self.value[self.cursor + 1 :]
        return True

    def move_left(self) -> bool:
        if self.cursor == 0:
            return False
        self.cursor -= 1
        return True

    def move_right(self) -> bool:
        if self.cursor >= len(self.value):
            return False
        self.cursor += 1
        return True

    def home(self) -> bool:
        moved = self.cursor != 0
        self.cursor = 0
        return moved

    def end(self) -> bool:
        moved = self.cursor != len(self.value)
        self.cursor = len(self.value)
        return moved

    def reset(self) -> None:
        self.value = ""
        self.cursor = 0

    def handle_key(self, event: KeyEvent) -> bool:
        """Apply an editing key. Returns True if the buffer changed."""
        if event.char is not None:
            self.insert(event.char)
            return True
        handlers = {
            Key.BACKSPACE: self.backspace,
            Key.DELETE: self.delete,
            Key.LEFT: self.move_left,
            Key.RIGHT: self.move_right,
            Key.HOME: self.home,
            Key.END: self.end,
        }
        handler = handlers.get(event.code)
        if handler is None:
            return False
        return handler()

    def visual_scroll(self, width: int) -> int:
        return visual_scroll(self.cursor, width)
