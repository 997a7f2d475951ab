"""Keyboard events and a non-blocking terminal key reader."""

from __future__ import annotations

import codecs
import collections
import enum
import logging
import os
import select
import sys
import termios
import tty
from typing import Optional, TextIO, Union

from pydantic import BaseModel, ConfigDict

from pomato.models import KeyKind

log = logging.getLogger(__name__)


class TerminalError(Exception):
    """The terminal could not be set up or restored."""


class Key(str, enum.Enum):
    """Named (non-printable) keys."""

    ESC = "esc"
    ENTER = "enter"
    BACKSPACE = "backspace"
    DELETE = "delete"
    TAB = "tab"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    F1 = "f1"


class KeyEvent(BaseModel):
    """A single key press; ``code`` is a printable character or a ``Key``."""

    model_config = ConfigDict(frozen=True)

    code: Union[Key, str]
    kind: KeyKind = KeyKind.PRESS

    @property
    def char(self) -> Optional[str]:
        """The printable character, or None for named keys."""
        if isinstance(self.code, Key):
            return None
        return self.code


_ESCAPE_SEQUENCES: dict[str, Key] = {
    "[A": Key.UP,
    "[B": Key.DOWN,
    "[C": Key.RIGHT,
    "[D": Key.LEFT,
    "[H": Key.HOME,
    "[F": Key.END,
    "[1~": Key.HOME,
    "[3~": Key.DELETE,
    "[4~": Key.END,
    "[7~": Key.HOME,
    "[8~": Key.END,
    "OA": Key.UP,
    "OB": Key.DOWN,
    "OC": Key.RIGHT,
    "OD": Key.LEFT,
    "OH": Key.HOME,
    "OF": Key.END,
    "OP": Key.F1,
    "[11~": Key.F1,
}

# How long to wait for the rest of an escape sequence split across reads.
ESCAPE_TIMEOUT = 0.02

_CONTROL_KEYS: dict[str, Key] = {
    "\r": Key.ENTER,
    "\n": Key.ENTER,
    "\t": Key.TAB,
    "\x7f": Key.BACKSPACE,
    "\x08": Key.BACKSPACE,
}


def _sequence_end(text: str, start: int) -> int:
    """Index just past the escape sequence body beginning at ``start``."""
    if start >= len(text):
        return start
    if text[start] == "O":
        return min(start + 2, len(text))
    if text[start] != "[":
        return start
    i = start + 1
    # CSI parameters and intermediates, then a single final byte.
    while i < len(text) and not ("\x40" <= text[i] <= "\x7e"):
        i += 1
    return min(i + 1, len(text))


def _unfinished_escape(text: str) -> bool:
    """True if ``text`` ends partway through an escape sequence."""
    start = text.rfind("\x1b")
    if start < 0:
        return False
    tail = text[start + 1 :]
    if tail in ("", "O"):
        return True
    if tail[0] == "[":
        return not any("\x40" <= ch <= "\x7e" for ch in tail[1:])
    return False


def parse_keys(text: str) -> list[KeyEvent]:
    """Decode raw terminal input into key events."""
    events: list[KeyEvent] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "\x1b":
            end = _sequence_end(text, i + 1)
            body = text[i + 1 : end]
            if not body:
                events.append(KeyEvent(code=Key.ESC))
            elif body in _ESCAPE_SEQUENCES:
                events.append(KeyEvent(code=_ESCAPE_SEQUENCES[body]))
            else:
                log.debug("Ignoring unknown escape sequence %r", body)
            i = max(end, i + 1)
            continue
        if ch in _CONTROL_KEYS:
            events.append(KeyEvent(code=_CONTROL_KEYS[ch]))
        elif ch.isprintable():
            events.append(KeyEvent(code=ch))
        else:
            log.debug("Ignoring control character %r", ch)
        i += 1
    return events


class KeyReader:
    """Puts stdin in cbreak mode and reads key presses without blocking.

    Use as a context manager; the original terminal settings are restored on
    exit, including when the body raises.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream or sys.stdin
        self.fd: Optional[int] = None
        self.old_settings: Optional[list] = None
        self._pending: collections.deque[KeyEvent] = collections.deque()
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def __enter__(self) -> "KeyReader":
        try:
            self.fd = self.stream.fileno()
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except (OSError, termios.error, ValueError) as exc:
            log.error("Could not set up terminal: %s", exc)
            raise TerminalError(f"Could not set up terminal: {exc}") from exc
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Restore the terminal settings saved on entry."""
        if self.fd is None or self.old_settings is None:
            return
        try:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
        except termios.error as exc:
            log.error("Could not restore terminal: %s", exc)
            raise TerminalError(f"Could not restore terminal: {exc}") from exc
        finally:
            self.old_settings = None

    def poll(self, timeout: float) -> Optional[KeyEvent]:
        """Wait at most ``timeout`` seconds for a key press."""
        if self._pending:
            return self._pending.popleft()
        if self.fd is None:
            raise TerminalError("KeyReader used outside its context")
        ready, _, _ = select.select([self.fd], [], [], timeout)
        if not ready:
            return None
        text = self._read()
        while _unfinished_escape(text):
            ready, _, _ = select.select([self.fd], [], [], ESCAPE_TIMEOUT)
            if not ready:
                break
            more = self._read()
            if not more:
                break
            text += more
        self._pending.extend(parse_keys(text))
        if self._pending:
            return self._pending.popleft()
        return None

    def _read(self) -> str:
        return self._decoder.decode(os.read(self.fd, 64))
