"""Rich terminal rendering of a state snapshot."""

from __future__ import annotations

from typing import Optional

from rich.align import Align
from rich.console import Console, Group, RenderableType
from rich.layout import Layout
from rich.markup import escape
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from pomato.input_buffer import visual_scroll
from pomato.models import Mode, StateSnapshot, TimerReading

console = Console()

CHECK_MARK = "✅"
ACCENT = "bright_magenta"
HEADER_STYLE = "bold bright_green"

POMODORO_LOGO = r"""
 ____   ___  __  __  ___  ____   ___  ____   ___
|  _ \ / _ \|  \/  |/ _ \|  _ \ / _ \|  _ \ / _ \
| |_) | | | | |\/| | | | | | | | | | | |_) | | | |
|  __/| |_| | |  | | |_| | |_| | |_| |  _ <| |_| |
|_|    \___/|_|  |_|\___/|____/ \___/|_| \_\\___/
"""

HELP_ROWS: list[tuple[str, str]] = [
    ("i", "enter 'insert' mode to create a new task"),
    ("e", "enter 'edit' mode to edit a task"),
    ("j/↓", "move down a row"),
    ("k/↑", "move up a row"),
    ("m", "mark a task as done"),
    ("d", "delete a task"),
    ("?", "toggle help popup"),
    ("F1", "toggle help popup (any mode)"),
    ("q", "quit"),
    ("r", "reset and advance to next pomodoro"),
    ("s", "start/resume timer"),
    ("p", "pause timer"),
    ("b", "take a break"),
    ("Esc", "return to 'normal' mode"),
]


def format_seconds(seconds: int) -> str:
    """Format whole seconds as MM:SS."""
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def build_timer_label(reading: TimerReading) -> str:
    """``elapsed/length (remaining)``, all as MM:SS."""
    return (
        f"{format_seconds(reading.elapsed)}/{format_seconds(reading.length)} "
        f"({format_seconds(reading.remaining)})"
    )


def _timer_gauge(reading: TimerReading, title: str, bar_style: str) -> Panel:
    bar = ProgressBar(
        total=reading.length,
        completed=reading.elapsed,
        complete_style=bar_style,
        finished_style=bar_style,
    )
    label = Text(
        f"{build_timer_label(reading)}  {reading.percent}%",
        style="bold white",
        justify="center",
    )
    # ProgressBar does not end its line, so bar and label get separate rows.
    grid = Table.grid(expand=True)
    grid.add_row(bar)
    grid.add_row(label)
    return Panel(grid, title=title, title_align="left")


def _input_panel(snapshot: StateSnapshot, width: int) -> Panel:
    field_width = max(width - 3, 1)  # borders and cursor
    scroll = visual_scroll(snapshot.input_cursor, field_width)
    visible = snapshot.input_value[scroll:]
    insert_mode = snapshot.mode is Mode.INSERT

    text = Text(visible, style=ACCENT if insert_mode else "")
    if insert_mode:
        cursor = snapshot.input_cursor - scroll
        if cursor >= len(visible):
            text.append(" ")
        text.stylize("reverse", cursor, cursor + 1)
    return Panel(text, title="Task Input", title_align="left")


def _task_table(snapshot: StateSnapshot) -> Panel:
    table = Table(expand=True, box=None, header_style=HEADER_STYLE)
    table.add_column("Completed", justify="center", ratio=2)
    table.add_column("Task", ratio=7)
    table.add_column("Est.", ratio=1)

    for index, task in enumerate(snapshot.tasks):
        table.add_row(
            CHECK_MARK if task.completed else "",
            task.description,
            str(task.estimation),
            style="reverse" if index == snapshot.selected else None,
        )

    border = ACCENT if snapshot.mode is Mode.EDIT else "white"
    return Panel(table, title="Tasks", title_align="left", border_style=border)


def help_panel() -> Panel:
    """Modal table of key bindings."""
    table = Table(expand=True, box=None, header_style=HEADER_STYLE)
    table.add_column("Key", ratio=3)
    table.add_column("Action", ratio=7)
    for key, action in HELP_ROWS:
        table.add_row(key, action)
    return Panel(table, title="Help", title_align="left")


def break_view(snapshot: StateSnapshot) -> RenderableType:
    """Full-screen modal break gauge."""
    gauge = _timer_gauge(snapshot.break_timer, "Break", ACCENT)
    body: RenderableType = gauge
    if snapshot.show_help:
        body = Group(gauge, help_panel())
    return Align.center(body, vertical="middle", width=60)


def render(
    snapshot: StateSnapshot,
    blink: bool = False,
    width: Optional[int] = None,
) -> RenderableType:
    """Build the full-screen frame for one loop iteration."""
    if snapshot.mode is Mode.BREAK:
        return break_view(snapshot)

    width = width or console.width
    layout = Layout(name="root")
    layout.split_column(
        Layout(name="header", ratio=1),
        Layout(name="timer", size=4),
        Layout(name="entry", size=3),
        Layout(name="tasks", ratio=3),
    )
    layout["entry"].split_row(
        Layout(name="input", ratio=4),
        Layout(name="pomodoro", ratio=1),
    )

    layout["header"].update(Align.center(Text(POMODORO_LOGO, style="white"), vertical="middle"))

    work = snapshot.work
    bar_style = ACCENT
    if work.finished:
        bar_style = "red" if blink else "white"
    layout["timer"].update(_timer_gauge(work, "Timer", bar_style))

    layout["input"].update(_input_panel(snapshot, width * 4 // 5))
    layout["pomodoro"].update(
        Panel(
            Text(str(snapshot.pomodoro_count), justify="center"),
            title="Pomodoro No",
            title_align="left",
        )
    )

    if snapshot.show_help:
        layout["tasks"].update(help_panel())
    else:
        layout["tasks"].update(_task_table(snapshot))
    return layout


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]{escape(message)}[/red]")


def print_info(message: str) -> None:
    """Print an informational message."""
    console.print(f"[blue]{message}[/blue]")
