"""TUI application: interactive front end using a Rich Live display."""

from __future__ import annotations

import time

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel

from ..host.keypad import TerminalKeys
from ..host.session import Session
from .registers import format_registers
from .screen import render_screen
from .stats import format_instruction_stats

FRAME_SECONDS = 1.0 / 60


def render_app(
    session: Session,
    prev_regs: tuple[int, ...] | None = None,
    message: str = "",
) -> Layout:
    """Build the Rich Layout with all front-end panels.

    Layout structure:
        +---------------------------------+--------------+
        |                                 |  Registers   |
        |         Screen (64x16)          +--------------+
        |                                 |  Stats       |
        +---------------------------------+--------------+
        |   Status bar (full width)                      |
        +------------------------------------------------+

    Args:
        session: The running session.
        prev_regs: Register values from the previous frame for highlighting.
        message: Extra text for the status bar.

    Returns:
        A Rich Layout object ready for display.
    """
    machine = session.machine
    state = machine.snapshot()
    layout = Layout()

    layout.split_column(
        Layout(name="main", size=18),
        Layout(name="status", size=4),
    )
    layout["main"].split_row(
        Layout(name="screen", size=68),
        Layout(name="side"),
    )
    layout["side"].split_column(
        Layout(name="registers", ratio=1),
        Layout(name="stats", ratio=1),
    )

    layout["screen"].update(Panel(render_screen(state.display), title="CHIP-8"))
    layout["registers"].update(
        Panel(format_registers(state, prev_regs), title="Registers")
    )
    layout["stats"].update(
        Panel(format_instruction_stats(machine.instruction_stats, top_n=5),
              title="Instruction Statistics")
    )

    if session.fault is not None:
        run_state = f"[bold red]FAULT: {session.fault}[/bold red]"
    elif state.waiting_for_key is not None:
        run_state = "WAITING FOR KEY"
    else:
        run_state = "RUNNING"
    sound = "♪" if machine.sound_active else " "
    status_text = (
        f"Cycles: {state.cycle_count}  |  Frames: {session.frames}  |  "
        f"State: {run_state}  {sound}\n"
        f"{message or 'Keys: 1234/QWER/ASDF/ZXCV  |  Esc: quit'}"
    )
    layout["status"].update(Panel(status_text, title="Status"))

    return layout


def run_app(session: Session, console: Console | None = None) -> None:
    """Run the interactive frame loop until the user quits.

    Each frame polls the terminal keypad, runs the session for the real
    elapsed time, rings the terminal bell when the sound timer starts and
    redraws. A fault freezes the machine and leaves the last frame on
    screen until the user quits.

    Args:
        session: A session with a program already loaded.
        console: Console to draw on (defaults to a new one).
    """
    console = console if console is not None else Console()
    prev_regs = session.machine.registers.snapshot()

    with TerminalKeys() as keys, Live(
        render_app(session), console=console, auto_refresh=False, screen=True,
    ) as live:
        last = time.perf_counter()
        while not keys.quit_requested:
            now = time.perf_counter()
            result = session.run_frame(keys.poll(), now - last)
            last = now

            if result.sound_started:
                console.bell()

            live.update(render_app(session, prev_regs), refresh=True)
            prev_regs = session.machine.registers.snapshot()

            spare = FRAME_SECONDS - (time.perf_counter() - now)
            if spare > 0:
                time.sleep(spare)
