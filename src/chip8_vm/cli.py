"""Command-line interface for the CHIP-8 virtual machine."""

import argparse
import logging
import random
import sys

from rich.console import Console
from rich.logging import RichHandler

from .cpu.machine import Machine
from .cpu.quirks import QUIRK_NAMES, Quirks, quirks_from_names
from .errors import MachineFault
from .host.clock import DEFAULT_CPU_HZ, FrameClock
from .host.keypad import NullKeys
from .host.session import Session
from .loader import read_rom
from .tui.registers import format_registers
from .tui.screen import render_screen

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """Parse a strictly positive integer argument.

    Raises:
        argparse.ArgumentTypeError: If the value is not a positive integer.
    """
    try:
        number = int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer '{value}'") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {number}")
    return number


def _add_machine_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("rom", help="Path to a CHIP-8 ROM image")
    parser.add_argument(
        "--hz", type=_positive_int, default=DEFAULT_CPU_HZ,
        help=f"Instructions per second (default {DEFAULT_CPU_HZ})",
    )
    parser.add_argument(
        "--quirk", action="append", default=[], choices=sorted(QUIRK_NAMES),
        help="Enable an interpreter quirk (repeatable)",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Seed for the RND instruction",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )


def main(argv: list[str] | None = None) -> None:
    """Entry point for the CHIP-8 CLI."""
    parser = argparse.ArgumentParser(description="CHIP-8 virtual machine")
    sub = parser.add_subparsers(dest="command")

    run_parser = sub.add_parser("run", help="Play a ROM in the terminal")
    _add_machine_args(run_parser)

    headless_parser = sub.add_parser(
        "headless", help="Run a ROM without input and print the final screen",
    )
    _add_machine_args(headless_parser)
    headless_parser.add_argument(
        "--frames", type=_positive_int, default=60,
        help="Number of 60 Hz frames to run (default 60)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )

    session = _build_session(args.rom, quirks_from_names(args.quirk), args.hz, args.seed)

    if args.command == "run":
        from .tui.app import run_app
        try:
            run_app(session)
        except OSError as e:
            print(f"Error: cannot use terminal: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        run_headless(session, args.frames)

    if session.fault is not None:
        print(f"Error: {session.fault}", file=sys.stderr)
        sys.exit(1)
    sys.exit(0)


def _build_session(path: str, quirks: Quirks, cpu_hz: int, seed: int | None) -> Session:
    """Read the ROM and create a loaded Session.

    Raises:
        SystemExit: If the ROM cannot be read or does not fit in memory.
    """
    try:
        program = read_rom(path)
    except OSError as e:
        print(f"Error: cannot read '{path}': {e}", file=sys.stderr)
        sys.exit(1)
    except MachineFault as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    machine = Machine(quirks=quirks, rng=random.Random(seed))
    session = Session(machine=machine, clock=FrameClock(cpu_hz=cpu_hz))
    session.load(program)
    logger.debug("loaded %s (%d bytes), %d Hz, %s", path, len(program), cpu_hz, quirks)
    return session


def run_headless(session: Session, frames: int, console: Console | None = None) -> int:
    """Run `frames` frames with no keys pressed and print the final state.

    Args:
        session: A session with a program already loaded.
        frames: Number of 60 Hz frames to run.
        console: Console to print on (defaults to stdout).

    Returns:
        Number of frames actually run.
    """
    console = console if console is not None else Console()
    ran = session.run_frames(frames, NullKeys())
    state = session.machine.snapshot()
    console.print(render_screen(state.display))
    console.print(format_registers(state))
    console.print(f"Ran {ran} frames, {state.cycle_count} cycles.")
    return ran
