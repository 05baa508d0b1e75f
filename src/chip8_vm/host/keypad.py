"""Keypad input: the QWERTY key layout and non-blocking terminal key readers."""

from __future__ import annotations

import os
import select
import sys
from typing import Protocol, TextIO, runtime_checkable

NUM_KEYS = 16

# CHIP-8 hex keypad      QWERTY keys
#   1 2 3 C              1 2 3 4
#   4 5 6 D              q w e r
#   7 8 9 E              a s d f
#   A 0 B F              z x c v
KEYMAP: dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "q": 0x4, "w": 0x5, "e": 0x6, "r": 0xD,
    "a": 0x7, "s": 0x8, "d": 0x9, "f": 0xE,
    "z": 0xA, "x": 0x0, "c": 0xB, "v": 0xF,
}

QUIT_KEYS = frozenset({"\x1b", "\x03"})  # Esc, Ctrl-C


@runtime_checkable
class KeySource(Protocol):
    """Protocol for anything that can report the 16 keypad states once per frame."""

    def poll(self) -> list[bool]:
        """Return 16 booleans, index = hex key, True = held down."""
        ...


class NullKeys:
    """Key source with no keys ever pressed (headless runs)."""

    def poll(self) -> list[bool]:
        return [False] * NUM_KEYS


class HeldKeys:
    """Turns a stream of key characters into held-key states.

    Terminals report key presses (and auto-repeats) but never releases,
    so a key counts as held for ``hold_frames`` polls after its last
    character arrived.
    """

    def __init__(self, hold_frames: int = 6) -> None:
        self.hold_frames = hold_frames
        self._remaining: list[int] = [0] * NUM_KEYS
        self.quit_requested = False

    def feed(self, chars: str) -> None:
        """Register characters read from the input stream."""
        for ch in chars:
            if ch in QUIT_KEYS:
                self.quit_requested = True
                continue
            key = KEYMAP.get(ch.lower())
            if key is not None:
                self._remaining[key] = self.hold_frames

    def poll(self) -> list[bool]:
        states = [r > 0 for r in self._remaining]
        self._remaining = [max(r - 1, 0) for r in self._remaining]
        return states


class TerminalKeys(HeldKeys):
    """Reads keys from a POSIX terminal without blocking.

    Use as a context manager: the terminal is switched to cbreak mode on
    entry and restored on exit. Entering raises OSError if the stream is
    not a terminal.
    """

    def __init__(self, stream: TextIO | None = None, hold_frames: int = 6) -> None:
        super().__init__(hold_frames)
        self.stream = stream if stream is not None else sys.stdin
        self._saved_attrs: list | None = None

    def __enter__(self) -> TerminalKeys:
        import termios
        import tty

        fd = self.stream.fileno()
        try:
            self._saved_attrs = termios.tcgetattr(fd)
        except termios.error as e:
            raise OSError(*e.args) from e
        tty.setcbreak(fd)
        return self

    def __exit__(self, *exc: object) -> None:
        import termios

        if self._saved_attrs is not None:
            termios.tcsetattr(self.stream.fileno(), termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None

    def _read_available(self) -> str:
        fd = self.stream.fileno()
        chunks: list[str] = []
        while select.select([fd], [], [], 0)[0]:
            data = os.read(fd, 64)
            if not data:
                break
            chunks.append(data.decode("utf-8", errors="ignore"))
        return "".join(chunks)

    def poll(self) -> list[bool]:
        self.feed(self._read_available())
        return super().poll()
