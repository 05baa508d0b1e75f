"""Session: per-frame driver that feeds keys and clock counts to a Machine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..cpu.machine import Machine
from ..errors import MachineFault
from .clock import FrameClock
from .keypad import KeySource, NullKeys

logger = logging.getLogger(__name__)


@dataclass
class FrameResult:
    """What happened during one frame."""

    steps: int = 0
    ticks: int = 0
    fault: MachineFault | None = None
    sound_started: bool = False


@dataclass
class Session:
    """Drives one Machine frame by frame on behalf of a host.

    A fault stops the frame immediately, is kept on ``fault`` and halts the
    session: later frames execute nothing until ``restart`` is called.
    """

    machine: Machine
    clock: FrameClock = field(default_factory=FrameClock)
    program: bytes = b""
    fault: MachineFault | None = None
    frames: int = 0

    @property
    def halted(self) -> bool:
        return self.fault is not None

    def load(self, program: bytes) -> None:
        """Load a program into the machine and clear any previous fault."""
        self.machine.load_program(program)
        self.program = program
        self.fault = None
        self.frames = 0

    def restart(self) -> None:
        """Reload the current program from scratch."""
        self.load(self.program)

    def run_frame(self, keys: list[bool], elapsed: float | None = None) -> FrameResult:
        """Run one host frame.

        Writes `keys`, applies the timer ticks and then the instruction steps
        the clock grants for `elapsed` seconds (one timer period if None).

        Args:
            keys: 16 key states for this frame.
            elapsed: Wall time since the previous frame, in seconds.

        Returns:
            A FrameResult; ``fault`` is set if execution stopped on a fault.
        """
        result = FrameResult()
        if self.halted:
            return result

        machine = self.machine
        steps, ticks = self.clock.frame() if elapsed is None else self.clock.advance(elapsed)
        was_sounding = machine.sound_active
        machine.set_keys(keys)

        for _ in range(ticks):
            machine.advance_timers()
        result.ticks = ticks

        try:
            for _ in range(steps):
                machine.step()
                result.steps += 1
        except MachineFault as e:
            logger.debug("fault at pc=0x%03X: %s", machine.pc, e)
            self.fault = e
            result.fault = e

        result.sound_started = machine.sound_active and not was_sounding
        self.frames += 1
        return result

    def run_frames(self, count: int, keys: KeySource | None = None) -> int:
        """Run up to `count` frames, polling `keys` once per frame.

        Args:
            count: Maximum number of frames.
            keys: Key source to poll; defaults to NullKeys (nothing pressed).

        Returns:
            Number of frames actually run (fewer if a fault halted the session).
        """
        source = keys if keys is not None else NullKeys()
        ran = 0
        for _ in range(count):
            if self.halted:
                break
            self.run_frame(source.poll())
            ran += 1
        return ran
