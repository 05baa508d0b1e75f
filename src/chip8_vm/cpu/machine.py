"""Machine: CHIP-8 state aggregate and the fetch-decode-execute cycle."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from ..display.framebuffer import Framebuffer
from ..errors import OutOfBounds, ProgramTooLarge
from ..memory.font import FONT_ADDR, FONTSET
from ..memory.ram import MEMORY_SIZE, RAM
from .decode import decode
from .execute import execute
from .quirks import Quirks
from .registers import RegisterFile
from .stack import CallStack

logger = logging.getLogger(__name__)

PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START
NUM_KEYS = 16


@dataclass(frozen=True)
class MachineSnapshot:
    """Immutable copy of all architectural state."""

    pc: int
    index: int
    registers: tuple[int, ...]
    stack: tuple[int, ...]
    stack_pointer: int
    memory: bytes
    display: tuple[tuple[bool, ...], ...]
    keys: tuple[bool, ...]
    delay_timer: int
    sound_timer: int
    waiting_for_key: int | None
    cycle_count: int


class Machine:
    """CHIP-8 machine: memory, registers, stack, timers, keypad and display.

    The host writes ``keys``, calls ``advance_timers`` at 60 Hz and ``step``
    at the instruction rate, and reads ``display`` and ``sound_timer``.
    Faults raised by ``step`` propagate to the host unchanged.
    """

    def __init__(self, quirks: Quirks | None = None,
                 rng: random.Random | None = None) -> None:
        self.quirks = quirks if quirks is not None else Quirks()
        self.rng = rng if rng is not None else random.Random()
        self.memory = RAM(MEMORY_SIZE)
        self.registers = RegisterFile()
        self.stack = CallStack()
        self.display = Framebuffer()
        self.keys: list[bool] = [False] * NUM_KEYS
        self.pc: int = PROGRAM_START
        self.index: int = 0
        self.delay_timer: int = 0
        self.sound_timer: int = 0
        self.waiting_for_key: int | None = None
        self._keys_seen: list[bool] = [False] * NUM_KEYS
        self.cycle_count: int = 0
        self.instruction_stats: dict[str, int] = {}
        self._load_font()

    def _load_font(self) -> None:
        self.memory.load_segment(FONT_ADDR, FONTSET)

    def reset(self) -> None:
        """Return to the power-on state: everything zeroed, font loaded, PC at 0x200."""
        self.memory.clear()
        self.registers.clear()
        self.stack.clear()
        self.display.clear()
        for k in range(NUM_KEYS):
            self.keys[k] = False
            self._keys_seen[k] = False
        self.pc = PROGRAM_START
        self.index = 0
        self.delay_timer = 0
        self.sound_timer = 0
        self.waiting_for_key = None
        self.cycle_count = 0
        self.instruction_stats.clear()
        self._load_font()
        logger.debug("machine reset")

    def load_program(self, data: bytes) -> None:
        """Reset the machine and copy a program to 0x200.

        Raises:
            ProgramTooLarge: If the program does not fit. The machine is
                left reset.
        """
        self.reset()
        if len(data) > MAX_PROGRAM_SIZE:
            raise ProgramTooLarge(len(data), MAX_PROGRAM_SIZE)
        self.memory.load_segment(PROGRAM_START, data)
        logger.debug("loaded %d-byte program at 0x%03X", len(data), PROGRAM_START)

    def fetch(self) -> int:
        """Read the big-endian instruction word at PC and advance PC by 2."""
        if self.pc < 0 or self.pc + 1 >= self.memory.size:
            raise OutOfBounds(self.pc, 2)
        word = self.memory.read16(self.pc)
        self.pc += 2
        return word

    def execute(self, word: int) -> None:
        """Decode and execute one instruction word against the current state.

        PC is expected to already point past the instruction.
        """
        inst = decode(word)
        self.pc = execute(inst, self)
        self.instruction_stats[inst.mnemonic] = (
            self.instruction_stats.get(inst.mnemonic, 0) + 1
        )
        self.cycle_count += 1

    def step(self) -> None:
        """Execute one instruction cycle: fetch, decode, execute.

        While suspended on Fx0A this fetches nothing; it only checks the
        keypad for a newly pressed key.
        """
        if self.waiting_for_key is not None:
            self._poll_key_wait()
            return
        self.execute(self.fetch())

    def advance_timers(self) -> None:
        """Decrement the delay and sound timers, each floored at 0."""
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1

    @property
    def sound_active(self) -> bool:
        """True while the host should be playing a tone."""
        return self.sound_timer > 0

    def begin_key_wait(self, register: int) -> None:
        """Suspend execution until a key goes down, then store it in `register`."""
        self.waiting_for_key = register & 0xF
        self._keys_seen = list(self.keys)
        logger.debug("waiting for key into V%X", self.waiting_for_key)

    def _poll_key_wait(self) -> None:
        """Resume from Fx0A on the first key that went from up to down."""
        for key, down in enumerate(self.keys):
            if down and not self._keys_seen[key]:
                self.registers.write(self.waiting_for_key, key)
                logger.debug("key %X pressed, resuming", key)
                self.waiting_for_key = None
                self._keys_seen = [False] * NUM_KEYS
                return
        self._keys_seen = list(self.keys)

    def press(self, key: int) -> None:
        self.keys[key & 0xF] = True

    def release(self, key: int) -> None:
        self.keys[key & 0xF] = False

    def set_keys(self, keys: list[bool]) -> None:
        """Replace the whole keypad state (16 booleans, index = hex key)."""
        if len(keys) != NUM_KEYS:
            raise ValueError(f"Expected {NUM_KEYS} key states, got {len(keys)}")
        self.keys[:] = [bool(k) for k in keys]

    def snapshot(self) -> MachineSnapshot:
        """Capture the full architectural state."""
        return MachineSnapshot(
            pc=self.pc,
            index=self.index,
            registers=self.registers.snapshot(),
            stack=tuple(self.stack.slots),
            stack_pointer=self.stack.pointer,
            memory=self.memory.dump(),
            display=self.display.rows(),
            keys=tuple(self.keys),
            delay_timer=self.delay_timer,
            sound_timer=self.sound_timer,
            waiting_for_key=self.waiting_for_key,
            cycle_count=self.cycle_count,
        )
