"""CHIP-8 virtual machine."""

from .cpu.machine import Machine, MachineSnapshot
from .cpu.quirks import Quirks
from .errors import (
    MachineFault,
    OutOfBounds,
    ProgramTooLarge,
    StackOverflow,
    StackUnderflow,
    UnimplementedOpcode,
)

__all__ = [
    "Machine",
    "MachineSnapshot",
    "Quirks",
    "MachineFault",
    "OutOfBounds",
    "ProgramTooLarge",
    "StackOverflow",
    "StackUnderflow",
    "UnimplementedOpcode",
]
