"""Shared fixtures for machine tests."""

import random

import pytest

from chip8_vm.cpu.machine import Machine
from chip8_vm.cpu.quirks import Quirks


@pytest.fixture
def make_machine():
    """Factory fixture: returns a function that creates a fresh Machine."""
    def _make(quirks: Quirks | None = None, seed: int = 0) -> Machine:
        return Machine(quirks=quirks, rng=random.Random(seed))
    return _make


@pytest.fixture
def exec_word(make_machine):
    """Write a 16-bit instruction word at PC and step once, return the machine."""
    def _exec(machine: Machine | None = None, word: int = 0) -> Machine:
        if machine is None:
            machine = make_machine()
        machine.memory.write16(machine.pc, word)
        machine.step()
        return machine
    return _exec


@pytest.fixture
def set_regs():
    """Set named V registers (e.g., set_regs(machine, v1=5, vf=1))."""
    def _set(machine: Machine, **kwargs: int) -> None:
        for name, value in kwargs.items():
            if not name.startswith("v"):
                raise ValueError(f"Register name must start with 'v': {name}")
            machine.registers.write(int(name[1:], 16), value)
    return _set
