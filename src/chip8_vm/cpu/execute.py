"""Instruction execution: implements the full CHIP-8 opcode table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..memory.font import glyph_address
from .decode import Instruction
from .registers import VF

if TYPE_CHECKING:
    from .machine import Machine


def execute(inst: Instruction, machine: Machine) -> int:
    """Execute a decoded instruction. Returns the next PC value.

    ``machine.pc`` already points past the instruction being executed, so
    skips add 2 to it and CALL pushes it unchanged.
    """
    regs = machine.registers
    pc = machine.pc
    op = inst.mnemonic

    if op == "NOP":
        return pc

    elif op == "CLS":
        machine.display.clear()
        return pc

    elif op == "RET":
        return machine.stack.pop()

    elif op == "JP":
        return inst.nnn

    elif op == "CALL":
        machine.stack.push(pc)
        return inst.nnn

    elif op == "SE":
        return pc + 2 if regs.read(inst.x) == inst.kk else pc

    elif op == "SNE":
        return pc + 2 if regs.read(inst.x) != inst.kk else pc

    elif op == "SE.V":
        return pc + 2 if regs.read(inst.x) == regs.read(inst.y) else pc

    elif op == "SNE.V":
        return pc + 2 if regs.read(inst.x) != regs.read(inst.y) else pc

    elif op == "LD":
        regs.write(inst.x, inst.kk)
        return pc

    elif op == "ADD":
        # No carry flag: 8xy4 is the flag-setting add
        regs.write(inst.x, regs.read(inst.x) + inst.kk)
        return pc

    elif op in ("LD.V", "OR", "AND", "XOR", "ADD.V", "SUB", "SHR", "SUBN", "SHL"):
        _exec_alu(inst, machine)
        return pc

    elif op == "LD.I":
        machine.index = inst.nnn
        return pc

    elif op == "JP.V0":
        return (inst.nnn + regs.read(0)) & 0xFFFF

    elif op == "RND":
        regs.write(inst.x, machine.rng.randrange(256) & inst.kk)
        return pc

    elif op == "DRW":
        _exec_draw(inst, machine)
        return pc

    elif op == "SKP":
        return pc + 2 if machine.keys[regs.read(inst.x) & 0xF] else pc

    elif op == "SKNP":
        return pc + 2 if not machine.keys[regs.read(inst.x) & 0xF] else pc

    else:
        return _exec_f_family(inst, machine, pc)


def _exec_alu(inst: Instruction, machine: Machine) -> None:
    """Execute the 8xyN register-register ALU group.

    Result and flag are computed from the operand values read before any
    write. VF is written first and Vx second, so when x is F the result
    replaces the flag.
    """
    regs = machine.registers
    quirks = machine.quirks
    op = inst.mnemonic
    vx = regs.read(inst.x)
    vy = regs.read(inst.y)
    flag: int | None = None

    if op == "LD.V":
        result = vy
    elif op == "OR":
        result = vx | vy
        if quirks.logic_resets_vf:
            flag = 0
    elif op == "AND":
        result = vx & vy
        if quirks.logic_resets_vf:
            flag = 0
    elif op == "XOR":
        result = vx ^ vy
        if quirks.logic_resets_vf:
            flag = 0
    elif op == "ADD.V":
        total = vx + vy
        result = total & 0xFF
        flag = 1 if total > 0xFF else 0
    elif op == "SUB":
        result = (vx - vy) & 0xFF
        flag = 1 if vx >= vy else 0
    elif op == "SUBN":
        result = (vy - vx) & 0xFF
        flag = 1 if vy >= vx else 0
    elif op == "SHR":
        src = vy if quirks.shift_uses_vy else vx
        result = src >> 1
        flag = src & 0x1
    elif op == "SHL":
        src = vy if quirks.shift_uses_vy else vx
        result = (src << 1) & 0xFF
        flag = (src >> 7) & 0x1
    else:
        raise ValueError(f"Unknown ALU operation: {op}")

    if flag is not None:
        regs.write(VF, flag)
    regs.write(inst.x, result)


def _exec_draw(inst: Instruction, machine: Machine) -> None:
    """Dxyn: XOR an n-row sprite from memory[I] onto the display at (Vx, Vy)."""
    regs = machine.registers
    display = machine.display
    x = regs.read(inst.x) % display.width
    y = regs.read(inst.y) % display.height
    sprite = machine.memory.read_block(machine.index, inst.n)
    collision = display.draw_sprite(x, y, sprite)
    regs.write(VF, 1 if collision else 0)


def _exec_f_family(inst: Instruction, machine: Machine, pc: int) -> int:
    """Execute FxKK timer, index and memory transfer instructions."""
    regs = machine.registers
    mem = machine.memory
    op = inst.mnemonic
    x = inst.x

    if op == "LD.DT":
        regs.write(x, machine.delay_timer)

    elif op == "LD.K":
        machine.begin_key_wait(x)

    elif op == "SET.DT":
        machine.delay_timer = regs.read(x)

    elif op == "SET.ST":
        machine.sound_timer = regs.read(x)

    elif op == "ADD.I":
        machine.index = (machine.index + regs.read(x)) & 0xFFFF

    elif op == "LD.F":
        machine.index = glyph_address(regs.read(x))

    elif op == "BCD":
        value = regs.read(x)
        i = machine.index
        # Check the whole range first so a fault leaves memory untouched
        mem.read_block(i, 3)
        mem.write8(i, value // 100)
        mem.write8(i + 1, (value // 10) % 10)
        mem.write8(i + 2, value % 10)

    elif op == "STORE":
        values = bytes(regs.read(r) for r in range(x + 1))
        mem.load_segment(machine.index, values)
        if machine.quirks.memory_increments_index:
            machine.index = (machine.index + x + 1) & 0xFFFF

    elif op == "LOAD":
        values = mem.read_block(machine.index, x + 1)
        for r, value in enumerate(values):
            regs.write(r, value)
        if machine.quirks.memory_increments_index:
            machine.index = (machine.index + x + 1) & 0xFFFF

    else:
        raise ValueError(f"Unimplemented operation: {op} (word=0x{inst.word:04X})")

    return pc
