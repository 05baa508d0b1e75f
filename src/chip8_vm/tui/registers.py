"""Register panel: formats V0..VF, I, PC, stack and timers with change highlighting."""

from __future__ import annotations

from ..cpu.machine import MachineSnapshot


def format_registers(
    state: MachineSnapshot, prev_values: tuple[int, ...] | None = None
) -> str:
    """Format the machine registers for display.

    Produces 4 rows of 4 V registers, followed by lines for PC/I, the
    stack and the timers. Registers whose values have changed since the
    previous snapshot are highlighted with Rich markup
    ``[bold yellow]...[/bold yellow]``.

    Args:
        state: The current machine snapshot.
        prev_values: Optional 16 previous V register values. If None, no
            highlighting is applied.

    Returns:
        A string with Rich markup suitable for display in a Rich Panel.
    """
    lines: list[str] = []
    cols = 4
    rows = 16 // cols

    for row in range(rows):
        parts: list[str] = []
        for col in range(cols):
            idx = row + col * rows
            val = state.registers[idx]
            entry = f"V{idx:X} 0x{val:02X}"
            if prev_values is not None and val != prev_values[idx]:
                entry = f"[bold yellow]{entry}[/bold yellow]"
            parts.append(entry)
        lines.append("  ".join(parts))

    lines.append(f"PC 0x{state.pc:03X}  I 0x{state.index:03X}  SP {state.stack_pointer}")
    frames = " ".join(f"{a:03X}" for a in state.stack[:state.stack_pointer])
    lines.append(f"Stack: {frames or 'empty'}")
    lines.append(f"DT {state.delay_timer:3d}  ST {state.sound_timer:3d}")
    if state.waiting_for_key is not None:
        lines.append(f"[bold cyan]Waiting for key -> V{state.waiting_for_key:X}[/bold cyan]")

    return "\n".join(lines)
