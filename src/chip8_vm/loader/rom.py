"""ROM loader: reads a raw CHIP-8 program image from disk."""

from __future__ import annotations

from pathlib import Path

from ..cpu.machine import MAX_PROGRAM_SIZE
from ..errors import ProgramTooLarge


def read_rom(path: str | Path) -> bytes:
    """Read a ROM file, rejecting images that cannot fit in program space.

    The size is checked before the file is read, so an oversized file is
    never loaded into memory.

    Args:
        path: Path to the ROM image.

    Returns:
        The raw program bytes.

    Raises:
        ProgramTooLarge: If the file exceeds the space above 0x200.
        OSError: If the file cannot be read.
    """
    rom_path = Path(path)
    size = rom_path.stat().st_size
    if size > MAX_PROGRAM_SIZE:
        raise ProgramTooLarge(size, MAX_PROGRAM_SIZE)
    with open(rom_path, "rb") as f:
        return f.read()
