"""Tests for the ROM loader."""

import pytest

from chip8_vm.cpu.machine import MAX_PROGRAM_SIZE, Machine
from chip8_vm.errors import ProgramTooLarge
from chip8_vm.loader import read_rom


class TestReadRom:
    def test_reads_bytes(self, tmp_path) -> None:
        path = tmp_path / "prog.ch8"
        path.write_bytes(b"\x00\xE0\x12\x00")
        assert read_rom(path) == b"\x00\xE0\x12\x00"

    def test_accepts_str_path(self, tmp_path) -> None:
        path = tmp_path / "prog.ch8"
        path.write_bytes(b"\x12\x00")
        assert read_rom(str(path)) == b"\x12\x00"

    def test_max_size(self, tmp_path) -> None:
        path = tmp_path / "big.ch8"
        path.write_bytes(bytes(MAX_PROGRAM_SIZE))
        assert len(read_rom(path)) == MAX_PROGRAM_SIZE

    def test_too_large(self, tmp_path) -> None:
        path = tmp_path / "huge.ch8"
        path.write_bytes(bytes(MAX_PROGRAM_SIZE + 1))
        with pytest.raises(ProgramTooLarge):
            read_rom(path)

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(OSError):
            read_rom(tmp_path / "missing.ch8")

    def test_loads_into_machine(self, tmp_path) -> None:
        path = tmp_path / "prog.ch8"
        path.write_bytes(b"\x6A\x07")
        m = Machine()
        m.load_program(read_rom(path))
        m.step()
        assert m.registers.read(0xA) == 7
