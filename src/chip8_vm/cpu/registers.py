"""Register file: 16 x 8-bit general purpose registers V0..VF."""

NUM_REGISTERS = 16
VF = 0xF


class RegisterFile:
    """16 general-purpose registers. VF doubles as the flag register."""

    def __init__(self) -> None:
        self._regs: list[int] = [0] * NUM_REGISTERS

    def read(self, index: int) -> int:
        """Read register value. Index is masked to 4 bits."""
        return self._regs[index & 0xF]

    def write(self, index: int, value: int) -> None:
        """Write register value. Index masked to 4 bits, value to 8 bits."""
        self._regs[index & 0xF] = value & 0xFF

    def clear(self) -> None:
        for i in range(NUM_REGISTERS):
            self._regs[i] = 0

    def snapshot(self) -> tuple[int, ...]:
        """Capture all 16 register values."""
        return tuple(self._regs)
