"""RAM: bytearray-backed 4096-byte memory with bounds-checked access."""

from ..errors import OutOfBounds

MEMORY_SIZE = 4096


class RAM:
    """Byte-addressable RAM starting at address 0."""

    def __init__(self, size: int = MEMORY_SIZE) -> None:
        self.size = size
        self._data = bytearray(size)

    def _offset(self, addr: int, width: int) -> int:
        """Check that [addr, addr+width) lies inside RAM and return addr."""
        if addr < 0 or addr + width > self.size:
            raise OutOfBounds(addr, width)
        return addr

    def read8(self, addr: int) -> int:
        """Read an unsigned byte."""
        off = self._offset(addr, 1)
        return self._data[off]

    def read16(self, addr: int) -> int:
        """Read an unsigned 16-bit word (big-endian)."""
        off = self._offset(addr, 2)
        return int.from_bytes(self._data[off:off + 2], "big")

    def write8(self, addr: int, value: int) -> None:
        """Write a byte."""
        off = self._offset(addr, 1)
        self._data[off] = value & 0xFF

    def write16(self, addr: int, value: int) -> None:
        """Write a 16-bit word (big-endian)."""
        off = self._offset(addr, 2)
        self._data[off:off + 2] = (value & 0xFFFF).to_bytes(2, "big")

    def read_block(self, addr: int, length: int) -> bytes:
        """Read `length` bytes starting at `addr`."""
        off = self._offset(addr, length)
        return bytes(self._data[off:off + length])

    def load_segment(self, addr: int, data: bytes) -> None:
        """Bulk-load bytes into RAM at an absolute address.

        Copies the entire `data` buffer into memory starting at `addr`.
        Raises OutOfBounds if the segment extends beyond RAM bounds.

        Args:
            addr: Start address for the load.
            data: Raw bytes to copy into memory.
        """
        off = self._offset(addr, len(data))
        self._data[off : off + len(data)] = data

    def clear(self) -> None:
        """Zero every byte."""
        self._data[:] = bytes(self.size)

    def dump(self) -> bytes:
        """Return an immutable copy of the whole memory."""
        return bytes(self._data)
