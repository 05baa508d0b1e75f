"""Machine faults raised by program loading and instruction execution."""


class MachineFault(Exception):
    """Base class for every fault the machine can raise."""


class ProgramTooLarge(MachineFault, ValueError):
    """Program does not fit in the space above the load address."""

    def __init__(self, size: int, capacity: int) -> None:
        super().__init__(
            f"Program too large: {size} bytes (capacity {capacity} bytes)"
        )
        self.size = size
        self.capacity = capacity


class OutOfBounds(MachineFault, MemoryError):
    """Memory access outside the 4096-byte address space."""

    def __init__(self, address: int, width: int = 1) -> None:
        super().__init__(f"Access out of bounds: 0x{address:04X} (width {width})")
        self.address = address
        self.width = width


class StackOverflow(MachineFault):
    """CALL with the stack already full."""

    def __init__(self, capacity: int) -> None:
        super().__init__(f"Stack overflow: call depth exceeds {capacity}")
        self.capacity = capacity


class StackUnderflow(MachineFault):
    """RET with an empty stack."""

    def __init__(self) -> None:
        super().__init__("Stack underflow: return with empty stack")


class UnimplementedOpcode(MachineFault, ValueError):
    """Instruction word matched no known opcode."""

    def __init__(self, opcode: int) -> None:
        super().__init__(f"Unimplemented opcode: 0x{opcode:04X}")
        self.opcode = opcode
