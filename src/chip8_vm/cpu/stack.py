"""Call stack: 16 return addresses plus a stack pointer."""

from ..errors import StackOverflow, StackUnderflow

STACK_SIZE = 16


class CallStack:
    """Fixed-capacity stack of 16-bit return addresses.

    ``pointer`` is the number of occupied slots (0..capacity). Slots above
    the pointer keep their last value, as on the hardware.
    """

    def __init__(self, capacity: int = STACK_SIZE) -> None:
        self.capacity = capacity
        self.slots: list[int] = [0] * capacity
        self.pointer: int = 0

    def push(self, value: int) -> None:
        """Push a return address. Raises StackOverflow when full."""
        if self.pointer >= self.capacity:
            raise StackOverflow(self.capacity)
        self.slots[self.pointer] = value & 0xFFFF
        self.pointer += 1

    def pop(self) -> int:
        """Pop the most recent return address. Raises StackUnderflow when empty."""
        if self.pointer == 0:
            raise StackUnderflow()
        self.pointer -= 1
        return self.slots[self.pointer]

    def clear(self) -> None:
        for i in range(self.capacity):
            self.slots[i] = 0
        self.pointer = 0

    def __len__(self) -> int:
        return self.pointer
