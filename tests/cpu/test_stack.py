"""Tests for the call stack."""

import pytest

from chip8_vm.cpu.stack import STACK_SIZE, CallStack
from chip8_vm.errors import StackOverflow, StackUnderflow


class TestCallStack:
    def test_push_pop_reverse_order(self) -> None:
        stack = CallStack()
        addresses = [0x200, 0x2A4, 0x310, 0x3FE, 0x0FF]
        for addr in addresses:
            stack.push(addr)
        popped = [stack.pop() for _ in addresses]
        assert popped == list(reversed(addresses))
        assert stack.pointer == 0

    def test_pointer_returns_to_previous_value(self) -> None:
        stack = CallStack()
        stack.push(0x222)
        for n in range(STACK_SIZE - 1):
            stack.push(n)
        for _ in range(STACK_SIZE - 1):
            stack.pop()
        assert stack.pointer == 1
        assert stack.pop() == 0x222

    def test_slots_keep_popped_values(self) -> None:
        stack = CallStack()
        stack.push(1)
        stack.push(2)
        stack.pop()
        assert stack.slots[0:3] == [1, 2, 0]

    def test_overflow(self) -> None:
        stack = CallStack()
        for n in range(STACK_SIZE):
            stack.push(n)
        with pytest.raises(StackOverflow):
            stack.push(99)
        assert stack.pointer == STACK_SIZE

    def test_underflow(self) -> None:
        stack = CallStack()
        with pytest.raises(StackUnderflow):
            stack.pop()
        assert stack.pointer == 0

    def test_push_masks_to_16_bits(self) -> None:
        stack = CallStack()
        stack.push(0x1_0202)
        assert stack.pop() == 0x0202

    def test_len(self) -> None:
        stack = CallStack()
        stack.push(5)
        assert len(stack) == 1

    def test_clear(self) -> None:
        stack = CallStack()
        stack.push(5)
        stack.clear()
        assert stack.pointer == 0
        assert stack.slots == [0] * STACK_SIZE
