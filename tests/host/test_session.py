"""Tests for the per-frame session driver."""

import random

from chip8_vm.cpu.machine import Machine
from chip8_vm.errors import StackUnderflow, UnimplementedOpcode
from chip8_vm.host.clock import FrameClock
from chip8_vm.host.keypad import HeldKeys
from chip8_vm.host.session import Session

NO_KEYS = [False] * 16


def _session(program: bytes, cpu_hz: int = 600) -> Session:
    session = Session(machine=Machine(rng=random.Random(0)),
                      clock=FrameClock(cpu_hz=cpu_hz))
    session.load(program)
    return session


class TestRunFrame:
    def test_steps_and_ticks_per_frame(self) -> None:
        session = _session(b"\x12\x00")  # JP 200
        result = session.run_frame(NO_KEYS)
        assert result.steps == 10
        assert result.ticks == 1
        assert session.machine.cycle_count == 10
        assert session.frames == 1

    def test_elapsed_time(self) -> None:
        session = _session(b"\x12\x00")
        result = session.run_frame(NO_KEYS, elapsed=0.05)
        assert result.steps == 30
        assert result.ticks == 3

    def test_applies_keys(self) -> None:
        session = _session(b"\x12\x00")
        keys = [False] * 16
        keys[0x7] = True
        session.run_frame(keys)
        assert session.machine.keys[0x7] is True

    def test_timers_tick(self) -> None:
        # LD V0, 30; LD DT, V0; JP 204
        session = _session(bytes([0x60, 0x1E, 0xF0, 0x15, 0x12, 0x04]))
        session.run_frame(NO_KEYS)
        assert session.machine.delay_timer == 30
        session.run_frame(NO_KEYS)
        assert session.machine.delay_timer == 29

    def test_sound_started(self) -> None:
        # LD V0, 5; LD ST, V0; JP 204
        session = _session(bytes([0x60, 0x05, 0xF0, 0x18, 0x12, 0x04]))
        assert session.run_frame(NO_KEYS).sound_started is True
        assert session.run_frame(NO_KEYS).sound_started is False

    def test_key_wait_resumes_from_frame_keys(self) -> None:
        # LD V1, K; JP 202
        session = _session(bytes([0xF1, 0x0A, 0x12, 0x02]))
        session.run_frame(NO_KEYS)
        assert session.machine.waiting_for_key == 1
        keys = [False] * 16
        keys[0xC] = True
        session.run_frame(keys)
        assert session.machine.waiting_for_key is None
        assert session.machine.registers.read(1) == 0xC


class TestFaults:
    def test_fault_stops_frame(self) -> None:
        session = _session(bytes([0x60, 0x01, 0xFF, 0xFF]))
        result = session.run_frame(NO_KEYS)
        assert isinstance(result.fault, UnimplementedOpcode)
        assert result.steps == 1
        assert session.halted

    def test_halted_session_does_nothing(self) -> None:
        session = _session(b"\x00\xEE")
        session.run_frame(NO_KEYS)
        assert isinstance(session.fault, StackUnderflow)
        cycles = session.machine.cycle_count
        result = session.run_frame(NO_KEYS)
        assert result.steps == 0
        assert session.machine.cycle_count == cycles

    def test_restart_clears_fault(self) -> None:
        session = _session(b"\x00\xEE")
        session.run_frame(NO_KEYS)
        session.restart()
        assert session.fault is None
        assert session.machine.pc == 0x200

    def test_run_frames_stops_on_fault(self) -> None:
        session = _session(b"\x00\xEE")
        assert session.run_frames(10) == 1

    def test_run_frames(self) -> None:
        session = _session(b"\x12\x00")
        assert session.run_frames(5) == 5
        assert session.machine.cycle_count == 50

class TestRunFramesKeys:
    def test_defaults_to_no_keys(self) -> None:
        # LD V1, K; JP 202
        session = _session(bytes([0xF1, 0x0A, 0x12, 0x02]))
        assert session.run_frames(3) == 3
        assert session.machine.waiting_for_key == 1
        assert not any(session.machine.keys)

    def test_polls_key_source_each_frame(self) -> None:
        session = _session(bytes([0xF1, 0x0A, 0x12, 0x02]))
        keys = HeldKeys(hold_frames=1)
        session.run_frames(2, keys)
        assert session.machine.waiting_for_key == 1
        keys.feed("v")
        session.run_frames(1, keys)
        assert session.machine.waiting_for_key is None
        assert session.machine.registers.read(1) == 0xF
        # The key is released once its hold runs out
        session.run_frames(1, keys)
        assert not session.machine.keys[0xF]
