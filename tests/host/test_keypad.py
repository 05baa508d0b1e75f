"""Tests for keypad input helpers."""

import os

import pytest

from chip8_vm.host.keypad import KEYMAP, HeldKeys, KeySource, NullKeys, TerminalKeys


class TestKeymap:
    def test_covers_all_keys(self) -> None:
        assert sorted(KEYMAP.values()) == list(range(16))

    def test_layout_corners(self) -> None:
        assert KEYMAP["1"] == 0x1
        assert KEYMAP["4"] == 0xC
        assert KEYMAP["z"] == 0xA
        assert KEYMAP["v"] == 0xF


class TestNullKeys:
    def test_nothing_pressed(self) -> None:
        assert NullKeys().poll() == [False] * 16

    def test_is_key_source(self) -> None:
        assert isinstance(NullKeys(), KeySource)


class TestHeldKeys:
    def test_key_held_for_hold_frames(self) -> None:
        keys = HeldKeys(hold_frames=3)
        keys.feed("w")
        held = [keys.poll()[0x5] for _ in range(5)]
        assert held == [True, True, True, False, False]

    def test_repeat_extends_hold(self) -> None:
        keys = HeldKeys(hold_frames=2)
        keys.feed("x")
        keys.poll()
        keys.feed("x")
        assert keys.poll()[0x0]
        assert keys.poll()[0x0]
        assert not keys.poll()[0x0]

    def test_uppercase_maps(self) -> None:
        keys = HeldKeys()
        keys.feed("Q")
        assert keys.poll()[0x4]

    def test_unmapped_ignored(self) -> None:
        keys = HeldKeys()
        keys.feed("p!")
        assert keys.poll() == [False] * 16

    def test_quit(self) -> None:
        keys = HeldKeys()
        assert not keys.quit_requested
        keys.feed("\x1b")
        assert keys.quit_requested

    def test_is_key_source(self) -> None:
        assert isinstance(HeldKeys(), KeySource)


class TestTerminalKeys:
    def test_non_terminal_stream_raises_oserror(self) -> None:
        pytest.importorskip("termios")
        read_fd, write_fd = os.pipe()
        try:
            with os.fdopen(read_fd) as stream:
                with pytest.raises(OSError):
                    with TerminalKeys(stream):
                        pass
        finally:
            os.close(write_fd)
