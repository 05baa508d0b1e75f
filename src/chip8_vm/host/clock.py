"""Frame clock: turns elapsed wall time into instruction and timer-tick counts."""

from __future__ import annotations

from dataclasses import dataclass, field

TIMER_HZ = 60
DEFAULT_CPU_HZ = 700


@dataclass
class FrameClock:
    """Accumulates elapsed time and hands out whole steps and timer ticks.

    Fractional remainders carry over between frames so the long-run rates
    match ``cpu_hz`` and ``timer_hz`` regardless of frame jitter.
    """

    cpu_hz: int = DEFAULT_CPU_HZ
    timer_hz: int = TIMER_HZ
    max_elapsed: float = 0.25
    _cpu_debt: float = field(default=0.0, repr=False)
    _timer_debt: float = field(default=0.0, repr=False)

    def __post_init__(self) -> None:
        if self.cpu_hz <= 0 or self.timer_hz <= 0:
            raise ValueError(
                f"Clock rates must be positive (cpu_hz={self.cpu_hz}, "
                f"timer_hz={self.timer_hz})"
            )

    def advance(self, elapsed: float) -> tuple[int, int]:
        """Account for `elapsed` seconds of wall time.

        Elapsed time is capped at ``max_elapsed`` so a stalled host does not
        try to catch up with a burst of thousands of instructions.

        Returns:
            ``(steps, ticks)``: instructions to execute and timer ticks to apply.
        """
        elapsed = min(max(elapsed, 0.0), self.max_elapsed)
        self._cpu_debt += elapsed * self.cpu_hz
        self._timer_debt += elapsed * self.timer_hz
        steps = int(self._cpu_debt)
        ticks = int(self._timer_debt)
        self._cpu_debt -= steps
        self._timer_debt -= ticks
        return steps, ticks

    def frame(self) -> tuple[int, int]:
        """Counts for exactly one timer period (1 / timer_hz seconds).

        Always grants one timer tick; the instruction count carries its
        fractional remainder like ``advance``.
        """
        self._cpu_debt += self.cpu_hz / self.timer_hz
        steps = int(self._cpu_debt)
        self._cpu_debt -= steps
        return steps, 1
