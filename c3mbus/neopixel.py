"""A single WS2813 RGB LED with an optional background blinker."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Optional, Sequence


@dataclass(frozen=True)
class Pulse:
    """One bit on the wire: a high phase then a low phase, in 100 ns ticks."""

    level0: int
    duration0: int
    level1: int
    duration1: int


HIGH_BIT = Pulse(level0=1, duration0=8, level1=0, duration1=3)
LOW_BIT = Pulse(level0=1, duration0=3, level1=0, duration1=8)

# Brightness steps roughly following the eye's response.
GAMMA_16 = (0, 1, 2, 5, 10, 16, 26, 36, 50, 68, 89, 114, 142, 175, 213, 255)

Writer = Callable[[Sequence[Pulse]], None]


def encode_ws2813(red: int, green: int, blue: int) -> tuple[Pulse, ...]:
    """Encode a colour as 24 pulses: green, red, blue, most significant bit first."""
    for channel, value in (("red", red), ("green", green), ("blue", blue)):
        if not 0 <= value <= 255:
            raise ValueError(f"{channel} must be between 0 and 255, got {value}")
    return tuple(
        HIGH_BIT if value & (1 << bit) else LOW_BIT
        for value in (green, red, blue)
        for bit in range(7, -1, -1)
    )


class NeoPixel:
    """Drives one LED through ``write``, which receives the encoded pulses."""

    def __init__(self, write: Writer) -> None:
        self._write = write
        self.color: tuple[int, int, int] = (0, 0, 0)
        self.interval_ms = 0
        self._lock = threading.Lock()
        self._stop: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def blinking(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _show(self, red: int, green: int, blue: int) -> None:
        pulses = encode_ws2813(red, green, blue)
        with self._lock:
            self._write(pulses)

    def set_rgb(self, red: int, green: int, blue: int) -> None:
        """Store the colour and show it."""
        pulses = encode_ws2813(red, green, blue)
        with self._lock:
            self.color = (red, green, blue)
            self._write(pulses)

    def off(self) -> None:
        """Turn the LED dark without forgetting the stored colour."""
        self._show(0, 0, 0)

    def start_blink(self, interval_ms: int) -> None:
        """Flash the stored colour once per interval for an eighth of it.

        An interval of zero shows the colour once and stops blinking.
        """
        if interval_ms < 0:
            raise ValueError("interval must not be negative")
        self.stop_blink()
        self.interval_ms = interval_ms
        if interval_ms == 0:
            self._show(*self.color)
            return
        stop = threading.Event()
        self._stop = stop
        self._thread = threading.Thread(
            target=self._run, args=(interval_ms, stop), name="neopixel-blink", daemon=True
        )
        self._thread.start()

    def stop_blink(self) -> None:
        """Stop the blinker, leaving the LED as it is."""
        if self._stop is not None:
            self._stop.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()
        self._stop = None
        self._thread = None

    def _run(self, interval_ms: int, stop: threading.Event) -> None:
        on_time = (interval_ms >> 3) / 1000
        off_time = (interval_ms - (interval_ms >> 3)) / 1000
        while not stop.is_set():
            self._show(*self.color)
            if stop.wait(on_time):
                break
            self._show(0, 0, 0)
            if stop.wait(off_time):
                break