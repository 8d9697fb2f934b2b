"""Tunes for a PWM buzzer and a buzzer that plays them.

A tune is a sequence of ``Tone`` values. A frequency of zero is a rest
marker: the buzzer keeps its previous frequency and only changes duty.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from c3mbus.pitches import Note

DUTY_10 = 256 // 10
DUTY_25 = 256 // 4
DUTY_50 = 256 // 2

MIN_FREQUENCY = 10
MAX_FREQUENCY = 9999
INITIAL_FREQUENCY = 999

REST = 0

Sink = Callable[[int, int], None]
Sleep = Callable[[float], None]


@dataclass(frozen=True)
class Tone:
    """A duty cycle (0-255) held at a frequency for a number of milliseconds."""

    duty: int
    frequency: int
    duration_ms: int


def _tune(notes: Sequence[int], durations: Sequence[int], scale: float) -> tuple[Tone, ...]:
    return tuple(
        Tone(DUTY_50, int(note), int((1000 // length) * scale))
        for note, length in zip(notes, durations)
    )


_MARIO_OVER_NOTES = (
    Note.C4, REST, REST, Note.G3, REST, Note.E3, Note.A3, Note.B3, Note.A3, Note.GS3, Note.AS3,
    Note.GS3, Note.G3, Note.F3, Note.G3,
)
_MARIO_OVER_DURATIONS = (
    4, 8, 8, 8, 4, 4, 6, 6, 6, 6, 6,
    6, 8, 8, 4,
)

_PACMAN_NOTES = (
    Note.B4, Note.B5, Note.FS5, Note.DS5,
    Note.B5, Note.FS5, Note.DS5, Note.C5,
    Note.C6, Note.G6, Note.E6, Note.C6, Note.G6, Note.E6,
    Note.B4, Note.B5, Note.FS5, Note.DS5, Note.B5,
    Note.FS5, Note.DS5, Note.DS5, Note.E5, Note.F5,
    Note.F5, Note.FS5, Note.G5, Note.G5, Note.GS5, Note.A5, Note.B5,
)
_PACMAN_DURATIONS = (
    16, 16, 16, 16,
    32, 16, 8, 16, 16, 16, 16, 32, 16, 8,
    16, 16, 16, 16, 32,
    16, 8, 32, 32, 32,
    32, 32, 32, 32, 32, 16, 4,
)

_PIRATES_NOTES = (
    Note.D4, Note.D4, Note.D4, Note.D4, Note.D4, Note.D4, Note.D4, Note.D4,
    Note.D4, Note.D4, Note.D4, Note.D4, Note.D4, Note.D4, Note.D4, Note.D4,
    Note.D4, Note.D4, Note.D4, Note.D4, Note.D4, Note.D4, Note.D4, Note.D4,
    Note.A3, Note.C4, Note.D4, Note.D4, Note.D4, Note.E4, Note.F4, Note.F4,
    Note.F4, Note.G4, Note.E4, Note.E4, Note.D4, Note.C4, Note.C4, Note.D4,
    REST, Note.A3, Note.C4, Note.B3, Note.D4, Note.B3, Note.E4, Note.F4,
    Note.F4, Note.C4, Note.C4, Note.C4, Note.C4, Note.D4, Note.C4,
    Note.D4, REST, REST, Note.A3, Note.C4, Note.D4, Note.D4, Note.D4, Note.F4,
    Note.G4, Note.G4, Note.G4, Note.A4, Note.A4, Note.A4, Note.A4, Note.G4,
    Note.A4, Note.D4, REST, Note.D4, Note.E3, Note.F4, Note.F4, Note.G4, Note.A4,
    Note.D4, REST, Note.D4, Note.F4, Note.E4, Note.E4, Note.F4, Note.D4,
)
_PIRATES_DURATIONS = (
    4, 8, 4, 8, 4, 8, 8, 8, 8, 4, 8, 4, 8, 4, 8, 8, 8, 8, 4, 8, 4, 8,
    4, 8, 8, 8, 8, 4, 4, 8, 8, 4, 4, 8, 8, 4, 4, 8, 8,
    8, 4, 8, 8, 8, 4, 4, 8, 8, 4, 4, 8, 8, 4, 4, 8, 4,
    4, 8, 8, 8, 8, 4, 4, 8, 8, 4, 4, 8, 8, 4, 4, 8, 8,
    8, 4, 8, 8, 8, 4, 4, 4, 8, 4, 8, 8, 8, 4, 4, 8, 8,
)

_CRAZY_FROG_NOTES = (
    Note.D4, REST, Note.F4, Note.D4, REST, Note.D4, Note.G4, Note.D4, Note.C4,
    Note.D4, REST, Note.A4, Note.D4, REST, Note.D4, Note.AS4, Note.A4, Note.F4,
    Note.D4, Note.A4, Note.D5, Note.D4, Note.C4, REST, Note.C4, Note.A3, Note.E4, Note.D4,
    REST, Note.D4, Note.D4, REST, Note.D4, Note.D4,
)
_CRAZY_FROG_DURATIONS = (
    8, 8, 6, 16, 16, 16, 8, 8, 8,
    8, 8, 6, 16, 16, 16, 8, 8, 8,
    8, 8, 8, 16, 16, 16, 16, 8, 8, 2,
    8, 4, 4, 8, 4, 2,
)

_MARIO_UW_NOTES = (
    Note.C4, Note.C5, Note.A3, Note.A4, Note.AS3, Note.AS4, REST, REST,
    Note.C4, Note.C5, Note.A3, Note.A4, Note.AS3, Note.AS4, REST, REST,
    Note.F3, Note.F4, Note.D3, Note.D4, Note.DS3, Note.DS4, REST, REST,
    Note.F3, Note.F4, Note.D3, Note.D4, Note.DS3, Note.DS4, REST,
    REST, Note.DS4, Note.CS4, Note.D4,
    Note.CS4, Note.DS4, Note.DS4, Note.GS3, Note.G3, Note.CS4,
    Note.C4, Note.FS4, Note.F4, Note.E3, Note.AS4, Note.A4,
    Note.GS4, Note.DS4, Note.B3, Note.AS3, Note.A3, Note.GS3, REST, REST, REST,
)
_MARIO_UW_DURATIONS = (
    12, 12, 12, 12, 12, 12, 6, 3,
    12, 12, 12, 12, 12, 12, 6, 3,
    12, 12, 12, 12, 12, 12, 6,
    3, 12, 12, 12, 12,
    12, 12, 6, 6, 18, 18, 18,
    6, 6, 6, 6, 6, 6,
    18, 18, 18, 18, 18, 18, 10, 10, 10,
    10, 10, 10, 3, 3, 3,
)

_TITANIC_NOTES = (
    Note.E4, Note.B4, Note.E5, Note.E5, Note.E5, Note.B4, Note.E4, Note.E4, Note.B4, Note.E5,
    Note.E5, Note.E5, Note.B4, Note.E4, Note.E4, Note.B4, Note.E5, Note.E5, Note.E5, Note.B4,
    Note.E4,
    Note.E4, Note.B4, Note.E5, Note.E5, Note.E5, Note.D5, Note.E4, Note.B4, Note.E5, Note.E5,
    Note.E5, Note.B4, Note.E4, Note.E4, Note.B4, Note.E5, Note.E5, Note.E5, Note.B4, Note.F5,
    Note.E4, Note.B4, Note.E5, Note.E5, Note.E5, Note.B4, Note.E4,
    Note.E4, Note.B4, Note.E5, Note.E5, Note.E5, Note.D5, Note.E5, Note.E4, Note.E4, Note.E4,
    Note.D4, Note.B3, Note.E4, Note.E4, Note.E4, Note.B3, Note.E4,
    Note.D4, Note.E4, Note.F4, Note.G4, Note.F4, Note.E4, Note.E4, Note.E4, Note.E4,
)
_TITANIC_DURATIONS = (
    8, 8, 8, 8, 8, 8, 4, 8, 8, 8, 8, 8, 8, 4, 8, 8, 8, 8, 8, 8, 4, 8, 8, 8, 8, 4, 4, 8, 8, 8,
    8, 8, 8, 4, 8, 8, 8, 8, 8, 8, 4, 8, 8, 8, 8, 8, 8, 1,
    8, 8, 8, 8, 4, 4, 4, 8, 4, 4, 8, 8, 8, 8, 4, 8, 8, 4, 8, 4, 8, 8, 4, 8, 4, 1,
)


def ramp_up() -> tuple[Tone, ...]:
    """Fifteen short steps rising in pitch and loudness."""
    return tuple(Tone(i * 3, 200 * i, 10) for i in range(1, 16))


def ramp_down() -> tuple[Tone, ...]:
    """Fifteen short steps falling in pitch and loudness."""
    return tuple(Tone(i * 3, 200 * i, 10) for i in range(15, 0, -1))


def ding_dong() -> tuple[Tone, ...]:
    return (
        Tone(DUTY_50, Note.E5, 100),
        Tone(0, 0, 100),
        Tone(DUTY_10, Note.C5, 400),
    )


def dong_ding() -> tuple[Tone, ...]:
    return (
        Tone(DUTY_10, Note.C5, 100),
        Tone(0, 0, 100),
        Tone(DUTY_50, Note.E5, 200),
    )


def chord_up() -> tuple[Tone, ...]:
    """C, E, G rising in loudness."""
    return (
        Tone(DUTY_10, Note.C4, 100),
        Tone(DUTY_25, Note.E4, 100),
        Tone(DUTY_50, Note.G4, 300),
    )


def chord_down() -> tuple[Tone, ...]:
    """G, E, C falling in loudness."""
    return (
        Tone(DUTY_50, Note.G4, 100),
        Tone(DUTY_25, Note.E4, 100),
        Tone(DUTY_10, Note.C4, 200),
    )


def pacman() -> tuple[Tone, ...]:
    return _tune(_PACMAN_NOTES, _PACMAN_DURATIONS, 2.0)


def crazy_frog() -> tuple[Tone, ...]:
    return _tune(_CRAZY_FROG_NOTES, _CRAZY_FROG_DURATIONS, 0.5)


def mario_over() -> tuple[Tone, ...]:
    return _tune(_MARIO_OVER_NOTES, _MARIO_OVER_DURATIONS, 0.5)


def mario_underworld() -> tuple[Tone, ...]:
    return _tune(_MARIO_UW_NOTES, _MARIO_UW_DURATIONS, 1)


def titanic() -> tuple[Tone, ...]:
    return _tune(_TITANIC_NOTES, _TITANIC_DURATIONS, 2)


def pirates() -> tuple[Tone, ...]:
    return _tune(_PIRATES_NOTES, _PIRATES_DURATIONS, 1)


class Buzzer:
    """Plays tones through ``sink(duty, frequency)``, pausing with ``sleep(seconds)``."""

    def __init__(self, sink: Sink, sleep: Sleep = time.sleep) -> None:
        self._sink = sink
        self._sleep = sleep
        self.duty = 0
        self.frequency = INITIAL_FREQUENCY
        self._sink(self.duty, self.frequency)

    def tone(self, duty: int, frequency: int = Note.A4, duration_ms: int = 0) -> None:
        """Set duty and, if it is in range, frequency.

        With a duration the tone is held that long and then silenced.
        Frequencies outside 10-9999 Hz leave the current frequency as it is.
        """
        if not 0 <= duty <= 255:
            raise ValueError(f"duty must be between 0 and 255, got {duty}")
        if duration_ms < 0:
            raise ValueError("duration must not be negative")
        self.duty = duty
        if MIN_FREQUENCY <= frequency <= MAX_FREQUENCY:
            self.frequency = int(frequency)
        self._sink(self.duty, self.frequency)
        if duration_ms:
            self._sleep(duration_ms / 1000)
            self.tone(0, 0, 0)

    def beep(self, duty: int, duration_ms: int) -> None:
        """Sound middle C, then stay silent for as long again."""
        self.tone(duty, Note.C4, duration_ms)
        if duration_ms:
            self._sleep(duration_ms / 1000)
        self.tone(0, 0, 0)

    def play(self, tones: Iterable[Tone]) -> None:
        """Play the tones one after another and end in silence."""
        for item in tones:
            self.tone(item.duty, item.frequency, item.duration_ms)
        self.tone(0, 0, 0)