# c3mbus

Pure-Python building blocks that model the logic of an ESP32-C3 mikroBUS
board. Everything runs on an ordinary host, so the logic can be exercised,
simulated and tested without the hardware. Hardware access is passed in as
callables or driver objects; nothing here talks to a real device.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## What is inside

| Module | Purpose |
| --- | --- |
| `c3mbus.simplelist` | `SimpleList`: a list with an optional three-way compare function, sorted insertion, search and binary search |
| `c3mbus.ringbuffer` | `RingBuffer`: fixed-capacity FIFO that drops its oldest item when full |
| `c3mbus.debugtags` | `LogLevel` and `DebugTagManager`: per-tag log levels capped by a default level, logging through `logging` |
| `c3mbus.pitches` | `Note` and `note_frequency`: note names mapped to frequencies in Hz |
| `c3mbus.neopixel` | `encode_ws2813`, `Pulse` and `NeoPixel`: WS2813 bit timing and a single LED with a background blinker |
| `c3mbus.peerlist` | `PeerList`, `Peer` and `format_mac`: bounded peer table with least-recently-used eviction |
| `c3mbus.melodies` | `Tone`, `Buzzer` and tune functions (`ding_dong`, `dong_ding`, `chord_up`, `chord_down`, `ramp_up`, `ramp_down`, `pacman`, `crazy_frog`, `mario_over`, `mario_underworld`, `titanic`, `pirates`) |
| `c3mbus.espnow` | `QuickEspNow`: queued ESP-NOW style send and receive over a pluggable `RadioDriver` |
| `c3mbus.chipinfo` | `chip_id24`, `flash_chip_mode`, `reset_reason_text`, `format_partition_table`, `is_usb_cdc_connected` |
| `c3mbus.nvsdump` | `NvsType`, `NvsEntry`, `type_name`, `collect_namespaces` and `format_dump` for NVS entries grouped by namespace |

## Examples

A ring buffer keeps the newest items; `push` returns `False` when it had to
drop one:

```python
from c3mbus.ringbuffer import RingBuffer

queue = RingBuffer(3)
for item in ("a", "b", "c", "d"):
    queue.push(item)     # the fourth push drops "a"
print(len(queue), queue.front())   # 3 b
```

Look up a note frequency:

```python
from c3mbus.pitches import note_frequency

print(note_frequency("A4"))   # 440
print(note_frequency("C#5"))  # 554
```

Play a tune through your own output function. The sink receives
`(duty, frequency)` each time the output changes; the sleep callable is used
for the pauses, so a test can pass a no-op:

```python
from c3mbus.melodies import Buzzer, ding_dong

changes = []
buzzer = Buzzer(sink=lambda duty, freq: changes.append((duty, freq)),
                sleep=lambda seconds: None)
buzzer.play(ding_dong())
```

Per-tag log levels never exceed the manager's default level:

```python
from c3mbus.debugtags import DebugTagManager, LogLevel

tags = DebugTagManager(default_level=LogLevel.INFO)
tags.set_tag_level("QESPNOW", LogLevel.WARN)
print(tags.get_tag_level_str("QESPNOW"))   # WARN
print(tags.get_tag_level_str("OTHER"))     # INFO
```

Keep a table of peers and evict the least recently used one:

```python
from c3mbus.peerlist import PeerList, format_mac

peers = PeerList(capacity=2)
peers.add_peer(b"\x02\x00\x00\x00\x00\x01")
peers.add_peer(b"\x02\x00\x00\x00\x00\x02")
print(format_mac(peers.delete_oldest()))
```

## The messaging layer

`QuickEspNow` runs no background tasks of its own. Give it a `RadioDriver`
implementation, call `begin()`, then call `process_tx()` and `process_rx()`
from your loop and feed radio events in with `handle_received()` and
`handle_sent()`. Both queues hold three messages by default; when a queue is
full the oldest message is dropped and `send()` or `handle_received()`
returns `False`.

## What this package does not do

- It has no command-line program; everything is used as a library.
- It drives no hardware: there is no radio driver, PWM, LED, flash or USB
  access included, and no table of board pin assignments. Those are supplied
  by the caller as callables or a `RadioDriver` subclass.
- It does not read real NVS storage or partition tables; it formats entries
  and partitions that you pass in.