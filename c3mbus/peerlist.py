"""A bounded list of radio peers, each remembered with its last use time."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional, Union

MAC_LENGTH = 6
MAX_PEERS = 20

MacLike = Union[bytes, bytearray, Iterable[int]]
Clock = Callable[[], int]


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


def _to_mac(mac: MacLike) -> bytes:
    try:
        value = bytes(mac)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"not a MAC address: {mac!r}") from exc
    if len(value) != MAC_LENGTH:
        raise ValueError(f"a MAC address has {MAC_LENGTH} bytes, got {len(value)}")
    return value


def format_mac(mac: MacLike) -> str:
    """Format a MAC address as six lower-case hex pairs joined by colons."""
    return ":".join(f"{byte:02x}" for byte in _to_mac(mac))


@dataclass
class Peer:
    """A known peer and the time, in milliseconds, it was last used."""

    mac: bytes
    last_msg: int


class PeerList:
    """Holds up to ``capacity`` peers; the caller decides which to evict."""

    def __init__(self, capacity: int = MAX_PEERS, clock: Optional[Clock] = None) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._clock: Clock = clock if clock is not None else _monotonic_ms
        self._peers: dict[bytes, Peer] = {}

    def __len__(self) -> int:
        return len(self._peers)

    def __iter__(self) -> Iterator[Peer]:
        return iter(list(self._peers.values()))

    def __repr__(self) -> str:
        macs = ", ".join(format_mac(mac) for mac in self._peers)
        return f"{type(self).__name__}([{macs}])"

    def peer_exists(self, mac: MacLike) -> bool:
        """Whether the peer is known; a known peer is marked as just used."""
        peer = self._peers.get(_to_mac(mac))
        if peer is None:
            return False
        peer.last_msg = self._clock()
        return True

    def get_peer(self, mac: MacLike) -> Optional[Peer]:
        """The peer with this address, or None."""
        return self._peers.get(_to_mac(mac))

    def update_peer_use(self, mac: MacLike) -> bool:
        """Mark a peer as just used; False when it is not known."""
        peer = self.get_peer(mac)
        if peer is None:
            return False
        peer.last_msg = self._clock()
        return True

    def add_peer(self, mac: MacLike) -> bool:
        """Add a peer; False when it is already known or the list is full."""
        key = _to_mac(mac)
        if self.peer_exists(key):
            return False
        if len(self._peers) >= self.capacity:
            return False
        self._peers[key] = Peer(mac=key, last_msg=self._clock())
        return True

    def delete_peer(self, mac: MacLike) -> bool:
        """Forget a peer; False when it is not known."""
        return self._peers.pop(_to_mac(mac), None) is not None

    def delete_oldest(self) -> Optional[bytes]:
        """Forget the least recently used peer and return its address.

        Returns None when the list is empty.
        """
        if not self._peers:
            return None
        oldest = min(self._peers.values(), key=lambda peer: peer.last_msg)
        del self._peers[oldest.mac]
        return oldest.mac