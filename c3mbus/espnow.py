"""Queued ESP-NOW style messaging over a pluggable radio driver.

Outgoing messages wait in a small bounded queue and are handed to the
driver one at a time: after each send the next one waits until the
driver reports that the previous one went out. Incoming frames are
queued the same way and handed to a callback when the receive side is
processed.
"""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Iterable, Optional, Union

from c3mbus.peerlist import MAX_PEERS, PeerList, format_mac
from c3mbus.ringbuffer import RingBuffer

log = logging.getLogger(__name__)

BROADCAST_ADDRESS = b"\xff" * 6
ADDRESS_LENGTH = 6
MAX_MESSAGE_LENGTH = 250
MAX_DATA_LENGTH = 250
QUEUE_SIZE = 3
MIN_WIFI_CHANNEL = 0
MAX_WIFI_CHANNEL = 14
CURRENT_WIFI_CHANNEL = 255

MacLike = Union[bytes, bytearray, Iterable[int]]


class WifiInterface(IntEnum):
    """The Wi-Fi interface the radio traffic goes through."""

    STA = 0
    AP = 1


class EspNowError(Exception):
    """Raised when the radio or the messaging layer cannot do what was asked."""


class RadioDriver(abc.ABC):
    """The radio underneath: channel control, peer table and raw frames."""

    @abc.abstractmethod
    def current_channel(self) -> int:
        """The channel the radio is tuned to."""

    @abc.abstractmethod
    def set_channel(self, channel: int) -> None:
        """Tune the radio; raise EspNowError on failure."""

    @abc.abstractmethod
    def init(self) -> None:
        """Start the radio's messaging layer; raise EspNowError on failure."""

    @abc.abstractmethod
    def deinit(self) -> None:
        """Shut the messaging layer down."""

    @abc.abstractmethod
    def add_peer(self, mac: bytes, channel: int, interface: WifiInterface) -> None:
        """Register a peer; raise EspNowError on failure."""

    @abc.abstractmethod
    def delete_peer(self, mac: bytes) -> None:
        """Unregister a peer."""

    @abc.abstractmethod
    def send(self, mac: bytes, payload: bytes) -> None:
        """Transmit one frame; raise EspNowError on failure."""


@dataclass(frozen=True)
class ReceivedMessage:
    """A frame that arrived from a peer."""

    source: bytes
    destination: bytes
    payload: bytes
    rssi: int

    @property
    def broadcast(self) -> bool:
        return self.destination == BROADCAST_ADDRESS


@dataclass(frozen=True)
class _Outgoing:
    destination: bytes
    payload: bytes


ReceivedCallback = Callable[[ReceivedMessage], None]
SentCallback = Callable[[bytes, int], None]


def _address(mac: MacLike, what: str) -> bytes:
    try:
        value = bytes(mac)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{what} is not a MAC address: {mac!r}") from exc
    if len(value) != ADDRESS_LENGTH:
        raise ValueError(f"{what} must have {ADDRESS_LENGTH} bytes, got {len(value)}")
    return value


class QuickEspNow:
    """Message queueing and peer management on top of a ``RadioDriver``."""

    address_length = ADDRESS_LENGTH
    max_message_length = MAX_MESSAGE_LENGTH

    def __init__(self, driver: RadioDriver, queue_size: int = QUEUE_SIZE) -> None:
        self.driver = driver
        self.queue_size = queue_size
        self.channel: Optional[int] = None
        self.interface: Optional[WifiInterface] = None
        self.ready_to_send = True
        self.transmit_enabled = True
        self.peers = PeerList(MAX_PEERS)
        self._tx_queue: RingBuffer[_Outgoing] = RingBuffer(queue_size)
        self._rx_queue: RingBuffer[ReceivedMessage] = RingBuffer(queue_size)
        self._received: Optional[ReceivedCallback] = None
        self._sent: Optional[SentCallback] = None
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    @property
    def pending_tx(self) -> int:
        return len(self._tx_queue)

    @property
    def pending_rx(self) -> int:
        return len(self._rx_queue)

    def begin(
        self,
        channel: int = CURRENT_WIFI_CHANNEL,
        interface: WifiInterface = WifiInterface.STA,
    ) -> None:
        """Start messaging on a channel, or on the current one when given 255."""
        try:
            wifi_if = WifiInterface(interface)
        except ValueError:
            raise ValueError(f"unknown wifi interface: {interface!r}") from None
        if channel != CURRENT_WIFI_CHANNEL and not MIN_WIFI_CHANNEL <= channel <= MAX_WIFI_CHANNEL:
            raise ValueError(f"invalid wifi channel {channel}")
        if channel == CURRENT_WIFI_CHANNEL:
            channel = self.driver.current_channel()
            log.info("Current channel: %d", channel)
        self.driver.set_channel(channel)
        log.info("Starting ESP-NOW in channel %d interface %s", channel, wifi_if.name)
        self.channel = channel
        self.interface = wifi_if
        self.driver.init()
        self._tx_queue = RingBuffer(self.queue_size)
        self._rx_queue = RingBuffer(self.queue_size)
        self.ready_to_send = True
        self._started = True

    def stop(self) -> None:
        """Shut messaging down and discard anything still queued."""
        log.info("ESP-NOW stop")
        self._started = False
        self._tx_queue = RingBuffer(self.queue_size)
        self._rx_queue = RingBuffer(self.queue_size)
        self.driver.deinit()

    def send(self, destination: MacLike, payload: bytes) -> bool:
        """Queue a message.

        Returns False when the queue was full and its oldest message was
        dropped to make room, True otherwise.
        """
        mac = _address(destination, "destination")
        data = bytes(payload)
        if not data:
            raise ValueError("payload must not be empty")
        if len(data) > MAX_DATA_LENGTH:
            raise ValueError(f"payload of {len(data)} bytes exceeds {MAX_DATA_LENGTH}")
        if not self._started:
            raise EspNowError("messaging has not been started")
        queued = self._tx_queue.push(_Outgoing(mac, data))
        if not queued:
            log.debug("Message dropped")
        log.debug("%d messages queued. Len: %d", len(self._tx_queue), len(data))
        return queued

    def send_broadcast(self, payload: bytes) -> bool:
        """Queue a message to every listener."""
        return self.send(BROADCAST_ADDRESS, payload)

    def on_data_received(self, callback: Optional[ReceivedCallback]) -> None:
        self._received = callback

    def on_data_sent(self, callback: Optional[SentCallback]) -> None:
        self._sent = callback

    def enable_transmit(self, enable: bool) -> None:
        """Pause or resume the processing of both queues."""
        log.debug("Send esp-now task %s", "enabled" if enable else "disabled")
        self.transmit_enabled = bool(enable)

    def _add_peer(self, mac: bytes) -> bool:
        if self.peers.peer_exists(mac):
            return True
        if len(self.peers) >= self.peers.capacity:
            oldest = self.peers.delete_oldest()
            if oldest is None:
                log.error("Error deleting peer")
                return False
            self.driver.delete_peer(oldest)
        channel = self.driver.current_channel()
        try:
            self.driver.add_peer(mac, channel, self.interface or WifiInterface.STA)
        except EspNowError as exc:
            log.error("Error adding peer %s: %s", format_mac(mac), exc)
            return False
        self.peers.add_peer(mac)
        log.debug("Peer %s added on channel %d", format_mac(mac), channel)
        return True

    def process_tx(self) -> int:
        """Hand queued messages to the driver while it is ready for them.

        Returns the number of messages the driver accepted.
        """
        if not (self._started and self.transmit_enabled):
            return 0
        sent = 0
        while self.ready_to_send and not self._tx_queue.is_empty():
            message = self._tx_queue.pop()
            self._add_peer(message.destination)
            self.ready_to_send = False
            try:
                self.driver.send(message.destination, message.payload)
            except EspNowError as exc:
                log.warning(
                    "Error sending message to %s. Len: %d: %s",
                    format_mac(message.destination), len(message.payload), exc,
                )
                self.ready_to_send = True
                continue
            sent += 1
            log.debug("Message to %s sent. Len: %d", format_mac(message.destination), len(message.payload))
        return sent

    def process_rx(self) -> Optional[ReceivedMessage]:
        """Deliver the oldest received message to the callback and return it."""
        if not (self._started and self.transmit_enabled) or self._rx_queue.is_empty():
            return None
        message = self._rx_queue.pop()
        if self._received is not None:
            self._received(message)
        return message

    def handle_received(
        self, source: MacLike, destination: MacLike, payload: bytes, rssi: int
    ) -> bool:
        """Queue a frame from the radio.

        Returns False when the oldest queued frame was dropped for it.
        """
        data = bytes(payload)
        if len(data) > MAX_MESSAGE_LENGTH:
            raise ValueError(f"payload of {len(data)} bytes exceeds {MAX_MESSAGE_LENGTH}")
        message = ReceivedMessage(
            source=_address(source, "source"),
            destination=_address(destination, "destination"),
            payload=data,
            rssi=int(rssi),
        )
        queued = self._rx_queue.push(message)
        if not queued:
            log.debug("Rx message dropped")
        return queued

    def handle_sent(self, mac: MacLike, status: int) -> None:
        """Note that the driver finished a send, so the next may go out."""
        self.ready_to_send = True
        log.debug("Ready to send. Status: %d", status)
        if self._sent is not None:
            self._sent(bytes(mac), status)