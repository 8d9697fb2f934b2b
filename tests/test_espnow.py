import pytest

from c3mbus.espnow import (
    BROADCAST_ADDRESS,
    CURRENT_WIFI_CHANNEL,
    EspNowError,
    QuickEspNow,
    RadioDriver,
    ReceivedMessage,
    WifiInterface,
)

PEER_A = bytes([0x02, 0, 0, 0, 0, 0x01])
PEER_B = bytes([0x02, 0, 0, 0, 0, 0x02])


class FakeDriver(RadioDriver):
    def __init__(self, channel=6):
        self.channel = channel
        self.channels_set = []
        self.initialised = False
        self.deinit_calls = 0
        self.peers_added = []
        self.peers_deleted = []
        self.frames = []
        self.fail_next_send = False

    def current_channel(self):
        return self.channel

    def set_channel(self, channel):
        self.channels_set.append(channel)
        self.channel = channel

    def init(self):
        self.initialised = True

    def deinit(self):
        self.deinit_calls += 1

    def add_peer(self, mac, channel, interface):
        self.peers_added.append((mac, channel, interface))

    def delete_peer(self, mac):
        self.peers_deleted.append(mac)

    def send(self, mac, payload):
        if self.fail_next_send:
            self.fail_next_send = False
            raise EspNowError("no memory")
        self.frames.append((mac, payload))


@pytest.fixture
def driver():
    return FakeDriver()


@pytest.fixture
def radio(driver):
    esp = QuickEspNow(driver)
    esp.begin(1, WifiInterface.STA)
    return esp


def test_begin_rejects_unknown_interface(driver):
    with pytest.raises(ValueError):
        QuickEspNow(driver).begin(1, 7)


def test_begin_rejects_invalid_channel(driver):
    with pytest.raises(ValueError):
        QuickEspNow(driver).begin(15)
    assert driver.initialised is False


def test_begin_with_current_channel_uses_driver_channel(driver):
    esp = QuickEspNow(driver)
    esp.begin(CURRENT_WIFI_CHANNEL, WifiInterface.AP)
    assert esp.channel == 6
    assert driver.channels_set == [6]
    assert esp.interface is WifiInterface.AP
    assert esp.started and driver.initialised


def test_begin_with_explicit_channel(radio, driver):
    assert radio.channel == 1
    assert driver.channels_set == [1]


def test_send_before_begin_raises(driver):
    with pytest.raises(EspNowError):
        QuickEspNow(driver).send(PEER_A, b"hi")


@pytest.mark.parametrize("payload", [b"", bytes(251)])
def test_send_rejects_bad_payload(radio, payload):
    with pytest.raises(ValueError):
        radio.send(PEER_A, payload)


def test_send_accepts_maximum_payload(radio, driver):
    assert radio.send(PEER_A, bytes(250)) is True
    assert radio.process_tx() == 1
    assert driver.frames == [(PEER_A, bytes(250))]


def test_send_rejects_bad_destination(radio):
    with pytest.raises(ValueError):
        radio.send(b"\x01\x02", b"hi")


def test_one_message_in_flight_until_sent_callback(radio, driver):
    radio.send(PEER_A, b"one")
    radio.send(PEER_A, b"two")
    assert radio.process_tx() == 1
    assert radio.ready_to_send is False
    assert radio.process_tx() == 0
    radio.handle_sent(PEER_A, 0)
    assert radio.process_tx() == 1
    assert [payload for _, payload in driver.frames] == [b"one", b"two"]


def test_full_queue_drops_oldest(radio, driver):
    results = [radio.send(PEER_A, str(i).encode()) for i in range(4)]
    assert results == [True, True, True, False]
    assert radio.pending_tx == 3
    while radio.process_tx():
        radio.handle_sent(PEER_A, 0)
    assert [payload for _, payload in driver.frames] == [b"1", b"2", b"3"]


def test_peer_registered_once_with_channel_and_interface(radio, driver):
    radio.send(PEER_A, b"x")
    radio.process_tx()
    radio.handle_sent(PEER_A, 0)
    radio.send(PEER_A, b"y")
    radio.process_tx()
    assert driver.peers_added == [(PEER_A, 1, WifiInterface.STA)]
    assert len(radio.peers) == 1


def test_oldest_peer_evicted_when_table_full(driver):
    ticks = iter(range(1000))
    esp = QuickEspNow(driver)
    esp.begin(1)
    esp.peers._clock = lambda: next(ticks)
    macs = [bytes([0x02, 0, 0, 0, 0, i]) for i in range(21)]
    for mac in macs:
        esp.send(mac, b"x")
        assert esp.process_tx() == 1
        esp.handle_sent(mac, 0)
    assert driver.peers_deleted == [macs[0]]
    assert len(esp.peers) == esp.peers.capacity
    assert esp.peers.get_peer(macs[20]) is not None
    assert esp.peers.get_peer(macs[0]) is None


def test_send_broadcast_uses_broadcast_address(radio, driver):
    radio.send_broadcast(b"all")
    assert radio.pending_tx == 1
    assert radio.process_tx() == 1
    assert driver.frames == [(BROADCAST_ADDRESS, b"all")]


def test_driver_failure_does_not_block_queue(radio, driver):
    driver.fail_next_send = True
    radio.send(PEER_A, b"lost")
    radio.send(PEER_A, b"kept")
    assert radio.process_tx() == 1
    assert driver.frames == [(PEER_A, b"kept")]


def test_received_message_delivered_to_callback(radio):
    got = []
    radio.on_data_received(got.append)
    radio.handle_received(PEER_B, BROADCAST_ADDRESS, b"hello", -40)
    radio.handle_received(PEER_B, PEER_A, b"direct", -50)
    first = radio.process_rx()
    second = radio.process_rx()
    assert radio.process_rx() is None
    assert got == [first, second]
    assert first == ReceivedMessage(PEER_B, BROADCAST_ADDRESS, b"hello", -40)
    assert first.broadcast is True
    assert second.broadcast is False


def test_receive_queue_drops_oldest(radio):
    results = [radio.handle_received(PEER_B, PEER_A, bytes([i]), -30) for i in range(4)]
    assert results == [True, True, True, False]
    payloads = []
    while (message := radio.process_rx()) is not None:
        payloads.append(message.payload)
    assert payloads == [b"\x01", b"\x02", b"\x03"]


def test_sent_callback_receives_status(radio):
    calls = []
    radio.on_data_sent(lambda mac, status: calls.append((mac, status)))
    radio.ready_to_send = False
    radio.handle_sent(PEER_A, 1)
    assert calls == [(PEER_A, 1)]
    assert radio.ready_to_send is True


def test_disabled_transmit_pauses_processing(radio, driver):
    radio.enable_transmit(False)
    radio.send(PEER_A, b"wait")
    radio.handle_received(PEER_B, PEER_A, b"in", -20)
    assert radio.process_tx() == 0
    assert radio.process_rx() is None
    radio.enable_transmit(True)
    assert radio.process_tx() == 1
    assert radio.process_rx().payload == b"in"


def test_stop_deinitialises_and_blocks_sending(radio, driver):
    radio.send(PEER_A, b"pending")
    radio.stop()
    assert driver.deinit_calls == 1
    assert radio.pending_tx == 0
    with pytest.raises(EspNowError):
        radio.send(PEER_A, b"late")