"""Unit tests for the python-osc UDP transport."""

import threading

from pythonosc.udp_client import SimpleUDPClient

from museosc.osc.message import SINGLE_DEVICE, OscMessage
from museosc.osc.transport import OscUdpTransport


class TestOscUdpTransport:
    def test_default_handler_wraps_message(self):
        received = []
        transport = OscUdpTransport("127.0.0.1", 0, received.append)
        transport._on_message(("127.0.0.1", 40000), "/muse/eeg", 1.0, 2.0, 3.0, 4.0)
        assert received == [OscMessage("/muse/eeg", (1.0, 2.0, 3.0, 4.0), SINGLE_DEVICE)]

    def test_callback_error_does_not_propagate(self, caplog):
        def explode(message):
            raise ValueError("bad")

        transport = OscUdpTransport("127.0.0.1", 0, explode)
        transport._on_message(("127.0.0.1", 40000), "/muse/eeg", 1.0)
        assert "Error handling /muse/eeg" in caplog.text

    def test_stop_without_start(self):
        transport = OscUdpTransport("127.0.0.1", 0, lambda m: None)
        transport.stop()
        assert not transport.running
        assert transport.server_address is None

    def test_loopback(self):
        received = []
        got_message = threading.Event()

        def on_message(message):
            received.append(message)
            got_message.set()

        transport = OscUdpTransport("127.0.0.1", 0, on_message)
        transport.start()
        try:
            host, port = transport.server_address
            SimpleUDPClient(host, port).send_message("/muse/batt", [72, 3800])
            assert got_message.wait(timeout=5.0)
        finally:
            transport.stop()

        assert received[0].address == "/muse/batt"
        assert received[0].args == (72, 3800)
        assert received[0].source is SINGLE_DEVICE
        assert not transport.running
