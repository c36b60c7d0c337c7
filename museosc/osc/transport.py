"""OscUdpTransport: python-osc UDP server feeding messages to a callback."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from pythonosc.dispatcher import Dispatcher
from pythonosc.osc_server import BlockingOSCUDPServer

from .message import SINGLE_DEVICE, OscMessage

logger = logging.getLogger(__name__)

MessageCallback = Callable[[OscMessage], Any]


class OscUdpTransport:
    """Serve one UDP port on a background thread.

    UDP carries no connection, so every message is tagged with the
    ``SINGLE_DEVICE`` source key: one headband per port.

    Usage::

        transport = OscUdpTransport("0.0.0.0", 5000, receiver.handle)
        transport.start()
        ...
        transport.stop()
    """

    def __init__(self, host: str, port: int, callback: MessageCallback):
        self.host = host
        self.port = port
        self.callback = callback

        self.dispatcher = Dispatcher()
        self.dispatcher.set_default_handler(self._on_message, needs_reply_address=True)

        self._server: BlockingOSCUDPServer | None = None
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._server is not None

    @property
    def server_address(self) -> tuple[str, int] | None:
        """Bound ``(host, port)``; useful when started with port 0."""
        if self._server is None:
            return None
        return self._server.server_address[:2]

    def _on_message(self, client_address: tuple[str, int], address: str, *args: Any) -> None:
        try:
            self.callback(OscMessage(address, args, SINGLE_DEVICE))
        except Exception:
            # Keep serving; one bad message must not kill the socket thread
            logger.exception("Error handling %s from %s", address, client_address)

    def start(self) -> None:
        """Bind the socket and start serving.

        Raises:
            OSError: if the port cannot be bound.
        """
        if self._server is not None:
            raise RuntimeError("Transport already started.")
        self._server = BlockingOSCUDPServer((self.host, self.port), self.dispatcher)
        self._thread = threading.Thread(
            target=self._server.serve_forever, name=f"osc-udp-{self.port}", daemon=True
        )
        self._thread.start()
        logger.info("Listening for OSC on udp://%s:%d", *self.server_address)

    def stop(self) -> None:
        """Stop serving and close the socket. No-op if not started."""
        if self._server is None:
            return
        self._server.shutdown()
        self._server.server_close()
        if self._thread is not None:
            self._thread.join(timeout=5.0)
        self._server = None
        self._thread = None
        logger.info("Stopped OSC listener on port %d", self.port)
