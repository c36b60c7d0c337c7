"""MuseIOReceiver: routes muse-io OSC messages to sample listeners."""

from __future__ import annotations

import logging
import threading
from collections.abc import Hashable

from .config import ReceiverConfig
from .device.record import ConfigDecodeError, DeviceConfig
from .device.store import DeviceConfigStore
from .events.base import Sample
from .events.bus import ObserverFailure, ObserverRegistry
from .osc.message import OscMessage
from .osc.protocol import CONFIG_ADDRESS, classify
from .osc.transport import OscUdpTransport

logger = logging.getLogger(__name__)


class MuseIOReceiver:
    """Receive muse-io data and pass decoded samples to registered listeners.

    Each source (one per UDP port, or one per TCP connection) starts
    unconfigured. Its first valid ``/muse/config`` message records the
    device config; until then its data messages are dropped. Afterwards
    every data message is decoded, tagged with that config and broadcast.

    Usage::

        receiver = MuseIOReceiver(ReceiverConfig(port=5001))
        receiver.register_listener(my_listener)
        receiver.connect()
        ...
        receiver.disconnect()
    """

    def __init__(self, config: ReceiverConfig | None = None):
        self.config = config or ReceiverConfig()
        self.store = DeviceConfigStore()
        self.listeners = ObserverRegistry()
        self._lock = threading.RLock()
        self._transport: OscUdpTransport | None = None

    # Listeners

    def register_listener(self, listener: object) -> None:
        """Register ``listener`` unless it is already registered."""
        self.listeners.register(listener)

    def unregister_listener(self, listener: object) -> None:
        self.listeners.unregister(listener)

    # Transport lifecycle

    @property
    def connected(self) -> bool:
        return self._transport is not None

    def connect(self) -> None:
        """Bind the configured port and start handling messages."""
        if self._transport is not None:
            raise RuntimeError("Receiver is already connected.")
        if not self.config.udp:
            raise RuntimeError(
                "Only the UDP transport is built in; feed TCP messages to handle()."
            )
        transport = OscUdpTransport(self.config.host, self.config.port, self.handle)
        transport.start()
        self._transport = transport

    def disconnect(self) -> None:
        """Unbind the port and forget all device configs. No-op if not connected."""
        transport, self._transport = self._transport, None
        if transport is None:
            return
        transport.stop()
        with self._lock:
            self.store.clear()

    def disconnect_source(self, source: Hashable) -> None:
        """Forget the config of a source whose connection closed."""
        with self._lock:
            if self.store.evict(source) is not None:
                logger.info("Source %r disconnected", source)

    # Dispatch

    def handle(self, message: OscMessage) -> list[ObserverFailure]:
        """Process one inbound message.

        Returns the listener failures from the broadcast, if any; they
        have already been logged.
        """
        with self._lock:
            config = self.store.get(message.source)

            if message.address == CONFIG_ADDRESS:
                self._handle_config(message, config)
                return []

            if config is None:
                logger.debug("Dropping %s from unconfigured source %r", message.address, message.source)
                return []

            decoder = classify(message.address)
            if decoder is None:
                return []

            try:
                sample = decoder(config, message.args)
            except (TypeError, ValueError, OverflowError) as e:
                logger.warning("Could not decode %s %r: %s", message.address, message.args, e)
                return []
            if sample is None:
                return []
            return self._broadcast(sample)

    def _handle_config(self, message: OscMessage, config: DeviceConfig | None) -> None:
        if config is not None and not self.config.refresh_config:
            return

        try:
            payload = message.args[0]
        except IndexError:
            logger.warning("Empty %s message from source %r", CONFIG_ADDRESS, message.source)
            return

        try:
            if config is None:
                self.store.set_if_absent(message.source, payload)
            else:
                self.store.replace(message.source, payload)
        except ConfigDecodeError as e:
            logger.warning("Bad %s from source %r: %s", CONFIG_ADDRESS, message.source, e)

    def _broadcast(self, sample: Sample) -> list[ObserverFailure]:
        failures = self.listeners.broadcast(sample)
        for failure in failures:
            logger.error(
                "Listener %r failed on %s",
                failure.listener, sample.kind.name,
                exc_info=failure.error,
            )
        return failures
