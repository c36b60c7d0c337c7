"""DeviceConfigStore: one DeviceConfig per source key."""

from __future__ import annotations

import logging
import threading
from collections.abc import Hashable
from typing import Any

from .record import DeviceConfig, parse_device_config

logger = logging.getLogger(__name__)


class DeviceConfigStore:
    """Keyed store of device configurations.

    A record is parsed once per key and then kept as-is until the key is
    evicted. Later payloads for the same key are discarded.

    Usage::

        store = DeviceConfigStore()
        config = store.set_if_absent(source, payload)
        assert store.get(source) is config
    """

    def __init__(self) -> None:
        self._configs: dict[Hashable, DeviceConfig] = {}
        self._lock = threading.Lock()

    def get(self, source: Hashable) -> DeviceConfig | None:
        with self._lock:
            return self._configs.get(source)

    def set_if_absent(self, source: Hashable, payload: Any) -> DeviceConfig:
        """Return the record for ``source``, parsing ``payload`` only if there is none.

        Raises:
            ConfigDecodeError: if a new record was needed and ``payload``
                could not be parsed. Nothing is stored in that case.
        """
        with self._lock:
            existing = self._configs.get(source)
            if existing is not None:
                return existing
            config = parse_device_config(payload)
            self._configs[source] = config
        logger.info(
            "Configured source %r: %s (%s, preset %s)",
            source, config.serial_number or "?", config.mac_addr or "?", config.preset or "?",
        )
        return config

    def replace(self, source: Hashable, payload: Any) -> DeviceConfig:
        """Parse ``payload`` and overwrite any record for ``source``.

        On a parse error the previous record is kept.
        """
        config = parse_device_config(payload)
        with self._lock:
            self._configs[source] = config
        logger.info("Reconfigured source %r: preset %s", source, config.preset or "?")
        return config

    def evict(self, source: Hashable) -> DeviceConfig | None:
        with self._lock:
            return self._configs.pop(source, None)

    def clear(self) -> None:
        with self._lock:
            self._configs.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._configs)

    def __contains__(self, source: object) -> bool:
        with self._lock:
            return source in self._configs
