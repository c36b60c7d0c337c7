"""Sample types and the listener interface."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from ..device.record import DeviceConfig


class SampleKind(Enum):
    EEG = "eeg"
    ACCEL = "accel"
    BLINK = "blink"
    ALPHA = "alpha"
    BETA = "beta"
    THETA = "theta"
    DELTA = "delta"
    BATTERY = "battery"
    MELLOW = "mellow"
    CONCENTRATION = "concentration"


@dataclass(frozen=True, eq=False)
class Sample:
    """One decoded message, tagged with the config of the device that sent it."""

    kind: SampleKind
    config: DeviceConfig
    values: np.ndarray
    timestamps: np.ndarray | None = None

    @property
    def handler_name(self) -> str:
        """Name of the listener callback that receives this sample."""
        if self.kind is SampleKind.EEG and self.timestamps is not None:
            return "on_eeg_with_timestamps"
        return f"on_{self.kind.value}"

    def deliver(self, listener: object) -> bool:
        """Invoke the matching callback on ``listener``.

        Returns False without calling anything if the listener does not
        handle this kind of sample.
        """
        handler = getattr(listener, self.handler_name, None)
        if not callable(handler):
            return False

        if self.kind is SampleKind.BLINK:
            handler(self.config, int(self.values[0]))
        elif self.kind is SampleKind.ACCEL or self.handler_name == "on_eeg_with_timestamps":
            handler(self.config, self.values, self.timestamps)
        else:
            handler(self.config, self.values)
        return True

    def __repr__(self) -> str:
        values = np.array2string(self.values, precision=3, separator=", ")
        if self.timestamps is None:
            return f"Sample({self.kind.name}, {values})"
        return f"Sample({self.kind.name}, {values}, ts={self.timestamps.tolist()})"


class SampleListener:
    """Base class for sample consumers.

    Override the callbacks you care about. The registry only delivers a
    sample to listeners that define the matching callback, so a plain
    object with e.g. just ``on_blink`` works too.

    Callbacks run on the transport thread and should return quickly: a
    slow callback delays every listener registered after it.
    """

    def on_eeg(self, config: DeviceConfig, eeg: np.ndarray) -> None:
        pass

    def on_eeg_with_timestamps(
        self, config: DeviceConfig, eeg: np.ndarray, timestamps: np.ndarray
    ) -> None:
        pass

    def on_accel(
        self, config: DeviceConfig, accel: np.ndarray, timestamps: np.ndarray | None
    ) -> None:
        pass

    def on_blink(self, config: DeviceConfig, blink: int) -> None:
        pass

    def on_alpha(self, config: DeviceConfig, alpha: np.ndarray) -> None:
        pass

    def on_beta(self, config: DeviceConfig, beta: np.ndarray) -> None:
        pass

    def on_theta(self, config: DeviceConfig, theta: np.ndarray) -> None:
        pass

    def on_delta(self, config: DeviceConfig, delta: np.ndarray) -> None:
        pass

    def on_battery(self, config: DeviceConfig, battery: np.ndarray) -> None:
        pass

    def on_mellow(self, config: DeviceConfig, mellow: np.ndarray) -> None:
        pass

    def on_concentration(self, config: DeviceConfig, concentration: np.ndarray) -> None:
        pass
