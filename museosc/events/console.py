"""PrintingListener: print every sample category to stdout."""

from __future__ import annotations

import time

import numpy as np

from ..device.record import DeviceConfig
from .base import SampleListener


def _fmt(values: np.ndarray) -> str:
    return "\t".join(f"{v:.3f}" if isinstance(v, float) else str(v) for v in values.tolist())


class PrintingListener(SampleListener):
    """Prints one line per sample, for checking a headband is streaming."""

    def __init__(self, show_eeg: bool = True):
        self.show_eeg = show_eeg

    def _print(self, label: str, text: str) -> None:
        print(f"  [{time.strftime('%H:%M:%S')}] {label}: {text}")

    def on_eeg(self, config: DeviceConfig, eeg: np.ndarray) -> None:
        if self.show_eeg:
            self._print("EEG", _fmt(eeg))

    def on_eeg_with_timestamps(
        self, config: DeviceConfig, eeg: np.ndarray, timestamps: np.ndarray
    ) -> None:
        if self.show_eeg:
            self._print("EEG", f"{_fmt(eeg)}\tts={timestamps.tolist()}")

    def on_accel(
        self, config: DeviceConfig, accel: np.ndarray, timestamps: np.ndarray | None
    ) -> None:
        self._print("Accel", _fmt(accel))

    def on_blink(self, config: DeviceConfig, blink: int) -> None:
        self._print("Blink", f"{config.serial_number or 'muse'} blinked")

    def on_alpha(self, config: DeviceConfig, alpha: np.ndarray) -> None:
        self._print("Alpha relative", _fmt(alpha))

    def on_beta(self, config: DeviceConfig, beta: np.ndarray) -> None:
        self._print("Beta relative", _fmt(beta))

    def on_theta(self, config: DeviceConfig, theta: np.ndarray) -> None:
        self._print("Theta relative", _fmt(theta))

    def on_delta(self, config: DeviceConfig, delta: np.ndarray) -> None:
        self._print("Delta relative", _fmt(delta))

    def on_battery(self, config: DeviceConfig, battery: np.ndarray) -> None:
        self._print("Battery", _fmt(battery))

    def on_mellow(self, config: DeviceConfig, mellow: np.ndarray) -> None:
        self._print("Mellow", _fmt(mellow))

    def on_concentration(self, config: DeviceConfig, concentration: np.ndarray) -> None:
        self._print("Concentration", _fmt(concentration))
