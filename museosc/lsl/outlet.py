"""LslEegOutlet: republish Muse EEG samples as a Lab Streaming Layer stream."""

from __future__ import annotations

import logging
import threading

import numpy as np
from pylsl import StreamInfo, StreamOutlet

from ..config import ReceiverConfig
from ..device.record import DeviceConfig
from ..events.base import SampleListener
from ..osc.protocol import EEG_CHANNELS

logger = logging.getLogger(__name__)

DEFAULT_LABELS = ["TP9", "FP1", "FP2", "TP10"]


class LslEegOutlet(SampleListener):
    """Listener that pushes every EEG sample to an LSL outlet.

    The outlet is created on the first EEG sample so the channel labels
    can come from the device's reported layout.

    Usage::

        outlet = LslEegOutlet(ReceiverConfig())
        receiver.register_listener(outlet)
    """

    def __init__(self, config: ReceiverConfig | None = None):
        self.config = config or ReceiverConfig()
        self.outlet: StreamOutlet | None = None
        self.labels: list[str] = []
        self.sample_rate: float | None = None
        self.samples_pushed = 0
        self._lock = threading.Lock()

    def _make_info(self, labels: list[str], sample_rate: float) -> StreamInfo:
        c = self.config
        info = StreamInfo(
            c.lsl_stream_name,
            c.lsl_stream_type,
            EEG_CHANNELS,
            sample_rate,
            "float32",
            c.lsl_source_id,
        )
        channels = info.desc().append_child("channels")
        for label in labels:
            (
                channels.append_child("channel")
                .append_child_value("label", label)
                .append_child_value("unit", c.lsl_channel_unit)
                .append_child_value("type", c.lsl_stream_type)
            )
        return info

    def _ensure_outlet(self, config: DeviceConfig) -> StreamOutlet:
        if self.outlet is None:
            labels = config.channel_labels
            if len(labels) != EEG_CHANNELS:
                labels = DEFAULT_LABELS
            # Device-reported rate wins over the configured fallback
            sample_rate = float(config.eeg_output_frequency_hz or self.config.lsl_sample_rate)
            self.labels = labels
            self.sample_rate = sample_rate
            self.outlet = StreamOutlet(self._make_info(labels, sample_rate))
            logger.info(
                "Created LSL outlet %r at %.1f Hz with channels %s",
                self.config.lsl_stream_name, sample_rate, labels,
            )
        return self.outlet

    def push(self, config: DeviceConfig, eeg: np.ndarray) -> None:
        with self._lock:
            outlet = self._ensure_outlet(config)
            outlet.push_sample(eeg.tolist())
            self.samples_pushed += 1

    def on_eeg(self, config: DeviceConfig, eeg: np.ndarray) -> None:
        self.push(config, eeg)

    def on_eeg_with_timestamps(
        self, config: DeviceConfig, eeg: np.ndarray, timestamps: np.ndarray
    ) -> None:
        self.push(config, eeg)

    def close(self) -> None:
        """Drop the outlet; the next EEG sample creates a new one."""
        with self._lock:
            self.outlet = None

    def have_consumers(self) -> bool:
        return self.outlet is not None and self.outlet.have_consumers()
