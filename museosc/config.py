"""Receiver configuration: dataclass-based config with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ReceiverConfig:
    # Transport
    host: str = "0.0.0.0"
    port: int = 5000                    # muse-io default
    udp: bool = True

    # Device configs
    refresh_config: bool = False        # replace stored config on every /muse/config

    # Logging
    log_level: str = "INFO"

    # LSL outlet
    lsl_stream_name: str = "MuseEEG"
    lsl_stream_type: str = "EEG"
    lsl_sample_rate: float = 220.0
    lsl_source_id: str = "museosc-eeg"
    lsl_channel_unit: str = "microvolts"
