"""DeviceConfig: the decoded ``/muse/config`` record for one headband."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError


class ConfigDecodeError(ValueError):
    """Raised when a ``/muse/config`` payload cannot be parsed."""


class DeviceConfig(BaseModel):
    """Device identity and acquisition settings reported by muse-io.

    Field names match the payload keys one-to-one. Keys missing from the
    payload keep the defaults below; unknown keys are ignored. Numbers
    sent as strings are coerced, non-finite numbers are rejected.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        allow_inf_nan=False,
        coerce_numbers_to_str=True,
    )

    # Identity
    mac_addr: str = ""
    serial_number: str = ""
    preset: str = ""

    # Layout and units
    eeg_channel_layout: str = ""
    eeg_units: str = ""
    acc_units: str = ""

    # Feature flags
    filters_enabled: bool = False
    battery_data_enabled: bool = False
    compression_enabled: bool = False
    acc_data_enabled: bool = False
    drlref_data_enabled: bool = False
    error_data_enabled: bool = False

    # Tuning
    notch_frequency_hz: int = 0
    eeg_sample_frequency_hz: int = 0
    eeg_output_frequency_hz: int = 0
    eeg_channel_count: int = 0
    eeg_samples_bitwidth: int = 0
    eeg_downsample: int = 0
    afe_gain: int = 0
    battery_percent_remaining: int = 0
    battery_millivolts: int = 0
    acc_sample_frequency_hz: int = 0
    drlref_sample_frequency_hz: int = 0

    # Conversion factors
    eeg_conversion_factor: float = 0.0
    drlref_conversion_factor: float = 0.0
    acc_conversion_factor: float = 0.0

    @property
    def channel_labels(self) -> list[str]:
        """EEG channel names, e.g. ``["TP9", "FP1", "FP2", "TP10"]``."""
        return self.eeg_channel_layout.split()


def parse_device_config(payload: str | bytes | dict[str, Any]) -> DeviceConfig:
    """Build a DeviceConfig from a ``/muse/config`` payload.

    ``payload`` is the JSON text muse-io sends as the message's first
    argument, or an already-decoded mapping.

    Raises:
        ConfigDecodeError: if the payload is not a JSON object or a known
            field holds a value of the wrong type.
    """
    try:
        if isinstance(payload, (str, bytes, bytearray)):
            return DeviceConfig.model_validate_json(payload)
        return DeviceConfig.model_validate(payload)
    except ValidationError as e:
        raise ConfigDecodeError(f"invalid config payload: {e}") from e
