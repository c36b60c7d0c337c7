"""Muse-IO OSC protocol: address patterns and per-category argument decoding."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import numpy as np

from ..device.record import DeviceConfig
from ..events.base import Sample, SampleKind

# Address patterns emitted by muse-io
CONFIG_ADDRESS = "/muse/config"
EEG_ADDRESS = "/muse/eeg"
ACCEL_ADDRESS = "/muse/acc"
BATTERY_ADDRESS = "/muse/batt"
BLINK_ADDRESS = "/muse/elements/blink"
ALPHA_ADDRESS = "/muse/elements/alpha_relative"
BETA_ADDRESS = "/muse/elements/beta_relative"
THETA_ADDRESS = "/muse/elements/theta_relative"
DELTA_ADDRESS = "/muse/elements/delta_relative"
MELLOW_ADDRESS = "/muse/elements/experimental/mellow"
CONCENTRATION_ADDRESS = "/muse/elements/experimental/concentration"

# Payload layout
EEG_CHANNELS = 4
ACCEL_AXES = 3
TIMESTAMP_FIELDS = 2  # (seconds, microseconds)

MUSE_BLINK = 1
NO_BLINK = -1  # blink message with the wrong shape; never forwarded

FLOAT_DTYPE = np.float32
INT_DTYPE = np.int64

Args = Sequence[Any]
Decoder = Callable[[DeviceConfig, Args], "Sample | None"]


def _floats(args: Args, n: int) -> np.ndarray:
    """First ``n`` args as floats, zero-padded if the message is short."""
    out = np.zeros(n, dtype=FLOAT_DTYPE)
    for i, value in enumerate(args[:n]):
        out[i] = float(value)
    return out


def _ints(args: Args, n: int) -> np.ndarray:
    out = np.zeros(n, dtype=INT_DTYPE)
    for i, value in enumerate(args[:n]):
        out[i] = int(value)
    return out


def _with_timestamps(kind: SampleKind, width: int) -> Decoder:
    """Fixed float payload, plus a timestamp pair when the message is longer.

    There is no tag for the timestamp: ``ffff`` is plain EEG, ``ffffii``
    carries one. Only the argument count tells them apart.
    """
    def decode(config: DeviceConfig, args: Args) -> Sample:
        values = _floats(args, width)
        timestamps = None
        if len(args) > width:
            timestamps = _ints(args[width:], TIMESTAMP_FIELDS)
        return Sample(kind, config, values, timestamps)
    return decode


def _float_array(kind: SampleKind) -> Decoder:
    def decode(config: DeviceConfig, args: Args) -> Sample:
        return Sample(kind, config, np.asarray([float(v) for v in args], dtype=FLOAT_DTYPE))
    return decode


def _single_float(kind: SampleKind) -> Decoder:
    def decode(config: DeviceConfig, args: Args) -> Sample:
        value = float(args[0]) if len(args) == 1 else 0.0
        return Sample(kind, config, np.asarray([value], dtype=FLOAT_DTYPE))
    return decode


def decode_battery(config: DeviceConfig, args: Args) -> Sample:
    return Sample(
        SampleKind.BATTERY, config, np.asarray([int(v) for v in args], dtype=INT_DTYPE)
    )


def blink_value(args: Args) -> int:
    """The blink flag, or NO_BLINK unless the message has exactly one argument."""
    if len(args) != 1:
        return NO_BLINK
    return int(args[0])


def decode_blink(config: DeviceConfig, args: Args) -> Sample | None:
    value = blink_value(args)
    if value != MUSE_BLINK:
        return None
    return Sample(SampleKind.BLINK, config, np.asarray([value], dtype=INT_DTYPE))


decode_eeg = _with_timestamps(SampleKind.EEG, EEG_CHANNELS)
decode_accel = _with_timestamps(SampleKind.ACCEL, ACCEL_AXES)

DECODERS: dict[str, Decoder] = {
    EEG_ADDRESS: decode_eeg,
    ACCEL_ADDRESS: decode_accel,
    BATTERY_ADDRESS: decode_battery,
    BLINK_ADDRESS: decode_blink,
    ALPHA_ADDRESS: _float_array(SampleKind.ALPHA),
    BETA_ADDRESS: _float_array(SampleKind.BETA),
    THETA_ADDRESS: _float_array(SampleKind.THETA),
    DELTA_ADDRESS: _float_array(SampleKind.DELTA),
    MELLOW_ADDRESS: _single_float(SampleKind.MELLOW),
    CONCENTRATION_ADDRESS: _single_float(SampleKind.CONCENTRATION),
}


def classify(address: str) -> Decoder | None:
    """Decoder for ``address``, or None for addresses we don't handle."""
    return DECODERS.get(address)


def decode_message(config: DeviceConfig, address: str, args: Args) -> Sample | None:
    """Decode one data message. Returns None if there is nothing to forward."""
    decoder = classify(address)
    if decoder is None:
        return None
    return decoder(config, args)
