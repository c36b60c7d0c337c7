"""Unit tests for muse-io OSC message decoding."""

import numpy as np
import pytest

from museosc.device.record import DeviceConfig
from museosc.events.base import SampleKind
from museosc.osc.protocol import (
    ACCEL_ADDRESS,
    ALPHA_ADDRESS,
    BATTERY_ADDRESS,
    BLINK_ADDRESS,
    CONCENTRATION_ADDRESS,
    CONFIG_ADDRESS,
    DECODERS,
    EEG_ADDRESS,
    MELLOW_ADDRESS,
    NO_BLINK,
    blink_value,
    classify,
    decode_accel,
    decode_battery,
    decode_blink,
    decode_eeg,
    decode_message,
)

CONFIG = DeviceConfig(serial_number="1234-ABCD")


class TestClassify:
    def test_known_addresses(self):
        assert classify(EEG_ADDRESS) is decode_eeg
        assert classify(ACCEL_ADDRESS) is decode_accel
        assert classify(BATTERY_ADDRESS) is decode_battery
        assert classify(BLINK_ADDRESS) is decode_blink

    def test_unknown_address(self):
        assert classify("/muse/unknown") is None
        assert decode_message(CONFIG, "/muse/unknown", [1.0]) is None

    def test_no_wildcards(self):
        """Matching is exact; prefixes and patterns don't match."""
        assert classify("/muse/eeg/") is None
        assert classify("/muse/*") is None
        assert classify("/muse/elements/alpha") is None

    def test_config_is_not_a_data_message(self):
        assert classify(CONFIG_ADDRESS) is None

    def test_table_covers_every_category(self):
        kinds = {
            decoder(CONFIG, [1]).kind for decoder in DECODERS.values()
        }
        assert kinds == set(SampleKind)


class TestEEG:
    def test_four_args_no_timestamp(self):
        sample = decode_eeg(CONFIG, [800.5, 810.0, 820.25, 830.0])
        assert sample.kind is SampleKind.EEG
        assert sample.values.dtype == np.float32
        assert sample.values.tolist() == [800.5, 810.0, 820.25, 830.0]
        assert sample.timestamps is None
        assert sample.handler_name == "on_eeg"

    def test_six_args_with_timestamp(self):
        sample = decode_eeg(CONFIG, [1.0, 2.0, 3.0, 4.0, 1418249130, 125000])
        assert sample.values.tolist() == [1.0, 2.0, 3.0, 4.0]
        assert sample.timestamps.tolist() == [1418249130, 125000]
        assert sample.handler_name == "on_eeg_with_timestamps"

    def test_int_arguments_become_floats(self):
        sample = decode_eeg(CONFIG, [1, 2, 3, 4])
        assert sample.values.tolist() == [1.0, 2.0, 3.0, 4.0]

    def test_five_args_pads_timestamp(self):
        sample = decode_eeg(CONFIG, [1.0, 2.0, 3.0, 4.0, 99])
        assert sample.timestamps.tolist() == [99, 0]

    def test_extra_args_ignored(self):
        sample = decode_eeg(CONFIG, [1.0, 2.0, 3.0, 4.0, 10, 20, 30])
        assert sample.values.tolist() == [1.0, 2.0, 3.0, 4.0]
        assert sample.timestamps.tolist() == [10, 20]

    def test_short_message_zero_padded(self):
        sample = decode_eeg(CONFIG, [1.0, 2.0])
        assert sample.values.tolist() == [1.0, 2.0, 0.0, 0.0]
        assert sample.timestamps is None

    def test_config_attached(self):
        assert decode_eeg(CONFIG, [0.0] * 4).config is CONFIG


class TestAccel:
    def test_three_args_no_timestamp(self):
        sample = decode_accel(CONFIG, [-0.5, 0.25, 1.0])
        assert sample.kind is SampleKind.ACCEL
        assert sample.values.tolist() == [-0.5, 0.25, 1.0]
        assert sample.timestamps is None

    def test_five_args_with_timestamp(self):
        sample = decode_accel(CONFIG, [-0.5, 0.25, 1.0, 1418249130, 500])
        assert sample.values.tolist() == [-0.5, 0.25, 1.0]
        assert sample.timestamps.tolist() == [1418249130, 500]

    def test_accel_uses_single_callback(self):
        """Accel goes to on_accel with or without timestamps."""
        assert decode_accel(CONFIG, [0, 0, 0]).handler_name == "on_accel"
        assert decode_accel(CONFIG, [0, 0, 0, 1, 2]).handler_name == "on_accel"


class TestBlink:
    def test_blink_detected(self):
        sample = decode_blink(CONFIG, [1])
        assert sample.kind is SampleKind.BLINK
        assert sample.values.tolist() == [1]

    @pytest.mark.parametrize("args", [[0], [], [1, 1], [2]])
    def test_no_blink(self, args):
        assert decode_blink(CONFIG, args) is None

    def test_wrong_shape_gives_sentinel(self):
        assert blink_value([]) == NO_BLINK
        assert blink_value([1, 1]) == NO_BLINK
        assert blink_value([1]) == 1


class TestVariableLength:
    def test_band_power_sized_to_args(self):
        sample = decode_message(CONFIG, ALPHA_ADDRESS, [0.25, 0.5, 0.75])
        assert sample.kind is SampleKind.ALPHA
        assert sample.values.dtype == np.float32
        assert sample.values.tolist() == [0.25, 0.5, 0.75]

    def test_band_power_empty(self):
        sample = decode_message(CONFIG, ALPHA_ADDRESS, [])
        assert len(sample.values) == 0

    def test_battery_single(self):
        assert decode_battery(CONFIG, [72]).values.tolist() == [72]

    def test_battery_pair(self):
        sample = decode_battery(CONFIG, [72, 3800])
        assert sample.kind is SampleKind.BATTERY
        assert sample.values.tolist() == [72, 3800]
        assert np.issubdtype(sample.values.dtype, np.integer)


class TestExperimental:
    def test_mellow_single_value(self):
        sample = decode_message(CONFIG, MELLOW_ADDRESS, [0.75])
        assert sample.kind is SampleKind.MELLOW
        assert sample.values.tolist() == [0.75]

    def test_concentration_has_own_kind(self):
        sample = decode_message(CONFIG, CONCENTRATION_ADDRESS, [0.5])
        assert sample.kind is SampleKind.CONCENTRATION
        assert sample.handler_name == "on_concentration"

    @pytest.mark.parametrize("args", [[], [0.5, 0.25]])
    def test_wrong_shape_defaults_to_zero(self, args):
        sample = decode_message(CONFIG, MELLOW_ADDRESS, args)
        assert sample.values.tolist() == [0.0]
