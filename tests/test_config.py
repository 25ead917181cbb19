"""Tests for Settings.from_env()."""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import ConfigError, DEFAULT_MODEL_ID, Settings


class TestSettingsFromEnv:
    def test_defaults(self):
        s = Settings.from_env({})
        assert s.osc_host == "127.0.0.1"
        assert s.osc_port == 11000
        assert s.osc_response_port == 11001
        assert s.osc_delay_ms == 100.0
        assert s.api_key is None
        assert s.model_id == DEFAULT_MODEL_ID

    def test_overrides(self):
        s = Settings.from_env({
            "SIDEKICK_OSC_HOST": "192.168.1.20",
            "SIDEKICK_OSC_PORT": "9000",
            "SIDEKICK_OSC_DELAY_MS": "250",
            "GOOGLE_API_KEY": "abc",
            "SIDEKICK_MODEL": "gemini-2.5-pro",
        })
        assert s.osc_host == "192.168.1.20"
        assert s.osc_port == 9000
        assert s.osc_delay_ms == 250.0
        assert s.api_key == "abc"
        assert s.model_id == "gemini-2.5-pro"

    def test_blank_values_fall_back(self):
        s = Settings.from_env({"SIDEKICK_OSC_PORT": "  ", "SIDEKICK_MODEL": ""})
        assert s.osc_port == 11000
        assert s.model_id == DEFAULT_MODEL_ID

    def test_bad_port(self):
        with pytest.raises(ConfigError, match="SIDEKICK_OSC_PORT"):
            Settings.from_env({"SIDEKICK_OSC_PORT": "eleven"})

    def test_negative_delay(self):
        with pytest.raises(ConfigError, match="SIDEKICK_OSC_DELAY_MS"):
            Settings.from_env({"SIDEKICK_OSC_DELAY_MS": "-5"})


class TestWithOverrides:
    def test_none_ignored(self):
        s = Settings().with_overrides(osc_host=None, osc_port=9001)
        assert s.osc_host == "127.0.0.1"
        assert s.osc_port == 9001
