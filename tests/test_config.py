"""
Tests for the environment-driven settings layer.
"""

import pytest
from pydantic import ValidationError

from gaze_fusion.configs import AppSettings, ListenerSettings, SnapshotSettings
from gaze_fusion.core import ResetPolicy


class TestDefaults:

    def test_listener_defaults_to_port_9000_on_all_interfaces(self):
        settings = AppSettings()
        assert settings.listener.host == "0.0.0.0"
        assert settings.listener.port == 9000
        assert settings.listener.address_prefix == "/avatar/parameters"

    def test_fusion_and_staleness_defaults(self):
        settings = AppSettings()
        assert settings.fusion.reset_policy is ResetPolicy.ALL
        assert settings.snapshot.staleness_threshold_s == 1.0
        assert not settings.dummy.enabled


class TestEnvironment:

    def test_nested_values_from_env(self, monkeypatch):
        monkeypatch.setenv("GAZE_FUSION__LISTENER__PORT", "9015")
        monkeypatch.setenv("GAZE_FUSION__FUSION__RESET_POLICY", "keep_vertical")
        monkeypatch.setenv("GAZE_FUSION__LOGGING__LEVEL", "DEBUG")

        settings = AppSettings()
        assert settings.listener.port == 9015
        assert settings.fusion.reset_policy is ResetPolicy.KEEP_VERTICAL
        assert settings.logging.level == "DEBUG"

    def test_invalid_port_is_rejected(self, monkeypatch):
        monkeypatch.setenv("GAZE_FUSION__LISTENER__PORT", "70000")
        with pytest.raises(ValidationError):
            AppSettings()


class TestValidation:

    def test_threshold_must_be_positive(self):
        with pytest.raises(ValidationError):
            SnapshotSettings(staleness_threshold_s=0)

    def test_unknown_reset_policy_is_rejected(self):
        with pytest.raises(ValidationError):
            AppSettings(fusion={"reset_policy": "none"})

    def test_ephemeral_port_allowed(self):
        assert ListenerSettings(port=0).port == 0
