# tests/core/test_config.py
"""
Tests for the Config class: secret loading and validation.
"""

import os
from unittest.mock import patch

import pytest

from kubestats.core.config import Config


class TestGetSecret:
    """Tests for the Config._get_secret method."""

    def test_get_secret_from_env_var(self):
        with patch.dict(os.environ, {"TEST_SECRET": "env_value"}):
            assert Config._get_secret("TEST_SECRET") == "env_value"

    def test_get_secret_with_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert Config._get_secret("NONEXISTENT_SECRET", default="default_value") == "default_value"

    def test_get_secret_from_file(self):
        with patch("kubestats.core.config.os.path.exists") as mock_exists:
            mock_exists.return_value = True
            with patch("builtins.open", create=True) as mock_open:
                mock_open.return_value.__enter__.return_value.read.return_value = "file_value\n"
                assert Config._get_secret("TEST_SECRET") == "file_value"
            mock_exists.assert_called_with("/etc/kubestats/secrets/TEST_SECRET")

    def test_get_secret_permission_error(self):
        with patch("kubestats.core.config.os.path.exists", return_value=True):
            with patch("builtins.open", side_effect=PermissionError("denied")):
                with pytest.raises(PermissionError, match="permission denied"):
                    Config._get_secret("TEST_SECRET")


class TestValidateInstance:
    def _config(self, **overrides):
        cfg = Config()
        for key, value in overrides.items():
            setattr(cfg, key, value)
        return cfg

    def test_defaults_are_valid(self):
        self._config().validate_instance()

    def test_rejects_unknown_scheme(self):
        with pytest.raises(ValueError, match="KUBELET_SCHEME"):
            self._config(KUBELET_SCHEME="ftp").validate_instance()

    def test_rejects_out_of_range_port(self):
        with pytest.raises(ValueError, match="KUBELET_PORT"):
            self._config(KUBELET_PORT=70000).validate_instance()

    @pytest.mark.parametrize("interval", ["5x", "m5", "", "0s"])
    def test_rejects_bad_interval(self, interval):
        with pytest.raises(ValueError, match="SCRAPE_INTERVAL"):
            self._config(SCRAPE_INTERVAL=interval).validate_instance()
