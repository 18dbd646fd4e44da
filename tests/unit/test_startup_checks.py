"""Tests for fail-fast startup validation."""

from __future__ import annotations

import logging

import pytest

from formation_docs.core.config import AppSettings, AuthConfig, FetchConfig, PDFConfig
from formation_docs.core.startup_checks import validate_settings


class TestValidateSettings:
    def test_defaults_require_admin_key(self) -> None:
        with pytest.raises(ValueError, match="ADMIN_KEY"):
            validate_settings(AppSettings())

    def test_auth_disabled_passes(self) -> None:
        validate_settings(AppSettings(auth=AuthConfig(enabled=False)))

    def test_auth_without_key_rejected(self) -> None:
        settings = AppSettings(auth=AuthConfig(enabled=True, admin_key=""))
        with pytest.raises(ValueError, match="ADMIN_KEY"):
            validate_settings(settings)

    def test_auth_with_key_passes(self) -> None:
        validate_settings(AppSettings(auth=AuthConfig(enabled=True, admin_key="k")))

    def test_value_column_left_of_label_rejected(self) -> None:
        settings = AppSettings(auth=AuthConfig(enabled=False), pdf=PDFConfig(label_x=200, value_x=50))
        with pytest.raises(ValueError, match="VALUE_X"):
            validate_settings(settings)

    def test_fetch_disabled_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="formation_docs.core.startup_checks"):
            validate_settings(AppSettings(auth=AuthConfig(enabled=False), fetch=FetchConfig(enabled=False)))
        assert "will not be downloaded" in caplog.text
