"""Tests for configuration management."""

import pytest
from pydantic import ValidationError

from zonewatch.config import Settings

ENV_VARS = [
    "ZONEWATCH_LOG_LEVEL",
    "ZONEWATCH_COLLAPSE",
    "ZONEWATCH_DEGENERATE_POLICY",
    "ZONEWATCH_ZSCORE_THRESHOLD",
    "ZONEWATCH_MODIFIED_ZSCORE_THRESHOLD",
    "ZONEWATCH_IQR_FACTOR",
    "ZONEWATCH_NORMALITY_ALPHA",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No ZONEWATCH_* variables and no .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_settings_has_defaults(clean_env):
    """Settings should have conventional defaults."""
    settings = Settings()

    assert settings.log_level == "INFO"
    assert settings.collapse is False
    assert settings.degenerate_policy == "zone_c"
    assert settings.zscore_threshold == 3.0
    assert settings.modified_zscore_threshold == 3.5
    assert settings.iqr_factor == 1.5
    assert settings.normality_alpha == 0.05


def test_settings_loads_from_env(clean_env, monkeypatch):
    """Settings should load ZONEWATCH_* environment variables."""
    monkeypatch.setenv("ZONEWATCH_COLLAPSE", "true")
    monkeypatch.setenv("ZONEWATCH_DEGENERATE_POLICY", "RAISE")
    monkeypatch.setenv("ZONEWATCH_IQR_FACTOR", "3")

    settings = Settings()

    assert settings.collapse is True
    assert settings.degenerate_policy == "raise"
    assert settings.iqr_factor == 3.0


def test_settings_loads_from_env_file(clean_env):
    """Settings should read a local .env file."""
    (clean_env / ".env").write_text("ZONEWATCH_NORMALITY_ALPHA=0.01\n")

    assert Settings().normality_alpha == 0.01


def test_settings_normalizes_log_level(clean_env, monkeypatch):
    """Log level is upper-cased."""
    monkeypatch.setenv("ZONEWATCH_LOG_LEVEL", "debug")
    assert Settings().log_level == "DEBUG"


def test_settings_validates_log_level(clean_env, monkeypatch):
    """Settings should validate log level."""
    monkeypatch.setenv("ZONEWATCH_LOG_LEVEL", "INVALID")

    with pytest.raises(ValidationError) as exc_info:
        Settings()

    assert "log_level must be one of" in str(exc_info.value)


def test_settings_validates_degenerate_policy(clean_env):
    """Unknown degenerate policy is rejected."""
    with pytest.raises(ValidationError) as exc_info:
        Settings(degenerate_policy="ignore")

    assert "degenerate_policy must be" in str(exc_info.value)


@pytest.mark.parametrize(
    "field,value",
    [
        ("zscore_threshold", 0),
        ("zscore_threshold", -1.0),
        ("zscore_threshold", float("inf")),
        ("modified_zscore_threshold", float("nan")),
        ("iqr_factor", 0),
        ("normality_alpha", 0),
        ("normality_alpha", 1.0),
    ],
)
def test_settings_rejects_bad_thresholds(clean_env, field, value):
    """Thresholds must be finite and in range."""
    with pytest.raises(ValidationError):
        Settings(**{field: value})
