"""
===============================================================================
QUATERNION ALGEBRA - Configuration Test Suite
===============================================================================
Tests for QuaternionConfig validation, YAML loading, the active
configuration switch and the package logging setup.
===============================================================================
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import logging
from pathlib import Path

import pytest

import quaternion_algebra
from quaternion_algebra import Quaternion
from quaternion_algebra.config import (
    DEFAULT_CONFIG_PATH,
    QuaternionConfig,
    get_config,
    load_config,
    set_config,
    setup_logging,
)
from quaternion_algebra.core.constants import (
    DEFAULT_COMPARISON_TOLERANCE,
    DEFAULT_LOG_ZERO_POLICY,
    VERSION,
)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def restore_config():
    """Restore the active configuration after the test."""
    previous = get_config()
    yield
    set_config(previous)


@pytest.fixture
def package_logger():
    """Yield the package logger and remove any handlers the test installed."""
    logger = logging.getLogger('quaternion_algebra')
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        if getattr(handler, '_quaternion_algebra', False):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)


# =============================================================================
# Test: Version metadata
# =============================================================================

def test_version_exposed():
    assert quaternion_algebra.__version__ == VERSION == "0.1"


# =============================================================================
# Test: QuaternionConfig
# =============================================================================

class TestQuaternionConfig:
    """Defaults and validation."""

    def test_defaults(self):
        config = QuaternionConfig()
        assert config.comparison_tolerance == DEFAULT_COMPARISON_TOLERANCE
        assert config.log_zero_policy == DEFAULT_LOG_ZERO_POLICY == "raise"

    @pytest.mark.parametrize("tolerance", [0.0, -1e-9])
    def test_non_positive_tolerance(self, tolerance):
        with pytest.raises(ValueError, match="comparison_tolerance"):
            QuaternionConfig(comparison_tolerance=tolerance)

    def test_hash_rounding_not_configurable(self):
        """Hash rounding is a fixed constant, not a config setting."""
        with pytest.raises(TypeError):
            QuaternionConfig(hash_decimals=2)
        with pytest.raises(ValueError, match="hash_decimals"):
            QuaternionConfig.from_dict({"hash_decimals": 2})

    def test_unknown_policy(self):
        with pytest.raises(ValueError, match="log_zero_policy"):
            QuaternionConfig(log_zero_policy="ignore")

    def test_frozen(self):
        config = QuaternionConfig()
        with pytest.raises(AttributeError):
            config.log_zero_policy = "zero"

    def test_from_dict_flat(self):
        config = QuaternionConfig.from_dict({"log_zero_policy": "nan"})
        assert config.log_zero_policy == "nan"

    def test_from_dict_nested(self):
        config = QuaternionConfig.from_dict(
            {"quaternion": {"comparison_tolerance": "1e-6"}})
        assert config.comparison_tolerance == 1e-6

    @pytest.mark.parametrize("data", [None, {}, {"quaternion": None}])
    def test_from_dict_empty(self, data):
        assert QuaternionConfig.from_dict(data) == QuaternionConfig()

    def test_from_dict_unknown_keys(self):
        with pytest.raises(ValueError, match="precision"):
            QuaternionConfig.from_dict({"precision": 128})


# =============================================================================
# Test: YAML loading
# =============================================================================

class TestLoadConfig:
    """Loading settings from YAML files."""

    def test_load_default_file(self):
        assert DEFAULT_CONFIG_PATH.is_file()
        assert load_config() == QuaternionConfig()

    def test_default_file_ships_with_package(self):
        """The default settings live inside the package, not the checkout."""
        package_dir = Path(quaternion_algebra.__file__).resolve().parent
        assert DEFAULT_CONFIG_PATH.parent == package_dir / 'data'

    def test_load_custom_file(self, tmp_path, caplog):
        path = tmp_path / "custom.yaml"
        path.write_text(
            "quaternion:\n"
            "  comparison_tolerance: 1.0e-6\n"
            "  log_zero_policy: zero\n"
        )
        with caplog.at_level(logging.INFO, logger='quaternion_algebra'):
            config = load_config(path)
        assert config == QuaternionConfig(1e-6, "zero")
        assert "Loading configuration from" in caplog.text

    def test_load_invalid_file(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("quaternion:\n  log_zero_policy: maybe\n")
        with pytest.raises(ValueError, match="log_zero_policy"):
            load_config(path)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")


# =============================================================================
# Test: Active configuration
# =============================================================================

class TestActiveConfig:
    """set_config changes the defaults used by the value type."""

    def test_set_config_returns_previous(self, restore_config):
        original = get_config()
        new = QuaternionConfig(log_zero_policy="nan")
        assert set_config(new) is original
        assert get_config() is new

    def test_set_config_rejects_other_types(self, restore_config):
        with pytest.raises(TypeError, match="QuaternionConfig"):
            set_config({"log_zero_policy": "zero"})

    def test_tolerance_drives_equality(self, restore_config):
        a = Quaternion(1.0, 0.0, 0.0, 0.0)
        b = Quaternion(1.0, 1e-7, 0.0, 0.0)
        set_config(QuaternionConfig(comparison_tolerance=1e-9))
        assert a != b
        set_config(QuaternionConfig(comparison_tolerance=1e-6))
        assert a == b

    def test_set_membership_survives_config_change(self, restore_config):
        """Changing the configuration never changes a stored value's hash."""
        q = Quaternion(1.23456, 0.0, 0.0, 0.0)
        stored = {q}
        before = hash(q)
        set_config(QuaternionConfig(comparison_tolerance=1e-2))
        assert hash(q) == before
        assert q in stored

    def test_policy_drives_log_of_zero(self, restore_config):
        set_config(QuaternionConfig(log_zero_policy="raise"))
        with pytest.raises(ValueError):
            Quaternion.zero().log()
        set_config(QuaternionConfig(log_zero_policy="zero"))
        assert Quaternion.zero().log().is_zero()

    def test_explicit_policy_overrides_config(self, restore_config):
        set_config(QuaternionConfig(log_zero_policy="zero"))
        with pytest.raises(ValueError):
            Quaternion.zero().log(zero_policy="raise")


# =============================================================================
# Test: Logging
# =============================================================================

class TestLogging:
    """Package logger setup and degenerate-case records."""

    def test_setup_logging_file(self, tmp_path, package_logger):
        log_file = tmp_path / "quaternion.log"
        logger = setup_logging(logging.DEBUG, log_file=log_file)
        assert logger is package_logger

        Quaternion.zero().signum()
        for handler in logger.handlers:
            handler.flush()

        text = log_file.read_text()
        assert "[DEBUG] quaternion_algebra.core.quaternion" in text
        assert "signum() of the zero quaternion" in text

    def test_setup_logging_replaces_handlers(self, package_logger):
        setup_logging("INFO")
        setup_logging("WARNING")
        installed = [h for h in package_logger.handlers
                     if getattr(h, '_quaternion_algebra', False)]
        assert len(installed) == 1
        assert package_logger.level == logging.WARNING

    def test_degenerate_inverse_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger='quaternion_algebra'):
            Quaternion.zero().inverse()
        assert "inverse() of the zero quaternion" in caplog.text

    def test_log_of_zero_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger='quaternion_algebra'):
            Quaternion.zero().log(zero_policy="nan")
        assert "log() of the zero quaternion under policy 'nan'" in caplog.text
