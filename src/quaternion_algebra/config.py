"""
===============================================================================
QUATERNION ALGEBRA - Configuration and Logging Setup
===============================================================================
Numerical settings that are a matter of policy rather than mathematics:

    comparison_tolerance -- absolute per-component tolerance used by ==
                            and Quaternion.isclose()
    log_zero_policy      -- what log() does with the zero quaternion:
                            "raise" (ValueError), "zero" or "nan"

Settings can be loaded from a YAML file (the quaternion_config.yaml shipped
in the package data/ directory by default), built from a dictionary, or
constructed directly. The active configuration is read by the value type;
arithmetic never writes it.
===============================================================================
"""

import logging
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from quaternion_algebra.core.constants import (
    DEFAULT_COMPARISON_TOLERANCE,
    DEFAULT_LOG_ZERO_POLICY,
    LOG_ZERO_POLICIES,
)

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_CONFIG_PATH = PACKAGE_DIR / 'data' / 'quaternion_config.yaml'

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


@dataclass(frozen=True)
class QuaternionConfig:
    """
    Numerical policy for the quaternion value type.

    Attributes:
        comparison_tolerance: Absolute tolerance on each component when two
                              quaternions are compared. Must be positive.
        log_zero_policy: Behaviour of log() for the zero quaternion, one of
                         "raise", "zero", "nan".
    """
    comparison_tolerance: float = DEFAULT_COMPARISON_TOLERANCE
    log_zero_policy: str = DEFAULT_LOG_ZERO_POLICY

    def __post_init__(self) -> None:
        if not self.comparison_tolerance > 0.0:
            raise ValueError(
                f"comparison_tolerance must be positive, "
                f"got {self.comparison_tolerance}"
            )
        if self.log_zero_policy not in LOG_ZERO_POLICIES:
            raise ValueError(
                f"log_zero_policy must be one of {LOG_ZERO_POLICIES}, "
                f"got {self.log_zero_policy!r}"
            )

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'QuaternionConfig':
        """
        Build a configuration from a mapping.

        Accepts either the flat settings or a document with the settings
        nested under a top-level ``quaternion`` key. Missing keys keep their
        defaults.

        Raises
        ------
        ValueError
            If the mapping contains unknown keys or invalid values.
        """
        if not data:
            return cls()
        if 'quaternion' in data:
            data = data['quaternion'] or {}

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(
                f"Unknown quaternion configuration keys: {', '.join(unknown)}"
            )

        kwargs = dict(data)
        if 'comparison_tolerance' in kwargs:
            kwargs['comparison_tolerance'] = float(kwargs['comparison_tolerance'])
        return cls(**kwargs)


def load_config(config_path: Optional[Union[str, Path]] = None) -> QuaternionConfig:
    """
    Load the quaternion configuration from a YAML file.

    Args:
        config_path: Path to YAML config. Defaults to
                     data/quaternion_config.yaml inside the package.

    Returns:
        The parsed QuaternionConfig.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    logger.info("Loading configuration from: %s", config_path)
    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)
    config = QuaternionConfig.from_dict(data)
    logger.debug("Loaded %s", config)
    return config


# =============================================================================
# ACTIVE CONFIGURATION
# =============================================================================

_active_config = QuaternionConfig()


def get_config() -> QuaternionConfig:
    """Return the configuration currently used by the value type."""
    return _active_config


def set_config(config: QuaternionConfig) -> QuaternionConfig:
    """
    Replace the active configuration.

    Returns the previous configuration so that callers (and tests) can
    restore it afterwards.
    """
    global _active_config

    if not isinstance(config, QuaternionConfig):
        raise TypeError(
            f"Expected QuaternionConfig, got {type(config).__name__}"
        )
    previous = _active_config
    _active_config = config
    logger.info("Active quaternion configuration set to %s", config)
    return previous


# =============================================================================
# LOGGING
# =============================================================================

def setup_logging(level: Union[int, str] = logging.INFO,
                  log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """
    Attach handlers to the package logger.

    The root logger is left alone; only the ``quaternion_algebra`` logger
    gets a stdout handler and, when ``log_file`` is given, a file handler.
    Calling this again replaces the handlers installed by a previous call.

    Args:
        level: Logging level name or number.
        log_file: Optional path of a log file (overwritten).

    Returns:
        The configured package logger.
    """
    package_logger = logging.getLogger('quaternion_algebra')
    for handler in list(package_logger.handlers):
        if getattr(handler, '_quaternion_algebra', False):
            package_logger.removeHandler(handler)
            handler.close()

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(logging.FileHandler(str(log_file), mode='w'))

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler._quaternion_algebra = True
        package_logger.addHandler(handler)

    package_logger.setLevel(level)
    return package_logger
