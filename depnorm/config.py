"""Configuration for lockfile parsing.

Options can be built directly or loaded from environment variables:

- DEPNORM_INCLUDE_TRANSITIVE: include dependencies that are only reachable
  through another dependency (default: false)
- DEPNORM_MAX_DEPTH: maximum nesting depth walked in nested lockfile trees
  (default: 64)
- DEPNORM_LOG_LEVEL: level for the package logger (default: unchanged)
"""

import os
from dataclasses import dataclass

from .exceptions import ConfigurationError
from .logging_config import logger, set_log_level

DEFAULT_MAX_DEPTH = 64

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ParseOptions:
    """Options shared by every lockfile parser."""

    include_transitive: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH

    def validate(self) -> None:
        """
        Validate option values.

        Raises:
            ConfigurationError: If an option is out of range
        """
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise ConfigurationError(f"max_depth must be an integer, got {self.max_depth!r}")
        if self.max_depth < 1:
            raise ConfigurationError(f"max_depth must be at least 1, got {self.max_depth}")


def evaluate_boolean(value: str) -> bool:
    """
    Evaluate string values as boolean.

    Args:
        value: String value to evaluate

    Returns:
        Boolean result
    """
    return value.lower() in ["true", "yes", "yeah", "1"]


def load_options() -> ParseOptions:
    """
    Load and validate parse options from environment variables.

    Returns:
        Validated options

    Raises:
        ConfigurationError: If an environment value is invalid
    """
    log_level = os.getenv("DEPNORM_LOG_LEVEL")
    if log_level:
        if log_level.upper() not in _LOG_LEVELS:
            raise ConfigurationError(f"Invalid DEPNORM_LOG_LEVEL: '{log_level}'")
        set_log_level(log_level)

    max_depth_env = os.getenv("DEPNORM_MAX_DEPTH")
    max_depth = DEFAULT_MAX_DEPTH
    if max_depth_env:
        try:
            max_depth = int(max_depth_env)
        except ValueError:
            raise ConfigurationError(f"DEPNORM_MAX_DEPTH must be an integer, got '{max_depth_env}'")

    options = ParseOptions(
        include_transitive=evaluate_boolean(os.getenv("DEPNORM_INCLUDE_TRANSITIVE", "False")),
        max_depth=max_depth,
    )
    options.validate()

    logger.debug(f"Loaded parse options: {options}")
    return options
