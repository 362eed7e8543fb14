"""Custom exceptions for depnorm."""


class DepnormError(Exception):
    """Base exception for all depnorm operations."""


class ConfigurationError(DepnormError):
    """Raised when configuration validation fails."""


class FileProcessingError(DepnormError):
    """Raised when a lockfile or manifest cannot be read."""


class LockfileParseError(DepnormError):
    """Raised when a lockfile cannot be parsed."""


class VersionParseError(DepnormError, ValueError):
    """Raised when a version string does not match its ecosystem's grammar.

    Attributes:
        system: Name of the versioning system (e.g. "PyPI", "npm")
        version: The offending input string
        reason: Human-readable explanation
    """

    def __init__(self, system: str, version: str, reason: str) -> None:
        self.system = system
        self.version = version
        self.reason = reason
        super().__init__(f"{system} version parse error: {version}: {reason}")
