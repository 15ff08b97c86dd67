"""Exception types shared across dbtargets modules."""

from __future__ import annotations


class DbTargetsError(Exception):
    """Base class for user-facing dbtargets failures."""


class InvalidFlagValueError(DbTargetsError):
    """Raised when a command-line option cannot be read as its expected type."""

    def __init__(self, option: str) -> None:
        super().__init__(f"Invalid value for --{option} option")
        self.option = option


class ConfigError(DbTargetsError):
    """Raised when a target config file cannot be read or parsed."""


class InstanceError(DbTargetsError):
    """Raised when an instance handle cannot be built or connected."""


__all__ = ["ConfigError", "DbTargetsError", "InstanceError", "InvalidFlagValueError"]
