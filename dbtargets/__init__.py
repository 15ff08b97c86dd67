"""Connection target resolution for schema-management commands."""

from __future__ import annotations

from .errors import ConfigError, DbTargetsError, InstanceError, InvalidFlagValueError
from .flags import ParsedOverrides, parse_overrides
from .instances import Instance, InstanceRegistry, create_instance
from .merge import merge_overrides
from .targets import Target, TargetList

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "DbTargetsError",
    "Instance",
    "InstanceError",
    "InstanceRegistry",
    "InvalidFlagValueError",
    "ParsedOverrides",
    "Target",
    "TargetList",
    "__version__",
    "create_instance",
    "merge_overrides",
    "parse_overrides",
]
