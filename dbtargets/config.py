"""Directory-based target configuration loading."""

from __future__ import annotations

import logging
import os
import tomllib
from argparse import Namespace
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel

from .errors import ConfigError
from .flags import ParsedOverrides, parse_overrides
from .targets import Target, TargetList

LOG = logging.getLogger(__name__)

GLOBAL_CONFIG_FILE = Path.home() / ".config" / "dbtargets" / "config.toml"
DIR_CONFIG_NAME = ".dbtargets.toml"

_STRING_KEYS = ("host", "user", "password", "schema", "driver")


class TargetConfig(BaseModel):
    """Target values from one config file; ``None`` means not set there."""

    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    schema_name: str | None = None
    driver: str | None = None

    def layered_over(self, base: TargetConfig) -> TargetConfig:
        """Return a copy where values set here win over ``base``."""

        updates = self.model_dump(exclude_none=True)
        return base.model_copy(update=updates)

    def to_target(self) -> Target:
        target = Target(
            host=self.host or "",
            port=self.port or 0,
            user=self.user or "",
            password=self.password or "",
            schema=self.schema_name or "",
        )
        if self.driver:
            target.driver = self.driver
        return target


@dataclass
class Config:
    """Everything one command invocation needs to resolve its targets."""

    global_files: list[Path] = field(default_factory=list)
    global_flags: ParsedOverrides = field(default_factory=ParsedOverrides)
    command_flags: Namespace = field(default_factory=Namespace)

    @classmethod
    def from_namespace(cls, namespace: Namespace, *, global_file: Path | None = None) -> Config:
        """Extract the global overrides from parsed command-line flags."""

        path = GLOBAL_CONFIG_FILE if global_file is None else global_file
        files = [path] if path.is_file() else []
        return cls(global_files=files, global_flags=parse_overrides(namespace), command_flags=namespace)

    @property
    def directory(self) -> Path:
        return Path(self.global_flags.path or ".")

    def load_targets(self) -> TargetList:
        """Load targets under the selected directory and merge the overrides."""

        base = TargetConfig()
        for path in self.global_files:
            base = load_file(path).layered_over(base)
        targets = load_targets(self.directory, base=base)
        targets.merge_overrides(self.global_flags)
        return targets


def load_file(path: Path) -> TargetConfig:
    """Read one TOML config file; a missing file yields an empty config."""

    try:
        with path.open("rb") as handle:
            raw = tomllib.load(handle)
    except FileNotFoundError:
        return TargetConfig()
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Unable to read {path}: {exc}") from exc
    return TargetConfig(**_read_target_values(raw, path))


def load_targets(
    root: Path,
    *,
    base: TargetConfig | None = None,
    global_file: Path | None = None,
) -> TargetList:
    """Walk ``root`` and build one target per directory naming a schema.

    Values layer global file < ancestor directories < the directory itself.
    When no directory names a schema, ``root`` yields a single target.
    """

    if base is None:
        base = load_file(GLOBAL_CONFIG_FILE if global_file is None else global_file)
    if not root.is_dir():
        raise ConfigError(f"Not a directory: {root}")

    layered: dict[Path, TargetConfig] = {}
    targets = TargetList()
    for current, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(name for name in dirnames if not name.startswith("."))
        directory = Path(current)
        config = base if directory == root else layered[directory.parent]
        if DIR_CONFIG_NAME in filenames:
            config = load_file(directory / DIR_CONFIG_NAME).layered_over(config)
            if config.schema_name:
                targets.append(config.to_target())
                LOG.debug("Loaded target", extra={"directory": str(directory)})
        layered[directory] = config

    if not targets:
        targets.append(layered[root].to_target())
    return targets


def _read_target_values(raw: dict[str, object], path: Path) -> dict[str, object]:
    values: dict[str, object] = {}
    for key in _STRING_KEYS:
        value = raw.get(key)
        if value is None:
            continue
        if isinstance(value, str):
            values["schema_name" if key == "schema" else key] = value
        else:
            LOG.warning("Ignoring non-string config value", extra={"key": key, "path": str(path)})
    port = raw.get("port")
    if isinstance(port, int) and not isinstance(port, bool):
        values["port"] = port
    elif port is not None:
        LOG.warning("Ignoring non-integer config value", extra={"key": "port", "path": str(path)})
    return values


__all__ = [
    "Config",
    "DIR_CONFIG_NAME",
    "GLOBAL_CONFIG_FILE",
    "TargetConfig",
    "load_file",
    "load_targets",
]
