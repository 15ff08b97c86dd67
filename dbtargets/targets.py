"""Logical connection targets and bulk instance hydration."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Iterable

from . import dsn as dsn_builder
from .flags import ParsedOverrides
from .instances import Instance, InstanceFactory, InstanceRegistry, create_instance
from .merge import merge_overrides


class InstanceSlot:
    """Holds a target's instance handle; empty until first needed."""

    __slots__ = ("_instance", "_lock")

    def __init__(self) -> None:
        self._instance: Instance | None = None
        self._lock = threading.Lock()

    @property
    def is_set(self) -> bool:
        return self._instance is not None

    def get_or_create(self, factory: InstanceFactory, driver: str, base_dsn: str) -> Instance:
        """Return the held instance, building it exactly once if empty."""

        instance = self._instance
        if instance is not None:
            return instance
        with self._lock:
            if self._instance is None:
                self._instance = factory(driver, base_dsn)
            return self._instance

    def set(self, instance: Instance) -> None:
        with self._lock:
            self._instance = instance


@dataclass(slots=True, eq=False)
class Target:
    """One logical (server, schema) configuration.

    ``host`` may carry an embedded ``:port`` until overrides are merged.
    """

    host: str = ""
    port: int = 0
    user: str = ""
    password: str = ""
    schema: str = ""
    driver: str = "mysql"
    _slot: InstanceSlot = field(default_factory=InstanceSlot, init=False, repr=False)

    def base_dsn(self) -> str:
        return dsn_builder.base_dsn(self)

    def dsn(self) -> str:
        return dsn_builder.dsn(self)

    def host_and_optional_port(self) -> str:
        return dsn_builder.host_and_optional_port(self)

    def merge_overrides(self, overrides: ParsedOverrides | None) -> Target:
        """Merge command-line overrides into this target, then apply defaults."""

        return merge_overrides(self, overrides)

    @property
    def has_instance(self) -> bool:
        return self._slot.is_set

    def instance(self, factory: InstanceFactory = create_instance) -> Instance:
        """Return this target's instance, creating a private one if none was assigned."""

        return self._slot.get_or_create(factory, self.driver, self.base_dsn())

    def db(self) -> Any:
        """Connection to this target's schema."""

        return self.instance().connect(self.schema)

    def _assign_instance(self, instance: Instance) -> None:
        self._slot.set(instance)


class TargetList(list[Target]):
    """Ordered targets sharing instance handles across schemas."""

    def __init__(self, targets: Iterable[Target] = ()) -> None:
        super().__init__(targets)

    def merge_overrides(self, overrides: ParsedOverrides | None) -> None:
        for target in self:
            target.merge_overrides(overrides)

    def set_instances(
        self,
        factory: InstanceFactory = create_instance,
        registry: InstanceRegistry | None = None,
    ) -> InstanceRegistry:
        """Assign every target the shared instance for its base DSN.

        Targets that differ only by schema end up pointing at the same
        instance object. Run after merging and before any connection.
        """

        if registry is None:
            registry = InstanceRegistry(factory)
        for target in self:
            target._assign_instance(registry.get_or_create(target.driver, target.base_dsn()))
        return registry


__all__ = ["InstanceSlot", "Target", "TargetList"]
