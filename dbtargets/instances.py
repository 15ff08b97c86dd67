"""Database instance handles and the registry that shares them."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Iterator, Protocol, runtime_checkable

import pymysql

from .errors import InstanceError

LOG = logging.getLogger(__name__)

_PORT_PATTERN = re.compile(r"-?[0-9]+")


@dataclass(frozen=True, slots=True)
class DsnParts:
    """Server coordinates recovered from a base DSN."""

    user: str
    password: str
    host: str
    port: int


def parse_base_dsn(value: str) -> DsnParts:
    """Reverse ``base_dsn``; the trailing slash must not carry a schema.

    The address starts at the last ``@tcp(``, so user names and passwords may
    contain ``@``. Credentials split on their first colon.
    """

    credentials, marker, address = value.rpartition("@tcp(")
    if not marker or not address.endswith(")/"):
        raise InstanceError(f"Malformed base DSN: {value!r}")
    host, colon, port = address[:-2].rpartition(":")
    if not colon or _PORT_PATTERN.fullmatch(port) is None:
        raise InstanceError(f"Malformed base DSN: {value!r}")
    user, _, password = credentials.partition(":")
    return DsnParts(user=user, password=password, host=host, port=int(port))


class Instance:
    """One physical database server, shared by every schema living on it.

    Creating an instance performs no I/O. Connections are opened on demand by
    ``connect`` and cached per schema.
    """

    SUPPORTED_DRIVERS = frozenset({"mysql"})

    def __init__(self, driver: str, base_dsn: str, *, connect_timeout: float = 5.0) -> None:
        self.driver = driver
        self.base_dsn = base_dsn
        self._connect_timeout = connect_timeout
        self._connections: dict[str, Any] = {}

    def __repr__(self) -> str:
        address = self.base_dsn.rpartition("@")[2]
        return f"Instance(driver={self.driver!r}, address={address!r})"

    def connect(self, schema: str = "") -> Any:
        """Return a connection with ``schema`` as its default database."""

        cached = self._connections.get(schema)
        if cached is not None:
            return cached
        if self.driver not in self.SUPPORTED_DRIVERS:
            raise InstanceError(f"Unsupported driver '{self.driver}'")
        parts = parse_base_dsn(self.base_dsn)
        kwargs: dict[str, object] = {
            "host": parts.host,
            "port": parts.port,
            "user": parts.user,
            "connect_timeout": self._connect_timeout,
        }
        if parts.password:
            kwargs["password"] = parts.password
        if schema:
            kwargs["database"] = schema
        LOG.debug("Opening connection", extra={"host": parts.host, "schema": schema})
        try:
            connection = pymysql.connect(**kwargs)
        except pymysql.MySQLError as exc:
            raise InstanceError(
                f"Failed to connect to {parts.host}:{parts.port} (schema '{schema}'): {exc}"
            ) from exc
        self._connections[schema] = connection
        return connection

    def close(self) -> None:
        """Close every cached connection."""

        connections = list(self._connections.values())
        self._connections.clear()
        for connection in connections:
            try:
                connection.close()
            except pymysql.MySQLError:  # pragma: no cover - best effort
                LOG.debug("Ignoring error while closing connection", exc_info=True)


@runtime_checkable
class InstanceFactory(Protocol):
    """Callable that builds an instance handle from a driver and base DSN."""

    def __call__(self, driver: str, dsn: str) -> Instance: ...


def create_instance(driver: str, dsn: str) -> Instance:
    """Default instance factory."""

    return Instance(driver, dsn)


class InstanceRegistry:
    """Caller-owned cache of instance handles keyed by base DSN.

    Not safe for concurrent mutation; callers serialize access.
    """

    def __init__(self, factory: InstanceFactory = create_instance) -> None:
        self._factory = factory
        self._instances: dict[str, Instance] = {}

    def get_or_create(self, driver: str, base_dsn: str) -> Instance:
        instance = self._instances.get(base_dsn)
        if instance is None:
            instance = self._factory(driver, base_dsn)
            self._instances[base_dsn] = instance
            LOG.debug("Registered instance", extra={"driver": driver})
        elif getattr(instance, "driver", driver) != driver:
            # Keyed by base DSN alone; the first driver registered wins.
            LOG.debug(
                "Reusing instance registered with another driver",
                extra={"driver": driver, "registered_driver": instance.driver},
            )
        return instance

    def instances(self) -> tuple[Instance, ...]:
        """Distinct handles in registration order."""

        return tuple(self._instances.values())

    def __contains__(self, base_dsn: object) -> bool:
        return base_dsn in self._instances

    def __len__(self) -> int:
        return len(self._instances)

    def __iter__(self) -> Iterator[str]:
        return iter(self._instances)


__all__ = [
    "DsnParts",
    "Instance",
    "InstanceFactory",
    "InstanceRegistry",
    "create_instance",
    "parse_base_dsn",
]
