"""Connection-string derivations for merged targets."""

from __future__ import annotations

from typing import Protocol

DEFAULT_PORT = 3306


class DsnFields(Protocol):
    """Attributes the DSN helpers read from a target."""

    host: str
    port: int
    user: str
    password: str
    schema: str


def base_dsn(target: DsnFields) -> str:
    """Return the DSN without any trailing schema name."""

    if target.password:
        credentials = f"{target.user}:{target.password}"
    else:
        credentials = target.user
    return f"{credentials}@tcp({target.host}:{target.port})/"


def dsn(target: DsnFields) -> str:
    return base_dsn(target) + target.schema


def host_and_optional_port(target: DsnFields) -> str:
    """Display form of the server address; the default port is omitted."""

    if target.port == DEFAULT_PORT:
        return target.host
    return f"{target.host}:{target.port}"


__all__ = ["DEFAULT_PORT", "DsnFields", "base_dsn", "dsn", "host_and_optional_port"]
