"""Typed extraction of the global command-line overrides."""

from __future__ import annotations

from argparse import Namespace
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidFlagValueError

# Option name -> expected Python type, in extraction order.
OVERRIDE_OPTIONS: Mapping[str, type] = {
    "dir": str,
    "host": str,
    "port": int,
    "user": str,
    "password": str,
    "schema": str,
}

_FIELD_FOR_OPTION = {
    "dir": "path",
    "schema": "schema_name",
}


class ParsedOverrides(BaseModel):
    """Override values supplied on the command line.

    Each field holds its type's zero value when the option was not given.
    """

    model_config = ConfigDict(frozen=True, strict=True, populate_by_name=True)

    path: str = ""
    host: str = ""
    port: int = 0
    user: str = ""
    password: str = ""
    schema_name: str = Field(default="", alias="schema")

    @property
    def schema(self) -> str:  # type: ignore[override]
        return self.schema_name


def parse_overrides(flags: Namespace | Mapping[str, Any]) -> ParsedOverrides:
    """Read the six global options out of a parsed flag set.

    Fails on the first option that is missing or not of its expected type.
    """

    source = vars(flags) if isinstance(flags, Namespace) else flags
    values: dict[str, Any] = {}
    for option, expected in OVERRIDE_OPTIONS.items():
        value = source.get(option)
        if not _is_instance(value, expected):
            raise InvalidFlagValueError(option)
        values[_FIELD_FOR_OPTION.get(option, option)] = value
    return ParsedOverrides(**values)


def _is_instance(value: object, expected: type) -> bool:
    if value is None:
        return False
    if expected is int and isinstance(value, bool):
        return False
    return isinstance(value, expected)


__all__ = ["OVERRIDE_OPTIONS", "ParsedOverrides", "parse_overrides"]
