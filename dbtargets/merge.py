"""Apply command-line overrides and defaults onto a target."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from .dsn import DEFAULT_PORT
from .flags import ParsedOverrides

if TYPE_CHECKING:
    from .targets import Target

LOG = logging.getLogger(__name__)

_PORT_PATTERN = re.compile(r"[+-]?[0-9]+")

DEFAULT_USER = "root"
DEFAULT_HOST = "127.0.0.1"


def merge_overrides(target: "Target", overrides: ParsedOverrides | None) -> "Target":
    """Merge overrides into ``target`` in place, then fill in defaults.

    Overrides holding their zero value never replace a file-supplied value.
    """

    if overrides is not None:
        _apply_overrides(target, overrides)

    if not target.user:
        target.user = DEFAULT_USER
    if not target.host:
        target.host = DEFAULT_HOST
    if target.port == 0:
        target.host, target.port = split_host_port(target.host)
        if not target.host:
            target.host = DEFAULT_HOST
        if target.port == 0:
            target.port = DEFAULT_PORT
    return target


def split_host_port(host: str) -> tuple[str, int]:
    """Split ``host:port`` on the first colon.

    Returns port 0 when there is no colon or the port part is not numeric.
    """

    if ":" not in host:
        return host, 0
    host_part, port_part = host.split(":", 1)
    return host_part, _parse_embedded_port(host_part, port_part)


def _parse_embedded_port(host: str, value: str) -> int:
    # A non-numeric port falls back to "unspecified" instead of failing.
    if _PORT_PATTERN.fullmatch(value) is None:
        LOG.debug("Ignoring non-numeric port in host", extra={"host": host, "port": value})
        return 0
    return int(value)


def _apply_overrides(target: "Target", overrides: ParsedOverrides) -> None:
    if overrides.host:
        target.host = overrides.host
    if overrides.port:
        target.port = overrides.port
    if overrides.user:
        target.user = overrides.user
    if overrides.password:
        target.password = overrides.password
    if overrides.schema:
        target.schema = overrides.schema


__all__ = ["DEFAULT_HOST", "DEFAULT_USER", "merge_overrides", "split_host_port"]
