"""Tests for command-line override extraction."""

from __future__ import annotations

from argparse import Namespace

import pytest

from dbtargets.errors import InvalidFlagValueError
from dbtargets.flags import ParsedOverrides, parse_overrides


def _flags(**overrides: object) -> dict[str, object]:
    flags: dict[str, object] = {
        "dir": ".",
        "host": "",
        "port": 0,
        "user": "",
        "password": "",
        "schema": "",
    }
    flags.update(overrides)
    return flags


def test_parse_overrides_reads_namespace() -> None:
    namespace = Namespace(**_flags(dir="schemas", host="db1", port=3307, user="app", password="pw", schema="shop"))

    parsed = parse_overrides(namespace)

    assert parsed.path == "schemas"
    assert parsed.host == "db1"
    assert parsed.port == 3307
    assert parsed.user == "app"
    assert parsed.password == "pw"
    assert parsed.schema == "shop"


def test_parse_overrides_accepts_mapping_with_zero_values() -> None:
    parsed = parse_overrides(_flags())

    assert parsed == ParsedOverrides(path=".")
    assert (parsed.host, parsed.port, parsed.user, parsed.password, parsed.schema) == ("", 0, "", "", "")


def test_parse_overrides_ignores_unrelated_flags() -> None:
    parsed = parse_overrides(Namespace(verbose=2, **_flags(host="db1")))

    assert parsed.host == "db1"


def test_parse_overrides_rejects_string_port() -> None:
    with pytest.raises(InvalidFlagValueError) as excinfo:
        parse_overrides(_flags(port="3307"))

    assert excinfo.value.option == "port"
    assert str(excinfo.value) == "Invalid value for --port option"


def test_parse_overrides_rejects_bool_port() -> None:
    with pytest.raises(InvalidFlagValueError) as excinfo:
        parse_overrides(_flags(port=True))

    assert excinfo.value.option == "port"


def test_parse_overrides_reports_first_missing_option() -> None:
    flags = _flags()
    del flags["dir"]
    del flags["user"]

    with pytest.raises(InvalidFlagValueError) as excinfo:
        parse_overrides(flags)

    assert excinfo.value.option == "dir"


def test_parse_overrides_rejects_non_string_schema() -> None:
    with pytest.raises(InvalidFlagValueError, match="--schema"):
        parse_overrides(_flags(schema=5))


def test_parsed_overrides_are_read_only() -> None:
    parsed = parse_overrides(_flags(host="db1"))

    with pytest.raises(Exception):
        parsed.host = "db2"  # type: ignore[misc]
