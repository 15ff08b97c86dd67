"""Tests for DSN derivation."""

from __future__ import annotations

from dbtargets.dsn import base_dsn, dsn, host_and_optional_port
from dbtargets.targets import Target


def test_base_dsn_without_password() -> None:
    target = Target(host="h", port=3306, user="root")

    assert base_dsn(target) == "root@tcp(h:3306)/"
    assert target.base_dsn() == "root@tcp(h:3306)/"


def test_base_dsn_with_password() -> None:
    target = Target(host="h", port=3306, user="root", password="p")

    assert target.base_dsn() == "root:p@tcp(h:3306)/"


def test_dsn_appends_schema() -> None:
    target = Target(host="h", port=3307, user="app", password="p", schema="shop")

    assert dsn(target) == "app:p@tcp(h:3307)/shop"
    assert target.dsn() == "app:p@tcp(h:3307)/shop"


def test_dsn_builds_from_unresolved_target() -> None:
    target = Target(host="h", user="root")

    assert target.dsn() == "root@tcp(h:0)/"


def test_host_and_optional_port() -> None:
    assert host_and_optional_port(Target(host="h", port=3306)) == "h"
    assert Target(host="h", port=3307).host_and_optional_port() == "h:3307"
