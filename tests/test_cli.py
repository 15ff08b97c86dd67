"""Tests for the dbtargets command line."""

from __future__ import annotations

from pathlib import Path

import pytest

from dbtargets import cli
from dbtargets import config as config_module
from dbtargets.config import DIR_CONFIG_NAME


@pytest.fixture(autouse=True)
def _isolated_global_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_module, "GLOBAL_CONFIG_FILE", tmp_path / "missing" / "config.toml")


def _write(directory: Path, content: str) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / DIR_CONFIG_NAME).write_text(content)


def test_cli_prints_merged_targets(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    root = tmp_path / "schemas"
    _write(root, 'host = "db1:3307"\n')
    _write(root / "shop", 'schema = "shop"\n')
    _write(root / "billing", 'schema = "billing"\n')

    exit_code = cli.main(["--dir", str(root)])

    assert exit_code == 0
    assert capsys.readouterr().out.splitlines() == ["db1:3307 billing", "db1:3307 shop"]


def test_cli_overrides_take_precedence(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write(tmp_path / "shop", 'host = "db1"\nschema = "shop"\n')

    exit_code = cli.main(["--dir", str(tmp_path), "--host", "db2", "--schema", "audit"])

    assert exit_code == 0
    assert capsys.readouterr().out.splitlines() == ["db2 audit"]


def test_cli_reports_config_errors(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = cli.main(["--dir", str(tmp_path / "missing")])

    assert exit_code == 1
    assert "dbtargets: error: Not a directory" in capsys.readouterr().err


def test_arg_parser_defaults_are_zero_values() -> None:
    args = cli.build_arg_parser().parse_args([])

    assert (args.dir, args.host, args.port, args.user, args.password, args.schema) == (".", "", 0, "", "", "")
