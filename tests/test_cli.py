"""Tests for the corpse command line interface."""

import re

import pytest
from typer.testing import CliRunner

from exquisite_corpse import cli

from .conftest import TestSessionLocal

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_database(monkeypatch):
    monkeypatch.setattr(cli, "get_session_local", lambda: TestSessionLocal)
    monkeypatch.setattr(cli, "configure_logging", lambda settings: None)


def _create(lines: int = 5) -> str:
    result = runner.invoke(cli.app, ["create", "--lines", str(lines)])
    assert result.exit_code == 0, result.output
    match = re.search(r"([A-Za-z0-9_-]{12})\s+\(", result.output)
    assert match, result.output
    return match.group(1)


def test_create_and_list():
    poem_id = _create(7)

    result = runner.invoke(cli.app, ["list"])

    assert result.exit_code == 0
    assert poem_id in result.output
    assert "1/7" in result.output


def test_create_rejects_bad_line_count():
    result = runner.invoke(cli.app, ["create", "--lines", "4"])
    assert result.exit_code == 1
    assert "INVALID_ARGUMENT" in result.output


def test_add_show_and_reveal():
    poem_id = _create(5)

    for version in range(4):
        result = runner.invoke(
            cli.app, ["add", "--version", str(version), "--", poem_id, f"glass birds line {version}"]
        )
        assert result.exit_code == 0, result.output

    assert "Poem complete" in result.output

    shown = runner.invoke(cli.app, ["show", "--", poem_id])
    assert shown.exit_code == 0
    assert "glass birds line 0" not in shown.output

    revealed = runner.invoke(cli.app, ["reveal", "--", poem_id])
    assert revealed.exit_code == 0
    assert "glass birds line 3" in revealed.output


def test_add_with_stale_version():
    poem_id = _create(5)
    runner.invoke(cli.app, ["add", "--version", "0", "--", poem_id, "first"])

    result = runner.invoke(cli.app, ["add", "--version", "0", "--", poem_id, "second"])

    assert result.exit_code == 1
    assert "VERSION_CONFLICT" in result.output


def test_show_unknown_poem():
    result = runner.invoke(cli.app, ["show", "doesnotexist"])
    assert result.exit_code == 1
    assert "NOT_FOUND" in result.output
