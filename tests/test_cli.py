"""Tests for the tiergate CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from tiergate.cli import main
from tiergate.models.role import Role


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.delenv("TIERGATE_HOME", raising=False)
    monkeypatch.delenv("TIERGATE_DEFAULT_ROLE", raising=False)
    return tmp_path / "home"


def test_roles_json(runner: CliRunner, home: Path):
    result = runner.invoke(main, ["--home", str(home), "roles", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert [item["role"] for item in data] == [r.value for r in Role]


def test_roles_table(runner: CliRunner, home: Path):
    result = runner.invoke(main, ["--home", str(home), "roles"])
    assert result.exit_code == 0
    assert "Roles" in result.output


def test_check_allow(runner: CliRunner, home: Path):
    result = runner.invoke(
        main,
        ["--home", str(home), "check", "borrower-cfo", "loan_application", "update",
         "--amount", "5000000"],
    )
    assert result.exit_code == 0
    assert "ALLOW borrower-cfo update loan_application" in result.output


def test_check_deny(runner: CliRunner, home: Path):
    result = runner.invoke(
        main,
        ["--home", str(home), "check", "borrower-cfo", "loan_application", "update",
         "--amount", "5000001"],
    )
    assert result.exit_code == 1
    assert "DENY borrower-cfo update loan_application" in result.output


def test_check_ownership_flag(runner: CliRunner, home: Path):
    args = ["--home", str(home), "check", "broker", "loan_application", "create"]
    assert runner.invoke(main, [*args, "--owned"]).exit_code == 0
    assert runner.invoke(main, [*args, "--not-owned"]).exit_code == 1
    assert runner.invoke(main, args).exit_code == 1


def test_check_unknown_role(runner: CliRunner, home: Path):
    result = runner.invoke(main, ["--home", str(home), "check", "nobody", "documents", "read"])
    assert result.exit_code == 2


def test_current_and_switch(runner: CliRunner, home: Path):
    result = runner.invoke(main, ["--home", str(home), "current"])
    assert result.exit_code == 0
    assert "borrower-owner (Borrower - Owner/CEO)" in result.output

    result = runner.invoke(main, ["--home", str(home), "switch", "lender-csr"])
    assert result.exit_code == 0
    assert "lender-csr" in result.output

    result = runner.invoke(main, ["--home", str(home), "current"])
    assert "lender-csr (Lender - Customer Service Rep)" in result.output


def test_switch_invalid_role(runner: CliRunner, home: Path):
    runner.invoke(main, ["--home", str(home), "switch", "vendor"])
    result = runner.invoke(main, ["--home", str(home), "switch", "vendor-ceo"])
    assert result.exit_code == 1

    result = runner.invoke(main, ["--home", str(home), "current"])
    assert "vendor (Vendor)" in result.output


def test_verify(runner: CliRunner, home: Path):
    result = runner.invoke(main, ["--home", str(home), "verify"])
    assert result.exit_code == 0
    assert f"{len(Role)} roles" in result.output
