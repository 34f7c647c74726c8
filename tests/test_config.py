"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from tiergate.config import Config
from tiergate.models.role import Role


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TIERGATE_HOME", "TIERGATE_DEFAULT_ROLE", "TIERGATE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_defaults(tmp_path: Path):
    config = Config.load(tmp_path)
    assert config.home_path == tmp_path
    assert config.default_role == "borrower-owner"
    assert config.log_level == "INFO"
    assert config.slot_key == "userRole"
    assert config.slot_db_path == tmp_path / "state.db"


def test_save_and_load(config: Config):
    config.default_role = "lender-cco"
    config.log_level = "DEBUG"
    config.wal_mode = False
    config.save()

    loaded = Config.load(config.home_path)
    assert loaded.default_role == "lender-cco"
    assert loaded.log_level == "DEBUG"
    assert loaded.wal_mode is False


def test_unknown_yaml_keys_ignored(tmp_path: Path):
    (tmp_path / "config.yaml").write_text(yaml.dump({"nonsense": 1, "slot_key": "role"}))
    config = Config.load(tmp_path)
    assert config.slot_key == "role"
    assert not hasattr(config, "nonsense")


def test_env_overrides_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    (tmp_path / "config.yaml").write_text(yaml.dump({"default_role": "vendor"}))
    monkeypatch.setenv("TIERGATE_DEFAULT_ROLE", "broker")
    monkeypatch.setenv("TIERGATE_LOG_LEVEL", "WARNING")
    config = Config.load(tmp_path)
    assert config.default_role == "broker"
    assert config.log_level == "WARNING"


def test_env_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TIERGATE_HOME", str(tmp_path / "elsewhere"))
    config = Config.load()
    assert config.home_path == tmp_path / "elsewhere"


def test_fallback_role(config: Config):
    assert config.fallback_role == Role.BORROWER_OWNER
    config.default_role = "lender-admin"
    assert config.fallback_role == Role.LENDER_ADMIN
    config.default_role = "nobody"
    assert config.fallback_role == Role.BORROWER_OWNER
