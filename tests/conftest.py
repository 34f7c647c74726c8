"""Shared test fixtures for tiergate."""

from __future__ import annotations

from pathlib import Path

import pytest

from tiergate.config import Config
from tiergate.core.broadcaster import RoleBroadcaster
from tiergate.storage.memory_slot import MemoryRoleSlot
from tiergate.storage.sqlite_slot import SQLiteRoleSlot


@pytest.fixture
def tmp_db(tmp_path: Path) -> Path:
    return tmp_path / "state.db"


@pytest.fixture
def slot() -> MemoryRoleSlot:
    return MemoryRoleSlot()


@pytest.fixture
def sqlite_slot(tmp_db: Path) -> SQLiteRoleSlot:
    s = SQLiteRoleSlot(tmp_db)
    s.initialize()
    yield s
    s.close()


@pytest.fixture
def broadcaster(slot: MemoryRoleSlot) -> RoleBroadcaster:
    b = RoleBroadcaster(slot)
    yield b
    b.close()


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config(home_path=tmp_path)
