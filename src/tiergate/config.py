"""Tiergate configuration management."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from tiergate.models.role import Role


@dataclass
class Config:
    """Tiergate configuration."""

    home_path: Path = field(default_factory=lambda: Path.home() / ".tiergate")
    default_role: str = Role.BORROWER_OWNER.value
    log_level: str = "INFO"
    slot_key: str = "userRole"
    wal_mode: bool = True

    @classmethod
    def load(cls, home_path: Path | None = None) -> Config:
        """Load config from env vars, then the YAML file, then defaults."""
        config = cls()

        if home_path:
            config.home_path = home_path

        env_home = os.environ.get("TIERGATE_HOME")
        if env_home:
            config.home_path = Path(env_home)

        # Load YAML config if exists
        config_file = config.home_path / "config.yaml"
        if config_file.exists():
            with open(config_file) as f:
                data = yaml.safe_load(f) or {}
            for key, value in data.items():
                if key == "home_path" or not hasattr(config, key):
                    continue
                expected_type = type(getattr(config, key))
                setattr(config, key, expected_type(value))

        # Env wins over the file
        env_role = os.environ.get("TIERGATE_DEFAULT_ROLE")
        if env_role:
            config.default_role = env_role

        env_log = os.environ.get("TIERGATE_LOG_LEVEL")
        if env_log:
            config.log_level = env_log

        return config

    @property
    def slot_db_path(self) -> Path:
        return self.home_path / "state.db"

    @property
    def fallback_role(self) -> Role:
        """The configured default role, or borrower-owner if it is not a real role."""
        try:
            return Role(self.default_role)
        except ValueError:
            return Role.BORROWER_OWNER

    def save(self) -> None:
        """Save current config to YAML."""
        self.home_path.mkdir(parents=True, exist_ok=True)
        config_file = self.home_path / "config.yaml"
        data = {
            "default_role": self.default_role,
            "log_level": self.log_level,
            "slot_key": self.slot_key,
            "wal_mode": self.wal_mode,
        }
        with open(config_file, "w") as f:
            yaml.dump(data, f, default_flow_style=False)
