"""Exception types raised by tiergate."""

from __future__ import annotations


class TiergateError(Exception):
    """Base class for tiergate errors."""


class InvalidRoleError(TiergateError, ValueError):
    """Raised when a role identifier is outside the closed role set."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Unknown role: {value!r}")


class RegistryError(TiergateError):
    """Raised when the role registry violates a construction invariant."""
