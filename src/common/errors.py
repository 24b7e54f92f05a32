from __future__ import annotations

from typing import Optional


class MigrationError(RuntimeError):
    """Base error for the SecureString migration."""


class StoreError(MigrationError):
    """Parameter Store call failed (network, auth, throttling, rejection)."""

    def __init__(self, message: str, *, operation: Optional[str] = None, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.operation = operation
        self.code = code


class MissingValueError(MigrationError):
    """A fetched parameter has no decrypted value to write back."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Parameter {name} has no decrypted value; refusing to write it")
        self.name = name


class ConfigError(MigrationError):
    """Required configuration is missing or invalid."""
