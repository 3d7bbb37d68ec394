"""
Key references for signing transactions.

A key is only ever referenced by name (plus keyring backend); raw key
material stays inside the node binary's keyring.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .errors import ConfigurationError


class KeyringBackend(str, Enum):
    OS = "os"
    FILE = "file"
    TEST = "test"

    @classmethod
    def parse(cls, value: str) -> "KeyringBackend":
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(b.value for b in cls)
            raise ConfigurationError(
                f"Unknown keyring backend {value!r} (expected one of: {choices})"
            ) from None


@dataclass(frozen=True)
class KeyRef:
    """Identifies which keyring entry signs a transaction."""

    name: str
    backend: Optional[KeyringBackend] = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ConfigurationError("Signer key name must not be empty")

    def __str__(self) -> str:
        if self.backend is None:
            return self.name
        return f"{self.name} ({self.backend.value})"


@dataclass(frozen=True)
class Key:
    """A keyring entry as reported by ``<binary> keys list``."""

    name: str
    address: str
    backend: Optional[KeyringBackend] = None

    @classmethod
    def from_dict(cls, payload: dict[str, Any], backend: Optional[KeyringBackend] = None) -> "Key":
        return cls(name=payload["name"], address=payload["address"], backend=backend)

    def ref(self) -> KeyRef:
        return KeyRef(self.name, self.backend)

    def __str__(self) -> str:
        return f"{self.name} {self.address}"
