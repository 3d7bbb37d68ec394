"""
Network capability set.

A network is anything able to answer five questions: which chain id,
which binary, which RPC endpoint, which gas settings and which signer.
``NetworkDescriptor`` is the plain-data implementation used by every
preset and by the ``custom`` network.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable
from urllib.parse import urlparse

from ..errors import ConfigurationError
from ..key import KeyRef
from .gas import GasConfig

ENDPOINT_SCHEMES = ("http", "https", "tcp")


@runtime_checkable
class Network(Protocol):
    def chain_id(self) -> str:
        ...

    def binary(self) -> str:
        ...

    def rpc_endpoint(self) -> str:
        ...

    def gas_config(self) -> GasConfig:
        ...

    def signer(self) -> KeyRef:
        ...


def network_home(network: Network) -> Optional[Path]:
    """Return the optional ``home()`` of ``network``, or None if it has none."""
    home = getattr(network, "home", None)
    if home is None:
        return None
    return home()


def validate_endpoint(endpoint: str) -> str:
    parsed = urlparse(endpoint)
    if parsed.scheme not in ENDPOINT_SCHEMES:
        raise ConfigurationError(
            f"RPC endpoint must use one of {', '.join(ENDPOINT_SCHEMES)}: {endpoint!r}"
        )
    if not parsed.hostname:
        raise ConfigurationError(f"RPC endpoint has no host: {endpoint!r}")
    try:
        parsed.port
    except ValueError:
        raise ConfigurationError(f"RPC endpoint has an invalid port: {endpoint!r}") from None
    return endpoint


@dataclass(frozen=True)
class NetworkDescriptor:
    """Static configuration of one network, validated on construction."""

    name: str
    chain_id_: str
    binary_: str
    rpc_endpoint_: str
    signer_: KeyRef
    gas: GasConfig
    home_: Optional[Path] = None

    def __post_init__(self) -> None:
        if not self.chain_id_ or not self.chain_id_.strip():
            raise ConfigurationError(f"Network {self.name!r}: chain id must not be empty")
        if any(c.isspace() for c in self.chain_id_):
            raise ConfigurationError(f"Network {self.name!r}: chain id contains whitespace")
        if not self.binary_ or not self.binary_.strip():
            raise ConfigurationError(f"Network {self.name!r}: binary must not be empty")
        validate_endpoint(self.rpc_endpoint_)

    @classmethod
    def create(
        cls,
        name: str,
        *,
        chain_id: str,
        binary: str,
        rpc_endpoint: str,
        signer: KeyRef,
        gas: GasConfig,
        home: Optional[Path] = None,
    ) -> "NetworkDescriptor":
        return cls(name, chain_id, binary, rpc_endpoint, signer, gas, home)

    def chain_id(self) -> str:
        return self.chain_id_

    def binary(self) -> str:
        return self.binary_

    def rpc_endpoint(self) -> str:
        return self.rpc_endpoint_

    def gas_config(self) -> GasConfig:
        return self.gas

    def signer(self) -> KeyRef:
        return self.signer_

    def home(self) -> Optional[Path]:
        return self.home_

    def __str__(self) -> str:
        return f"{self.name} ({self.chain_id_} @ {self.rpc_endpoint_})"
