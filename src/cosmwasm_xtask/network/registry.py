"""
Known network presets.

Presets are built lazily so that the home root (``COSMWASM_XTASK_HOME``)
is resolved when a network is selected, not at import time.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from ..config import custom_network, xtask_home
from ..errors import ConfigurationError
from . import archway, neutron, wasmd
from .base import NetworkDescriptor
from .local import LocalnetSpec

CUSTOM = "custom"


@dataclass(frozen=True)
class Preset:
    name: str
    description: str
    factory: Callable[[Path], NetworkDescriptor]
    localnet: Optional[LocalnetSpec] = None

    def network(self, root: Optional[Path] = None) -> NetworkDescriptor:
        return self.factory(root if root is not None else xtask_home())


PRESETS: dict[str, Preset] = {
    preset.name: preset
    for preset in (
        Preset("wasmd-local", "wasmd single-node localnet", wasmd.local, wasmd.LOCALNET),
        Preset("neutron-local", "Neutron consumer localnet", neutron.local, neutron.LOCALNET),
        Preset("neutron-testnet", "Neutron pion-1 testnet", neutron.testnet),
        Preset("archway-local", "Archway single-node localnet", archway.local, archway.LOCALNET),
    )
}


def network_names() -> list[str]:
    return [*PRESETS, CUSTOM]


def get_preset(name: str) -> Preset:
    try:
        return PRESETS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown network {name!r} (expected one of: {', '.join(network_names())})"
        ) from None


def get_network(name: str, root: Optional[Path] = None) -> NetworkDescriptor:
    """Resolve a registry name, or ``custom`` for a network read from the environment."""
    if name == CUSTOM:
        return custom_network()
    return get_preset(name).network(root)
