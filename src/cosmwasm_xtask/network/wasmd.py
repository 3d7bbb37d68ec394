"""Plain wasmd localnet preset."""

from __future__ import annotations

from pathlib import Path

from ..key import KeyRef, KeyringBackend
from .base import NetworkDescriptor
from .gas import GasConfig, GasPrice
from .local import ConfigEdit, LocalnetSpec

BINARY = "wasmd"
LOCAL_CHAIN_ID = "localnet-1"
LOCAL_CHAIN_DENOM = "stake"

LOCALNET = LocalnetSpec(
    moniker="wasmd-local",
    denom=LOCAL_CHAIN_DENOM,
    genesis_keys=(("validator", None), ("demo", None)),
    genesis_allocation=1_000_000_000_000,
    gentx_amount=250_000_000,
    config_edits=(
        ConfigEdit("config/config.toml", 'timeout_commit = "5s"', 'timeout_commit = "1s"'),
    ),
    genesis_prefix=("genesis",),
)


def local(root: Path) -> NetworkDescriptor:
    return NetworkDescriptor.create(
        "wasmd-local",
        chain_id=LOCAL_CHAIN_ID,
        binary=BINARY,
        rpc_endpoint="http://localhost:26657",
        signer=KeyRef("validator", KeyringBackend.TEST),
        gas=GasConfig(GasPrice.of("0.025", LOCAL_CHAIN_DENOM), adjustment=1.3, units="auto"),
        home=root / "wasmd" / "data",
    )
