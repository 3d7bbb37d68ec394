"""Archway localnet preset."""

from __future__ import annotations

from pathlib import Path

from ..key import KeyRef, KeyringBackend
from .base import NetworkDescriptor
from .gas import GasConfig, GasPrice
from .local import ConfigEdit, LocalnetSpec

BINARY = "archwayd"
LOCAL_CHAIN_ID = "localnet"
LOCAL_CHAIN_DENOM = "stake"

LOCALNET = LocalnetSpec(
    moniker="archway-local",
    denom=LOCAL_CHAIN_DENOM,
    genesis_keys=(("local0", None), ("local1", None)),
    genesis_allocation=1_000_000_000_000_000_000_000,
    gentx_amount=9_500_000_000_000_000_000,
    config_edits=(
        ConfigEdit("config/config.toml", "cors_allowed_origins = []", 'cors_allowed_origins = ["*"]'),
    ),
)


def local(root: Path) -> NetworkDescriptor:
    return NetworkDescriptor.create(
        "archway-local",
        chain_id=LOCAL_CHAIN_ID,
        binary=BINARY,
        rpc_endpoint="tcp://127.0.0.1:26657",
        signer=KeyRef("local0", KeyringBackend.TEST),
        gas=GasConfig(GasPrice.of(100, LOCAL_CHAIN_DENOM), units=100_000_000),
        home=root / "archway" / "data",
    )
