"""Neutron presets: a single-node consumer localnet and the pion-1 testnet."""

from __future__ import annotations

from pathlib import Path

from ..key import KeyRef, KeyringBackend
from .base import NetworkDescriptor
from .gas import GasConfig, GasPrice
from .local import ConfigEdit, LocalnetSpec

BINARY = "neutrond"
DENOM = "untrn"

LOCAL_CHAIN_ID = "test-1"
LOCAL_RPC_PORT = 26657
LOCAL_GRPC_PORT = 8090
LOCAL_GRPC_WEB_PORT = 8091

TESTNET_CHAIN_ID = "pion-1"
TESTNET_NODE = "https://rpc-t.neutron.nodestake.top:443"

IBC_ATOM_DENOM = "uibcatom"
IBC_USDC_DENOM = "uibcusdc"

DEMO_MNEMONIC_1 = "banner spread envelope side kite person disagree path silver will brother under couch edit food venture squirrel civil budget number acquire point work mass"
DEMO_MNEMONIC_2 = "veteran try aware erosion drink dance decade comic dawn museum release episode original list ability owner size tuition surface ceiling depth seminar capable only"
DEMO_MNEMONIC_3 = "obscure canal because tomorrow tribe sibling describe satoshi kiwi upgrade bless empty math trend erosion oblige donate label birth chronic hazard ensure wreck shine"

LOCALNET = LocalnetSpec(
    moniker="test",
    denom=DENOM,
    genesis_keys=(
        ("local1", DEMO_MNEMONIC_1),
        ("local2", DEMO_MNEMONIC_2),
        ("local3", DEMO_MNEMONIC_3),
    ),
    genesis_allocation=100_000_000_000_000,
    extra_genesis_denoms=(IBC_ATOM_DENOM, IBC_USDC_DENOM),
    consumer=True,
    config_edits=(
        ConfigEdit("config/config.toml", 'timeout_commit = "5s"', 'timeout_commit = "1s"'),
        ConfigEdit("config/config.toml", 'timeout_propose = "3s"', 'timeout_propose = "1s"'),
        ConfigEdit("config/config.toml", "index_all_keys = false", "index_all_keys = true"),
        ConfigEdit("config/app.toml", 'minimum-gas-prices = ""', f'minimum-gas-prices = "0.0025{DENOM}"'),
        ConfigEdit("config/genesis.json", '"denom": "stake"', f'"denom": "{DENOM}"'),
        ConfigEdit("config/genesis.json", '"bond_denom": "stake"', f'"bond_denom": "{DENOM}"'),
        ConfigEdit("config/genesis.json", '"allow_messages": []', '"allow_messages": ["*"]'),
    ),
    start_args=(
        "--pruning=nothing",
        f"--grpc.address=127.0.0.1:{LOCAL_GRPC_PORT}",
        f"--grpc-web.address=127.0.0.1:{LOCAL_GRPC_WEB_PORT}",
    ),
)


def local(root: Path) -> NetworkDescriptor:
    return NetworkDescriptor.create(
        "neutron-local",
        chain_id=LOCAL_CHAIN_ID,
        binary=BINARY,
        rpc_endpoint=f"tcp://127.0.0.1:{LOCAL_RPC_PORT}",
        signer=KeyRef("local1", KeyringBackend.TEST),
        gas=GasConfig(GasPrice.of("0.02", DENOM), adjustment=1.3, units="auto"),
        home=root / "neutron" / "data",
    )


def testnet(root: Path) -> NetworkDescriptor:
    return NetworkDescriptor.create(
        "neutron-testnet",
        chain_id=TESTNET_CHAIN_ID,
        binary=BINARY,
        rpc_endpoint=TESTNET_NODE,
        signer=KeyRef("local1", KeyringBackend.TEST),
        gas=GasConfig(GasPrice.of("0.002", DENOM), adjustment=1.3, units="auto"),
        home=root / "neutron-testnet" / "data",
    )
