"""
Settings from the environment.

A ``.env`` file in the working directory is loaded first; variables that
are already exported take precedence over it.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigurationError
from .key import KeyRef, KeyringBackend
from .network.base import NetworkDescriptor
from .network.gas import GasConfig, GasPrice, parse_gas_units

DEFAULT_XTASK_HOME = Path("target") / "cosmwasm_xtask"
DEFAULT_ARTIFACTS_DIR = "artifacts"

ENV_HOME = "COSMWASM_XTASK_HOME"
ENV_ARTIFACTS_DIR = "COSMWASM_ARTIFACTS_DIR"

ENV_CHAIN_ID = "COSMWASM_CHAIN_ID"
ENV_BINARY = "COSMWASM_BINARY"
ENV_NODE = "COSMWASM_NODE"
ENV_FROM = "COSMWASM_FROM"
ENV_GAS_PRICES = "COSMWASM_GAS_PRICES"
ENV_GAS_ADJUSTMENT = "COSMWASM_GAS_ADJUSTMENT"
ENV_GAS = "COSMWASM_GAS"
ENV_KEYRING_BACKEND = "COSMWASM_KEYRING_BACKEND"
ENV_NETWORK_HOME = "COSMWASM_HOME"

_loaded = False


def load_env(env_path: Optional[Path] = None) -> None:
    """Load ``.env`` once per process (or ``env_path`` whenever given)."""
    global _loaded
    if env_path is not None:
        if env_path.exists():
            load_dotenv(env_path, override=False)
        return
    if not _loaded:
        load_dotenv(Path.cwd() / ".env", override=False)
        _loaded = True


def xtask_home() -> Path:
    load_env()
    return Path(os.environ.get(ENV_HOME) or DEFAULT_XTASK_HOME)


def artifacts_dir() -> str:
    load_env()
    return os.environ.get(ENV_ARTIFACTS_DIR) or DEFAULT_ARTIFACTS_DIR


def _require(name: str) -> str:
    value = os.environ.get(name, "").strip()
    if not value:
        raise ConfigurationError(f"{name} must be set for the custom network")
    return value


def custom_network(name: str = "custom") -> NetworkDescriptor:
    """Build a network from ``COSMWASM_*`` variables."""
    load_env()

    adjustment = None
    raw_adjustment = os.environ.get(ENV_GAS_ADJUSTMENT, "").strip()
    if raw_adjustment:
        try:
            adjustment = float(raw_adjustment)
        except ValueError:
            raise ConfigurationError(
                f"{ENV_GAS_ADJUSTMENT} must be a number: {raw_adjustment!r}"
            ) from None

    units = None
    raw_units = os.environ.get(ENV_GAS, "").strip()
    if raw_units:
        units = parse_gas_units(raw_units)

    backend = None
    raw_backend = os.environ.get(ENV_KEYRING_BACKEND, "").strip()
    if raw_backend:
        backend = KeyringBackend.parse(raw_backend)

    raw_home = os.environ.get(ENV_NETWORK_HOME, "").strip()

    return NetworkDescriptor.create(
        name,
        chain_id=_require(ENV_CHAIN_ID),
        binary=_require(ENV_BINARY),
        rpc_endpoint=_require(ENV_NODE),
        signer=KeyRef(_require(ENV_FROM), backend),
        gas=GasConfig(GasPrice.parse(_require(ENV_GAS_PRICES)), adjustment, units),
        home=Path(raw_home) if raw_home else None,
    )
