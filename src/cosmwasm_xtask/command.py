"""
Command builder.

Turns a (network, operation) pair into the exact argument vector of the
node binary. Everything here is pure: no filesystem, network or process
access, and identical inputs always give identical argument vectors.

Argument order for signed transactions::

    <binary> tx wasm <op> <positional...>
        --chain-id <id> --node <endpoint> --from <key> -y
        --gas-prices <price> [--gas <units>] [--gas-adjustment <adj>]
        [--amount <funds>] [--note <memo>] [--keyring-backend <backend>]
        [--home <dir>] --output json

Queries carry only ``--node``, ``--home`` and ``--output``.
"""

from __future__ import annotations

import json
import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar, Mapping, Optional, Sequence, Union

from .errors import ConfigurationError, MessageError
from .key import KeyringBackend
from .network.base import Network, network_home

Message = Union[str, Mapping[str, Any]]


# ============ Command spec ============


@dataclass(frozen=True)
class CommandSpec:
    """A resolved external process invocation, consumed once by a runner."""

    program: str
    args: tuple[str, ...]
    cwd: Optional[Path] = None
    stdin: Optional[str] = field(default=None, repr=False)

    @property
    def argv(self) -> tuple[str, ...]:
        return (self.program, *self.args)

    def __str__(self) -> str:
        return shlex.join(self.argv)


# ============ Messages ============


def message_json(msg: Message) -> str:
    """Return the JSON text for a contract message.

    Text is checked for syntax and passed through unchanged; mappings are
    serialised compactly.
    """
    if isinstance(msg, str):
        try:
            json.loads(msg)
        except json.JSONDecodeError as exc:
            raise MessageError(f"Contract message is not valid JSON: {exc}") from None
        return msg
    if isinstance(msg, Mapping):
        try:
            return json.dumps(dict(msg), separators=(",", ":"))
        except (TypeError, ValueError) as exc:
            raise MessageError(f"Contract message is not JSON serialisable: {exc}") from None
    raise MessageError(f"Contract message must be JSON text or a mapping, got {type(msg).__name__}")


# ============ Operations ============


def _check_gas_adjustment(adjustment: Optional[float]) -> None:
    if adjustment is not None and not adjustment > 0:
        raise ConfigurationError(f"Gas adjustment must be positive: {adjustment}")


@dataclass(frozen=True)
class Store:
    artifact: Union[str, Path]
    gas_adjustment: Optional[float] = None
    memo: Optional[str] = None

    kind: ClassVar[str] = "store"
    signed: ClassVar[bool] = True

    def __post_init__(self) -> None:
        _check_gas_adjustment(self.gas_adjustment)

    def head_args(self) -> list[str]:
        return ["tx", "wasm", "store", os.fspath(self.artifact)]


@dataclass(frozen=True)
class Instantiate:
    code_id: int
    msg: Message
    label: str
    funds: Optional[str] = None
    admin: Optional[str] = None
    gas_adjustment: Optional[float] = None
    memo: Optional[str] = None

    kind: ClassVar[str] = "instantiate"
    signed: ClassVar[bool] = True

    def __post_init__(self) -> None:
        if isinstance(self.code_id, bool):
            raise MessageError(f"Code id must be an integer: {self.code_id!r}")
        try:
            code_id = int(self.code_id)
        except (TypeError, ValueError):
            raise MessageError(f"Code id must be an integer: {self.code_id!r}") from None
        if code_id < 1:
            raise MessageError(f"Code id must be positive: {code_id}")
        if not self.label:
            raise MessageError("Instantiate label must not be empty")
        _check_gas_adjustment(self.gas_adjustment)
        object.__setattr__(self, "code_id", code_id)
        object.__setattr__(self, "msg", message_json(self.msg))

    def head_args(self) -> list[str]:
        args = ["tx", "wasm", "instantiate", str(self.code_id), str(self.msg), "--label", self.label]
        if self.admin:
            args += ["--admin", self.admin]
        else:
            args.append("--no-admin")
        return args


@dataclass(frozen=True)
class Execute:
    contract: str
    msg: Message
    funds: Optional[str] = None
    gas_adjustment: Optional[float] = None
    memo: Optional[str] = None

    kind: ClassVar[str] = "execute"
    signed: ClassVar[bool] = True

    def __post_init__(self) -> None:
        _check_gas_adjustment(self.gas_adjustment)
        if not self.contract:
            raise MessageError("Contract address must not be empty")
        object.__setattr__(self, "msg", message_json(self.msg))

    def head_args(self) -> list[str]:
        return ["tx", "wasm", "execute", self.contract, str(self.msg)]


@dataclass(frozen=True)
class Query:
    contract: str
    msg: Message

    kind: ClassVar[str] = "query"
    signed: ClassVar[bool] = False

    def __post_init__(self) -> None:
        if not self.contract:
            raise MessageError("Contract address must not be empty")
        object.__setattr__(self, "msg", message_json(self.msg))

    def head_args(self) -> list[str]:
        return ["query", "wasm", "contract-state", "smart", self.contract, str(self.msg)]


Operation = Union[Store, Instantiate, Execute, Query]


# ============ Builders ============


def _tx_flags(network: Network, operation: Operation) -> list[str]:
    gas = network.gas_config()
    signer = network.signer()

    flags = [
        "--chain-id", network.chain_id(),
        "--node", network.rpc_endpoint(),
        "--from", signer.name,
        "-y",
        "--gas-prices", str(gas.price),
    ]
    if gas.units is not None:
        flags += ["--gas", str(gas.units)]

    adjustment = getattr(operation, "gas_adjustment", None)
    if adjustment is None:
        adjustment = gas.adjustment
    if adjustment is not None:
        flags += ["--gas-adjustment", str(adjustment)]

    funds = getattr(operation, "funds", None)
    if funds:
        flags += ["--amount", funds]

    memo = getattr(operation, "memo", None)
    if memo:
        flags += ["--note", memo]

    if signer.backend is not None:
        flags += ["--keyring-backend", signer.backend.value]
    return flags


def _tail_flags(network: Network) -> list[str]:
    flags: list[str] = []
    home = network_home(network)
    if home is not None:
        flags += ["--home", str(home)]
    flags += ["--output", "json"]
    return flags


def build_command(network: Network, operation: Operation) -> CommandSpec:
    """Build the one invocation that performs ``operation`` on ``network``."""
    args = operation.head_args()
    if operation.signed:
        args += _tx_flags(network, operation)
    else:
        args += ["--node", network.rpc_endpoint()]
    args += _tail_flags(network)
    return CommandSpec(program=network.binary(), args=tuple(args))


def code_info_command(network: Network, code_id: int) -> CommandSpec:
    args = ["query", "wasm", "code-info", str(int(code_id)), "--node", network.rpc_endpoint()]
    return CommandSpec(network.binary(), tuple(args + _tail_flags(network)))


def _keys_command(
    network: Network,
    head: Sequence[str],
    backend: Optional[KeyringBackend],
    stdin: Optional[str] = None,
) -> CommandSpec:
    args = list(head)
    if backend is not None:
        args += ["--keyring-backend", backend.value]
    return CommandSpec(network.binary(), tuple(args + _tail_flags(network)), stdin=stdin)


def list_keys_command(network: Network, backend: Optional[KeyringBackend] = None) -> CommandSpec:
    return _keys_command(network, ["keys", "list"], backend)


def add_key_command(network: Network, name: str, backend: Optional[KeyringBackend] = None) -> CommandSpec:
    return _keys_command(network, ["keys", "add", name], backend)


def recover_key_command(
    network: Network,
    name: str,
    mnemonic: str,
    backend: Optional[KeyringBackend] = None,
) -> CommandSpec:
    return _keys_command(network, ["keys", "add", name, "--recover"], backend, stdin=mnemonic + "\n")
