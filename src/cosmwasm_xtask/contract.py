"""
Contract operations: store, instantiate, execute and query.

All four share one pipeline: build the command, run it once, check the
exit status (and, for transactions, the chain's response code), then pull
the result out of the output with a replaceable extractor.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, Optional, TypeVar, Union

from .command import (
    CommandSpec,
    Execute,
    Instantiate,
    Message,
    Operation,
    Query,
    Store,
    add_key_command,
    build_command,
    code_info_command,
    list_keys_command,
    recover_key_command,
)
from .errors import ArtifactNotFoundError, ResultParseError, TransactionRejectedError
from .extract import (
    Extractor,
    extract_code_id,
    extract_contract_address,
    extract_query_data,
    extract_tx,
    extract_txhash,
    find_json_payload,
)
from .key import Key, KeyringBackend
from .network.base import Network
from .shell import CompletedCommand, Runner, default_runner

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    kind: str
    value: T
    stdout: str
    txhash: Optional[str] = None


def _run(spec: CommandSpec, runner: Optional[Runner]) -> CompletedCommand:
    return (runner or default_runner())(spec).check()


def _check_tx(argv: tuple[str, ...], stdout: str) -> Optional[str]:
    """Raise if the chain rejected the transaction; return its hash when reported.

    Output without a JSON object is left to the operation's extractor.
    """
    try:
        payload = extract_tx(stdout)
    except ResultParseError:
        return None
    code = payload.get("code") or 0
    try:
        code = int(code)
    except (TypeError, ValueError):
        raise ResultParseError("transaction code", stdout, f"not an integer: {code!r}") from None
    if code > 0:
        raise TransactionRejectedError(argv, code, str(payload.get("raw_log", "")))
    return extract_txhash(payload)


def run_operation(
    network: Network,
    operation: Operation,
    extractor: Extractor[T],
    runner: Optional[Runner] = None,
) -> OperationResult[T]:
    """Build, run and parse one operation against ``network``."""
    spec = build_command(network, operation)
    completed = _run(spec, runner)

    txhash = None
    if operation.signed:
        txhash = _check_tx(spec.argv, completed.stdout)
        if txhash:
            logger.info("%s tx: %s", operation.kind, txhash)

    return OperationResult(
        kind=operation.kind,
        value=extractor(completed.stdout),
        stdout=completed.stdout,
        txhash=txhash,
    )


def store(
    network: Network,
    artifact_path: Union[str, Path],
    *,
    gas_adjustment: Optional[float] = None,
    memo: Optional[str] = None,
    runner: Optional[Runner] = None,
    extractor: Extractor[int] = extract_code_id,
) -> int:
    """
    Store contract bytecode on ``network``.

    Returns:
        The code id assigned by the chain

    Raises:
        ArtifactNotFoundError: If the artifact is missing or unreadable
        ExecutionFailedError: If the binary exits non-zero
        ResultParseError: If no code id is found in the output
    """
    path = Path(artifact_path)
    if not path.is_file() or not os.access(path, os.R_OK):
        raise ArtifactNotFoundError(artifact_path)

    logger.info("storing contract bytecode: %s", artifact_path)
    operation = Store(artifact_path, gas_adjustment=gas_adjustment, memo=memo)
    return run_operation(network, operation, extractor, runner).value


def instantiate(
    network: Network,
    code_id: int,
    init_msg: Message,
    label: str,
    funds: Optional[str] = None,
    *,
    admin: Optional[str] = None,
    gas_adjustment: Optional[float] = None,
    memo: Optional[str] = None,
    runner: Optional[Runner] = None,
    extractor: Extractor[str] = extract_contract_address,
) -> str:
    """
    Instantiate a stored contract.

    Returns:
        The new contract's address

    Raises:
        ExecutionFailedError: If the binary exits non-zero or the chain rejects the tx
        ResultParseError: If no contract address is found in the output
    """
    operation = Instantiate(
        code_id,
        init_msg,
        label,
        funds=funds,
        admin=admin,
        gas_adjustment=gas_adjustment,
        memo=memo,
    )
    logger.info("instantiating %s from code id %d", label, operation.code_id)
    return run_operation(network, operation, extractor, runner).value


def execute(
    network: Network,
    contract_address: str,
    msg: Message,
    funds: Optional[str] = None,
    *,
    gas_adjustment: Optional[float] = None,
    memo: Optional[str] = None,
    runner: Optional[Runner] = None,
    extractor: Extractor[Any] = extract_tx,
) -> Any:
    """Execute ``msg`` on a contract and return the raw transaction result."""
    operation = Execute(contract_address, msg, funds=funds, gas_adjustment=gas_adjustment, memo=memo)
    logger.info("executing %s", contract_address)
    return run_operation(network, operation, extractor, runner).value


def query(
    network: Network,
    contract_address: str,
    msg: Message,
    *,
    runner: Optional[Runner] = None,
    extractor: Extractor[Any] = extract_query_data,
) -> Any:
    """Smart-query a contract. Read-only; nothing is signed."""
    operation = Query(contract_address, msg)
    logger.info("querying %s", contract_address)
    return run_operation(network, operation, extractor, runner).value


def code_info(network: Network, code_id: int, runner: Optional[Runner] = None) -> dict[str, Any]:
    completed = _run(code_info_command(network, code_id), runner)
    payload = find_json_payload(completed.stdout, "code info")
    if not isinstance(payload, dict):
        raise ResultParseError("code info", completed.stdout, "expected a JSON object")
    return payload


# ============ Keys ============


def _parse_key(output: str, backend: Optional[KeyringBackend]) -> Key:
    payload = find_json_payload(output, "key")
    try:
        return Key.from_dict(payload, backend)
    except (KeyError, TypeError, AttributeError):
        raise ResultParseError("key", output, "expected an object with name and address") from None


def list_keys(
    network: Network,
    backend: Optional[KeyringBackend] = None,
    runner: Optional[Runner] = None,
) -> list[Key]:
    backend = backend or network.signer().backend
    completed = _run(list_keys_command(network, backend), runner)
    payload = find_json_payload(completed.stdout, "keys")
    if not isinstance(payload, list):
        raise ResultParseError("keys", completed.stdout, "expected a JSON array")
    try:
        return [Key.from_dict(entry, backend) for entry in payload]
    except (KeyError, TypeError, AttributeError):
        raise ResultParseError("keys", completed.stdout, "malformed key entry") from None


def add_key(
    network: Network,
    name: str,
    backend: Optional[KeyringBackend] = None,
    runner: Optional[Runner] = None,
) -> Key:
    completed = _run(add_key_command(network, name, backend), runner)
    return _parse_key(completed.stdout, backend)


def recover_key(
    network: Network,
    name: str,
    mnemonic: str,
    backend: Optional[KeyringBackend] = None,
    runner: Optional[Runner] = None,
) -> Key:
    completed = _run(recover_key_command(network, name, mnemonic, backend), runner)
    return _parse_key(completed.stdout, backend)
