from __future__ import annotations

import json
from typing import Any, Optional

import pytest

from cosmwasm_xtask.command import CommandSpec
from cosmwasm_xtask.key import KeyRef
from cosmwasm_xtask.network.base import NetworkDescriptor
from cosmwasm_xtask.network.gas import GasConfig, GasPrice
from cosmwasm_xtask.shell import CompletedCommand


class RecordingRunner:
    """Stands in for the subprocess runner: records every spec, replays canned results."""

    def __init__(self, *results: tuple[int, str, str]) -> None:
        self.results = list(results)
        self.calls: list[CommandSpec] = []

    def __call__(self, spec: CommandSpec) -> CompletedCommand:
        self.calls.append(spec)
        returncode, stdout, stderr = self.results.pop(0) if self.results else (0, "", "")
        return CompletedCommand(spec.argv, returncode, stdout, stderr)


def tx_output(
    events: Optional[list[dict[str, Any]]] = None,
    code: int = 0,
    raw_log: str = "",
    txhash: str = "A1B2C3",
) -> str:
    return json.dumps(
        {
            "height": "0",
            "txhash": txhash,
            "code": code,
            "raw_log": raw_log,
            "logs": [{"events": events or []}],
        }
    )


def store_output(code_id: int = 7) -> str:
    return tx_output(
        [{"type": "store_code", "attributes": [{"key": "code_id", "value": str(code_id)}]}]
    )


def instantiate_output(address: str = "wasm14hj2tavq8fpesdwxxcu44rty3hh90vhujrvcmstl4zr3txmfvw9s4hmalr") -> str:
    return tx_output(
        [
            {
                "type": "instantiate",
                "attributes": [
                    {"key": "_contract_address", "value": address},
                    {"key": "code_id", "value": "7"},
                ],
            }
        ]
    )


@pytest.fixture()
def network() -> NetworkDescriptor:
    return NetworkDescriptor.create(
        "test",
        chain_id="localnet-1",
        binary="wasmd",
        rpc_endpoint="http://localhost:26657",
        signer=KeyRef("validator"),
        gas=GasConfig(GasPrice.of("0.025", "stake")),
    )
