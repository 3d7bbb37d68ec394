"""Single contract operations, one command each."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import click

from ..contract import execute, instantiate, query, store
from ..errors import XtaskError
from . import NETWORK_CHOICE, fail, resolve_network


@click.command("store")
@click.argument("network", type=NETWORK_CHOICE)
@click.argument("artifact", type=click.Path(path_type=Path))
@click.option("--gas-adjustment", type=float, default=None, help="Override the network's gas adjustment")
def store_cmd(network: str, artifact: Path, gas_adjustment: Optional[float]) -> None:
    """Store ARTIFACT and print its code id."""
    net = resolve_network(network)
    try:
        code_id = store(net, artifact, gas_adjustment=gas_adjustment)
    except XtaskError as exc:
        fail(exc)
    click.echo(code_id)


@click.command("instantiate")
@click.argument("network", type=NETWORK_CHOICE)
@click.argument("code_id", type=int)
@click.argument("msg")
@click.option("--label", required=True, help="Contract label")
@click.option("--admin", default=None, help="Contract admin address")
@click.option("--amount", default=None, help="Funds to send, e.g. 1000untrn")
@click.option("--gas-adjustment", type=float, default=None, help="Override the network's gas adjustment")
def instantiate_cmd(
    network: str,
    code_id: int,
    msg: str,
    label: str,
    admin: Optional[str],
    amount: Optional[str],
    gas_adjustment: Optional[float],
) -> None:
    """Instantiate CODE_ID with MSG and print the contract address."""
    net = resolve_network(network)
    try:
        address = instantiate(net, code_id, msg, label, amount, admin=admin, gas_adjustment=gas_adjustment)
    except XtaskError as exc:
        fail(exc)
    click.echo(address)


@click.command("execute")
@click.argument("network", type=NETWORK_CHOICE)
@click.argument("contract")
@click.argument("msg")
@click.option("--amount", default=None, help="Funds to send, e.g. 1000untrn")
@click.option("--gas-adjustment", type=float, default=None, help="Override the network's gas adjustment")
def execute_cmd(
    network: str,
    contract: str,
    msg: str,
    amount: Optional[str],
    gas_adjustment: Optional[float],
) -> None:
    """Execute MSG on CONTRACT and print the transaction result."""
    net = resolve_network(network)
    try:
        result = execute(net, contract, msg, amount, gas_adjustment=gas_adjustment)
    except XtaskError as exc:
        fail(exc)
    click.echo(json.dumps(result, indent=2))


@click.command("query")
@click.argument("network", type=NETWORK_CHOICE)
@click.argument("contract")
@click.argument("msg")
def query_cmd(network: str, contract: str, msg: str) -> None:
    """Smart-query CONTRACT with MSG."""
    net = resolve_network(network)
    try:
        data = query(net, contract, msg)
    except XtaskError as exc:
        fail(exc)
    click.echo(json.dumps(data, indent=2))
