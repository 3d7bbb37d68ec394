"""
Deploy - store and instantiate a contract in one go.

Optionally executes a message on the new contract and queries it
afterwards, which is handy for smoke-testing a fresh localnet.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import click

from ..contract import execute, instantiate, query, store
from ..errors import XtaskError
from . import NETWORK_CHOICE, fail, print_network, resolve_network


@click.command()
@click.argument("network", type=NETWORK_CHOICE)
@click.option("--wasm", "wasm_path", required=True, type=click.Path(path_type=Path), help="Contract .wasm artifact")
@click.option("--label", default=None, help="Contract label (default: artifact name)")
@click.option("--init-msg", default="{}", show_default=True, help="Instantiate message (JSON)")
@click.option("--admin", default=None, help="Contract admin address")
@click.option("--amount", default=None, help="Funds sent with instantiate, e.g. 1000untrn")
@click.option("--exec-msg", default=None, help="Message to execute after instantiation (JSON)")
@click.option("--query-msg", default=None, help="Query to run at the end (JSON)")
def deploy(
    network: str,
    wasm_path: Path,
    label: Optional[str],
    init_msg: str,
    admin: Optional[str],
    amount: Optional[str],
    exec_msg: Optional[str],
    query_msg: Optional[str],
) -> None:
    """Store and instantiate a contract on NETWORK."""
    click.echo("=== Deploy ===")
    click.echo("")

    net = resolve_network(network)
    print_network(net)

    try:
        click.echo(f"Storing {wasm_path}")
        code_id = store(net, wasm_path)
        click.secho(f"  Code id: {code_id}", fg="green")

        label = label or wasm_path.stem
        click.echo(f"Instantiating {label}")
        contract = instantiate(net, code_id, init_msg, label, amount, admin=admin)
        click.secho(f"  Address: {contract}", fg="green")

        if exec_msg is not None:
            click.echo("Executing")
            result = execute(net, contract, exec_msg)
            click.echo(f"  TX: {result.get('txhash', 'unknown')}")

        if query_msg is not None:
            click.echo("Querying")
            data = query(net, contract, query_msg)
            click.echo(json.dumps(data, indent=2))
    except XtaskError as exc:
        fail(exc)

    click.echo("")
    click.secho("Deploy complete.", fg="green")
