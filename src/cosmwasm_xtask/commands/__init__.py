"""
Command implementations for the cosmwasm-xtask CLI.

- local:    start-local, clean
- deploy:   store + instantiate (+ optional execute / query)
- contract: one facade operation per command
- keys:     keyring listing
"""

from __future__ import annotations

import sys
from typing import NoReturn

import click

from ..errors import XtaskError
from ..network.base import NetworkDescriptor
from ..network.registry import get_network, network_names

NETWORK_CHOICE = click.Choice(network_names())


def fail(exc: XtaskError) -> NoReturn:
    click.secho(f"ERROR: {exc}", fg="red")
    sys.exit(exc.exit_code)


def resolve_network(name: str) -> NetworkDescriptor:
    try:
        return get_network(name)
    except XtaskError as exc:
        fail(exc)


def print_network(network: NetworkDescriptor) -> None:
    click.echo(f"  Network: {network.name}")
    click.echo(f"  Chain:   {network.chain_id()}")
    click.echo(f"  Node:    {network.rpc_endpoint()}")
    click.echo(f"  Signer:  {network.signer()}")
    click.echo("")
