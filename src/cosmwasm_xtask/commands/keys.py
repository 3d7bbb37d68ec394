"""Keyring listing."""

from __future__ import annotations

from typing import Optional

import click

from ..contract import list_keys
from ..errors import XtaskError
from ..key import KeyringBackend
from . import NETWORK_CHOICE, fail, resolve_network


@click.command()
@click.argument("network", type=NETWORK_CHOICE)
@click.option(
    "--keyring-backend",
    type=click.Choice([b.value for b in KeyringBackend]),
    default=None,
    help="Keyring backend (default: the network signer's)",
)
def keys(network: str, keyring_backend: Optional[str]) -> None:
    """List the keys NETWORK's binary knows about."""
    net = resolve_network(network)
    backend = KeyringBackend(keyring_backend) if keyring_backend else None
    try:
        entries = list_keys(net, backend)
    except XtaskError as exc:
        fail(exc)

    if not entries:
        click.echo("No keys.")
        return
    for key in entries:
        click.echo(f"  {key.name:<12} {key.address}")
