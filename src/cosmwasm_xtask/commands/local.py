"""
Local chain lifecycle commands.

start-local initialises the chain on first use, starts the node in the
background, waits for it to produce blocks and then follows its log until
Ctrl+C, stopping the node on the way out.
"""

from __future__ import annotations

import click

from ..config import xtask_home
from ..errors import ConfigurationError, XtaskError
from ..network.local import LocalChain, clean_all
from ..network.registry import PRESETS, get_preset
from ..status import wait_for_blocks
from . import fail, print_network

LOCAL_CHOICE = click.Choice([name for name, preset in PRESETS.items() if preset.localnet])


def _local_chain(name: str) -> LocalChain:
    preset = get_preset(name)
    if preset.localnet is None:
        raise ConfigurationError(f"{name} is not a local network")
    return LocalChain(preset.network(), preset.localnet)


@click.command("start-local")
@click.argument("network", type=LOCAL_CHOICE)
@click.option("--reset", is_flag=True, help="Wipe and re-initialise chain state first")
@click.option("--timeout", default=120, type=float, show_default=True, help="Seconds to wait for blocks")
def start_local(network: str, reset: bool, timeout: float) -> None:
    """Start a local chain and follow its log until Ctrl+C."""
    click.echo("=== Start Local ===")
    click.echo("")

    try:
        chain = _local_chain(network)
        print_network(chain.network)

        if reset or not chain.is_initialized():
            click.echo(f"Initialising chain state in {chain.home}")
            for key in chain.initialize():
                click.echo(f"  Key: {key}")
            click.echo("")

        node = chain.start()
    except XtaskError as exc:
        fail(exc)

    with node:
        try:
            height = wait_for_blocks(chain.network, timeout=timeout)
        except (TimeoutError, XtaskError) as exc:
            click.secho(f"ERROR: {exc}", fg="red")
            click.echo(f"  Log: {node.logfile_path}")
            raise SystemExit(getattr(exc, "exit_code", 1))
        click.secho(f"Chain is producing blocks (height {height})", fg="green")
        click.echo(f"Following {node.logfile_path} - press Ctrl+C to stop")
        node.follow()

    click.echo("Node stopped.")


@click.command()
@click.argument("network", type=LOCAL_CHOICE)
@click.option("--all", "everything", is_flag=True, help="Remove every local artifact, not just this chain")
def clean(network: str, everything: bool) -> None:
    """Remove local chain state."""
    try:
        chain = _local_chain(network)
    except XtaskError as exc:
        fail(exc)

    if everything:
        root = xtask_home()
        clean_all(root)
        click.echo(f"Removed {root}")
        return

    chain.clean()
    click.echo(f"Removed state of {network} ({chain.home})")
