"""
cosmwasm-xtask CLI

Scripting utility for CosmWasm networks: run local development chains
and store, instantiate, execute and query contracts through the chain's
node binary.

Commands:
  networks     - List known networks
  start-local  - Initialise and run a local chain until Ctrl+C
  clean        - Remove local chain state
  deploy       - Store and instantiate a contract
  store        - Store contract bytecode
  instantiate  - Instantiate a stored contract
  execute      - Execute a contract message
  query        - Smart-query a contract
  keys         - List keyring entries of a network
  optimize     - Build optimised contract artifacts
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import click

from .commands import fail
from .errors import XtaskError
from .network.registry import CUSTOM, PRESETS
from .ops import OPTIMIZER_IMAGE, optimize_workspace

VERSION = "0.1.0"


# ============ Main CLI Group ============


@click.group()
@click.version_option(version=VERSION, prog_name="cosmwasm-xtask")
@click.option("--verbose", "-v", is_flag=True, help="Log every command that is run")
def cli(verbose: bool) -> None:
    """cosmwasm-xtask: operate CosmWasm networks from scripts."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")


from .commands.local import clean, start_local
from .commands.deploy import deploy
from .commands.contract import execute_cmd, instantiate_cmd, query_cmd, store_cmd
from .commands.keys import keys

cli.add_command(start_local)
cli.add_command(clean)
cli.add_command(deploy)
cli.add_command(store_cmd)
cli.add_command(instantiate_cmd)
cli.add_command(execute_cmd)
cli.add_command(query_cmd)
cli.add_command(keys)


# ============ Networks ============


@cli.command()
def networks() -> None:
    """List known networks."""
    for name, preset in PRESETS.items():
        local = click.style("  [local]", fg="cyan") if preset.localnet else ""
        click.echo(f"  {name:<16} {preset.description}{local}")
    click.echo(f"  {CUSTOM:<16} network read from COSMWASM_* environment variables")


# ============ Optimize ============


@cli.command()
@click.option(
    "--workspace",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Contract workspace root (default: current directory)",
)
@click.option("--image", default=OPTIMIZER_IMAGE, show_default=True, help="Optimizer docker image")
def optimize(workspace: Optional[Path], image: str) -> None:
    """Build optimised contract artifacts with the workspace optimizer."""
    try:
        artifacts = optimize_workspace(workspace, image)
    except XtaskError as exc:
        fail(exc)
    click.secho(f"Artifacts written to {artifacts}", fg="green")


# ============ Entry Points ============


def main() -> None:
    """cosmwasm-xtask entry point."""
    cli()


if __name__ == "__main__":
    main()
