"""
Local development chains.

A ``LocalnetSpec`` describes how to bootstrap a single-validator chain
with a node binary: genesis keys, allocations and config tweaks.
``LocalChain`` drives the binary to initialise, start, follow and clean
that chain under the network's home directory.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Callable, Optional, Sequence

from ..command import CommandSpec
from ..contract import add_key, recover_key
from ..errors import ConfigurationError, ExecutionFailedError
from ..key import Key, KeyringBackend
from ..shell import Runner, default_runner
from .base import NetworkDescriptor

logger = logging.getLogger(__name__)

LOCAL_KEYRING = KeyringBackend.TEST


@dataclass(frozen=True)
class ConfigEdit:
    """Replace every occurrence of ``old`` with ``new`` in ``path`` (relative to home)."""

    path: str
    old: str
    new: str


@dataclass(frozen=True)
class LocalnetSpec:
    moniker: str
    denom: str
    genesis_keys: tuple[tuple[str, Optional[str]], ...]
    genesis_allocation: int
    extra_genesis_denoms: tuple[str, ...] = ()
    gentx_amount: Optional[int] = None
    consumer: bool = False
    config_edits: tuple[ConfigEdit, ...] = ()
    start_args: tuple[str, ...] = ()
    # newer SDK releases nest genesis commands under `genesis`
    genesis_prefix: tuple[str, ...] = ()


def _home_flags(network: NetworkDescriptor) -> list[str]:
    home = network.home()
    if home is None:
        raise ConfigurationError(f"Network {network.name!r} has no home directory")
    return ["--home", str(home)]


def init_command(network: NetworkDescriptor, moniker: str) -> CommandSpec:
    args = ["init", moniker, "--chain-id", network.chain_id(), *_home_flags(network)]
    return CommandSpec(network.binary(), tuple(args))


def add_genesis_account_command(
    network: NetworkDescriptor,
    key_name: str,
    coins: Sequence[str],
    prefix: Sequence[str] = (),
) -> CommandSpec:
    args = [
        *prefix,
        "add-genesis-account",
        key_name,
        ",".join(coins),
        "--keyring-backend",
        LOCAL_KEYRING.value,
        *_home_flags(network),
    ]
    return CommandSpec(network.binary(), tuple(args))


def gentx_command(
    network: NetworkDescriptor,
    key_name: str,
    amount: str,
    prefix: Sequence[str] = (),
) -> CommandSpec:
    args = [
        *prefix,
        "gentx",
        key_name,
        amount,
        "--chain-id",
        network.chain_id(),
        "--keyring-backend",
        LOCAL_KEYRING.value,
        *_home_flags(network),
    ]
    return CommandSpec(network.binary(), tuple(args))


def home_command(network: NetworkDescriptor, *subcommand: str) -> CommandSpec:
    return CommandSpec(network.binary(), (*subcommand, *_home_flags(network)))


def start_command(network: NetworkDescriptor, spec: LocalnetSpec) -> CommandSpec:
    return CommandSpec(network.binary(), ("start", *_home_flags(network), *spec.start_args))


class LocalNode:
    """A running node process. Stops the node on ``stop()`` or when used as a context manager."""

    def __init__(self, process: subprocess.Popen, logfile_path: Path) -> None:
        self.process = process
        self.logfile_path = logfile_path

    def __enter__(self) -> "LocalNode":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    @property
    def running(self) -> bool:
        return self.process.poll() is None

    def stop(self, timeout: float = 10) -> None:
        if not self.running:
            return
        logger.info("stopping node (pid %d)", self.process.pid)
        self.process.terminate()
        try:
            self.process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            self.process.kill()
            self.process.wait()

    def follow(self, out: IO[str] = sys.stderr, poll_interval: float = 0.25) -> None:
        """Stream the node's logfile to ``out`` until Ctrl+C or the node exits."""
        with self.logfile_path.open("r", encoding="utf-8", errors="replace") as f:
            try:
                while True:
                    line = f.readline()
                    if line:
                        out.write(line)
                        continue
                    if not self.running:
                        return
                    time.sleep(poll_interval)
            except KeyboardInterrupt:
                return


Popen = Callable[..., subprocess.Popen]


@dataclass
class LocalChain:
    network: NetworkDescriptor
    spec: LocalnetSpec
    runner: Runner = field(default_factory=default_runner)
    popen: Popen = subprocess.Popen

    @property
    def home(self) -> Path:
        home = self.network.home()
        if home is None:
            raise ConfigurationError(f"Network {self.network.name!r} has no home directory")
        return home

    @property
    def logfile_path(self) -> Path:
        return self.home.parent / f"{self.network.binary()}.log"

    def is_initialized(self) -> bool:
        return (self.home / "config" / "genesis.json").is_file()

    def _run(self, spec: CommandSpec) -> None:
        self.runner(spec).check()

    def initialize(self) -> list[Key]:
        """Create genesis state and keys. Existing state is wiped first."""
        spec = self.spec
        shutil.rmtree(self.home, ignore_errors=True)
        self.home.mkdir(parents=True, exist_ok=True)

        logger.info("initialising %s in %s", self.network.chain_id(), self.home)
        self._run(init_command(self.network, spec.moniker))

        coins = [f"{spec.genesis_allocation}{denom}" for denom in (spec.denom, *spec.extra_genesis_denoms)]
        keys = []
        for name, mnemonic in spec.genesis_keys:
            if mnemonic is None:
                key = add_key(self.network, name, LOCAL_KEYRING, self.runner)
            else:
                key = recover_key(self.network, name, mnemonic, LOCAL_KEYRING, self.runner)
            self._run(add_genesis_account_command(self.network, key.name, coins, spec.genesis_prefix))
            keys.append(key)

        if spec.consumer:
            self._run(home_command(self.network, "add-consumer-section"))
        elif spec.gentx_amount is not None:
            if not keys:
                raise ConfigurationError("A gentx needs at least one genesis key")
            self._run(gentx_command(
                self.network, keys[0].name, f"{spec.gentx_amount}{spec.denom}", spec.genesis_prefix
            ))
            self._run(home_command(self.network, *spec.genesis_prefix, "collect-gentxs"))

        self.apply_config_edits()
        self._run(home_command(self.network, *spec.genesis_prefix, "validate-genesis"))
        return keys

    def apply_config_edits(self) -> None:
        for edit in self.spec.config_edits:
            path = self.home / edit.path
            text = path.read_text(encoding="utf-8")
            path.write_text(text.replace(edit.old, edit.new), encoding="utf-8")

    def start(self) -> LocalNode:
        command = start_command(self.network, self.spec)
        logger.info("running: %s", command)
        self.logfile_path.parent.mkdir(parents=True, exist_ok=True)
        with self.logfile_path.open("w", encoding="utf-8") as logfile:
            try:
                process = self.popen(
                    list(command.argv),
                    stdout=logfile,
                    stderr=subprocess.STDOUT,
                )
            except FileNotFoundError as exc:
                raise ExecutionFailedError(command.argv, 127, str(exc)) from None
        return LocalNode(process, self.logfile_path)

    def clean(self) -> None:
        """Remove chain state and the node logfile."""
        shutil.rmtree(self.home, ignore_errors=True)
        self.logfile_path.unlink(missing_ok=True)


def clean_all(root: Path) -> None:
    """Remove every local artifact under ``root``."""
    shutil.rmtree(root, ignore_errors=True)
