"""Workspace build helpers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .command import CommandSpec
from .config import artifacts_dir
from .shell import Runner, default_runner

logger = logging.getLogger(__name__)

OPTIMIZER_IMAGE = "cosmwasm/workspace-optimizer:0.14.0"


def optimize_command(workspace: Path, image: str = OPTIMIZER_IMAGE) -> CommandSpec:
    workspace = workspace.resolve()
    args = (
        "run",
        "--rm",
        "-v",
        f"{workspace}:/code",
        "--mount",
        f"type=volume,source={workspace.name}_cache,target=/code/target",
        "--mount",
        "type=volume,source=registry_cache,target=/usr/local/cargo/registry",
        image,
    )
    return CommandSpec("docker", args, cwd=workspace)


def optimize_workspace(
    workspace: Optional[Path] = None,
    image: str = OPTIMIZER_IMAGE,
    runner: Optional[Runner] = None,
) -> Path:
    """
    Build and optimise every contract in ``workspace`` with the CosmWasm
    workspace optimizer image.

    Returns:
        The artifacts directory the optimised ``.wasm`` files land in
    """
    workspace = (workspace or Path.cwd()).resolve()
    artifacts = workspace / artifacts_dir()
    artifacts.mkdir(parents=True, exist_ok=True)

    logger.info("optimising workspace %s", workspace)
    (runner or default_runner())(optimize_command(workspace, image)).check()
    return artifacts
