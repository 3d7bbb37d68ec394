"""
Process execution.

Runners take a ``CommandSpec``, spawn exactly one process, block until it
exits and hand back what it printed. They never retry and never raise on
a non-zero exit status; interpreting the status is the caller's job.
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Optional, Protocol

from .command import CommandSpec
from .errors import ExecutionFailedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletedCommand:
    argv: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def check(self) -> "CompletedCommand":
        """Raise ``ExecutionFailedError`` unless the process exited with status 0."""
        if not self.ok:
            logger.warning("%s exited with status %d", self.argv[0], self.returncode)
            raise ExecutionFailedError(self.argv, self.returncode, self.stderr)
        return self


class Runner(Protocol):
    def __call__(self, spec: CommandSpec) -> CompletedCommand:
        ...


@dataclass(frozen=True)
class SubprocessRunner:
    """Run commands with ``subprocess.run``, capturing text output."""

    env: Optional[dict[str, str]] = None

    def __call__(self, spec: CommandSpec) -> CompletedCommand:
        logger.info("running: %s", spec)
        env = None
        if self.env is not None:
            env = {**os.environ, **self.env}
        try:
            result = subprocess.run(
                list(spec.argv),
                cwd=spec.cwd,
                input=spec.stdin,
                env=env,
                check=False,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as exc:
            # Mirror the shell's "command not found" status.
            return CompletedCommand(spec.argv, 127, "", str(exc))
        return CompletedCommand(spec.argv, result.returncode, result.stdout, result.stderr)


def default_runner() -> Runner:
    return SubprocessRunner()
