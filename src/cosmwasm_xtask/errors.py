"""
Error taxonomy for cosmwasm-xtask.

Every error carries an ``exit_code`` so the CLI can map failures to
distinct process exit statuses.
"""

from __future__ import annotations

from typing import Optional, Sequence


class XtaskError(RuntimeError):
    exit_code: int = 1


class ConfigurationError(XtaskError):
    """A network descriptor or setting is invalid. Raised before any process runs."""

    exit_code = 2


class ArtifactNotFoundError(XtaskError):
    exit_code = 3

    def __init__(self, path: object) -> None:
        super().__init__(f"Contract artifact not found: {path}")
        self.path = path


class ExecutionFailedError(XtaskError):
    """The node binary exited with a non-zero status."""

    exit_code = 4

    def __init__(
        self,
        argv: Sequence[str],
        returncode: int,
        stderr: str,
    ) -> None:
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(f"Command failed ({argv[0] if argv else '?'}): {detail}")
        self.argv = tuple(argv)
        self.returncode = returncode
        self.stderr = stderr


class TransactionRejectedError(ExecutionFailedError):
    """The binary exited cleanly but the chain reported a non-zero tx code."""

    def __init__(self, argv: Sequence[str], code: int, raw_log: str) -> None:
        super().__init__(argv, 0, raw_log)
        self.code = code


class ResultParseError(XtaskError):
    exit_code = 5

    def __init__(self, field: str, output: str, reason: Optional[str] = None) -> None:
        message = f"Could not locate {field} in command output"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.field = field
        self.output = output


class MessageError(XtaskError):
    """A contract message is not valid JSON."""

    exit_code = 6


__all__ = [
    "XtaskError",
    "ConfigurationError",
    "ArtifactNotFoundError",
    "ExecutionFailedError",
    "TransactionRejectedError",
    "ResultParseError",
    "MessageError",
]
