__all__ = [
    # Networks
    "Network",
    "NetworkDescriptor",
    "GasConfig",
    "GasPrice",
    "KeyRef",
    "Key",
    "KeyringBackend",
    "get_network",
    "custom_network",
    # Commands
    "CommandSpec",
    "Store",
    "Instantiate",
    "Execute",
    "Query",
    "build_command",
    # Operations
    "OperationResult",
    "run_operation",
    "store",
    "instantiate",
    "execute",
    "query",
    "code_info",
    "list_keys",
    "wait_for_blocks",
    # Execution
    "CompletedCommand",
    "Runner",
    "SubprocessRunner",
    # Errors
    "XtaskError",
    "ConfigurationError",
    "ArtifactNotFoundError",
    "ExecutionFailedError",
    "TransactionRejectedError",
    "ResultParseError",
    "MessageError",
]

from .command import CommandSpec, Execute, Instantiate, Query, Store, build_command
from .config import custom_network
from .contract import (
    OperationResult,
    code_info,
    execute,
    instantiate,
    list_keys,
    query,
    run_operation,
    store,
)
from .errors import (
    ArtifactNotFoundError,
    ConfigurationError,
    ExecutionFailedError,
    MessageError,
    ResultParseError,
    TransactionRejectedError,
    XtaskError,
)
from .key import Key, KeyRef, KeyringBackend
from .network import GasConfig, GasPrice, Network, NetworkDescriptor
from .network.registry import get_network
from .shell import CompletedCommand, Runner, SubprocessRunner
from .status import wait_for_blocks
