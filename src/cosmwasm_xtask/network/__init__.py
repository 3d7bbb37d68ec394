from .base import Network, NetworkDescriptor, network_home, validate_endpoint
from .gas import GasConfig, GasPrice

__all__ = [
    "Network",
    "NetworkDescriptor",
    "network_home",
    "validate_endpoint",
    "GasConfig",
    "GasPrice",
]
