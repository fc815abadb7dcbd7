"""Configuration dataclasses for the state backend."""

from tfbackend.config.backend_config import BackendConfigs
from tfbackend.config.network_config import NetworkConfigs
from tfbackend.config.utils import get_host_ip

__all__ = [
    # Config classes
    "BackendConfigs",
    "NetworkConfigs",
    # Utilities
    "get_host_ip",
]
