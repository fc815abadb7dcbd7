"""
Azure provisioning utilities.

This package contains all Azure-specific functionality including:
- defaults: Default constants for the state backend
- api: Azure CLI wrapper used by the provisioner
"""

from tfbackend.azure.defaults import (
    DEFAULT_CONTAINER_NAME,
    DEFAULT_LOCATION,
    DEFAULT_RESOURCE_GROUP,
    DEFAULT_RETENTION_DAYS,
    DEFAULT_STATE_KEY,
    PRIVATE_DNS_ZONE,
    STORAGE_ACCOUNT_PREFIX,
)

__all__ = [
    # Default constants
    "DEFAULT_CONTAINER_NAME",
    "DEFAULT_LOCATION",
    "DEFAULT_RESOURCE_GROUP",
    "DEFAULT_RETENTION_DAYS",
    "DEFAULT_STATE_KEY",
    "PRIVATE_DNS_ZONE",
    "STORAGE_ACCOUNT_PREFIX",
]
