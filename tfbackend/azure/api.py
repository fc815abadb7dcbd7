#!/usr/bin/env python3
"""
Azure API functionality.
Azure CLI wrapper for the state backend resources.
"""

import json
import logging
import subprocess
from typing import Any

from tfbackend.azure.defaults import (
    MIN_TLS_VERSION,
    PRIVATE_ENDPOINT_GROUP_ID,
)
from tfbackend.config import BackendConfigs
from tfbackend.errors import PreflightError

logger = logging.getLogger(__name__)


def _tag_args(tags: dict[str, str]) -> list[str]:
    if not tags:
        return []
    return ["--tags", *(f"{key}={value}" for key, value in tags.items())]


class AzureApi:
    """Wrapper for Azure CLI commands."""

    @staticmethod
    def run_command(
        cmd: list[str],
        show_logs: bool = False,
    ) -> subprocess.CompletedProcess:
        """Execute an Azure CLI command."""
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=not show_logs,
                text=True,
                check=True,
            )
            return result
        except subprocess.CalledProcessError as e:
            logger.info(f"Command failed: {' '.join(cmd)}")
            logger.info(f"Error: {e.stderr}")
            raise

    # Preflight

    @staticmethod
    def check_dependencies():
        """Check if the Azure CLI is installed."""
        try:
            subprocess.run(["az", "--version"], capture_output=True, check=True)
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            raise PreflightError(
                "Azure CLI is not installed. Please install it first: "
                "https://learn.microsoft.com/cli/azure/install-azure-cli"
            ) from e

    @classmethod
    def get_account(cls) -> dict[str, Any]:
        """Return the active account, failing if not logged in."""
        try:
            result = cls.run_command(["az", "account", "show", "-o", "json"])
        except subprocess.CalledProcessError as e:
            raise PreflightError(
                "You are not logged in to Azure. Please run 'az login'"
            ) from e

        account = json.loads(result.stdout)
        if not account.get("id"):
            raise PreflightError(
                "No active subscription found. Please run "
                "'az account set --subscription <subscription-id>'"
            )
        return account

    @classmethod
    def set_subscription(cls, subscription_id: str) -> None:
        logger.info(f"Setting subscription to: {subscription_id}")
        cmd = ["az", "account", "set", "--subscription", subscription_id]
        try:
            cls.run_command(cmd)
        except subprocess.CalledProcessError as e:
            raise PreflightError(
                f"Could not select subscription {subscription_id}"
            ) from e

    # Resource group

    @classmethod
    def resource_group_exists(cls, name: str) -> bool:
        """Check if resource group exists."""
        try:
            cmd = ["az", "group", "show", "--name", name]
            cls.run_command(cmd)
            return True
        except subprocess.CalledProcessError:
            return False

    @classmethod
    def create_resource_group(
        cls,
        name: str,
        location: str,
        tags: dict[str, str],
        show_logs: bool = False,
    ) -> None:
        """Create a resource group."""
        logger.info(f"Creating resource group: {name} in {location}")
        cmd = [
            "az",
            "group",
            "create",
            "--name",
            name,
            "--location",
            location,
            *_tag_args(tags),
        ]
        cls.run_command(cmd, show_logs=show_logs)

    @classmethod
    def ensure_created_resource_group(cls, configs: BackendConfigs) -> bool:
        """Create the resource group unless it exists. True if created."""
        if cls.resource_group_exists(configs.resource_group):
            logger.warning(
                f"Resource group {configs.resource_group} already exists"
            )
            return False
        cls.create_resource_group(
            configs.resource_group,
            configs.location,
            configs.tags,
            show_logs=configs.show_logs,
        )
        return True

    # Storage account

    @classmethod
    def storage_account_name_available(cls, name: str) -> bool:
        cmd = [
            "az",
            "storage",
            "account",
            "check-name",
            "--name",
            name,
            "--query",
            "nameAvailable",
            "-o",
            "tsv",
        ]
        result = cls.run_command(cmd)
        return result.stdout.strip().lower() == "true"

    @classmethod
    def create_storage_account(cls, configs: BackendConfigs) -> None:
        """Create a storage account with secure defaults."""
        logger.info(f"Creating storage account: {configs.storage_account}")
        cmd = [
            "az",
            "storage",
            "account",
            "create",
            "--name",
            configs.storage_account,
            "--resource-group",
            configs.resource_group,
            "--location",
            configs.location,
            "--sku",
            configs.sku,
            "--kind",
            configs.kind,
            "--access-tier",
            configs.access_tier,
            "--https-only",
            "true",
            "--min-tls-version",
            MIN_TLS_VERSION,
            "--allow-blob-public-access",
            "false",
            "--public-network-access",
            configs.public_network_access,
            *_tag_args(configs.tags),
        ]
        cls.run_command(cmd, show_logs=configs.show_logs)

    @classmethod
    def get_storage_account_id(cls, configs: BackendConfigs) -> str:
        cmd = [
            "az",
            "storage",
            "account",
            "show",
            "--resource-group",
            configs.resource_group,
            "--name",
            configs.storage_account,
            "--query",
            "id",
            "-o",
            "tsv",
        ]
        result = cls.run_command(cmd)
        return result.stdout.strip()

    @classmethod
    def get_storage_account_key(cls, configs: BackendConfigs) -> str:
        """Return the first access key of the storage account."""
        cmd = [
            "az",
            "storage",
            "account",
            "keys",
            "list",
            "--resource-group",
            configs.resource_group,
            "--account-name",
            configs.storage_account,
            "--query",
            "[0].value",
            "-o",
            "tsv",
        ]
        result = cls.run_command(cmd)
        return result.stdout.strip()

    @classmethod
    def create_blob_container(cls, configs: BackendConfigs) -> None:
        """Create a private blob container through the management plane."""
        logger.info(f"Creating blob container: {configs.container}")
        cmd = [
            "az",
            "storage",
            "container-rm",
            "create",
            "--name",
            configs.container,
            "--storage-account",
            configs.storage_account,
            "--resource-group",
            configs.resource_group,
            "--public-access",
            "off",
        ]
        cls.run_command(cmd, show_logs=configs.show_logs)

    @classmethod
    def _update_blob_service_properties(
        cls, configs: BackendConfigs, flags: list[str]
    ) -> None:
        cmd = [
            "az",
            "storage",
            "account",
            "blob-service-properties",
            "update",
            "--resource-group",
            configs.resource_group,
            "--account-name",
            configs.storage_account,
            *flags,
        ]
        cls.run_command(cmd, show_logs=configs.show_logs)

    @classmethod
    def enable_versioning(cls, configs: BackendConfigs) -> None:
        logger.info("Enabling blob versioning")
        cls._update_blob_service_properties(
            configs, ["--enable-versioning", "true"]
        )

    @classmethod
    def enable_delete_retention(cls, configs: BackendConfigs) -> None:
        logger.info(
            f"Enabling blob soft delete ({configs.retention_days} days)"
        )
        cls._update_blob_service_properties(
            configs,
            [
                "--enable-delete-retention",
                "true",
                "--delete-retention-days",
                str(configs.retention_days),
            ],
        )

    @classmethod
    def restrict_to_ip(cls, configs: BackendConfigs, ip_address: str) -> None:
        """Allow only ip_address through the storage account firewall."""
        logger.info(f"Allowing {ip_address} through the storage firewall")
        cmd = [
            "az",
            "storage",
            "account",
            "network-rule",
            "add",
            "--resource-group",
            configs.resource_group,
            "--account-name",
            configs.storage_account,
            "--ip-address",
            ip_address,
        ]
        cls.run_command(cmd, show_logs=configs.show_logs)

        logger.info("Denying all other public traffic")
        cmd = [
            "az",
            "storage",
            "account",
            "update",
            "--resource-group",
            configs.resource_group,
            "--name",
            configs.storage_account,
            "--default-action",
            "Deny",
        ]
        cls.run_command(cmd, show_logs=configs.show_logs)

    # Private networking

    @classmethod
    def create_vnet(cls, configs: BackendConfigs) -> None:
        """Create the virtual network for the private endpoint."""
        network = configs.network
        logger.info(f"Creating virtual network: {network.vnet_name}")
        cmd = [
            "az",
            "network",
            "vnet",
            "create",
            "--resource-group",
            configs.resource_group,
            "--name",
            network.vnet_name,
            "--address-prefix",
            network.vnet_prefix,
            "--location",
            configs.location,
        ]
        cls.run_command(cmd, show_logs=configs.show_logs)

    @classmethod
    def create_subnet(cls, configs: BackendConfigs) -> None:
        network = configs.network
        logger.info(f"Creating subnet: {network.subnet_name}")
        cmd = [
            "az",
            "network",
            "vnet",
            "subnet",
            "create",
            "--resource-group",
            configs.resource_group,
            "--vnet-name",
            network.vnet_name,
            "--name",
            network.subnet_name,
            "--address-prefixes",
            network.subnet_prefix,
            "--disable-private-endpoint-network-policies",
            "true",
        ]
        cls.run_command(cmd, show_logs=configs.show_logs)

    @classmethod
    def create_private_endpoint(
        cls, configs: BackendConfigs, storage_account_id: str
    ) -> None:
        """Create a blob private endpoint for the storage account."""
        network = configs.network
        logger.info(
            f"Creating private endpoint: {network.private_endpoint_name}"
        )
        cmd = [
            "az",
            "network",
            "private-endpoint",
            "create",
            "--resource-group",
            configs.resource_group,
            "--name",
            network.private_endpoint_name,
            "--vnet-name",
            network.vnet_name,
            "--subnet",
            network.subnet_name,
            "--private-connection-resource-id",
            storage_account_id,
            "--group-id",
            PRIVATE_ENDPOINT_GROUP_ID,
            "--connection-name",
            network.connection_name,
            "--location",
            configs.location,
        ]
        cls.run_command(cmd, show_logs=configs.show_logs)

    @classmethod
    def get_private_endpoint_ip(cls, configs: BackendConfigs) -> str:
        """Get the private IP address of the endpoint."""
        cmd = [
            "az",
            "network",
            "private-endpoint",
            "show",
            "--resource-group",
            configs.resource_group,
            "--name",
            configs.network.private_endpoint_name,
            "--query",
            "customDnsConfigs[0].ipAddresses[0]",
            "-o",
            "tsv",
        ]
        result = cls.run_command(cmd)
        ip = result.stdout.strip()
        if not ip or ip == "None":
            raise RuntimeError(
                "Private endpoint "
                f"{configs.network.private_endpoint_name} has no IP address"
            )
        return ip

    @classmethod
    def create_private_dns_zone(cls, configs: BackendConfigs) -> None:
        logger.info(f"Creating private DNS zone: {configs.network.dns_zone}")
        cmd = [
            "az",
            "network",
            "private-dns",
            "zone",
            "create",
            "--resource-group",
            configs.resource_group,
            "--name",
            configs.network.dns_zone,
        ]
        cls.run_command(cmd, show_logs=configs.show_logs)

    @classmethod
    def link_private_dns_zone(cls, configs: BackendConfigs) -> None:
        """Link the private DNS zone to the virtual network."""
        network = configs.network
        logger.info(f"Linking {network.dns_zone} to {network.vnet_name}")
        cmd = [
            "az",
            "network",
            "private-dns",
            "link",
            "vnet",
            "create",
            "--resource-group",
            configs.resource_group,
            "--zone-name",
            network.dns_zone,
            "--name",
            network.dns_link_name,
            "--virtual-network",
            network.vnet_name,
            "--registration-enabled",
            "false",
        ]
        cls.run_command(cmd, show_logs=configs.show_logs)

    @classmethod
    def create_private_dns_record(
        cls, configs: BackendConfigs, ip_address: str
    ) -> None:
        """Map <storage account>.<zone> to the endpoint IP."""
        zone = configs.network.dns_zone
        record = configs.storage_account
        logger.info(f"Mapping {record}.{zone} to {ip_address}")
        cmd = [
            "az",
            "network",
            "private-dns",
            "record-set",
            "a",
            "create",
            "--resource-group",
            configs.resource_group,
            "--zone-name",
            zone,
            "--name",
            record,
        ]
        cls.run_command(cmd, show_logs=configs.show_logs)

        cmd = [
            "az",
            "network",
            "private-dns",
            "record-set",
            "a",
            "add-record",
            "--resource-group",
            configs.resource_group,
            "--zone-name",
            zone,
            "--record-set-name",
            record,
            "--ipv4-address",
            ip_address,
        ]
        cls.run_command(cmd, show_logs=configs.show_logs)
