"""
Sequential provisioning of the state backend resources.

Steps run once, in a fixed order. The first failing step aborts the run
and nothing created before it is rolled back.
"""

import logging
import subprocess
from typing import Callable

from tfbackend.azure.api import AzureApi
from tfbackend.config import BackendConfigs
from tfbackend.errors import ProvisioningError
from tfbackend.naming import allocate_storage_account_name

logger = logging.getLogger(__name__)

Step = tuple[str, Callable[[], None]]


class BackendProvisioner:
    def __init__(self, configs: BackendConfigs, api: type[AzureApi] = AzureApi):
        self.configs = configs
        self.api = api
        self.completed: list[str] = []

    def steps(self) -> list[Step]:
        """The ordered steps for this configuration."""
        steps: list[Step] = [("resource_group", self.create_resource_group)]
        if self.configs.private:
            steps += [
                ("virtual_network", self.create_virtual_network),
                ("subnet", self.create_subnet),
            ]
        steps.append(("storage_account", self.create_storage_account))
        if self.configs.source_ip:
            steps.append(("source_ip_rule", self.restrict_to_source_ip))
        steps.append(("blob_container", self.create_blob_container))
        if self.configs.private:
            # The endpoint needs the storage account's resource id
            steps += [
                ("private_endpoint", self.create_private_endpoint),
                ("private_dns_zone", self.create_private_dns_zone),
                ("private_dns_link", self.link_private_dns_zone),
                ("private_dns_record", self.create_private_dns_record),
            ]
        steps += [
            ("versioning", self.enable_versioning),
            ("delete_retention", self.enable_delete_retention),
        ]
        return steps

    def provision(self) -> None:
        """Run every step, raising ProvisioningError on the first failure."""
        steps = self.steps()
        for index, (name, step) in enumerate(steps, start=1):
            logger.info(f"[{index}/{len(steps)}] {name}")
            try:
                step()
            except (subprocess.CalledProcessError, RuntimeError) as e:
                raise ProvisioningError(name, index, e) from e
            self.completed.append(name)
        logger.info("All resources provisioned")

    def create_resource_group(self) -> None:
        self.api.ensure_created_resource_group(self.configs)

    def create_virtual_network(self) -> None:
        self.api.create_vnet(self.configs)

    def create_subnet(self) -> None:
        self.api.create_subnet(self.configs)

    def create_storage_account(self) -> None:
        self.configs.storage_account = allocate_storage_account_name(
            self.api, self.configs.storage_account
        )
        self.api.create_storage_account(self.configs)

    def restrict_to_source_ip(self) -> None:
        self.api.restrict_to_ip(self.configs, self.configs.source_ip)

    def create_blob_container(self) -> None:
        self.api.create_blob_container(self.configs)

    def create_private_endpoint(self) -> None:
        storage_account_id = self.api.get_storage_account_id(self.configs)
        self.api.create_private_endpoint(self.configs, storage_account_id)

    def create_private_dns_zone(self) -> None:
        self.api.create_private_dns_zone(self.configs)

    def link_private_dns_zone(self) -> None:
        self.api.link_private_dns_zone(self.configs)

    def create_private_dns_record(self) -> None:
        ip_address = self.api.get_private_endpoint_ip(self.configs)
        self.api.create_private_dns_record(self.configs, ip_address)

    def enable_versioning(self) -> None:
        self.api.enable_versioning(self.configs)

    def enable_delete_retention(self) -> None:
        self.api.enable_delete_retention(self.configs)
