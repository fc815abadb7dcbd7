"""Backend configuration dataclass."""

import argparse
import logging
from dataclasses import dataclass, field
from typing import Any

from tfbackend.azure.defaults import (
    DEFAULT_ACCESS_TIER,
    DEFAULT_KIND,
    DEFAULT_SKU,
    DEFAULT_TAGS,
    STORAGE_ACCOUNT_PREFIX,
)
from tfbackend.config.network_config import NetworkConfigs
from tfbackend.config.utils import get_host_ip
from tfbackend.naming import timestamp_name, validate_storage_account_name

logger = logging.getLogger(__name__)


@dataclass
class BackendConfigs:
    resource_group: str
    storage_account: str
    container: str
    location: str
    state_key: str
    retention_days: int
    subscription: str | None = None
    network: NetworkConfigs | None = None
    source_ip: str | None = None
    sku: str = DEFAULT_SKU
    kind: str = DEFAULT_KIND
    access_tier: str = DEFAULT_ACCESS_TIER
    tags: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_TAGS))
    show_logs: bool = False

    @property
    def private(self) -> bool:
        return self.network is not None

    @property
    def public_network_access(self) -> str:
        return "Disabled" if self.private else "Enabled"

    @staticmethod
    def from_args(args: argparse.Namespace) -> "BackendConfigs":
        storage_account = args.storage_account
        if storage_account is None:
            storage_account = timestamp_name(STORAGE_ACCOUNT_PREFIX)
        validate_storage_account_name(storage_account)

        if args.retention_days < 1 or args.retention_days > 365:
            raise ValueError(
                "--retention-days must be between 1 and 365, "
                f"got {args.retention_days}"
            )

        network = NetworkConfigs.from_args(args)
        if network and args.restrict_to_source_ip:
            raise ValueError(
                "--restrict-to-source-ip cannot be combined with "
                "--private-endpoint; public network access is disabled"
            )

        source_ip = None
        if args.restrict_to_source_ip:
            source_ip = args.source_ip
            if source_ip is None:
                logger.warning(
                    "No --source-ip provided, so fetching IP from ipify.org..."
                )
                source_ip = get_host_ip()
                logger.info(f"Fetched public IP: {source_ip}")

        return BackendConfigs(
            resource_group=args.resource_group,
            storage_account=storage_account,
            container=args.container,
            location=args.location,
            state_key=args.state_key,
            retention_days=args.retention_days,
            subscription=args.subscription,
            network=network,
            source_ip=source_ip,
            show_logs=args.logs,
        )

    def to_dict(self) -> dict[str, Any]:
        kwargs = {}
        if self.subscription:
            kwargs["subscription"] = self.subscription
        if self.network:
            kwargs["network"] = self.network.to_dict()
        if self.source_ip:
            kwargs["sourceIp"] = self.source_ip
        return {
            "resourceGroup": self.resource_group,
            "storageAccount": self.storage_account,
            "container": self.container,
            "location": self.location,
            "stateKey": self.state_key,
            "retentionDays": self.retention_days,
            **kwargs,
            "sku": self.sku,
            "kind": self.kind,
            "accessTier": self.access_tier,
            "tags": self.tags,
            "showLogs": self.show_logs,
        }
