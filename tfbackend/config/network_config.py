"""Private networking configuration dataclass."""

import argparse
from dataclasses import dataclass

from tfbackend.azure.defaults import (
    DEFAULT_PRIVATE_ENDPOINT_NAME,
    DEFAULT_SUBNET_NAME,
    DEFAULT_SUBNET_PREFIX,
    DEFAULT_VNET_NAME,
    DEFAULT_VNET_PREFIX,
    PRIVATE_DNS_LINK_NAME,
    PRIVATE_DNS_ZONE,
    PRIVATE_ENDPOINT_CONNECTION_NAME,
)


@dataclass
class NetworkConfigs:
    vnet_name: str = DEFAULT_VNET_NAME
    vnet_prefix: str = DEFAULT_VNET_PREFIX
    subnet_name: str = DEFAULT_SUBNET_NAME
    subnet_prefix: str = DEFAULT_SUBNET_PREFIX
    private_endpoint_name: str = DEFAULT_PRIVATE_ENDPOINT_NAME
    connection_name: str = PRIVATE_ENDPOINT_CONNECTION_NAME
    dns_zone: str = PRIVATE_DNS_ZONE
    dns_link_name: str = PRIVATE_DNS_LINK_NAME

    @staticmethod
    def from_args(args: argparse.Namespace) -> "NetworkConfigs | None":
        """Build network settings, or None when not using a private endpoint."""
        if not args.private_endpoint:
            return None
        return NetworkConfigs(
            vnet_name=args.vnet_name,
            subnet_name=args.subnet_name,
            private_endpoint_name=args.private_endpoint_name,
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "vnetName": self.vnet_name,
            "vnetPrefix": self.vnet_prefix,
            "subnetName": self.subnet_name,
            "subnetPrefix": self.subnet_prefix,
            "privateEndpointName": self.private_endpoint_name,
            "connectionName": self.connection_name,
            "dnsZone": self.dns_zone,
            "dnsLinkName": self.dns_link_name,
        }
