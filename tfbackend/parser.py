#!/usr/bin/env python3
"""
Argument parser for the state backend setup.
"""

import argparse

from tfbackend.azure.defaults import (
    DEFAULT_CONTAINER_NAME,
    DEFAULT_LOCATION,
    DEFAULT_PRIVATE_ENDPOINT_NAME,
    DEFAULT_RESOURCE_GROUP,
    DEFAULT_RETENTION_DAYS,
    DEFAULT_STATE_KEY,
    DEFAULT_SUBNET_NAME,
    DEFAULT_VNET_NAME,
    STORAGE_ACCOUNT_PREFIX,
)
from tfbackend.errors import SetupCancelled


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Names left unset fall back to the defaults in tfbackend.azure.defaults;
    the storage account name is generated when omitted.
    """
    parser = argparse.ArgumentParser(
        prog="tfbackend",
        description=(
            "Create an Azure storage account and blob container "
            "for Terraform remote state"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Resource names
    parser.add_argument(
        "-g",
        "--resource-group",
        type=str,
        default=DEFAULT_RESOURCE_GROUP,
        help=f"Resource group to create (default: {DEFAULT_RESOURCE_GROUP})",
    )
    parser.add_argument(
        "-s",
        "--storage-account",
        type=str,
        default=None,
        help=(
            "Storage account name, 3-24 lowercase letters and digits. "
            f"Defaults to '{STORAGE_ACCOUNT_PREFIX}' plus a timestamp"
        ),
    )
    parser.add_argument(
        "-c",
        "--container",
        type=str,
        default=DEFAULT_CONTAINER_NAME,
        help=f"Blob container name (default: {DEFAULT_CONTAINER_NAME})",
    )
    parser.add_argument(
        "-l",
        "--location",
        "-r",
        "--region",
        type=str,
        default=DEFAULT_LOCATION,
        dest="location",
        help=f"Azure region (default: {DEFAULT_LOCATION})",
    )
    parser.add_argument(
        "--subscription",
        type=str,
        default=None,
        help="Subscription id to use. Defaults to the current subscription",
    )

    # Storage settings
    parser.add_argument(
        "--state-key",
        type=str,
        default=DEFAULT_STATE_KEY,
        help=(
            "State file name used in the backend block "
            f"(default: {DEFAULT_STATE_KEY})"
        ),
    )
    parser.add_argument(
        "--retention-days",
        type=int,
        default=DEFAULT_RETENTION_DAYS,
        help=(
            "Blob soft delete retention in days "
            f"(default: {DEFAULT_RETENTION_DAYS})"
        ),
    )

    # Private networking
    parser.add_argument(
        "--private-endpoint",
        action="store_true",
        default=False,
        help=(
            "Disable public network access and reach the account "
            "through a private endpoint in a new virtual network"
        ),
    )
    parser.add_argument(
        "--vnet-name",
        type=str,
        default=DEFAULT_VNET_NAME,
        help=f"Virtual network name (default: {DEFAULT_VNET_NAME})",
    )
    parser.add_argument(
        "--subnet-name",
        type=str,
        default=DEFAULT_SUBNET_NAME,
        help=f"Subnet name (default: {DEFAULT_SUBNET_NAME})",
    )
    parser.add_argument(
        "--private-endpoint-name",
        type=str,
        default=DEFAULT_PRIVATE_ENDPOINT_NAME,
        help=(
            "Private endpoint name "
            f"(default: {DEFAULT_PRIVATE_ENDPOINT_NAME})"
        ),
    )

    # Public network restriction
    parser.add_argument(
        "--restrict-to-source-ip",
        action="store_true",
        default=False,
        help="Only allow --source-ip through the storage account firewall",
    )
    parser.add_argument(
        "--source-ip",
        type=str,
        help="Source IP address to allow. Defaults to this machine's IP",
    )

    # Output
    parser.add_argument(
        "--show-access-key",
        action="store_true",
        default=False,
        help=(
            "Fetch the storage account key and print it. "
            "By default only the command to fetch it is printed"
        ),
    )
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        default=False,
        help="Do not ask for confirmation",
    )

    # Logging
    parser.add_argument(
        "-v",
        "--logs",
        action="store_true",
        help="If flagged, print Azure CLI output and debug logs as they run",
        default=False,
    )

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return create_parser().parse_args(argv)


def confirm(what: str) -> bool:
    """Ask user for confirmation.

    Args:
        what: Description of the action

    Returns:
        True if user confirms, raises SetupCancelled otherwise
    """
    try:
        inp = input(f"Are you sure you want to {what}? [y/N]\n")
    except EOFError:
        # Closed stdin counts as the default answer
        inp = ""
    if not inp.strip().lower() == "y":
        raise SetupCancelled(f"Aborting; will not {what}")
    return True
