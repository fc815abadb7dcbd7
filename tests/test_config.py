"""Tests for building configs from command-line arguments."""

from unittest.mock import Mock

import pytest
import requests

from tfbackend.azure.defaults import (
    DEFAULT_CONTAINER_NAME,
    DEFAULT_LOCATION,
    DEFAULT_RESOURCE_GROUP,
    DEFAULT_RETENTION_DAYS,
    DEFAULT_STATE_KEY,
    DEFAULT_VNET_NAME,
    PRIVATE_DNS_ZONE,
)
from tfbackend.config import BackendConfigs, NetworkConfigs
from tfbackend.config import backend_config
from tfbackend.config.utils import get_host_ip
from tfbackend.parser import parse_args


def from_argv(*argv: str) -> BackendConfigs:
    return BackendConfigs.from_args(parse_args(list(argv)))


class TestBackendConfigs:
    def test_defaults(self):
        configs = from_argv()
        assert configs.resource_group == DEFAULT_RESOURCE_GROUP
        assert configs.container == DEFAULT_CONTAINER_NAME
        assert configs.location == DEFAULT_LOCATION
        assert configs.state_key == DEFAULT_STATE_KEY
        assert configs.retention_days == DEFAULT_RETENTION_DAYS
        assert configs.subscription is None
        assert configs.network is None
        assert configs.source_ip is None
        assert configs.storage_account.startswith("sttfstate")
        assert configs.public_network_access == "Enabled"

    def test_overrides(self):
        configs = from_argv(
            "--resource-group",
            "rg-test",
            "--storage-account",
            "mystate01",
            "--container",
            "state",
            "--location",
            "westeurope",
            "--subscription",
            "sub-123",
        )
        assert configs.resource_group == "rg-test"
        assert configs.storage_account == "mystate01"
        assert configs.container == "state"
        assert configs.location == "westeurope"
        assert configs.subscription == "sub-123"

    def test_region_alias(self):
        assert from_argv("--region", "westus3").location == "westus3"

    def test_invalid_storage_account_raises(self):
        with pytest.raises(ValueError, match="Invalid storage account name"):
            from_argv("--storage-account", "My_State")

    @pytest.mark.parametrize("days", ["0", "366"])
    def test_retention_days_out_of_range(self, days):
        with pytest.raises(ValueError, match="--retention-days"):
            from_argv("--retention-days", days)

    def test_private_endpoint(self):
        configs = from_argv("--private-endpoint", "--vnet-name", "vnet-x")
        assert configs.private
        assert configs.network.vnet_name == "vnet-x"
        assert configs.network.dns_zone == PRIVATE_DNS_ZONE
        assert configs.public_network_access == "Disabled"

    def test_private_endpoint_and_source_ip_conflict(self):
        with pytest.raises(ValueError, match="cannot be combined"):
            from_argv("--private-endpoint", "--restrict-to-source-ip")

    def test_source_ip_from_argument(self):
        configs = from_argv(
            "--restrict-to-source-ip", "--source-ip", "203.0.113.7"
        )
        assert configs.source_ip == "203.0.113.7"

    def test_source_ip_is_looked_up(self, monkeypatch):
        lookup = Mock(return_value="198.51.100.9")
        monkeypatch.setattr(backend_config, "get_host_ip", lookup)
        configs = from_argv("--restrict-to-source-ip")
        assert configs.source_ip == "198.51.100.9"
        lookup.assert_called_once()

    def test_source_ip_ignored_without_restriction(self):
        assert from_argv("--source-ip", "203.0.113.7").source_ip is None

    def test_to_dict(self, private_configs):
        private_configs.subscription = "sub-123"
        data = private_configs.to_dict()
        assert data["resourceGroup"] == "rg-test"
        assert data["storageAccount"] == "sttfstatetest"
        assert data["subscription"] == "sub-123"
        assert data["network"]["vnetName"] == DEFAULT_VNET_NAME
        assert "sourceIp" not in data


class TestNetworkConfigs:
    def test_none_without_private_endpoint(self):
        assert NetworkConfigs.from_args(parse_args([])) is None


class TestGetHostIp:
    def test_returns_stripped_ip(self, monkeypatch):
        response = Mock(text="203.0.113.7\n")
        monkeypatch.setattr(requests, "get", Mock(return_value=response))
        assert get_host_ip() == "203.0.113.7"
        response.raise_for_status.assert_called_once()

    def test_request_error_raises_runtime_error(self, monkeypatch):
        monkeypatch.setattr(
            requests, "get", Mock(side_effect=requests.ConnectionError("down"))
        )
        with pytest.raises(RuntimeError, match="Failed to fetch host IP"):
            get_host_ip()

    def test_empty_response_raises(self, monkeypatch):
        monkeypatch.setattr(requests, "get", Mock(return_value=Mock(text="")))
        with pytest.raises(RuntimeError, match="Empty response"):
            get_host_ip()
