"""Tests for the backend configuration and authentication text."""

from tests.conftest import ACCOUNT
from tfbackend.emitter import (
    portal_url,
    render_auth_instructions,
    render_backend_block,
    render_next_steps,
    render_plan,
    render_report,
    render_resource_summary,
)


def test_backend_block_uses_exact_names(configs):
    block = render_backend_block(configs)
    assert block.splitlines() == [
        "terraform {",
        '  backend "azurerm" {',
        '    resource_group_name = "rg-test"',
        '    storage_account_name = "sttfstatetest"',
        '    container_name = "tfstate"',
        '    key = "terraform.tfstate"',
        "  }",
        "}",
    ]


def test_auth_instructions_hide_key_by_default(configs):
    text = render_auth_instructions(configs, ACCOUNT)
    assert "az storage account keys list" in text
    assert '--account-name "sttfstatetest"' in text
    assert "WARNING" not in text
    assert 'export ARM_CLIENT_ID="<service-principal-app-id>"' in text
    assert f'export ARM_TENANT_ID="{ACCOUNT["tenantId"]}"' in text
    assert f'export ARM_SUBSCRIPTION_ID="{ACCOUNT["id"]}"' in text
    assert 'export ARM_USE_MSI="true"' in text


def test_auth_instructions_with_key(configs):
    text = render_auth_instructions(configs, ACCOUNT, access_key="s3cret==")
    assert 'export ARM_ACCESS_KEY="s3cret=="' in text
    assert "keys list" not in text
    assert "WARNING" in text


def test_resource_summary_basic(configs):
    text = render_resource_summary(configs)
    assert "- Storage Account: sttfstatetest\n" in text
    assert "- TLS 1.2 minimum" in text
    assert "- Soft delete retention: 30 days" in text
    assert "Virtual Network" not in text
    assert "Private endpoint enabled" not in text


def test_resource_summary_private(private_configs):
    text = render_resource_summary(private_configs)
    assert "sttfstatetest (with private endpoint)" in text
    assert "- Virtual Network: vnet-terraform-backend" in text
    assert "- Private DNS Zone: privatelink.blob.core.windows.net" in text
    assert "- Public network access disabled" in text


def test_resource_summary_source_ip(configs):
    configs.source_ip = "203.0.113.7"
    assert "restricted to 203.0.113.7" in render_resource_summary(configs)


def test_portal_url(configs):
    assert portal_url("sub-1", configs) == (
        "https://portal.azure.com/#@/resource/subscriptions/sub-1"
        "/resourceGroups/rg-test/providers/Microsoft.Storage"
        "/storageAccounts/sttfstatetest"
    )


def test_next_steps_private_mentions_network(private_configs):
    assert "vnet-terraform-backend" in render_next_steps(private_configs)


def test_report_contains_every_section(configs):
    report = render_report(configs, ACCOUNT)
    assert render_backend_block(configs) in report
    assert "Environment Variables" in report
    assert "Resources Created" in report
    assert "Next Steps" in report
    assert portal_url(ACCOUNT["id"], configs) in report


def test_plan(private_configs):
    private_configs.subscription = "sub-1"
    plan = render_plan(private_configs)
    assert "Resource Group: rg-test" in plan
    assert "Storage Account: sttfstatetest (a random suffix" in plan
    assert "if the name is taken" in plan
    assert "Location: East US" in plan
    assert "Subscription: sub-1" in plan
    assert "VNet: vnet-terraform-backend" in plan
