"""
Terraform backend configuration and authentication instructions.

Everything here is pure formatting; the CLI prints the result.
"""

from typing import Any

from tfbackend.azure.defaults import MIN_TLS_VERSION, PORTAL_URL
from tfbackend.config import BackendConfigs

RULE = "=" * 77


def _heading(title: str) -> list[str]:
    return [title, "-" * len(title)]


def render_backend_block(configs: BackendConfigs) -> str:
    return "\n".join(
        [
            "terraform {",
            '  backend "azurerm" {',
            f'    resource_group_name = "{configs.resource_group}"',
            f'    storage_account_name = "{configs.storage_account}"',
            f'    container_name = "{configs.container}"',
            f'    key = "{configs.state_key}"',
            "  }",
            "}",
        ]
    )


def keys_list_command(configs: BackendConfigs) -> str:
    return (
        "az storage account keys list "
        f'--resource-group "{configs.resource_group}" '
        f'--account-name "{configs.storage_account}" '
        "--query '[0].value' -o tsv"
    )


def render_auth_instructions(
    configs: BackendConfigs,
    account: dict[str, Any],
    access_key: str | None = None,
) -> str:
    """Environment variables for the three ways Terraform can authenticate.

    The access key is only included when one is passed in; otherwise the
    command that fetches it is shown instead.
    """
    subscription_id = account.get("id", "<subscription-id>")
    tenant_id = account.get("tenantId", "<tenant-id>")

    if access_key:
        key_line = f'export ARM_ACCESS_KEY="{access_key}"'
    else:
        key_line = f'export ARM_ACCESS_KEY="$({keys_list_command(configs)})"'

    lines = _heading("Environment Variables (for authentication):")
    lines += [
        "",
        "Option 1: storage account access key",
        f"  {key_line}",
        "",
        "Option 2: service principal",
        '  export ARM_CLIENT_ID="<service-principal-app-id>"',
        '  export ARM_CLIENT_SECRET="<service-principal-secret>"',
        f'  export ARM_TENANT_ID="{tenant_id}"',
        f'  export ARM_SUBSCRIPTION_ID="{subscription_id}"',
        "",
        "Option 3: managed identity",
        '  export ARM_USE_MSI="true"',
        f'  export ARM_TENANT_ID="{tenant_id}"',
        f'  export ARM_SUBSCRIPTION_ID="{subscription_id}"',
    ]
    if access_key:
        lines += [
            "",
            "WARNING: the access key above grants full access to the "
            "storage account. Store it securely.",
        ]
    return "\n".join(lines)


def render_resource_summary(configs: BackendConfigs) -> str:
    lines = _heading("Resources Created:")
    account_note = " (with private endpoint)" if configs.private else ""
    lines += [
        f"- Resource Group: {configs.resource_group}",
        f"- Storage Account: {configs.storage_account}{account_note}",
        f"- Blob Container: {configs.container}",
        f"- Location: {configs.location}",
    ]
    if configs.network:
        network = configs.network
        lines += [
            f"- Virtual Network: {network.vnet_name}",
            f"- Subnet: {network.subnet_name}",
            f"- Private Endpoint: {network.private_endpoint_name}",
            f"- Private DNS Zone: {network.dns_zone}",
        ]

    features = [
        "HTTPS only access",
        f"TLS {MIN_TLS_VERSION.removeprefix('TLS').replace('_', '.')} minimum",
        "Anonymous blob access disabled",
        "Blob versioning enabled",
        f"Soft delete retention: {configs.retention_days} days",
    ]
    if configs.private:
        features += [
            "Public network access disabled",
            "Private endpoint enabled",
            "Private DNS resolution",
        ]
    elif configs.source_ip:
        features.append(f"Public access restricted to {configs.source_ip}")

    lines += ["", *_heading("Security Features:")]
    lines += [f"- {feature}" for feature in features]
    return "\n".join(lines)


def portal_url(subscription_id: str, configs: BackendConfigs) -> str:
    return (
        f"{PORTAL_URL}/#@/resource/subscriptions/{subscription_id}"
        f"/resourceGroups/{configs.resource_group}"
        "/providers/Microsoft.Storage/storageAccounts/"
        f"{configs.storage_account}"
    )


def render_next_steps(configs: BackendConfigs) -> str:
    lines = _heading("Next Steps:")
    lines += [
        "1. Add the backend configuration to your Terraform files",
        "2. Set one of the authentication options above",
        "3. Run 'terraform init' to initialize the backend",
    ]
    if configs.private:
        lines.append(
            "4. Run Terraform from inside "
            f"{configs.network.vnet_name} (or a peered network)"
        )
    return "\n".join(lines)


def render_report(
    configs: BackendConfigs,
    account: dict[str, Any],
    access_key: str | None = None,
) -> str:
    """The complete text printed after a successful run."""
    sections = [
        RULE,
        "Azure Terraform Backend Setup Complete",
        RULE,
        "\n".join(
            [
                *_heading(
                    "Backend Configuration (add to your Terraform configuration):"
                ),
                "",
                render_backend_block(configs),
            ]
        ),
        render_auth_instructions(configs, account, access_key),
        render_resource_summary(configs),
        render_next_steps(configs),
        "\n".join(
            [
                *_heading("Azure Portal:"),
                portal_url(account.get("id", ""), configs),
            ]
        ),
        RULE,
    ]
    return "\n\n".join(sections)


def render_plan(configs: BackendConfigs) -> str:
    """The configuration shown before asking for confirmation."""
    lines = _heading("Configuration:")
    lines += [
        f"Resource Group: {configs.resource_group}",
        f"Storage Account: {configs.storage_account} "
        "(a random suffix replaces its tail if the name is taken)",
        f"Container: {configs.container}",
        f"Location: {configs.location}",
    ]
    if configs.subscription:
        lines.append(f"Subscription: {configs.subscription}")
    if configs.network:
        lines += [
            f"VNet: {configs.network.vnet_name}",
            f"Private Endpoint: {configs.network.private_endpoint_name}",
        ]
    if configs.source_ip:
        lines.append(f"Allowed IP: {configs.source_ip}")
    return "\n".join(lines)
