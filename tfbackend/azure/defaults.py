"""
Default values for the Terraform state backend on Azure.
"""

# Resource groups

# The resource group that owns the storage account and network resources
DEFAULT_RESOURCE_GROUP = "rg-terraform-state"
DEFAULT_LOCATION = "eastus"

# Storage configuration
STORAGE_ACCOUNT_PREFIX = "sttfstate"
DEFAULT_CONTAINER_NAME = "tfstate"
DEFAULT_STATE_KEY = "terraform.tfstate"
DEFAULT_SKU = "Standard_LRS"
DEFAULT_KIND = "StorageV2"
DEFAULT_ACCESS_TIER = "Hot"
MIN_TLS_VERSION = "TLS1_2"
DEFAULT_RETENTION_DAYS = 30

DEFAULT_TAGS = {
    "purpose": "terraform-backend",
    "environment": "shared",
}

# Private networking
DEFAULT_VNET_NAME = "vnet-terraform-backend"
DEFAULT_VNET_PREFIX = "10.0.0.0/16"
DEFAULT_SUBNET_NAME = "subnet-storage"
DEFAULT_SUBNET_PREFIX = "10.0.1.0/24"
DEFAULT_PRIVATE_ENDPOINT_NAME = "pe-storage-terraform"
PRIVATE_ENDPOINT_CONNECTION_NAME = "terraform-backend-connection"
PRIVATE_ENDPOINT_GROUP_ID = "blob"
PRIVATE_DNS_ZONE = "privatelink.blob.core.windows.net"
PRIVATE_DNS_LINK_NAME = "terraform-backend-dns-link"

# Used to find the operator's IP for --restrict-to-source-ip
PUBLIC_IP_LOOKUP_URL = "https://api.ipify.org"

PORTAL_URL = "https://portal.azure.com"
