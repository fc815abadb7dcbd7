"""Utility functions for configuration."""

import requests

from tfbackend.azure.defaults import PUBLIC_IP_LOOKUP_URL


def get_host_ip(timeout: float = 10.0) -> str:
    """Get the host's public IP address."""
    try:
        response = requests.get(PUBLIC_IP_LOOKUP_URL, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise RuntimeError(f"Failed to fetch host IP: {e}") from e
    ip = response.text.strip()
    if not ip:
        raise RuntimeError(f"Empty response from {PUBLIC_IP_LOOKUP_URL}")
    return ip
