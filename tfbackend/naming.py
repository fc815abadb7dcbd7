"""
Storage account name generation.

Azure storage account names are global, 3-24 characters long and may only
contain lowercase letters and digits.
"""

import logging
import re
import secrets
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tfbackend.azure.api import AzureApi

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 3
MAX_NAME_LENGTH = 24
RANDOM_SUFFIX_LENGTH = 8

_NAME_PATTERN = re.compile(r"^[a-z0-9]+$")


def validate_storage_account_name(name: str) -> None:
    """Raise ValueError if name is not a valid storage account name."""
    if not MIN_NAME_LENGTH <= len(name) <= MAX_NAME_LENGTH:
        raise ValueError(
            f"Invalid storage account name: {name!r}. Must be between "
            f"{MIN_NAME_LENGTH} and {MAX_NAME_LENGTH} characters"
        )
    if not _NAME_PATTERN.match(name):
        raise ValueError(
            f"Invalid storage account name: {name!r}. "
            "Only lowercase letters and digits are allowed"
        )


def _with_suffix(prefix: str, suffix: str) -> str:
    room = MAX_NAME_LENGTH - len(prefix)
    if room <= 0:
        raise ValueError(
            f"Prefix {prefix!r} leaves no room for a suffix "
            f"(max {MAX_NAME_LENGTH} characters)"
        )
    # Keep the least significant end of the suffix
    name = f"{prefix}{suffix[-room:]}"
    validate_storage_account_name(name)
    return name


def timestamp_name(prefix: str, now: float | None = None) -> str:
    """Name with a Unix timestamp suffix, e.g. sttfstate1760860800."""
    ts = int(time.time() if now is None else now)
    return _with_suffix(prefix, str(ts))


def random_name(prefix: str) -> str:
    """Name with 8 random hex characters, e.g. sttfstate3fa94c1e."""
    return _with_suffix(prefix, secrets.token_hex(RANDOM_SUFFIX_LENGTH // 2))


def allocate_storage_account_name(api: type["AzureApi"], name: str) -> str:
    """Return name if available, otherwise one random alternative.

    The alternative keeps as much of name as fits before the random
    suffix. It is not checked again; if it is also taken the storage
    account create call fails.
    """
    if api.storage_account_name_available(name):
        logger.info(f"Storage account name {name} is available")
        return name

    alternative = random_name(name[: MAX_NAME_LENGTH - RANDOM_SUFFIX_LENGTH])
    logger.warning(
        f"Storage account name {name} is not available, "
        f"using alternative name: {alternative}"
    )
    return alternative
