"""Utility modules.

Import directly from submodules when needed:
  - from tfbackend.utils.logging_setup import ...
"""

__all__ = [
    "logging_setup",
]
