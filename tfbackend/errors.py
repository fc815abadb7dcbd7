"""Exceptions raised while setting up the state backend."""

import subprocess


class PreflightError(RuntimeError):
    """The Azure CLI is missing or there is no usable session."""


class SetupCancelled(Exception):
    """The operator declined the confirmation prompt."""


class ProvisioningError(RuntimeError):
    """A provisioning step failed; earlier steps are left in place."""

    def __init__(self, step: str, index: int, cause: Exception):
        self.step = step
        self.index = index
        self.cause = cause
        if isinstance(cause, subprocess.CalledProcessError):
            detail = (cause.stderr or "").strip() or (
                f"exit code {cause.returncode}"
            )
        else:
            detail = str(cause)
        super().__init__(f"Step {index} ({step}) failed: {detail}")
