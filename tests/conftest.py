import json
import subprocess

import pytest

from tfbackend.config import BackendConfigs, NetworkConfigs

ACCOUNT = {
    "id": "00000000-1111-2222-3333-444444444444",
    "name": "test-subscription",
    "tenantId": "aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee",
}
STORAGE_ACCOUNT_ID = (
    "/subscriptions/00000000-1111-2222-3333-444444444444/resourceGroups/"
    "rg-test/providers/Microsoft.Storage/storageAccounts/sttfstatetest"
)
ACCESS_KEY = "c2VjcmV0LWtleQ=="
PRIVATE_IP = "10.0.1.4"

# Calls that only read state
READ_VERBS = {
    "az",
    "az account show",
    "az account set",
    "az group show",
    "az storage account check-name",
    "az storage account show",
    "az storage account keys list",
    "az network private-endpoint show",
}


def verb(cmd: list[str]) -> str:
    """Leading command words, e.g. 'az storage account create'."""
    words = []
    for token in cmd:
        if token.startswith("-"):
            break
        words.append(token)
    return " ".join(words)


def flag(cmd: list[str], name: str) -> str:
    return cmd[cmd.index(name) + 1]


class FakeAz:
    """Stand-in for subprocess.run that records az invocations."""

    def __init__(self):
        self.installed = True
        self.calls: list[list[str]] = []
        self._responses: list[tuple[list[str], int, str, str]] = []
        self.respond(["az", "account", "show"], json.dumps(ACCOUNT))
        self.respond(["az", "group", "show"], returncode=3, stderr="not found")
        self.respond(["az", "storage", "account", "check-name"], "true\n")
        self.respond(
            ["az", "storage", "account", "show"], f"{STORAGE_ACCOUNT_ID}\n"
        )
        self.respond(["az", "storage", "account", "keys"], f"{ACCESS_KEY}\n")
        self.respond(
            ["az", "network", "private-endpoint", "show"], f"{PRIVATE_IP}\n"
        )

    def respond(
        self,
        prefix: list[str],
        stdout: str = "",
        returncode: int = 0,
        stderr: str = "",
    ):
        # Newest response wins
        self._responses.insert(0, (prefix, returncode, stdout, stderr))

    def fail(self, prefix: list[str], stderr: str = "ERROR: boom"):
        self.respond(prefix, returncode=1, stderr=stderr)

    def __call__(self, cmd, capture_output=False, text=False, check=False):
        cmd = [str(c) for c in cmd]
        if not self.installed:
            raise FileNotFoundError(2, "No such file or directory", cmd[0])
        self.calls.append(cmd)

        returncode, stdout, stderr = 0, "", ""
        for prefix, rc, out, err in self._responses:
            if cmd[: len(prefix)] == prefix:
                returncode, stdout, stderr = rc, out, err
                break

        if check and returncode != 0:
            raise subprocess.CalledProcessError(
                returncode, cmd, output=stdout, stderr=stderr
            )
        return subprocess.CompletedProcess(cmd, returncode, stdout, stderr)

    @property
    def verbs(self) -> list[str]:
        return [verb(cmd) for cmd in self.calls]

    @property
    def provisioning_calls(self) -> list[list[str]]:
        return [cmd for cmd in self.calls if verb(cmd) not in READ_VERBS]

    @property
    def provisioning_verbs(self) -> list[str]:
        return [verb(cmd) for cmd in self.provisioning_calls]

    def find(self, verb_: str) -> list[list[str]]:
        return [cmd for cmd in self.calls if verb(cmd) == verb_]


@pytest.fixture
def fake_az(monkeypatch) -> FakeAz:
    fake = FakeAz()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


@pytest.fixture(autouse=True)
def no_public_ip_lookup(monkeypatch):
    """Never call out to the IP lookup service."""

    def fail(*args, **kwargs):
        raise AssertionError("unexpected public IP lookup")

    monkeypatch.setattr("tfbackend.config.backend_config.get_host_ip", fail)


@pytest.fixture
def configs() -> BackendConfigs:
    return BackendConfigs(
        resource_group="rg-test",
        storage_account="sttfstatetest",
        container="tfstate",
        location="East US",
        state_key="terraform.tfstate",
        retention_days=30,
    )


@pytest.fixture
def private_configs(configs) -> BackendConfigs:
    configs.network = NetworkConfigs()
    return configs
