"""Shared fixtures for secrets-loader tests."""
from pathlib import Path

import pytest

from secrets_loader.secrets.domains.errors import SecretServiceError


class FakeSecretClient:
    """In-memory stand-in for a secret service client.

    Records every create_secret call and fails on the names in fail_on.
    """

    def __init__(self, fail_on=()):
        self.fail_on = set(fail_on)
        self.calls = []

    def create_secret(self, name, value, description=""):
        self.calls.append((name, value, description))
        if name in self.fail_on:
            raise SecretServiceError(f"ResourceExistsException: secret {name} already exists")
        return f"arn:aws:secretsmanager:us-east-1:123456789012:secret:{name}-abc123"


@pytest.fixture
def fake_client():
    """Client that accepts every secret."""
    return FakeSecretClient()


@pytest.fixture
def write_csv(tmp_path):
    """Factory fixture writing CSV text to a temporary file and returning its path."""
    def _write(content: str, filename: str = "secrets.csv", encoding: str = "utf-8") -> str:
        path = tmp_path / filename
        path.write_bytes(content.encode(encoding))
        return str(path)
    return _write


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Isolate config resolution from the real home directory and environment."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()
    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setattr(Path, "home", lambda: fake_home)
    for var in ("SECRETS_LOADER_CONFIG", "AWS_REGION", "AWS_DEFAULT_REGION",
                "AWS_PROFILE", "GCP_PROJECT", "GOOGLE_APPLICATION_CREDENTIALS"):
        # setenv first so monkeypatch restores the original state even if code sets it
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)
    return fake_home
