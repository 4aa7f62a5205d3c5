"""Shared test fixtures for opskit tests."""
from types import SimpleNamespace

import pytest

from opskit.core.config import CloudflareConfig, GitHubConfig
from opskit.services.cloudflare import CloudflareClient
from opskit.services.github_cli import GitHubCli


class FakeRunner:
    """In-memory CommandRunner: records calls, answers by argument prefix."""

    def __init__(self):
        self.calls = []
        self._responses = []

    def on(self, *prefix, output="", error=None):
        self._responses.append((tuple(prefix), output, error))
        return self

    def run(self, args, input=None):
        args = list(args)
        self.calls.append((args, input))
        for prefix, output, error in self._responses:
            if tuple(args[:len(prefix)]) == prefix:
                if error is not None:
                    raise error
                return output
        return ""


class FakeSession:
    """Stand-in for requests.Session returning queued API envelopes."""

    def __init__(self, *envelopes):
        self.headers = {}
        self.requests = []
        self._envelopes = list(envelopes)

    def queue(self, envelope):
        self._envelopes.append(envelope)
        return self

    def request(self, method, url, json=None, params=None, timeout=None):
        self.requests.append(
            SimpleNamespace(method=method, url=url, json=json, params=params, timeout=timeout)
        )
        envelope = self._envelopes.pop(0)
        return SimpleNamespace(json=lambda: envelope)


def ok(result):
    """Successful Cloudflare envelope."""
    return {"success": True, "result": result, "errors": [], "messages": []}


def record(**overrides):
    data = {
        "id": "abc123",
        "type": "A",
        "name": "test.domain.com",
        "content": "1.1.1.1",
        "ttl": 300,
        "proxied": True,
        "zone_id": "zone-1",
    }
    data.update(overrides)
    return data


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def github(fake_runner):
    """GitHubCli wired to the fake runner."""
    return GitHubCli(runner=fake_runner, config=GitHubConfig())


@pytest.fixture
def cf_config():
    return CloudflareConfig(api_token="test-token", zone_id="zone-1")


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def cloudflare(cf_config, fake_session):
    """CloudflareClient talking to the fake session."""
    return CloudflareClient(cf_config, session=fake_session)


@pytest.fixture
def cf_env(monkeypatch):
    """Cloudflare credentials in the environment."""
    monkeypatch.setenv("CF_API_TOKEN", "test-token")
    monkeypatch.setenv("CF_ZONE_ID", "zone-1")
    monkeypatch.delenv("CF_API_BASE", raising=False)
    monkeypatch.delenv("CF_TIMEOUT", raising=False)
