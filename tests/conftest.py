"""Pytest configuration and fixtures for testing."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Generator

import pytest

# Make the project root importable without installing the package
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from longcat_proxy.core.upstream_transport import clear_upstream_transports
from longcat_proxy.testing import FakeLongcatUpstream, GatewayHarness


async def aiter_items(items):
    """Turn a list into an async iterator."""
    for item in items:
        yield item


@pytest.fixture(autouse=True)
def clean_gateway_env(monkeypatch):
    """Keep host environment variables from leaking into settings."""
    for name in (
        "HOST",
        "PORT",
        "SERVER_API_KEY",
        "LONGCAT_URL",
        "LONGCAT_COOKIE",
        "LONGCAT_APPKEY",
        "LONGCAT_TRACEID",
        "LONGCAT_TIMEOUT",
        "LONGCAT_READ_TIMEOUT",
        "LOG_LEVEL",
        "DEBUG",
        "LONGCAT_PROXY_CONFIG",
    ):
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Transport Registry Fixtures
# =============================================================================


@pytest.fixture
def clear_transport_registry() -> Generator[None, None, None]:
    """Clear upstream transport registry after test."""
    yield
    clear_upstream_transports()


@pytest.fixture
def fake_upstream() -> FakeLongcatUpstream:
    return FakeLongcatUpstream()


@pytest.fixture
def harness(fake_upstream) -> Generator[GatewayHarness, None, None]:
    """Gateway app wired to ``fake_upstream``."""
    with GatewayHarness(fake_upstream) as gateway_harness:
        yield gateway_harness
