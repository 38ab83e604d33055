"""Shared fixtures for the svcutils test suite."""

from __future__ import annotations

import os
from unittest.mock import AsyncMock

import pytest

# Set env vars before any svcutils import.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("SERVICE_NAME", "svcutils-test")

from svcutils.core.http import RequestContext, ResponseWriter  # noqa: E402


@pytest.fixture
def context() -> RequestContext:
    return RequestContext(method="GET", path="/items")


@pytest.fixture
def writer() -> ResponseWriter:
    return ResponseWriter()


@pytest.fixture
def call_next() -> AsyncMock:
    return AsyncMock(name="call_next")
