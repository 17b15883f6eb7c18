"""Root test configuration."""

from __future__ import annotations

import json
import logging
from typing import Any

import pytest
import structlog

from clouding.clients.base import HTTPTransport, TransportResponse
from clouding.clients.client import CloudingClient

ENDPOINT = "https://api.clouding.test"
BASE_URL = f"{ENDPOINT}/v1"


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    configure_quiet_structlog()


def configure_quiet_structlog() -> None:
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


class ScriptedTransport:
    """In-memory transport replaying canned (status, body) pairs in order."""

    def __init__(self, *responses: tuple[int, Any]) -> None:
        self._responses = list(responses)
        self.calls: list[tuple[str, str, dict[str, Any] | None]] = []

    async def send(self, method, path, body=None):  # noqa: ANN001
        self.calls.append((method, path, body))
        status, payload = self._responses.pop(0)
        if isinstance(payload, Exception):
            raise payload
        if payload is None:
            content = b""
        elif isinstance(payload, bytes):
            content = payload
        else:
            content = json.dumps(payload).encode()
        return TransportResponse(status_code=status, content=content)


class RecordingSleep:
    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def transport() -> HTTPTransport:
    return HTTPTransport("token123", endpoint=ENDPOINT)


@pytest.fixture
def client(transport: HTTPTransport) -> CloudingClient:
    return CloudingClient(transport, poll_interval=0, sleep=RecordingSleep())
