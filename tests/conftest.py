"""Shared fixtures: stub upstreams and an in-memory request logger."""

from collections.abc import Callable

import httpx
import pytest

from core.request_types import ForwardResult, ProxySpec, RequestDescriptor
from services.transport import TransportFactory
from ui import log_utils


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path, monkeypatch):
    """Send log files to a temp dir instead of ./logs."""
    monkeypatch.setattr(log_utils, "LOG_ROOT", tmp_path / "logs")
    monkeypatch.setattr(log_utils, "CLI_LOG_FILE", tmp_path / "logs" / "relay.log")
    yield tmp_path / "logs"
    log_utils.flush_logs()


class StubTransportFactory(TransportFactory):
    """Transport factory that answers every request with a handler.

    Proxy specs still go through the real scheme and URL checks.
    """

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        super().__init__()
        self.handler = handler
        self.specs: list[ProxySpec | None] = []
        self.requests: list[httpx.Request] = []

    def build(self, spec: ProxySpec | None) -> httpx.MockTransport:
        self.specs.append(spec)
        super().build(spec)

        def record(request: httpx.Request):
            self.requests.append(request)
            return self.handler(request)

        return httpx.MockTransport(record)


class RecordingLogger:
    """RequestLogger that keeps every event in memory."""

    def __init__(self):
        self.requests: list[RequestDescriptor] = []
        self.responses: list[tuple[RequestDescriptor, ForwardResult]] = []
        self.errors: list[tuple[str, int, str]] = []

    def log_request(self, descriptor: RequestDescriptor) -> None:
        self.requests.append(descriptor)

    def log_response(self, descriptor: RequestDescriptor, result: ForwardResult) -> None:
        self.responses.append((descriptor, result))

    def log_error(self, kind: str, status: int, message: str) -> None:
        self.errors.append((kind, status, message))


@pytest.fixture
def logger():
    return RecordingLogger()
