"""Shared protocol definitions."""

from typing import Protocol

from core.request_types import ForwardResult, RequestDescriptor


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard, ConsoleLogger)."""

    def log_request(self, descriptor: RequestDescriptor) -> None: ...
    def log_response(self, descriptor: RequestDescriptor, result: ForwardResult) -> None: ...
    def log_error(self, kind: str, status: int, message: str) -> None: ...
