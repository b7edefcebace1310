"""Execution of described requests against their upstream."""

import asyncio
import time

import httpx

from core.assembler import RequestAssembler
from core.exceptions import ForwardFailed
from core.request_types import ForwardResult, RequestDescriptor
from services.transport import TransportFactory

DEFAULT_TIMEOUT = 60.0


class RequestForwarder:
    """Send a described request and capture the decoded response body."""

    def __init__(
        self,
        transport_factory: TransportFactory | None = None,
        assembler: RequestAssembler | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._transports = transport_factory or TransportFactory()
        self._assembler = assembler or RequestAssembler()
        self._timeout = timeout

    async def forward(self, descriptor: RequestDescriptor) -> ForwardResult:
        """Perform the request and return body and content type.

        Upstream 4xx/5xx responses are returned like any other response.

        Raises:
            ForwardFailed: On transport-level failure or deadline expiry
        """
        transport = self._transports.build(descriptor.proxy)
        try:
            request = self._assembler.assemble(descriptor)
        except Exception:
            await transport.aclose()
            raise

        deadline = descriptor.timeout or self._timeout
        started = time.monotonic()
        async with httpx.AsyncClient(
            transport=transport,
            timeout=deadline,
            follow_redirects=True,
        ) as client:
            try:
                # Cancellation on expiry tears down the in-flight connection
                response = await asyncio.wait_for(client.send(request), timeout=deadline)
            except asyncio.TimeoutError as e:
                raise ForwardFailed(
                    f"{request.method} {request.url}: deadline of {deadline:g}s exceeded"
                ) from e
            except httpx.TimeoutException as e:
                raise ForwardFailed(f"{request.method} {request.url}: upstream timeout") from e
            except httpx.RequestError as e:
                raise ForwardFailed(f"{request.method} {request.url}: {e}") from e

        return ForwardResult(
            content=response.content,
            content_type=response.headers.get("content-type", ""),
            status_code=response.status_code,
            elapsed=time.monotonic() - started,
            raw_content_type=_raw_header(response, b"content-type"),
        )


def _raw_header(response: httpx.Response, name: bytes) -> bytes:
    """First value of a header exactly as received on the wire."""
    for key, value in response.headers.raw:
        if key.lower() == name:
            return value
    return b""
