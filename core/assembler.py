"""Outbound request assembly from a request descriptor."""

from urllib.parse import urlencode

import httpx

from core.exceptions import InvalidTargetURL
from core.headers import HeaderBuilder
from core.request_types import HttpMethod, RequestDescriptor

SUPPORTED_SCHEMES = ("http", "https")


class RequestAssembler:
    """Turn a descriptor into a concrete httpx.Request."""

    def __init__(self, header_builder: HeaderBuilder | None = None) -> None:
        self._headers = header_builder or HeaderBuilder()

    def assemble(self, descriptor: RequestDescriptor) -> httpx.Request:
        url = self.build_url(descriptor)
        method = HttpMethod.parse(descriptor.method)
        body = descriptor.body_bytes()

        return httpx.Request(
            method.value,
            url,
            headers=self._headers.build(descriptor.headers),
            content=body or None,
        )

    def build_url(self, descriptor: RequestDescriptor) -> httpx.URL:
        """Parse the target URL and merge query parameters.

        A non-empty params mapping replaces the existing query string
        entirely; an empty one leaves it as given.
        """
        try:
            url = httpx.URL(descriptor.url)
        except httpx.InvalidURL as e:
            raise InvalidTargetURL(f"Invalid request.url: {e}") from e

        if url.scheme not in SUPPORTED_SCHEMES:
            raise InvalidTargetURL(f"Invalid request.url: unsupported protocol scheme '{url.scheme}'")
        if not url.host:
            raise InvalidTargetURL("Invalid request.url: no host in request URL")

        if descriptor.params:
            query = urlencode(sorted(descriptor.params.items()))
            url = url.copy_with(query=query.encode("ascii"))
        return url
