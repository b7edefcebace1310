"""Outbound transport construction, direct or through a proxy."""

import httpx

from core.proxy_url import ProxyURLBuilder
from core.request_types import ProxyScheme, ProxySpec


class TransportFactory:
    """Build a fresh transport per call; nothing is pooled or cached."""

    def __init__(self, url_builder: ProxyURLBuilder | None = None) -> None:
        self._urls = url_builder or ProxyURLBuilder()

    def build(self, spec: ProxySpec | None) -> httpx.AsyncBaseTransport:
        """Return a direct, HTTP-proxying or SOCKS5-proxying transport.

        No network I/O happens here; the proxy is contacted on first send.

        Raises:
            UnsupportedProxyType: If the scheme is not http or socks5
            InvalidProxyURL: If the proxy URL cannot be parsed
        """
        if spec is None:
            return httpx.AsyncHTTPTransport()

        scheme = ProxyScheme.parse(spec.type)
        proxy_url = self._urls.build(spec)

        match scheme:
            case ProxyScheme.HTTP:
                # Plain http is forwarded, https tunnels through CONNECT
                return httpx.AsyncHTTPTransport(proxy=httpx.Proxy(proxy_url))
            case ProxyScheme.SOCKS5:
                # Needs socksio; without credentials the dial is unauthenticated
                auth = (spec.username, spec.password) if spec.has_credentials else None
                return httpx.AsyncHTTPTransport(proxy=httpx.Proxy(proxy_url, auth=auth))
