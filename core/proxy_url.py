"""Proxy URL rendering."""

import httpx

from core.exceptions import InvalidProxyURL
from core.request_types import ProxySpec

FMT_FULL = "{scheme}://{username}:{password}@{host}:{port}"
FMT_AUTH_NO_PORT = "{scheme}://{username}:{password}@{host}"
FMT_PORT_NO_AUTH = "{scheme}://{host}:{port}"
FMT_HOST_ONLY = "{scheme}://{host}"


class ProxyURLBuilder:
    """Render the canonical proxy URL for a transport."""

    def render(self, spec: ProxySpec) -> str:
        """Pick the template by presence of credentials and port."""
        if spec.has_credentials:
            template = FMT_FULL if spec.has_port else FMT_AUTH_NO_PORT
        else:
            template = FMT_PORT_NO_AUTH if spec.has_port else FMT_HOST_ONLY
        return template.format(
            scheme=spec.type,
            username=spec.username,
            password=spec.password,
            host=spec.host,
            port=spec.port,
        )

    def build(self, spec: ProxySpec) -> httpx.URL:
        """Render and parse the proxy URL.

        Raises:
            InvalidProxyURL: If the rendered string is not a usable URL
        """
        rendered = self.render(spec)
        try:
            url = httpx.URL(rendered)
        except httpx.InvalidURL as e:
            raise InvalidProxyURL(f"Invalid proxy URL: {e}") from e
        if not url.host:
            raise InvalidProxyURL(f"Invalid proxy URL: no host in {spec.type}://{spec.host}")
        return url
