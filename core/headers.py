"""Header construction for outbound requests."""

from collections.abc import Mapping

# Computed by the HTTP client from the outbound request itself.
HOP_BY_HOP = frozenset({"content-length", "host", "transfer-encoding"})


class HeaderBuilder:
    """Build outbound header fields from descriptor headers."""

    def build(self, headers: Mapping[str, str] | None) -> list[tuple[bytes, bytes]]:
        """Return header fields as raw UTF-8 pairs so repeated names are all kept.

        httpx only encodes str headers as ASCII; bytes go out untouched.
        """
        if not headers:
            return []
        return [
            (key.encode("utf-8"), value.encode("utf-8"))
            for key, value in headers.items()
            if key.lower() not in HOP_BY_HOP
        ]
