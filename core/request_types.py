"""Shared request data types."""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictInt

from core.exceptions import UnsupportedMethod, UnsupportedProxyType, ValidationError


class ProxyScheme(str, Enum):
    HTTP = "http"
    SOCKS5 = "socks5"

    @classmethod
    def parse(cls, text: str) -> "ProxyScheme":
        """Map scheme text to a member, rejecting anything unknown."""
        try:
            return cls(text)
        except ValueError:
            raise UnsupportedProxyType(text) from None


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"

    @classmethod
    def parse(cls, text: str) -> "HttpMethod":
        """Case-insensitive lookup of an outbound verb."""
        try:
            return cls(text.upper())
        except ValueError:
            raise UnsupportedMethod(text.lower()) from None


class ResponseType(str, Enum):
    JSON = "json"
    BINARY = "binary"

    @classmethod
    def parse(cls, text: str) -> "ResponseType":
        if not text:
            return cls.JSON
        try:
            return cls(text)
        except ValueError:
            raise ValidationError(
                f"request.response_type = '{text}' unsupported. Supported types: json, binary"
            ) from None


class ProxySpec(BaseModel):
    """Upstream proxy the outbound request is routed through."""

    model_config = ConfigDict(extra="ignore")

    type: str = ""
    host: str = ""
    port: StrictInt | None = None
    username: str = ""
    password: str = ""

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password)

    @property
    def has_port(self) -> bool:
        return bool(self.port)


class RequestDescriptor(BaseModel):
    """Caller-supplied description of the HTTP call to perform."""

    model_config = ConfigDict(extra="ignore")

    url: str = ""
    method: str = ""
    response_type: str = ""
    body: Any = None
    headers: dict[str, str] | None = None
    params: dict[str, str] | None = None
    proxy: ProxySpec | None = None
    timeout: float | None = None

    @property
    def response_kind(self) -> ResponseType:
        return ResponseType.parse(self.response_type)

    def body_bytes(self) -> bytes:
        """Outbound payload: the body's compact JSON text, empty when unset."""
        if self.body is None:
            return b""
        return json.dumps(self.body, separators=(",", ":"), ensure_ascii=False).encode()

    def echo(self) -> dict[str, Any]:
        """Descriptor as the caller submitted it, for the response envelope."""
        return self.model_dump(mode="json", exclude_unset=True)


@dataclass(frozen=True)
class ForwardResult:
    """Captured upstream response."""

    content: bytes
    content_type: str
    status_code: int
    elapsed: float = 0.0
    raw_content_type: bytes = b""
