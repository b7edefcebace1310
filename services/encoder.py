"""Framing of upstream responses for the relay's caller."""

import base64
import json
from typing import Any

from fastapi import Response

from core.exceptions import EncodeError
from core.request_types import ForwardResult, RequestDescriptor, ResponseType


class ResponseEncoder:
    """Frame a captured response as raw bytes or a JSON envelope."""

    def encode(self, descriptor: RequestDescriptor, result: ForwardResult) -> Response:
        match descriptor.response_kind:
            case ResponseType.BINARY:
                return self.encode_binary(result)
            case ResponseType.JSON:
                return Response(
                    content=self.encode_envelope(descriptor, result.content),
                    status_code=200,
                    media_type="application/json",
                )

    def encode_binary(self, result: ForwardResult) -> Response:
        """Pass the upstream bytes through with the upstream content type."""
        response = Response(content=result.content, status_code=200)
        # Raw bytes: upstream values may be UTF-8, which latin-1 str headers reject
        content_type = result.raw_content_type or result.content_type.encode("utf-8")
        response.raw_headers.append((b"content-type", content_type))
        return response

    def encode_envelope(self, descriptor: RequestDescriptor, payload: bytes) -> bytes:
        """Serialize {"request": ..., "response": ...}.

        A payload that is valid JSON is spliced in byte for byte.

        Raises:
            EncodeError: If the echoed descriptor cannot be serialized
        """
        try:
            request_json = json.dumps(descriptor.echo(), ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise EncodeError(f"Error encoding JSON: {e}") from e

        if _is_json(payload):
            response_json = payload.strip()
        else:
            response_json = json.dumps(_opaque(payload)).encode()

        return b'{"request":' + request_json.encode() + b',"response":' + response_json + b"}\n"


def _is_json(payload: bytes) -> bool:
    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError:
        return False
    if not text.strip():
        return False
    try:
        json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        return False
    return True


def _reject_constant(name: str) -> None:
    # NaN and Infinity are accepted by json.loads but are not JSON
    raise ValueError(f"invalid constant {name}")


def _opaque(payload: bytes) -> Any:
    """Non-JSON payloads become text, or base64 when not UTF-8."""
    if not payload:
        return None
    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError:
        return base64.b64encode(payload).decode("ascii")
