"""FastAPI route handlers."""

import json
from json import JSONDecodeError
from typing import Any

import pydantic
from fastapi import Request, Response
from fastapi.responses import JSONResponse

from core.config import Config
from core.exceptions import DecodeError, RelayError, RequestTooLarge
from core.protocols import RequestLogger
from core.request_types import RequestDescriptor
from core.validation import validate_descriptor
from ui.log_utils import submit_incoming_log


def error_response(error: RelayError) -> JSONResponse:
    """Render a relay error for the caller."""
    return JSONResponse(
        {"error": error.message, "type": type(error).__name__},
        status_code=error.status_code,
    )


def _reject_constant(name: str) -> None:
    # json.loads accepts NaN and Infinity, which are not JSON
    raise ValueError(f"invalid constant {name}")


async def _parse_descriptor(request: Request, config: Config) -> RequestDescriptor:
    """Decode the request body into a descriptor.

    Raises:
        RequestTooLarge: If the body exceeds the configured limit
        DecodeError: If the body is not a JSON descriptor object
    """
    raw_body = await request.body()
    if len(raw_body) > config.limits.max_body_size:
        raise RequestTooLarge("Request body too large")

    text_body = raw_body.decode("utf-8", errors="replace")
    try:
        body: Any = json.loads(text_body, parse_constant=_reject_constant)
    except (JSONDecodeError, ValueError) as e:
        submit_incoming_log(request.method, request.url.path, dict(request.headers), text_body)
        raise DecodeError(f"Error parsing JSON: {e}") from e

    submit_incoming_log(request.method, request.url.path, dict(request.headers), body)
    if not isinstance(body, dict):
        raise DecodeError("Error parsing JSON: request descriptor must be an object")

    try:
        return RequestDescriptor.model_validate(body)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise DecodeError(f"Error parsing JSON: request.{field}: {first['msg']}") from e


async def handle_proxify(
    request: Request,
    config: Config,
    logger: RequestLogger,
) -> Response:
    """Handle /proxify: validate, forward and frame one described request."""
    try:
        descriptor = await _parse_descriptor(request, config)
        validate_descriptor(descriptor, max_timeout=config.upstream.max_timeout)
        logger.log_request(descriptor)

        result = await request.app.state.forwarder.forward(descriptor)
        logger.log_response(descriptor, result)

        return request.app.state.encoder.encode(descriptor, result)
    except RelayError as e:
        logger.log_error(type(e).__name__, e.status_code, e.message)
        return error_response(e)
