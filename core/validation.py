"""Ingress validation of request descriptors."""

import math

from core.exceptions import ValidationError
from core.request_types import RequestDescriptor, ResponseType


def validate_descriptor(descriptor: RequestDescriptor, max_timeout: float | None = None) -> None:
    """Check required fields, raising ValidationError on the first violation."""
    if not descriptor.url:
        raise ValidationError("request.url is required")
    if not descriptor.method:
        raise ValidationError("request.method is required")

    if descriptor.proxy is not None:
        if not descriptor.proxy.host:
            raise ValidationError("request.proxy.host is required")
        if not descriptor.proxy.type:
            raise ValidationError("request.proxy.type is required")

    ResponseType.parse(descriptor.response_type)

    if descriptor.timeout is not None:
        if not math.isfinite(descriptor.timeout) or descriptor.timeout <= 0:
            raise ValidationError("request.timeout must be a positive number of seconds")
        if max_timeout is not None and descriptor.timeout > max_timeout:
            raise ValidationError(f"request.timeout must not exceed {max_timeout:g} seconds")
