"""Tests for descriptor validation."""

import pytest

from core.exceptions import ValidationError
from core.request_types import ProxySpec, RequestDescriptor, ResponseType
from core.validation import validate_descriptor


def test_url_is_required():
    with pytest.raises(ValidationError, match=r"^request\.url is required$"):
        validate_descriptor(RequestDescriptor(method="GET"))


def test_method_is_required():
    with pytest.raises(ValidationError, match=r"^request\.method is required$"):
        validate_descriptor(RequestDescriptor(url="http://x.test/"))


def test_url_checked_before_method():
    with pytest.raises(ValidationError, match="request.url"):
        validate_descriptor(RequestDescriptor())


def test_proxy_host_is_required():
    descriptor = RequestDescriptor(url="http://x.test/", method="GET", proxy=ProxySpec(type="http"))
    with pytest.raises(ValidationError, match="request.proxy.host is required"):
        validate_descriptor(descriptor)


def test_proxy_type_is_required():
    descriptor = RequestDescriptor(url="http://x.test/", method="GET", proxy=ProxySpec(host="p.test"))
    with pytest.raises(ValidationError, match="request.proxy.type is required"):
        validate_descriptor(descriptor)


@pytest.mark.parametrize("response_type", ["", "json", "binary"])
def test_supported_response_types(response_type):
    validate_descriptor(RequestDescriptor(url="http://x.test/", method="GET", response_type=response_type))


def test_unsupported_response_type():
    descriptor = RequestDescriptor(url="http://x.test/", method="GET", response_type="xml")
    with pytest.raises(ValidationError) as exc_info:
        validate_descriptor(descriptor)
    assert str(exc_info.value) == "request.response_type = 'xml' unsupported. Supported types: json, binary"


def test_absent_response_type_means_json():
    assert RequestDescriptor(url="http://x.test/", method="GET").response_kind is ResponseType.JSON


@pytest.mark.parametrize("timeout", [0, -1.5])
def test_timeout_must_be_positive(timeout):
    descriptor = RequestDescriptor(url="http://x.test/", method="GET", timeout=timeout)
    with pytest.raises(ValidationError, match="request.timeout"):
        validate_descriptor(descriptor)


def test_timeout_is_capped():
    descriptor = RequestDescriptor(url="http://x.test/", method="GET", timeout=600)
    with pytest.raises(ValidationError, match="must not exceed 300 seconds"):
        validate_descriptor(descriptor, max_timeout=300.0)


@pytest.mark.parametrize("timeout", [float("nan"), float("inf"), float("-inf")])
def test_timeout_must_be_finite(timeout):
    descriptor = RequestDescriptor(url="http://x.test/", method="GET", timeout=timeout)
    with pytest.raises(ValidationError, match="request.timeout"):
        validate_descriptor(descriptor, max_timeout=300.0)
