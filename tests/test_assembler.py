"""Tests for outbound request assembly."""

import pytest

from core.assembler import RequestAssembler
from core.exceptions import InvalidTargetURL, UnsupportedMethod
from core.request_types import RequestDescriptor


def assemble(**fields):
    return RequestAssembler().assemble(RequestDescriptor(**fields))


def test_params_replace_existing_query():
    request = assemble(url="http://x.test/p?old=1", method="GET", params={"b": "2", "a": "1"})
    assert request.url.query == b"a=1&b=2"
    assert request.url.path == "/p"


def test_empty_params_keep_existing_query():
    request = assemble(url="http://x.test/p?old=1", method="GET", params={})
    assert request.url.query == b"old=1"


def test_missing_params_keep_existing_query():
    request = assemble(url="http://x.test/p?old=1", method="GET")
    assert str(request.url) == "http://x.test/p?old=1"


def test_params_are_form_encoded():
    request = assemble(url="http://x.test/", method="GET", params={"q": "a b&c"})
    assert request.url.query == b"q=a+b%26c"


@pytest.mark.parametrize("method", ["get", "Post", "PUT", "delete", "pAtCh"])
def test_method_is_case_insensitive(method):
    assert assemble(url="http://x.test/", method=method).method == method.upper()


@pytest.mark.parametrize("method", ["HEAD", "OPTIONS", "TRACE", "fetch"])
def test_unsupported_method(method):
    with pytest.raises(UnsupportedMethod) as exc_info:
        assemble(url="http://x.test/", method=method)
    assert method.lower() in str(exc_info.value)


@pytest.mark.parametrize("url", ["ftp://x.test/file", "not a url", "http://"])
def test_invalid_target_url(url):
    with pytest.raises(InvalidTargetURL):
        assemble(url=url, method="GET")


def test_body_is_sent_as_compact_json():
    request = assemble(url="http://x.test/", method="POST", body={"name": "relay", "ids": [1, 2]})
    assert request.content == b'{"name":"relay","ids":[1,2]}'


def test_string_body_keeps_json_quoting():
    request = assemble(url="http://x.test/", method="POST", body="plain")
    assert request.content == b'"plain"'


def test_no_body_when_absent():
    request = assemble(url="http://x.test/echo", method="GET")
    assert request.content == b""
    assert "content-length" not in request.headers
    assert "content-type" not in request.headers


def test_headers_are_added_not_overwritten():
    request = assemble(
        url="http://x.test/",
        method="GET",
        headers={"X-Trace": "one", "x-trace": "two", "Accept": "text/plain"},
    )
    assert request.headers.get_list("x-trace") == ["one", "two"]
    assert request.headers["accept"] == "text/plain"


def test_framing_headers_are_left_to_the_client():
    request = assemble(
        url="http://x.test/",
        method="POST",
        body={"a": 1},
        headers={"Content-Length": "999", "Host": "elsewhere.test"},
    )
    assert request.headers["content-length"] == str(len(request.content))
    assert request.headers["host"] == "x.test"


def test_non_ascii_headers_are_sent_as_utf8_bytes():
    request = assemble(url="http://x.test/", method="GET", headers={"X-Name": "café"})
    assert (b"X-Name", "café".encode("utf-8")) in request.headers.raw
