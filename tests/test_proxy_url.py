"""Tests for proxy URL rendering."""

import pytest

from core.exceptions import InvalidProxyURL
from core.proxy_url import ProxyURLBuilder
from core.request_types import ProxySpec


@pytest.mark.parametrize(
    ("spec", "expected"),
    [
        (ProxySpec(type="http", host="h", port=8080, username="u", password="p"), "http://u:p@h:8080"),
        (ProxySpec(type="http", host="h", username="u", password="p"), "http://u:p@h"),
        (ProxySpec(type="socks5", host="h", port=1080), "socks5://h:1080"),
        (ProxySpec(type="socks5", host="h"), "socks5://h"),
    ],
)
def test_template_selection(spec, expected):
    assert ProxyURLBuilder().render(spec) == expected


def test_port_zero_is_absent():
    spec = ProxySpec(type="http", host="h", port=0, username="u", password="p")
    assert ProxyURLBuilder().render(spec) == "http://u:p@h"


@pytest.mark.parametrize(("username", "password"), [("u", ""), ("", "p")])
def test_partial_credentials_are_ignored(username, password):
    spec = ProxySpec(type="http", host="h", port=3128, username=username, password=password)
    assert ProxyURLBuilder().render(spec) == "http://h:3128"


def test_build_parses_rendered_url():
    url = ProxyURLBuilder().build(
        ProxySpec(type="socks5", host="proxy.test", port=1080, username="u", password="p")
    )
    assert url.scheme == "socks5"
    assert url.host == "proxy.test"
    assert url.port == 1080
    assert url.username == "u"
    assert url.password == "p"


def test_unparsable_host_is_rejected():
    with pytest.raises(InvalidProxyURL):
        ProxyURLBuilder().build(ProxySpec(type="http", host="bad\x00host"))
