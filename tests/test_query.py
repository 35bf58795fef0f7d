import pytest

from magnet_uri import MalformedInputError, decode_query, encode_query
from magnet_uri.protocol.query import unquote_value


def test_decode_query_keeps_order_and_raw_values():
    uri = "magnet:?xt=urn:btih:abc&dn=Some%20Name&tr=udp%3A%2F%2Fa&tr.1=b"
    assert decode_query(uri) == [
        ("xt", "urn:btih:abc"),
        ("dn", "Some%20Name"),
        ("tr", "udp%3A%2F%2Fa"),
        ("tr.1", "b"),
    ]


def test_decode_query_splits_on_first_equals_only():
    assert decode_query("magnet:?x.expr=a=b") == [("x.expr", "a=b")]


def test_decode_query_skips_empty_items():
    assert decode_query("magnet:?&dn=foo&&") == [("dn", "foo")]
    assert decode_query("magnet:?") == []


def test_decode_query_accepts_uppercase_scheme():
    assert decode_query("MAGNET:?dn=foo") == [("dn", "foo")]


@pytest.mark.parametrize("uri", ["http://example.com/?dn=foo", "dn=foo", "magnet:dn=foo", "magnet://[broken?dn=foo"])
def test_decode_query_rejects_missing_prefix(uri):
    with pytest.raises(MalformedInputError):
        decode_query(uri)


def test_decode_query_rejects_pair_without_equals():
    with pytest.raises(MalformedInputError):
        decode_query("magnet:?dn=foo&broken")


def test_encode_query():
    assert encode_query([("xt", "urn:btih:abc"), ("dn", "foo")]) == "magnet:?xt=urn:btih:abc&dn=foo"
    assert encode_query([]) == "magnet:?"


def test_unquote_value():
    assert unquote_value("udp%3A%2F%2Fa%2Bb+c") == "udp://a+b+c"
    assert unquote_value("caf%C3%A9") == "café"


@pytest.mark.parametrize("value", ["%zz", "%4", "%", "%FF"])
def test_unquote_value_rejects_malformed(value):
    with pytest.raises(MalformedInputError):
        unquote_value(value)
