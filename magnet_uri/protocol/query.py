import re
from collections.abc import Iterable
from urllib.parse import unquote, urlparse

from . import MAGNET_PREFIX
from .errors import MalformedInputError

BAD_ESCAPE_PATTERN = re.compile(r"%(?![0-9A-Fa-f]{2})")


def decode_query(uri: str) -> list[tuple[str, str]]:
    """Split a magnet link into raw (key, value) pairs, in order of appearance.

    Values are returned exactly as written; percent-decoding is left to the
    collector, which only applies it to some keys.
    """
    try:
        scheme = urlparse(uri).scheme
    except ValueError as ex:
        raise MalformedInputError(f"invalid magnet link: {uri!r}") from ex
    head, sep, query = uri.partition("?")
    if scheme != "magnet" or not sep or head.lower() != "magnet:":
        raise MalformedInputError(f"expected {MAGNET_PREFIX!r} prefix: {uri!r}")

    pairs = []
    for item in query.split("&"):
        if not item:
            continue
        if "=" not in item:
            raise MalformedInputError(f"expected key=value, got {item!r}")
        key, value = item.split("=", 1)
        pairs.append((key, value))
    return pairs


def encode_query(pairs: Iterable[tuple[str, str]]) -> str:
    return MAGNET_PREFIX + "&".join(f"{key}={value}" for key, value in pairs)


def unquote_value(value: str) -> str:
    # "+" stays literal, it is not a space here
    if BAD_ESCAPE_PATTERN.search(value):
        raise MalformedInputError(f"malformed percent escape in {value!r}")
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError as ex:
        raise MalformedInputError(f"percent escapes are not valid UTF-8 in {value!r}") from ex
