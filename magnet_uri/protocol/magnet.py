"""
Magnet URI scheme
https://en.wikipedia.org/wiki/Magnet_URI_scheme

Magnet links for BitTorrent
https://www.bittorrent.org/beps/bep_0009.html
"""
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any
from urllib.parse import quote

from . import QUOTED_TOPICS, Topic, suffix_key
from .query import encode_query


@dataclass(frozen=True)
class Magnet:
    name: str | None = None
    length: int | None = None
    info_hash: tuple[str, ...] = ()
    fallback: str | None = None
    source: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()
    manifest: str | None = None
    announce: tuple[str, ...] = ()
    experimental: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Accept any iterable for list fields but always store tuples
        for name in ("info_hash", "source", "keywords", "announce"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        object.__setattr__(self, "experimental", MappingProxyType(dict(self.experimental)))

    def __hash__(self) -> int:
        return hash(
            (
                self.name,
                self.length,
                self.info_hash,
                self.fallback,
                self.source,
                self.keywords,
                self.manifest,
                self.announce,
                frozenset(self.experimental.items()),
            )
        )

    def to_dict(self) -> dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["experimental"] = dict(self.experimental)
        return data

    def to_pairs(self) -> list[tuple[str, str]]:
        return encode_magnet(self)

    def to_uri(self) -> str:
        return encode_query(encode_magnet(self))

    def show_info(self) -> None:
        print(f"Display name: {self.name or ''}")
        if self.length is not None:
            print(f"Length: {self.length}")
        print("Info Hash:")
        for info_hash in self.info_hash:
            print(info_hash)
        print("Tracker URLs:")
        for url in self.announce:
            print(url)
        if self.source:
            print("Sources:")
            for url in self.source:
                print(url)
        if self.fallback:
            print(f"Acceptable Source: {self.fallback}")
        if self.keywords:
            print(f"Keywords: {', '.join(self.keywords)}")
        if self.manifest:
            print(f"Manifest: {self.manifest}")
        for key, value in self.experimental.items():
            print(f"x.{key}: {value}")


def encode_value(topic: Topic, value: str) -> str:
    if topic in QUOTED_TOPICS:
        return quote(value, safe="")
    return value


def encode_list(topic: Topic, values: Iterable[str]) -> list[tuple[str, str]]:
    entries = [value for value in values if value]
    return [(suffix_key(topic, position), encode_value(topic, value)) for position, value in enumerate(entries)]


def encode_magnet(magnet: Magnet) -> list[tuple[str, str]]:
    """Flatten a Magnet into (key, value) pairs.

    Repeated keys get a positional ".<n>" suffix after the first entry, so the
    original priorities are not reproduced, only the order they produced.
    """
    pairs = encode_list(Topic.INFO_HASH, magnet.info_hash)
    if magnet.name:
        pairs.append((Topic.NAME.value, encode_value(Topic.NAME, magnet.name)))
    if magnet.length is not None:
        pairs.append((Topic.LENGTH.value, str(magnet.length)))
    pairs += encode_list(Topic.ANNOUNCE, magnet.announce)
    if magnet.fallback:
        pairs.append((Topic.FALLBACK.value, encode_value(Topic.FALLBACK, magnet.fallback)))
    pairs += encode_list(Topic.SOURCE, magnet.source)
    pairs += encode_list(Topic.KEYWORDS, magnet.keywords)
    if magnet.manifest:
        pairs.append((Topic.MANIFEST.value, encode_value(Topic.MANIFEST, magnet.manifest)))
    for key, value in magnet.experimental.items():
        if value:
            pairs.append((Topic.EXPERIMENTAL.value + key, encode_value(Topic.EXPERIMENTAL, value)))
    return pairs
