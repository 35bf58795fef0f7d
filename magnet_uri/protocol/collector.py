import itertools
import logging
import re
from collections.abc import Iterable
from typing import Any

from . import Topic
from .errors import (
    CollectorClosedError,
    InvalidLengthError,
    InvalidPriorityError,
    MalformedInputError,
    UnrecognizedKeyError,
)
from .magnet import Magnet
from .query import decode_query, unquote_value

logger = logging.getLogger(__name__)

KEY_PATTERN = re.compile(
    r"(?P<single>as|dn|mt|xl)"
    r"|(?P<repeated>kt|tr|xs|xt)(?P<suffix>.*)"
    r"|x\.(?P<extension>.*)",
    re.DOTALL,
)
PRIORITY_PATTERN = re.compile(r"\.([0-9]+)")
LENGTH_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_priority(key: str, suffix: str) -> int:
    if suffix == "":
        return 0
    match = PRIORITY_PATTERN.fullmatch(suffix)
    if match is None:
        raise InvalidPriorityError(key)
    return int(match.group(1))


def sort_by_priority(entries: list[tuple[int, Any]]) -> list[Any]:
    return [value for _, value in sorted(entries, key=lambda entry: entry[0])]


def dedup(values: Iterable[str]) -> tuple[str, ...]:
    # Only adjacent repeats collapse
    return tuple(value for value, _ in itertools.groupby(values))


class MagnetCollector:
    """Fold raw magnet (key, value) pairs into a Magnet.

    Feed pairs with collect(), then call done() to sort and deduplicate the
    repeated fields and get the result, or halt() to drop everything.
    """

    def __init__(self, into: Magnet | None = None) -> None:
        into = into or Magnet()
        self.name = into.name
        self.length = into.length
        self.fallback = into.fallback
        self.manifest = into.manifest
        self.experimental = dict(into.experimental)
        self.info_hash: list[tuple[int, str]] = [(0, value) for value in into.info_hash]
        self.source: list[tuple[int, str]] = [(0, value) for value in into.source]
        self.announce: list[tuple[int, str]] = [(0, value) for value in into.announce]
        self.keywords: list[tuple[int, tuple[str, ...]]] = [(0, into.keywords)] if into.keywords else []
        self.closed = False

    def collect(self, key: str, value: str) -> None:
        if self.closed:
            raise CollectorClosedError("collector already finished")

        if value == "":
            logger.debug("Ignoring empty value for key %r", key)
            return

        match = KEY_PATTERN.fullmatch(key)
        if match is None:
            raise UnrecognizedKeyError(key)

        if match.group("extension") is not None:
            self.experimental[match.group("extension")] = unquote_value(value)
            return

        if match.group("single") is not None:
            topic = Topic(match.group("single"))
            if topic == Topic.FALLBACK:
                self.fallback = unquote_value(value)
            elif topic == Topic.NAME:
                self.name = value
            elif topic == Topic.MANIFEST:
                self.manifest = value
            elif topic == Topic.LENGTH:
                if LENGTH_PATTERN.fullmatch(value) is None:
                    raise InvalidLengthError(value)
                try:
                    self.length = int(value)
                except ValueError as ex:
                    # Too many digits for int()
                    raise InvalidLengthError(value) from ex
            return

        topic = Topic(match.group("repeated"))
        priority = parse_priority(key, match.group("suffix"))
        if topic == Topic.KEYWORDS:
            self.keywords.append((priority, tuple(token for token in value.split("+") if token)))
        elif topic == Topic.ANNOUNCE:
            self.announce.append((priority, unquote_value(value)))
        elif topic == Topic.SOURCE:
            self.source.append((priority, unquote_value(value)))
        elif topic == Topic.INFO_HASH:
            self.info_hash.append((priority, value))

    def done(self) -> Magnet:
        if self.closed:
            raise CollectorClosedError("collector already finished")
        self.closed = True

        keywords = itertools.chain.from_iterable(sort_by_priority(self.keywords))
        magnet = Magnet(
            name=self.name,
            length=self.length,
            info_hash=dedup(sort_by_priority(self.info_hash)),
            fallback=self.fallback,
            source=dedup(sort_by_priority(self.source)),
            keywords=dedup(keywords),
            manifest=self.manifest,
            announce=dedup(sort_by_priority(self.announce)),
            experimental=self.experimental,
        )
        logger.debug(
            "Collected magnet: %d info hashes, %d trackers, %d sources, %d keywords",
            len(magnet.info_hash),
            len(magnet.announce),
            len(magnet.source),
            len(magnet.keywords),
        )
        return magnet

    def halt(self) -> None:
        self.closed = True
        self.name = None
        self.length = None
        self.fallback = None
        self.manifest = None
        self.info_hash.clear()
        self.source.clear()
        self.announce.clear()
        self.keywords.clear()
        self.experimental.clear()


def collect_pairs(pairs: Iterable[tuple[str, str]], into: Magnet | None = None) -> Magnet:
    collector = MagnetCollector(into)
    try:
        for pair in pairs:
            if not (isinstance(pair, tuple) and len(pair) == 2 and all(isinstance(item, str) for item in pair)):
                raise MalformedInputError(f"expected a (key, value) pair of strings, got {pair!r}")
            collector.collect(*pair)
    except Exception:
        collector.halt()
        raise
    return collector.done()


def decode_magnet(data: str | Iterable[tuple[str, str]], into: Magnet | None = None) -> Magnet:
    pairs = decode_query(data) if isinstance(data, str) else data
    return collect_pairs(pairs, into)
