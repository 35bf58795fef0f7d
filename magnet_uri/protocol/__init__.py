import enum

MAGNET_PREFIX = "magnet:?"


class Topic(enum.StrEnum):
    FALLBACK = "as"
    NAME = "dn"
    KEYWORDS = "kt"
    MANIFEST = "mt"
    ANNOUNCE = "tr"
    LENGTH = "xl"
    SOURCE = "xs"
    INFO_HASH = "xt"
    EXPERIMENTAL = "x."


# Topics the decoder percent-decodes and the encoder percent-encodes
QUOTED_TOPICS = frozenset({Topic.FALLBACK, Topic.ANNOUNCE, Topic.SOURCE, Topic.EXPERIMENTAL})


def suffix_key(topic: Topic, position: int) -> str:
    if position == 0:
        return topic.value
    return f"{topic.value}.{position}"
