from .protocol.collector import MagnetCollector, collect_pairs, decode_magnet
from .protocol.errors import (
    CollectorClosedError,
    InvalidLengthError,
    InvalidPriorityError,
    MagnetError,
    MalformedInputError,
    UnrecognizedKeyError,
)
from .protocol.magnet import Magnet, encode_magnet
from .protocol.query import decode_query, encode_query

decode = decode_magnet


def encode(magnet: Magnet) -> str:
    return magnet.to_uri()


__all__ = [
    "CollectorClosedError",
    "InvalidLengthError",
    "InvalidPriorityError",
    "Magnet",
    "MagnetCollector",
    "MagnetError",
    "MalformedInputError",
    "UnrecognizedKeyError",
    "collect_pairs",
    "decode",
    "decode_magnet",
    "decode_query",
    "encode",
    "encode_magnet",
    "encode_query",
]
