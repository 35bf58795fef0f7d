import sys
from pathlib import Path

import pytest

# Ensure root path is available for imports
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from magnet_uri import Magnet  # noqa: E402


@pytest.fixture
def sample_magnet() -> Magnet:
    return Magnet(
        name="debian-12.iso",
        length=659554304,
        info_hash=("urn:btih:c5fb9894bdaba464811b088d806bdd611ba490af", "urn:sha1:YNCKHTQCWBTRNJIV4WNAE52SJUQCZO5C"),
        fallback="http://example.com/debian-12.iso",
        source=("http://cache.example.com/debian-12.iso",),
        keywords=("linux", "debian"),
        manifest="urn:sha1:3I42H3S6NNFQ2MSVX7XZKYAYSCX5QBYJ",
        announce=("udp://tracker.example.com:6969/announce", "http://tracker.example.org/announce?a=1&b=2"),
        experimental={"pe": "10.0.0.1:6881"},
    )
