"""Pytest configuration and fixtures."""

import base64
import hashlib
import hmac
from urllib.parse import quote_plus

import pytest

from urlsigner.signer.clock import FixedClock
from urlsigner.signer.config import SignerConfig
from urlsigner.signer.signer import Signer

FIXED_NOW = 1700000000


def expected_digest(secret: bytes, message: str) -> str:
    """Independently computed percent-encoded base64 HMAC-SHA256."""
    raw = hmac.new(secret, message.encode("utf-8"), hashlib.sha256).digest()
    return quote_plus(base64.b64encode(raw).decode("ascii"))


@pytest.fixture
def clock() -> FixedClock:
    """Clock pinned to a known instant."""
    return FixedClock(FIXED_NOW)


@pytest.fixture
def config() -> SignerConfig:
    """Timestamped config with a resource base."""
    return SignerConfig(
        base_url="https://cdn.example.com/",
        secret=b"k",
        resource_base="/previews",
        use_timestamp=True,
    )


@pytest.fixture
def plain_config() -> SignerConfig:
    """Config without timestamps."""
    return SignerConfig(
        base_url="https://cdn.example.com",
        secret=b"k",
        resource_base="/previews",
        use_timestamp=False,
    )


@pytest.fixture
def signer(config: SignerConfig, clock: FixedClock) -> Signer:
    """Signer with a fixed clock."""
    return Signer(config, clock=clock)


@pytest.fixture
def catalog() -> dict[int, str]:
    """Identifier catalog as a host environment would expose it."""
    return {
        42: "https://site.example.com/uploads/2024/05/cover-scaled.jpg",
        7: "/uploads/track.mp3",
        9: "https://site.example.com/uploads/",
    }


@pytest.fixture
def digest_of():
    """Reference digest helper for assertions."""
    return expected_digest
