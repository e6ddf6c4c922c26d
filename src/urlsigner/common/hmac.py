"""HMAC token primitives shared by the signer and the verifier."""

from __future__ import annotations

import base64
import hashlib
import hmac
from urllib.parse import quote_plus


def build_message(path: str, timestamp: str = "") -> bytes:
    """Build the HMAC message payload.

    The path and timestamp are concatenated with no delimiter. Existing
    gateway rules recompute exactly this string, so it must not change.
    """
    return f"{path}{timestamp}".encode("utf-8")


def digest(secret: bytes, message: bytes) -> bytes:
    """Raw HMAC-SHA256 digest."""
    return hmac.new(secret, message, hashlib.sha256).digest()


def encode_digest(raw: bytes) -> str:
    """Standard base64, then form-encoded for embedding in a query string."""
    return quote_plus(base64.b64encode(raw).decode("ascii"))


def sign(secret: bytes, message: bytes) -> str:
    """Create a URL-embeddable HMAC signature."""
    return encode_digest(digest(secret, message))


def verify(secret: bytes, message: bytes, signature: str) -> bool:
    """Verify HMAC signature in constant time."""
    expected = sign(secret, message)
    return hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8"))
