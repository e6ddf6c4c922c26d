"""Gateway-side verification of signed URLs."""

from urlsigner.gateway.middleware import SignedUrlMiddleware, create_signed_url_middleware
from urlsigner.gateway.verifier import (
    VerificationOutcome,
    VerificationResult,
    Verifier,
    verify_token,
)
from urlsigner.gateway.waf import is_timed_hmac_valid

__all__ = [
    "SignedUrlMiddleware",
    "VerificationOutcome",
    "VerificationResult",
    "Verifier",
    "create_signed_url_middleware",
    "is_timed_hmac_valid",
    "verify_token",
]
