"""Reference verifier for signed URLs.

Gateways that accept signed URLs must reproduce the signer exactly: the
message is the request path immediately followed by the decimal timestamp,
and the digest is compared in its percent-encoded base64 form.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlsplit

from urlsigner.common import hmac as hmac_utils
from urlsigner.common.metrics import record_verification
from urlsigner.signer.clock import Clock, SystemClock
from urlsigner.signer.config import DEFAULT_PARAM_NAME, SignerConfig


class VerificationOutcome(str, Enum):
    """Why a token was accepted or rejected."""

    OK = "ok"
    MISSING = "missing"
    MALFORMED = "malformed"
    EXPIRED = "expired"
    BAD_SIGNATURE = "bad_signature"


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of verifying one request."""

    outcome: VerificationOutcome
    timestamp: int | None = None

    @property
    def accepted(self) -> bool:
        return self.outcome is VerificationOutcome.OK

    def __bool__(self) -> bool:
        return self.accepted


def split_token(token: str, use_timestamp: bool) -> tuple[str, str] | None:
    """Split ``{ts}-{digest}`` on the first hyphen. Returns None if malformed.

    The timestamp is returned exactly as received; it is part of the signed
    message, so it must not be re-rendered before recomputing the digest.
    """
    if not use_timestamp:
        return "", token

    ts_part, sep, digest = token.partition("-")
    if not sep or not digest or not (ts_part.isascii() and ts_part.isdigit()):
        return None
    return ts_part, digest


def verify_token(
    secret: bytes,
    path: str,
    token: str,
    *,
    use_timestamp: bool = True,
    max_skew_seconds: int | None = None,
    now: int | None = None,
) -> VerificationResult:
    """
    Verify a token against the request path.

    Args:
        secret: Shared HMAC secret
        path: Request path exactly as the signer canonicalized it
        token: Raw (still percent-encoded) query value
        use_timestamp: Whether tokens carry a ``{ts}-`` prefix
        max_skew_seconds: Freshness window; None skips the check
        now: Current Unix time, defaults to the wall clock

    Returns:
        VerificationResult
    """
    if not token:
        return VerificationResult(VerificationOutcome.MISSING)

    parts = split_token(token, use_timestamp)
    if parts is None:
        return VerificationResult(VerificationOutcome.MALFORMED)
    ts_part, digest = parts
    timestamp = int(ts_part) if ts_part else None

    if timestamp is not None and max_skew_seconds is not None:
        current = SystemClock().now() if now is None else now
        if abs(current - timestamp) > max_skew_seconds:
            return VerificationResult(VerificationOutcome.EXPIRED, timestamp)

    message = hmac_utils.build_message(path, ts_part)
    if not hmac_utils.verify(secret, message, digest):
        return VerificationResult(VerificationOutcome.BAD_SIGNATURE, timestamp)

    return VerificationResult(VerificationOutcome.OK, timestamp)


def extract_raw_param(query: str, name: str) -> str | None:
    """Return the first raw (undecoded) value of ``name`` in a query string."""
    prefix = f"{name}="
    for pair in query.split("&"):
        if pair.startswith(prefix):
            return pair[len(prefix) :]
    return None


class Verifier:
    """Stateless verifier configured like the signer that issued the URLs."""

    def __init__(
        self,
        secret: bytes,
        param_name: str = DEFAULT_PARAM_NAME,
        use_timestamp: bool = True,
        max_skew_seconds: int | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._secret = secret
        self._param_name = param_name
        self._use_timestamp = use_timestamp
        self._max_skew_seconds = max_skew_seconds
        self._clock = clock or SystemClock()

    @classmethod
    def from_config(
        cls,
        config: SignerConfig,
        max_skew_seconds: int | None = None,
        clock: Clock | None = None,
    ) -> Verifier:
        return cls(
            secret=config.secret,
            param_name=config.param_name,
            use_timestamp=config.use_timestamp,
            max_skew_seconds=max_skew_seconds,
            clock=clock,
        )

    @property
    def param_name(self) -> str:
        return self._param_name

    def verify(self, path: str, token: str | None) -> VerificationResult:
        """Verify a path and its raw token value, recording the outcome."""
        if token is None:
            result = VerificationResult(VerificationOutcome.MISSING)
        else:
            result = verify_token(
                self._secret,
                path,
                token,
                use_timestamp=self._use_timestamp,
                max_skew_seconds=self._max_skew_seconds,
                now=self._clock.now(),
            )
        record_verification(result.outcome.value)
        return result

    def verify_request(self, path: str, raw_query: str) -> VerificationResult:
        """Verify using a request path and its undecoded query string."""
        return self.verify(path, extract_raw_param(raw_query, self._param_name))

    def verify_url(self, url: str) -> VerificationResult:
        """Verify a full URL whose path is the signed path."""
        parts = urlsplit(url)
        return self.verify_request(parts.path or "/", parts.query)
