"""Tests for the reference verifier."""

import pytest

from urlsigner.gateway.verifier import (
    VerificationOutcome,
    Verifier,
    extract_raw_param,
    split_token,
    verify_token,
)
from urlsigner.signer.clock import FixedClock
from urlsigner.signer.config import SignerConfig
from urlsigner.signer.signer import Signer


def _flip_digest_byte(token: str) -> str:
    """Change one character of the digest part."""
    head, _, digest = token.rpartition("-")
    flipped = ("B" if digest[0] == "A" else "A") + digest[1:]
    return f"{head}-{flipped}" if head else flipped


class TestSplitToken:
    """Test token splitting."""

    def test_split_on_first_hyphen(self):
        """Timestamp and digest are separated at the first hyphen."""
        assert split_token("1700000000-abc-def", True) == ("1700000000", "abc-def")

    def test_untimed_token_is_digest(self):
        """Without timestamps the whole value is the digest."""
        assert split_token("abc-def", False) == ("", "abc-def")

    @pytest.mark.parametrize(
        "token", ["abc", "x1-abc", "1700000000-", "-abc", "\u00b2-abc", "1\u00b97-abc"]
    )
    def test_malformed(self, token):
        """Missing or non-numeric timestamps are malformed."""
        assert split_token(token, True) is None


class TestVerifyToken:
    """Test the verification algorithm."""

    def test_accepts_generated_token(self, signer):
        """A freshly signed token verifies within the window."""
        result = signer.generate_signed_url("song.mp3")
        outcome = verify_token(
            b"k", result.path, result.token, max_skew_seconds=600, now=1700000300
        )
        assert outcome.accepted
        assert outcome.timestamp == 1700000000

    def test_rejects_flipped_digest(self, signer):
        """A single changed digest character is rejected."""
        result = signer.generate_signed_url("song.mp3")
        outcome = verify_token(
            b"k", result.path, _flip_digest_byte(result.token), max_skew_seconds=600, now=1700000000
        )
        assert outcome.outcome is VerificationOutcome.BAD_SIGNATURE

    def test_rejects_outside_window(self, signer):
        """Tokens older than the window are expired."""
        result = signer.generate_signed_url("song.mp3")
        outcome = verify_token(
            b"k", result.path, result.token, max_skew_seconds=600, now=1700000601
        )
        assert outcome.outcome is VerificationOutcome.EXPIRED

    def test_rejects_future_tokens_outside_window(self, signer):
        """Skew applies in both directions."""
        result = signer.generate_signed_url("song.mp3")
        outcome = verify_token(
            b"k", result.path, result.token, max_skew_seconds=60, now=1700000000 - 61
        )
        assert outcome.outcome is VerificationOutcome.EXPIRED

    def test_no_window_skips_freshness(self, signer):
        """Without a window only the digest is checked."""
        result = signer.generate_signed_url("song.mp3")
        assert verify_token(b"k", result.path, result.token, now=1900000000).accepted

    def test_rejects_other_path(self, signer):
        """A token does not transfer to another path."""
        result = signer.generate_signed_url("song.mp3")
        outcome = verify_token(b"k", "/previews/other.mp3", result.token, now=1700000000)
        assert outcome.outcome is VerificationOutcome.BAD_SIGNATURE

    def test_rejects_tampered_timestamp(self, signer):
        """The timestamp is covered by the signature."""
        result = signer.generate_signed_url("song.mp3")
        _, _, digest = result.token.partition("-")
        outcome = verify_token(b"k", result.path, f"1700000001-{digest}", now=1700000000)
        assert outcome.outcome is VerificationOutcome.BAD_SIGNATURE

    def test_non_ascii_digit_timestamp_is_malformed(self):
        """Unicode digits in the timestamp are rejected, not raised."""
        outcome = verify_token(b"k", "/a", "\u00b2-abc", max_skew_seconds=600, now=1)
        assert outcome.outcome is VerificationOutcome.MALFORMED

    def test_rejects_zero_padded_timestamp(self, signer):
        """The timestamp is signed as sent; padding it breaks the digest."""
        result = signer.generate_signed_url("song.mp3")
        padded = "000" + result.token
        outcome = verify_token(b"k", result.path, padded, max_skew_seconds=600, now=1700000000)
        assert outcome.outcome is VerificationOutcome.BAD_SIGNATURE

    def test_untimed_tokens(self, plain_config):
        """Untimed tokens verify without a timestamp."""
        result = Signer(plain_config).generate_signed_url("song.mp3")
        assert verify_token(b"k", result.path, result.token, use_timestamp=False).accepted
        outcome = verify_token(
            b"k", result.path, _flip_digest_byte(result.token), use_timestamp=False
        )
        assert not outcome.accepted

    def test_empty_token_missing(self):
        """Empty token counts as missing."""
        assert verify_token(b"k", "/a", "").outcome is VerificationOutcome.MISSING


class TestVerifier:
    """Test the configured verifier."""

    def test_verify_url_roundtrip(self, config, signer):
        """URLs produced by the signer verify through the verifier."""
        result = signer.generate_signed_url("song.mp3", {"dl": "1"})
        verifier = Verifier.from_config(config, max_skew_seconds=600, clock=FixedClock(1700000010))

        assert verifier.verify_url(result.url).accepted

    def test_verify_url_missing_param(self, config):
        """URLs without the token parameter are rejected as missing."""
        verifier = Verifier.from_config(config, clock=FixedClock(1700000000))
        outcome = verifier.verify_url("https://cdn.example.com/previews/song.mp3?dl=1")
        assert outcome.outcome is VerificationOutcome.MISSING

    def test_verify_url_expired(self, config, signer):
        """Clock past the window rejects."""
        result = signer.generate_signed_url("song.mp3")
        verifier = Verifier.from_config(config, max_skew_seconds=600, clock=FixedClock(1700001000))
        assert verifier.verify_url(result.url).outcome is VerificationOutcome.EXPIRED

    def test_different_secret_rejects(self, signer):
        """A verifier with another secret rejects."""
        result = signer.generate_signed_url("song.mp3")
        other = SignerConfig("https://cdn.example.com", b"nope", "/previews")
        verifier = Verifier.from_config(other, clock=FixedClock(1700000000))
        assert not verifier.verify_url(result.url)

    def test_extract_raw_param_keeps_encoding(self):
        """Raw values stay percent-encoded."""
        assert extract_raw_param("a=1&verify=1-ab%2B%3D&b=2", "verify") == "1-ab%2B%3D"
        assert extract_raw_param("xverify=1", "verify") is None
