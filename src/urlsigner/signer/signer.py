"""HMAC signed URL generation."""

from __future__ import annotations

import posixpath
import re
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Union
from urllib.parse import quote_plus, urlparse

from urlsigner.common import hmac as hmac_utils
from urlsigner.common.logging import get_logger
from urlsigner.common.metrics import record_resolver_call, record_signing
from urlsigner.signer.clock import Clock, SystemClock
from urlsigner.signer.config import SignerConfig
from urlsigner.signer.filters import strip_words
from urlsigner.signer.resolver import ResourceResolver, as_resolver

logger = get_logger(__name__)

_ABSOLUTE_URL = re.compile(r"^https?://")
_IDENTIFIER = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class SignedUrl:
    """A successfully signed URL and the parts it was built from."""

    url: str
    path: str
    token: str
    timestamp: int | None = None

    def __str__(self) -> str:
        return self.url


@dataclass(frozen=True)
class SigningFailed:
    """No URL could be produced; callers should omit the link."""

    resource: str
    reason: str

    def __str__(self) -> str:
        return ""


SignResult = Union[SignedUrl, SigningFailed]


def is_identifier(resource: Any) -> bool:
    """True for resources that name a resolvable identifier rather than a path."""
    if isinstance(resource, bool):
        return False
    if isinstance(resource, int):
        return True
    return isinstance(resource, str) and bool(_IDENTIFIER.fullmatch(resource))


def canonicalize(resource: str, resource_base: str | None = None) -> str:
    """Produce the exact path string that is fed into the HMAC."""
    if resource_base is not None:
        resource = f"{resource_base}/{resource.lstrip('/')}"

    if not _ABSOLUTE_URL.match(resource):
        resource = "/" + resource.lstrip("/")

    return resource


def build_token(secret: bytes, path: str, timestamp: int | None) -> str:
    """Build the query value for a canonical path: ``{ts}-{digest}`` or ``{digest}``."""
    ts = "" if timestamp is None else str(timestamp)
    encoded = hmac_utils.sign(secret, hmac_utils.build_message(path, ts))
    if timestamp is None:
        return encoded
    return f"{timestamp}-{encoded}"


def _param_value(value: Any) -> str:
    # None and False render empty, True as "1"
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    return str(value)


def encode_params(params: Mapping[str, Any]) -> str:
    """Encode extra query parameters as ``&key=value`` pairs, in mapping order."""
    return "".join(
        f"&{quote_plus(str(key))}={quote_plus(_param_value(value))}"
        for key, value in params.items()
    )


class Signer:
    """Generates HMAC signed URLs for paths and resolvable identifiers.

    Example:
        signer = Signer(SignerConfig("https://cdn.example.com", b"secret", "/previews"))
        result = signer.generate_signed_url("song.mp3", {"dl": 1})
        if isinstance(result, SignedUrl):
            print(result.url)
    """

    def __init__(
        self,
        config: SignerConfig,
        resolver: ResourceResolver | Callable[[int], str | None] | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._config = config
        self._resolver = as_resolver(resolver)
        self._clock = clock or SystemClock()

    @property
    def config(self) -> SignerConfig:
        return self._config

    @property
    def has_resolver(self) -> bool:
        return self._resolver is not None

    def set_strip_words(self, words: str | Iterable[str]) -> None:
        """Replace the strip-word list."""
        self._config = self._config.with_strip_words(words)

    def add_strip_words(self, words: str | Iterable[str]) -> None:
        """Extend the strip-word list, ignoring words already present."""
        self._config = self._config.extend_strip_words(words)

    def generate_signed_url(
        self,
        resource: str | int,
        additional_params: Mapping[str, Any] | None = None,
    ) -> SignResult:
        """
        Sign a resource and assemble the final URL.

        Args:
            resource: Path, absolute URL, or numeric identifier to resolve
            additional_params: Extra query parameters appended after the token
                (not covered by the signature)

        Returns:
            SignedUrl, or SigningFailed when an identifier cannot be resolved
        """
        config = self._config

        if is_identifier(resource) and self._resolver is not None:
            resolved = self._resolve(int(resource))
            if resolved is None:
                record_signing("resolution_failed")
                return SigningFailed(resource=str(resource), reason="resolution_failed")
            path_source = resolved
        else:
            path_source = str(resource)

        path = canonicalize(path_source, config.resource_base)
        timestamp = self._clock.now() if config.use_timestamp else None
        token = build_token(config.secret, path, timestamp)

        url = f"{config.base_url}{path}?{config.param_name}={token}"
        if additional_params:
            url += encode_params(additional_params)

        record_signing("signed")
        return SignedUrl(url=url, path=path, token=token, timestamp=timestamp)

    def _resolve(self, identifier: int) -> str | None:
        """Resolve an identifier to a stripped filename; None on any failure."""
        assert self._resolver is not None

        start = time.perf_counter()
        try:
            location = self._resolver.resolve(identifier)
        except Exception as exc:
            logger.warning(
                "Resource resolver raised",
                identifier=identifier,
                error=str(exc),
            )
            return None
        finally:
            record_resolver_call(time.perf_counter() - start)

        if not location:
            logger.warning("Resource resolution failed", identifier=identifier)
            return None

        filename = posixpath.basename(urlparse(location).path)
        filename = strip_words(filename, self._config.strip_words)
        if not filename:
            logger.warning(
                "Resolved resource has no filename",
                identifier=identifier,
            )
            return None
        return filename
