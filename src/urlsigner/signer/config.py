"""Signer configuration."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable

from urlsigner.common.errors import SignerConfigError

DEFAULT_PARAM_NAME = "verify"
DEFAULT_STRIP_WORDS: tuple[str, ...] = ("scaled",)


def normalize_base_url(base_url: str) -> str:
    return base_url.rstrip("/")


def normalize_resource_base(resource_base: str | None) -> str | None:
    """Normalize to exactly one leading slash and no trailing slash."""
    if resource_base is None:
        return None
    return "/" + resource_base.strip(" /")


def as_words(words: str | Iterable[str]) -> tuple[str, ...]:
    """Coerce a word list; a bare string is a single word."""
    if isinstance(words, str):
        return (words,)
    return tuple(words)


def merge_words(existing: Iterable[str], extra: str | Iterable[str]) -> tuple[str, ...]:
    """Append words not already present, keeping first-seen order."""
    merged = list(existing)
    for word in as_words(extra):
        if word not in merged:
            merged.append(word)
    return tuple(merged)


@dataclass(frozen=True)
class SignerConfig:
    """Immutable signing configuration shared across requests."""

    base_url: str
    secret: bytes = field(repr=False)
    resource_base: str | None = None
    param_name: str = DEFAULT_PARAM_NAME
    use_timestamp: bool = True
    strip_words: tuple[str, ...] = DEFAULT_STRIP_WORDS

    def __post_init__(self) -> None:
        secret = self.secret
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        if not secret:
            raise SignerConfigError("Signing secret must not be empty")
        if not self.param_name:
            raise SignerConfigError("Token parameter name must not be empty")

        object.__setattr__(self, "secret", secret)
        object.__setattr__(self, "base_url", normalize_base_url(self.base_url))
        object.__setattr__(self, "resource_base", normalize_resource_base(self.resource_base))
        object.__setattr__(self, "strip_words", as_words(self.strip_words))

    def with_strip_words(self, words: str | Iterable[str]) -> SignerConfig:
        """Return a copy whose strip-word list is replaced by ``words``."""
        return replace(self, strip_words=as_words(words))

    def extend_strip_words(self, words: str | Iterable[str]) -> SignerConfig:
        """Return a copy with ``words`` appended, skipping duplicates."""
        return replace(self, strip_words=merge_words(self.strip_words, words))
