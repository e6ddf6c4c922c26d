"""Signed URL generation."""

from urlsigner.signer.clock import Clock, FixedClock, SystemClock
from urlsigner.signer.config import DEFAULT_STRIP_WORDS, SignerConfig
from urlsigner.signer.filters import strip_words
from urlsigner.signer.resolver import CallableResolver, MappingResolver, ResourceResolver
from urlsigner.signer.signer import (
    SignedUrl,
    Signer,
    SigningFailed,
    SignResult,
    build_token,
    canonicalize,
)
from urlsigner.signer.utilities import get_identifier_signed, get_signed_resource

__all__ = [
    "DEFAULT_STRIP_WORDS",
    "CallableResolver",
    "Clock",
    "FixedClock",
    "MappingResolver",
    "ResourceResolver",
    "SignResult",
    "SignedUrl",
    "Signer",
    "SignerConfig",
    "SigningFailed",
    "SystemClock",
    "build_token",
    "canonicalize",
    "get_identifier_signed",
    "get_signed_resource",
    "strip_words",
]
