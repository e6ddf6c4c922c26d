"""One-shot helpers around Signer."""

from __future__ import annotations

from typing import Any, Callable, Mapping

from urlsigner.signer.config import DEFAULT_PARAM_NAME, SignerConfig
from urlsigner.signer.resolver import ResourceResolver
from urlsigner.signer.signer import Signer, SignResult


def get_signed_resource(
    resource: str,
    base_url: str,
    secret: bytes | str,
    resource_base: str | None = None,
    param_name: str = DEFAULT_PARAM_NAME,
    use_timestamp: bool = True,
    additional_params: Mapping[str, Any] | None = None,
) -> SignResult:
    """Sign a direct path or URL with a throwaway signer."""
    config = SignerConfig(
        base_url=base_url,
        secret=secret,  # type: ignore[arg-type]
        resource_base=resource_base,
        param_name=param_name,
        use_timestamp=use_timestamp,
    )
    return Signer(config).generate_signed_url(resource, additional_params)


def get_identifier_signed(
    identifier: int,
    base_url: str,
    secret: bytes | str,
    resource_base: str | None,
    resolver: ResourceResolver | Callable[[int], str | None],
) -> SignResult:
    """Resolve an identifier through ``resolver`` and sign the resulting filename."""
    config = SignerConfig(base_url=base_url, secret=secret, resource_base=resource_base)  # type: ignore[arg-type]
    return Signer(config, resolver=resolver).generate_signed_url(identifier)
