"""Identifier to resource path resolution."""

from __future__ import annotations

from typing import Callable, Mapping, Protocol


class ResourceResolver(Protocol):
    """Maps an opaque numeric identifier to a resource path or URL."""

    def resolve(self, identifier: int) -> str | None: ...


class CallableResolver:
    """Adapts a plain function into a ResourceResolver."""

    def __init__(self, func: Callable[[int], str | None]) -> None:
        self._func = func

    def resolve(self, identifier: int) -> str | None:
        return self._func(identifier)


class MappingResolver:
    """Resolver backed by a static mapping (catalogs, tests)."""

    def __init__(self, paths: Mapping[int, str]) -> None:
        self._paths = dict(paths)

    def resolve(self, identifier: int) -> str | None:
        return self._paths.get(identifier)


def as_resolver(
    value: ResourceResolver | Callable[[int], str | None] | None,
) -> ResourceResolver | None:
    """Coerce a resolver argument at construction time."""
    if value is None:
        return None
    if hasattr(value, "resolve"):
        return value  # type: ignore[return-value]
    if callable(value):
        return CallableResolver(value)
    raise TypeError(f"Unsupported resolver: {value!r}")
