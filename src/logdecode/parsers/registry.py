"""Format registry — resolve format names and build bound decoders.

Every format has one canonical identifier, the name its grammar is
implemented under, plus any number of aliases. Resolution is case-sensitive:

    rfc5424 -> syslog
    syslog  -> syslog

The default registry is populated once at import and only read afterwards,
so concurrent lookups need no locking.
"""
from __future__ import annotations

import logging
from typing import Callable

from ..errors import UnknownFormatError
from .base import LineDecoder
from .syslog import SyslogDecoder

logger = logging.getLogger(__name__)

DecoderFactory = Callable[[str], LineDecoder]

# (alias, canonical), in the order supported() reports them
_ALIASES: tuple[tuple[str, str], ...] = (
    ("rfc5424", "syslog"),
)

_DECODERS: dict[str, DecoderFactory] = {
    "syslog": SyslogDecoder,
}


class FormatRegistry:
    """Map format names and aliases onto canonical decoders.

    Usage::

        registry = FormatRegistry()
        registry.register("syslog", SyslogDecoder, aliases=["rfc5424"])

        decoder = registry.request_format("rfc5424")
        decoder.fmt  # "syslog"
    """

    def __init__(self) -> None:
        self._factories: dict[str, DecoderFactory] = {}
        self._aliases: dict[str, str] = {}
        self._pairs: list[tuple[str, str]] = []

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        canonical: str,
        factory: DecoderFactory,
        aliases: list[str] | tuple[str, ...] = (),
    ) -> None:
        if canonical in self._aliases:
            raise ValueError(f"{canonical!r} is already registered as an alias")
        self._factories[canonical] = factory
        for alias in aliases:
            self.add_alias(alias, canonical)
        logger.debug("Registered format %s (aliases: %s)", canonical, list(aliases))

    def add_alias(self, alias: str, canonical: str) -> None:
        if canonical not in self._factories:
            raise UnknownFormatError(canonical, self._factories)
        if alias in self._factories:
            raise ValueError(f"{alias!r} is already a canonical format")
        if alias in self._aliases:
            raise ValueError(f"{alias!r} already resolves to {self._aliases[alias]!r}")
        self._aliases[alias] = canonical
        self._pairs.append((alias, canonical))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def resolve(self, name: str) -> str:
        """Return the canonical identifier for ``name``.

        Canonical identifiers resolve to themselves. Raises UnknownFormatError
        if ``name`` is neither an alias nor a canonical identifier.
        """
        if name in self._factories:
            return name
        try:
            canonical = self._aliases[name]
        except KeyError:
            raise UnknownFormatError(name, self.names()) from None
        logger.debug("Resolved format alias %s -> %s", name, canonical)
        return canonical

    def request_format(self, name: str) -> LineDecoder:
        """Build a decoder bound to the canonical format for ``name``."""
        canonical = self.resolve(name)
        return self._factories[canonical](canonical)

    def supported(self) -> list[tuple[str, str]]:
        """All (alias, canonical) pairs, in registration order."""
        return list(self._pairs)

    def canonical_formats(self) -> list[str]:
        return list(self._factories)

    def names(self) -> list[str]:
        """Every accepted name, canonical identifiers first."""
        return list(self._factories) + list(self._aliases)

    def __contains__(self, name: object) -> bool:
        return name in self._factories or name in self._aliases

    def __repr__(self) -> str:
        return f"FormatRegistry(formats={self.canonical_formats()!r})"


def _build_default() -> FormatRegistry:
    registry = FormatRegistry()
    for canonical, factory in _DECODERS.items():
        registry.register(canonical, factory)
    for alias, canonical in _ALIASES:
        registry.add_alias(alias, canonical)
    return registry


# Module-level registry, read-only after import
default_registry = _build_default()


def resolve(name: str) -> str:
    return default_registry.resolve(name)


def request_format(name: str) -> LineDecoder:
    return default_registry.request_format(name)


def supported() -> list[tuple[str, str]]:
    return default_registry.supported()
