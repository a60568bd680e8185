"""Exception hierarchy for logdecode.

Two families:
- UnknownFormatError is raised when a decoder is requested, never while decoding.
- DecodeError subclasses are raised by a decoder for a single rejected line.
  Each carries a short ``kind`` string so pipelines can count or quarantine
  failures without matching on class names.
"""
from __future__ import annotations

from typing import Iterable


class LogDecodeError(Exception):
    """Base exception for all logdecode errors."""


class UnknownFormatError(LogDecodeError):
    """Raised when a format name matches no alias or canonical identifier."""

    def __init__(self, name: str, known: Iterable[str] = ()) -> None:
        self.name = name
        self.known = sorted(set(known))
        msg = f"Unknown format: {name!r}"
        if self.known:
            msg += f". Available: {', '.join(self.known)}"
        super().__init__(msg)

    def __reduce__(self):
        return (type(self), (self.name, self.known))


class DecodeError(LogDecodeError):
    """A line was rejected by the grammar.

    Attributes:
        kind:      Stable machine-readable failure kind.
        position:  Byte offset in the line where scanning stopped.
    """

    kind = "decode_error"

    def __init__(self, message: str, position: int = 0) -> None:
        self.position = position
        super().__init__(message)

    def __reduce__(self):
        return (type(self), (str(self), self.position))


class HeaderMalformedError(DecodeError):
    """Missing or invalid ``<priority>`` bracketing."""

    kind = "header_malformed"


class VersionMissingError(DecodeError):
    """No digit immediately follows the priority's closing bracket."""

    kind = "version_missing"


class FieldMissingError(DecodeError):
    """The line ends before every required field is present."""

    kind = "field_missing"


class InvalidPidError(DecodeError):
    """The pid token is neither an integer in [0, 65535] nor ``-``."""

    kind = "invalid_pid"
