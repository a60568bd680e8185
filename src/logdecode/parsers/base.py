"""Decoder Protocol and the per-line outcome type shared by all formats."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Protocol, Union, runtime_checkable

from ..errors import DecodeError

RawLine = Union[bytes, str]


@dataclass(frozen=True)
class DecodeOutcome:
    """Result of decoding one line: a full record or a failure, never both."""

    ok: bool
    record: Any = None
    error: DecodeError | None = None
    line_number: int | None = None

    @classmethod
    def success(cls, record: Any, line_number: int | None = None) -> "DecodeOutcome":
        return cls(ok=True, record=record, line_number=line_number)

    @classmethod
    def failure(cls, error: DecodeError, line_number: int | None = None) -> "DecodeOutcome":
        return cls(ok=False, error=error, line_number=line_number)

    @property
    def kind(self) -> str | None:
        """Failure kind, or None on success."""
        return self.error.kind if self.error is not None else None


@runtime_checkable
class LineDecoder(Protocol):
    """Protocol for line decoders — duck-typed, no inheritance required."""

    @property
    def fmt(self) -> str:
        """Canonical format identifier this decoder is bound to."""
        ...

    def decode(self, line: RawLine) -> Any:
        """Decode one line. Raises a DecodeError subclass on failure."""
        ...

    def try_decode(self, line: RawLine, line_number: int | None = None) -> DecodeOutcome:
        """Decode one line without raising for grammar failures."""
        ...

    def decode_lines(self, lines: Iterable[RawLine]) -> Iterator[DecodeOutcome]:
        """Decode successive lines, numbering them from 1."""
        ...

    def decode_file(self, path: str) -> Iterator[DecodeOutcome]:
        """Stream-decode a file line by line."""
        ...


def to_bytes(line: RawLine) -> bytes:
    """Encode text lines as UTF-8; undecodable bytes survive a round trip."""
    if isinstance(line, str):
        return line.encode("utf-8", errors="surrogateescape")
    return bytes(line)


def strip_terminator(line: RawLine) -> bytes:
    """Return ``line`` as bytes with one trailing ``\\n`` or ``\\r\\n`` removed.

    Nothing else is stripped: leading and trailing spaces belong to the line.
    """
    raw = to_bytes(line)
    if raw.endswith(b"\r\n"):
        return raw[:-2]
    if raw.endswith(b"\n"):
        return raw[:-1]
    return raw
