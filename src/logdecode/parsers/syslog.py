"""Syslog line decoder (RFC 5424 header layout).

Line shape::

    <PRI>VERSION TIMESTAMP HOST APP PID MSGID MESSAGE

PRI and VERSION form one contiguous token. Every other separator is exactly
one ASCII space. MESSAGE is the raw remainder of the line, kept byte-for-byte.
"""
from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass
from typing import Any, Iterable, Iterator

from ..errors import (
    DecodeError,
    FieldMissingError,
    HeaderMalformedError,
    InvalidPidError,
    VersionMissingError,
)
from .base import DecodeOutcome, RawLine, strip_terminator, to_bytes

logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(rb"<([0-9]+)>")
_VERSION_RE = re.compile(rb"[0-9]+")
# timestamp host app pid msgid message
_FIELDS_RE = re.compile(
    rb" (?P<timestamp>\S+)"
    rb" (?P<host>\S+)"
    rb" (?P<app>\S+)"
    rb" (?P<pid>\S+)"
    rb" (?P<message_id>\S+)"
    rb" (?P<message>.+)\Z",
    re.DOTALL,
)
_DIGITS_RE = re.compile(rb"[0-9]+")

NIL = b"-"
MAX_PID = 65535


def _text(raw: bytes) -> str:
    return raw.decode("utf-8", errors="surrogateescape")


@dataclass(frozen=True)
class SyslogRecord:
    """One decoded syslog line."""

    priority: int
    version: int
    timestamp: str
    host: str
    app: str
    pid: int
    message_id: str
    message: str

    def as_dict(self) -> dict[str, Any]:
        """Field name → value, in wire order."""
        return asdict(self)


def parse_pid(token: bytes) -> int:
    """Map a pid token to an integer; ``-`` means no pid and maps to 0."""
    if token == NIL:
        return 0
    if _DIGITS_RE.fullmatch(token):
        significant = token.lstrip(b"0") or b"0"
        if len(significant) <= 5 and int(significant) <= MAX_PID:
            return int(significant)
    raise InvalidPidError(f"Invalid pid: {_text(token)!r}")


class SyslogDecoder:
    """Decode syslog lines with an RFC 5424 header.

    Instances hold no mutable state, so one decoder can be shared across
    threads. Each call returns a fresh SyslogRecord.

    Usage::

        decoder = SyslogDecoder()
        record = decoder.decode(b"<134>1 2003-08-24T05:14:15Z ubuntu sshd 1999 - ok")
        record.pid  # 1999
    """

    __slots__ = ("_fmt",)

    def __init__(self, fmt: str = "syslog") -> None:
        self._fmt = fmt

    @property
    def fmt(self) -> str:
        return self._fmt

    def __repr__(self) -> str:
        return f"SyslogDecoder(fmt={self._fmt!r})"

    # ------------------------------------------------------------------
    # Single line
    # ------------------------------------------------------------------

    def decode(self, line: RawLine) -> SyslogRecord:
        """Decode one line with its terminator already stripped.

        Raises HeaderMalformedError, VersionMissingError, FieldMissingError
        or InvalidPidError. No partial record is ever returned.
        """
        raw = to_bytes(line)

        header = _HEADER_RE.match(raw)
        if header is None:
            pos = 0 if not raw.startswith(b"<") else 1
            raise HeaderMalformedError("Missing or malformed <priority> header", pos)

        version = _VERSION_RE.match(raw, header.end())
        if version is None:
            raise VersionMissingError(
                "No version digit immediately after '>'", header.end()
            )

        fields = _FIELDS_RE.match(raw, version.end())
        if fields is None:
            raise FieldMissingError(
                "Line ends before timestamp, host, app, pid, message_id and message",
                version.end(),
            )

        try:
            pid = parse_pid(fields.group("pid"))
        except InvalidPidError as exc:
            exc.position = fields.start("pid")
            raise

        return SyslogRecord(
            priority=int(header.group(1)),
            version=int(version.group()),
            timestamp=_text(fields.group("timestamp")),
            host=_text(fields.group("host")),
            app=_text(fields.group("app")),
            pid=pid,
            message_id=_text(fields.group("message_id")),
            message=_text(fields.group("message")),
        )

    def try_decode(self, line: RawLine, line_number: int | None = None) -> DecodeOutcome:
        """Like decode(), but report grammar failures as a failed outcome."""
        try:
            record = self.decode(line)
        except DecodeError as exc:
            logger.debug(
                "Rejected line %s: %s at byte %d", line_number, exc.kind, exc.position
            )
            return DecodeOutcome.failure(exc, line_number)
        return DecodeOutcome.success(record, line_number)

    # ------------------------------------------------------------------
    # Streams
    # ------------------------------------------------------------------

    def decode_lines(self, lines: Iterable[RawLine]) -> Iterator[DecodeOutcome]:
        """Decode successive lines, numbered from 1.

        A trailing ``\\n`` or ``\\r\\n`` is removed from each line. Empty lines
        are skipped but still counted.
        """
        for number, line in enumerate(lines, start=1):
            raw = strip_terminator(line)
            if not raw:
                continue
            yield self.try_decode(raw, number)

    def decode_file(self, path: str) -> Iterator[DecodeOutcome]:
        """Stream-decode a file. Memory usage: one line at a time."""
        with open(path, "rb") as fh:
            yield from self.decode_lines(fh)
