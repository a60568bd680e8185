"""logdecode — decode single structured log lines into typed records."""
from __future__ import annotations

from .errors import (
    DecodeError,
    FieldMissingError,
    HeaderMalformedError,
    InvalidPidError,
    LogDecodeError,
    UnknownFormatError,
    VersionMissingError,
)
from .parsers.base import DecodeOutcome, LineDecoder
from .parsers.registry import FormatRegistry, default_registry, request_format, resolve, supported
from .parsers.syslog import SyslogDecoder, SyslogRecord

__version__ = "1.0.0"

__all__ = [
    "DecodeError",
    "DecodeOutcome",
    "FieldMissingError",
    "FormatRegistry",
    "HeaderMalformedError",
    "InvalidPidError",
    "LineDecoder",
    "LogDecodeError",
    "SyslogDecoder",
    "SyslogRecord",
    "UnknownFormatError",
    "VersionMissingError",
    "default_registry",
    "request_format",
    "resolve",
    "supported",
]
