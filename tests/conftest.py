"""Shared pytest fixtures for logdecode tests."""
from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture()
def tmp_log_file(tmp_path: Path):
    """Return a factory that creates temporary log files."""

    def _make(lines: list[str], name: str = "test.log") -> Path:
        p = tmp_path / name
        p.write_bytes(("\n".join(lines) + "\n").encode("utf-8"))
        return p

    return _make


@pytest.fixture()
def syslog_lines() -> list[str]:
    return [
        "<134>1 2003-08-24T05:14:15.000003-07:00 ubuntu sshd 1999 - password accepted",
        "<33>5 1985-04-12T23:20:50.52Z test.com cron 304 - password accepted",
        "<1>0 2003-10-11T22:14:15.003Z test.com cron 65535 msgid1234 password accepted",
    ]


@pytest.fixture()
def invalid_lines() -> list[str]:
    return [
        "<134> 2013-09-04T10:25:52.618085 ubuntu sshd 1999 - password accepted",
        "<33>7 2013-09-04T10:25:52.618085 test.com cron not_a_pid - password accepted",
        "5:52.618085 test.com cron 65535 - password accepted",
    ]
