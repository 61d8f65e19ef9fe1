"""Shared pytest fixtures for the unitctl test suite.

The real systemctl and journalctl are never invoked. Instead, small shell
scripts written into ``tmp_path`` stand in for them: each one records the
arguments it was called with and replies with canned output and an exit
code chosen by the test.
"""

from __future__ import annotations

import stat
from pathlib import Path

import pytest

from unitctl.models.unit import Scope

ARG_SEP = "\x1f"


class FakeTool:
    """A fake executable whose replies are controlled from the test."""

    def __init__(self, directory: Path, name: str):
        self.dir = directory
        self.path = directory / name
        self.log = directory / f"{name}.calls"
        self.out = directory / f"{name}.out"
        self.code = directory / f"{name}.code"
        self.respond()
        self.script(f'cat "{self.out}"\nexit "$(cat "{self.code}")"')

    def script(self, body: str) -> "FakeTool":
        """Replace the reply logic with a custom shell *body*.

        Argument recording is always kept in front of the body.
        """
        self.path.write_text(
            "#!/bin/sh\n"
            f"(IFS=$(printf '\\037'); printf '%s\\n' \"$*\") >> \"{self.log}\"\n"
            f"{body}\n"
        )
        self.path.chmod(self.path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return self

    def respond(self, output: str = "", returncode: int = 0) -> "FakeTool":
        """Set the text printed and the exit code of the next calls."""
        self.out.write_text(output)
        self.code.write_text(str(returncode))
        return self

    def calls(self) -> list[list[str]]:
        """Return the argv (without the program name) of every call so far."""
        if not self.log.exists():
            return []
        return [line.split(ARG_SEP) if line else [] for line in self.log.read_text().splitlines()]

    @property
    def last_call(self) -> list[str]:
        return self.calls()[-1]


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    """Directory holding the fake executables."""
    d = tmp_path / "bin"
    d.mkdir()
    return d


@pytest.fixture
def fake_systemctl(bin_dir: Path) -> FakeTool:
    return FakeTool(bin_dir, "systemctl")


@pytest.fixture
def fake_journalctl(bin_dir: Path) -> FakeTool:
    return FakeTool(bin_dir, "journalctl")


@pytest.fixture
def units_dir(tmp_path: Path) -> Path:
    """Isolated directory standing in for /etc/systemd/system/."""
    d = tmp_path / "units"
    d.mkdir()
    return d


@pytest.fixture
def system_scope(units_dir: Path) -> Scope:
    return Scope(str(units_dir), as_user=False)


@pytest.fixture
def user_scope(tmp_path: Path) -> Scope:
    """User scope whose directory does not exist yet."""
    return Scope(str(tmp_path / "home" / ".local/share/systemd/user"), as_user=True)


@pytest.fixture
def journal_line():
    """Factory building one ``journalctl --output json`` line.

    Example::

        journal_line(MESSAGE="started", cursor="s=1")
    """
    import json

    def _make(cursor: str = "s=abc;i=1", **fields) -> str:
        defaults = {
            "MESSAGE": "hello",
            "__REALTIME_TIMESTAMP": "1700000000000000",
            "_TRANSPORT": "journal",
            "__CURSOR": cursor,
        }
        defaults.update(fields)
        return json.dumps(defaults)

    return _make
