"""
Exception classes for unitctl

Every failure is surfaced to the caller; nothing is retried.
"""

from typing import List, Optional, Sequence

from .utils.constants import EXIT_NO_SUCH_UNIT, EXIT_UNIT_NOT_ACTIVE, EXIT_UNIT_UNUSED


class UnitctlError(Exception):
    """Base exception for all unitctl errors"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class CommandError(UnitctlError):
    """External tool exited non-zero"""

    def __init__(
        self,
        message: str,
        cmd: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        output: str = "",
    ):
        self.cmd = list(cmd) if cmd else []
        self.returncode = returncode
        self.output = output
        super().__init__(message)


class CommandNotFoundError(CommandError):
    """Executable could not be started"""

    def __init__(self, cmd: Sequence[str]):
        super().__init__(f"Command not found: {cmd[0]}", cmd)


class CommandTimeoutError(CommandError):
    """Bounded wait for the external tool expired"""

    def __init__(self, cmd: Sequence[str], timeout: float, output: str = ""):
        self.timeout = timeout
        # Entries read before the kill, when the caller collects any
        self.messages = []
        super().__init__(f"Command timed out after {timeout}s: {' '.join(cmd)}", cmd, output=output)


class UnitStatusError(CommandError):
    """systemctl status exited with one of its documented unit conditions"""

    reason = "unit status error"

    def __init__(self, cmd: Sequence[str], returncode: int, output: str = ""):
        super().__init__(self.reason, cmd, returncode, output)


class UnitUnusedError(UnitStatusError):
    reason = "unit unused"


class UnitNotActiveError(UnitStatusError):
    reason = "unit is not active"


class NoSuchUnitError(UnitStatusError):
    reason = "no such unit"


STATUS_EXIT_CODES = {
    EXIT_UNIT_UNUSED: UnitUnusedError,
    EXIT_UNIT_NOT_ACTIVE: UnitNotActiveError,
    EXIT_NO_SUCH_UNIT: NoSuchUnitError,
}


class DecodeError(UnitctlError):
    """Tool output was not valid JSON of the expected shape"""

    def __init__(self, message: str, raw: str = ""):
        self.raw = raw
        super().__init__(f"Decode Error: {message}")


class JournalReadError(UnitctlError):
    """One or more failures while reading a one-shot journal query.

    Holds every collected error together with the messages that did decode.
    """

    def __init__(self, errors: List[Exception], messages: Optional[list] = None):
        self.errors = list(errors)
        self.messages = list(messages or [])
        super().__init__("\n".join(str(e) for e in self.errors))


class ValidationError(UnitctlError, ValueError):
    """Service definition is missing a required field"""


class ConfigError(UnitctlError):
    """Configuration file could not be loaded"""

    def __init__(self, message: str):
        super().__init__(f"Config Error: {message}")
