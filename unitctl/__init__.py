"""unitctl - a Python facade over systemctl and journalctl."""

from .core import ConfigManager, JournalReader, JournalStream, UnitManager
from .exceptions import (
    CommandError,
    CommandNotFoundError,
    CommandTimeoutError,
    ConfigError,
    DecodeError,
    JournalReadError,
    NoSuchUnitError,
    UnitctlError,
    UnitNotActiveError,
    UnitStatusError,
    UnitUnusedError,
    ValidationError,
)
from .models import ActiveState, JournalMessage, JournalQuery, Scope, ServiceDefinition, Unit
from .utils.constants import APP_VERSION

__version__ = APP_VERSION

__all__ = [
    "ActiveState",
    "CommandError",
    "CommandNotFoundError",
    "CommandTimeoutError",
    "ConfigError",
    "ConfigManager",
    "DecodeError",
    "JournalMessage",
    "JournalQuery",
    "JournalReadError",
    "JournalReader",
    "JournalStream",
    "NoSuchUnitError",
    "Scope",
    "ServiceDefinition",
    "Unit",
    "UnitManager",
    "UnitNotActiveError",
    "UnitStatusError",
    "UnitUnusedError",
    "UnitctlError",
    "ValidationError",
]
