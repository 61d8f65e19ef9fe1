"""Data models for units, journal entries and service definitions."""

from .journal import JournalMessage, JournalQuery
from .service import ServiceDefinition
from .unit import ActiveState, Scope, Unit

__all__ = ["ActiveState", "JournalMessage", "JournalQuery", "Scope", "ServiceDefinition", "Unit"]
