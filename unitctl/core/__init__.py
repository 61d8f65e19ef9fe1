"""Core functionality for systemd unit management and journal queries."""

from .config_manager import ConfigManager
from .journal_reader import JournalReader, JournalStream, decode_message
from .unit_manager import UnitManager

__all__ = ["ConfigManager", "JournalReader", "JournalStream", "UnitManager", "decode_message"]
