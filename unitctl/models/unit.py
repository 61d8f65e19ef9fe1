"""Data models for systemd units and manager scope."""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..utils.constants import DEFAULT_SERVICES_DIR, USER_SERVICES_DIR
from ..utils.service_file import normalize_name


class ActiveState(Enum):
    """Enumeration of unit active states."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    FAILED = "failed"
    ACTIVATING = "activating"
    DEACTIVATING = "deactivating"
    RELOADING = "reloading"
    UNKNOWN = "unknown"

    @classmethod
    def from_string(cls, state_str: str) -> 'ActiveState':
        """Convert a string to ActiveState enum.

        Args:
            state_str: ActiveState string from systemctl

        Returns:
            ActiveState enum value
        """
        try:
            return cls(state_str.strip().lower())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class Unit:
    """One row of ``systemctl list-units`` output.

    Attributes:
        name: Unit name (e.g., 'sshd.service')
        load: Load state ('loaded', 'not-found', ...)
        active: High-level activation state
        sub: Low-level, type specific state ('running', 'exited', ...)
        description: Unit description
    """

    name: str
    load: str = ""
    active: str = ""
    sub: str = ""
    description: str = ""

    @property
    def state(self) -> ActiveState:
        return ActiveState.from_string(self.active)

    @classmethod
    def from_dict(cls, data: dict) -> 'Unit':
        """Create a Unit from one object of the JSON listing.

        Raises:
            KeyError: If the 'unit' key is missing
            TypeError: If *data* is not a mapping
        """
        return cls(
            name=data["unit"],
            load=data.get("load", ""),
            active=data.get("active", ""),
            sub=data.get("sub", ""),
            description=data.get("description", ""),
        )

    def to_dict(self) -> dict:
        return {
            "unit": self.name,
            "load": self.load,
            "active": self.active,
            "sub": self.sub,
            "description": self.description,
        }


def resolve_user_dir() -> str:
    """Return the per-user unit directory, using a literal '~' if the home is unknown."""
    return os.path.join(os.path.expanduser("~"), USER_SERVICES_DIR)


@dataclass(frozen=True)
class Scope:
    """Where unit files live and whether commands run with ``--user``.

    A blank *dir* is derived once from *as_user* at construction.
    """

    dir: str = ""
    as_user: bool = False

    def __post_init__(self):
        if not self.dir:
            object.__setattr__(self, "dir", resolve_user_dir() if self.as_user else DEFAULT_SERVICES_DIR)

    @classmethod
    def system(cls) -> 'Scope':
        return cls(DEFAULT_SERVICES_DIR, as_user=False)

    @classmethod
    def user(cls) -> 'Scope':
        return cls(resolve_user_dir(), as_user=True)

    def unit_path(self, name: str) -> Path:
        """Return the unit-file path for *name*, adding the suffix if needed."""
        return Path(self.dir) / normalize_name(name)

    def to_dict(self) -> dict:
        return {"dir": self.dir, "asuser": self.as_user}

    @classmethod
    def from_dict(cls, data: dict) -> 'Scope':
        return cls(dir=data.get("dir") or "", as_user=bool(data.get("asuser", False)))
