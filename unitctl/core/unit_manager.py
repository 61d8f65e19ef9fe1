"""Unit manager for interacting with systemd via systemctl."""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from ..exceptions import STATUS_EXIT_CODES, DecodeError
from ..models.service import ServiceDefinition
from ..models.unit import Scope, Unit
from ..utils import service_file
from ..utils.constants import DEFAULT_TIMEOUT, JOURNALCTL_ENV, SYSTEMCTL_ENV, SYSTEMCTL_EXEC
from ..utils.process import check_command, command_failed, resolve_executable, run_command
from .journal_reader import JournalReader

logger = logging.getLogger(__name__)


class UnitManager:
    """Manages systemd units via systemctl commands.

    Every operation runs one systemctl process. Failures raise CommandError
    (or one of its subclasses) carrying the captured combined output.
    """

    def __init__(
        self,
        scope: Optional[Scope] = None,
        systemctl: Optional[str] = None,
        journalctl: Optional[str] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
    ):
        """Initialize the unit manager.

        Args:
            scope: System or user scope, defaults to system-wide
            systemctl: Path of the systemctl executable ($UNITCTL_SYSTEMCTL or 'systemctl')
            journalctl: Path of the journalctl executable handed to journal()
            timeout: Seconds to wait for each command, None to wait forever
        """
        self.scope = scope or Scope.system()
        self.systemctl = resolve_executable(systemctl, SYSTEMCTL_ENV, SYSTEMCTL_EXEC)
        self.journalctl = journalctl
        self.timeout = timeout

    @classmethod
    def system(cls, **kwargs) -> 'UnitManager':
        """Manager for system units stored in /etc/systemd/system/."""
        return cls(Scope.system(), **kwargs)

    @classmethod
    def user(cls, **kwargs) -> 'UnitManager':
        """Manager for the current user's units (adds --user to every command)."""
        return cls(Scope.user(), **kwargs)

    @classmethod
    def from_config(cls, config_manager) -> 'UnitManager':
        """Create a manager from a loaded ConfigManager.

        The environment still overrides the configured executables.
        """
        return cls(
            config_manager.scope,
            systemctl=resolve_executable(None, SYSTEMCTL_ENV, config_manager.get_setting("systemctl")),
            journalctl=resolve_executable(None, JOURNALCTL_ENV, config_manager.get_setting("journalctl")),
            timeout=config_manager.get_setting("timeout", DEFAULT_TIMEOUT),
        )

    @property
    def as_user(self) -> bool:
        return self.scope.as_user

    def list_units(self, pattern: Optional[str] = None) -> List[Unit]:
        """List service units, optionally filtered by a glob *pattern*.

        Args:
            pattern: Unit name pattern (e.g., 'ssh*')

        Returns:
            List of Unit rows

        Raises:
            CommandError: If systemctl exits non-zero
            DecodeError: If the output is not a JSON array of unit objects
        """
        args = ["list-units", "--type=service", "--all"]
        if pattern:
            args.append(pattern)
        args.extend(["--output", "json"])

        out = check_command(self._build_command(args), self.timeout)
        try:
            data = json.loads(out)
        except json.JSONDecodeError as e:
            raise DecodeError(f"invalid unit listing: {e}", out)

        if not isinstance(data, list):
            raise DecodeError(f"expected a JSON array, got {type(data).__name__}", out)

        try:
            return [Unit.from_dict(item) for item in data]
        except (KeyError, TypeError, AttributeError) as e:
            raise DecodeError(f"unexpected unit object: {e!r}", out)

    def start(self, name: str) -> str:
        """Start a unit.

        Args:
            name: Name of the unit

        Returns:
            Combined output of systemctl
        """
        return self._execute_systemctl_action("start", name)

    def stop(self, name: str) -> str:
        """Stop a unit."""
        return self._execute_systemctl_action("stop", name)

    def restart(self, name: str) -> str:
        """Restart a unit."""
        return self._execute_systemctl_action("restart", name)

    def enable(self, name: str) -> str:
        """Enable a unit to start automatically with the OS (or user session)."""
        return self._execute_systemctl_action("enable", name)

    def disable(self, name: str) -> str:
        """Disable a unit from starting automatically."""
        return self._execute_systemctl_action("disable", name)

    def status(self, name: str) -> str:
        """Get the status text of a unit.

        Args:
            name: Name of the unit

        Returns:
            Output of ``systemctl status``

        Raises:
            UnitUnusedError: Exit code 2
            UnitNotActiveError: Exit code 3
            NoSuchUnitError: Exit code 4
            CommandError: Any other non-zero exit

        The classified errors keep the status text in their ``output`` attribute.
        """
        cmd = self._build_command(["status", name])
        result = run_command(cmd, self.timeout)
        if result.returncode == 0:
            return result.stdout

        error_cls = STATUS_EXIT_CODES.get(result.returncode)
        if error_cls is None:
            raise command_failed(cmd, result)

        logger.warning(f"Status of {name}: {error_cls.reason} (exit {result.returncode})")
        raise error_cls(cmd, result.returncode, result.stdout)

    def show(self, name: str) -> Dict[str, str]:
        """Get the properties of a unit.

        Lines are split on the first '='; lines without one are skipped.

        Returns:
            Mapping of property name to raw value
        """
        out = check_command(self._build_command(["show", name]), self.timeout)

        props: Dict[str, str] = {}
        for line in out.splitlines():
            key, sep, value = line.partition("=")
            if not sep:
                continue
            props[key] = value
        return props

    def daemon_reload(self) -> str:
        """Reload the systemd manager configuration."""
        return self._execute_systemctl_action("daemon-reload")

    def reset_failed(self) -> str:
        """Reset the failed state of all units."""
        return self._execute_systemctl_action("reset-failed")

    def unit_path(self, name: str) -> Path:
        """Return the unit-file path for *name* in this manager's scope."""
        return self.scope.unit_path(name)

    def remove(self, name: str) -> str:
        """Delete the unit file of *name* and reload the daemon.

        Raises:
            OSError: If the file cannot be removed; the daemon is not reloaded
        """
        path = self.unit_path(name)
        path.unlink()
        logger.info(f"Removed unit file {path}")
        return self.daemon_reload()

    def save_service(self, name: str, definition: ServiceDefinition):
        """Write *definition* as the unit file of *name*.

        The definition is validated before the file is opened. An existing
        file is truncated.

        Raises:
            ValidationError: If a required field is missing
            OSError: If the file cannot be opened or written
        """
        service_file.validate(definition)

        path = self.unit_path(name)
        if self.as_user:
            path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            service_file.render(definition, f)
        logger.info(f"Saved unit file {path}")

    def journal(self) -> JournalReader:
        """Return a journal reader sharing this manager's scope."""
        return JournalReader(self.scope, journalctl=self.journalctl, timeout=self.timeout)

    def _build_command(self, args: List[str]) -> List[str]:
        cmd = [self.systemctl, *args]
        if self.as_user:
            cmd.append("--user")
        return cmd

    def _execute_systemctl_action(self, action: str, *args: str) -> str:
        """Execute a systemctl action (start, stop, restart, etc.).

        Args:
            action: Systemctl action (start, stop, restart, enable, disable, ...)
            args: Extra arguments, usually the unit name

        Returns:
            Combined output of systemctl

        Raises:
            CommandError: If systemctl exits non-zero
        """
        out = check_command(self._build_command([action, *args]), self.timeout)
        target = f" {' '.join(args)}" if args else ""
        logger.info(f"Successfully ran {action}{target}")
        return out
