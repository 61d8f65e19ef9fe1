"""Shared subprocess helpers used by the unit manager and the journal reader."""

import logging
import os
import subprocess
from typing import List, Optional

from ..exceptions import CommandError, CommandNotFoundError, CommandTimeoutError
from .constants import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


def run_command(cmd: List[str], timeout: Optional[float] = DEFAULT_TIMEOUT) -> subprocess.CompletedProcess:
    """Run *cmd* with stderr merged into stdout.

    The exit code is not checked here so callers can classify it.

    Args:
        cmd: Command and arguments to execute
        timeout: Seconds to wait before killing the child, or None to wait forever

    Returns:
        CompletedProcess whose ``stdout`` holds the combined output

    Raises:
        CommandNotFoundError: If the executable does not exist
        CommandTimeoutError: If the command did not finish within *timeout*
    """
    logger.debug(f"Exec: {cmd!r}")
    try:
        return subprocess.run(
            cmd,
            check=False,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except FileNotFoundError:
        raise CommandNotFoundError(cmd)
    except subprocess.TimeoutExpired as e:
        output = e.output.decode("utf-8", "replace") if isinstance(e.output, bytes) else (e.output or "")
        logger.error(f"Timeout after {timeout}s: {' '.join(cmd)}")
        raise CommandTimeoutError(cmd, timeout, output)


def check_command(cmd: List[str], timeout: Optional[float] = DEFAULT_TIMEOUT) -> str:
    """Run *cmd* and return its combined output.

    Raises:
        CommandError: If the command exits non-zero; the message includes the output
    """
    result = run_command(cmd, timeout)
    if result.returncode != 0:
        raise command_failed(cmd, result)
    return result.stdout


def command_failed(cmd: List[str], result: subprocess.CompletedProcess) -> CommandError:
    """Build the generic error for a non-zero exit."""
    output = result.stdout or ""
    logger.error(f"Command failed ({result.returncode}): {' '.join(cmd)}")
    return CommandError(
        f"Command failed ({result.returncode}): {' '.join(cmd)}\n{output.strip()}",
        cmd,
        result.returncode,
        output,
    )


def resolve_executable(explicit: Optional[str], env_var: str, default: str) -> str:
    """Pick the executable path: explicit argument, then environment, then *default*."""
    return explicit or os.getenv(env_var) or default
