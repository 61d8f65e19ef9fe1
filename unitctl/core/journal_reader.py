"""Journal reader for querying systemd logs via journalctl."""

import json
import logging
import re
import subprocess
import threading
from dataclasses import replace
from typing import Iterator, List, Optional

from ..exceptions import (
    CommandError,
    CommandNotFoundError,
    CommandTimeoutError,
    DecodeError,
    JournalReadError,
)
from ..models.journal import JournalMessage, JournalQuery
from ..models.unit import Scope
from ..utils.constants import (
    DEFAULT_JOURNAL_LINES,
    DEFAULT_TIMEOUT,
    JOURNALCTL_ENV,
    JOURNALCTL_EXEC,
    STREAM_CLOSE_TIMEOUT,
)
from ..utils.process import resolve_executable

logger = logging.getLogger(__name__)

# CSI sequences (colors, cursor movement) and two-byte escapes
ANSI_ESCAPE_RE = re.compile(r"\x1b(?:\[[0-?]*[ -/]*[@-~]|[@-Z\\-_])")

# journalctl JSON key -> JournalMessage field
JOURNAL_FIELDS = {
    "MESSAGE": "message",
    "__REALTIME_TIMESTAMP": "timestamp",
    "JOB_TYPE": "job_type",
    "_TRANSPORT": "transport",
    "__CURSOR": "cursor",
    "EXIT_STATUS": "exit_status",
    "EXIT_CODE": "exit_code",
}


def strip_colors(text: str) -> str:
    """Remove terminal escape sequences from *text*."""
    return ANSI_ESCAPE_RE.sub("", text)


def _field_text(key: str, value, raw: str) -> str:
    """Convert one journal field to text.

    journalctl emits a field as a string, or as an array of byte values when
    the data is not valid UTF-8.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        try:
            return bytes(value).decode("utf-8", errors="replace")
        except (TypeError, ValueError):
            raise DecodeError(f"{key} is neither a string nor a byte array", raw)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise DecodeError(f"{key} has unsupported type {type(value).__name__}", raw)


def decode_message(raw: str) -> JournalMessage:
    """Decode one line of ``journalctl --output json`` into a JournalMessage.

    Escape sequences are stripped from the message text.

    Raises:
        DecodeError: If the line is not a JSON object or a field cannot be decoded
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise DecodeError(f"invalid journal line: {e}", raw)

    if not isinstance(data, dict):
        raise DecodeError(f"expected a JSON object, got {type(data).__name__}", raw)

    fields = {attr: _field_text(key, data.get(key), raw) for key, attr in JOURNAL_FIELDS.items()}
    fields["message"] = strip_colors(fields["message"])
    return JournalMessage(**fields)


class JournalStream:
    """Live output of a ``journalctl -f`` process.

    The caller owns the process until close() is called; iterating yields raw
    lines and messages() yields decoded entries. A background watcher records
    the exit code if journalctl terminates on its own, but it never closes the
    stream for the caller: readers see end of file, not a closed handle.
    """

    def __init__(self, cmd: List[str], process: subprocess.Popen):
        self.cmd = cmd
        self.process = process
        self.stdout = process.stdout
        self.returncode: Optional[int] = None
        self.stderr_output = ""
        self._closed = False
        self._lock = threading.Lock()
        self._watcher = threading.Thread(target=self._watch, name="journalctl-watcher", daemon=True)
        self._watcher.start()

    @property
    def closed(self) -> bool:
        return self._closed

    def readline(self) -> str:
        """Read one raw line, '' at end of stream."""
        return self.stdout.readline()

    def __iter__(self) -> Iterator[str]:
        for line in self.stdout:
            line = line.strip()
            if line:
                yield line

    def messages(self) -> Iterator[JournalMessage]:
        """Yield decoded messages; undecodable lines are logged and skipped."""
        for line in self:
            try:
                yield decode_message(line)
            except DecodeError as e:
                logger.warning(f"Skipping journal line: {e}")

    def close(self):
        """Stop journalctl and release the pipe. Safe to call more than once."""
        with self._lock:
            if self._closed:
                return
            self._closed = True

        if self.process.poll() is None:
            self.process.terminate()
            try:
                self.process.wait(timeout=STREAM_CLOSE_TIMEOUT)
            except subprocess.TimeoutExpired:
                logger.warning(f"journalctl did not exit after terminate, killing pid {self.process.pid}")
                self.process.kill()
                self.process.wait()

        self.stdout.close()
        self._watcher.join(timeout=STREAM_CLOSE_TIMEOUT)
        logger.debug(f"Closed journal stream: {' '.join(self.cmd)}")

    def _watch(self):
        # Drain stderr so the child never blocks on it, then record the exit
        if self.process.stderr is not None:
            self.stderr_output = self.process.stderr.read()
            self.process.stderr.close()
        self.returncode = self.process.wait()
        if not self._closed:
            logger.warning(
                f"journalctl exited on its own ({self.returncode}): {self.stderr_output.strip()}"
            )

    def __enter__(self) -> 'JournalStream':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class JournalReader:
    """Reads journal entries via journalctl ``--output json``."""

    decode_message = staticmethod(decode_message)

    def __init__(
        self,
        scope: Optional[Scope] = None,
        journalctl: Optional[str] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        default_lines: str = DEFAULT_JOURNAL_LINES,
    ):
        """Initialize the journal reader.

        Args:
            scope: System or user scope; only its user flag matters here
            journalctl: Path of the journalctl executable ($UNITCTL_JOURNALCTL or 'journalctl')
            timeout: Seconds a one-shot query may run, None to wait forever
            default_lines: Entry count used when a query does not set one
        """
        self.scope = scope or Scope.system()
        self.journalctl = resolve_executable(journalctl, JOURNALCTL_ENV, JOURNALCTL_EXEC)
        self.timeout = timeout
        self.default_lines = default_lines

    @classmethod
    def system(cls, **kwargs) -> 'JournalReader':
        """Reader for the system journal."""
        return cls(Scope.system(), **kwargs)

    @classmethod
    def user(cls, **kwargs) -> 'JournalReader':
        """Reader for the current user's journal."""
        return cls(Scope.user(), **kwargs)

    @classmethod
    def from_config(cls, config_manager) -> 'JournalReader':
        """Create a reader from a loaded ConfigManager."""
        return cls(
            config_manager.scope,
            journalctl=resolve_executable(None, JOURNALCTL_ENV, config_manager.get_setting("journalctl")),
            timeout=config_manager.get_setting("timeout", DEFAULT_TIMEOUT),
            default_lines=str(config_manager.get_setting("journal_lines", DEFAULT_JOURNAL_LINES)),
        )

    def build_command(self, query: JournalQuery) -> List[str]:
        """Return the full journalctl command line for *query*."""
        if not query.lines:
            query = replace(query, lines=self.default_lines)
        cmd = [self.journalctl, *query.to_args(), "--output", "json"]
        if self.scope.as_user:
            cmd.append("--user")
        return cmd

    def get(self, query: Optional[JournalQuery] = None) -> List[JournalMessage]:
        """Get the most recent journal entries matching *query*.

        All output is read before waiting for journalctl to exit. Bad lines do
        not stop the read; they are collected with any exit failure.

        Returns:
            Decoded messages in journal order

        Raises:
            CommandNotFoundError: If journalctl does not exist
            CommandTimeoutError: If journalctl ran longer than the reader timeout;
                its ``messages`` holds the entries decoded before the kill
            JournalReadError: If any line failed to decode or journalctl exited
                non-zero; its ``messages`` holds the entries that did decode
        """
        cmd = self.build_command(replace(query or JournalQuery(), follow=False))
        process = self._spawn(cmd)

        timed_out = threading.Event()

        def _expire():
            # Only a still-running process counts as timed out
            if process.poll() is None:
                timed_out.set()
                process.kill()

        # stderr is drained concurrently so a chatty journalctl never blocks stdout
        stderr_chunks: List[str] = []
        drain = threading.Thread(
            target=lambda: stderr_chunks.append(process.stderr.read()),
            name="journalctl-stderr",
            daemon=True,
        )

        timer = None
        if self.timeout is not None:
            timer = threading.Timer(self.timeout, _expire)
            timer.daemon = True

        messages: List[JournalMessage] = []
        errors: List[Exception] = []
        try:
            with process:
                drain.start()
                if timer is not None:
                    timer.start()
                for line in process.stdout:
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        messages.append(decode_message(line))
                    except DecodeError as e:
                        logger.warning(f"Skipping journal line: {e}")
                        errors.append(e)
                drain.join()
                returncode = process.wait()
        finally:
            if timer is not None:
                timer.cancel()
        stderr = "".join(stderr_chunks)

        # A process that exited cleanly before the kill landed still succeeded
        if timed_out.is_set() and returncode != 0:
            error = CommandTimeoutError(cmd, self.timeout, stderr)
            error.messages = messages
            raise error

        if returncode != 0:
            logger.error(f"Command failed ({returncode}): {' '.join(cmd)}")
            errors.append(CommandError(
                f"Command failed ({returncode}): {' '.join(cmd)}\n{stderr.strip()}",
                cmd,
                returncode,
                stderr,
            ))

        if errors:
            raise JournalReadError(errors, messages)
        return messages

    def stream(self, query: Optional[JournalQuery] = None) -> JournalStream:
        """Follow the journal, starting after ``query.after_cursor`` if set.

        The returned stream must be closed (or used as a context manager) to
        stop journalctl.
        """
        cmd = self.build_command(replace(query or JournalQuery(), follow=True))
        return JournalStream(cmd, self._spawn(cmd))

    def _spawn(self, cmd: List[str]) -> subprocess.Popen:
        logger.debug(f"Exec: {cmd!r}")
        try:
            return subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
            )
        except FileNotFoundError:
            raise CommandNotFoundError(cmd)
