"""Data models for journal queries and messages."""

from dataclasses import dataclass
from typing import List

from ..utils.constants import DEFAULT_JOURNAL_LINES


@dataclass(frozen=True)
class JournalMessage:
    """One decoded journal entry.

    Attributes:
        message: Message text with terminal escape sequences removed
        timestamp: __REALTIME_TIMESTAMP, microseconds since the epoch
        job_type: JOB_TYPE of systemd job messages
        transport: _TRANSPORT the entry was received through
        cursor: __CURSOR, opaque position usable to resume after this entry
        exit_status: EXIT_STATUS of a finished service process
        exit_code: EXIT_CODE of a finished service process
    """

    message: str = ""
    timestamp: str = ""
    job_type: str = ""
    transport: str = ""
    cursor: str = ""
    exit_status: str = ""
    exit_code: str = ""


@dataclass
class JournalQuery:
    """Options shared by one-shot and follow journal queries.

    Attributes:
        unit: Show logs from the specified unit
        lines: Number of journal entries to show (defaults to 20)
        since: Show entries not older than the specified date
        after_cursor: Show entries after the specified cursor
        follow: Keep reading new entries as they are appended
    """

    unit: str = ""
    lines: str = ""
    since: str = ""
    after_cursor: str = ""
    follow: bool = False

    def to_args(self) -> List[str]:
        """Build the journalctl arguments for these options."""
        args: List[str] = []
        if self.unit:
            args.extend(["-u", self.unit])

        args.extend(["-n", str(self.lines) if self.lines else DEFAULT_JOURNAL_LINES])

        if self.since:
            args.extend(["--since", self.since])

        if self.follow:
            args.append("-f")

        if self.after_cursor:
            args.append(self.after_cursor)

        return args
