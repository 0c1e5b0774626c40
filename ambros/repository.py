"""Persistent command storage backed by an ordered key-value table."""

from __future__ import annotations

import logging
import os
import sqlite3
import threading
from datetime import datetime, timezone
from types import TracebackType
from typing import Iterator, Protocol, runtime_checkable

from .models import Command, ExecutedCommand, Template

_CMD_PREFIX = "cmd:"
_TIME_PREFIX = "time:"
_STORED_PREFIX = "stored:"
_TAG_PREFIX = "tag:"


class NotFoundError(LookupError):
    """Raised when a key or record does not exist in the repository."""


@runtime_checkable
class RepositoryProtocol(Protocol):
    """The operations a command repository provides."""

    def put(self, command: Command) -> None: ...

    def get(self, command_id: str) -> Command: ...

    def find_by_id(self, command_id: str) -> Command: ...

    def get_limit_commands(self, limit: int) -> list[Command]: ...

    def get_all_commands(self) -> list[Command]: ...

    def search_by_tag(self, tag: str) -> list[Command]: ...

    def search_by_status(self, success: bool) -> list[Command]: ...

    def get_template(self, name: str) -> Template: ...

    def push(self, command: Command) -> None: ...

    def delete(self, command_id: str) -> None: ...


def _time_stamp(value: datetime | None) -> str:
    """Format a timestamp as ``YYYYMMDDTHHMMSS[.fraction](Z|+hhmm)``."""
    if value is None:
        value = datetime(1, 1, 1, tzinfo=timezone.utc)
    elif value.tzinfo is None:
        value = value.astimezone()
    stamp = (
        f"{value.year:04d}{value.month:02d}{value.day:02d}T"
        f"{value.hour:02d}{value.minute:02d}{value.second:02d}"
    )
    fraction = f"{value.microsecond * 1000:09d}".rstrip("0")
    if fraction:
        stamp += "." + fraction
    offset = value.utcoffset()
    seconds = int(offset.total_seconds()) if offset is not None else 0
    if seconds == 0:
        return stamp + "Z"
    sign = "+" if seconds > 0 else "-"
    seconds = abs(seconds)
    return f"{stamp}{sign}{seconds // 3600:02d}{(seconds % 3600) // 60:02d}"


def _time_key(command: Command) -> str:
    return f"{_TIME_PREFIX}{_time_stamp(command.created_at)}:{command.id}"


class Repository:
    """Stores executed and bookmarked commands in a single database file."""

    def __init__(self, db_path: str | os.PathLike[str], logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)
        self.db_path = os.fspath(db_path)
        self._lock = threading.RLock()
        directory = os.path.dirname(self.db_path)
        if directory:
            os.makedirs(directory, mode=0o755, exist_ok=True)
        self._conn: sqlite3.Connection | None = sqlite3.connect(
            self.db_path, check_same_thread=False
        )
        with self._conn:
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS kv (key TEXT PRIMARY KEY, value TEXT NOT NULL)"
            )

    # -- lifecycle ---------------------------------------------------------

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def __enter__(self) -> Repository:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # -- low-level key access ---------------------------------------------

    @property
    def _db(self) -> sqlite3.Connection:
        if self._conn is None:
            raise sqlite3.ProgrammingError("repository is closed")
        return self._conn

    def _read(self, key: str) -> str:
        row = self._db.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        if row is None:
            raise NotFoundError("Key not found")
        return row[0]

    def _scan(self, prefix: str, reverse: bool = False) -> Iterator[tuple[str, str]]:
        order = "DESC" if reverse else "ASC"
        rows = self._db.execute(
            f"SELECT key, value FROM kv WHERE substr(key, 1, ?) = ? ORDER BY key {order}",
            (len(prefix), prefix),
        ).fetchall()
        yield from rows

    def _write(self, items: list[tuple[str, str]]) -> None:
        with self._lock, self._db:
            self._db.executemany("INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)", items)

    # -- commands ----------------------------------------------------------

    def put(self, command: Command) -> None:
        """Store ``command`` by ID and index it by creation time."""
        data = command.to_json()
        self._write([(_CMD_PREFIX + command.id, data), (_time_key(command), command.id)])

    def get(self, command_id: str) -> Command:
        with self._lock:
            return Command.from_json(self._read(_CMD_PREFIX + command_id))

    def find_by_id(self, command_id: str) -> Command:
        return self.get(command_id)

    def get_limit_commands(self, limit: int) -> list[Command]:
        """Return up to ``limit`` commands, most recent first."""
        commands: list[Command] = []
        if limit <= 0:
            return commands
        with self._lock:
            for _, command_id in self._scan(_TIME_PREFIX, reverse=True):
                try:
                    commands.append(Command.from_json(self._read(_CMD_PREFIX + command_id)))
                except (NotFoundError, ValueError):
                    continue
                if len(commands) >= limit:
                    break
        return commands

    def get_all_commands(self) -> list[Command]:
        with self._lock:
            return [Command.from_json(value) for _, value in self._scan(_CMD_PREFIX)]

    def search_by_tag(self, tag: str) -> list[Command]:
        """Return commands carrying ``tag``, compared without regard to case."""
        wanted = tag.casefold()
        return [
            command
            for command in self.get_all_commands()
            if any(t.casefold() == wanted for t in command.tags)
        ]

    def search_by_status(self, success: bool) -> list[Command]:
        return [c for c in self.get_all_commands() if c.status == success]

    def get_template(self, name: str) -> Template:
        raise NotFoundError(f"template not found: {name}")

    def delete(self, command_id: str) -> None:
        """Remove a command and its index entries."""
        key = _CMD_PREFIX + command_id
        with self._lock, self._db:
            command = Command.from_json(self._read(key))
            keys = [key, _time_key(command)]
            keys.extend(f"{_TAG_PREFIX}{tag}:{command_id}" for tag in command.tags)
            self._db.executemany("DELETE FROM kv WHERE key = ?", [(k,) for k in keys])

    def get_executed_commands(self, count: int) -> list[ExecutedCommand]:
        return [
            command.as_executed_command(order)
            for order, command in enumerate(self.get_limit_commands(count))
        ]

    # -- stored (bookmarked) commands ---------------------------------------

    def push(self, command: Command) -> None:
        """Bookmark ``command`` for later use."""
        self._write([(_STORED_PREFIX + command.id, command.to_json())])

    def get_all_stored_commands(self) -> list[Command]:
        with self._lock:
            return [Command.from_json(value) for _, value in self._scan(_STORED_PREFIX)]

    def find_in_store_by_id(self, command_id: str) -> Command:
        with self._lock:
            return Command.from_json(self._read(_STORED_PREFIX + command_id))

    def delete_stored_command(self, command_id: str) -> None:
        with self._lock, self._db:
            self._db.execute("DELETE FROM kv WHERE key = ?", (_STORED_PREFIX + command_id,))

    def delete_all_stored_commands(self) -> None:
        prefix = _STORED_PREFIX
        with self._lock, self._db:
            self._db.execute(
                "DELETE FROM kv WHERE substr(key, 1, ?) = ?", (len(prefix), prefix)
            )

    # -- whole database -----------------------------------------------------

    def backup_schema(self) -> None:
        """Write a full copy of the database next to it, with a ``.bkp`` suffix."""
        backup_file = self.db_path + ".bkp"
        with self._lock:
            target = sqlite3.connect(backup_file)
            try:
                self._db.backup(target)
            finally:
                target.close()

    def delete_schema(self, complete: bool) -> None:
        """Remove every entry from the database."""
        with self._lock, self._db:
            self._db.execute("DELETE FROM kv")