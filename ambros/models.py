"""Data models for commands, schedules, chains and templates."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


def _time_to_json(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _time_from_json(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def _format_when(value: datetime | None) -> str:
    when = value or datetime.min
    return (
        f"{when.day:02d}.{when.month:02d}.{when.year:04d} "
        f"{when.hour:02d}:{when.minute:02d}:{when.second:02d}"
    )


@dataclass
class Schedule:
    """A cron schedule attached to a command."""

    cron_expr: str = ""
    next_run: datetime | None = None
    last_run: datetime | None = None
    enabled: bool = False


def _schedule_to_dict(schedule: Schedule) -> dict[str, Any]:
    return {
        "cron_expr": schedule.cron_expr,
        "next_run": _time_to_json(schedule.next_run),
        "last_run": _time_to_json(schedule.last_run),
        "enabled": schedule.enabled,
    }


def _schedule_from_dict(data: dict[str, Any]) -> Schedule:
    return Schedule(
        cron_expr=data.get("cron_expr", ""),
        next_run=_time_from_json(data.get("next_run")),
        last_run=_time_from_json(data.get("last_run")),
        enabled=bool(data.get("enabled", False)),
    )


@dataclass
class ExecutedCommand:
    """A flattened view of a command execution, used for history listings."""

    id: str = ""
    command: str = ""
    status: bool = False
    when: datetime | None = None
    index: int = 0
    order: int = 0

    def as_flat_command(self) -> str:
        status = "true" if self.status else "false"
        return f"{{{_format_when(self.when)}}} [id: {self.id}, status: {status}] {self.command}"

    def log(self, logger: logging.Logger) -> None:
        """Write this execution to ``logger`` at info level."""
        logger.info(
            "Executed Command when=%s id=%s status=%s command=%s",
            _format_when(self.when),
            self.id,
            self.status,
            self.command,
        )


@dataclass
class Command:
    """A command that was executed or stored."""

    id: str = ""
    created_at: datetime | None = None
    terminated_at: datetime | None = None
    name: str = ""
    command: str = ""
    arguments: list[str] = field(default_factory=list)
    status: bool = False
    output: str = ""
    error: str = ""
    tags: list[str] = field(default_factory=list)
    category: str = ""
    variables: dict[str, str] = field(default_factory=dict)
    schedule: Schedule | None = None

    def clone(self) -> Command:
        """Return a copy with its own argument and tag lists.

        Variables are not carried over; the schedule is shared.
        """
        return Command(
            id=self.id,
            created_at=self.created_at,
            terminated_at=self.terminated_at,
            name=self.name,
            command=self.command,
            arguments=list(self.arguments),
            status=self.status,
            output=self.output,
            error=self.error,
            tags=list(self.tags),
            category=self.category,
            variables={},
            schedule=self.schedule,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "created_at": _time_to_json(self.created_at),
            "terminated_at": _time_to_json(self.terminated_at),
            "name": self.name,
            "command": self.command,
            "arguments": list(self.arguments),
            "status": self.status,
            "output": self.output,
            "error": self.error,
        }
        if self.tags:
            data["tags"] = list(self.tags)
        if self.category:
            data["category"] = self.category
        if self.variables:
            data["variables"] = dict(self.variables)
        if self.schedule is not None:
            data["schedule"] = _schedule_to_dict(self.schedule)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Command:
        schedule = data.get("schedule")
        return cls(
            id=data.get("id", ""),
            created_at=_time_from_json(data.get("created_at")),
            terminated_at=_time_from_json(data.get("terminated_at")),
            name=data.get("name", ""),
            command=data.get("command", ""),
            arguments=list(data.get("arguments") or []),
            status=bool(data.get("status", False)),
            output=data.get("output", ""),
            error=data.get("error", ""),
            tags=list(data.get("tags") or []),
            category=data.get("category", ""),
            variables=dict(data.get("variables") or {}),
            schedule=_schedule_from_dict(schedule) if schedule else None,
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str | bytes) -> Command:
        return cls.from_dict(json.loads(text))

    def as_history(self) -> str:
        return f"Name : {self.name} --> Arguments : {' '.join(self.arguments)}"

    def as_executed_command(self, order: int) -> ExecutedCommand:
        return ExecutedCommand(
            order=order,
            id=self.id,
            command=f"{self.name} {' '.join(self.arguments)}",
            status=self.status,
            when=self.created_at,
        )

    def to_map(self) -> dict[str, Any]:
        return {
            "ID": self.id,
            "Name": self.name,
            "Arguments": self.arguments,
            "Status": self.status,
            "Output": self.output,
            "Error": self.error,
            "Command": self.command,
            "Tags": self.tags,
            "Category": self.category,
            "Variables": self.variables,
            "Schedule": self.schedule,
            "CreatedAt": self.created_at,
            "TerminatedAt": self.terminated_at,
        }

    @classmethod
    def from_map(cls, mapping: dict[str, Any]) -> Command:
        return cls(
            id=mapping["ID"],
            name=mapping["Name"],
            arguments=mapping["Arguments"],
            status=mapping["Status"],
            output=mapping["Output"],
            error=mapping["Error"],
            created_at=mapping["CreatedAt"],
            terminated_at=mapping["TerminatedAt"],
        )

    def as_stored_command(self) -> str:
        return f"[{self.id}] {self.name} {' '.join(self.arguments)}"


@dataclass
class CommandChain:
    """An ordered list of command IDs to run in sequence."""

    id: str = ""
    name: str = ""
    description: str = ""
    commands: list[str] = field(default_factory=list)
    conditional: bool = False
    created_at: datetime | None = None


@dataclass
class CommandTemplate:
    """A parameterised command definition."""

    id: str = ""
    name: str = ""
    description: str = ""
    command: str = ""
    arguments: list[str] = field(default_factory=list)
    variables: dict[str, str] = field(default_factory=dict)


@dataclass
class SearchQuery:
    """Criteria for searching stored commands."""

    text: str = ""
    tags: list[str] = field(default_factory=list)
    category: str = ""
    date_from: datetime | None = None
    date_to: datetime | None = None
    status: bool | None = None


@dataclass
class Template:
    """A command pattern with named and positional placeholders."""

    id: str = ""
    created_at: datetime | None = None
    terminated_at: datetime | None = None
    name: str = ""
    pattern: str = ""
    description: str = ""
    variables: dict[str, str] = field(default_factory=dict)
    tags: list[str] = field(default_factory=list)

    def build_command(self, args: list[str]) -> list[str]:
        """Substitute ``{name}`` variables and ``{0}``, ``{1}``... arguments, then split."""
        command = self.pattern
        for key, value in self.variables.items():
            command = command.replace("{" + key + "}", value)
        for position, arg in enumerate(args):
            command = command.replace("{" + chr(ord("0") + position) + "}", arg)
        return command.split()