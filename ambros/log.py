"""Logger construction and structured-field helpers."""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, MutableMapping

FIELD_KEY_COMMAND = "command"
FIELD_KEY_COMMAND_ID = "command_id"
FIELD_KEY_ERROR = "error"
FIELD_KEY_DURATION = "duration"
FIELD_KEY_STATUS = "status"
FIELD_KEY_USER = "user"
FIELD_KEY_PATH = "path"
FIELD_KEY_OPERATION = "operation"
FIELD_KEY_COMPONENT = "component"

COMPONENT_API = "api"
COMPONENT_SCHEDULER = "scheduler"
COMPONENT_ANALYTICS = "analytics"
COMPONENT_CLI = "cli"
COMPONENT_REPO = "repository"

Fields = dict[str, Any]
LoggerLike = logging.Logger | logging.LoggerAdapter

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "dpanic": logging.CRITICAL,
    "panic": logging.CRITICAL,
    "fatal": logging.CRITICAL,
}


@dataclass
class LogConfig:
    """How a logger is built: level name, optional output file, development mode."""

    level: str = "info"
    output_path: str = ""
    dev_mode: bool = False


def _level_name(levelno: int) -> str:
    if levelno >= logging.CRITICAL:
        return "fatal"
    if levelno >= logging.ERROR:
        return "error"
    if levelno >= logging.WARNING:
        return "warn"
    if levelno >= logging.INFO:
        return "info"
    return "debug"


def _caller(record: logging.LogRecord) -> str:
    return f"{os.path.basename(record.pathname)}:{record.lineno}"


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "level": _level_name(record.levelno),
            "ts": record.created,
            "caller": _caller(record),
            "msg": record.getMessage(),
        }
        entry.update(getattr(record, "fields", {}) or {})
        if record.exc_info:
            entry["stacktrace"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class _ConsoleFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        when = datetime.fromtimestamp(record.created, tz=timezone.utc).astimezone()
        parts = [
            when.isoformat(timespec="milliseconds"),
            _level_name(record.levelno).upper(),
            _caller(record),
            record.getMessage(),
        ]
        fields = getattr(record, "fields", None)
        if fields:
            parts.append(json.dumps(fields, default=str))
        line = "\t".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def new_logger(config: LogConfig) -> logging.Logger:
    """Build a logger from ``config``; JSON lines in production, tab-separated in dev mode."""
    text = config.level
    level = _LEVELS.get(text, _LEVELS.get(text.lower()))
    if level is None:
        raise ValueError(f'invalid log level: unrecognized level: "{text}"')

    if config.output_path:
        directory = os.path.dirname(config.output_path)
        if directory:
            try:
                os.makedirs(directory, mode=0o755, exist_ok=True)
            except OSError as exc:
                raise OSError(f"failed to create log directory: {exc}") from exc
        handler: logging.Handler = logging.FileHandler(config.output_path, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(_ConsoleFormatter() if config.dev_mode else _JsonFormatter())
    logger = logging.Logger("ambros", level)
    logger.addHandler(handler)
    return logger


class _FieldsAdapter(logging.LoggerAdapter):
    """Attaches a fixed set of fields to every record it logs."""

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["fields"] = {**self.extra, **(extra.get("fields") or {})}
        kwargs["extra"] = extra
        return msg, kwargs


def with_fields(logger: LoggerLike, fields: Mapping[str, Any]) -> logging.LoggerAdapter:
    """Return a logger that adds ``fields`` to every record."""
    return _FieldsAdapter(logger, dict(fields))


def command_fields(command_id: str, command: str) -> Fields:
    return {FIELD_KEY_COMMAND_ID: command_id, FIELD_KEY_COMMAND: command}


def error_fields(err: BaseException) -> Fields:
    return {FIELD_KEY_ERROR: str(err)}


def operation_fields(component: str, operation: str) -> Fields:
    return {FIELD_KEY_COMPONENT: component, FIELD_KEY_OPERATION: operation}


def log_command_execution(
    logger: LoggerLike,
    command_id: str,
    command: str,
    err: BaseException | None,
    duration: float,
) -> None:
    """Log the outcome of a command run, at error level if ``err`` is set."""
    fields = command_fields(command_id, command)
    fields[FIELD_KEY_DURATION] = duration
    fields[FIELD_KEY_STATUS] = "success"
    if err is not None:
        fields[FIELD_KEY_STATUS] = "error"
        fields[FIELD_KEY_ERROR] = str(err)
        logger.error("Command execution failed", extra={"fields": fields})
        return
    logger.info("Command execution completed", extra={"fields": fields})


def log_operation_result(
    logger: LoggerLike, component: str, operation: str, err: BaseException | None
) -> None:
    """Log the outcome of an operation, at error level if ``err`` is set."""
    fields = operation_fields(component, operation)
    if err is not None:
        fields[FIELD_KEY_ERROR] = str(err)
        logger.error("Operation failed", extra={"fields": fields})
        return
    logger.info("Operation completed", extra={"fields": fields})