"""Application error type and error classification helpers."""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    """Machine-readable error codes used throughout the application."""

    COMMAND_NOT_FOUND = "command_not_found"
    COMMAND_EXISTS = "command_exists"
    INVALID_COMMAND = "invalid_command"
    EXECUTION_FAILED = "execution_failed"

    REPOSITORY_OPEN = "repository_open"
    REPOSITORY_CLOSE = "repository_close"
    REPOSITORY_WRITE = "repository_write"
    REPOSITORY_READ = "repository_read"

    CONFIG_INVALID = "config_invalid"
    CONFIG_NOT_FOUND = "config_not_found"

    SCHEDULE_INVALID = "schedule_invalid"
    SCHEDULE_CONFLICT = "schedule_conflict"

    INVALID_REQUEST = "invalid_request"
    UNAUTHORIZED = "unauthorized"
    INTERNAL_SERVER = "internal_server"


_NOT_FOUND_CODES = (ErrorCode.COMMAND_NOT_FOUND, ErrorCode.CONFIG_NOT_FOUND)

_INVALID_INPUT_CODES = (
    ErrorCode.INVALID_COMMAND,
    ErrorCode.CONFIG_INVALID,
    ErrorCode.SCHEDULE_INVALID,
    ErrorCode.INVALID_REQUEST,
)

_INTERNAL_CODES = (
    ErrorCode.REPOSITORY_OPEN,
    ErrorCode.REPOSITORY_CLOSE,
    ErrorCode.REPOSITORY_WRITE,
    ErrorCode.REPOSITORY_READ,
    ErrorCode.INTERNAL_SERVER,
    ErrorCode.EXECUTION_FAILED,
)


class AppError(Exception):
    """An application error carrying a code, a message and an optional cause."""

    def __init__(self, code: ErrorCode | str, message: str, cause: BaseException | None = None):
        super().__init__(message)
        try:
            self.code: ErrorCode | str = ErrorCode(code)
        except ValueError:
            self.code = code
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.code}: {self.message} ({self.cause})"
        return f"{self.code}: {self.message}"


def _code_in(err: object, codes: tuple[ErrorCode, ...]) -> bool:
    return isinstance(err, AppError) and err.code in codes


def is_not_found(err: object) -> bool:
    """Return True if ``err`` is a not-found application error."""
    return _code_in(err, _NOT_FOUND_CODES)


def is_invalid_input(err: object) -> bool:
    """Return True if ``err`` is an application error caused by invalid input."""
    return _code_in(err, _INVALID_INPUT_CODES)


def is_internal_error(err: object) -> bool:
    """Return True if ``err`` is an internal application error."""
    return _code_in(err, _INTERNAL_CODES)