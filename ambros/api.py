"""HTTP API exposing stored commands as a WSGI application."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Callable, Iterable, Protocol

from .models import Command

StartResponse = Callable[[str, list[tuple[str, str]]], Any]
WSGIApp = Callable[[dict[str, Any], StartResponse], Iterable[bytes]]

_JSON = "application/json"
_TEXT = "text/plain; charset=utf-8"
_COMMANDS = "/commands"
_COMMAND_PREFIX = "/commands/"
_HEALTH = "/health"


class _CommandReader(Protocol):
    def get(self, command_id: str) -> Command: ...

    def get_all_commands(self) -> list[Command]: ...


@dataclass
class _Response:
    status: HTTPStatus
    content_type: str
    body: bytes

    @classmethod
    def json(cls, value: Any, status: HTTPStatus = HTTPStatus.OK) -> _Response:
        return cls(status, _JSON, (json.dumps(value) + "\n").encode("utf-8"))

    @classmethod
    def error(cls, message: str, status: HTTPStatus) -> _Response:
        return cls(status, _TEXT, (message + "\n").encode("utf-8"))

    def headers(self) -> list[tuple[str, str]]:
        headers = [("Content-Type", self.content_type)]
        if self.content_type == _TEXT:
            headers.append(("X-Content-Type-Options", "nosniff"))
        headers.append(("Content-Length", str(len(self.body))))
        return headers


class Server:
    """Serves commands from a repository over HTTP."""

    def __init__(self, repository: _CommandReader, logger: logging.Logger | None = None):
        self.repository = repository
        self.logger = logger or logging.getLogger(__name__)

    def setup_routes(self) -> WSGIApp:
        """Return a WSGI application serving /commands, /commands/<id> and /health."""

        def app(environ: dict[str, Any], start_response: StartResponse) -> Iterable[bytes]:
            path = environ.get("PATH_INFO") or "/"
            method = (environ.get("REQUEST_METHOD") or "GET").upper()
            response = self._dispatch(method, path)
            start_response(
                f"{response.status.value} {response.status.phrase}", response.headers()
            )
            return [response.body]

        return app

    def _dispatch(self, method: str, path: str) -> _Response:
        if path == _COMMANDS:
            return self._handle_commands(method)
        if path == _HEALTH:
            return self._handle_health()
        if path.startswith(_COMMAND_PREFIX):
            return self._handle_command(path[len(_COMMAND_PREFIX):])
        return _Response.error("404 page not found", HTTPStatus.NOT_FOUND)

    def _handle_commands(self, method: str) -> _Response:
        if method != "GET":
            return _Response.error("Method not allowed", HTTPStatus.METHOD_NOT_ALLOWED)
        try:
            commands = self.repository.get_all_commands()
        except Exception as exc:
            self.logger.error("Failed to get commands: %s", exc)
            return _Response.error(str(exc), HTTPStatus.INTERNAL_SERVER_ERROR)
        return _Response.json([command.to_dict() for command in commands])

    def _handle_command(self, command_id: str) -> _Response:
        if not command_id:
            return _Response.error("Command ID required", HTTPStatus.BAD_REQUEST)
        try:
            command = self.repository.get(command_id)
        except Exception as exc:
            self.logger.error("Failed to get command id=%s: %s", command_id, exc)
            return _Response.error("Command not found", HTTPStatus.NOT_FOUND)
        return _Response.json(command.to_dict())

    def _handle_health(self) -> _Response:
        return _Response.json({"status": "healthy"})