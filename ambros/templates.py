"""Command templates rendered with ``{{.name}}`` placeholders."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Mapping

from . import models
from .models import Command
from .repository import Repository

_SPACE = " \t\r\n"
_FIELDS = re.compile(r"(?:\.[A-Za-z_][A-Za-z0-9_]*)+")
_NO_VALUE = "<no value>"


class TemplateError(ValueError):
    """Raised when a template cannot be parsed or executed."""


def _find_close(text: str, start: int) -> int:
    i = start
    while i < len(text):
        ch = text[i]
        if ch == '"':
            i += 1
            while i < len(text) and text[i] != '"':
                if text[i] == "\\":
                    i += 1
                i += 1
            i += 1
            continue
        if ch == "`":
            end = text.find("`", i + 1)
            if end < 0:
                return -1
            i = end + 1
            continue
        if text.startswith("}}", i):
            return i
        i += 1
    return -1


def _format_map(data: Mapping[str, str]) -> str:
    return "map[" + " ".join(f"{k}:{data[k]}" for k in sorted(data)) + "]"


def _evaluate(action: str, data: Mapping[str, str]) -> str:
    if not action:
        raise TemplateError("missing value for command")
    if action == ".":
        return _format_map(data)
    if _FIELDS.fullmatch(action):
        names = action[1:].split(".")
        if len(names) > 1:
            raise TemplateError(f"can't evaluate field {names[1]} in type string")
        return data.get(names[0], _NO_VALUE)
    if action.startswith('"') and action.endswith('"') and len(action) >= 2:
        try:
            return json.loads(action)
        except ValueError as exc:
            raise TemplateError(f"bad string literal: {action}") from exc
    if action.startswith("`") and action.endswith("`") and len(action) >= 2:
        return action[1:-1]
    raise TemplateError(f"unsupported action: {action}")


def render(text: str, variables: Mapping[str, str] | None) -> str:
    """Render ``text``, replacing ``{{.key}}`` with values from ``variables``.

    Supports field references, ``{{.}}``, string literals, comments and the
    ``{{-`` / ``-}}`` whitespace trim markers. Missing keys render as ``<no value>``.
    """
    data = variables or {}
    parts: list[str] = []
    pos = 0
    while True:
        start = text.find("{{", pos)
        if start < 0:
            parts.append(text[pos:])
            break
        literal = text[pos:start]
        inner = start + 2
        if text.startswith("-", inner) and inner + 1 < len(text) and text[inner + 1] in _SPACE:
            literal = literal.rstrip(_SPACE)
            inner += 1
        parts.append(literal)

        body_start = inner
        while body_start < len(text) and text[body_start] in _SPACE:
            body_start += 1
        is_comment = text.startswith("/*", body_start)
        scan_from = inner
        if is_comment:
            comment_end = text.find("*/", body_start + 2)
            if comment_end < 0:
                raise TemplateError("unclosed comment")
            scan_from = comment_end + 2
        end = _find_close(text, scan_from)
        if end < 0:
            raise TemplateError("unclosed action")

        trim_right = end - 2 >= inner and text[end - 1] == "-" and text[end - 2] in _SPACE
        body_end = end - 1 if trim_right else end
        if is_comment:
            if text[scan_from:body_end].strip(_SPACE):
                raise TemplateError("comment ends before closing delimiter")
        else:
            parts.append(_evaluate(text[inner:body_end].strip(_SPACE), data))

        pos = end + 2
        if trim_right:
            while pos < len(text) and text[pos] in _SPACE:
                pos += 1
    return "".join(parts)


def _build(
    command: str, arguments: list[str], variables: Mapping[str, str] | None
) -> Command:
    name = render(command, variables)
    rendered_args = [render(arg, variables) for arg in arguments]
    return Command(
        name=name,
        arguments=rendered_args,
        variables=dict(variables) if variables is not None else {},
    )


@dataclass
class CommandTemplate:
    """A command and arguments containing placeholders."""

    name: str = ""
    description: str = ""
    command: str = ""
    arguments: list[str] = field(default_factory=list)
    variables: dict[str, str] = field(default_factory=dict)

    def execute(self, variables: Mapping[str, str] | None) -> Command:
        """Return a new command with placeholders filled from ``variables``."""
        return _build(self.command, self.arguments, variables)


class TemplateManager:
    """Renders stored command templates into commands."""

    def __init__(self, repository: Repository | None):
        self.repository = repository

    def execute(
        self, template: models.CommandTemplate, variables: Mapping[str, str] | None
    ) -> Command:
        return _build(template.command, template.arguments, variables)