"""The ``store`` command: bookmark a command line with optional metadata."""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Sequence

from ..errors import AppError, ErrorCode
from ..models import Command
from ..repository import RepositoryProtocol

STORED_TAG = "stored"


class StoreCommand:
    """Stores a command with a name, description, tags and category."""

    use = "store [command...]"
    short = "Store a command for future use"

    def __init__(self, logger: logging.Logger | None, repository: RepositoryProtocol):
        self.logger = logger or logging.getLogger(__name__)
        self.repository = repository

    def run(
        self,
        args: Sequence[str],
        name: str = "",
        description: str = "",
        tags: Sequence[str] | None = None,
        category: str = "",
        force: bool = False,
    ) -> Command:
        """Store ``args`` as a command and return what was stored.

        Raises AppError if no command is given, if ``name`` is already taken and
        ``force`` is not set, or if the repository cannot be written.
        """
        tags = list(tags or [])
        self.logger.debug(
            "Store command invoked args=%s name=%s description=%s tags=%s category=%s force=%s",
            list(args), name, description, tags, category, force,
        )
        if not args:
            raise AppError(ErrorCode.INVALID_COMMAND, "requires at least 1 arg(s), only received 0")

        command_name, *command_args = args

        if name:
            command_id = name
            if not force and self.command_exists(command_id):
                raise AppError(
                    ErrorCode.INVALID_COMMAND,
                    f"command with name '{command_id}' already exists. Use --force to overwrite",
                )
        else:
            command_id = self.generate_command_id()

        now = datetime.now().astimezone()
        command = Command(
            id=command_id,
            created_at=now,
            terminated_at=datetime.now().astimezone(),
            name=command_name,
            arguments=command_args,
            status=True,
            tags=tags + [STORED_TAG],
            category=category,
            output=description,
        )

        try:
            self.repository.put(command)
        except Exception as exc:
            self.logger.error("Failed to store command commandId=%s: %s", command_id, exc)
            raise AppError(ErrorCode.REPOSITORY_WRITE, "failed to store command", exc) from exc

        print("Command stored successfully:")
        print(f"ID: {command_id}")
        print(f"Command: {command_name} {' '.join(command_args)}")
        if description:
            print(f"Description: {description}")
        if tags:
            print(f"Tags: {', '.join(tags)}")
        if category:
            print(f"Category: {category}")

        self.logger.info(
            "Command stored successfully commandId=%s name=%s args=%s tags=%s category=%s",
            command_id, command_name, command_args, tags, category,
        )
        return command

    def command_exists(self, command_id: str) -> bool:
        """Return True if the repository holds a command with this ID."""
        try:
            self.repository.get(command_id)
        except Exception:
            return False
        return True

    def generate_command_id(self) -> str:
        return f"STORED-{time.time_ns()}"