"""The ``test`` command: generate random sample commands for development."""

from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta

from ..errors import AppError, ErrorCode
from ..models import Command
from ..repository import RepositoryProtocol

_NAMES = ["ls", "cat", "grep", "echo", "mkdir", "rm", "touch", "find"]
_ARGUMENTS = [
    ["-l", "-a"],
    ["file.txt"],
    ["pattern", "file.txt"],
    ["Hello, World!"],
    ["test_dir"],
    ["-rf", "old_dir"],
    ["newfile.txt"],
    [".", "-name", "*.go"],
]
_ID_SPACE = 10000
_SUCCESS_RATE = 0.7
_MAX_EXEC_MS = 5000


def _rfc3339(value: datetime) -> str:
    text = value.isoformat(timespec="seconds")
    return text[:-6] + "Z" if text.endswith("+00:00") else text


class SampleCommand:
    """Generates and stores randomly built sample commands."""

    def __init__(self, logger: logging.Logger | None, repository: RepositoryProtocol):
        self.logger = logger or logging.getLogger(__name__)
        self.repository = repository
        self._rng = random.Random()
        self._issued: set[str] = set()

    def run(self, count: int = 3, cleanup: bool = False) -> list[Command]:
        """Generate and store ``count`` sample commands and return them."""
        self.logger.info("Test command invoked count=%d cleanup=%s", count, cleanup)
        if cleanup:
            self.logger.debug("Cleanup requested but not implemented")

        generated: list[Command] = []
        for number in range(1, count + 1):
            command = self.generate_command()
            try:
                self.repository.put(command)
            except Exception as exc:
                raise AppError(
                    ErrorCode.REPOSITORY_WRITE, f"failed to store test command {number}", exc
                ) from exc
            self.logger.debug(
                "Generated and stored test command commandId=%s name=%s status=%s",
                command.id, command.name, command.status,
            )
            generated.append(command)

        self.logger.info("Test command generation completed generated=%d", count)
        return generated

    def _new_id(self) -> str:
        while True:
            candidate = f"TEST-{self._rng.randrange(_ID_SPACE)}"
            if candidate not in self._issued or len(self._issued) >= _ID_SPACE:
                self._issued.add(candidate)
                return candidate

    def generate_command(self) -> Command:
        """Build one random command; about 70% of them succeed."""
        now = datetime.now().astimezone()
        status = self._rng.random() < _SUCCESS_RATE
        output = f"Output from command execution at {_rfc3339(now)}" if status else ""
        error = "" if status else f"Error: command failed at {_rfc3339(now)}"
        exec_time = timedelta(milliseconds=self._rng.randrange(_MAX_EXEC_MS))
        return Command(
            id=self._new_id(),
            created_at=now,
            terminated_at=now + exec_time,
            name=self._rng.choice(_NAMES),
            arguments=list(self._rng.choice(_ARGUMENTS)),
            status=status,
            output=output,
            error=error,
            tags=["test", "generated"],
        )