"""Small helpers for JSON, random identifiers and filesystem paths."""

from __future__ import annotations

import json
import logging
import os
import secrets
import string
from typing import Any, Sequence

_LETTERS = string.ascii_lowercase + string.ascii_uppercase + string.digits
_RANDOM_LENGTH = 12


class Utilities:
    """Assorted helpers that report problems to a logger."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def as_json(self, value: Any) -> str:
        """Serialise ``value`` compactly with sorted keys, or return ``"{}"`` on failure."""
        try:
            return json.dumps(value, separators=(",", ":"), sort_keys=True)
        except (TypeError, ValueError):
            return "{}"

    def random(self) -> str:
        """Return a 12-character random alphanumeric string."""
        return "".join(secrets.choice(_LETTERS) for _ in range(_RANDOM_LENGTH))

    def tail(self, items: Sequence[str]) -> list[str]:
        """Return all but the first item, or an empty list for fewer than two items."""
        if len(items) < 2:
            return []
        return list(items[1:])

    def check(self, err: BaseException | None) -> None:
        """Log ``err`` as a warning if it is set."""
        if err is not None:
            self.logger.warning("Check error: %s", err)

    def fatal(self, err: BaseException | None) -> None:
        """Log and raise ``err`` if it is set."""
        if err is not None:
            self.logger.error("Fatal error: %s", err)
            raise err

    def exists_path(self, path: str | os.PathLike[str]) -> bool:
        return os.path.exists(path)

    def create_path(self, path: str | os.PathLike[str]) -> None:
        """Create ``path`` and any missing parents."""
        try:
            os.makedirs(path, mode=0o755, exist_ok=True)
        except OSError as exc:
            self.logger.error("CreatePath error: %s", exc)
            raise

    def get_absolute_path(self, path: str) -> str:
        if not path:
            raise ValueError("path is empty")
        return os.path.abspath(path)