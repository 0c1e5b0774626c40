"""Application configuration and its defaults."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

REPOSITORY_DIRECTORY = "./.ambros"
REPOSITORY_FILE = "ambros.db"
LAST_COUNT_DEFAULT = 10
DEBUG_MODE = False


class Configuration:
    """Where the repository lives and how the application behaves."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)
        try:
            home = Path.home()
        except (RuntimeError, KeyError, OSError) as exc:
            self.logger.error("Failed to get home directory: %s", exc)
            self.repository_directory = os.path.join(tempfile.gettempdir(), ".ambros")
        else:
            self.repository_directory = os.path.join(str(home), ".ambros")
        self.repository_file = REPOSITORY_FILE
        self.last_count_default = 0
        self.debug_mode = False

    def repository_full_name(self) -> str:
        return os.path.join(self.repository_directory, self.repository_file)

    def __str__(self) -> str:
        debug = "true" if self.debug_mode else "false"
        return (
            "{\n"
            f'\t"repositoryDirectory": "{self.repository_directory}",\n'
            f'\t"repositoryFile": "{self.repository_file}",\n'
            f'\t"lastCountDefault": {self.last_count_default},\n'
            f'\t"debugMode": {debug}\n'
            "}"
        )