"""The ``version`` command: report version and build details."""

from __future__ import annotations

import logging
import platform
from pathlib import Path

VERSION = "dev"
GIT_COMMIT = "unknown"
BUILD_DATE = "unknown"
PYTHON_VERSION = platform.python_version()

_VERSION_FILE = Path(__file__).with_name("version.txt")


def _bundled_version() -> str:
    try:
        return _VERSION_FILE.read_text(encoding="utf-8").strip()
    except OSError:
        return "dev"


def get_version() -> str:
    """Return the build-time version if set, else the bundled one."""
    if VERSION and VERSION != "dev":
        return VERSION
    return _bundled_version()


class VersionCommand:
    """Prints version information; needs no repository."""

    use = "version"
    short = "Show version information"

    def __init__(self, logger: logging.Logger | None):
        self.logger = logger or logging.getLogger(__name__)
        self.repository = None

    def run(self, short: bool = False) -> None:
        actual = get_version()
        if short:
            print(actual)
            return

        print(f"ambros version {actual}")
        print(f"Git commit: {GIT_COMMIT}")
        print(f"Build date: {BUILD_DATE}")
        print(f"Python version: {PYTHON_VERSION}")
        print(f"OS/Arch: {platform.system().lower()}/{platform.machine().lower()}")

        self.logger.debug(
            "Version information displayed version=%s gitCommit=%s buildDate=%s pythonVersion=%s",
            actual, GIT_COMMIT, BUILD_DATE, PYTHON_VERSION,
        )