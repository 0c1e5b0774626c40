"""Console output that is also written to a logger."""

from __future__ import annotations

import logging
from typing import Any


def _format(msg: str, args: tuple[Any, ...]) -> str:
    return msg % args if args else msg


class ParrotLogger:
    """Prints messages to stdout and repeats them to an optional logger."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger

    def println(self, msg: Any) -> None:
        print(msg)
        if self.logger is not None:
            self.logger.info("%s", msg)

    def print(self, msg: Any) -> None:
        print(msg, end="")
        if self.logger is not None:
            self.logger.info("%s", msg)

    def debug(self, msg: str, *args: Any) -> None:
        formatted = _format(msg, args)
        print("[DEBUG]", formatted)
        if self.logger is not None:
            self.logger.debug("%s", formatted)

    def error(self, msg: str, err: BaseException | None = None) -> None:
        if err is not None:
            print("[ERROR]", f"{msg}: {err}")
            if self.logger is not None:
                self.logger.error("%s: %s", msg, err)
        else:
            print("[ERROR]", msg)
            if self.logger is not None:
                self.logger.error("%s", msg)

    def info(self, msg: str, *args: Any) -> None:
        formatted = _format(msg, args)
        print("[INFO]", formatted)
        if self.logger is not None:
            self.logger.info("%s", formatted)

    def warn(self, msg: str, *args: Any) -> None:
        formatted = _format(msg, args)
        print("[WARN]", formatted)
        if self.logger is not None:
            self.logger.warning("%s", formatted)