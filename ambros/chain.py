"""Validation and execution of command chains."""

from __future__ import annotations

import logging

from .models import CommandChain


class ChainError(Exception):
    """Raised when a command chain is not valid."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Chain:
    """Runs and checks command chains."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def execute_chain(self, chain: CommandChain) -> None:
        self.logger.info("Executing command chain name=%s", chain.name)

    def validate_chain(self, chain: CommandChain) -> None:
        """Raise ChainError if the chain has no name or no commands."""
        if not chain.name:
            raise ChainError("chain name is required")
        if not chain.commands:
            raise ChainError("chain must contain at least one command")