"""Summary statistics over executed commands."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Iterable

from .models import Command


@dataclass
class AnalyticsReport:
    """Counts and success rate for a set of commands."""

    total_commands: int = 0
    successful_commands: int = 0
    failed_commands: int = 0
    success_rate: float = 0.0
    top_commands: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class Analytics:
    """Analyses command execution patterns."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def analyze_commands(self, commands: Iterable[Command]) -> AnalyticsReport:
        commands = list(commands)
        successful = sum(1 for c in commands if c.status)
        total = len(commands)
        report = AnalyticsReport(
            total_commands=total,
            successful_commands=successful,
            failed_commands=total - successful,
            top_commands=dict(Counter(c.name for c in commands)),
        )
        if total > 0:
            report.success_rate = successful / total * 100
        return report