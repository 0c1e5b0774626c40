"""Background checking of command schedules."""

from __future__ import annotations

import threading
from datetime import datetime

from .models import Schedule


def _is_due(now: datetime, next_run: datetime | None) -> bool:
    if next_run is None:
        return True
    if next_run.tzinfo is None:
        return now.replace(tzinfo=None) > next_run
    return now > next_run


class Scheduler:
    """Keeps schedules by command ID and marks due ones as run."""

    interval: float = 60.0

    def __init__(self) -> None:
        self.schedules: dict[str, Schedule] = {}
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._threads: list[threading.Thread] = []

    def add_schedule(self, command_id: str, schedule: Schedule) -> None:
        with self._lock:
            self.schedules[command_id] = schedule

    def start(self) -> None:
        """Begin checking schedules every ``interval`` seconds in a background thread."""
        thread = threading.Thread(target=self._run, name="ambros-scheduler", daemon=True)
        self._threads.append(thread)
        thread.start()

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self.check_schedules()

    def check_schedules(self) -> None:
        """Record the current time as last run for every enabled, due schedule."""
        now = datetime.now().astimezone()
        with self._lock:
            for schedule in self.schedules.values():
                if schedule.enabled and _is_due(now, schedule.next_run):
                    schedule.last_run = now

    def stop(self) -> None:
        """Halt the scheduler; it cannot be stopped twice."""
        if self._stop.is_set():
            raise RuntimeError("scheduler already stopped")
        self._stop.set()
        for thread in self._threads:
            thread.join()
        self._threads.clear()