"""Fake Time implementation for testing."""

from datetime import UTC, datetime

from gitdup.gateway.time.abc import Time


class FakeTime(Time):
    """Clock frozen at a configured instant."""

    def __init__(self, current_time: datetime | None = None) -> None:
        self._current_time = current_time or datetime(2024, 1, 15, 14, 30, 45, tzinfo=UTC)

    def now(self) -> datetime:
        return self._current_time
