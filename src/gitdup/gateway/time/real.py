"""Real Time implementation."""

from datetime import UTC, datetime

from gitdup.gateway.time.abc import Time


class RealTime(Time):
    """Production clock."""

    def now(self) -> datetime:
        return datetime.now(UTC)
