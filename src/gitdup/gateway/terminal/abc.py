"""Terminal operations abstraction for testing.

The CLI only animates progress when stdout is a TTY, so TTY detection is
injected rather than read from the process.
"""

from abc import ABC, abstractmethod


class Terminal(ABC):
    """Abstract terminal operations for dependency injection."""

    @abstractmethod
    def is_stdout_tty(self) -> bool:
        """Check if stdout is connected to a TTY."""
        ...
