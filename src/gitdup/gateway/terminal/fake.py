"""Fake Terminal implementation for testing."""

from gitdup.gateway.terminal.abc import Terminal


class FakeTerminal(Terminal):
    """Returns a configured TTY state."""

    def __init__(self, *, is_stdout_tty: bool) -> None:
        self._is_stdout_tty = is_stdout_tty

    def is_stdout_tty(self) -> bool:
        return self._is_stdout_tty
