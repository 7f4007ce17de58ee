"""Real terminal implementation using os.isatty()."""

import os

from gitdup.gateway.terminal.abc import Terminal


class RealTerminal(Terminal):
    """Production implementation using os.isatty()."""

    def is_stdout_tty(self) -> bool:
        return os.isatty(1)
