"""Shell operations abstraction for testing.

Package managers are discovered by asking them for their version, and then
invoked directly. Both go through this gateway so detection logic can be
tested without the tools installed.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class Shell(ABC):
    """Abstract tool probing and command execution."""

    @abstractmethod
    def is_tool_available(self, tool: str, cwd: Path) -> bool:
        """Check whether ``<tool> --version`` runs successfully in cwd.

        Args:
            tool: Executable name, e.g. "pnpm"
            cwd: Directory to run the probe in (some managers read local config)

        Returns:
            True if the probe exits zero, False if it fails or the tool is missing
        """
        ...

    @abstractmethod
    def run_command(self, cmd: list[str], cwd: Path, *, verbose: bool) -> None:
        """Run a command to completion in cwd.

        Args:
            cmd: Executable followed by its arguments
            cwd: Working directory
            verbose: Stream output to the terminal instead of capturing it

        Raises:
            CommandFailure: If the command exits non-zero or cannot be started
        """
        ...
