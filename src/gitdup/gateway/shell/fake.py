"""Fake Shell implementation for testing."""

from pathlib import Path

from gitdup.gateway.shell.abc import Shell


class FakeShell(Shell):
    """In-memory fake with a configured set of available tools.

    This class has NO public setup methods. All state is provided via constructor.
    """

    def __init__(
        self,
        *,
        available_tools: frozenset[str] | set[str] = frozenset(),
        run_command_raises: Exception | None = None,
    ) -> None:
        """Create FakeShell.

        Args:
            available_tools: Tools whose version probe succeeds
            run_command_raises: Exception to raise from run_command()
        """
        self._available_tools = frozenset(available_tools)
        self._run_command_raises = run_command_raises
        self._probed_tools: list[str] = []
        self._commands: list[tuple[list[str], Path, bool]] = []

    def is_tool_available(self, tool: str, cwd: Path) -> bool:
        self._probed_tools.append(tool)
        return tool in self._available_tools

    def run_command(self, cmd: list[str], cwd: Path, *, verbose: bool) -> None:
        self._commands.append((list(cmd), cwd, verbose))
        if self._run_command_raises is not None:
            raise self._run_command_raises

    @property
    def probed_tools(self) -> list[str]:
        """Tools probed with --version, in order."""
        return list(self._probed_tools)

    @property
    def commands(self) -> list[tuple[list[str], Path, bool]]:
        """(cmd, cwd, verbose) for every run_command() call."""
        return list(self._commands)
