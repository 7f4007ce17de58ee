"""Exception hierarchy for duplication failures.

Every hard failure raised by the core derives from GitDupError so the CLI
can report it uniformly. Soft failures are handled where they occur and
never surface as exceptions.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class GitDupError(Exception):
    """Base class for all errors reported to the user."""


class NotARepository(GitDupError):
    """The source directory has no .git entry."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class InvalidDestination(GitDupError):
    """The destination is the source, nested in it, a file, or non-empty."""

    def __init__(self, message: str, *, dest: Path) -> None:
        super().__init__(message)
        self.dest = dest


class CopyFailure(GitDupError):
    """Copying the project tree failed with an I/O error."""

    def __init__(self, source: Path, dest: Path, cause: str) -> None:
        super().__init__(f"Failed to copy {source} to {dest}: {cause}")
        self.source = source
        self.dest = dest


class CommandFailure(GitDupError):
    """An external command exited non-zero or could not be started."""

    def __init__(
        self,
        *,
        cmd: Sequence[str],
        operation_context: str,
        returncode: int | None,
        output: str,
    ) -> None:
        message = f"Failed to {operation_context}\nCommand failed: {' '.join(cmd)}"
        if output:
            message = f"{message}\n{output.rstrip()}"
        super().__init__(message)
        self.cmd = list(cmd)
        self.operation_context = operation_context
        self.returncode = returncode
        self.output = output


class ConfigError(GitDupError):
    """A configuration file could not be parsed or has invalid values."""
