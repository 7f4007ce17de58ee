"""Real Shell implementation using subprocess."""

import logging
import subprocess
from pathlib import Path

from gitdup.gateway.shell.abc import Shell
from gitdup.subprocess_utils import run_subprocess_with_context

logger = logging.getLogger(__name__)


class RealShell(Shell):
    """Production implementation that spawns real processes."""

    def is_tool_available(self, tool: str, cwd: Path) -> bool:
        try:
            result = subprocess.run(
                [tool, "--version"],
                cwd=cwd,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as e:
            # Missing executable means "not available", not an error
            logger.debug("%s --version could not start: %s", tool, e)
            return False
        logger.debug("%s --version exited with %d", tool, result.returncode)
        return result.returncode == 0

    def run_command(self, cmd: list[str], cwd: Path, *, verbose: bool) -> None:
        run_subprocess_with_context(
            cmd=cmd,
            operation_context=f"run {cmd[0]}",
            cwd=cwd,
            stream_output=verbose,
        )
