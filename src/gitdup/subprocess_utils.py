"""Subprocess helpers that attach operation context to failures."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from gitdup.core.errors import CommandFailure

logger = logging.getLogger(__name__)


def run_subprocess_with_context(
    *,
    cmd: Sequence[str],
    operation_context: str,
    cwd: Path,
    check: bool = True,
    stream_output: bool = False,
) -> subprocess.CompletedProcess[str]:
    """Run a command and raise CommandFailure with context if it fails.

    Args:
        cmd: Command and arguments, executed without a shell
        operation_context: Human description used in the error, e.g.
            "reset tracked changes"
        cwd: Working directory for the command
        check: If False, return the completed process even on non-zero exit
        stream_output: If True, let stdout/stderr go straight to the terminal
            instead of capturing them. Failures then carry no output.

    Returns:
        The completed process. stdout/stderr are None when streaming.

    Raises:
        CommandFailure: If the executable is missing, or if check is True and
            the command exits non-zero
    """
    logger.debug("Running %s in %s", " ".join(cmd), cwd)
    try:
        result = subprocess.run(
            list(cmd),
            cwd=cwd,
            capture_output=not stream_output,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as e:
        raise CommandFailure(
            cmd=cmd,
            operation_context=operation_context,
            returncode=None,
            output=str(e),
        ) from e

    if check and result.returncode != 0:
        output = ""
        if not stream_output:
            output = result.stderr or result.stdout or ""
        logger.debug("%s exited with %d", cmd[0], result.returncode)
        raise CommandFailure(
            cmd=cmd,
            operation_context=operation_context,
            returncode=result.returncode,
            output=output,
        )
    return result
